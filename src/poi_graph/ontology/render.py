from __future__ import annotations

from typing import Any

from .models import EdgeLabel, GraphSnapshot, NodeClass

NODE_COLORS: dict[NodeClass, str] = {
    NodeClass.HOTEL: "#3B82F6",
    NodeClass.SUBWAY: "#10B981",
    NodeClass.ATTRACTION: "#F59E0B",
}

EDGE_COLORS: dict[EdgeLabel, str] = {
    EdgeLabel.TRANSIT_ACCESS: "rgba(16,185,129,0.50)",
    EdgeLabel.WALKABLE_TO: "rgba(245,158,11,0.50)",
}


def to_force_graph(snapshot: GraphSnapshot) -> dict[str, Any]:
    """Payload for a force-directed renderer.

    Colors are derived here and never stored on the model. Every link is a new
    dict, so the renderer may swap endpoints for object references freely.
    """
    nodes = [
        {
            "id": e.id,
            "name": e.name,
            "type": e.node_class.value,
            "lat": e.lat,
            "lon": e.lon,
            "color": NODE_COLORS[e.node_class],
            "degree": e.degree,
        }
        for e in snapshot.entities
    ]
    links = [
        {
            "source": r.source_id,
            "target": r.target_id,
            "label": r.label.value,
            "color": EDGE_COLORS[r.label],
        }
        for r in snapshot.relations
    ]
    return {"nodes": nodes, "links": links}
