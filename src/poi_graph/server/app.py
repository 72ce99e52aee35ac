from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from poi_graph import __version__
from poi_graph.ontology import GraphDeriver, GraphQueryEngine, OntologyConfig, QueryMode
from poi_graph.ontology.ranking import MODE_INFO, cypher_for
from poi_graph.ontology.render import to_force_graph
from poi_graph.overpass import BBox, OverpassClient, OverpassError
from poi_graph.settings import settings

logger = logging.getLogger(__name__)


class DeriveIn(BaseModel):
    # Kept as plain dicts: malformed elements are dropped, not rejected.
    elements: list[dict[str, Any]] = Field(default_factory=list)


class RankIn(DeriveIn):
    mode: QueryMode = QueryMode.BALANCED


def create_app(
    config: OntologyConfig | None = None,
    client_factory: Callable[[], OverpassClient] | None = None,
) -> FastAPI:
    app = FastAPI(title="POI Graph - Geospatial Ontology", version=__version__)

    cfg = config or OntologyConfig.from_settings(settings)
    deriver = GraphDeriver(cfg)
    make_client = client_factory or OverpassClient

    def _ranked(engine: GraphQueryEngine, mode: QueryMode) -> dict[str, Any]:
        results = engine.rank(mode)
        return {
            "mode": mode.value,
            "label": MODE_INFO[mode].label,
            "cypher": cypher_for(mode, cfg),
            "count": len(results),
            "results": [r.to_dict() for r in results],
        }

    @app.get("/health")
    async def health():
        return {"ok": True}

    @app.get("/v1/modes")
    async def modes():
        return {
            "modes": [
                {"key": m.value, "label": info.label, "description": info.description}
                for m, info in MODE_INFO.items()
            ]
        }

    @app.post("/v1/graph/derive")
    async def derive(payload: DeriveIn):
        snapshot, stats = deriver.derive(payload.elements)
        return {
            "graph": to_force_graph(snapshot),
            "summary": GraphQueryEngine(snapshot, cfg).summary(),
            "timing_ms": {"build": stats.build_ms, "edges": stats.edges_ms},
        }

    @app.post("/v1/graph/rank")
    async def rank(payload: RankIn):
        snapshot, _ = deriver.derive(payload.elements)
        return _ranked(GraphQueryEngine(snapshot, cfg), payload.mode)

    @app.get("/v1/graph/live")
    async def live(mode: QueryMode = QueryMode.BALANCED, bbox: str | None = None):
        box = None
        if bbox is not None:
            try:
                box = BBox.parse(bbox)
            except ValueError as e:
                raise HTTPException(status_code=422, detail=f"invalid bbox: {e}")

        client = make_client()
        try:
            elements = await client.fetch_elements(box)
        except OverpassError as e:
            logger.warning("live fetch failed: %s", e)
            raise HTTPException(status_code=502, detail=str(e))
        finally:
            await client.aclose()

        snapshot, _ = deriver.derive(elements)
        engine = GraphQueryEngine(snapshot, cfg)
        out = _ranked(engine, mode)
        out["graph"] = to_force_graph(snapshot)
        out["summary"] = engine.summary()
        return out

    return app
