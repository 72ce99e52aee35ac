from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from factories import entity

from poi_graph.ontology.config import OntologyConfig
from poi_graph.ontology.models import EdgeLabel, GraphSnapshot, NodeClass, Relation
from poi_graph.ontology.ranking import (
    GraphQueryEngine,
    QueryMode,
    cypher_for,
    label_counts,
    rank_hotels,
    score_hotel,
)

H, S, A = NodeClass.HOTEL, NodeClass.SUBWAY, NodeClass.ATTRACTION
T, W = EdgeLabel.TRANSIT_ACCESS, EdgeLabel.WALKABLE_TO


def _hotel_with(hid: str, t: int, c: int):
    entities = [entity(hid, H, 0.0, 0.0)]
    relations = []
    for i in range(t):
        entities.append(entity(f"{hid}-s{i}", S, 0.0, 0.0))
        relations.append(Relation(hid, f"{hid}-s{i}", T))
    for i in range(c):
        entities.append(entity(f"{hid}-a{i}", A, 0.0, 0.0))
        relations.append(Relation(hid, f"{hid}-a{i}", W))
    return entities, relations


@pytest.mark.parametrize(
    "mode,expected",
    [
        (QueryMode.TRANSIT, 2 * 2 + 3),
        (QueryMode.CULTURE, 2 * 3 + 2),
        (QueryMode.BALANCED, 5),
        (QueryMode.HUB, 3 * 2 + 3),
        (QueryMode.CORRIDOR, 3 * 3 + 2),
        (QueryMode.CONNECTED, 5),
    ],
)
def test_mode_weights(mode, expected):
    assert score_hotel(2, 3, mode) == expected


def test_connected_mode_is_a_gate():
    entities, relations = _hotel_with("H3", t=3, c=0)
    assert score_hotel(3, 0, QueryMode.CONNECTED) == 0
    assert rank_hotels(entities, relations, QueryMode.CONNECTED) == []
    (only,) = rank_hotels(entities, relations, QueryMode.TRANSIT)
    assert only.score == 6


def test_transit_priority_scenario_score():
    entities = [entity("H1", H, 0.0, 0.0), entity("S1", S, 0.0, 0.0), entity("A1", A, 0.0, 0.0)]
    relations = [Relation("H1", "S1", T), Relation("H1", "A1", W)]
    (r,) = rank_hotels(entities, relations, "transit")
    assert (r.transit_count, r.culture_count, r.score) == (1, 1, 3)


def test_counts_come_from_labels_not_degree():
    entities, relations = _hotel_with("H", t=1, c=2)
    assert label_counts("H", relations) == (1, 2)


def test_incident_edges_count_in_either_direction():
    relations = [Relation("S1", "H", T), Relation("H", "A1", W)]
    assert label_counts("H", relations) == (1, 1)


def test_cap_ordering_and_positive_scores():
    entities, relations = [], []
    for i in range(8):
        e, r = _hotel_with(f"H{i}", t=i % 4, c=i % 3)
        entities += e
        relations += r
    for mode in QueryMode:
        results = rank_hotels(entities, relations, mode)
        assert len(results) <= 5
        scores = [r.score for r in results]
        assert scores == sorted(scores, reverse=True)
        assert all(s > 0 for s in scores)
        assert all(r.hotel.node_class is H for r in results)


def test_ties_break_on_entity_id():
    entities, relations = [], []
    for hid in ("H-c", "H-a", "H-b"):
        e, r = _hotel_with(hid, t=1, c=1)
        entities += e
        relations += r
    results = rank_hotels(entities, relations, QueryMode.BALANCED)
    assert [r.hotel.id for r in results] == ["H-a", "H-b", "H-c"]


def test_result_cap_is_configurable():
    entities, relations = [], []
    for i in range(4):
        e, r = _hotel_with(f"H{i}", t=1, c=0)
        entities += e
        relations += r
    assert len(rank_hotels(entities, relations, "balanced", OntologyConfig(result_cap=2))) == 2
    assert rank_hotels(entities, relations, "balanced", OntologyConfig(result_cap=0)) == []


def test_custom_weights():
    cfg = OntologyConfig(mode_weights={**OntologyConfig().mode_weights, "transit": (10, 0)})
    assert score_hotel(1, 5, "transit", cfg) == 10


def test_empty_inputs():
    for mode in QueryMode:
        assert rank_hotels([], [], mode) == []


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        rank_hotels([], [], "scenic")
    with pytest.raises(ValueError):
        score_hotel(1, 1, "scenic")


def test_does_not_mutate_inputs_and_is_safe_concurrently():
    entities, relations = [], []
    for i in range(6):
        e, r = _hotel_with(f"H{i}", t=i % 3, c=(i + 1) % 3)
        entities += e
        relations += r
    before = (list(entities), list(relations))
    expected = {m: rank_hotels(entities, relations, m) for m in QueryMode}

    with ThreadPoolExecutor(max_workers=6) as pool:
        futures = {m: pool.submit(rank_hotels, entities, relations, m) for m in list(QueryMode) * 3}
        for m, f in futures.items():
            assert f.result() == expected[m]
    assert (entities, relations) == before


def test_cypher_reflects_config():
    text = cypher_for(QueryMode.HUB, OntologyConfig(result_cap=3))
    assert "3*COUNT(DISTINCT s)" in text
    assert text.endswith("LIMIT 3")
    assert "MATCH (h)-[:WALKABLE_TO]" in cypher_for("connected")


def test_query_engine_helpers():
    entities = [entity("H1", H, 0.0, 0.0), entity("S1", S, 0.0, 0.0), entity("A1", A, 0.0, 0.0)]
    relations = (Relation("H1", "S1", T), Relation("H1", "A1", W))
    engine = GraphQueryEngine(GraphSnapshot(tuple(entities), relations))
    assert engine.summary() == {"Hotel": 1, "Subway": 1, "Attraction": 1, "relations": 2}
    assert {(e.id, label) for e, label in engine.neighbors("S1")} == {("H1", T)}
    assert engine.rank("culture")[0].score == 3
