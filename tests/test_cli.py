from __future__ import annotations

import json

import pytest

from poi_graph.cli.main import app


def _write(tmp_path, payload):
    path = tmp_path / "overpass.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_derive_writes_graph(tmp_path, midtown_elements, capsys):
    src = _write(tmp_path, {"elements": midtown_elements})
    out = tmp_path / "out" / "graph.json"
    with pytest.raises(SystemExit) as exc:
        app(["derive", "--input", str(src), "--output", str(out)])
    assert exc.value.code == 0
    graph = json.loads(out.read_text(encoding="utf-8"))
    assert len(graph["nodes"]) == 3
    assert "relations=2" in capsys.readouterr().out


def test_rank_prints_table(tmp_path, midtown_elements, capsys):
    src = _write(tmp_path, midtown_elements)
    with pytest.raises(SystemExit) as exc:
        app(["rank", "--input", str(src), "--mode", "hub"])
    assert exc.value.code == 0
    assert "H1" in capsys.readouterr().out


def test_query_prints_cypher(capsys):
    with pytest.raises(SystemExit):
        app(["query", "corridor"])
    assert "3*COUNT(DISTINCT a)" in capsys.readouterr().out


def test_source_required():
    with pytest.raises(SystemExit) as exc:
        app(["rank"])
    assert "--input" in str(exc.value.code)
