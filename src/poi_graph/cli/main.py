from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from poi_graph.settings import settings

console = Console()


def _configure_logging() -> None:
    level = (settings.log_level or "INFO").upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def cmd_version() -> int:
    from poi_graph import __version__

    print(__version__)
    return 0


def _load_elements(args: argparse.Namespace) -> list[Any]:
    if args.fetch:
        from poi_graph.overpass import OverpassClient

        async def _fetch():
            client = OverpassClient(bbox=args.bbox)
            try:
                return await client.fetch_elements()
            finally:
                await client.aclose()

        return asyncio.run(_fetch())

    if not args.input:
        raise SystemExit("one of --input or --fetch is required")
    raw = json.loads(Path(args.input).read_text(encoding="utf-8"))
    # Accept a raw Overpass response or a bare element list.
    if isinstance(raw, dict):
        raw = raw.get("elements") or []
    if not isinstance(raw, list):
        raise SystemExit(f"{args.input}: expected an Overpass response or a list of elements")
    return raw


def _config():
    from poi_graph.ontology import OntologyConfig

    return OntologyConfig.from_settings(settings)


def cmd_derive(args: argparse.Namespace) -> int:
    _configure_logging()
    from poi_graph.ontology import GraphDeriver
    from poi_graph.ontology.render import to_force_graph

    snapshot, stats = GraphDeriver(_config(), indexed=args.indexed).derive(_load_elements(args))
    artifact = to_force_graph(snapshot)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(artifact, ensure_ascii=False, indent=2), encoding="utf-8")
    print(f"Graph saved to: {output_path.resolve()}")
    print("Counts:", f"entities={stats.entities}", f"relations={stats.relations}")
    return 0


def cmd_rank(args: argparse.Namespace) -> int:
    _configure_logging()
    from poi_graph.ontology import GraphDeriver, GraphQueryEngine
    from poi_graph.ontology.ranking import MODE_INFO, QueryMode

    cfg = _config()
    mode = QueryMode(args.mode)
    snapshot, _ = GraphDeriver(cfg).derive(_load_elements(args))
    results = GraphQueryEngine(snapshot, cfg).rank(mode)

    table = Table(title=f"{MODE_INFO[mode].label}: {MODE_INFO[mode].description}")
    table.add_column("#", justify="right")
    table.add_column("Hotel")
    table.add_column("Transit", justify="right")
    table.add_column("Culture", justify="right")
    table.add_column("Score", justify="right", style="bold")
    for i, r in enumerate(results, start=1):
        table.add_row(str(i), r.hotel.name, str(r.transit_count), str(r.culture_count), str(r.score))
    console.print(table)
    if not results:
        console.print("[yellow]No hotels scored above zero in this mode.[/yellow]")
    return 0


def cmd_query(args: argparse.Namespace) -> int:
    from poi_graph.ontology.ranking import cypher_for

    print(cypher_for(args.mode, _config()))
    return 0


def _add_source_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--input", default=None, help="JSON file: Overpass response or element list")
    p.add_argument("--fetch", action="store_true", help="Fetch live data from Overpass")
    p.add_argument("--bbox", default=None, help="south,west,north,east (with --fetch)")


def build_parser() -> argparse.ArgumentParser:
    from poi_graph.ontology.ranking import QueryMode

    modes = [m.value for m in QueryMode]

    p = argparse.ArgumentParser(prog="poi-graph")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version").set_defaults(func=lambda _a: cmd_version())

    derive = sub.add_parser("derive", help="Build the ontology graph and save force-graph JSON")
    _add_source_args(derive)
    derive.add_argument("--output", default="graph.json")
    derive.add_argument("--indexed", action="store_true", help="Prune pairs with a latitude-band index")
    derive.set_defaults(func=cmd_derive)

    rank = sub.add_parser("rank", help="Rank hotels under a query mode")
    _add_source_args(rank)
    rank.add_argument("--mode", choices=modes, default="balanced")
    rank.set_defaults(func=cmd_rank)

    query = sub.add_parser("query", help="Print the Cypher-style query for a mode")
    query.add_argument("mode", choices=modes)
    query.set_defaults(func=cmd_query)

    return p


def app(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    app()
