from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import asdict
from pathlib import Path
from typing import List

import uvicorn

from .config import build_config
from .hints import CatalogError, HintCatalog
from .search import HintSearchEngine, is_blank_query
from .web import create_app

LOG = logging.getLogger("errorhints")

PROMPT = "Enter the error message: "


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    argv = list(argv) if argv is not None else sys.argv[1:]
    if argv and argv[0] == "hints":
        return _parse_hints_args(argv[1:])
    if argv and argv[0] == "serve":
        return _parse_serve_args(argv[1:])
    if argv and argv[0] == "search":
        argv = argv[1:]
    return _parse_search_args(argv)


def _add_catalog_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--catalog", type=Path, help="Path to the YAML hint catalog (defaults to the bundled hints.yml).")
    parser.add_argument("--config", type=Path, help="Optional JSON/TOML config file.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")


def _parse_search_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Look up hints for an error message.")
    parser.add_argument("message", nargs="?", help="Error message to search for. Prompts when omitted.")
    _add_catalog_args(parser)
    parser.add_argument("--reload-on-search", action="store_true", default=None, help="Re-read the catalog on every search.")
    parser.add_argument("--json", action="store_true", help="Output JSON instead of text.")
    return parser.parse_args(argv, namespace=argparse.Namespace(command="search"))


def _parse_hints_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List every hint in the catalog.")
    _add_catalog_args(parser)
    parser.add_argument("--json", action="store_true", help="Output JSON instead of text.")
    return parser.parse_args(argv, namespace=argparse.Namespace(command="hints"))


def _parse_serve_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the hint search API.")
    _add_catalog_args(parser)
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind.")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind.")
    parser.add_argument("--reload", action="store_true", help="Enable autoreload (dev).")
    return parser.parse_args(argv, namespace=argparse.Namespace(command="serve"))


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s %(message)s")

    try:
        config = build_config(
            catalog_path=args.catalog,
            reload_on_search=getattr(args, "reload_on_search", None),
            config_file=args.config,
        )
    except (FileNotFoundError, ValueError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2
    engine = HintSearchEngine(HintCatalog(config.catalog_path), reload_on_search=config.reload_on_search)

    if args.command == "serve":
        return _run_server(args, engine)
    try:
        if args.command == "hints":
            return _run_hints(args, engine)
        return _run_search(args, engine)
    except CatalogError as exc:
        print(f"could not load hints: {exc}", file=sys.stderr)
        return 1


def _run_search(args: argparse.Namespace, engine: HintSearchEngine) -> int:
    message = args.message
    if message is None:
        try:
            message = input(PROMPT)
        except EOFError:
            message = ""
    if is_blank_query(message):
        LOG.info("No error message entered; nothing to search.")
        return 0

    engine.search_error(message)
    items = [engine.get_tree_item(element) for element in engine.get_children()]
    if args.json:
        print(json.dumps({"query": engine.query, "items": [asdict(item) for item in items]}, indent=2))
        return 0
    if not items:
        print(f"No hints found for '{message}'.")
        return 0
    for item in items:
        print(f"- {item.label}")
    return 0


def _run_hints(args: argparse.Namespace, engine: HintSearchEngine) -> int:
    records = engine.catalog.records
    if args.json:
        print(json.dumps([asdict(record) for record in records], indent=2))
        return 0
    print(f"Hint catalog: {engine.catalog.path}")
    for record in records:
        print(f"- {record.label}")
    return 0


def _run_server(args: argparse.Namespace, engine: HintSearchEngine) -> int:
    if args.reload:
        # Autoreload needs an import string; webapp reads its paths from the environment.
        os.environ["HINTS_CATALOG"] = str(engine.catalog.path)
        if args.config:
            os.environ["HINTS_CONFIG"] = str(args.config)
        uvicorn.run("errorhints.webapp:app", host=args.host, port=args.port, reload=True)
        return 0
    app = create_app(engine)
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
