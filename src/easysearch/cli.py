"""CLI entry point for EasySearch."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

import structlog


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="easysearch",
        description="EasySearch — Pluggable search-index registry",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"EasySearch {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("indexes", help="List declared indexes")

    search_parser = subparsers.add_parser("search", help="Search an index")
    search_parser.add_argument("index", type=str, help="Index name")
    search_parser.add_argument("query", type=str, help="Search string")
    search_parser.add_argument(
        "--limit",
        "-l",
        type=int,
        default=None,
        help="Maximum number of results (overrides the index limit)",
    )

    args = parser.parse_args(argv)

    # Load settings
    from easysearch.config.settings import Settings

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        settings = Settings.from_yaml(config_path)
    else:
        settings = Settings()

    if args.log_level:
        settings.observability.log_level = args.log_level

    from easysearch.observability.logging import setup_logging

    setup_logging(settings.observability)
    log = structlog.get_logger("easysearch.cli")

    from easysearch.core.easy_search import create_easy_search
    from easysearch.core.errors import EasySearchError

    try:
        easy_search = create_easy_search(settings)
    except EasySearchError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "indexes":
            output: Any = {name: config.use for name, config in easy_search.get_indexes().items()}
        else:
            options = {"limit": args.limit} if args.limit is not None else {}
            log.info("search", index=args.index, query=args.query)
            result = easy_search.search(args.index, args.query, options)
            output = result.model_dump(mode="json") if hasattr(result, "model_dump") else result
    except EasySearchError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        easy_search.shutdown()

    print(json.dumps(output, indent=2, ensure_ascii=False, default=str))


def _get_version() -> str:
    """Get the package version."""
    try:
        from easysearch import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()
