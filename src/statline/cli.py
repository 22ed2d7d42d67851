#!/usr/bin/env python3
"""
Command-line interface for the Statline API.

Usage:
    statline serve                      # Serve on HOST:PORT from settings
    statline serve --port 8080 --reload
    statline config                     # Print effective settings (API key masked)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional

from .core.config import get_settings

logger = logging.getLogger("statline.cli")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def cmd_serve(args: argparse.Namespace) -> int:
    """Run the API with uvicorn."""
    import uvicorn

    settings = get_settings()
    host = args.host or settings.host
    port = args.port or settings.port

    logger.info(f"API server listening on http://{host}:{port}")
    uvicorn.run(
        "statline.api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Print the effective configuration."""
    data = get_settings().model_dump()
    if data.get("balldontlie_api_key"):
        data["balldontlie_api_key"] = "***"
    print(json.dumps(data, indent=2, default=str))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statline",
        description="Cached NBA stats API over BallDontLie",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", help="Bind address (default: settings.host)")
    serve.add_argument("--port", type=int, help="Port (default: settings.port)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(func=cmd_serve)

    config = subparsers.add_parser("config", help="Show effective settings")
    config.set_defaults(func=cmd_config)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(get_settings().log_level)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
