#!/usr/bin/env python3
"""
Entry point for the CHUK Live Sync MCP Server.

    chuk-live-sync-mcp
    chuk-live-sync-mcp --transport http --port 8080 --binding my_binding:connect

The tool module reads its live binding and output directory from the
environment when it is imported, so the options here are exported first.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os

from chuk_live_sync.constants import BINDING_ENV_VAR, OUTPUT_DIR_ENV_VAR

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chuk-live-sync-mcp",
        description="MCP server applying song descriptions to an Ableton Live session",
    )
    parser.add_argument("--transport", choices=["stdio", "http"], default="stdio")
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (http transport only)",
    )
    parser.add_argument(
        "--binding",
        metavar="MODULE:FACTORY",
        help=f"Factory returning the remote song handle (default: ${BINDING_ENV_VAR})",
    )
    parser.add_argument(
        "--output-dir",
        metavar="DIR",
        help=f"Where MIDI previews are written (default: ${OUTPUT_DIR_ENV_VAR} or ./output)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def export_options(args: argparse.Namespace) -> None:
    """Hand command line options to the tool module through the environment."""
    if args.binding:
        os.environ[BINDING_ENV_VAR] = args.binding
    if args.output_dir:
        os.environ[OUTPUT_DIR_ENV_VAR] = args.output_dir


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    export_options(args)

    from chuk_live_sync.async_server import mcp

    logger.info(f"Serving chuk-live-sync over {args.transport}")
    if args.transport == "stdio":
        asyncio.run(mcp.run_stdio())
    else:
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
