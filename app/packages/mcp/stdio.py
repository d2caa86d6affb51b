"""Line-based stdio transport for local MCP clients.

Reads one JSON-RPC message (object or batch array) per line from stdin and
writes one response line to stdout. Logs go to stderr so stdout carries
protocol traffic only. There is no caller address on this transport, so
``geoip_lookup_self`` always fails with STDIO_NO_CALLER_IP.

Usage:
    python -m packages.mcp.stdio
    ipgeo-mcp --transport stdio
"""

import argparse
import json
import sys
from typing import Optional, TextIO

import structlog

from infrastructure.logging import bind_request_context, configure_logging
from infrastructure.services.providers import get_geo_lookup, get_mcp_dispatcher
from packages.mcp.dispatcher import McpDispatcher

logger = structlog.get_logger()


def serve(dispatcher: McpDispatcher, reader: TextIO, writer: TextIO) -> int:
    """Answer every line from ``reader`` until EOF.

    Returns:
        Number of response lines written.
    """
    written = 0
    for line in reader:
        line = line.strip()
        if not line:
            continue
        with bind_request_context(transport="stdio"):
            payload = dispatcher.handle_text(line, caller_ip=None)
        if payload is None:
            continue
        writer.write(json.dumps(payload, ensure_ascii=False) + "\n")
        writer.flush()
        written += 1
    return written


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ipgeo-mcp", description="IP Geolocation MCP server"
    )
    parser.add_argument(
        "--transport",
        choices=["stdio"],
        default="stdio",
        help="Transport mode; the HTTP transport is served by ipgeo-server under /mcp",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    build_parser().parse_args(argv)
    configure_logging()

    try:
        dispatcher = get_mcp_dispatcher()
    except Exception as e:
        logger.error("mcp_stdio_startup_failed", error=str(e))
        sys.exit(1)

    logger.info("mcp_stdio_started")
    try:
        serve(dispatcher, sys.stdin, sys.stdout)
    finally:
        get_geo_lookup().close()
        logger.info("mcp_stdio_stopped")


if __name__ == "__main__":
    main()
