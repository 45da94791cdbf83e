#!/usr/bin/env python3
"""
Rendezvous Signaling Node Server

A signaling and presence coordinator for peer-to-peer sessions.
"""

import asyncio
import logging
import os
import sys

from .service import SignalingService
from .websocket_server import WebSocketServer


def resolve_log_level(value) -> int:
    """
    Map a LOG_LEVEL setting to a logging level, defaulting to INFO.

    Args:
        value: Level name such as "debug" or "WARNING", or None

    Returns:
        The numeric logging level
    """
    level = logging.getLevelName(str(value or "INFO").upper())
    if isinstance(level, int):
        return level
    return logging.INFO


# Configure logging
logging.basicConfig(
    level=resolve_log_level(os.environ.get("LOG_LEVEL")),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


async def run_server(host: str, port: int):
    """
    Run the signaling node until cancelled.

    Args:
        host: Address to bind to
        port: Port for WebSocket connections and the room directory
    """
    service = SignalingService()
    ws_server = WebSocketServer(service, host, port)

    await ws_server.start()

    logger.info(f"Server running on port {port}")
    logger.info(f"Room directory at http://{host}:{port}/api/rooms")

    # Keep server running
    try:
        await asyncio.Event().wait()
    except asyncio.CancelledError:
        logger.info("Server shutdown requested")
    finally:
        await ws_server.stop()
        logger.info("Signaling node stopped")


def main():
    """Main entry point for the signaling node."""
    logger.info("Starting rendezvous signaling node...")

    host = os.environ.get("RENDEZVOUS_HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "3001"))

    try:
        asyncio.run(run_server(host, port))
    except KeyboardInterrupt:
        logger.info("Shutting down signaling node...")
        sys.exit(0)


if __name__ == "__main__":
    main()
