"""
Broadcast Utilities

Contains the delivery record produced by event handlers and the
function that sends those records to client connections.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping

import websockets

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Delivery:
    """
    A single outbound event addressed to one connection.

    Attributes:
        connection_id: Connection the event is sent to
        event: Event name (e.g., "user-connected", "new-message")
        data: Event payload
    """

    connection_id: str
    event: str
    data: Dict[str, Any]

    def to_json(self) -> str:
        """Serialize to the {"type", "data"} frame sent over the socket."""
        return json.dumps({"type": self.event, "data": self.data})


async def _send_in_order(websocket, connection_id: str, deliveries: List[Delivery]):
    """Send one connection's deliveries, stopping if it has closed."""
    for delivery in deliveries:
        try:
            await websocket.send(delivery.to_json())
        except websockets.exceptions.ConnectionClosed:
            logger.debug(
                f"Connection {connection_id} closed before "
                f"{delivery.event} was sent"
            )
            return


async def deliver(connections: Mapping[str, Any], deliveries: Iterable[Delivery]):
    """
    Send deliveries to their connections, fire-and-forget.

    Deliveries for the same connection are sent in order; different
    connections are sent to concurrently, so one slow member does not
    hold up the rest of the room. Connections that are unknown or
    already closed are skipped.

    Args:
        connections: Mapping of connection_id -> websocket
        deliveries: Deliveries returned by a SignalingService handler
    """
    by_connection: Dict[str, List[Delivery]] = {}
    for delivery in deliveries:
        by_connection.setdefault(delivery.connection_id, []).append(delivery)

    sends = []
    for connection_id, queued in by_connection.items():
        websocket = connections.get(connection_id)
        if websocket is None:
            logger.debug(
                f"Dropping {len(queued)} event(s) for unknown connection "
                f"{connection_id}"
            )
            continue
        sends.append(_send_in_order(websocket, connection_id, queued))

    if sends:
        await asyncio.gather(*sends)
