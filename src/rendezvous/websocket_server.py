"""
WebSocket Server for the Signaling Node

Handles WebSocket connections from clients, feeds their events to the
SignalingService, and answers the HTTP room directory query on the
same port.
"""

import json
import logging
from http import HTTPStatus
from typing import Any, Dict
from urllib.parse import urlparse

import websockets

from .schemas import Disconnect, InvalidRequestError, parse_request
from .service import SignalingService
from .utils import deliver

logger = logging.getLogger(__name__)

ROOMS_PATH = "/api/rooms"


class WebSocketServer:
    """
    WebSocket server for handling client connections.

    Each connection is identified by the UUID the websockets library
    assigns to it. Inbound frames are decoded, parsed into request
    variants and handled one at a time by the SignalingService.
    """

    def __init__(self, service: SignalingService, host: str, port: int):
        """
        Initialize the WebSocket server.

        Args:
            service: The signaling service owning all room state
            host: Host address to bind to
            port: Port to listen on
        """
        self.service = service
        self.host = host
        self.port = port
        self.server = None
        # Maps connection_id -> websocket
        self.connections: Dict[str, Any] = {}

    async def start(self):
        """Start the WebSocket server."""
        self.server = await websockets.serve(
            self.handle_client,
            self.host,
            self.port,
            process_request=self.process_request,
        )
        logger.info(f"WebSocket server started on ws://{self.host}:{self.port}")

    async def stop(self):
        """Stop the WebSocket server."""
        if self.server:
            self.server.close()
            await self.server.wait_closed()
            logger.info("WebSocket server stopped")

    @staticmethod
    def connection_id(websocket) -> str:
        """Get the identifier used for a connection in room state."""
        return str(websocket.id)

    def register_connection(self, websocket) -> str:
        """
        Track a newly opened connection.

        Args:
            websocket: The WebSocket connection

        Returns:
            The connection identifier
        """
        connection_id = self.connection_id(websocket)
        self.connections[connection_id] = websocket
        return connection_id

    def process_request(self, connection, request):
        """
        Answer plain HTTP requests before the WebSocket handshake.

        GET /api/rooms returns the room directory as JSON. Any other
        path continues with the handshake.

        Args:
            connection: The websockets ServerConnection
            request: The parsed HTTP request

        Returns:
            A Response for the directory path, None otherwise
        """
        if urlparse(request.path).path != ROOMS_PATH:
            return None

        body = json.dumps(self.service.list_rooms())
        response = connection.respond(HTTPStatus.OK, body)
        del response.headers["Content-Type"]
        response.headers["Content-Type"] = "application/json"
        response.headers["Access-Control-Allow-Origin"] = "*"
        logger.debug("Served room directory")
        return response

    async def handle_client(self, websocket):
        """
        Handle a client connection.

        Args:
            websocket: The WebSocket connection
        """
        connection_id = self.register_connection(websocket)
        logger.info(f"Client {connection_id} connected")

        try:
            async for message in websocket:
                await self.process_message(websocket, message)
        except websockets.exceptions.ConnectionClosed:
            logger.info(f"Client {connection_id} connection closed")
        except Exception as e:
            logger.error(f"Error handling client {connection_id}: {e}")
        finally:
            await self.handle_disconnect(websocket)

    async def process_message(self, websocket, message: str):
        """
        Process an incoming message from a client.

        Malformed frames are logged and dropped; the connection stays
        open and nothing is sent back.

        Args:
            websocket: The WebSocket connection
            message: The message string (JSON)
        """
        connection_id = self.connection_id(websocket)
        try:
            request = parse_request(json.loads(message))
        except InvalidRequestError as e:
            logger.warning(f"Malformed event from {connection_id}: {e}")
            return
        except (ValueError, RecursionError) as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors
            logger.warning(f"Undecodable frame from {connection_id}: {e}")
            return

        try:
            deliveries = self.service.handle(connection_id, request)
        except Exception:
            logger.exception(
                f"Error handling {type(request).__name__} from {connection_id}"
            )
            return

        await deliver(self.connections, deliveries)

    async def handle_disconnect(self, websocket):
        """
        Handle a connection going away.

        Safe to call more than once for the same connection.

        Args:
            websocket: The WebSocket connection
        """
        connection_id = self.connection_id(websocket)
        self.connections.pop(connection_id, None)
        deliveries = self.service.handle(connection_id, Disconnect())
        await deliver(self.connections, deliveries)
