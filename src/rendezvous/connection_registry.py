"""
Connection Registry

Maps live connection identifiers to the user and room they represent.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConnectionBinding:
    """
    Association of a live connection with a (user, room) pair.

    Attributes:
        connection_id: Transport-assigned connection identifier
        user_id: User ID the connection joined as
        room_id: Room the connection joined
    """

    connection_id: str
    user_id: str
    room_id: str


class ConnectionRegistry:
    """
    Registry of connection bindings.

    At most one binding exists per connection ID. Lookups and
    mutations are point operations keyed by connection ID.
    """

    def __init__(self):
        self._bindings: Dict[str, ConnectionBinding] = {}

    def bind(self, connection_id: str, user_id: str, room_id: str) -> ConnectionBinding:
        """
        Record a binding, replacing any earlier one for the connection.

        Args:
            connection_id: The connection identifier
            user_id: The user ID to bind
            room_id: The room ID to bind

        Returns:
            The new ConnectionBinding
        """
        binding = ConnectionBinding(connection_id, user_id, room_id)
        self._bindings[connection_id] = binding
        logger.debug(f"Bound connection {connection_id} to {user_id}@{room_id}")
        return binding

    def lookup(self, connection_id: str) -> Optional[ConnectionBinding]:
        """
        Get the binding for a connection.

        Args:
            connection_id: The connection identifier

        Returns:
            The ConnectionBinding if found, None otherwise
        """
        return self._bindings.get(connection_id)

    def unbind(self, connection_id: str) -> Optional[ConnectionBinding]:
        """
        Remove and return the binding for a connection.

        Args:
            connection_id: The connection identifier

        Returns:
            The removed ConnectionBinding, or None if there was none
        """
        binding = self._bindings.pop(connection_id, None)
        if binding:
            logger.debug(f"Unbound connection {connection_id}")
        return binding

    def __len__(self) -> int:
        return len(self._bindings)

    def __contains__(self, connection_id: str) -> bool:
        return connection_id in self._bindings
