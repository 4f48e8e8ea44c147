"""Delivery of messages between nodes in the world."""

from __future__ import annotations

from ketu.messages import Communicable, MessageType
from ketu.world import World

__all__ = ["CommunicationClient"]


class CommunicationClient:
    """Routes messages to registered nodes by id."""

    def __init__(self, world: World) -> None:
        self._world = world
        self._nodes: dict[str, Communicable] = {}

    def register_node(self, node_id: str, node: Communicable) -> None:
        """Register a receiver; an id already registered keeps its first receiver."""
        self._nodes.setdefault(node_id, node)

    def send_message(self, node_id: str, message_type: MessageType) -> bool:
        """Deliver a message. Returns True if the node was known and received it."""
        node = self._nodes.get(node_id)
        if node is None:
            return False
        node.on_message(message_type)
        return True