"""The world: the set of nodes and where each of them is."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ketu.position import Position

__all__ = ["World"]

_ORIGIN = Position()


class World:
    """Holds the position of every node in the scene."""

    def __init__(self) -> None:
        self._positions: dict[str, Position] = {}

    def add_node(self, node_id: str, position: Position) -> bool:
        """Add a node. Returns False, changing nothing, if the id is taken."""
        if node_id in self._positions:
            return False
        self._positions[node_id] = position
        return True

    def update_node(self, node_id: str, position: Position) -> bool:
        """Move an existing node. Returns False if the node is unknown."""
        if node_id not in self._positions:
            return False
        self._positions[node_id] = position
        return True

    def node_positions(self) -> Mapping[str, Position]:
        """A read-only live view of all node positions."""
        return MappingProxyType(self._positions)

    def node_position(self, node_id: str) -> Position:
        """The node's position, or the origin if the node is unknown."""
        return self._positions.get(node_id, _ORIGIN)