"""Formations and the coordinators that bring nodes into them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from enum import IntEnum

from ketu.messages import MessageType
from ketu.movement import move
from ketu.position import Position
from ketu.world import World

__all__ = [
    "Formation",
    "FormationCoordinator",
    "GridFormationCoordinator",
    "GRID_OFFSETS",
    "MIN_DISTANCE",
]

#: Spacing between adjacent nodes in a grid formation.
MIN_DISTANCE = 2.0

#: Offsets of the six grid slots around a node: top, bottom, left, right, forward, backward.
GRID_OFFSETS: tuple[Position, ...] = (
    Position(0.0, 0.0, MIN_DISTANCE),
    Position(0.0, 0.0, -MIN_DISTANCE),
    Position(-MIN_DISTANCE, 0.0, 0.0),
    Position(MIN_DISTANCE, 0.0, 0.0),
    Position(0.0, MIN_DISTANCE, 0.0),
    Position(0.0, -MIN_DISTANCE, 0.0),
)

# Slot a node occupies in its neighbour's frame, given the neighbour's slot in its own.
_OPPOSITE_SLOT = (1, 0, 3, 2, 5, 4)


class Formation(IntEnum):
    """Kinds of formation nodes can be arranged into."""

    UNSPECIFIED = 0
    #: Default grid formation.
    GRID = 1


class FormationCoordinator(ABC):
    """Computes node positions and keeps the state needed to align nodes into a formation."""

    @abstractmethod
    def max_connectivity(self) -> int:
        """The largest number of neighbours a node has in the formation."""

    @abstractmethod
    def is_node_locally_formed(self, node_id: str) -> bool:
        """Whether the node and all of its neighbours are in formation."""

    @abstractmethod
    def local_neighbors(self, node_id: str) -> list[str]:
        """The nodes assigned to the local formation around a node."""

    @abstractmethod
    def set_local_neighbors(self, node_id: str, neighbors: Iterable[str]) -> None:
        """Assign nodes as local neighbours; existing assignments are kept."""

    @abstractmethod
    def is_node_frozen(self, node_id: str) -> bool:
        """Whether the node itself is already in formation."""

    @abstractmethod
    def is_formation_complete(self) -> bool:
        """Whether all nodes are in formation."""

    @abstractmethod
    def align(
        self, node_id: str, relative_node_positions: Mapping[str, Position]
    ) -> dict[str, MessageType]:
        """Compute the next message for each given neighbour of a node."""


class GridFormationCoordinator(FormationCoordinator):
    """Arranges nodes into a cubic grid, each node having up to six neighbours."""

    def __init__(self, world: World) -> None:
        self._world = world
        self._connectivity: dict[str, dict[str, int]] = {}
        self._frozen: set[str] = set()

    def max_connectivity(self) -> int:
        return len(GRID_OFFSETS)

    def is_node_locally_formed(self, node_id: str) -> bool:
        if node_id not in self._frozen:
            return False
        neighbors = self._connectivity.get(node_id)
        if neighbors is None or len(neighbors) < self.max_connectivity():
            return False
        return all(neighbor in self._frozen for neighbor in neighbors)

    def local_neighbors(self, node_id: str) -> list[str]:
        return list(self._connectivity.get(node_id, {}))

    def set_local_neighbors(self, node_id: str, neighbors: Iterable[str]) -> None:
        existing = self._connectivity.setdefault(node_id, {})
        available = set(range(self.max_connectivity())) - set(existing.values())
        for neighbor in neighbors:
            if not available:
                break
            if neighbor in existing:
                continue
            slot = min(available)
            available.discard(slot)
            existing[neighbor] = slot
        for neighbor, slot in existing.items():
            reverse = self._connectivity.setdefault(neighbor, {})
            reverse.setdefault(node_id, _OPPOSITE_SLOT[slot])

    def is_node_frozen(self, node_id: str) -> bool:
        return node_id in self._frozen

    def is_formation_complete(self) -> bool:
        """True once at least one node is placed and every placed node is frozen."""
        return bool(self._connectivity) and all(
            node_id in self._frozen for node_id in self._connectivity
        )

    def align(
        self, node_id: str, relative_node_positions: Mapping[str, Position]
    ) -> dict[str, MessageType]:
        """Freeze the node and return a move for each neighbour toward its grid slot.

        Raises KeyError if the node has no assigned neighbours or a given
        neighbour has no slot around it. Neighbours already at their slot are
        told to STOP and frozen.
        """
        self._frozen.add(node_id)
        try:
            slots = self._connectivity[node_id]
        except KeyError:
            raise KeyError(f"node has no assigned neighbors: {node_id!r}") from None
        messages: dict[str, MessageType] = {}
        for neighbor, source in relative_node_positions.items():
            try:
                slot = slots[neighbor]
            except KeyError:
                raise KeyError(f"{neighbor!r} is not a neighbor of {node_id!r}") from None
            message = move(source, GRID_OFFSETS[slot])
            messages[neighbor] = message
            if message is MessageType.STOP:
                self._frozen.add(neighbor)
        return messages