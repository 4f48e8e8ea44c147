"""Sensors nodes use to perceive each other while moving through the world."""

from __future__ import annotations

import heapq
from collections.abc import Iterable

from ketu.position import Position, distance
from ketu.world import World

__all__ = ["SensingClient"]


class SensingClient:
    """Answers questions about where other nodes are relative to a node."""

    def __init__(self, world: World) -> None:
        self._world = world

    def k_nearest_neighbors(self, source_node_id: str, k: int) -> dict[str, Position]:
        """Return the ``k`` nodes nearest the source, mapped to their offsets from it.

        The source itself is never included. Entries are ordered nearest first.
        """
        if k <= 0:
            return {}
        source = self._world.node_position(source_node_id)
        positions = self._world.node_positions()
        candidates = (
            (distance(source, position), node_id)
            for node_id, position in positions.items()
            if node_id != source_node_id
        )
        nearest = heapq.nsmallest(k, candidates)
        return {node_id: positions[node_id] - source for _, node_id in nearest}

    def distance_to_nodes(self, source_node_id: str, nodes: Iterable[str]) -> dict[str, Position]:
        """Return the offset from the source to each of the given nodes.

        Raises KeyError if any of the given nodes is not in the world.
        """
        source = self._world.node_position(source_node_id)
        positions = self._world.node_positions()
        result: dict[str, Position] = {}
        for node_id in nodes:
            try:
                position = positions[node_id]
            except KeyError:
                raise KeyError(f"unknown node: {node_id!r}") from None
            result[node_id] = position - source
        return result