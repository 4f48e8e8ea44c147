"""Positions in the world and distances between them."""

from __future__ import annotations

import math
from dataclasses import dataclass

__all__ = ["Position", "distance"]


@dataclass(frozen=True, slots=True)
class Position:
    """A point, or a displacement, in world coordinates relative to North."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other: Position) -> Position:
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Position) -> Position:
        if not isinstance(other, Position):
            return NotImplemented
        return Position(self.x - other.x, self.y - other.y, self.z - other.z)


def distance(p1: Position, p2: Position) -> float:
    """Return the Euclidean distance between two points."""
    return math.sqrt((p1.x - p2.x) ** 2 + (p1.y - p2.y) ** 2 + (p1.z - p2.z) ** 2)