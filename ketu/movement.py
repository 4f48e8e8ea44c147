"""Planning of single movement steps toward a target."""

from __future__ import annotations

from ketu.messages import MessageType
from ketu.position import Position, distance

__all__ = ["POSITION_ERROR", "move"]

#: Distance within which a node counts as having reached its target.
POSITION_ERROR = 0.01

_AXIS_MOVES = (
    (MessageType.MOVE_X_POSITIVE, MessageType.MOVE_X_NEGATIVE),
    (MessageType.MOVE_Y_POSITIVE, MessageType.MOVE_Y_NEGATIVE),
    (MessageType.MOVE_Z_POSITIVE, MessageType.MOVE_Z_NEGATIVE),
)


def move(source: Position, target: Position) -> MessageType:
    """Return the message that takes ``source`` one step closer to ``target``.

    STOP is returned once within POSITION_ERROR of the target; otherwise the
    move is along the axis with the largest offset, earlier axes winning ties.
    """
    if distance(source, target) <= POSITION_ERROR:
        return MessageType.STOP
    diff = target - source
    components = (diff.x, diff.y, diff.z)
    axis = max(range(3), key=lambda i: abs(components[i]))
    positive, negative = _AXIS_MOVES[axis]
    return positive if components[axis] > 0 else negative