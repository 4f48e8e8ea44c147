"""Messages nodes exchange, and the interface for anything that receives them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum

__all__ = ["MessageType", "Communicable"]


class MessageType(IntEnum):
    """Kinds of message that can be sent to a node."""

    UNSPECIFIED = 0
    #: Stop all movement.
    STOP = 1
    #: Move along the positive X axis relative to North.
    MOVE_X_POSITIVE = 2
    #: Move along the negative X axis relative to North.
    MOVE_X_NEGATIVE = 3
    #: Move along the positive Y axis relative to North.
    MOVE_Y_POSITIVE = 4
    #: Move along the negative Y axis relative to North.
    MOVE_Y_NEGATIVE = 5
    #: Move along the positive Z axis relative to North.
    MOVE_Z_POSITIVE = 6
    #: Move along the negative Z axis relative to North.
    MOVE_Z_NEGATIVE = 7
    #: Attempt to form a formation with surrounding nodes.
    ANNEAL = 8


class Communicable(ABC):
    """Anything that can receive messages through a communication client."""

    @abstractmethod
    def on_message(self, message_type: MessageType) -> None:
        """Handle a received message."""