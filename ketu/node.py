"""Nodes: the objects that move through the world and form formations."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from ketu.communication import CommunicationClient
from ketu.formation import FormationCoordinator
from ketu.messages import Communicable, MessageType
from ketu.position import Position
from ketu.sensing import SensingClient

__all__ = ["Node", "MOVEMENT_STEP", "EXTRA_NODES_FETCHED"]

logger = logging.getLogger(__name__)

#: Distance a node travels in response to one move message.
MOVEMENT_STEP = 0.005
#: Extra candidates fetched when looking for nodes to fill open neighbour slots.
EXTRA_NODES_FETCHED = 12

_STEPS = {
    MessageType.MOVE_X_POSITIVE: Position(MOVEMENT_STEP, 0.0, 0.0),
    MessageType.MOVE_X_NEGATIVE: Position(-MOVEMENT_STEP, 0.0, 0.0),
    MessageType.MOVE_Y_POSITIVE: Position(0.0, MOVEMENT_STEP, 0.0),
    MessageType.MOVE_Y_NEGATIVE: Position(0.0, -MOVEMENT_STEP, 0.0),
    MessageType.MOVE_Z_POSITIVE: Position(0.0, 0.0, MOVEMENT_STEP),
    MessageType.MOVE_Z_NEGATIVE: Position(0.0, 0.0, -MOVEMENT_STEP),
}

PositionCallback = Callable[[str, Position], None]


def _ignore(node_id: str, position_diff: Position) -> None:
    pass


class Node(Communicable):
    """A node that moves on command and coordinates formations with its neighbours.

    ``on_node_updated`` is called with the node id and the change in its
    position relative to North whenever the node moves.
    """

    def __init__(
        self,
        node_id: str,
        sensing_client: SensingClient,
        communication_client: CommunicationClient,
        formation_coordinator: FormationCoordinator,
    ) -> None:
        self._node_id = node_id
        self._sensing = sensing_client
        self._communication = communication_client
        self._coordinator = formation_coordinator
        self.on_node_updated: PositionCallback = _ignore
        communication_client.register_node(node_id, self)

    @property
    def node_id(self) -> str:
        """The unique id of the node."""
        return self._node_id

    def on_message(self, message_type: MessageType) -> None:
        """Carry out the action a message commands."""
        if message_type is MessageType.ANNEAL:
            self._anneal()
        elif message_type in _STEPS:
            self.on_node_updated(self._node_id, _STEPS[message_type])

    def _send_all(self, messages: Mapping[str, MessageType]) -> None:
        for neighbor, message in messages.items():
            self._communication.send_message(neighbor, message)

    def _anneal(self) -> None:
        coordinator = self._coordinator
        max_connectivity = coordinator.max_connectivity()
        neighbors = coordinator.local_neighbors(self._node_id)

        if not neighbors:
            logger.info("Annealing node %s without neighbors", self._node_id)
            nearest = {
                node_id: position
                for node_id, position in self._sensing.k_nearest_neighbors(
                    self._node_id, max_connectivity
                ).items()
                if not coordinator.is_node_frozen(node_id)
            }
            coordinator.set_local_neighbors(self._node_id, list(nearest))
            self._send_all(coordinator.align(self._node_id, nearest))

        elif len(neighbors) == max_connectivity:
            logger.info("Annealing node %s with all neighbors", self._node_id)
            offsets = self._sensing.distance_to_nodes(self._node_id, neighbors)
            frozen = {n: p for n, p in offsets.items() if coordinator.is_node_frozen(n)}
            moving = {n: p for n, p in offsets.items() if n not in frozen}
            if len(frozen) == max_connectivity:
                logger.info("All neighbors formed for node %s", self._node_id)
                for neighbor in frozen:
                    if not coordinator.is_node_locally_formed(neighbor):
                        logger.info("Propagating annealing to node %s", neighbor)
                        self._communication.send_message(neighbor, MessageType.ANNEAL)
                        return
            self._send_all(coordinator.align(self._node_id, moving))

        else:
            logger.info("Annealing node %s with some neighbors", self._node_id)
            # Nearest nodes are likely already in formation, so look further out.
            nearest = self._sensing.k_nearest_neighbors(
                self._node_id, max_connectivity + EXTRA_NODES_FETCHED
            )
            available: dict[str, Position] = {}
            open_slots = max_connectivity - len(neighbors)
            for node_id, position in nearest.items():
                if open_slots == 0:
                    break
                if coordinator.is_node_frozen(node_id):
                    continue
                if node_id not in neighbors:
                    neighbors.append(node_id)
                available[node_id] = position
                open_slots -= 1
            coordinator.set_local_neighbors(self._node_id, neighbors)
            self._send_all(coordinator.align(self._node_id, available))