"""Scenarios: set up a world of nodes and drive it frame by frame."""

from __future__ import annotations

import argparse
import logging
import random
from abc import ABC, abstractmethod
from collections.abc import Sequence

from ketu.communication import CommunicationClient
from ketu.formation import FormationCoordinator, GridFormationCoordinator
from ketu.messages import MessageType
from ketu.node import Node
from ketu.position import Position
from ketu.sensing import SensingClient
from ketu.world import World

__all__ = ["Scenario", "RandomNodes", "main", "LEADER_ID", "FOLLOWER_COUNT", "SPAWN_EXTENT"]

#: Id of the node every tick sends ANNEAL to.
LEADER_ID = "leader"
#: Number of followers placed at random.
FOLLOWER_COUNT = 16
#: Followers are placed uniformly in the cube [0, SPAWN_EXTENT] on each axis.
SPAWN_EXTENT = 5.0

_LEADER_POSITION = Position(1.0, 1.0, 0.5)


class Scenario(ABC):
    """A world plus the logic that changes it before every frame."""

    def __init__(self, world: World) -> None:
        self.world = world
        self._frame_number = 0

    @property
    def frame_number(self) -> int:
        """Number of frames run so far."""
        return self._frame_number

    @abstractmethod
    def setup(self) -> None:
        """Create the nodes, clients and anything else the scenario needs."""

    @abstractmethod
    def on_tick(self, frame_number: int) -> None:
        """Update the world before the given frame."""

    def run(self, frames: int | None = None) -> None:
        """Run ``frames`` frames, or until interrupted if ``frames`` is None.

        Frame numbers continue from where a previous run stopped.
        """
        if frames is not None and frames < 0:
            raise ValueError(f"frames must not be negative: {frames}")
        remaining = frames
        while remaining is None or remaining > 0:
            self.on_tick(self._frame_number)
            self._frame_number += 1
            if remaining is not None:
                remaining -= 1


class RandomNodes(Scenario):
    """A leader and followers scattered at random, annealed into a grid."""

    def __init__(self, world: World, rng: random.Random) -> None:
        super().__init__(world)
        self._rng = rng
        self.sensing_client = SensingClient(world)
        self.communication_client = CommunicationClient(world)
        self.formation_coordinator: FormationCoordinator = GridFormationCoordinator(world)
        self.nodes: list[Node] = []

    @classmethod
    def create(cls) -> RandomNodes:
        """Build the scenario with a fixed random seed, so runs are repeatable."""
        return cls(World(), random.Random(0))

    def _add_node(self, node_id: str, position: Position) -> None:
        node = Node(
            node_id,
            self.sensing_client,
            self.communication_client,
            self.formation_coordinator,
        )
        node.on_node_updated = self.on_node_updated
        self.world.add_node(node.node_id, position)
        self.nodes.append(node)

    def setup(self) -> None:
        self._add_node(LEADER_ID, _LEADER_POSITION)
        for index in range(1, FOLLOWER_COUNT + 1):
            position = Position(
                SPAWN_EXTENT * self._rng.random(),
                SPAWN_EXTENT * self._rng.random(),
                SPAWN_EXTENT * self._rng.random(),
            )
            self._add_node(f"follower_{index}", position)

    def on_tick(self, frame_number: int) -> None:
        """Ask the leader to anneal."""
        self.communication_client.send_message(self.nodes[0].node_id, MessageType.ANNEAL)

    def on_node_updated(self, node_id: str, position_diff: Position) -> None:
        """Apply a node's movement to the world."""
        position = self.world.node_position(node_id)
        self.world.update_node(node_id, position + position_diff)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the random-nodes scenario and print where every node ended up."""
    parser = argparse.ArgumentParser(description="Anneal randomly placed nodes into a grid.")
    parser.add_argument(
        "--frames",
        type=int,
        default=None,
        help="number of frames to run (default: until interrupted)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log annealing steps")
    args = parser.parse_args(argv)
    if args.frames is not None and args.frames < 0:
        parser.error("--frames must not be negative")

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)

    scenario = RandomNodes.create()
    scenario.setup()
    try:
        scenario.run(args.frames)
    except KeyboardInterrupt:
        pass

    for node_id, position in scenario.world.node_positions().items():
        print(f"{node_id}\t{position.x:.4f}\t{position.y:.4f}\t{position.z:.4f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())