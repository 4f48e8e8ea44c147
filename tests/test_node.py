import pytest

from ketu.communication import CommunicationClient
from ketu.formation import GRID_OFFSETS, GridFormationCoordinator
from ketu.messages import MessageType
from ketu.node import MOVEMENT_STEP, Node
from ketu.position import Position, distance
from ketu.sensing import SensingClient
from ketu.world import World


class Swarm:
    def __init__(self, placements):
        self.world = World()
        self.sensing = SensingClient(self.world)
        self.comm = CommunicationClient(self.world)
        self.coordinator = GridFormationCoordinator(self.world)
        self.nodes = {}
        for node_id, position in placements.items():
            node = Node(node_id, self.sensing, self.comm, self.coordinator)
            node.on_node_updated = self._apply
            self.world.add_node(node_id, position)
            self.nodes[node_id] = node

    def _apply(self, node_id, diff):
        self.world.update_node(node_id, self.world.node_position(node_id) + diff)

    def anneal_until(self, done, limit=50000):
        for _ in range(limit):
            if done():
                return True
            self.comm.send_message("leader", MessageType.ANNEAL)
        return done()


@pytest.fixture
def lone_node():
    world = World()
    comm = CommunicationClient(world)
    node = Node("solo", SensingClient(world), comm, GridFormationCoordinator(world))
    calls = []
    node.on_node_updated = lambda node_id, diff: calls.append((node_id, diff))
    return node, comm, calls


def test_node_id(lone_node):
    node, _, _ = lone_node
    assert node.node_id == "solo"


def test_node_registers_with_communication_client(lone_node):
    _, comm, calls = lone_node
    assert comm.send_message("solo", MessageType.MOVE_Y_NEGATIVE) is True
    assert calls == [("solo", Position(0.0, -MOVEMENT_STEP, 0.0))]


@pytest.mark.parametrize(
    "message, step",
    [
        (MessageType.MOVE_X_POSITIVE, Position(MOVEMENT_STEP, 0.0, 0.0)),
        (MessageType.MOVE_X_NEGATIVE, Position(-MOVEMENT_STEP, 0.0, 0.0)),
        (MessageType.MOVE_Y_POSITIVE, Position(0.0, MOVEMENT_STEP, 0.0)),
        (MessageType.MOVE_Y_NEGATIVE, Position(0.0, -MOVEMENT_STEP, 0.0)),
        (MessageType.MOVE_Z_POSITIVE, Position(0.0, 0.0, MOVEMENT_STEP)),
        (MessageType.MOVE_Z_NEGATIVE, Position(0.0, 0.0, -MOVEMENT_STEP)),
    ],
)
def test_move_messages_report_step(lone_node, message, step):
    node, _, calls = lone_node
    node.on_message(message)
    assert calls == [("solo", step)]


@pytest.mark.parametrize("message", [MessageType.STOP, MessageType.UNSPECIFIED])
def test_stop_and_unspecified_do_nothing(lone_node, message):
    node, _, calls = lone_node
    node.on_message(message)
    assert calls == []


def test_anneal_alone_freezes_only_itself(lone_node):
    node, _, calls = lone_node
    node.on_message(MessageType.ANNEAL)
    assert calls == []
    assert node._coordinator.is_node_frozen("solo")
    assert node._coordinator.local_neighbors("solo") == []


def test_first_anneal_assigns_neighbors_and_moves_them():
    swarm = Swarm(
        {
            "leader": Position(0.0, 0.0, 0.0),
            "f1": Position(1.0, 0.5, 0.0),
            "f2": Position(-0.5, 1.0, 0.5),
        }
    )
    start = {n: swarm.world.node_position(n) for n in ("f1", "f2")}
    swarm.comm.send_message("leader", MessageType.ANNEAL)
    assert sorted(swarm.coordinator.local_neighbors("leader")) == ["f1", "f2"]
    assert swarm.coordinator.is_node_frozen("leader")
    for n, before in start.items():
        assert distance(before, swarm.world.node_position(n)) == pytest.approx(MOVEMENT_STEP)
    assert swarm.world.node_position("leader") == Position(0.0, 0.0, 0.0)


def test_followers_reach_grid_slots():
    swarm = Swarm(
        {
            "leader": Position(1.0, 1.0, 0.5),
            "f1": Position(2.0, 1.5, 0.5),
            "f2": Position(0.5, 2.0, 1.0),
            "f3": Position(1.0, 0.2, 1.4),
        }
    )
    followers = ["f1", "f2", "f3"]
    assert swarm.anneal_until(
        lambda: all(swarm.coordinator.is_node_frozen(f) for f in followers)
    )
    leader_pos = swarm.world.node_position("leader")
    reached = []
    for f in followers:
        offset = swarm.world.node_position(f) - leader_pos
        matches = [g for g in GRID_OFFSETS if distance(offset, g) <= 0.01]
        assert len(matches) == 1
        reached.append(matches[0])
    assert len(set(reached)) == len(followers)


def test_full_formation_makes_leader_locally_formed():
    placements = {"leader": Position(0.0, 0.0, 0.0)}
    starts = [
        Position(0.5, 0.0, 1.5),
        Position(0.0, 0.5, -1.5),
        Position(-1.5, 0.5, 0.0),
        Position(1.5, -0.5, 0.0),
        Position(0.5, 1.5, 0.5),
        Position(-0.5, -1.5, 0.0),
    ]
    for i, p in enumerate(starts, start=1):
        placements[f"f{i}"] = p
    swarm = Swarm(placements)
    assert swarm.anneal_until(lambda: swarm.coordinator.is_node_locally_formed("leader"))
    assert len(swarm.coordinator.local_neighbors("leader")) == 6
    # Further annealing is passed on and moves nothing.
    before = dict(swarm.world.node_positions())
    swarm.comm.send_message("leader", MessageType.ANNEAL)
    assert dict(swarm.world.node_positions()) == before


def test_frozen_nodes_are_not_taken_as_new_neighbors():
    swarm = Swarm(
        {
            "leader": Position(0.0, 0.0, 0.0),
            "other": Position(0.0, 0.0, 2.0),
            "f1": Position(1.0, 0.0, 0.0),
        }
    )
    swarm.coordinator.set_local_neighbors("x", ["other"])
    swarm.coordinator.align("x", {})
    swarm.coordinator.align("other", {})
    swarm.comm.send_message("leader", MessageType.ANNEAL)
    assert swarm.coordinator.local_neighbors("leader") == ["f1"]