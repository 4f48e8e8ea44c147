# ketu

A small simulation of autonomous nodes in 3D space. Each node can sense where
other nodes are relative to itself, receive messages, and take part in
annealing a group of nodes into a grid formation around a leader. It has no
dependencies beyond the standard library.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Running the scenario

```
ketu --frames 1000
```

This builds the `RandomNodes` scenario: a node `leader` at `(1.0, 1.0, 0.5)`
and sixteen nodes `follower_1` … `follower_16` placed in the cube
`[0, 5]` on each axis from a random generator seeded with 0, so every run
starts the same way. On every frame the leader is sent an `ANNEAL` message;
nodes told to move step `0.005` along one axis toward their grid slot.

When the frames are done, one line per node is printed, tab separated: the
node id followed by its x, y and z to four decimal places.

Options:

- `--frames N` — run `N` frames. Without it the scenario runs until
  interrupted with Ctrl-C, and the final positions are printed then.
  A negative value is rejected.
- `-v`, `--verbose` — log each annealing step at INFO level.

## Using the library

```python
from ketu.position import Position, distance
from ketu.world import World
from ketu.sensing import SensingClient

world = World()
world.add_node("a", Position(0.0, 0.0, 0.0))
world.add_node("b", Position(3.0, 0.0, 0.0))

sensing = SensingClient(world)
print(sensing.k_nearest_neighbors("a", 1))  # {'b': Position(x=3.0, y=0.0, z=0.0)}
```

Main pieces:

- `ketu.position` — `Position`, a frozen dataclass with `x`, `y`, `z`,
  supporting `+` and `-`; `distance(p1, p2)` gives the Euclidean distance.
- `ketu.world` — `World` maps node ids to positions. `add_node` returns
  `False` if the id is taken, `update_node` returns `False` for an unknown
  id, `node_positions()` is a read-only live view, and `node_position()`
  returns the origin for an unknown id.
- `ketu.sensing` — `SensingClient.k_nearest_neighbors(source, k)` returns up
  to `k` other nodes, nearest first, mapped to their offsets from the source;
  `distance_to_nodes(source, nodes)` returns offsets to the named nodes and
  raises `KeyError` for a node not in the world.
- `ketu.messages` — the `MessageType` enum (`STOP`, the six `MOVE_*`
  messages, `ANNEAL`, `UNSPECIFIED`) and the `Communicable` interface.
- `ketu.communication` — `CommunicationClient.register_node` and
  `send_message`, which returns `True` only if the node was registered.
- `ketu.movement` — `move(source, target)` returns `STOP` within
  `POSITION_ERROR` (0.01) of the target, otherwise the move along the axis of
  largest offset.
- `ketu.formation` — the `FormationCoordinator` interface, the `Formation`
  enum and `GridFormationCoordinator`, which assigns up to six neighbours to
  the grid slots in `GRID_OFFSETS` (spacing `MIN_DISTANCE`, 2.0), keeps each
  pair of neighbours in opposite slots, and freezes nodes once they reach
  their slot.
- `ketu.node` — `Node` registers itself with a communication client, moves
  on `MOVE_*` messages by calling its `on_node_updated(node_id, diff)`
  callback, and on `ANNEAL` assigns neighbours and sends them moves, or
  passes `ANNEAL` on to a neighbour that is not yet locally formed.
- `ketu.scenario` — `Scenario` with `setup()`, `on_tick(frame_number)` and
  `run(frames)`; `RandomNodes.create()` builds the default scenario; `main()`
  is the `ketu` command.

## What it does not do

There is no graphical view: the scenario is not drawn or animated, and the
only output of the `ketu` command is the final list of node positions.
Nodes move only through the `World` kept in memory; nothing is saved between
runs.