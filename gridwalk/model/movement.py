"""Movement strategies: random walk and shortest-path pursuit."""

from enum import Enum

import numpy as np

from .grid import GridMap, Position, Terrain, OFFSETS_4, neighbors
from .pathfinding import next_step_toward_nearest_destination


class Strategy(Enum):
    """Movement policy applied to every agent each tick."""
    RANDOM = "random"
    SHORTEST_PATH = "shortest_path"

    @classmethod
    def parse(cls, name: str) -> "Strategy":
        if not isinstance(name, str):
            raise ValueError(f"Strategy must be a string, got {name!r}")
        try:
            return cls(name.strip().lower().replace('-', '_'))
        except ValueError:
            valid = ', '.join(s.value for s in cls)
            raise ValueError(f"Unknown strategy: {name} (expected one of {valid})") from None


class FallbackPolicy(Enum):
    """What a shortest-path agent does when no destination is reachable."""
    RANDOM = "random"
    STAY = "stay"


def random_step(grid: GridMap, pos: Position, rng: np.random.Generator) -> Position:
    """
    Uniformly random EMPTY 4-neighbor of pos, or pos if there is none.

    Spawn and destination cells are not candidates.
    """
    candidates = [n for n in neighbors(grid, pos, OFFSETS_4)
                  if grid.terrain_at(n) == Terrain.EMPTY]
    if not candidates:
        return pos
    idx = rng.integers(len(candidates))
    return candidates[idx]


def choose_move(strategy: Strategy, grid: GridMap, pos: Position,
                rng: np.random.Generator) -> Position:
    """
    Apply strategy to pos.

    NoReachableDestination from the shortest-path search propagates.
    """
    if strategy is Strategy.RANDOM:
        return random_step(grid, pos, rng)
    return next_step_toward_nearest_destination(grid, pos)
