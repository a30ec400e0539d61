"""Breadth-first search toward the nearest destination cell."""

import logging
from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from .errors import NoReachableDestination
from .grid import GridMap, Position, Terrain, OFFSETS_4, neighbors

logger = logging.getLogger(__name__)

# Spawn cells are only ever the search root, never expanded into.
_TRAVERSABLE = (Terrain.EMPTY, Terrain.DESTINATION)


def _search(grid: GridMap,
            start: Position) -> Tuple[Position, Dict[Position, Optional[Position]]]:
    """
    Single-source BFS (4-connected) from start until a destination is dequeued.

    Returns the destination found and the predecessor mapping. Ties between
    equally distant destinations go to the one discovered first, which follows
    the OFFSETS_4 order (down, right, left, up).
    """
    came_from: Dict[Position, Optional[Position]] = {start: None}
    queue: Deque[Position] = deque()
    current = start

    while grid.terrain_at(current) != Terrain.DESTINATION:
        for nxt in neighbors(grid, current, OFFSETS_4):
            if nxt in came_from or grid.terrain_at(nxt) not in _TRAVERSABLE:
                continue
            came_from[nxt] = current
            queue.append(nxt)
        if not queue:
            raise NoReachableDestination(start)
        current = queue.popleft()

    logger.debug("BFS from %s reached %s after visiting %d cells",
                 start, current, len(came_from))
    return current, came_from


def shortest_path(grid: GridMap, start: Position) -> List[Position]:
    """
    Full path from start (inclusive) to the nearest destination (inclusive).

    Raises NoReachableDestination if walls enclose start.
    """
    goal, came_from = _search(grid, start)
    path = [goal]
    step = came_from[goal]
    while step is not None:
        path.append(step)
        step = came_from[step]
    path.reverse()
    return path


def next_step_toward_nearest_destination(grid: GridMap, pos: Position) -> Position:
    """
    One hop along the shortest path to the nearest destination.

    Returns pos unchanged when pos is itself a destination.
    """
    goal, came_from = _search(grid, pos)
    step = goal
    while came_from[step] is not None and came_from[step] != pos:
        step = came_from[step]
    return step


def distance_to_nearest_destination(grid: GridMap, pos: Position) -> int:
    """Hop count to the nearest destination."""
    return len(shortest_path(grid, pos)) - 1
