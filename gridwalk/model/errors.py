"""Error types for the grid world and movement engine."""

from typing import Tuple


class GridWalkError(Exception):
    """Base class for all gridwalk errors."""


class MapError(GridWalkError, ValueError):
    """Map description could not be turned into a grid."""


class InvalidMapCharacter(MapError):
    """Unrecognized glyph in a map description."""

    def __init__(self, char: str, position: Tuple[int, int]):
        self.char = char
        self.position = position
        super().__init__(
            f"Invalid map character {char!r} at (x={position[0]}, y={position[1]})"
        )


class EmptyMap(MapError):
    """Map description has no non-empty lines."""

    def __init__(self):
        super().__init__("Map description contains no rows")


class OutOfBounds(GridWalkError, IndexError):
    """Position lies outside the grid extent."""

    def __init__(self, position: Tuple[int, int], width: int, height: int):
        self.position = position
        self.width = width
        self.height = height
        super().__init__(
            f"Position {position} outside grid of size {width}x{height}"
        )


class InvalidAgentPosition(GridWalkError, ValueError):
    """Agent start position is not traversable."""

    def __init__(self, agent_id: int, position: Tuple[int, int]):
        self.agent_id = agent_id
        self.position = position
        super().__init__(f"Agent {agent_id} cannot start on wall at {position}")


class NoReachableDestination(GridWalkError):
    """Breadth-first search exhausted its frontier without finding a destination."""

    def __init__(self, start: Tuple[int, int]):
        self.start = start
        super().__init__(f"No destination reachable from {start}")
