"""Grid map management for the gridwalk simulation."""

from enum import IntEnum
from pathlib import Path
from typing import Dict, Iterator, List, Sequence, Tuple

import numpy as np

from .errors import EmptyMap, InvalidMapCharacter, OutOfBounds

Position = Tuple[int, int]

# Von Neumann neighborhood: down, right, left, up. Order is the BFS tie-break.
OFFSETS_4: Tuple[Position, ...] = ((0, 1), (1, 0), (-1, 0), (0, -1))

# Moore neighborhood (8-connected)
OFFSETS_8: Tuple[Position, ...] = OFFSETS_4 + ((1, 1), (-1, 1), (1, -1), (-1, -1))


class Terrain(IntEnum):
    """Terrain class of a single cell."""
    EMPTY = 0
    WALL = 1
    SPAWN = 2
    DESTINATION = 3

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_GLYPHS: Dict[str, Terrain] = {
    ' ': Terrain.EMPTY,
    '#': Terrain.WALL,
    '^': Terrain.SPAWN,
    '$': Terrain.DESTINATION,
}
_SYMBOLS: Dict[Terrain, str] = {t: c for c, t in _GLYPHS.items()}


def neighbors(grid: "GridMap", pos: Position,
              offsets: Sequence[Position] = OFFSETS_4) -> Iterator[Position]:
    """Yield in-bounds cells adjacent to pos, in offset order."""
    x, y = pos
    for dx, dy in offsets:
        candidate = (x + dx, y + dy)
        if grid.in_bounds(candidate):
            yield candidate


class GridMap:
    """
    Immutable 2D terrain map parsed from a text description.

    Coordinate convention: (x, y) for API, [y, x] for array indexing.
    """

    def __init__(self, cells: np.ndarray):
        if cells.ndim != 2 or cells.shape[0] < 1 or cells.shape[1] < 1:
            raise EmptyMap()
        self.height, self.width = cells.shape
        self._cells = np.array(cells, dtype=np.int8)
        self._cells.setflags(write=False)

    @classmethod
    def from_text(cls, description: str) -> "GridMap":
        """
        Parse a map description.

        Empty lines are skipped; shorter lines are right-padded with EMPTY so
        the grid is rectangular. Unknown glyphs raise InvalidMapCharacter.
        """
        lines = [line.rstrip('\r') for line in description.split('\n')]
        lines = [line for line in lines if line]
        if not lines:
            raise EmptyMap()

        width = max(len(line) for line in lines)
        cells = np.full((len(lines), width), Terrain.EMPTY, dtype=np.int8)
        for y, line in enumerate(lines):
            for x, char in enumerate(line):
                terrain = _GLYPHS.get(char)
                if terrain is None:
                    raise InvalidMapCharacter(char, (x, y))
                cells[y, x] = terrain
        return cls(cells)

    @classmethod
    def from_file(cls, path: Path) -> "GridMap":
        """Load and parse a map description file."""
        return cls.from_text(Path(path).read_text(encoding='utf-8'))

    @property
    def cells(self) -> np.ndarray:
        """Read-only terrain array indexed [y, x]."""
        return self._cells

    def in_bounds(self, pos: Position) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def terrain_at(self, pos: Position) -> Terrain:
        if not self.in_bounds(pos):
            raise OutOfBounds(pos, self.width, self.height)
        x, y = pos
        return Terrain(int(self._cells[y, x]))

    def is_walkable(self, pos: Position) -> bool:
        """Check if cell is within bounds and not a wall."""
        return self.in_bounds(pos) and self.terrain_at(pos) != Terrain.WALL

    def neighbors(self, pos: Position, diagonal: bool = False) -> Iterator[Position]:
        return neighbors(self, pos, OFFSETS_8 if diagonal else OFFSETS_4)

    def positions_of(self, terrain: Terrain) -> List[Position]:
        """All cells of the given terrain class in row-major order."""
        ys, xs = np.nonzero(self._cells == terrain)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    @property
    def spawn_points(self) -> List[Position]:
        return self.positions_of(Terrain.SPAWN)

    @property
    def destinations(self) -> List[Position]:
        return self.positions_of(Terrain.DESTINATION)

    def rows(self) -> Iterator[List[Terrain]]:
        """Iterate terrain row by row, top to bottom."""
        for row in self._cells:
            yield [Terrain(int(v)) for v in row]

    def to_text(self) -> str:
        return '\n'.join(''.join(t.symbol for t in row) for row in self.rows())

    def __repr__(self) -> str:
        return f"GridMap(width={self.width}, height={self.height})"
