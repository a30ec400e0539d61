"""Plain-text rendering of the grid and agents."""

from typing import Iterable, Tuple

from ..model.grid import GridMap

AGENT_SYMBOL = '*'


def render_text(grid: GridMap, positions: Iterable[Tuple[int, int]],
                agent_symbol: str = AGENT_SYMBOL) -> str:
    """
    Draw the grid as text, one line per row, with agents overlaid.

    Terrain uses the map glyphs (blank, '#', '^', '$'). Positions outside the
    grid are ignored.
    """
    canvas = [[t.symbol for t in row] for row in grid.rows()]
    for x, y in positions:
        if grid.in_bounds((x, y)):
            canvas[y][x] = agent_symbol
    return '\n'.join(''.join(row) for row in canvas)
