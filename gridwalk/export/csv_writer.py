"""CSV export functionality for the gridwalk simulation."""

import csv
from pathlib import Path
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..model.grid import GridMap
    from ..model.state import SimulationState


class CSVWriter:
    """
    Appends one row per agent per tick.

    Output format:
        step,agent_id,x,y,state,terrain
        1,1,0,1,moving,empty
        ...

    The terrain column is only filled when a grid is given.
    """

    FIELDNAMES = ['step', 'agent_id', 'x', 'y', 'state', 'terrain']

    def __init__(self, output_path: Path, grid: Optional["GridMap"] = None):
        self.output_path = Path(output_path)
        self.grid = grid
        self.file = None
        self.writer: Optional[csv.DictWriter] = None

    @property
    def is_open(self) -> bool:
        return self.file is not None

    def open(self) -> None:
        """Create parent directories, open the file and write the header."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.file = open(self.output_path, 'w', newline='')
        self.writer = csv.DictWriter(self.file, fieldnames=self.FIELDNAMES)
        self.writer.writeheader()

    def append(self, state: "SimulationState") -> None:
        if not self.is_open:
            self.open()
        for row in state.to_csv_rows():
            row['terrain'] = self._terrain_name(row['x'], row['y'])
            self.writer.writerow(row)
        self.file.flush()

    def _terrain_name(self, x: int, y: int) -> str:
        if self.grid is None:
            return ''
        return self.grid.terrain_at((x, y)).name.lower()

    def close(self) -> None:
        if self.file:
            self.file.close()
            self.file = None
            self.writer = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
