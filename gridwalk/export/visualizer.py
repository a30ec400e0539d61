"""PNG and GIF rendering for the gridwalk simulation."""

import io
from pathlib import Path
from typing import List, TYPE_CHECKING

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgb
from PIL import Image

from ..model.grid import Terrain

if TYPE_CHECKING:
    from ..model.grid import GridMap
    from ..model.state import SimulationState


class Visualizer:
    """
    Draws terrain and agents with matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        'wall': '#2C3E50',         # Dark blue-gray
        'floor': '#ECF0F1',        # Light gray
        'spawn': '#A9CCE3',        # Pale blue
        'destination': '#F39C12',  # Orange
        'moving': '#3498DB',       # Blue
        'waiting': '#7F8C8D',      # Gray
        'arrived': '#27AE60',      # Green
        'stuck': '#E74C3C',        # Red
    }

    _TERRAIN_COLORS = {
        Terrain.EMPTY: 'floor',
        Terrain.WALL: 'wall',
        Terrain.SPAWN: 'spawn',
        Terrain.DESTINATION: 'destination',
    }

    def __init__(self, grid: "GridMap"):
        self.grid = grid
        self.width = grid.width
        self.height = grid.height
        self.frames: List[Image.Image] = []
        self._base = self._terrain_image()

    def _terrain_image(self) -> np.ndarray:
        base = np.ones((self.height, self.width, 3))
        for terrain, key in self._TERRAIN_COLORS.items():
            base[self.grid.cells == terrain] = to_rgb(self.COLORS[key])
        return base

    def _create_figure(self, state: "SimulationState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        aspect = self.width / self.height
        fig_height = 6
        fig_width = max(8, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        # Row 0 is the first map line, so draw with origin at the top
        ax.imshow(self._base, origin='upper', aspect='equal',
                  extent=[-0.5, self.width - 0.5, self.height - 0.5, -0.5])

        for agent in state.agents:
            color = self.COLORS.get(agent.state, self.COLORS['waiting'])
            ax.plot(agent.x, agent.y, 'o', color=color,
                    markersize=7, markeredgecolor='white', markeredgewidth=0.5)

        ax.set_title(f'Step {state.step} | Agents: {len(state.agents)} | '
                     f'Arrived: {int(state.metrics.get("arrived", 0))}')
        ax.set_xlabel('X')
        ax.set_ylabel('Y')
        ax.set_xlim(-0.5, self.width - 0.5)
        ax.set_ylim(self.height - 0.5, -0.5)

        legend_elements = [
            plt.Line2D([0], [0], marker='o', color='w', label=name.capitalize(),
                       markerfacecolor=self.COLORS[name], markersize=8)
            for name in ('moving', 'waiting', 'arrived', 'stuck')
        ]
        legend_elements.append(
            plt.Line2D([0], [0], marker='s', color='w', label='Destination',
                       markerfacecolor=self.COLORS['destination'], markersize=8))
        ax.legend(handles=legend_elements, loc='upper right', fontsize=8)

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 4) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=int(1000 / fps),
            loop=0
        )
