"""Summary report generation for the gridwalk simulation."""

from typing import List, Dict, Optional, TYPE_CHECKING
from pathlib import Path

from ..model.errors import NoReachableDestination
from ..model.pathfinding import distance_to_nearest_destination

if TYPE_CHECKING:
    from ..model.grid import GridMap
    from ..model.state import SimulationState


class Reporter:
    """Accumulates per-tick metrics and formats the end-of-run text report."""

    def __init__(self, config_path: str, seed: Optional[int], strategy: str):
        self.config_path = config_path
        self.seed = seed
        self.strategy = strategy
        self.step_metrics: List[Dict] = []
        self.first_all_arrived: Optional[int] = None
        self.peak_stuck = 0

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per step."""
        self.step_metrics.append(state.metrics.copy())

        total = state.metrics.get('total_agents', 0)
        if (self.first_all_arrived is None and total
                and state.metrics.get('arrived', 0) == total):
            self.first_all_arrived = state.step

        self.peak_stuck = max(self.peak_stuck, int(state.metrics.get('stuck', 0)))

    @staticmethod
    def remaining_distances(grid: "GridMap",
                            state: "SimulationState") -> List[Optional[int]]:
        """Hop count from each agent to its nearest destination, None if unreachable."""
        distances = []
        for agent in state.agents:
            try:
                distances.append(distance_to_nearest_destination(grid, agent.position))
            except NoReachableDestination:
                distances.append(None)
        return distances

    def generate_summary(self, final_state: "SimulationState",
                         grid: "GridMap",
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        metrics = final_state.metrics
        total_agents = int(metrics.get('total_agents', 0))
        arrived = int(metrics.get('arrived', 0))
        arrived_pct = (arrived / total_agents * 100) if total_agents > 0 else 0
        total_moves = int(metrics.get('total_moves', 0))

        distances = self.remaining_distances(grid, final_state)
        reachable = [d for d in distances if d is not None]
        unreachable = len(distances) - len(reachable)

        lines = [
            "",
            "=" * 80,
            "                        GRIDWALK SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Strategy:      {self.strategy}",
            f"Random Seed:   {self.seed if self.seed is not None else 'None (random)'}",
            f"Grid:          {grid.width}x{grid.height}, "
            f"{len(grid.destinations)} destination(s)",
            "",
            "SIMULATION METRICS",
            "-" * 40,
            f"Total Steps:           {final_state.step}",
            f"Agents Arrived:        {arrived} / {total_agents} ({arrived_pct:.1f}%)",
            f"Total Moves:           {total_moves}",
            f"All Arrived At Step:   "
            f"{self.first_all_arrived if self.first_all_arrived is not None else '-'}",
            f"Peak Stuck Agents:     {self.peak_stuck}",
        ]
        if reachable:
            lines.append(f"Max Remaining Hops:    {max(reachable)}")
        if unreachable:
            lines.append(f"Cut Off From Goals:    {unreachable}")

        lines += [
            "",
            "OUTPUT FILES",
            "-" * 40,
        ]

        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'simulation_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
