"""State snapshot dataclasses for the gridwalk simulation."""

from dataclasses import dataclass
from typing import Dict, List, Tuple


@dataclass(frozen=True)
class AgentSnapshot:
    """Immutable snapshot of an agent's state at a given time step."""
    agent_id: int
    x: int
    y: int
    state: str  # "moving", "waiting", "arrived", "stuck"

    @property
    def position(self) -> Tuple[int, int]:
        return (self.x, self.y)


@dataclass
class SimulationState:
    """Complete snapshot of simulation state at a given time step."""
    step: int
    agents: List[AgentSnapshot]
    metrics: Dict[str, float]   # arrived, stuck, distinct cells, etc.

    @property
    def positions(self) -> List[Tuple[int, int]]:
        return [a.position for a in self.agents]

    def to_csv_rows(self) -> List[Dict]:
        """Convert to CSV-compatible format."""
        return [
            {
                "step": self.step,
                "agent_id": a.agent_id,
                "x": a.x,
                "y": a.y,
                "state": a.state
            }
            for a in self.agents
        ]
