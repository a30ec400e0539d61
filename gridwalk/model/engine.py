"""Simulation engine for gridwalk."""

import logging
from typing import List, Dict, Tuple, Optional, Sequence, TYPE_CHECKING

import numpy as np

from .grid import GridMap, Position, Terrain
from .agent import Agent, AgentState
from .errors import InvalidAgentPosition, NoReachableDestination, OutOfBounds
from .movement import FallbackPolicy, Strategy, choose_move, random_step
from .state import SimulationState, AgentSnapshot

if TYPE_CHECKING:
    from ..config import SimulationConfig

logger = logging.getLogger(__name__)


class SimulationEngine:
    """
    Owns the grid and the ordered agent set; advances every agent once per tick.

    The engine performs no I/O and does not schedule ticks. A driver calls
    advance() per tick and reads grid/positions between calls.
    """

    def __init__(self, grid: GridMap,
                 starts: Sequence[Position],
                 strategy: Strategy = Strategy.SHORTEST_PATH,
                 rng: Optional[np.random.Generator] = None,
                 fallback: FallbackPolicy = FallbackPolicy.RANDOM):
        self._grid = grid
        self.strategy = strategy
        self.fallback = fallback
        self.rng = rng if rng is not None else np.random.default_rng()
        self.current_step = 0

        self._agents: List[Agent] = []
        for agent_id, pos in enumerate(starts, start=1):
            self._agents.append(self._make_agent(agent_id, pos))

    @classmethod
    def from_config(cls, config: "SimulationConfig") -> "SimulationEngine":
        """Build grid, agents and random generator from a loaded config."""
        grid = config.map.load()
        starts = spawn_positions(grid, config.agents.count,
                                 config.agents.positions)
        return cls(
            grid,
            starts,
            strategy=config.strategy,
            rng=np.random.default_rng(config.seed),
            fallback=config.agents.fallback,
        )

    def _make_agent(self, agent_id: int, pos: Position) -> Agent:
        pos = (int(pos[0]), int(pos[1]))
        if not self._grid.in_bounds(pos):
            raise OutOfBounds(pos, self._grid.width, self._grid.height)
        terrain = self._grid.terrain_at(pos)
        if terrain == Terrain.WALL:
            raise InvalidAgentPosition(agent_id, pos)
        agent = Agent(agent_id, pos)
        if terrain == Terrain.DESTINATION:
            agent.state = AgentState.ARRIVED
        return agent

    @property
    def grid(self) -> GridMap:
        return self._grid

    @property
    def agents(self) -> Tuple[Agent, ...]:
        return tuple(self._agents)

    @property
    def positions(self) -> Tuple[Position, ...]:
        """Current agent positions in stable agent order."""
        return tuple(a.position for a in self._agents)

    def advance(self) -> SimulationState:
        """
        Execute one tick: move every agent once, in agent order.

        A shortest-path agent with no reachable destination is handled by the
        fallback policy; the rest of the agents still move.
        """
        self.current_step += 1

        for agent in self._agents:
            stuck = False
            try:
                new_pos = choose_move(self.strategy, self._grid,
                                      agent.position, self.rng)
            except NoReachableDestination:
                stuck = True
                if agent.stuck_ticks == 0:
                    logger.warning("Agent %d at %s cannot reach any destination; "
                                   "falling back to %s", agent.id, agent.position,
                                   self.fallback.value)
                if self.fallback is FallbackPolicy.RANDOM:
                    new_pos = random_step(self._grid, agent.position, self.rng)
                else:
                    new_pos = agent.position

            at_destination = self._grid.terrain_at(new_pos) == Terrain.DESTINATION
            agent.update_state(new_pos, at_destination, stuck)

        logger.debug("Step %d: positions %s", self.current_step, self.positions)
        return self._create_state_snapshot()

    def _create_state_snapshot(self) -> SimulationState:
        """Create immutable snapshot of current simulation state."""
        agent_snapshots = [
            AgentSnapshot(
                agent_id=a.id,
                x=a.position[0],
                y=a.position[1],
                state=a.state.value
            )
            for a in self._agents
        ]

        arrived = self._count(AgentState.ARRIVED)
        metrics = {
            'total_agents': len(self._agents),
            'arrived': arrived,
            'stuck': self._count(AgentState.STUCK),
            'active_agents': len(self._agents) - arrived,
            'distinct_cells': len(set(self.positions)),
            'total_moves': sum(a.steps_taken for a in self._agents),
        }

        return SimulationState(
            step=self.current_step,
            agents=agent_snapshots,
            metrics=metrics
        )

    def snapshot(self) -> SimulationState:
        """Snapshot of the current state without advancing."""
        return self._create_state_snapshot()

    def _count(self, state: AgentState) -> int:
        return sum(1 for a in self._agents if a.state == state)

    def all_arrived(self) -> bool:
        return all(self._grid.terrain_at(p) == Terrain.DESTINATION
                   for p in self.positions)

    def is_finished(self, max_steps: Optional[int] = None) -> bool:
        """
        Check if a driver should stop ticking.

        Random walkers never settle, so only max_steps ends a random run.
        """
        if max_steps is not None and self.current_step >= max_steps:
            return True
        return self.strategy is Strategy.SHORTEST_PATH and self.all_arrived()

    def get_summary(self) -> Dict:
        """Get summary statistics for the simulation."""
        return {
            'total_steps': self.current_step,
            'agents_total': len(self._agents),
            'agents_arrived': self._count(AgentState.ARRIVED),
            'agents_stuck': sum(1 for a in self._agents if a.stuck_ticks > 0),
            'total_moves': sum(a.steps_taken for a in self._agents),
            'avg_moves': (sum(a.steps_taken for a in self._agents) / len(self._agents)
                          if self._agents else 0),
        }


def spawn_positions(grid: GridMap, count: Optional[int] = None,
                    explicit: Optional[Sequence[Position]] = None) -> List[Position]:
    """
    Starting cells for agents.

    Explicit positions win. Otherwise agents are placed on the map's spawn
    points in row-major order, cycling when there are more agents than spawn
    points; count defaults to one agent per spawn point.
    """
    if explicit:
        return [(int(x), int(y)) for x, y in explicit]

    spawns = grid.spawn_points
    if not spawns:
        raise ValueError("Map has no spawn points and no agent positions were given")
    if count is None:
        count = len(spawns)
    if count < 1:
        raise ValueError(f"Agent count must be positive, got {count}")
    return [spawns[i % len(spawns)] for i in range(count)]
