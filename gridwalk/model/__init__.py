"""Model package for the gridwalk simulation."""

from .errors import (
    GridWalkError,
    MapError,
    InvalidMapCharacter,
    EmptyMap,
    OutOfBounds,
    InvalidAgentPosition,
    NoReachableDestination,
)
from .grid import GridMap, Terrain, OFFSETS_4, OFFSETS_8, neighbors
from .pathfinding import (
    shortest_path,
    next_step_toward_nearest_destination,
    distance_to_nearest_destination,
)
from .movement import Strategy, FallbackPolicy, random_step, choose_move
from .state import AgentSnapshot, SimulationState
from .agent import Agent, AgentState
from .engine import SimulationEngine, spawn_positions

__all__ = [
    'GridWalkError',
    'MapError',
    'InvalidMapCharacter',
    'EmptyMap',
    'OutOfBounds',
    'InvalidAgentPosition',
    'NoReachableDestination',
    'GridMap',
    'Terrain',
    'OFFSETS_4',
    'OFFSETS_8',
    'neighbors',
    'shortest_path',
    'next_step_toward_nearest_destination',
    'distance_to_nearest_destination',
    'Strategy',
    'FallbackPolicy',
    'random_step',
    'choose_move',
    'AgentSnapshot',
    'SimulationState',
    'Agent',
    'AgentState',
    'SimulationEngine',
    'spawn_positions',
]
