"""Grid world agent simulation with random-walk and shortest-path movement."""

from .model import GridMap, SimulationEngine, Strategy, Terrain

__all__ = ['GridMap', 'SimulationEngine', 'Strategy', 'Terrain']
