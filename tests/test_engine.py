import logging

import numpy as np
import pytest

from gridwalk.config import AgentConfig, MapConfig, SimulationConfig
from gridwalk.model.agent import AgentState
from gridwalk.model.engine import SimulationEngine, spawn_positions
from gridwalk.model.errors import InvalidAgentPosition, OutOfBounds
from gridwalk.model.grid import GridMap, Terrain
from gridwalk.model.movement import FallbackPolicy, Strategy

ROOMS = "\n".join([
    "##########",
    "#^   #  $#",
    "#    #   #",
    "#        #",
    "#^   #  $#",
    "##########",
])


def test_end_to_end_shortest_path(small_map):
    engine = SimulationEngine(small_map, [(0, 0)], Strategy.SHORTEST_PATH)
    state = engine.advance()
    assert engine.positions == ((1, 0),)
    assert state.step == 1
    assert state.agents[0].state == "moving"

    engine.advance()
    engine.advance()
    assert engine.positions == ((2, 1),)
    assert engine.is_finished()

    for _ in range(3):
        state = engine.advance()
        assert engine.positions == ((2, 1),)
    assert state.agents[0].state == "arrived"
    assert engine.agents[0].steps_taken == 3


def test_agents_move_independently(corridor):
    engine = SimulationEngine(corridor, [(3, 0), (5, 3), (3, 0)])
    engine.advance()
    assert engine.positions == ((3, 1), (6, 3), (3, 1))
    assert [a.id for a in engine.agents] == [1, 2, 3]


def test_agents_share_cells_without_collision(corridor):
    engine = SimulationEngine(corridor, [(6, 5), (6, 4)])
    for _ in range(2):
        engine.advance()
    assert engine.positions == ((6, 6), (6, 6))
    assert engine.snapshot().metrics['distinct_cells'] == 1


def test_all_reach_destination(corridor):
    engine = SimulationEngine(corridor, [(3, 0), (5, 3)])
    while not engine.is_finished(max_steps=100):
        engine.advance()
    assert engine.current_step == 9
    assert engine.all_arrived()
    assert engine.get_summary()['agents_arrived'] == 2


def test_start_on_wall_rejected(small_map):
    with pytest.raises(InvalidAgentPosition) as excinfo:
        SimulationEngine(small_map, [(0, 0), (2, 0)])
    assert excinfo.value.agent_id == 2
    assert excinfo.value.position == (2, 0)


def test_start_out_of_bounds_rejected(small_map):
    with pytest.raises(OutOfBounds):
        SimulationEngine(small_map, [(3, 0)])


def test_start_on_destination_is_arrived(small_map):
    engine = SimulationEngine(small_map, [(2, 1)])
    assert engine.agents[0].state is AgentState.ARRIVED
    assert engine.is_finished()


def test_stuck_agent_does_not_stop_others():
    grid = GridMap.from_text("#####\n#^# $\n#####")
    engine = SimulationEngine(grid, [(1, 1), (3, 1)],
                              fallback=FallbackPolicy.STAY)
    state = engine.advance()
    assert engine.positions == ((1, 1), (4, 1))
    assert [a.state for a in state.agents] == ["stuck", "arrived"]
    assert state.metrics['stuck'] == 1
    assert not engine.is_finished()
    assert engine.is_finished(max_steps=1)


def test_stuck_agent_falls_back_to_random_walk():
    grid = GridMap.from_text("#######\n#^  #$#\n#######")
    engine = SimulationEngine(grid, [(1, 1)], rng=np.random.default_rng(0),
                              fallback=FallbackPolicy.RANDOM)
    engine.advance()
    assert engine.positions == ((2, 1),)
    assert engine.agents[0].state is AgentState.STUCK

    for _ in range(30):
        engine.advance()
        assert grid.terrain_at(engine.positions[0]) == Terrain.EMPTY
    assert engine.agents[0].stuck_ticks == 31


def test_stuck_warning_logged_once(caplog):
    grid = GridMap.from_text("^#$")
    engine = SimulationEngine(grid, [(0, 0)])
    with caplog.at_level(logging.WARNING, logger="gridwalk.model.engine"):
        for _ in range(5):
            engine.advance()
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "cannot reach" in warnings[0].getMessage()


def test_random_strategy_stays_off_walls():
    grid = GridMap.from_text(ROOMS)
    engine = SimulationEngine(grid, grid.spawn_points, Strategy.RANDOM,
                              rng=np.random.default_rng(3))
    for _ in range(200):
        engine.advance()
        for pos in engine.positions:
            assert grid.in_bounds(pos)
            assert grid.terrain_at(pos) != Terrain.WALL
    assert not engine.is_finished()
    assert engine.is_finished(max_steps=200)


def test_random_strategy_reproducible():
    grid = GridMap.from_text(ROOMS)

    def run(seed):
        engine = SimulationEngine(grid, grid.spawn_points, Strategy.RANDOM,
                                  rng=np.random.default_rng(seed))
        return [engine.advance().positions for _ in range(25)]

    assert run(11) == run(11)


def test_spawn_positions_cycle_over_spawn_points():
    grid = GridMap.from_text(ROOMS)
    assert spawn_positions(grid) == [(1, 1), (1, 4)]
    assert spawn_positions(grid, 3) == [(1, 1), (1, 4), (1, 1)]
    assert spawn_positions(grid, 3, [(2, 2)]) == [(2, 2)]


def test_spawn_positions_need_spawns_or_explicit():
    grid = GridMap.from_text("  $")
    with pytest.raises(ValueError):
        spawn_positions(grid)
    with pytest.raises(ValueError):
        spawn_positions(GridMap.from_text(ROOMS), 0)


def test_from_config():
    config = SimulationConfig(
        map=MapConfig(text=ROOMS),
        agents=AgentConfig(count=3),
        strategy=Strategy.SHORTEST_PATH,
        seed=1,
    )
    engine = SimulationEngine.from_config(config)
    assert engine.positions == ((1, 1), (1, 4), (1, 1))
    while not engine.is_finished(config.max_steps):
        engine.advance()
    assert engine.all_arrived()
    assert set(engine.positions) <= set(engine.grid.destinations)
