"""Configuration dataclasses and YAML loader for the gridwalk simulation."""

from dataclasses import dataclass, field
from typing import List, Tuple, Optional
from pathlib import Path
import yaml

from .model.grid import GridMap
from .model.movement import FallbackPolicy, Strategy


@dataclass
class MapConfig:
    text: Optional[str] = None
    path: Optional[Path] = None

    def load(self) -> GridMap:
        """Parse the inline map text, or the map file if no text is given."""
        if self.text is not None:
            return GridMap.from_text(self.text)
        if self.path is not None:
            return GridMap.from_file(self.path)
        raise ValueError("Map config needs either 'text' or 'path'")


@dataclass
class AgentConfig:
    count: Optional[int] = None  # default: one per spawn point
    positions: List[Tuple[int, int]] = field(default_factory=list)
    fallback: FallbackPolicy = FallbackPolicy.RANDOM


@dataclass
class SimulationConfig:
    map: MapConfig
    agents: AgentConfig
    strategy: Strategy = Strategy.SHORTEST_PATH
    max_steps: int = 100
    tick_interval: float = 0.0  # seconds between ticks when driven live

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    live: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def _parse_map(map_raw: dict, base_dir: Path) -> MapConfig:
    """Parse map section; relative paths resolve against the config file."""
    if 'text' in map_raw:
        return MapConfig(text=map_raw['text'])
    if 'path' in map_raw:
        path = Path(map_raw['path'])
        if not path.is_absolute():
            path = base_dir / path
        return MapConfig(path=path)
    raise ValueError("Map section needs either 'text' or 'path'")


def _as_number(value, name: str, kind=int):
    """Convert a scalar YAML value, reporting bad types as ValueError."""
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be a number, got {value!r}")
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{name}' must be a number, got {value!r}") from None


def _parse_agents(agents_raw: dict) -> AgentConfig:
    """Parse agent section from raw YAML data."""
    positions = []
    for p in agents_raw.get('positions', []) or []:
        if not isinstance(p, (list, tuple)) or len(p) != 2:
            raise ValueError(f"Agent position must be [x, y], got {p}")
        positions.append((_as_number(p[0], 'positions'),
                          _as_number(p[1], 'positions')))

    fallback_raw = agents_raw.get('fallback', FallbackPolicy.RANDOM.value)
    try:
        fallback = FallbackPolicy(fallback_raw)
    except ValueError:
        raise ValueError(f"Unknown fallback policy: {fallback_raw}") from None

    count = agents_raw.get('count')
    if count is not None:
        count = _as_number(count, 'count')

    return AgentConfig(
        count=count,
        positions=positions,
        fallback=fallback
    )


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    config_path = Path(config_path)
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if 'map' not in raw:
        raise ValueError("Configuration is missing the 'map' section")
    map_config = _parse_map(raw['map'], config_path.parent)
    agents = _parse_agents(raw.get('agents', {}) or {})

    sim_raw = raw.get('simulation', {}) or {}
    strategy = Strategy.parse(sim_raw.get('strategy', Strategy.SHORTEST_PATH.value))

    # Parse export config (optional)
    export_raw = raw.get('export', {}) or {}

    return SimulationConfig(
        map=map_config,
        agents=agents,
        strategy=strategy,
        max_steps=_as_number(sim_raw.get('max_steps', 100), 'max_steps'),
        tick_interval=_as_number(sim_raw.get('tick_interval', 0.0),
                                 'tick_interval', float),
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        seed=raw.get('seed')
    )
