from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import yaml

from .terrain import MIN_GRID_SIZE


RENDER_MODES = ("text", "window")


@dataclass
class GridConfig:
    size: int = 15
    passable_weight: int = 4
    impassable_weight: int = 1
    map_path: Optional[str] = None


@dataclass
class SpawnConfig:
    require_passable: bool = False


@dataclass
class RenderConfig:
    mode: str = "text"
    cell_size: int = 40
    fps: int = 30


@dataclass
class LoggingConfig:
    telemetry_path: Optional[str] = None


@dataclass
class GameConfig:
    """Top-level game configuration, usually read from ``configs/game.yaml``."""

    seed: Optional[int] = None
    grid: GridConfig = field(default_factory=GridConfig)
    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GameConfig":
        """Build a config from a parsed YAML dict; missing keys use defaults."""
        data = data or {}
        if not isinstance(data, dict):
            raise ValueError(f"config must be a mapping, got {type(data).__name__}")
        grid_cfg = _section(data, "grid")
        spawn_cfg = _section(data, "spawn")
        render_cfg = _section(data, "render")
        logging_cfg = _section(data, "logging")

        require_passable = spawn_cfg.get("require_passable", False)
        if not isinstance(require_passable, bool):
            raise ValueError(f"spawn.require_passable must be true or false, got {require_passable!r}")

        seed = data.get("seed")
        map_path = grid_cfg.get("map_path")
        telemetry_path = logging_cfg.get("telemetry_path")

        cfg = cls(
            seed=None if seed is None else int(seed),
            grid=GridConfig(
                size=int(grid_cfg.get("size", 15)),
                passable_weight=int(grid_cfg.get("passable_weight", 4)),
                impassable_weight=int(grid_cfg.get("impassable_weight", 1)),
                map_path=None if map_path is None else str(map_path),
            ),
            spawn=SpawnConfig(
                require_passable=require_passable,
            ),
            render=RenderConfig(
                mode=str(render_cfg.get("mode", "text")),
                cell_size=int(render_cfg.get("cell_size", 40)),
                fps=int(render_cfg.get("fps", 30)),
            ),
            logging=LoggingConfig(
                telemetry_path=None if telemetry_path is None else str(telemetry_path),
            ),
        )
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if self.grid.map_path is None and self.grid.size < MIN_GRID_SIZE:
            raise ValueError(f"grid.size must be > {MIN_GRID_SIZE - 1}, got {self.grid.size}")
        if self.grid.passable_weight < 0 or self.grid.impassable_weight < 0:
            raise ValueError("grid weights must be non-negative")
        if self.grid.passable_weight + self.grid.impassable_weight <= 0:
            raise ValueError("at least one grid weight must be positive")
        if self.render.mode not in RENDER_MODES:
            raise ValueError(f"render.mode must be one of {RENDER_MODES}, got {self.render.mode!r}")
        if self.render.cell_size <= 0 or self.render.fps <= 0:
            raise ValueError("render.cell_size and render.fps must be positive")


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"config section {name!r} must be a mapping, got {type(section).__name__}")
    return section


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_config(path: str) -> GameConfig:
    """Read and validate a game config YAML file."""
    return GameConfig.from_dict(load_yaml(path))
