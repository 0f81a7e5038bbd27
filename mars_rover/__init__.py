"""
Top-level package for the Mars rover grid game.

Components:
- terrain: toroidal grid of passable/impassable cells, text rendering, JSON maps
- rover: position/heading state, wraparound, movement and rotation
- commands: W/A/S/D/X command set and dispatch onto the rover
- game: turn loop tying grid, rover and telemetry together
- config: YAML-backed game configuration
- render: pygame-based grid view
"""

from .terrain import Terrain, TerrainGrid
from .rover import Direction, MoveResult, Rover, RoverState, check_limit
from .commands import Command, InvalidCommandError, apply_command, parse_command
from .config import GameConfig, load_config
from .game import Game, TurnReport

__all__ = [
    "Terrain",
    "TerrainGrid",
    "Direction",
    "MoveResult",
    "Rover",
    "RoverState",
    "check_limit",
    "Command",
    "InvalidCommandError",
    "apply_command",
    "parse_command",
    "GameConfig",
    "load_config",
    "Game",
    "TurnReport",
]
