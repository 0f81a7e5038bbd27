from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
import time

import numpy as np

from telemetry.logger import TelemetryLogger

from .commands import Command, InvalidCommandError, apply_command, parse_command
from .config import GameConfig
from .rover import Direction, MoveResult, Rover
from .terrain import Coordinate, TerrainGrid


INSTRUCTIONS = "\n".join(
    [
        "---------------------WELCOME TO ROVER MARS--------------------------------------",
        " if you want to rover go forward press W,",
        " if you want to rover go backwards press S,",
        " if you want to rotate the Rover to the right press D ",
        " if you want to rotate the Rover to the left press A ",
        " press X to quit the game",
    ]
)
INVALID_INPUT_MESSAGE = "Invalid move. Try again."


@dataclass
class TurnReport:
    """What the game exposes to its caller after a turn."""

    position: Coordinate
    direction: Direction
    grid_text: str
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.position[0],
            "y": self.position[1],
            "direction": self.direction.code,
            "message": self.message,
        }


class Game:
    """Turn-based session holding one terrain grid and one rover.

    Parameters
    ----------
    grid : TerrainGrid
        Terrain the rover drives on.
    rover : Rover
        Rover placed on ``grid``.
    telemetry_logger : TelemetryLogger, optional
        When given, one record is written per processed command.
    """

    def __init__(
        self,
        grid: TerrainGrid,
        rover: Rover,
        telemetry_logger: Optional[TelemetryLogger] = None,
    ) -> None:
        if rover.grid is not grid:
            raise ValueError("rover must be placed on the game's grid")
        self.grid = grid
        self.rover = rover
        self.telemetry_logger = telemetry_logger
        self.turns = 0
        self.rejected_moves = 0

    @classmethod
    def from_config(
        cls,
        cfg: GameConfig,
        telemetry_logger: Optional[TelemetryLogger] = None,
    ) -> "Game":
        """Generate (or load) the grid and spawn the rover per config."""
        rng = np.random.default_rng(cfg.seed)
        if cfg.grid.map_path:
            grid = TerrainGrid.from_map_file(cfg.grid.map_path)
        else:
            grid = TerrainGrid.generate(
                size=cfg.grid.size,
                passable_weight=cfg.grid.passable_weight,
                impassable_weight=cfg.grid.impassable_weight,
                rng=rng,
            )
        rover = Rover.spawn(grid, rng=rng, require_passable=cfg.spawn.require_passable)
        return cls(grid, rover, telemetry_logger=telemetry_logger)

    # ------------------------------------------------------------------
    # Turn processing
    # ------------------------------------------------------------------
    def report(self, message: Optional[str] = None) -> TurnReport:
        """Current position, direction and rendered grid."""
        return TurnReport(
            position=self.rover.position,
            direction=self.rover.direction,
            grid_text=self.grid.render(self.rover.position, self.rover.direction.symbol),
            message=message,
        )

    def step(self, command: Command) -> TurnReport:
        """Apply one move/rotate command and report the resulting state."""
        before = self.rover.to_dict()
        result = apply_command(self.rover, command)
        self.turns += 1
        if not result.accepted:
            self.rejected_moves += 1
        self._log_turn(command, result, before)
        return self.report(result.message)

    def _log_turn(self, command: Command, result: MoveResult, before: Dict[str, Any]) -> None:
        if self.telemetry_logger is None:
            return
        self.telemetry_logger.log_turn(
            {
                "turn": self.turns,
                "time": time.time(),
                "command": command.name,
                "accepted": result.accepted,
                "before": before,
                "pose": self.rover.to_dict(),
                "message": result.message,
                "grid_size": self.grid.size,
            }
        )

    # ------------------------------------------------------------------
    # Interactive loop
    # ------------------------------------------------------------------
    def play(
        self,
        read_line: Callable[[], str] = input,
        write: Callable[[str], Any] = print,
    ) -> None:
        """Run the text command loop until ``X`` or end of input."""
        report = self.report()
        while True:
            if report.message:
                write(report.message)
            write(self.rover.describe())
            write(report.grid_text)
            write("")
            write(INSTRUCTIONS)

            try:
                line = read_line()
            except EOFError:
                break

            try:
                command = parse_command(line)
            except InvalidCommandError:
                write(INVALID_INPUT_MESSAGE)
                report = self.report()
                continue

            if command is Command.QUIT:
                break
            report = self.step(command)
