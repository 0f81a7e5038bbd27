from __future__ import annotations

from enum import Enum

from .rover import MoveResult, Rover


class InvalidCommandError(ValueError):
    """Raised when a line of input does not name a rover command."""


class Command(Enum):
    """Closed set of commands accepted by the game loop, keyed by letter."""

    FORWARD = "W"
    ROTATE_LEFT = "A"
    BACKWARD = "S"
    ROTATE_RIGHT = "D"
    QUIT = "X"

    @property
    def key(self) -> str:
        return self.value


def parse_command(text: str) -> Command:
    """Map a line of user input to a Command.

    Surrounding whitespace is ignored and letters are case-insensitive.
    """
    key = (text or "").strip().upper()
    try:
        return Command(key)
    except ValueError:
        raise InvalidCommandError(f"invalid command {text!r}") from None


def apply_command(rover: Rover, command: Command) -> MoveResult:
    """Apply a movement or rotation command to the rover."""
    if command is Command.FORWARD:
        return rover.move_forward()
    if command is Command.BACKWARD:
        return rover.move_backward()
    if command is Command.ROTATE_LEFT:
        return rover.rotate_left()
    if command is Command.ROTATE_RIGHT:
        return rover.rotate_right()
    if command is Command.QUIT:
        raise ValueError("QUIT is handled by the game loop, not the rover")
    raise ValueError(f"unknown command {command!r}")
