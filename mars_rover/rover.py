from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .terrain import Coordinate, TerrainGrid


IMPASSABLE_MESSAGE = " <> DANGER <> -> Terrain impassable, please try again <- <> DANGER <>"

# Bounded retries before spawning falls back to enumerating passable cells.
SPAWN_ATTEMPTS = 100


class Direction(Enum):
    """Cardinal heading of the rover.

    ``x`` grows southward (rows) and ``y`` grows eastward (columns), so each
    direction maps to a unit step ``(dx, dy)``.
    """

    NORTH = "N"
    EAST = "E"
    SOUTH = "S"
    WEST = "W"

    @property
    def code(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @property
    def step(self) -> Tuple[int, int]:
        return _STEPS[self]

    def rotate_left(self) -> "Direction":
        return _LEFT_OF[self]

    def rotate_right(self) -> "Direction":
        return _RIGHT_OF[self]

    @classmethod
    def from_code(cls, code: str) -> "Direction":
        return cls(code.strip().upper())


_SYMBOLS = {
    Direction.NORTH: "^",
    Direction.EAST: ">",
    Direction.SOUTH: "v",
    Direction.WEST: "<",
}
_STEPS = {
    Direction.NORTH: (-1, 0),
    Direction.SOUTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.WEST: (0, -1),
}
_LEFT_OF = {
    Direction.NORTH: Direction.WEST,
    Direction.WEST: Direction.SOUTH,
    Direction.SOUTH: Direction.EAST,
    Direction.EAST: Direction.NORTH,
}
_RIGHT_OF = {
    Direction.NORTH: Direction.EAST,
    Direction.EAST: Direction.SOUTH,
    Direction.SOUTH: Direction.WEST,
    Direction.WEST: Direction.NORTH,
}


def check_limit(position: int, size: int) -> int:
    """Wrap a coordinate component that overshot the grid by one step.

    Not a general modulo: only ``-1`` and ``size`` are brought back in range.
    """
    if position >= size:
        return 0
    if position < 0:
        return size - 1
    return position


@dataclass
class RoverState:
    """Snapshot of rover pose on the grid.

    Attributes
    ----------
    x : int
        Row index.
    y : int
        Column index.
    direction : Direction
        Current heading.
    """

    x: int
    y: int
    direction: Direction

    @property
    def position(self) -> Coordinate:
        return (self.x, self.y)


@dataclass
class MoveResult:
    """Outcome of a single rover command."""

    accepted: bool
    position: Coordinate
    direction: Direction
    message: Optional[str] = None


class Rover:
    """Rover moving one cell at a time on a toroidal terrain grid.

    The rover queries the grid before every move and never lands on
    impassable terrain; a rejected move leaves its state unchanged.
    """

    def __init__(
        self,
        grid: TerrainGrid,
        x: int,
        y: int,
        direction: Direction = Direction.NORTH,
    ) -> None:
        self.grid = grid
        if not (0 <= x < grid.size and 0 <= y < grid.size):
            raise IndexError(f"rover position ({x}, {y}) outside grid of size {grid.size}")
        self.state = RoverState(x=int(x), y=int(y), direction=direction)

    @classmethod
    def spawn(
        cls,
        grid: TerrainGrid,
        rng: Optional[np.random.Generator] = None,
        require_passable: bool = False,
        direction: Direction = Direction.NORTH,
    ) -> "Rover":
        """Place a rover at a uniformly random cell.

        With ``require_passable`` the cell is resampled until it is passable;
        otherwise any cell may be chosen, impassable ones included.
        """
        rng = rng or np.random.default_rng()
        size = grid.size

        if not require_passable:
            x, y = (int(v) for v in rng.integers(0, size, size=2))
            return cls(grid, x, y, direction)

        for _ in range(SPAWN_ATTEMPTS):
            x, y = (int(v) for v in rng.integers(0, size, size=2))
            if not grid.is_impassable(x, y):
                return cls(grid, x, y, direction)

        candidates = grid.passable_cells()
        if candidates:
            x, y = candidates[int(rng.integers(0, len(candidates)))]
        else:
            # Fully blocked grid: nowhere valid to stand.
            x, y = (int(v) for v in rng.integers(0, size, size=2))
        return cls(grid, x, y, direction)

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    @property
    def x(self) -> int:
        return self.state.x

    @property
    def y(self) -> int:
        return self.state.y

    @property
    def position(self) -> Coordinate:
        return self.state.position

    @property
    def direction(self) -> Direction:
        return self.state.direction

    def get_state(self) -> RoverState:
        """Return a copy of current state."""
        s = self.state
        return RoverState(x=s.x, y=s.y, direction=s.direction)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize current pose to a dict for telemetry."""
        return {"x": self.x, "y": self.y, "direction": self.direction.code}

    def describe(self) -> str:
        return f"Rover is at coordinates {self.x}, {self.y} looking to -> {self.direction.code}"

    # ------------------------------------------------------------------
    # Movement
    # ------------------------------------------------------------------
    def _neighbor(self, sign: int) -> Coordinate:
        dx, dy = self.direction.step
        size = self.grid.size
        return (
            check_limit(self.x + sign * dx, size),
            check_limit(self.y + sign * dy, size),
        )

    def next_forward_position(self) -> Coordinate:
        return self._neighbor(1)

    def next_backward_position(self) -> Coordinate:
        return self._neighbor(-1)

    def move_forward(self) -> MoveResult:
        return self._move(self.next_forward_position())

    def move_backward(self) -> MoveResult:
        return self._move(self.next_backward_position())

    def _move(self, candidate: Coordinate) -> MoveResult:
        nx, ny = candidate
        if self.grid.is_impassable(nx, ny):
            return self._result(accepted=False, message=IMPASSABLE_MESSAGE)
        self.state = RoverState(x=nx, y=ny, direction=self.direction)
        return self._result(accepted=True)

    # ------------------------------------------------------------------
    # Rotation
    # ------------------------------------------------------------------
    def rotate_left(self) -> MoveResult:
        self.state = RoverState(x=self.x, y=self.y, direction=self.direction.rotate_left())
        return self._result(accepted=True)

    def rotate_right(self) -> MoveResult:
        self.state = RoverState(x=self.x, y=self.y, direction=self.direction.rotate_right())
        return self._result(accepted=True)

    def _result(self, accepted: bool, message: Optional[str] = None) -> MoveResult:
        return MoveResult(
            accepted=accepted,
            position=self.position,
            direction=self.direction,
            message=message,
        )
