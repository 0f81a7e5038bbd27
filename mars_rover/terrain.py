from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import json
import os

import numpy as np


Coordinate = Tuple[int, int]

MIN_GRID_SIZE = 11


class Terrain(Enum):
    """Binary terrain classification of a grid cell."""

    PASSABLE = "-"
    IMPASSABLE = "#"

    @property
    def char(self) -> str:
        return self.value


class TerrainGrid:
    """Square toroidal grid of passable/impassable terrain.

    Cells are addressed as ``(x, y)`` where ``x`` is the row and ``y`` the
    column, both in ``[0, size)``. Stored terrain never changes after
    construction; the rover is only overlaid when rendering.

    Parameters
    ----------
    impassable : np.ndarray
        Square boolean array, ``True`` where the terrain is impassable.
    """

    def __init__(self, impassable: np.ndarray) -> None:
        cells = np.asarray(impassable, dtype=bool)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ValueError(f"terrain must be a square 2D array, got shape {cells.shape}")
        if cells.shape[0] < MIN_GRID_SIZE:
            raise ValueError(f"grid size must be > {MIN_GRID_SIZE - 1}, got {cells.shape[0]}")
        self._cells = cells.copy()
        self._cells.setflags(write=False)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def generate(
        cls,
        size: int,
        passable_weight: int = 4,
        impassable_weight: int = 1,
        rng: Optional[np.random.Generator] = None,
    ) -> "TerrainGrid":
        """Randomly generate a size x size grid.

        Each cell is drawn independently from a pool of ``passable_weight``
        passable slots and ``impassable_weight`` impassable slots.
        """
        if size < MIN_GRID_SIZE:
            raise ValueError(f"grid size must be > {MIN_GRID_SIZE - 1}, got {size}")
        if passable_weight < 0 or impassable_weight < 0:
            raise ValueError("terrain weights must be non-negative")
        total = passable_weight + impassable_weight
        if total <= 0:
            raise ValueError("at least one terrain weight must be positive")

        rng = rng or np.random.default_rng()
        draws = rng.integers(0, total, size=(size, size))
        return cls(draws >= passable_weight)

    @classmethod
    def from_rows(cls, rows: List[str]) -> "TerrainGrid":
        """Build a grid from text rows of ``-`` and ``#`` characters."""
        chars = {t.char: t for t in Terrain}
        cells = []
        for i, row in enumerate(rows):
            unknown = set(row) - set(chars)
            if unknown:
                raise ValueError(f"row {i} contains unknown terrain chars {sorted(unknown)}")
            cells.append([chars[c] is Terrain.IMPASSABLE for c in row])
        return cls(np.array(cells, dtype=bool))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TerrainGrid":
        """Create grid from a dict ``{"size": N, "rows": [...]}``."""
        rows = list(data["rows"])
        size = int(data.get("size", len(rows)))
        if size != len(rows):
            raise ValueError(f"map declares size {size} but has {len(rows)} rows")
        return cls.from_rows(rows)

    @classmethod
    def from_map_file(cls, path: str) -> "TerrainGrid":
        """Create grid from a JSON map file."""
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize grid to a Python dict."""
        return {"size": self.size, "rows": self.rows()}

    def save(self, path: str) -> None:
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def size(self) -> int:
        return int(self._cells.shape[0])

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the impassable mask."""
        return self._cells

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise IndexError(f"cell ({x}, {y}) outside grid of size {self.size}")

    def is_impassable(self, x: int, y: int) -> bool:
        """Return True if the cell at (x, y) is impassable.

        Coordinates must already be wrapped into ``[0, size)``.
        """
        self._check_bounds(x, y)
        return bool(self._cells[x, y])

    def terrain_at(self, x: int, y: int) -> Terrain:
        return Terrain.IMPASSABLE if self.is_impassable(x, y) else Terrain.PASSABLE

    def passable_cells(self) -> List[Coordinate]:
        return [(int(x), int(y)) for x, y in np.argwhere(~self._cells)]

    def passable_ratio(self) -> float:
        return float(np.count_nonzero(~self._cells)) / float(self._cells.size)

    # ------------------------------------------------------------------
    # Text rendering
    # ------------------------------------------------------------------
    def rows(self) -> List[str]:
        """Terrain rows as strings of terrain chars, without the rover."""
        passable = Terrain.PASSABLE.char
        impassable = Terrain.IMPASSABLE.char
        return ["".join(impassable if c else passable for c in row) for row in self._cells]

    def render(self, rover_position: Coordinate, rover_symbol: str) -> str:
        """Render the grid as text with the rover symbol overlaid.

        The first line holds column indices; each following line is one row
        prefixed with its index. Stored terrain is left untouched.
        """
        rx, ry = rover_position
        self._check_bounds(rx, ry)

        lines = ["      " + "  ".join(f"{i:>2}" for i in range(self.size))]
        for x, row in enumerate(self.rows()):
            chars = list(row)
            if x == rx:
                chars[ry] = rover_symbol
            lines.append(f"{x:>2}-> | " + "".join(f"{c} | " for c in chars))
        return "\n".join(lines)
