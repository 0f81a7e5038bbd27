from __future__ import annotations

from typing import Callable, Iterable, Tuple

import numpy as np
import pytest

from mars_rover.terrain import TerrainGrid


@pytest.fixture
def make_grid() -> Callable[..., TerrainGrid]:
    """Factory for grids that are passable except for the listed cells."""

    def _make(size: int = 15, blocked: Iterable[Tuple[int, int]] = ()) -> TerrainGrid:
        cells = np.zeros((size, size), dtype=bool)
        for x, y in blocked:
            cells[x, y] = True
        return TerrainGrid(cells)

    return _make
