"""
Resource field: renewable grass biomass on a toroidal grid.

Every cell holds a float in [GRASS_FLOOR, grass_max]. Writes are floored
at zero; regrowth is capped at grass_max. Agents read and deplete cells
during their tick; regrowth runs afterwards as one vectorised pass, so
a cell's regrowth in tick t never depends on grazing in tick t.
"""

import numpy as np

from .data_types import GridConfig
from .constants import GRASS_FLOOR


# Offsets of the 3x3 grazing block, row by row
_BLOCK_OFFSETS = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1)]


class ResourceField:
    """
    Grass density per cell, indexed [y, x].

    Consumers outside the simulation get read-only access through
    values() and colors(); only the step engine mutates the field.
    """

    def __init__(self, grid: GridConfig):
        self.width = grid.width
        self.height = grid.height
        self.grass_max = float(grid.grass_max)
        self.grass_initial = float(grid.grass_initial)
        self.regrowth_rate = float(grid.regrowth_rate)
        self.trample = float(grid.trample)
        self.center_multiplier = float(grid.center_multiplier)

        self._grass = np.empty((self.height, self.width), dtype=np.float64)
        self.init()

    def init(self):
        """Reset every cell to full growth"""
        self._grass.fill(self.grass_initial)

    def regrow(self):
        """Add regrowth_rate to every cell, capped at grass_max"""
        np.minimum(self._grass + self.regrowth_rate, self.grass_max, out=self._grass)

    def sample(self, x: int, y: int) -> float:
        """Grass at (x, y), coordinates wrapped toroidally"""
        return float(self._grass[y % self.height, x % self.width])

    def deplete(self, x: int, y: int, amount: float):
        """Subtract amount from (x, y), floored at zero"""
        row, col = y % self.height, x % self.width
        self._grass[row, col] = max(GRASS_FLOOR, self._grass[row, col] - amount)

    def _write(self, x: int, y: int, value: float):
        self._grass[y % self.height, x % self.width] = max(GRASS_FLOOR, value)

    def forage(self, x: int, y: int, gain_from_food: float) -> float:
        """
        Graze at (x, y).

        When the cell has grass, the grazer eats min(gain_from_food, g).
        Each cell of the 3x3 block around (x, y), center included, is
        trampled by `trample`; then the center is rewritten as
        g - center_multiplier * eaten, where g is the value sampled before
        trampling. Two writes hit the center; the second one wins.

        Args:
            x: Grazer column
            y: Grazer row
            gain_from_food: Species bite size

        Returns:
            Amount eaten (0.0 when the cell is bare)
        """
        grass = self.sample(x, y)
        if grass <= 0:
            return 0.0

        eaten = min(gain_from_food, grass)
        for dx, dy in _BLOCK_OFFSETS:
            self.deplete(x + dx, y + dy, self.trample)
        self._write(x, y, grass - self.center_multiplier * eaten)
        return eaten

    def values(self) -> np.ndarray:
        """
        Read-only view of the grass grid for renderers.

        Returns:
            (height, width) float64 array view; writes raise ValueError
        """
        view = self._grass.view()
        view.flags.writeable = False
        return view

    def colors(self) -> np.ndarray:
        """
        Per-cell RGBA colours, green channel scaled to grass density.

        Returns:
            (height, width, 4) uint8 array (fresh copy)
        """
        rgba = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        if self.grass_max > 0:
            green = np.clip(self._grass / self.grass_max * 255.0, 0.0, 255.0)
            rgba[..., 1] = green.astype(np.uint8)
        rgba[..., 3] = 255
        return rgba

    def total(self) -> float:
        return float(self._grass.sum())

    def mean(self) -> float:
        return float(self._grass.mean())
