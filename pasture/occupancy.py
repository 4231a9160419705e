"""
Spatial occupancy index: one dense grid per prey species.

Each slot holds EMPTY_SLOT or exactly one agent instance_id. A later
place() into an occupied slot overwrites the earlier reference; the
overwritten agent stays alive but cannot be found by queries until it
moves again. Queries cost O(r^2) regardless of population size.

Only non-owning identifiers live here; agent data stays in the
PopulationStore.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .constants import EMPTY_SLOT
from .spatial import in_bounds, wrapped_range


class OccupancyIndex:
    """
    Per-species cell -> instance_id grids.

    Usage:
        index = OccupancyIndex(600, 300, ["sheep", "goat"])
        index.place("sheep", 10, 20, 7)
        index.query_radius("sheep", 12, 22, 6)  # -> [7]
    """

    def __init__(self, width: int, height: int, species_ids: Iterable[str] = ()):
        self.width = width
        self.height = height
        self._grids: Dict[str, np.ndarray] = {}
        for species_id in species_ids:
            self.register(species_id)

    def register(self, species_id: str):
        """Allocate an empty grid for species_id (no-op if already present)"""
        if species_id not in self._grids:
            self._grids[species_id] = np.full(
                (self.height, self.width), EMPTY_SLOT, dtype=np.int64
            )

    def __contains__(self, species_id: str) -> bool:
        return species_id in self._grids

    @property
    def species_ids(self) -> List[str]:
        return list(self._grids)

    def place(self, species_id: str, x: int, y: int, instance_id: int):
        """Write instance_id into (x, y), replacing any previous occupant"""
        assert in_bounds(x, y, self.width, self.height), \
            f"place({species_id}) out of range: ({x}, {y})"
        self._grids[species_id][y, x] = instance_id

    def clear(self, species_id: str, x: int, y: int):
        """Mark (x, y) empty"""
        assert in_bounds(x, y, self.width, self.height), \
            f"clear({species_id}) out of range: ({x}, {y})"
        self._grids[species_id][y, x] = EMPTY_SLOT

    def occupant(self, species_id: str, x: int, y: int) -> Optional[int]:
        """Identifier stored at (x, y), or None when empty"""
        value = int(self._grids[species_id][y % self.height, x % self.width])
        return None if value == EMPTY_SLOT else value

    def query_radius(self, species_id: str, x: int, y: int, radius: int) -> List[int]:
        """
        Find occupants in the square window [x-r, x+r) x [y-r, y+r).

        Rows and columns wrap independently, so a window straddling a
        corner picks up cells from all four sides of the field.

        Args:
            species_id: Prey species to search
            x: Window center column
            y: Window center row
            radius: Half-width r (the window is 2r cells wide)

        Returns:
            Distinct instance_ids in row-major scan order (empty list if none)
        """
        if radius <= 0:
            return []

        rows = wrapped_range(y, radius, self.height)
        cols = wrapped_range(x, radius, self.width)
        block = self._grids[species_id][np.ix_(rows, cols)]
        found = block[block != EMPTY_SLOT]

        # Windows wider than the field revisit cells
        return list(dict.fromkeys(int(i) for i in found))

    def occupied_slots(self, species_id: str) -> Iterator[Tuple[int, int, int]]:
        """Yield (x, y, instance_id) for every non-empty slot of species_id"""
        grid = self._grids[species_id]
        rows, cols = np.nonzero(grid != EMPTY_SLOT)
        for y, x in zip(rows.tolist(), cols.tolist()):
            yield x, y, int(grid[y, x])

    def occupied_count(self, species_id: str) -> int:
        return int(np.count_nonzero(self._grids[species_id] != EMPTY_SLOT))
