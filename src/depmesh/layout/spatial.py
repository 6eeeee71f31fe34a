"""
Uniform grid spatial hash.

Collision only cares about pairs closer than two radii, so bucketing nodes
into cells of that size limits each node's candidate set to the 3x3 block of
cells around it.
"""

import math
from collections import defaultdict
from typing import Dict, Iterator, List, Tuple


class SpatialGrid:
    """Buckets integer keys by the grid cell containing their position."""

    def __init__(self, cell_size: float):
        self.cell_size = max(cell_size, 1e-6)
        self._cells: Dict[Tuple[int, int], List[int]] = defaultdict(list)

    def _cell(self, x: float, y: float) -> Tuple[int, int]:
        return math.floor(x / self.cell_size), math.floor(y / self.cell_size)

    def insert(self, key: int, x: float, y: float) -> None:
        self._cells[self._cell(x, y)].append(key)

    def candidates(self, x: float, y: float) -> Iterator[int]:
        """Keys in the cell containing (x, y) and its eight neighbors."""
        cx, cy = self._cell(x, y)
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                yield from self._cells.get((cx + dx, cy + dy), ())

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._cells.values())
