"""Static tile grid: floor and spikes.

A LevelGrid is immutable once built. Rows are indexed top to bottom and
columns left to right; cell (col, row) covers the pixel rectangle
(col * tile_size, row * tile_size, tile_size, tile_size).
"""

from enum import Enum
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence, Tuple

from .config import LevelConfig


class CellKind(Enum):
    """What occupies a grid cell."""
    EMPTY = "."
    FLOOR = "#"
    SPIKE = "^"


@dataclass(frozen=True)
class LevelGrid:
    """Immutable 2D array of CellKind."""
    cells: Tuple[Tuple[CellKind, ...], ...]
    tile_size: int = 40

    def __post_init__(self):
        if not self.cells or not self.cells[0]:
            raise ValueError("level grid must have at least one cell")
        width = len(self.cells[0])
        for i, row in enumerate(self.cells):
            if len(row) != width:
                raise ValueError(f"row {i} has {len(row)} cells, expected {width}")

    @classmethod
    def from_rows(cls, rows: Sequence[str], tile_size: int = 40) -> "LevelGrid":
        """Parse text rows: '.' empty, '#' floor, '^' spike."""
        parsed = []
        for r, line in enumerate(rows):
            try:
                parsed.append(tuple(CellKind(ch) for ch in line))
            except ValueError:
                bad = next(ch for ch in line if ch not in "".join(k.value for k in CellKind))
                raise ValueError(f"unknown cell character {bad!r} in row {r}") from None
        return cls(cells=tuple(parsed), tile_size=tile_size)

    @property
    def rows(self) -> int:
        return len(self.cells)

    @property
    def cols(self) -> int:
        return len(self.cells[0])

    @property
    def pixel_size(self) -> Tuple[int, int]:
        """(width, height) of the whole grid in pixels."""
        return self.cols * self.tile_size, self.rows * self.tile_size

    def cell_at(self, col: int, row: int) -> CellKind:
        """Cell kind at (col, row); EMPTY outside the grid."""
        if 0 <= row < self.rows and 0 <= col < self.cols:
            return self.cells[row][col]
        return CellKind.EMPTY

    def cells_of(self, kind: Optional[CellKind] = None) -> Iterator[Tuple[int, int, CellKind]]:
        """Yield (col, row, kind) for every non-empty cell, or only those of `kind`."""
        for row, line in enumerate(self.cells):
            for col, cell in enumerate(line):
                if kind is None and cell is CellKind.EMPTY:
                    continue
                if kind is not None and cell is not kind:
                    continue
                yield col, row, cell

    def cell_rect(self, col: int, row: int) -> Tuple[int, int, int, int]:
        """Pixel (left, top, width, height) of a cell."""
        size = self.tile_size
        return col * size, row * size, size, size

    def to_rows(self) -> Tuple[str, ...]:
        return tuple("".join(cell.value for cell in line) for line in self.cells)


def build_default_level(config: Optional[LevelConfig] = None) -> LevelGrid:
    """Bottom row of floor with spikes set into it at the configured columns."""
    config = config or LevelConfig()
    rows = ["." * config.cols for _ in range(config.rows - 1)]
    floor = [CellKind.FLOOR.value] * config.cols
    for col in config.spike_columns:
        floor[col] = CellKind.SPIKE.value
    rows.append("".join(floor))
    return LevelGrid.from_rows(rows, tile_size=config.tile_size)
