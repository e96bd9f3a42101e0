from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

Mark = str  # 'X' or 'O'
Cell = Optional[Mark]  # None when empty

MARK_X: Mark = 'X'
MARK_O: Mark = 'O'
MARKS: Tuple[Mark, Mark] = (MARK_X, MARK_O)

SIZE = 3
CELL_COUNT = SIZE * SIZE


@dataclass(frozen=True)
class Board:
    """The 3x3 grid as a row-major tuple of 9 cells."""
    cells: Tuple[Cell, ...] = (None,) * CELL_COUNT

    def __post_init__(self) -> None:
        if len(self.cells) != CELL_COUNT:
            raise ValueError(f'Board needs {CELL_COUNT} cells, got {len(self.cells)}')
        for cell in self.cells:
            if cell is not None and cell not in MARKS:
                raise ValueError(f'Invalid cell value: {cell!r}')

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> 'Board':
        """Builds a board from any iterable, mapping '' and '.' to empty."""
        return cls(tuple(None if c in (None, '', '.', ' ') else c for c in cells))

    def at(self, index: int) -> Cell:
        return self.cells[index]

    def index(self, r: int, c: int) -> int:
        """Calculates the 1D index for a given row and column."""
        return r * SIZE + c

    def is_empty(self, index: int) -> bool:
        return self.cells[index] is None

    def occupied_count(self) -> int:
        return sum(1 for c in self.cells if c is not None)

    def is_full(self) -> bool:
        return all(c is not None for c in self.cells)

    def place(self, index: int, mark: Mark) -> 'Board':
        """Returns a new board with mark placed at index; the receiver is unchanged."""
        grid = list(self.cells)
        grid[index] = mark
        return Board(tuple(grid))

    def pretty(self, numbered: bool = False) -> str:
        """Generates a human-readable string representation of the board."""
        lines: List[str] = []
        for r in range(SIZE):
            row: List[str] = []
            for c in range(SIZE):
                cell = self.cells[self.index(r, c)]
                if cell is not None:
                    row.append(cell)
                elif numbered:
                    row.append(str(self.index(r, c) + 1))
                else:
                    row.append('.')
            lines.append(' ' + ' | '.join(row))
        return '\n---+---+---\n'.join(lines)
