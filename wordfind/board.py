from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, NamedTuple

OFFSETS = (-1, 0, 1)


class Position(NamedTuple):
    row: int
    column: int


@dataclass
class Cell:
    letter: str
    selected: bool = False


class Board:
    """Rectangular grid of letter cells, indexed by (row, column)."""

    def __init__(self, cells: list[list[Cell]]):
        if not cells or not cells[0]:
            raise ValueError("Board must have at least one row and one column")
        width = len(cells[0])
        for r, row in enumerate(cells):
            if len(row) != width:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {width}")
        self.cells = cells
        self.height = len(cells)
        self.width = width

    @classmethod
    def from_letters(cls, rows: Iterable[Iterable[str]]) -> Board:
        cells = []
        for r, row in enumerate(rows):
            cell_row = []
            for c, letter in enumerate(row):
                if not isinstance(letter, str) or len(letter) != 1:
                    raise ValueError(f"Invalid letter {letter!r} at ({r}, {c})")
                cell_row.append(Cell(letter))
            cells.append(cell_row)
        return cls(cells)

    def letter(self, position: Position) -> str:
        return self.cells[position.row][position.column].letter

    def letters(self) -> list[list[str]]:
        """Plain rows of letters, the form sent to background workers."""
        return [[cell.letter for cell in row] for row in self.cells]

    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self.height and 0 <= column < self.width

    def positions(self) -> Iterator[Position]:
        for row in range(self.height):
            for column in range(self.width):
                yield Position(row, column)

    def adjacent_positions(self, position: Position) -> Iterator[Position]:
        for dr in OFFSETS:
            for dc in OFFSETS:
                if dr == 0 and dc == 0:
                    continue
                nr, nc = position.row + dr, position.column + dc
                if self.in_bounds(nr, nc):
                    yield Position(nr, nc)

    def highlight(self, path: Iterable[Position] | None):
        """Select exactly the cells on ``path``; ``None`` clears the board."""
        for row in self.cells:
            for cell in row:
                cell.selected = False
        for position in path or ():
            self.cells[position.row][position.column].selected = True

    def to_json(self) -> list[list[dict]]:
        return [[{"letter": cell.letter, "selected": cell.selected} for cell in row] for row in self.cells]

    def __str__(self) -> str:
        return " / ".join(" ".join(row) for row in self.letters())


def is_adjacent(a: Position, b: Position) -> bool:
    return a != b and abs(a.row - b.row) <= 1 and abs(a.column - b.column) <= 1
