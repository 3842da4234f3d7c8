"""
Board model for TicTacToe.
Holds the 3x3 grid as 9 cells in row-major order and applies moves.
"""

from enum import Enum
from typing import Iterable, List, Optional, Tuple
from dataclasses import dataclass, field


class Symbol(Enum):
    """The two marks a player can place."""
    X = "X"
    O = "O"

    def opposite(self) -> "Symbol":
        """Get the opposite symbol."""
        return Symbol.O if self == Symbol.X else Symbol.X

    @classmethod
    def parse(cls, value: str) -> "Symbol":
        """Parse 'x' / 'X' / 'o' / 'O' into a Symbol."""
        return cls(value.strip().upper())


Cell = Optional[Symbol]


class InvalidMove(ValueError):
    """A move that cannot be applied to the board."""


class CellOccupied(InvalidMove):
    """The target cell already holds a symbol."""

    def __init__(self, index: int, symbol: Symbol):
        super().__init__(f"Cell {index} is already occupied by {symbol.value}")
        self.index = index
        self.symbol = symbol


class IndexOutOfRange(InvalidMove):
    """The target index is not in 0-8."""

    def __init__(self, index: int):
        super().__init__(f"Invalid index {index}. Must be 0-8.")
        self.index = index


@dataclass(frozen=True)
class Board:
    """
    An immutable 3x3 board.

    Cells are indexed 0-8, row-major:

         0 | 1 | 2
         3 | 4 | 5
         6 | 7 | 8

    None means empty. Applying a move returns a new Board, so a snapshot
    handed to the AI can never be changed under it.
    """

    cells: Tuple[Cell, ...] = field(default=(None,) * 9)

    def __post_init__(self):
        if len(self.cells) != 9:
            raise ValueError(f"A board has 9 cells, got {len(self.cells)}")

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> "Board":
        return cls(tuple(cells))

    @classmethod
    def from_string(cls, text: str) -> "Board":
        """
        Build a board from a 9-character string like "XX.OO....".

        '.', '_', ' ' and '-' are empty cells. Rows may be separated by
        '/' or newlines ("XX./OO./...").
        """
        compact = text.replace("\n", "").replace("/", "")
        cells: List[Cell] = []
        for ch in compact:
            if ch in "._ -":
                cells.append(None)
            else:
                cells.append(Symbol.parse(ch))
        return cls(tuple(cells))

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __iter__(self):
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def is_empty_cell(self, index: int) -> bool:
        return self.cells[index] is None

    def empty_cells(self) -> List[int]:
        """All empty indices in ascending order."""
        return [i for i, cell in enumerate(self.cells) if cell is None]

    def is_full(self) -> bool:
        return all(cell is not None for cell in self.cells)

    def count(self, symbol: Symbol) -> int:
        return sum(1 for cell in self.cells if cell == symbol)

    def apply_move(self, index: int, symbol: Symbol) -> "Board":
        """
        Place a symbol on an empty cell.

        Args:
            index: Cell index (0-8).
            symbol: The symbol to place.

        Returns:
            A new Board with the cell set.

        Raises:
            IndexOutOfRange: index is not in 0-8.
            CellOccupied: the cell already holds a symbol.
        """
        if not (0 <= index <= 8):
            raise IndexOutOfRange(index)

        current = self.cells[index]
        if current is not None:
            raise CellOccupied(index, current)

        cells = list(self.cells)
        cells[index] = symbol
        return Board(tuple(cells))

    def to_list(self) -> List[Optional[str]]:
        """Plain data form, e.g. ['X', None, 'O', ...]."""
        return [cell.value if cell is not None else None for cell in self.cells]

    def render(self, numbered: bool = False) -> str:
        """
        Render the board as text.

        Args:
            numbered: Show 1-9 in empty cells (for console input).
        """
        lines = []
        for row in range(3):
            marks = []
            for col in range(3):
                index = row * 3 + col
                cell = self.cells[index]
                if cell is not None:
                    marks.append(cell.value)
                elif numbered:
                    marks.append(str(index + 1))
                else:
                    marks.append(" ")
            lines.append(f" {marks[0]} | {marks[1]} | {marks[2]} ")
        return "\n---+---+---\n".join(lines)

    def __str__(self) -> str:
        return "".join(cell.value if cell else "." for cell in self.cells)


def apply_move(board: Board, index: int, symbol: Symbol) -> Board:
    """Return a new board with `symbol` at `index`. See Board.apply_move."""
    return board.apply_move(index, symbol)


def empty_cells(board: Board) -> List[int]:
    """Indices of empty cells, ascending."""
    return board.empty_cells()
