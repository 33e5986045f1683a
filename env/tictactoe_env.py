from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Iterator, Optional, Tuple

from env.errors import InvalidMoveError


class Player(str, Enum):
    X = "X"
    O = "O"

    @property
    def opponent(self) -> "Player":
        return Player.O if self is Player.X else Player.X

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class Position:
    row: int
    col: int


@dataclass(frozen=True)
class Cell:
    position: Position
    player: Optional[Player] = None

    @property
    def is_empty(self) -> bool:
        return self.player is None


@dataclass(frozen=True)
class Move:
    player: Player
    position: Position
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True)
class Board:
    """
    Immutable 3x3 tic-tac-toe board.

    Every accepted move returns a new Board; the receiver is never modified,
    so search branches can share parents safely.
    """

    BOARD_SIZE = 3
    CORNERS = ((0, 0), (0, 2), (2, 0), (2, 2))
    CENTER = (1, 1)

    cells: Tuple[Tuple[Cell, ...], ...]
    current_player: Player = Player.X
    move_count: int = 0

    @classmethod
    def empty(cls, starting_player: Player = Player.X) -> "Board":
        cells = tuple(
            tuple(Cell(Position(r, c)) for c in range(cls.BOARD_SIZE))
            for r in range(cls.BOARD_SIZE)
        )
        return cls(cells=cells, current_player=starting_player, move_count=0)

    @property
    def is_full(self) -> bool:
        return self.move_count == self.BOARD_SIZE * self.BOARD_SIZE

    def player_at(self, row: int, col: int) -> Optional[Player]:
        return self.cells[row][col].player

    def in_bounds(self, position: Position) -> bool:
        return (
            0 <= position.row < self.BOARD_SIZE
            and 0 <= position.col < self.BOARD_SIZE
        )

    def empty_positions(self) -> Iterator[Position]:
        """Empty cells in row-major order."""
        for row in self.cells:
            for cell in row:
                if cell.is_empty:
                    yield cell.position

    def is_valid_move(self, move: Move) -> bool:
        if not self.in_bounds(move.position):
            return False
        cell = self.cells[move.position.row][move.position.col]
        return cell.is_empty and move.player == self.current_player

    def make_move(self, move: Move) -> "Board":
        if not self.is_valid_move(move):
            raise InvalidMoveError(f"Invalid move: {move}")

        r, c = move.position.row, move.position.col
        row = self.cells[r]
        new_row = row[:c] + (Cell(move.position, move.player),) + row[c + 1 :]
        new_cells = self.cells[:r] + (new_row,) + self.cells[r + 1 :]

        return replace(
            self,
            cells=new_cells,
            current_player=self.current_player.opponent,
            move_count=self.move_count + 1,
        )

    def get_winner(self) -> Optional[Player]:
        # Rows, then columns, then both diagonals
        for row in self.cells:
            first = row[0].player
            if first is not None and all(cell.player == first for cell in row):
                return first

        for col in range(self.BOARD_SIZE):
            first = self.cells[0][col].player
            if first is not None and all(
                self.cells[r][col].player == first for r in range(self.BOARD_SIZE)
            ):
                return first

        center = self.player_at(*self.CENTER)
        if center is not None:
            if self.player_at(0, 0) == center and self.player_at(2, 2) == center:
                return center
            if self.player_at(0, 2) == center and self.player_at(2, 0) == center:
                return center

        return None

    def render(self) -> str:
        rows = []
        for row in self.cells:
            rows.append(" ".join(cell.player.value if cell.player else "." for cell in row))
        return "\n".join(rows)
