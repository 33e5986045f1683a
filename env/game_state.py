from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from env.tictactoe_env import Board, Move, Player


class GameStatus(str, Enum):
    NEW = "NEW"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    ABANDONED = "ABANDONED"

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.COMPLETED, GameStatus.ABANDONED)


@dataclass(frozen=True)
class GameState:
    """
    One game session. Transitions return a new GameState bound to the same id.
    """

    id: str
    board: Board = field(default_factory=Board.empty)
    status: GameStatus = GameStatus.NEW
    winner: Optional[Player] = None
    last_move: Optional[Move] = None

    @classmethod
    def create(cls, game_id: str) -> "GameState":
        return cls(id=game_id)

    def abandoned(self) -> "GameState":
        return replace(self, status=GameStatus.ABANDONED)
