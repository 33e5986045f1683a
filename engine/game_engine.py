import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Optional

from config import SEARCH, SearchConfig
from env.errors import IllegalStateError, InvalidMoveError
from env.game_state import GameState, GameStatus
from env.tictactoe_env import Board, Move, Player, Position
from search.minimax import MinimaxSearch

logger = logging.getLogger("game.engine")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GameEngine:
    """
    Stateless rules engine: creates games, applies moves and picks AI moves.
    Every operation takes a GameState and returns a new one.
    """

    def __init__(
        self,
        config: SearchConfig = SEARCH,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.config = config
        self.clock = clock

    def create_game(self, game_id: str) -> GameState:
        return GameState.create(game_id)

    def make_move(self, state: GameState, position: Position) -> GameState:
        self._validate_game_state(state)

        move = Move(
            player=state.board.current_player,
            position=position,
            timestamp=self.clock(),
        )
        if not state.board.is_valid_move(move):
            raise InvalidMoveError(f"Invalid move: {move}")

        board = state.board.make_move(move)
        winner = board.get_winner()
        status = self.determine_game_status(board, winner)

        return replace(
            state,
            board=board,
            status=status,
            winner=winner,
            last_move=move,
        )

    def generate_ai_move(self, state: GameState) -> Position:
        self._validate_game_state(state)

        search = MinimaxSearch(state.board, self.config)
        position = search.best_move()
        logger.debug(
            f"Game {state.id}: AI ({state.board.current_player}) chose "
            f"({position.row}, {position.col}) after {search.nodes_searched} nodes"
        )
        return position

    def determine_game_status(self, board: Board, winner: Optional[Player]) -> GameStatus:
        # moveCount == 0 cannot follow a move; kept so the rule reads the same for any board
        if board.move_count == 0:
            return GameStatus.NEW
        if board.move_count == self.config.board_size ** 2 or winner is not None:
            return GameStatus.COMPLETED
        return GameStatus.IN_PROGRESS

    @staticmethod
    def _validate_game_state(state: GameState):
        if state.status == GameStatus.COMPLETED:
            raise IllegalStateError("Game is already completed")
        if state.status == GameStatus.ABANDONED:
            raise IllegalStateError("Game has been abandoned")
