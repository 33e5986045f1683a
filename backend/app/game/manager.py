import asyncio
import logging
from typing import Any, Dict

from fastapi import HTTPException

from env.errors import GameNotFoundError, IllegalStateError, InvalidMoveError
from env.game_state import GameState, GameStatus
from env.tictactoe_env import Position
from ..state.store import registry
from .state_data import get_state_data

logger = logging.getLogger("game.manager")


def _log_if_finished(state: GameState):
    if state.status == GameStatus.COMPLETED:
        result = f"Winner: {state.winner}" if state.winner else "Draw"
        logger.info(f"Game {state.id} ended. {result}\n{state.board.render()}")


class GameManager:
    @staticmethod
    def create_game() -> Dict[str, Any]:
        state = registry.create_game()
        return get_state_data(state)

    @staticmethod
    def get_game_state(game_id: str) -> Dict[str, Any]:
        try:
            state = registry.get_game(game_id)
        except GameNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return get_state_data(state)

    @staticmethod
    async def process_move(game_id: str, row: int, col: int) -> Dict[str, Any]:
        # The registry serializes moves per game with a thread lock, so keep it off the event loop
        try:
            state = await asyncio.to_thread(registry.make_move, game_id, Position(row, col))
        except GameNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except InvalidMoveError as e:
            logger.warning(f"Illegal move attempt in game {game_id}: ({row}, {col})")
            raise HTTPException(status_code=400, detail=str(e))
        except IllegalStateError as e:
            logger.warning(f"Move rejected in game {game_id}: {e}")
            raise HTTPException(status_code=409, detail=str(e))

        _log_if_finished(state)
        return get_state_data(state)

    @staticmethod
    async def process_ai_move(game_id: str) -> Dict[str, Any]:
        """
        Searches for and applies the AI move for whichever side is to move.
        The search is blocking, so it runs in a worker thread.
        """
        try:
            state = await asyncio.to_thread(registry.make_ai_move, game_id)
        except GameNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        except IllegalStateError as e:
            logger.warning(f"AI move rejected in game {game_id}: {e}")
            raise HTTPException(status_code=409, detail=str(e))
        except Exception as e:
            logger.error(f"Error during AI turn in game {game_id}: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Internal AI Error")

        _log_if_finished(state)
        return get_state_data(state)

    @staticmethod
    async def abandon_game(game_id: str) -> Dict[str, Any]:
        try:
            state = await asyncio.to_thread(registry.abandon_game, game_id)
        except GameNotFoundError as e:
            raise HTTPException(status_code=404, detail=str(e))
        return get_state_data(state)
