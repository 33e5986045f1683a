import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Callable, Dict, Optional

from engine.game_engine import GameEngine
from env.errors import GameNotFoundError
from env.game_state import GameState
from env.tictactoe_env import Position

logger = logging.getLogger("game.store")


def new_game_id() -> str:
    return str(uuid.uuid4())


class GameRegistry:
    """
    Thread-safe in-memory store of game sessions keyed by id.

    Each session has its own lock, held for the whole read-compute-store of a
    move, so concurrent moves on one game are applied in turn instead of
    overwriting each other. Different games never share a lock.
    Note: state is per-process; multiple workers each get their own registry.
    """

    def __init__(
        self,
        engine: Optional[GameEngine] = None,
        id_factory: Callable[[], str] = new_game_id,
    ):
        self.engine = engine or GameEngine()
        self.id_factory = id_factory
        self._games: Dict[str, GameState] = {}
        self._locks: Dict[str, threading.Lock] = {}
        # Guards the dict slots and lock table only, never held during a search
        self._guard = threading.Lock()

    def __len__(self):
        with self._guard:
            return len(self._games)

    def __contains__(self, game_id):
        with self._guard:
            return game_id in self._games

    @contextmanager
    def _session(self, game_id: str):
        with self._guard:
            lock = self._locks.get(game_id)
        if lock is None:
            raise GameNotFoundError(game_id)
        with lock:
            # Re-read under the session lock: the game may have been swept meanwhile
            yield self.get_game(game_id)

    def _store(self, state: GameState):
        with self._guard:
            self._games[state.id] = state

    def create_game(self) -> GameState:
        game_id = self.id_factory()
        state = self.engine.create_game(game_id)
        with self._guard:
            self._locks[game_id] = threading.Lock()
            self._games[game_id] = state
        logger.info(f"Game created: {game_id}")
        return state

    def get_game(self, game_id: str) -> GameState:
        with self._guard:
            state = self._games.get(game_id)
        if state is None:
            raise GameNotFoundError(game_id)
        return state

    def make_move(self, game_id: str, position: Position) -> GameState:
        with self._session(game_id) as state:
            new_state = self.engine.make_move(state, position)
            self._store(new_state)
        logger.debug(
            f"Game {game_id}: {new_state.last_move.player} -> "
            f"({position.row}, {position.col}) [{new_state.status.value}]"
        )
        return new_state

    def make_ai_move(self, game_id: str) -> GameState:
        with self._session(game_id) as state:
            position = self.engine.generate_ai_move(state)
            new_state = self.engine.make_move(state, position)
            self._store(new_state)
        return new_state

    def abandon_game(self, game_id: str) -> GameState:
        with self._session(game_id) as state:
            new_state = state.abandoned()
            self._store(new_state)
        logger.info(f"Game {game_id} abandoned (was {state.status.value})")
        return new_state

    def cleanup_old_games(self) -> None:
        """
        Remove every completed or abandoned game. Only the status is consulted;
        no age threshold is applied.
        """
        with self._guard:
            candidates = [
                (game_id, self._locks.get(game_id))
                for game_id, state in self._games.items()
                if state.status.is_terminal
            ]

        removed = 0
        for game_id, lock in candidates:
            if lock is None:
                continue
            with lock:
                with self._guard:
                    state = self._games.get(game_id)
                    if state is not None and state.status.is_terminal:
                        del self._games[game_id]
                        del self._locks[game_id]
                        removed += 1

        if removed:
            logger.info(f"Cleanup removed {removed} finished game(s), {len(self)} active")


# Note: For multi-process workers, this needs to be Redis/Memcached.
registry = GameRegistry()
