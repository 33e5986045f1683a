class InvalidMoveError(ValueError):
    """A move failed board validation (out of bounds, occupied, or wrong turn)."""


class IllegalStateError(RuntimeError):
    """The game is not in a state that accepts the requested operation."""


class GameNotFoundError(LookupError):
    def __init__(self, game_id: str):
        super().__init__(f"Game not found: {game_id}")
        self.game_id = game_id
