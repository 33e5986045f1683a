from typing import Any, Dict, Optional

from env.game_state import GameState
from env.tictactoe_env import Move, Position


def _position_data(position: Position) -> Dict[str, int]:
    return {"row": position.row, "col": position.col}


def _move_data(move: Optional[Move]) -> Optional[Dict[str, Any]]:
    if move is None:
        return None
    return {
        "player": str(move.player),
        "position": _position_data(move.position),
        "timestamp": move.timestamp.isoformat(),
    }


def get_state_data(state: GameState) -> Dict[str, Any]:
    """
    Returns serializable state data matching schemas.game.GameResponse
    """
    board = [
        [
            {
                "position": _position_data(cell.position),
                "player": str(cell.player) if cell.player else None,
            }
            for cell in row
        ]
        for row in state.board.cells
    ]

    return {
        "id": state.id,
        "board": board,
        "current_player": str(state.board.current_player),
        "status": state.status.value,
        "winner": str(state.winner) if state.winner else None,
        "last_move": _move_data(state.last_move),
    }
