from fastapi import APIRouter
from ..schemas.game import GameResponse, MoveRequest
from ..game.manager import GameManager

router = APIRouter()


@router.post("", response_model=GameResponse)
async def create_game():
    return GameManager.create_game()


@router.get("/{game_id}", response_model=GameResponse)
async def get_game_state(game_id: str):
    return GameManager.get_game_state(game_id)


@router.post("/{game_id}/move", response_model=GameResponse)
async def make_move(game_id: str, request: MoveRequest):
    return await GameManager.process_move(game_id, request.row, request.col)


@router.post("/{game_id}/ai-move", response_model=GameResponse)
async def make_ai_move(game_id: str):
    # Plays for whichever side is to move; the caller decides when to ask
    return await GameManager.process_ai_move(game_id)


@router.post("/{game_id}/abandon", response_model=GameResponse)
async def abandon_game(game_id: str):
    return await GameManager.abandon_game(game_id)
