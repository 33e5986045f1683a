from typing import List, Optional
from pydantic import BaseModel, Field


class PositionModel(BaseModel):
    row: int
    col: int


class CellResponse(BaseModel):
    position: PositionModel
    player: Optional[str] = Field(None, description="X, O, or null when empty")


class MoveResponse(BaseModel):
    player: str
    position: PositionModel
    timestamp: str


class GameResponse(BaseModel):
    id: str
    board: List[List[CellResponse]]
    current_player: str
    status: str = Field(..., description="NEW, IN_PROGRESS, COMPLETED or ABANDONED")
    winner: Optional[str] = None
    last_move: Optional[MoveResponse] = None


class MoveRequest(BaseModel):
    row: int = Field(..., description="Row index (0-2)", examples=[1])
    col: int = Field(..., description="Column index (0-2)", examples=[1])


class HealthResponse(BaseModel):
    status: str
    version: str
    active_games: int
