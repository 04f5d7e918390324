"""
Pydantic schemas for player actions.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from engine.board import BOARD_SIZE, Player

from .state_update import GameStateView


class MoveRequest(BaseModel):
    """Request to move a pawn."""
    player: Player
    row: int = Field(..., ge=0, le=BOARD_SIZE - 1)
    col: int = Field(..., ge=0, le=BOARD_SIZE - 1)

    model_config = ConfigDict(
        json_schema_extra={"example": {"player": "P1", "row": 1, "col": 4}}
    )


class WallRequest(BaseModel):
    """
    Request to place a wall during the wall phase.

    Anchors are not range-checked here; out-of-range walls are rejected by the
    engine like any other illegal wall.
    """
    player: Player
    type: Literal["horizontal", "vertical"]
    row: int
    col: int

    model_config = ConfigDict(
        json_schema_extra={"example": {"player": "P1", "type": "horizontal", "row": 6, "col": 3}}
    )


class DeclineWallRequest(BaseModel):
    """Request to finish the turn without placing a wall."""
    player: Player


class MoveResponse(BaseModel):
    """Response after an action."""
    success: bool
    message: str
    game_state: Optional[GameStateView] = None
