"""
Pydantic schemas for what the presentation layer reads.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from engine.board import Player

from .game_state import PersistedGameState, PositionModel, WallModel


class GameStateView(BaseModel):
    """Complete view of a live game."""
    game_id: str
    state: PersistedGameState
    legal_moves: List[PositionModel] = Field(description="Pawn destinations, only in the move phase")
    valid_walls: List[WallModel] = Field(description="Placeable walls, only in the wall phase")
    game_over: bool = False
    winner: Optional[Player] = None
    ai_thinking: bool = False
    current_node_id: str
    error_message: Optional[str] = None


class HistoryNodeView(BaseModel):
    """A node of the history tree with its subtree."""
    id: str
    description: str
    is_current: bool = False
    children: List["HistoryNodeView"] = Field(default_factory=list)


HistoryNodeView.model_rebuild()
