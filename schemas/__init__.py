"""
Pydantic schemas for persisted Quoridor games and the session API.
"""

from .game_config import AgentConfig, GameConfig, GameMode
from .game_state import (
    SCHEMA_VERSION, PersistedGameState, PositionModel, WallModel,
    model_to_state, parse_game_state, state_to_model,
)
from .move import DeclineWallRequest, MoveRequest, MoveResponse, WallRequest
from .saved_game import SavedGame
from .state_update import GameStateView, HistoryNodeView

__all__ = [
    "AgentConfig",
    "GameConfig",
    "GameMode",
    "SCHEMA_VERSION",
    "PersistedGameState",
    "PositionModel",
    "WallModel",
    "model_to_state",
    "parse_game_state",
    "state_to_model",
    "MoveRequest",
    "WallRequest",
    "DeclineWallRequest",
    "MoveResponse",
    "SavedGame",
    "GameStateView",
    "HistoryNodeView",
]
