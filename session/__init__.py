"""
Session layer: live matches, AI turn scheduling, saved games and settings.
"""

from .game_manager import GameManager, GameSession
from .saves import BlobStore, MemoryBlobStore, save_game, stage_for_loading, take_pending_game

__all__ = [
    "GameManager",
    "GameSession",
    "BlobStore",
    "MemoryBlobStore",
    "save_game",
    "stage_for_loading",
    "take_pending_game",
]
