"""
Saved-game record schema.
"""

from pydantic import BaseModel, Field

from .game_state import PersistedGameState


class SavedGame(BaseModel):
    """One saved match, as kept in the saves collection."""
    id: str = Field(min_length=1, description="Opaque record id")
    date: str = Field(description="Display string for when the game was saved")
    state: PersistedGameState
