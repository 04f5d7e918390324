"""
Pydantic schemas for game configuration.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from agents.minimax_agent import SearchAlgorithm
from engine.board import Player

MAX_SEARCH_DEPTH = 2


class GameMode(str, Enum):
    """Who plays the two sides."""
    PVP = "PvP"
    PVAI = "PvAI"


class AgentConfig(BaseModel):
    """Configuration for the AI opponent."""
    algorithm: SearchAlgorithm = SearchAlgorithm.ALPHA_BETA
    depth: int = Field(default=1, ge=1, le=MAX_SEARCH_DEPTH, description="Search depth in complete turns")
    seed: Optional[int] = None
    think_delay_ms: int = Field(default=500, ge=0, le=10000, description="Delay before the AI starts searching")


class GameConfig(BaseModel):
    """Configuration for a Quoridor game."""
    mode: GameMode = GameMode.PVAI
    ai_player: Player = Player.P2
    agent: AgentConfig = Field(default_factory=AgentConfig)
    game_id: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "mode": "PvAI",
                "ai_player": "P2",
                "agent": {"algorithm": "alpha-beta", "depth": 1, "seed": 42, "think_delay_ms": 500},
            }
        }
    )
