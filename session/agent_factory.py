"""
Factory helpers for AI opponents.
"""

from __future__ import annotations

from typing import Optional

from agents.minimax_agent import MinimaxAgent
from engine.board import Player
from schemas.game_config import AgentConfig, GameConfig, GameMode


def build_agent(agent_config: AgentConfig, player: Player) -> MinimaxAgent:
    """Build a search agent playing ``player``."""
    return MinimaxAgent(
        player=player,
        algorithm=agent_config.algorithm,
        depth=agent_config.depth,
        seed=agent_config.seed,
    )


def build_game_agent(config: GameConfig) -> Optional[MinimaxAgent]:
    """
    Build the AI opponent for a game.

    Player-vs-player games return ``None``; both sides are driven by requests.
    """
    if config.mode == GameMode.PVP:
        return None
    return build_agent(config.agent, config.ai_player)
