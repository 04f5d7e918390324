"""
Random agent for Quoridor that picks uniformly from legal pawn moves.
"""

from typing import Any, Dict, List, Optional

import numpy as np

from engine.board import Position
from engine.game import GameState


class RandomAgent:
    """
    Random agent that selects pawn moves uniformly from legal destinations.

    Used as the fallback when a search produces no successor.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Initialize random agent.

        Args:
            seed: Random seed for reproducible behavior
        """
        self.rng = np.random.RandomState(seed)

    def select_action(self, state: GameState, legal_moves: List[Position]) -> Optional[Position]:
        """
        Select a random legal destination.

        Args:
            state: Current game state
            legal_moves: Legal destinations for the player to act

        Returns:
            Selected destination, or None if no legal moves available
        """
        if not legal_moves:
            return None
        move_idx = self.rng.randint(0, len(legal_moves))
        return legal_moves[move_idx]

    def get_action_info(self) -> Dict[str, Any]:
        """Get information about the agent."""
        return {
            "name": "RandomAgent",
            "type": "random",
            "description": "Selects pawn moves uniformly from legal destinations"
        }
