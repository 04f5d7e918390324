"""
Arena script for AI-vs-AI Quoridor matches.
"""

import argparse
import json
import logging
import os
import sys
import time
from typing import Any, Dict, List, Optional

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from agents.minimax_agent import MinimaxAgent, SearchAlgorithm
from engine.board import Player
from engine.game import QuoridorGame
from session.settings import get_log_level
from utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)


class ArenaMatch:
    """
    Represents a single match between two search agents.
    """

    def __init__(self, agent1: MinimaxAgent, agent2: MinimaxAgent):
        """
        Initialize match.

        Args:
            agent1: Agent playing P1
            agent2: Agent playing P2
        """
        self.agents = {Player.P1: agent1, Player.P2: agent2}
        self.winner: Optional[Player] = None
        self.turns_played = 0
        self.fallbacks = 0
        self.game_duration = 0.0
        self.descriptions: List[str] = []
        self.error: Optional[str] = None

    def play_match(self, max_turns: int = 200) -> Dict[str, Any]:
        """
        Play until someone wins or ``max_turns`` turns have been played.

        Returns:
            Match results dictionary
        """
        start_time = time.time()
        game = QuoridorGame()
        try:
            while not game.game_over and self.turns_played < max_turns:
                agent = self.agents[game.get_current_player()]
                successor, stats = agent.choose_state(game.state)
                game.commit_successor(successor)
                self.turns_played += 1
                self.fallbacks += int(stats["fallback"])
                self.descriptions.append(successor.description)
                logger.info(f"Turn {self.turns_played}: {successor.description} (value={stats['value']})")
        except Exception as e:
            logger.error(f"Error in match: {e}")
            self.error = str(e)

        self.winner = game.winner
        self.game_duration = time.time() - start_time
        return self.get_results()

    def get_results(self) -> Dict[str, Any]:
        """Get match results."""
        return {
            "agent1": self.agents[Player.P1].get_action_info(),
            "agent2": self.agents[Player.P2].get_action_info(),
            "winner": self.winner.value if self.winner else None,
            "turns_played": self.turns_played,
            "fallbacks": self.fallbacks,
            "game_duration": self.game_duration,
            "descriptions": self.descriptions,
            "error": self.error,
        }


def main():
    """Main function for arena script."""
    parser = argparse.ArgumentParser(description="Quoridor Arena - AI vs AI")
    parser.add_argument("--p1-algorithm", choices=[a.value for a in SearchAlgorithm],
                        default=SearchAlgorithm.ALPHA_BETA.value, help="Search strategy for P1")
    parser.add_argument("--p2-algorithm", choices=[a.value for a in SearchAlgorithm],
                        default=SearchAlgorithm.ALPHA_BETA.value, help="Search strategy for P2")
    parser.add_argument("--p1-depth", type=int, default=1, help="Search depth for P1")
    parser.add_argument("--p2-depth", type=int, default=1, help="Search depth for P2")
    parser.add_argument("--seed", type=int, default=None, help="Seed for fallback moves")
    parser.add_argument("--max-turns", type=int, default=200, help="Maximum turns per match")
    parser.add_argument("--output", type=str, default=None, help="Write results JSON to this file")
    parser.add_argument("--log-file", type=str, default=None, help="Also log to this file")

    args = parser.parse_args()
    setup_logging(get_log_level(), args.log_file)

    match = ArenaMatch(
        MinimaxAgent(Player.P1, SearchAlgorithm(args.p1_algorithm), args.p1_depth, seed=args.seed),
        MinimaxAgent(Player.P2, SearchAlgorithm(args.p2_algorithm), args.p2_depth, seed=args.seed),
    )
    results = match.play_match(max_turns=args.max_turns)

    print(f"Winner: {results['winner']} after {results['turns_played']} turns "
          f"({results['game_duration']:.2f}s)")
    if args.output:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"Results saved to {args.output}")


if __name__ == "__main__":
    main()
