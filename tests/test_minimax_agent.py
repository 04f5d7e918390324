"""
Tests for the evaluator, successor generation and minimax agents.
"""

import time
import unittest
from unittest.mock import patch

from pydantic import ValidationError

from agents.evaluator import WIN_SCORE, evaluate, evaluate_for
from agents.minimax_agent import (
    MinimaxAgent,
    SearchAlgorithm,
    SearchOutcome,
    alpha_beta_search,
    depth_limited_search,
    next_states,
)
from agents.random_agent import RandomAgent
from engine.board import Player, Position, Wall, WallOrientation
from engine.errors import IllegalActionError, NoLegalActionsError
from engine.game import GameState, Phase, decline_wall, initial_state, move_pawn
from engine.move_generator import get_legal_moves
from schemas.game_config import MAX_SEARCH_DEPTH, AgentConfig

H = WallOrientation.HORIZONTAL
V = WallOrientation.VERTICAL


def make_state(p1, p2, current=Player.P2, remaining=(10, 10), walls=()):
    return GameState(
        players=(Position(*p1), Position(*p2)),
        walls=frozenset(walls),
        current_player=current,
        remaining_walls=remaining,
    )


class TestEvaluator(unittest.TestCase):
    """Test static evaluation."""

    def test_symmetric_opening_is_even(self):
        assert evaluate(initial_state()) == 0

    def test_sign_convention(self):
        state = make_state((6, 4), (8, 4))
        assert evaluate(state) == 2 - 8
        assert evaluate_for(state, Player.P1) == 6
        assert evaluate_for(state, Player.P2) == -6

    def test_won_states_saturate(self):
        p2_wins = move_pawn(make_state((4, 0), (1, 4)), Position(0, 4))
        assert p2_wins.winner is Player.P2
        assert evaluate(p2_wins) == WIN_SCORE

        p1_wins = move_pawn(make_state((7, 0), (4, 4), current=Player.P1), Position(8, 0))
        assert evaluate(p1_wins) == -WIN_SCORE
        assert evaluate_for(p1_wins, Player.P1) == WIN_SCORE


class TestNextStates(unittest.TestCase):
    """Test complete-turn successor generation."""

    def test_terminal_state_has_no_successors(self):
        won = move_pawn(make_state((4, 0), (1, 4)), Position(0, 4))
        assert next_states(won) == []

    def test_opening_successor_count(self):
        # 3 pawn moves, each plain or followed by one of 128 walls
        successors = next_states(initial_state())
        assert len(successors) == 3 * 129
        assert all(s.current_player is Player.P2 for s in successors)
        assert all(s.phase is Phase.MOVE for s in successors)

    def test_no_walls_left_gives_moves_only(self):
        state = make_state((0, 4), (8, 4), current=Player.P1, remaining=(0, 10))
        successors = next_states(state)
        assert len(successors) == 3
        assert all(not s.walls for s in successors)

    def test_winning_move_is_not_followed_by_wall(self):
        state = make_state((4, 0), (1, 4))
        winners = [s for s in next_states(state) if s.winner is Player.P2]
        assert len(winners) == 1
        assert winners[0].current_player is Player.P2
        assert not winners[0].walls


class TestSearchEquivalence(unittest.TestCase):
    """Pruning must not change the root value."""

    def assert_same_value(self, state, depth, maximizing=True):
        pruned = alpha_beta_search(state, depth, maximizing)
        full = depth_limited_search(state, depth, maximizing)
        assert pruned.value == full.value
        assert pruned.nodes_visited <= full.nodes_visited
        assert pruned.state is not None and full.state is not None

    def test_depth_one_with_walls(self):
        state = decline_wall(move_pawn(initial_state(), Position(1, 4)))
        self.assert_same_value(state, 1)

    def test_depth_two_without_walls(self):
        state = make_state((3, 3), (5, 4), remaining=(0, 0), walls=[Wall(H, 3, 3), Wall(V, 5, 5)])
        self.assert_same_value(state, 2)
        self.assert_same_value(state, 2, maximizing=False)

    def test_depth_two_one_side_with_walls(self):
        state = make_state((2, 4), (6, 4), remaining=(0, 2), walls=[Wall(H, 4, 3), Wall(V, 1, 1)])
        self.assert_same_value(state, 2)


class TestMinimaxAgent(unittest.TestCase):
    """Test agent turn selection."""

    def test_invalid_depth(self):
        with self.assertRaises(ValueError):
            MinimaxAgent(depth=0)

    def test_takes_immediate_win(self):
        for algorithm in SearchAlgorithm:
            agent = MinimaxAgent(Player.P2, algorithm, depth=1)
            successor, stats = agent.choose_state(make_state((4, 0), (1, 4)))
            assert successor.winner is Player.P2
            assert stats["value"] == WIN_SCORE
            assert not stats["fallback"]

    def test_takes_immediate_win_at_depth_two(self):
        agent = MinimaxAgent(Player.P2, SearchAlgorithm.ALPHA_BETA, depth=2)
        successor, _ = agent.choose_state(make_state((4, 0), (1, 4), remaining=(0, 0)))
        assert successor.winner is Player.P2

    def test_p1_agent_advances(self):
        agent = MinimaxAgent(Player.P1, depth=1)
        successor, stats = agent.choose_state(make_state((0, 4), (8, 4), current=Player.P1, remaining=(0, 0)))
        assert successor.position(Player.P1) == Position(1, 4)
        assert successor.current_player is Player.P2
        assert stats["value"] == 1

    def test_wrong_turn_or_phase(self):
        agent = MinimaxAgent(Player.P2)
        with self.assertRaises(IllegalActionError):
            agent.choose_state(initial_state())
        pending = move_pawn(make_state((0, 4), (8, 4)), Position(7, 4))
        with self.assertRaises(IllegalActionError):
            agent.choose_state(pending)

    def test_fallback_makes_random_legal_move(self):
        """When search yields no successor the agent still completes its turn."""
        state = make_state((0, 4), (8, 4))
        agent = MinimaxAgent(Player.P2, seed=3)
        with patch.object(agent, "search", return_value=SearchOutcome(0)):
            with self.assertLogs("agents.minimax_agent", level="WARNING"):
                successor, stats = agent.choose_state(state)

        assert stats["fallback"]
        assert successor.position(Player.P2) in get_legal_moves(state)
        assert successor.current_player is Player.P1
        assert successor.phase is Phase.MOVE
        assert successor.description.startswith("P2 moved randomly to")

    def test_fallback_is_reproducible_for_a_seed(self):
        state = make_state((0, 4), (4, 4))
        chosen = []
        for _ in range(2):
            agent = MinimaxAgent(Player.P2, seed=9)
            with patch.object(agent, "search", return_value=SearchOutcome(0)):
                with self.assertLogs("agents.minimax_agent", level="WARNING"):
                    successor, _ = agent.choose_state(state)
            chosen.append(successor.position(Player.P2))
        assert chosen[0] == chosen[1]
        assert chosen[0] in get_legal_moves(state)

    def test_no_legal_moves_raises(self):
        agent = MinimaxAgent(Player.P2)
        with patch.object(agent, "search", return_value=SearchOutcome(0)), \
                patch("agents.minimax_agent.get_legal_moves", return_value=[]):
            with self.assertRaises(NoLegalActionsError):
                agent.choose_state(make_state((0, 4), (8, 4)))

    def test_action_info(self):
        info = MinimaxAgent(Player.P1, SearchAlgorithm.LIMITED_ANTICIPATION, depth=2).get_action_info()
        assert info["type"] == "limited-anticipation"
        assert info["player"] == "P1"
        assert info["depth"] == 2

    def test_depth_two_from_the_opening_finishes_quickly(self):
        state = decline_wall(move_pawn(initial_state(), Position(1, 4)))
        agent = MinimaxAgent(Player.P2, SearchAlgorithm.ALPHA_BETA, depth=2)
        start = time.perf_counter()
        successor, stats = agent.choose_state(state)
        elapsed = time.perf_counter() - start

        assert elapsed < 60, f"depth-2 search took {elapsed:.1f}s"
        assert not stats["fallback"]
        assert successor.current_player is Player.P1
        assert successor in next_states(state)

    def test_depth_above_maximum_is_not_configurable(self):
        assert MAX_SEARCH_DEPTH == 2
        with self.assertRaises(ValidationError):
            AgentConfig(depth=MAX_SEARCH_DEPTH + 1)


class TestRandomAgent(unittest.TestCase):

    def test_seeded_choice_is_reproducible(self):
        moves = get_legal_moves(initial_state())
        first = RandomAgent(seed=5).select_action(initial_state(), moves)
        second = RandomAgent(seed=5).select_action(initial_state(), moves)
        assert first == second
        assert first in moves

    def test_no_moves(self):
        assert RandomAgent(seed=0).select_action(initial_state(), []) is None


if __name__ == '__main__':
    unittest.main()
