"""
Minimax search agent for Quoridor.

Each ply is one complete turn: a pawn move plus, optionally, a wall. Two
interchangeable strategies share one successor generator and one evaluator:

- alpha-beta: depth-bounded minimax with alpha/beta pruning
- limited-anticipation: the same recursion without pruning

Pruning never changes the value found for the root.
"""

import dataclasses
import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from engine.board import Player
from engine.errors import IllegalActionError, NoLegalActionsError
from engine.game import GameState, Phase, decline_wall, move_pawn, with_validated_wall
from engine.move_generator import get_legal_moves
from engine.walls import valid_wall_placements

from .evaluator import evaluate_for
from .random_agent import RandomAgent

logger = logging.getLogger(__name__)


class SearchAlgorithm(str, Enum):
    """Available search strategies."""
    ALPHA_BETA = "alpha-beta"
    LIMITED_ANTICIPATION = "limited-anticipation"


@dataclass
class SearchOutcome:
    """Value of a searched state and the child that achieves it."""
    value: float
    state: Optional[GameState] = None
    nodes_visited: int = 0


def iter_next_states(state: GameState) -> Iterator[GameState]:
    """
    Lazily generate every complete-turn successor of ``state``.

    For each legal pawn move: the move itself (ending the turn, or winning),
    then, if the mover has walls left and did not win, one successor per valid
    wall computed against the post-move positions. Walls for a move are only
    enumerated once the consumer gets that far.
    """
    if state.is_terminal:
        return
    mover = state.current_player
    for destination in get_legal_moves(state):
        moved = move_pawn(state, destination)
        if moved.is_terminal:
            yield moved
            continue
        yield decline_wall(moved)
        if moved.walls_left(mover) > 0:
            for wall in valid_wall_placements(moved.positions, moved.walls):
                yield with_validated_wall(moved, wall)


def next_states(state: GameState) -> List[GameState]:
    """Every complete-turn successor of ``state``; empty for a won state."""
    return list(iter_next_states(state))


class MinimaxSearch:
    """
    Depth-bounded minimax over ``iter_next_states``.

    ``evaluate`` scores leaves from the maximizing side's point of view.
    A node without successors is scored like a leaf.
    """

    def __init__(self, evaluate: Callable[[GameState], float]):
        self.evaluate = evaluate
        self.nodes_visited = 0

    def alpha_beta(
        self,
        state: GameState,
        depth: int,
        maximizing: bool,
        alpha: float = -math.inf,
        beta: float = math.inf,
    ) -> SearchOutcome:
        self.nodes_visited += 1
        if depth == 0 or state.is_terminal:
            return SearchOutcome(self.evaluate(state))

        best_value = -math.inf if maximizing else math.inf
        best_state: Optional[GameState] = None
        for child in iter_next_states(state):
            value = self.alpha_beta(child, depth - 1, not maximizing, alpha, beta).value
            if maximizing:
                if value > best_value:
                    best_value, best_state = value, child
                alpha = max(alpha, best_value)
            else:
                if value < best_value:
                    best_value, best_state = value, child
                beta = min(beta, best_value)
            if beta <= alpha:
                break
        if best_state is None:
            return SearchOutcome(self.evaluate(state))
        return SearchOutcome(best_value, best_state)

    def depth_limited(self, state: GameState, depth: int, maximizing: bool) -> SearchOutcome:
        self.nodes_visited += 1
        if depth == 0 or state.is_terminal:
            return SearchOutcome(self.evaluate(state))

        best_value = -math.inf if maximizing else math.inf
        best_state: Optional[GameState] = None
        for child in iter_next_states(state):
            value = self.depth_limited(child, depth - 1, not maximizing).value
            if maximizing and value > best_value:
                best_value, best_state = value, child
            elif not maximizing and value < best_value:
                best_value, best_state = value, child
        if best_state is None:
            return SearchOutcome(self.evaluate(state))
        return SearchOutcome(best_value, best_state)


def _run(algorithm: SearchAlgorithm, state: GameState, depth: int, maximizing: bool, perspective: Player) -> SearchOutcome:
    search = MinimaxSearch(partial(evaluate_for, player=perspective))
    if algorithm is SearchAlgorithm.ALPHA_BETA:
        outcome = search.alpha_beta(state, depth, maximizing)
    else:
        outcome = search.depth_limited(state, depth, maximizing)
    outcome.nodes_visited = search.nodes_visited
    return outcome


def alpha_beta_search(state: GameState, depth: int, maximizing: bool = True, perspective: Player = Player.P2) -> SearchOutcome:
    """Minimax with alpha-beta pruning, scored from ``perspective``."""
    return _run(SearchAlgorithm.ALPHA_BETA, state, depth, maximizing, perspective)


def depth_limited_search(state: GameState, depth: int, maximizing: bool = True, perspective: Player = Player.P2) -> SearchOutcome:
    """Unpruned minimax, scored from ``perspective``."""
    return _run(SearchAlgorithm.LIMITED_ANTICIPATION, state, depth, maximizing, perspective)


class MinimaxAgent:
    """
    AI player that picks a complete turn by minimax search.

    The agent's own player is always the maximizing side.
    """

    def __init__(
        self,
        player: Player = Player.P2,
        algorithm: SearchAlgorithm = SearchAlgorithm.ALPHA_BETA,
        depth: int = 1,
        seed: Optional[int] = None,
    ):
        """
        Initialize minimax agent.

        Args:
            player: Player the agent controls
            algorithm: Search strategy
            depth: Search depth in plies (complete turns)
            seed: Random seed for the fallback move choice
        """
        if depth < 1:
            raise ValueError(f"Search depth must be at least 1, got {depth}")
        self.player = player
        self.algorithm = SearchAlgorithm(algorithm)
        self.depth = depth
        self.fallback = RandomAgent(seed=seed)

    def search(self, state: GameState) -> SearchOutcome:
        return _run(self.algorithm, state, self.depth, True, self.player)

    def choose_state(self, state: GameState) -> Tuple[GameState, Dict[str, Any]]:
        """
        Choose the successor state to commit for this agent's turn.

        Returns:
            Tuple of (successor state, search stats)

        Raises:
            IllegalActionError: Not this agent's turn, or a move is pending
            NoLegalActionsError: The agent has no legal move at all
        """
        if state.current_player is not self.player:
            raise IllegalActionError(f"It is not {self.player.value}'s turn")
        if state.phase is not Phase.MOVE:
            raise IllegalActionError("Search must start at the beginning of a turn")

        start = time.perf_counter()
        outcome = self.search(state)
        elapsed = time.perf_counter() - start
        stats: Dict[str, Any] = {
            "algorithm": self.algorithm.value,
            "depth": self.depth,
            "value": outcome.value,
            "nodes_visited": outcome.nodes_visited,
            "time_s": elapsed,
            "fallback": False,
        }
        logger.info(
            f"SEARCH {self.algorithm.value} depth={self.depth} player={self.player.value}: "
            f"value={outcome.value} nodes={outcome.nodes_visited} in {elapsed:.4f}s"
        )
        if outcome.state is not None:
            return outcome.state, stats

        logger.warning(f"Search found no successor for {self.player.value}, making a random legal move")
        stats["fallback"] = True
        return self._random_successor(state), stats

    def _random_successor(self, state: GameState) -> GameState:
        legal_moves = get_legal_moves(state)
        destination = self.fallback.select_action(state, legal_moves)
        if destination is None:
            logger.error(f"{self.player.value} has no legal moves")
            raise NoLegalActionsError(f"{self.player.value} has no legal moves")
        moved = move_pawn(state, destination)
        if moved.is_terminal:
            return moved
        return dataclasses.replace(
            decline_wall(moved),
            description=f"{self.player.value} moved randomly to {destination}",
        )

    def get_action_info(self) -> Dict[str, Any]:
        """Get information about the agent."""
        return {
            "name": "MinimaxAgent",
            "type": self.algorithm.value,
            "description": "Minimax over complete turns with a shortest-path race evaluator",
            "player": self.player.value,
            "depth": self.depth,
        }
