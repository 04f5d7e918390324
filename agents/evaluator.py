"""
Static evaluation of Quoridor states.

Scores are race margins: P1's shortest path length minus P2's. Positive
values favour P2, negative values favour P1, and a won state saturates to
plus or minus WIN_SCORE.
"""

from engine.board import Player
from engine.game import GameState
from engine.pathfinding import UNREACHABLE, shortest_path_length

WIN_SCORE = UNREACHABLE


def evaluate(state: GameState) -> int:
    """Score ``state`` on the P2-positive scale."""
    if state.winner is Player.P2:
        return WIN_SCORE
    if state.winner is Player.P1:
        return -WIN_SCORE
    positions = state.positions
    board = state.board
    return shortest_path_length(Player.P1, positions, board) - shortest_path_length(Player.P2, positions, board)


def evaluate_for(state: GameState, player: Player) -> int:
    """Score ``state`` from ``player``'s point of view (higher is better)."""
    score = evaluate(state)
    return score if player is Player.P2 else -score
