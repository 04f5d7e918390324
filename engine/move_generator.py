"""
Pawn move legality, including straight jumps and diagonal jumps.
"""

from typing import List, Mapping, TYPE_CHECKING

from .board import DIRECTIONS, Board, Player, Position, is_valid_position
from .pathfinding import WallsLike

if TYPE_CHECKING:
    from .game import GameState


def _opponent_position(position: Position, positions: Mapping[Player, Position]) -> Position:
    for player in (Player.P1, Player.P2):
        if positions[player] != position:
            return positions[player]
    # Both pawns on one cell only happens with corrupted input
    raise ValueError(f"Both players occupy {position}")


def legal_pawn_moves(position: Position, positions: Mapping[Player, Position], walls: WallsLike) -> List[Position]:
    """
    Get all cells the pawn at ``position`` may move to.

    For each direction:
    - an empty, reachable neighbour is a legal step;
    - if the opponent stands there, jump straight over it when the cell behind
      is on the board and not walled off;
    - otherwise try the two cells beside the opponent, perpendicular to the
      direction of approach, each legal when on the board and not separated
      from the opponent's cell by a wall.

    Args:
        position: Cell of the pawn to move
        positions: Cells of both players
        walls: Board or iterable of walls

    Returns:
        Legal destinations without duplicates, in direction order
    """
    board = Board.coerce(walls)
    opponent = _opponent_position(position, positions)
    moves: List[Position] = []

    for dr, dc in DIRECTIONS:
        step = position.offset(dr, dc)
        if not is_valid_position(step) or board.is_blocked(position, step):
            continue

        if step != opponent:
            moves.append(step)
            continue

        jump = step.offset(dr, dc)
        if is_valid_position(jump) and not board.is_blocked(step, jump):
            moves.append(jump)
            continue

        # Straight jump unavailable: side-step around the opponent
        sides = ((0, -1), (0, 1)) if dc == 0 else ((-1, 0), (1, 0))
        for sr, sc in sides:
            diagonal = opponent.offset(sr, sc)
            if not is_valid_position(diagonal):
                continue
            if board.is_blocked(opponent, diagonal):
                continue
            moves.append(diagonal)

    unique: List[Position] = []
    for move in moves:
        if move not in unique:
            unique.append(move)
    return unique


def get_legal_moves(state: "GameState") -> List[Position]:
    """Legal destinations for the player to act in ``state``."""
    positions = state.positions
    return legal_pawn_moves(positions[state.current_player], positions, state.board)
