"""
Quoridor game engine package.

This package contains the core game logic for Quoridor, including:
- Board geometry and wall layout
- Breadth-first connectivity checks
- Pawn move and wall placement legality
- Game state and turn state machine
- Branching game history
"""

from .board import BOARD_SIZE, WALLS_PER_PLAYER, Board, Player, Position, Wall, WallOrientation
from .errors import (
    IllegalActionError, MalformedStateError, NoLegalActionsError,
    PathBlockedError, QuoridorError, UnknownNodeError, WallOverlapError,
)
from .game import (
    DeclineWall, GameState, PawnMove, Phase, QuoridorGame, WallPlacement,
    apply_action, decline_wall, initial_state, move_pawn, place_wall,
)
from .history import GameHistoryTree, HistoryNode
from .move_generator import get_legal_moves, legal_pawn_moves
from .pathfinding import UNREACHABLE, can_reach_goal, shortest_path_length
from .walls import is_overlapping, valid_wall_placements

__all__ = [
    'BOARD_SIZE', 'WALLS_PER_PLAYER', 'Board', 'Player', 'Position', 'Wall', 'WallOrientation',
    'QuoridorError', 'IllegalActionError', 'WallOverlapError', 'PathBlockedError',
    'MalformedStateError', 'NoLegalActionsError', 'UnknownNodeError',
    'GameState', 'Phase', 'PawnMove', 'WallPlacement', 'DeclineWall', 'QuoridorGame',
    'apply_action', 'decline_wall', 'initial_state', 'move_pawn', 'place_wall',
    'GameHistoryTree', 'HistoryNode',
    'get_legal_moves', 'legal_pawn_moves',
    'UNREACHABLE', 'can_reach_goal', 'shortest_path_length',
    'is_overlapping', 'valid_wall_placements',
]
