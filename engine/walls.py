"""
Wall placement legality: bounds, overlap and connectivity.
"""

from typing import Iterable, List, Mapping, Set

from .board import WALL_GRID_SIZE, Board, Edge, Player, Position, Wall, WallOrientation, edge_between
from .errors import PathBlockedError, WallOverlapError
from .pathfinding import WallsLike, can_reach_goal, shortest_path


def is_wall_in_bounds(wall: Wall) -> bool:
    """Both anchor coordinates must lie on the 8x8 anchor grid."""
    return 0 <= wall.row < WALL_GRID_SIZE and 0 <= wall.col < WALL_GRID_SIZE


def _conflicts(candidate: Wall, other: Wall) -> bool:
    if candidate.orientation is other.orientation:
        if candidate.is_horizontal:
            return other.row == candidate.row and abs(other.col - candidate.col) <= 1
        return other.col == candidate.col and abs(other.row - candidate.row) <= 1
    # Crossing walls share the central intersection
    return other.row == candidate.row and other.col == candidate.col


def is_overlapping(candidate: Wall, existing_walls: Iterable[Wall]) -> bool:
    """
    True if ``candidate`` overlaps or crosses any existing wall.

    Same orientation: walls on the same line whose anchors are within one cell
    along the wall's length overlap. Cross orientation: only identical anchors
    conflict.
    """
    return any(_conflicts(candidate, wall) for wall in existing_walls)


def conflicting_walls(wall: Wall) -> List[Wall]:
    """Every wall that cannot coexist with ``wall``, including ``wall`` itself."""
    if wall.is_horizontal:
        same = [Wall(wall.orientation, wall.row, wall.col + d) for d in (-1, 0, 1)]
        cross = WallOrientation.VERTICAL
    else:
        same = [Wall(wall.orientation, wall.row + d, wall.col) for d in (-1, 0, 1)]
        cross = WallOrientation.HORIZONTAL
    return same + [Wall(cross, wall.row, wall.col)]


def both_players_connected(positions: Mapping[Player, Position], walls: WallsLike) -> bool:
    board = Board.coerce(walls)
    return all(can_reach_goal(player, positions, board) for player in Player)


def check_wall_placement(wall: Wall, positions: Mapping[Player, Position], walls: Iterable[Wall]) -> None:
    """
    Raise if ``wall`` cannot be added to ``walls``.

    Raises:
        WallOverlapError: Out of bounds, overlapping or crossing
        PathBlockedError: Either player would lose their last path to goal
    """
    walls = list(walls)
    if not is_wall_in_bounds(wall):
        raise WallOverlapError(f"{wall} is outside the board")
    if is_overlapping(wall, walls):
        raise WallOverlapError(f"{wall} overlaps an existing wall")
    if not both_players_connected(positions, Board(walls).with_wall(wall)):
        raise PathBlockedError()


def is_valid_wall_placement(wall: Wall, positions: Mapping[Player, Position], walls: Iterable[Wall]) -> bool:
    walls = list(walls)
    if not is_wall_in_bounds(wall) or is_overlapping(wall, walls):
        return False
    return both_players_connected(positions, Board(walls).with_wall(wall))


def valid_wall_placements(positions: Mapping[Player, Position], walls: Iterable[Wall]) -> List[Wall]:
    """
    Enumerate every legal wall for the given positions and wall set.

    All 2 x 8 x 8 anchors are tried; each survivor is non-overlapping and keeps
    both players connected to their goal rows. A wall that cuts no edge of
    either player's current shortest path leaves that path intact, so the
    breadth-first check only runs for walls that do.
    """
    walls = list(walls)
    board = Board(walls)

    taken: Set[Wall] = set()
    for wall in walls:
        taken.update(conflicting_walls(wall))

    path_edges: Set[Edge] = set()
    for player in Player:
        path = shortest_path(player, positions, board)
        if path is None:
            return []
        path_edges.update(edge_between(a, b) for a, b in zip(path, path[1:]))

    valid: List[Wall] = []
    for row in range(WALL_GRID_SIZE):
        for col in range(WALL_GRID_SIZE):
            for orientation in (WallOrientation.HORIZONTAL, WallOrientation.VERTICAL):
                candidate = Wall(orientation, row, col)
                if candidate in taken:
                    continue
                if path_edges.isdisjoint(candidate.blocked_edges()) or \
                        both_players_connected(positions, board.with_wall(candidate)):
                    valid.append(candidate)
    return valid
