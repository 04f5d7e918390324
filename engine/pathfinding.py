"""
Breadth-first reachability over the board graph.

An edge joins two orthogonally adjacent cells unless a wall crosses it.
Pawns never block a path.
"""

from collections import deque
from typing import Iterable, List, Mapping, Optional, Union

import numpy as np

from .board import BOARD_SIZE, Board, Player, Position, Wall

# Distance returned when no goal cell is reachable.
UNREACHABLE = 10 ** 9

WallsLike = Union[Board, Iterable[Wall]]


def distance_map(start: Position, walls: WallsLike) -> np.ndarray:
    """
    BFS distances from ``start`` to every cell.

    Args:
        start: Cell to search from
        walls: Board or iterable of walls

    Returns:
        BOARD_SIZE x BOARD_SIZE int array, -1 for unreachable cells
    """
    board = Board.coerce(walls)
    dist = np.full((BOARD_SIZE, BOARD_SIZE), -1, dtype=int)
    dist[start.row, start.col] = 0
    queue = deque([(start.row, start.col, 0)])
    while queue:
        row, col, steps = queue.popleft()
        for nxt in board.open_cells(row, col):
            if dist[nxt] < 0:
                dist[nxt] = steps + 1
                queue.append((nxt[0], nxt[1], steps + 1))
    return dist


def shortest_path(player: Player, positions: Mapping[Player, Position], walls: WallsLike) -> Optional[List[Position]]:
    """
    One shortest route from the player's cell to their goal row.

    Returns:
        Cells from the start to a goal-row cell inclusive, or None when the
        goal row cannot be reached
    """
    board = Board.coerce(walls)
    start = positions[player]
    goal_row = player.goal_row
    origin = (start.row, start.col)
    parents = {origin: None}
    queue = deque([origin])
    while queue:
        cell = queue.popleft()
        if cell[0] == goal_row:
            path = []
            while cell is not None:
                path.append(Position(*cell))
                cell = parents[cell]
            path.reverse()
            return path
        for nxt in board.open_cells(*cell):
            if nxt not in parents:
                parents[nxt] = cell
                queue.append(nxt)
    return None


def shortest_path_length(player: Player, positions: Mapping[Player, Position], walls: WallsLike) -> int:
    """
    Minimum number of steps from the player's cell to any cell of their goal row.

    Returns UNREACHABLE when the goal row cannot be reached.
    """
    board = Board.coerce(walls)
    start = positions[player]
    goal_row = player.goal_row
    if start.row == goal_row:
        return 0

    origin = (start.row, start.col)
    visited = {origin}
    frontier = [origin]
    steps = 0
    while frontier:
        steps += 1
        next_frontier = []
        for cell in frontier:
            for nxt in board.open_cells(*cell):
                if nxt in visited:
                    continue
                if nxt[0] == goal_row:
                    return steps
                visited.add(nxt)
                next_frontier.append(nxt)
        frontier = next_frontier
    return UNREACHABLE


def can_reach_goal(player: Player, positions: Mapping[Player, Position], walls: WallsLike) -> bool:
    """True if the player still has any path to their goal row."""
    return shortest_path_length(player, positions, walls) != UNREACHABLE
