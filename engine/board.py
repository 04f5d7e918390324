"""
Quoridor board geometry: players, cells, walls and the blocked-edge grid.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Tuple

import numpy as np

BOARD_SIZE = 9
WALL_GRID_SIZE = BOARD_SIZE - 1
WALLS_PER_PLAYER = 10

# Up, down, left, right. Search and move generation expand in this order.
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

Cell = Tuple[int, int]
# Pair of adjacent cells, smaller (row, col) first
Edge = Tuple[Cell, Cell]


def edge_between(a: "Position", b: "Position") -> Edge:
    first, second = (a.row, a.col), (b.row, b.col)
    return (first, second) if first < second else (second, first)


class Player(Enum):
    """Player enumeration."""
    P1 = "P1"
    P2 = "P2"

    @property
    def index(self) -> int:
        return 0 if self is Player.P1 else 1

    @property
    def opponent(self) -> "Player":
        return Player.P2 if self is Player.P1 else Player.P1

    @property
    def goal_row(self) -> int:
        """Row this player must reach to win."""
        return BOARD_SIZE - 1 if self is Player.P1 else 0

    @property
    def start_position(self) -> "Position":
        row = 0 if self is Player.P1 else BOARD_SIZE - 1
        return Position(row, BOARD_SIZE // 2)


@dataclass(frozen=True)
class Position:
    """Represents a cell on the board."""
    row: int
    col: int

    def offset(self, dr: int, dc: int) -> "Position":
        return Position(self.row + dr, self.col + dc)

    def is_adjacent(self, other: "Position") -> bool:
        """True when the cells share an edge."""
        return abs(self.row - other.row) + abs(self.col - other.col) == 1

    def __str__(self):
        return f"({self.row},{self.col})"


class WallOrientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Wall:
    """
    Two-cell wall anchored at its top-left grid intersection.

    A horizontal wall at (r, c) separates rows r and r+1 for columns c and c+1.
    A vertical wall at (r, c) separates columns c and c+1 for rows r and r+1.
    """
    orientation: WallOrientation
    row: int
    col: int

    @property
    def is_horizontal(self) -> bool:
        return self.orientation is WallOrientation.HORIZONTAL

    def sort_key(self) -> Tuple[int, int, str]:
        return (self.row, self.col, self.orientation.value)

    def blocked_edges(self) -> Tuple[Edge, Edge]:
        """The two cell-to-cell edges this wall cuts."""
        r, c = self.row, self.col
        if self.is_horizontal:
            return ((r, c), (r + 1, c)), ((r, c + 1), (r + 1, c + 1))
        return ((r, c), (r, c + 1)), ((r + 1, c), (r + 1, c + 1))

    def __str__(self):
        return f"{self.orientation.value} wall at ({self.row},{self.col})"


def is_valid_position(pos: Position) -> bool:
    """Check if position is within board bounds."""
    return 0 <= pos.row < BOARD_SIZE and 0 <= pos.col < BOARD_SIZE


class Board:
    """
    Wall layout of a Quoridor board.

    Walls are kept in two boolean anchor grids (one per orientation). From
    those the blocked edges are derived once per board with array slicing and
    stored as nested lists, so path searches read plain Python values. Boards
    are treated as immutable; use ``with_wall`` to derive a new one.
    """

    SIZE = BOARD_SIZE

    def __init__(self, walls: Iterable[Wall] = ()):
        self.h_walls = np.zeros((WALL_GRID_SIZE, WALL_GRID_SIZE), dtype=bool)
        self.v_walls = np.zeros((WALL_GRID_SIZE, WALL_GRID_SIZE), dtype=bool)
        for wall in walls:
            self._set(wall)
        self._derive_edges()

    @classmethod
    def coerce(cls, walls) -> "Board":
        """Accept either a Board or an iterable of walls."""
        if isinstance(walls, Board):
            return walls
        return cls(walls)

    def _set(self, wall: Wall) -> None:
        grid = self.h_walls if wall.is_horizontal else self.v_walls
        grid[wall.row, wall.col] = True

    def _derive_edges(self) -> None:
        # down[r][c]: edge (r, c)-(r+1, c); right[r][c]: edge (r, c)-(r, c+1)
        down = np.zeros((BOARD_SIZE - 1, BOARD_SIZE), dtype=bool)
        down[:, :-1] |= self.h_walls
        down[:, 1:] |= self.h_walls
        right = np.zeros((BOARD_SIZE, BOARD_SIZE - 1), dtype=bool)
        right[:-1, :] |= self.v_walls
        right[1:, :] |= self.v_walls
        self._down: List[List[bool]] = down.tolist()
        self._right: List[List[bool]] = right.tolist()

    def with_wall(self, wall: Wall) -> "Board":
        """Return a copy of the board with one more wall."""
        new_board = Board.__new__(Board)
        new_board.h_walls = self.h_walls.copy()
        new_board.v_walls = self.v_walls.copy()
        new_board._set(wall)
        new_board._derive_edges()
        return new_board

    def has_wall(self, wall: Wall) -> bool:
        grid = self.h_walls if wall.is_horizontal else self.v_walls
        return bool(grid[wall.row, wall.col])

    def is_blocked(self, start: Position, end: Position) -> bool:
        """
        True if a wall lies on the edge between two orthogonally adjacent cells.
        """
        if start.row != end.row:
            return self._down[min(start.row, end.row)][start.col]
        if start.col != end.col:
            return self._right[start.row][min(start.col, end.col)]
        return False

    def open_cells(self, row: int, col: int) -> List[Cell]:
        """Adjacent (row, col) pairs reachable in one step, up/down/left/right."""
        cells = []
        if row > 0 and not self._down[row - 1][col]:
            cells.append((row - 1, col))
        if row < BOARD_SIZE - 1 and not self._down[row][col]:
            cells.append((row + 1, col))
        if col > 0 and not self._right[row][col - 1]:
            cells.append((row, col - 1))
        if col < BOARD_SIZE - 1 and not self._right[row][col]:
            cells.append((row, col + 1))
        return cells

    def neighbors(self, pos: Position) -> List[Position]:
        """On-board cells reachable from ``pos`` in one step without crossing a wall."""
        return [Position(row, col) for row, col in self.open_cells(pos.row, pos.col)]

    def __str__(self) -> str:
        """ASCII rendering of the wall anchors, H/V/+ per intersection."""
        lines = []
        for row in range(WALL_GRID_SIZE):
            line = ""
            for col in range(WALL_GRID_SIZE):
                h, v = self.h_walls[row, col], self.v_walls[row, col]
                line += "+" if h and v else "H" if h else "V" if v else "."
            lines.append(line)
        return "\n".join(lines)
