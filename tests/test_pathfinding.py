"""
Tests for breadth-first connectivity.
"""

import unittest

from engine.board import Board, Player, Position, Wall, WallOrientation
from engine.pathfinding import UNREACHABLE, can_reach_goal, distance_map, shortest_path, shortest_path_length

H = WallOrientation.HORIZONTAL

START = {Player.P1: Position(0, 4), Player.P2: Position(8, 4)}


class TestShortestPath(unittest.TestCase):
    """Test shortest path lengths to goal rows."""

    def test_empty_board_distance_is_eight(self):
        assert shortest_path_length(Player.P1, START, []) == 8
        assert shortest_path_length(Player.P2, START, []) == 8

    def test_detour_through_gap(self):
        """A barrier across columns 0-7 forces a detour through column 8."""
        walls = [Wall(H, 3, 0), Wall(H, 3, 2), Wall(H, 3, 4), Wall(H, 3, 6)]
        # 3 down, 4 right, through the gap, 4 more down
        assert shortest_path_length(Player.P1, START, walls) == 12
        assert shortest_path_length(Player.P2, START, Board(walls)) == 12

    def test_sealed_board_is_unreachable(self):
        walls = [Wall(H, 3, 0), Wall(H, 3, 2), Wall(H, 3, 4), Wall(H, 3, 6), Wall(H, 3, 7)]
        assert shortest_path_length(Player.P1, START, walls) == UNREACHABLE
        assert not can_reach_goal(Player.P1, START, walls)
        assert not can_reach_goal(Player.P2, START, walls)

    def test_shortest_path_follows_open_edges(self):
        walls = [Wall(H, 3, 0), Wall(H, 3, 2), Wall(H, 3, 4), Wall(H, 3, 6)]
        board = Board(walls)
        path = shortest_path(Player.P1, START, board)
        assert path[0] == START[Player.P1]
        assert path[-1].row == Player.P1.goal_row
        assert len(path) - 1 == shortest_path_length(Player.P1, START, board)
        for a, b in zip(path, path[1:]):
            assert a.is_adjacent(b)
            assert not board.is_blocked(a, b)

    def test_shortest_path_when_sealed(self):
        walls = [Wall(H, 3, 0), Wall(H, 3, 2), Wall(H, 3, 4), Wall(H, 3, 6), Wall(H, 3, 7)]
        assert shortest_path(Player.P2, START, walls) is None
        assert shortest_path(Player.P1, {Player.P1: Position(8, 2), Player.P2: Position(0, 0)}, []) == [Position(8, 2)]

    def test_player_on_goal_row(self):
        positions = {Player.P1: Position(8, 0), Player.P2: Position(0, 0)}
        assert shortest_path_length(Player.P1, positions, []) == 0
        assert shortest_path_length(Player.P2, positions, []) == 0

    def test_pawns_do_not_block(self):
        """The opponent's pawn is not an obstacle for path length."""
        positions = {Player.P1: Position(3, 4), Player.P2: Position(4, 4)}
        assert shortest_path_length(Player.P1, positions, []) == 5


class TestDistanceMap(unittest.TestCase):

    def test_distances_from_corner(self):
        dist = distance_map(Position(0, 0), [])
        assert dist[0, 0] == 0
        assert dist[8, 8] == 16
        assert (dist >= 0).all()

    def test_unreachable_cells_marked(self):
        walls = [Wall(H, 3, 0), Wall(H, 3, 2), Wall(H, 3, 4), Wall(H, 3, 6), Wall(H, 3, 7)]
        dist = distance_map(Position(0, 0), walls)
        assert dist[3, 8] >= 0
        assert dist[4, 0] == -1


if __name__ == '__main__':
    unittest.main()
