"""
Tests for board geometry and wall blocking.
"""

import unittest

from engine.board import BOARD_SIZE, Board, Player, Position, Wall, WallOrientation, is_valid_position

H = WallOrientation.HORIZONTAL
V = WallOrientation.VERTICAL


class TestPlayers(unittest.TestCase):
    """Test player constants."""

    def test_goal_rows_and_start(self):
        self.assertEqual(Player.P1.goal_row, 8)
        self.assertEqual(Player.P2.goal_row, 0)
        self.assertEqual(Player.P1.start_position, Position(0, 4))
        self.assertEqual(Player.P2.start_position, Position(8, 4))

    def test_opponent(self):
        assert Player.P1.opponent is Player.P2
        assert Player.P2.opponent is Player.P1


class TestBoard(unittest.TestCase):
    """Test the Board class."""

    def test_position_validation(self):
        """Test position validation."""
        assert is_valid_position(Position(0, 0))
        assert is_valid_position(Position(8, 8))
        assert not is_valid_position(Position(-1, 0))
        assert not is_valid_position(Position(0, BOARD_SIZE))

    def test_horizontal_wall_blocks_two_vertical_edges(self):
        """A horizontal wall at (3, 4) separates rows 3 and 4 in columns 4 and 5."""
        board = Board([Wall(H, 3, 4)])
        assert board.is_blocked(Position(3, 4), Position(4, 4))
        assert board.is_blocked(Position(4, 5), Position(3, 5))
        assert not board.is_blocked(Position(3, 3), Position(4, 3))
        assert not board.is_blocked(Position(3, 6), Position(4, 6))
        assert not board.is_blocked(Position(3, 4), Position(3, 5))

    def test_vertical_wall_blocks_two_horizontal_edges(self):
        """A vertical wall at (2, 2) separates columns 2 and 3 in rows 2 and 3."""
        board = Board([Wall(V, 2, 2)])
        assert board.is_blocked(Position(2, 2), Position(2, 3))
        assert board.is_blocked(Position(3, 3), Position(3, 2))
        assert not board.is_blocked(Position(1, 2), Position(1, 3))
        assert not board.is_blocked(Position(4, 2), Position(4, 3))

    def test_edge_anchor_does_not_wrap(self):
        """Walls at the far edge must not block edges on the opposite side."""
        board = Board([Wall(H, 3, 7), Wall(V, 7, 2)])
        assert board.is_blocked(Position(3, 8), Position(4, 8))
        assert not board.is_blocked(Position(3, 0), Position(4, 0))
        assert not board.is_blocked(Position(0, 2), Position(0, 3))

    def test_neighbors(self):
        board = Board()
        assert len(board.neighbors(Position(0, 0))) == 2
        assert len(board.neighbors(Position(4, 4))) == 4

        walled = Board([Wall(H, 3, 4)])
        assert set(walled.neighbors(Position(3, 4))) == {Position(2, 4), Position(3, 3), Position(3, 5)}

    def test_with_wall_leaves_original_untouched(self):
        board = Board()
        extended = board.with_wall(Wall(V, 0, 0))
        assert extended.has_wall(Wall(V, 0, 0))
        assert not board.has_wall(Wall(V, 0, 0))


if __name__ == '__main__':
    unittest.main()
