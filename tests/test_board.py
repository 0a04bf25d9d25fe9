# -*-  coding: utf-8 -*-
"""
Set of test for the pure board functions.
"""
from unittest import TestCase, main

import numpy as np

from tilemerge.core.gameboard import (
    create_generator,
    has_tile,
    is_done,
    is_power_of_two,
    merge_line,
    slide_and_merge,
    spawn_tile,
)
from tilemerge.core.gamemove import Direction
from tilemerge.core.report import Merge, Movement, Position


class TestMergeLine(TestCase):
    """
    Test for line compression and single-pass merging.
    """

    def test_merge_pairs(self):
        """Two pairs merge independently."""
        score, result, origins = merge_line(np.array([2, 2, 4, 4]))
        self.assertEqual(score, 12)
        np.testing.assert_array_equal(result, np.array([4, 8]))
        self.assertEqual(origins, [(0, 1), (2, 3)])

    def test_single_pass(self):
        """A merged tile never merges again in the same move."""
        score, result, _ = merge_line(np.array([2, 2, 2, 2]))
        self.assertEqual(score, 8)
        np.testing.assert_array_equal(result, np.array([4, 4]))

    def test_order_preserved(self):
        """Compression keeps the relative order of tiles."""
        score, result, origins = merge_line(np.array([0, 2, 0, 4]))
        self.assertEqual(score, 0)
        np.testing.assert_array_equal(result, np.array([2, 4]))
        self.assertEqual(origins, [(1,), (3,)])

    def test_merge_across_gap(self):
        """Equal tiles separated by empty cells merge."""
        score, result, origins = merge_line(np.array([4, 0, 0, 4]))
        self.assertEqual(score, 8)
        np.testing.assert_array_equal(result, np.array([8]))
        self.assertEqual(origins, [(0, 3)])

    def test_leading_pair_wins(self):
        """With three equal tiles, the two nearest the edge merge."""
        score, result, origins = merge_line(np.array([2, 2, 2, 0]))
        self.assertEqual(score, 4)
        np.testing.assert_array_equal(result, np.array([4, 2]))
        self.assertEqual(origins, [(0, 1), (2,)])

    def test_empty_line(self):
        """An empty line produces nothing."""
        score, result, origins = merge_line(np.zeros(4, dtype=np.int64))
        self.assertEqual(score, 0)
        self.assertEqual(len(result), 0)
        self.assertEqual(origins, [])


class TestSlideAndMerge(TestCase):
    """
    Test whole-board moves and the movement and merge logs they produce.
    """

    def test_left(self):
        """Every row slides and merges toward column 0."""
        board = np.array([[2, 2, 4, 4], [0, 2, 2, 4], [2, 0, 0, 2], [2, 2, 2, 2]])
        score, result, _, merges = slide_and_merge(board, Direction.LEFT)
        expected = np.array([[4, 8, 0, 0], [4, 4, 0, 0], [4, 0, 0, 0], [4, 4, 0, 0]])
        self.assertEqual(score, 28)
        self.assertEqual(len(merges), 6)
        np.testing.assert_array_equal(result, expected)

    def test_input_not_modified(self):
        """The input board is left untouched."""
        board = np.array([[2, 2, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        original = board.copy()
        slide_and_merge(board, Direction.RIGHT)
        np.testing.assert_array_equal(board, original)

    def test_right_active_and_passive(self):
        """Moving right, the tile further from the right edge is the active half of the merge."""
        board = np.array([[2, 2, 2, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        score, result, movements, merges = slide_and_merge(board, Direction.RIGHT)

        np.testing.assert_array_equal(result[0], np.array([0, 0, 2, 4]))
        self.assertEqual(score, 4)
        self.assertEqual(merges, [Merge(active=Position(0, 1), passive=Position(0, 2), target=Position(0, 3), value=4)])
        self.assertEqual(movements, [Movement(source=Position(0, 0), target=Position(0, 2), value=2)])

    def test_up(self):
        """Moving up merges along columns toward row 0."""
        board = np.array([[2, 0, 0, 0], [0, 0, 0, 0], [2, 0, 0, 0], [4, 0, 0, 0]])
        score, result, movements, merges = slide_and_merge(board, Direction.UP)

        np.testing.assert_array_equal(result[:, 0], np.array([4, 4, 0, 0]))
        self.assertEqual(score, 4)
        self.assertEqual(merges, [Merge(active=Position(2, 0), passive=Position(0, 0), target=Position(0, 0), value=4)])
        self.assertEqual(movements, [Movement(source=Position(3, 0), target=Position(1, 0), value=4)])

    def test_down_skips_stationary_tiles(self):
        """Tiles that do not move are not reported as movements."""
        board = np.array([[2, 0, 0, 0], [0, 0, 0, 0], [2, 0, 0, 0], [4, 0, 0, 0]])
        score, result, movements, merges = slide_and_merge(board, Direction.DOWN)

        np.testing.assert_array_equal(result[:, 0], np.array([0, 0, 4, 4]))
        self.assertEqual(score, 4)
        self.assertEqual(movements, [])
        self.assertEqual(merges, [Merge(active=Position(0, 0), passive=Position(2, 0), target=Position(2, 0), value=4)])

    def test_no_change(self):
        """A board already packed against the edge does not change."""
        board = np.array([[2, 4, 0, 0], [8, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
        score, result, movements, merges = slide_and_merge(board, Direction.LEFT)
        self.assertEqual(score, 0)
        self.assertEqual(movements, [])
        self.assertEqual(merges, [])
        np.testing.assert_array_equal(result, board)


class TestSpawnTile(TestCase):
    """
    Test random tile placement.
    """

    def test_full_board(self):
        """Nothing is spawned on a full board."""
        board = np.full((4, 4), 2, dtype=np.int64)
        self.assertIsNone(spawn_tile(board, create_generator(0)))
        self.assertTrue(np.all(board == 2))

    def test_single_empty_cell(self):
        """The only empty cell receives the tile."""
        board = np.full((4, 4), 8, dtype=np.int64)
        board[1, 2] = 0
        spawned = spawn_tile(board, create_generator(0))

        self.assertEqual(spawned.position, Position(1, 2))
        self.assertIn(spawned.value, (2, 4))
        self.assertEqual(board[1, 2], spawned.value)

    def test_value_distribution(self):
        """Roughly 10% of spawned tiles are 4 and every empty cell can be chosen."""
        generator = create_generator(7)
        fours, cells = 0, set()
        for _ in range(2000):
            board = np.zeros((4, 4), dtype=np.int64)
            spawned = spawn_tile(board, generator)
            fours += spawned.value == 4
            cells.add(spawned.position)

        self.assertTrue(0.07 < fours / 2000 < 0.13)
        self.assertEqual(len(cells), 16)

    def test_seed_reproducibility(self):
        """Same seed spawns the same tile."""
        first = spawn_tile(np.zeros((4, 4), dtype=np.int64), create_generator(42))
        second = spawn_tile(np.zeros((4, 4), dtype=np.int64), create_generator(42))
        self.assertEqual(first, second)


class TestTerminal(TestCase):
    """
    Test terminal-state and tile checks.
    """

    def test_is_done(self):
        """A full board without equal neighbours is finished."""
        board = np.array([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]])
        self.assertTrue(is_done(board))

    def test_not_done_with_pair(self):
        """A full board with a vertical pair is not finished."""
        board = np.array([[2, 4, 8, 16], [2, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 65536]])
        self.assertFalse(is_done(board))

    def test_not_done_with_empty_cell(self):
        """Any empty cell keeps the game going."""
        board = np.array([[2, 4, 8, 16], [32, 64, 128, 256], [512, 1024, 2048, 4096], [8192, 16384, 32768, 0]])
        self.assertFalse(is_done(board))

    def test_has_tile(self):
        """Only an exact value counts."""
        board = np.array([[2, 4], [4096, 0]])
        self.assertTrue(has_tile(board, 4096))
        self.assertFalse(has_tile(board, 2048))

    def test_is_power_of_two(self):
        self.assertTrue(is_power_of_two(1))
        self.assertTrue(is_power_of_two(2048))
        self.assertFalse(is_power_of_two(0))
        self.assertFalse(is_power_of_two(6))
        self.assertFalse(is_power_of_two(-2))


if __name__ == "__main__":
    main()
