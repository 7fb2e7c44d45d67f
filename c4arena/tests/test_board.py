import unittest

from c4arena.engine.board import Board
from c4arena.engine.constants import EMPTY, PLAYER_1, PLAYER_2


class TestBoard(unittest.TestCase):
    def setUp(self):
        self.board = Board()

    def test_empty_board(self):
        self.assertEqual(self.board.rows, 6)
        self.assertEqual(self.board.cols, 7)
        self.assertEqual(self.board.valid_moves(), [0, 1, 2, 3, 4, 5, 6])
        self.assertEqual(self.board.disc_count(), 0)
        self.assertEqual(self.board.player_to_move(), PLAYER_1)

    def test_gravity(self):
        """Discs stack from the bottom row (row 5) upwards."""
        self.assertEqual(self.board.drop_row(3), 5)
        self.assertEqual(self.board.place(3, PLAYER_1), 5)
        self.assertEqual(self.board.place(3, PLAYER_2), 4)
        self.assertEqual(self.board.drop_row(3), 3)
        self.assertEqual(self.board.column_height(3), 2)
        self.assertEqual(self.board.player_to_move(), PLAYER_1)

    def test_full_column(self):
        for i in range(6):
            self.board.place(0, PLAYER_1 if i % 2 == 0 else PLAYER_2)
        self.assertIsNone(self.board.drop_row(0))
        self.assertIsNone(self.board.place(0, PLAYER_1))
        self.assertTrue(self.board.is_column_full(0))
        self.assertNotIn(0, self.board.valid_moves())

    def test_out_of_range_column(self):
        with self.assertRaises(ValueError):
            self.board.drop_row(7)
        with self.assertRaises(ValueError):
            self.board.drop_row(-1)
        with self.assertRaises(ValueError):
            self.board.cell(6, 0)

    def test_remove_top(self):
        self.board.place(2, PLAYER_1)
        self.board.place(2, PLAYER_2)
        self.assertEqual(self.board.remove_top(2), 4)
        self.assertEqual(self.board.cell(4, 2), EMPTY)
        self.assertEqual(self.board.column_height(2), 1)
        self.assertIsNone(self.board.remove_top(5))

    def test_copy_isolation(self):
        self.board.place(3, PLAYER_1)
        clone = self.board.copy()
        self.assertEqual(clone, self.board)

        clone.place(3, PLAYER_2)
        self.assertNotEqual(clone, self.board)
        self.assertEqual(self.board.cell(4, 3), EMPTY)
        self.assertEqual(self.board.column_height(3), 1)

    def test_scan_line_horizontal(self):
        for c in range(3):
            self.board.place(c, PLAYER_1)
        self.assertEqual(self.board.scan_line(5, 3, 0, 1, PLAYER_1), 4)
        self.assertTrue(self.board.is_winning_placement(5, 3, PLAYER_1))
        self.assertFalse(self.board.is_winning_placement(5, 3, PLAYER_2))

    def test_vertical_win(self):
        for _ in range(3):
            self.board.place(6, PLAYER_2)
        self.assertTrue(self.board.is_winning_placement(2, 6, PLAYER_2))
        row = self.board.place(6, PLAYER_2)
        self.assertEqual(self.board.winning_line(row, 6, PLAYER_2), [(2, 6), (3, 6), (4, 6), (5, 6)])

    def test_rising_diagonal_from_left_edge(self):
        """
        Scenario: P1 holds (5,0), (4,1), (3,2). (2,3) completes the diagonal.
        """
        matrix = [
            [0, 0, 0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0, 0, 0],
            [0, 0, 1, 2, 0, 0, 0],
            [0, 1, 2, 2, 0, 0, 0],
            [1, 2, 2, 2, 0, 0, 0],
        ]
        board = Board.from_matrix(matrix)
        self.assertEqual(board.drop_row(3), 2)
        self.assertTrue(board.is_winning_placement(2, 3, PLAYER_1))
        self.assertEqual(board.place(3, PLAYER_1), 2)
        self.assertEqual(board.winning_line(2, 3, PLAYER_1), [(2, 3), (3, 2), (4, 1), (5, 0)])

    def test_falling_diagonal_to_right_edge(self):
        matrix = [
            [0, 0, 0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0, 0, 0],
            [0, 0, 0, 0, 0, 0, 0],
            [0, 0, 0, 2, 1, 0, 0],
            [0, 0, 0, 2, 2, 1, 0],
            [0, 0, 0, 2, 2, 2, 1],
        ]
        board = Board.from_matrix(matrix)
        self.assertTrue(board.is_winning_placement(2, 3, PLAYER_1))
        board.place(3, PLAYER_1)
        self.assertEqual(board.winning_line(2, 3, PLAYER_1), [(2, 3), (3, 4), (4, 5), (5, 6)])

    def test_top_row_horizontal_win(self):
        """
        Scenario: board full except (0,3). The last disc lands on the top row
        and completes a line on either side of it.
        """
        matrix = [
            [1, 1, 1, 0, 2, 2, 2],
            [2, 1, 2, 1, 2, 1, 2],
            [2, 1, 2, 1, 2, 1, 2],
            [1, 2, 1, 2, 1, 2, 1],
            [1, 2, 1, 2, 1, 2, 1],
            [2, 1, 2, 1, 2, 1, 2],
        ]
        board = Board.from_matrix(matrix)
        self.assertEqual(board.valid_moves(), [3])
        self.assertEqual(board.drop_row(3), 0)
        self.assertTrue(board.is_winning_placement(0, 3, PLAYER_1))
        self.assertTrue(board.is_winning_placement(0, 3, PLAYER_2))

        board.place(3, PLAYER_1)
        self.assertTrue(board.is_full())
        self.assertEqual(board.winning_line(0, 3, PLAYER_1), [(0, 0), (0, 1), (0, 2), (0, 3)])

    def test_bottom_row_win_in_first_column(self):
        for c in (1, 2, 3):
            self.board.place(c, PLAYER_1)
        self.assertTrue(self.board.is_winning_placement(5, 0, PLAYER_1))
        self.board.place(0, PLAYER_1)
        self.assertEqual(self.board.winning_line(5, 0, PLAYER_1), [(5, 0), (5, 1), (5, 2), (5, 3)])

    def test_vertical_win_reaching_top_row(self):
        # Last column: two P2 discs, then P1 stacks up to the top
        for player in (PLAYER_2, PLAYER_2, PLAYER_1, PLAYER_1, PLAYER_1):
            self.board.place(6, player)
        self.assertEqual(self.board.drop_row(6), 0)
        self.assertTrue(self.board.is_winning_placement(0, 6, PLAYER_1))
        self.assertFalse(self.board.is_winning_placement(0, 6, PLAYER_2))
        self.board.place(6, PLAYER_1)
        self.assertEqual(self.board.winning_line(0, 6, PLAYER_1), [(0, 6), (1, 6), (2, 6), (3, 6)])

    def test_three_is_not_a_win(self):
        for c in range(2):
            self.board.place(c, PLAYER_1)
        self.assertFalse(self.board.is_winning_placement(5, 2, PLAYER_1))
        self.assertIsNone(self.board.winning_line(5, 2, PLAYER_1))

    def test_from_matrix_round_trip(self):
        self.board.place(0, PLAYER_1)
        self.board.place(0, PLAYER_2)
        self.board.place(4, PLAYER_1)
        rebuilt = Board.from_matrix(self.board.to_matrix())
        self.assertEqual(rebuilt, self.board)
        self.assertEqual(rebuilt.column_height(0), 2)

    def test_from_matrix_rejects_floating_disc(self):
        matrix = [[0] * 7 for _ in range(6)]
        matrix[4][2] = 1
        with self.assertRaises(ValueError):
            Board.from_matrix(matrix)

    def test_from_matrix_rejects_unknown_value(self):
        matrix = [[0] * 7 for _ in range(6)]
        matrix[5][0] = 3
        with self.assertRaises(ValueError):
            Board.from_matrix(matrix)

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            Board(rows=0)
        with self.assertRaises(ValueError):
            Board(rows=3, cols=3, win_length=4)

    def test_window_geometry(self):
        # 24 horizontal, 21 vertical and 12 per diagonal slope on 6x7
        self.assertEqual(len(self.board.windows()), 69)
        self.assertEqual(len(self.board.windows_through(5, 3)), 7)
        self.assertEqual(len(self.board.windows_through(5, 0)), 3)

    def test_visual_board(self):
        self.board.place(3, PLAYER_1)
        self.board.place(3, PLAYER_2)
        lines = self.board.get_visual_board().split("\n")
        self.assertEqual(lines[0], " 0 1 2 3 4 5 6")
        self.assertEqual(lines[-1], "|.|.|.|X|.|.|.|")
        self.assertEqual(lines[-2], "|.|.|.|O|.|.|.|")
        self.assertIn("Column 3: P1, P2", self.board.get_textual_description())


if __name__ == '__main__':
    unittest.main()
