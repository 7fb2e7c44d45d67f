import io
import unittest
from contextlib import redirect_stdout

from c4arena.cli import build_parser, main


class TestCli(unittest.TestCase):
    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(list(argv))
        return code, out.getvalue()

    def test_match(self):
        code, output = self.run_cli("match", "smart-random", "defensive-mixed", "--games", "2")
        self.assertEqual(code, 0)
        self.assertIn("smart-random (P1):", output)
        self.assertIn("Draws:", output)

    def test_tournament(self):
        code, output = self.run_cli("tournament", "--bots", "smart-random", "offensive-mixed", "--seed", "1")
        self.assertEqual(code, 0)
        self.assertIn("Games: 2", output)

    def test_hint(self):
        code, output = self.run_cli("hint", "0,6,1,6,2")
        self.assertEqual(code, 0)
        self.assertIn("Required moves: [3]", output)

    def test_hint_illegal_position(self):
        code, _ = self.run_cli("hint", "0,0,0,0,0,0,0")
        self.assertEqual(code, 1)

    def test_bad_moves_argument(self):
        with self.assertRaises(SystemExit):
            build_parser().parse_args(["hint", "a,b"])


if __name__ == '__main__':
    unittest.main()
