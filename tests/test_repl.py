"""
Tests for the read-print loop and command line.

Author: xwest
"""

import os
import sys
import unittest

from click.testing import CliRunner

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from malreader import __version__
from malreader.lexer import UnterminatedStringError
from malreader.parser import Atom, MismatchedBracketError
from malreader.repl import main, rep


class TestRep(unittest.TestCase):

    def test_prints_form_back(self):
        self.assertEqual(rep("( + 1   2 )"), "(+ 1 2)")

    def test_first_form_only(self):
        self.assertEqual(rep("a b c"), "a")

    def test_comment_line(self):
        self.assertIsNone(rep("; nothing here"))
        self.assertIsNone(rep(""))

    def test_comments_to_eof(self):
        self.assertIsNone(rep("; a\n(b)", comments_to_eof=True))
        self.assertEqual(rep("; a\n(b)"), "(b)")

    def test_errors_propagate(self):
        with self.assertRaises(UnterminatedStringError):
            rep('"abc')
        with self.assertRaises(MismatchedBracketError):
            rep("(]")

    def test_custom_evaluator(self):
        self.assertEqual(rep("(+ 1 2)", evaluate=lambda data: Atom.number(3)), "3")


class TestCommandLine(unittest.TestCase):

    def setUp(self):
        self.runner = CliRunner()

    def test_interactive_session(self):
        result = self.runner.invoke(main, [], input="(+ 1 2)\n; skip\n[a 'b]\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("user> (+ 1 2)", result.output)
        self.assertIn("[a (quote b)]", result.output)
        self.assertIn("goodbye", result.output)

    def test_interactive_error_keeps_going(self):
        result = self.runner.invoke(main, [], input="(]\n42\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Expected ')' to close '(', found ']'", result.output)
        self.assertIn("42", result.output)
        self.assertIn("goodbye", result.output)

    def test_file_mode(self):
        with self.runner.isolated_filesystem():
            with open("prog.mal", "w", encoding="utf-8") as f:
                f.write("(a b)\n; c\n[1 2]\n")
            result = self.runner.invoke(main, ["prog.mal"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "(a b)\n[1 2]\n")

    def test_file_mode_comments_to_eof(self):
        with self.runner.isolated_filesystem():
            with open("prog.mal", "w", encoding="utf-8") as f:
                f.write("(a b)\n; c\n[1 2]\n")
            result = self.runner.invoke(main, ["--comments-to-eof", "prog.mal"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.output, "(a b)\n")

    def test_file_mode_invalid_utf8(self):
        with self.runner.isolated_filesystem():
            with open("raw.mal", "wb") as f:
                f.write(b"(a\xff \"b\xfe\")\n")
            result = self.runner.invoke(main, ["raw.mal"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(result.stdout_bytes, b"(a\xff \"b\xfe\")\n")

    def test_interactive_non_ascii(self):
        result = self.runner.invoke(main, [], input="(cow花火🚀)\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("(cow花火🚀)", result.output)

    def test_file_mode_error(self):
        with self.runner.isolated_filesystem():
            with open("bad.mal", "w", encoding="utf-8") as f:
                f.write("(a\n")
            result = self.runner.invoke(main, ["bad.mal"])
        self.assertEqual(result.exit_code, 1)
        self.assertIn("Unexpected end of input", result.output)

    def test_version(self):
        result = self.runner.invoke(main, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)


if __name__ == '__main__':
    unittest.main()
