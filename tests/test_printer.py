"""
Tests for the printer.

Author: xwest
"""

import os
import sys
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from malreader.parser import Atom, ListData, read_str
from malreader.printer import pr_str, escape


class TestPrinter(unittest.TestCase):

    def test_atoms(self):
        self.assertEqual(pr_str(Atom.number(-12)), "-12")
        self.assertEqual(pr_str(Atom.symbol("def!")), "def!")
        self.assertEqual(pr_str(Atom.string("hi")), '"hi"')

    def test_whitespace_is_normalized(self):
        self.assertEqual(pr_str(read_str("( + 1   2 , 3 )")), "(+ 1 2 3)")

    def test_brackets(self):
        self.assertEqual(pr_str(read_str("[1 {a (b)}]")), "[1 {a (b)}]")
        self.assertEqual(pr_str(ListData([])), "()")

    def test_reader_macros_print_expanded(self):
        self.assertEqual(pr_str(read_str("'x")), "(quote x)")
        self.assertEqual(pr_str(read_str("~@(1 2)")), "(splice-unquote (1 2))")
        self.assertEqual(pr_str(read_str("^{} x")), "(with-meta x {})")

    def test_strings_readably(self):
        data = read_str('"a\\"b\\\\c\\nd"')
        self.assertEqual(data.value, 'a"b\\c\nd')
        self.assertEqual(pr_str(data), '"a\\"b\\\\c\\nd"')
        self.assertEqual(pr_str(data, print_readably=False), 'a"b\\c\nd')

    def test_escape(self):
        self.assertEqual(escape('say "hi"\n'), 'say \\"hi\\"\\n')

    def test_round_trip(self):
        sources = [
            "(+ 1 2)",
            "[1 [2 [3 []]] {}]",
            "(str \"a (b)\" \"q\\\"uote\" \"back\\\\slash\")",
            "'(a `b ~c ~@d @e ^{k v} f)",
            "(cow花火🚀 -5 +)",
        ]
        for src in sources:
            with self.subTest(src=src):
                data = read_str(src)
                self.assertEqual(read_str(pr_str(data)), data)

    def test_deep_nesting(self):
        src = "(" * 10000 + "[a 'b]" + ")" * 10000
        self.assertEqual(pr_str(read_str(src)), "(" * 10000 + "[a (quote b)]" + ")" * 10000)

    def test_long_numbers(self):
        digits = "1" * 5000
        self.assertEqual(pr_str(read_str(digits)), digits)
        self.assertEqual(pr_str(read_str("-" + "9" * 4400)), "-" + "9" * 4400)
        self.assertEqual(pr_str(Atom.number(10 ** 1000)), "1" + "0" * 1000)

    def test_non_readable_strings(self):
        self.assertEqual(pr_str(read_str('("a\\"b" c)'), print_readably=False), '(a"b c)')

    def test_rejects_foreign_objects(self):
        with self.assertRaises(TypeError):
            pr_str([1, 2])
        with self.assertRaises(TypeError):
            pr_str(None)
        with self.assertRaises(TypeError):
            pr_str(ListData([Atom.symbol("a"), "b"]))


if __name__ == '__main__':
    unittest.main()
