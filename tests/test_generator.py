"""Unit tests for the generator value parser.

The three notations are detected from their separators before any number is
read, so most of the interesting cases are malformed inputs that must fail
in the notation their separator selects.
"""

import argparse
import math
import unittest

import generator
import utils


class TestNotations(unittest.TestCase):
    def test_edo_steps(self):
        self.assertAlmostEqual(generator.parse_generator_value("7\\12"), 700.0, places=9)
        self.assertAlmostEqual(generator.parse_generator_value("18\\31"), 18 / 31 * 1200, places=9)

    def test_ratio(self):
        fifth = generator.parse_generator_value("3/2")
        self.assertAlmostEqual(fifth, 1200 * math.log2(1.5), places=9)
        self.assertAlmostEqual(fifth, 701.955, delta=1e-3)

    def test_plain_cents(self):
        self.assertEqual(generator.parse_generator_value("701.955"), 701.955)

    def test_plain_cents_not_normalized(self):
        self.assertEqual(generator.parse_generator_value("-498.045"), -498.045)
        self.assertEqual(generator.parse_generator_value("1901.955"), 1901.955)
        self.assertEqual(generator.parse_generator_value("1e3"), 1000.0)

    def test_boundary_whitespace_trimmed(self):
        self.assertEqual(generator.parse_generator_value("  700 \n"), 700.0)
        self.assertAlmostEqual(generator.parse_generator_value(" 3/2 "), 701.955, delta=1e-3)

    def test_tagged_results(self):
        self.assertEqual(generator.parse_generator_expression("7\\12"), generator.EdoSteps(7.0, 12.0))
        self.assertEqual(generator.parse_generator_expression("3/2"), generator.Ratio(3.0, 2.0))
        self.assertEqual(generator.parse_generator_expression("100"), generator.PlainCents(100.0))

    def test_fractional_edo_steps(self):
        self.assertAlmostEqual(generator.parse_generator_value("2.5\\12"), 250.0, places=9)


class TestMalformed(unittest.TestCase):
    def assertFormatError(self, text, message=None):
        with self.assertRaises(utils.FormatError) as ctx:
            generator.parse_generator_value(text)
        if message is not None:
            self.assertEqual(str(ctx.exception), message)

    def test_garbage(self):
        self.assertFormatError("abc", generator.GENERAL_FORMAT_MESSAGE)
        self.assertFormatError("", generator.GENERAL_FORMAT_MESSAGE)
        self.assertFormatError("   ", generator.GENERAL_FORMAT_MESSAGE)
        self.assertFormatError("nan")
        self.assertFormatError("inf")

    def test_bad_edo(self):
        for text in ("7\\0", "7\\-12", "7\\x", "\\12", "7\\12\\3", "7 \\ 12"):
            self.assertFormatError(text, "Invalid EDO format. Use n\\edo")

    def test_bad_ratio(self):
        for text in ("3/0", "3/-2", "-3/2", "0/2", "3/x", "/2", "1/2/3", "3 / 2"):
            self.assertFormatError(text, "Invalid ratio format. Use n/d")

    def test_slash_is_never_plain_cents(self):
        # "3/" is a malformed ratio, not the number 3
        self.assertFormatError("3/", "Invalid ratio format. Use n/d")

    def test_backslash_has_priority(self):
        self.assertFormatError("3/2\\12", "Invalid EDO format. Use n\\edo")

    def test_format_error_is_value_error(self):
        with self.assertRaises(ValueError):
            generator.parse_generator_value("abc")


class TestArgparseAdapter(unittest.TestCase):
    def test_valid(self):
        self.assertAlmostEqual(generator.generator_value_arg("7\\12"), 700.0, places=9)

    def test_invalid(self):
        with self.assertRaises(argparse.ArgumentTypeError) as ctx:
            generator.generator_value_arg("3/0")
        self.assertIn("n/d", str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
