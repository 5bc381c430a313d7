"""Unit tests for generator stacking and MOS classification."""

import unittest

import mos
import utils


class TestStacking(unittest.TestCase):
    def test_origin_always_present(self):
        scale = mos.generate_mos(701.955, 0)
        self.assertEqual(scale.notes, [mos.MosNote(stack=0, cents=0.0)])
        self.assertFalse(scale.is_mos)
        self.assertIsNone(scale.label)

    def test_stack_order_preserved(self):
        scale = mos.generate_mos(701.955, 6)
        self.assertEqual([n.stack for n in scale.notes], list(range(7)))
        expected = [0.0, 701.955, 203.91, 905.865, 407.82, 1109.775, 611.73]
        for note, cents in zip(scale.notes, expected):
            self.assertAlmostEqual(note.cents, cents, places=6)

    def test_negative_generator_normalized(self):
        scale = mos.generate_mos(-100.0, 3)
        self.assertEqual([round(n.cents, 6) for n in scale.notes], [0.0, 1100.0, 1000.0, 900.0])
        for note in scale.notes:
            self.assertGreaterEqual(note.cents, 0.0)
            self.assertLess(note.cents, 1200.0)

    def test_large_generator_folded(self):
        scale = mos.generate_mos(1901.955, 1)
        self.assertAlmostEqual(scale.notes[1].cents, 701.955, places=6)

    def test_invalid_arguments(self):
        for bad in (-1, 2.5, None, "3"):
            with self.assertRaises(utils.DomainError):
                mos.generate_mos(700.0, bad)
        for bad in (float("nan"), float("inf"), "700"):
            with self.assertRaises(utils.DomainError):
                mos.generate_mos(bad, 3)


class TestClassification(unittest.TestCase):
    def test_diatonic(self):
        scale = mos.generate_mos(701.955, 6)
        c = scale.classification
        self.assertTrue(c.is_mos)
        self.assertEqual(c.large_step_count, 5)
        self.assertEqual(c.small_step_count, 2)
        self.assertAlmostEqual(c.large_step_size, 203.91, places=4)
        self.assertAlmostEqual(c.small_step_size, 90.225, places=4)
        self.assertEqual(c.label, "5L 2s")
        self.assertEqual(scale.label, "5L 2s")
        self.assertEqual(c.pattern, "LLLsLLs")
        self.assertAlmostEqual(c.hardness, 203.91 / 90.225, places=4)

    def test_pentatonic(self):
        c = mos.generate_mos(700.0, 4).classification
        self.assertTrue(c.is_mos)
        self.assertEqual(c.label, "2L 3s")
        self.assertEqual(c.pattern, "ssLsL")

    def test_fourth_generator_same_as_fifth(self):
        self.assertEqual(mos.generate_mos(-498.045, 6).label, "5L 2s")

    def test_tritone_is_not_mos(self):
        self.assertFalse(mos.generate_mos(600.0, 4).is_mos)

    def test_equal_steps_are_not_mos(self):
        self.assertFalse(mos.generate_mos(700.0, 11).is_mos)
        self.assertFalse(mos.generate_mos(400.0, 2).is_mos)

    def test_closed_chain_is_not_mos(self):
        # the thirteenth fifth of 12-EDO lands back on 0
        self.assertFalse(mos.generate_mos(700.0, 12).is_mos)

    def test_three_sizes(self):
        c = mos.generate_mos(701.955, 3).classification
        self.assertFalse(c.is_mos)
        self.assertIsNone(c.large_step_count)
        self.assertIsNone(c.pattern)

    def test_single_generator(self):
        self.assertEqual(mos.generate_mos(500.0, 1).label, "1L 1s")

    def test_repeated_pattern_rejected(self):
        # two sizes but 4L 4s is 1L 1s twice
        c = mos.classify_steps([200.0, 100.0] * 4)
        self.assertFalse(c.is_mos)
        self.assertEqual(c.large_step_count, 4)
        self.assertEqual(c.small_step_count, 4)
        self.assertIsNone(c.label)

    def test_rounding_merges_float_noise(self):
        c = mos.classify_steps([203.910000001, 203.909999999, 90.225, 203.91, 203.91, 203.91, 90.225])
        self.assertTrue(c.is_mos)
        self.assertEqual(c.label, "5L 2s")

    def test_idempotent(self):
        self.assertEqual(mos.generate_mos(696.578, 11), mos.generate_mos(696.578, 11))


class TestSteps(unittest.TestCase):
    def test_wraparound(self):
        steps = mos.scale_steps([0.0, 700.0, 200.0])
        self.assertEqual([round(s, 6) for s in steps], [200.0, 500.0, 500.0])

    def test_coincident_pitches_merged(self):
        steps = mos.scale_steps([0.0, 600.0, 0.0, 600.0, 0.0])
        self.assertEqual([round(s, 6) for s in steps], [600.0, 600.0])

    def test_boundary_pitch_merged(self):
        steps = mos.scale_steps([0.0, 1199.99999, 600.0])
        self.assertEqual([round(s, 4) for s in steps], [600.0, 600.0])


class TestExpressions(unittest.TestCase):
    def test_ratio_generator(self):
        self.assertEqual(mos.generate_mos_from_expression("3/2", 6).label, "5L 2s")

    def test_edo_generator(self):
        self.assertEqual(mos.generate_mos_from_expression("7\\12", 4).label, "2L 3s")

    def test_bad_expression(self):
        with self.assertRaises(utils.FormatError):
            mos.generate_mos_from_expression("abc", 6)

    def test_find_mos_stack_counts(self):
        found = dict(mos.find_mos_stack_counts(701.955, 11))
        self.assertEqual(found[1], "1L 1s")
        self.assertEqual(found[4], "2L 3s")
        self.assertEqual(found[6], "5L 2s")
        self.assertEqual(found[11], "5L 7s")
        self.assertNotIn(3, found)
        self.assertNotIn(5, found)


if __name__ == '__main__':
    unittest.main()
