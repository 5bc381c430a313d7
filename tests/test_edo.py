"""Unit tests for the EDO engine."""

import unittest

import edo
import utils


class TestGenerateEdo(unittest.TestCase):
    def test_completeness(self):
        for n in (1, 5, 12, 19, 31, 53):
            notes = edo.generate_edo(n)
            self.assertEqual(len(notes), n)
            self.assertEqual([note.index for note in notes], list(range(n)))
            for note in notes:
                self.assertAlmostEqual(note.cents, note.index * 1200.0 / n, places=9)

    def test_twelve(self):
        notes = edo.generate_edo(12)
        self.assertEqual(notes[0].cents, 0.0)
        self.assertAlmostEqual(notes[7].cents, 700.0, places=9)
        self.assertTrue(all(0.0 <= note.cents < 1200.0 for note in notes))

    def test_prime_flag(self):
        for n in (1, 4, 6, 8, 9, 10, 12):
            self.assertTrue(all(not note.is_edo_prime for note in edo.generate_edo(n)), n)
        for n in (2, 3, 5, 7, 11, 13):
            self.assertTrue(all(note.is_edo_prime for note in edo.generate_edo(n)), n)

    def test_invalid_divisions(self):
        for bad in (0, -5, 2.0, 12.5, "12", True, None):
            with self.assertRaises(utils.DomainError):
                edo.generate_edo(bad)

    def test_idempotent(self):
        self.assertEqual(edo.generate_edo(22), edo.generate_edo(22))

    def test_records_are_immutable(self):
        note = edo.generate_edo(12)[1]
        with self.assertRaises(AttributeError):
            note.cents = 0.0


class TestHelpers(unittest.TestCase):
    def test_step_size(self):
        self.assertAlmostEqual(edo.step_size(12), 100.0)
        self.assertAlmostEqual(edo.step_size(31), 1200.0 / 31)

    def test_label(self):
        note = edo.generate_edo(12)[7]
        self.assertEqual(edo.edo_note_label(note, 12), "7 \\ 12 EDO")

    def test_nearest_note(self):
        note, error = edo.nearest_edo_note(701.955, 12)
        self.assertEqual(note.index, 7)
        self.assertAlmostEqual(error, 1.955, places=6)

        note, error = edo.nearest_edo_note(386.3137, 12)
        self.assertEqual(note.index, 4)
        self.assertAlmostEqual(error, -13.6863, places=4)

    def test_nearest_note_wraps(self):
        note, error = edo.nearest_edo_note(1190.0, 12)
        self.assertEqual(note.index, 0)
        self.assertAlmostEqual(error, -10.0, places=9)
        note, error = edo.nearest_edo_note(-10.0, 12)
        self.assertEqual(note.index, 0)
        self.assertAlmostEqual(error, -10.0, places=9)


if __name__ == '__main__':
    unittest.main()
