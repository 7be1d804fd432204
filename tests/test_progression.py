import unittest
from fractions import Fraction

from rationals import ExhaustedIteratorError, InvalidStepError
from rationals.progression import (
    NumericDomain,
    Progression,
    ProgressionIterator,
    Range,
    difference_modulo,
)


class FractionDomain(NumericDomain[Fraction]):
    """Stand-alone domain showing the generic classes work for any exact type."""

    name = "fraction"

    def coerce(self, value):
        return Fraction(value)

    def unit_step(self, start, end):
        return Fraction(1, 10)

    def end_exclusive(self, start, last):
        return last + Fraction(1, 10)


FRACTIONS = FractionDomain()


class FractionProgression(Progression[Fraction]):
    domain = FRACTIONS


class FractionRange(Range[Fraction]):
    domain = FRACTIONS


class DifferenceModuloTests(unittest.TestCase):
    def test_matches_plain_modulo(self):
        for a in range(-7, 8):
            for b in range(-7, 8):
                for c in (1, 2, 3, 5):
                    self.assertEqual(difference_modulo(a, b, c), (a - b) % c)

    def test_fraction_operands(self):
        self.assertEqual(
            difference_modulo(Fraction(1), Fraction(0), Fraction(2, 5)), Fraction(1, 5)
        )


class GenericProgressionTests(unittest.TestCase):
    def test_last_element_does_not_overshoot(self):
        progression = FractionProgression(0, Fraction(1), Fraction(3, 10))
        self.assertEqual(progression.last, Fraction(9, 10))
        self.assertEqual(
            list(progression),
            [Fraction(0), Fraction(3, 10), Fraction(3, 5), Fraction(9, 10)],
        )

    def test_backward_step(self):
        progression = FractionProgression(1, 0, Fraction(-1, 2))
        self.assertFalse(progression.is_increasing())
        self.assertEqual(list(progression), [Fraction(1), Fraction(1, 2), Fraction(0)])
        self.assertEqual(str(progression), "1 downTo 0 step 1/2")

    def test_zero_step_is_rejected(self):
        with self.assertRaises(InvalidStepError):
            FractionProgression(0, 1, 0)
        with self.assertRaises(ValueError):
            FractionProgression(0, 1, Fraction(0, 3))

    def test_domain_rejects_zero_step_for_last_element(self):
        with self.assertRaises(InvalidStepError):
            FRACTIONS.last_element(Fraction(0), Fraction(1), Fraction(0))

    def test_incomplete_domain_cannot_be_created(self):
        class CoerceOnlyDomain(NumericDomain[Fraction]):
            def coerce(self, value):
                return Fraction(value)

        with self.assertRaises(TypeError):
            CoerceOnlyDomain()

    def test_range_uses_domain_unit_step(self):
        span = FractionRange(0, Fraction(1, 2))
        self.assertEqual(span.step, Fraction(1, 10))
        self.assertEqual(len(span), 6)
        self.assertEqual(span.end_exclusive, Fraction(3, 5))
        self.assertIn(Fraction(1, 3), span)

    def test_from_closed_range(self):
        progression = FractionProgression.from_closed_range(0, 1, Fraction(1, 2))
        self.assertIsInstance(progression, FractionProgression)
        self.assertEqual(len(progression), 3)


class ProgressionIteratorTests(unittest.TestCase):
    def test_states(self):
        iterator = ProgressionIterator(1, 3, 1, FRACTIONS)
        self.assertTrue(iterator.has_next())
        self.assertEqual([next(iterator) for _ in range(3)], [1, 2, 3])
        self.assertFalse(iterator.has_next())
        with self.assertRaises(ExhaustedIteratorError):
            next(iterator)

    def test_starts_exhausted_when_first_is_past_last(self):
        iterator = ProgressionIterator(5, 1, 1, FRACTIONS)
        self.assertFalse(iterator.has_next())
        with self.assertRaises(StopIteration):
            next(iterator)

    def test_single_element(self):
        iterator = ProgressionIterator(4, 4, -1, FRACTIONS)
        self.assertEqual(list(iterator), [4])

    def test_iterators_are_independent(self):
        progression = FractionProgression(0, 1, Fraction(1, 2))
        first = iter(progression)
        second = iter(progression)
        self.assertEqual(next(first), 0)
        self.assertEqual(next(first), Fraction(1, 2))
        self.assertEqual(next(second), 0)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
