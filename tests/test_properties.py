"""Algebraic and ordering laws checked over a grid of small rationals."""
import itertools
import random
import unittest
from fractions import Fraction

import numpy as np

from exactrational import Rational, less_than
from exactrational.primitive import gcd, iabs


def _grid(dtype=np.int16):
    seen = {}
    for n in range(-6, 7):
        for d in range(1, 7):
            value = Rational(n, d, dtype=dtype)
            seen[(value.numerator, value.denominator)] = value
    return list(seen.values())


def _assert_canonical(test, value):
    test.assertGreater(value.denominator, 0)
    test.assertEqual(iabs(gcd(value.numerator, value.denominator)), 1)
    if value.numerator == 0:
        test.assertEqual(value.denominator, 1)


class ClosureTests(unittest.TestCase):
    def setUp(self):
        self.values = _grid()

    def test_constructed_values_are_canonical(self):
        for value in self.values:
            _assert_canonical(self, value)

    def test_operations_are_closed_and_exact(self):
        for a, b in itertools.product(self.values, repeat=2):
            fa, fb = a.as_fraction(), b.as_fraction()
            results = [(a + b, fa + fb), (a - b, fa - fb), (a * b, fa * fb)]
            if b:
                results.append((a / b, fa / fb))
            for result, expected in results:
                _assert_canonical(self, result)
                self.assertEqual(result.as_fraction(), expected)

    def test_integer_operations_are_closed_and_exact(self):
        for a in self.values:
            for i in range(-3, 4):
                fa = a.as_fraction()
                results = [(a + i, fa + i), (a - i, fa - i), (a * i, fa * i), (i - a, i - fa)]
                if i:
                    results.append((a / i, fa / i))
                for result, expected in results:
                    _assert_canonical(self, result)
                    self.assertEqual(result.as_fraction(), expected)


class AlgebraTests(unittest.TestCase):
    def setUp(self):
        self.values = _grid()[::4]
        self.zero = Rational(0, dtype=np.int16)
        self.one = Rational(1, dtype=np.int16)

    def test_commutativity_and_identities(self):
        for a, b in itertools.product(self.values, repeat=2):
            self.assertEqual(a + b, b + a)
            self.assertEqual(a * b, b * a)
        for a in self.values:
            self.assertEqual(a + self.zero, a)
            self.assertEqual(a * self.one, a)

    def test_associativity_and_distributivity(self):
        for a, b, c in itertools.product(self.values, repeat=3):
            self.assertEqual((a + b) + c, a + (b + c))
            self.assertEqual((a * b) * c, a * (b * c))
            self.assertEqual(a * (b + c), a * b + a * c)


class OrderingTests(unittest.TestCase):
    def test_trichotomy(self):
        values = _grid()
        for a, b in itertools.product(values, repeat=2):
            outcomes = [a < b, a == b, b < a]
            self.assertEqual(outcomes.count(True), 1, (a, b))
            self.assertEqual(a < b, a.as_fraction() < b.as_fraction())
            self.assertEqual(a > b, a.as_fraction() > b.as_fraction())

    def test_integer_comparisons_agree_with_fractions(self):
        for a in _grid():
            for i in range(-3, 4):
                fa = a.as_fraction()
                self.assertEqual(a < i, fa < i)
                self.assertEqual(a > i, fa > i)
                self.assertEqual(a == i, fa == i)

    def test_wide_operands(self):
        rng = random.Random(20240601)
        limit = int(np.iinfo(np.int64).max)
        for _ in range(500):
            a = Rational(rng.randint(-limit, limit), rng.randint(1, limit))
            b = Rational(rng.randint(-limit, limit), rng.randint(1, limit))
            expected = a.as_fraction() < b.as_fraction()
            self.assertEqual(less_than(a.numerator, a.denominator, b.numerator, b.denominator), expected)
            self.assertEqual(a < b, expected)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
