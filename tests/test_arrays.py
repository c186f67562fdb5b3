import unittest
from fractions import Fraction

import numpy as np

from exactrational import Rational, as_rational_array, full, zeros, zeros_like


class NumpyInteropTests(unittest.TestCase):
    def test_numpy_array_operations_with_scalar(self):
        vector = np.array([1, 2, 3])
        result = Rational(1, 4) + vector
        self.assertEqual(result.dtype, object)
        self.assertTrue(all(isinstance(item, Rational) for item in result))
        self.assertEqual(list(result), [Rational(5, 4), Rational(9, 4), Rational(13, 4)])

    def test_numpy_array_operations_with_object_array(self):
        vector = as_rational_array([Rational(1, 2), Rational(1, 3)])
        result = vector + Rational(1, 6)
        np.testing.assert_allclose([float(item) for item in result], [2 / 3, 1 / 2])
        self.assertEqual(list(result), [Rational(2, 3), Rational(1, 2)])

    def test_reflected_array_operations(self):
        vector = np.array([1, 2])
        self.assertEqual(list(vector - Rational(1, 2)), [Rational(1, 2), Rational(3, 2)])
        self.assertEqual(list(vector / Rational(2, 3)), [Rational(3, 2), Rational(3)])

    def test_numpy_ufunc_support(self):
        vector = as_rational_array([Rational(1, 2), Rational(3, 4)])
        result = np.add(vector, Rational(1, 4))
        np.testing.assert_allclose([float(item) for item in result], [0.75, 1.0])
        negated = np.negative(vector)
        self.assertEqual(list(negated), [Rational(-1, 2), Rational(-3, 4)])

    def test_numpy_comparisons(self):
        vector = as_rational_array([Rational(1, 3), Rational(1, 2), Rational(2, 3)])
        self.assertEqual(list(np.less(vector, Rational(1, 2))), [True, False, False])
        self.assertEqual(list(np.equal(vector, Rational(1, 2))), [False, True, False])

    def test_numpy_power(self):
        vector = as_rational_array([Rational(2, 3), Rational(4, 5)])
        result = np.power(vector, 2)
        self.assertEqual(list(result), [Rational(4, 9), Rational(16, 25)])

    def test_numpy_integer_scalars(self):
        self.assertEqual(np.int32(2) * Rational(1, 2), 1)
        self.assertEqual(Rational(1, 2) * np.int64(4), 2)

    def test_float_arrays_rejected_in_arithmetic(self):
        with self.assertRaises(TypeError):
            Rational(1, 4) + np.array([0.25, 0.5])

    def test_rational_array_helpers(self):
        arr = zeros(4)
        self.assertEqual(arr.shape, (4,))
        self.assertTrue(all(isinstance(item, Rational) for item in arr))

        base = [Rational(1, 2), 0.25, 3, Fraction(3, 4), "5/6"]
        arr_from_list = as_rational_array(base)
        self.assertEqual(arr_from_list.shape, (5,))
        self.assertTrue(all(isinstance(item, Rational) for item in arr_from_list))
        np.testing.assert_allclose(
            [float(item) for item in arr_from_list], [0.5, 0.25, 3.0, 0.75, 5 / 6]
        )

        arr_like = zeros_like(arr_from_list)
        self.assertEqual(arr_like.shape, arr_from_list.shape)
        self.assertTrue(all(float(item) == 0.0 for item in arr_like))

    def test_array_elements_are_independent_copies(self):
        source = Rational(1, 2)
        arr = as_rational_array([source])
        arr[0] += 1
        self.assertEqual(source, Rational(1, 2))

    def test_primitive_selection(self):
        arr = as_rational_array(np.array([[1, 2], [3, 4]]), dtype=np.int8)
        self.assertEqual(arr.shape, (2, 2))
        self.assertTrue(all(item.dtype == np.dtype(np.int8) for item in arr.flat))
        self.assertTrue(all(item.dtype == np.dtype(np.int16) for item in zeros(2, dtype=np.int16)))

    def test_generator_input(self):
        arr = as_rational_array(Rational(i, 3) for i in range(3))
        self.assertEqual(list(arr), [Rational(0), Rational(1, 3), Rational(2, 3)])

    def test_negative_length(self):
        with self.assertRaises(ValueError):
            zeros(-1)
        with self.assertRaises(ValueError):
            zeros((2, -1))

    def test_comparisons_accept_other_primitives(self):
        narrow = as_rational_array([Rational(1, 2, dtype=np.int8), Rational(1, 3, dtype=np.int8)])
        self.assertEqual(list(Rational(1, 2) == narrow), [True, False])
        self.assertEqual(list(Rational(1, 2) != narrow), [False, True])
        self.assertEqual(list(Rational(1, 3) < narrow), [True, False])
        self.assertEqual(list(np.greater_equal(narrow, Rational(1, 2))), [True, False])
        self.assertEqual(list(np.equal(narrow, Rational(1, 3))), [False, True])

    def test_arithmetic_rejects_other_primitives(self):
        narrow = as_rational_array([Rational(1, 2, dtype=np.int8)])
        with self.assertRaises(TypeError):
            Rational(1, 2) + narrow
        with self.assertRaises(TypeError):
            np.add(narrow, Rational(1, 2))

    def test_zeros_with_shape(self):
        grid = zeros((2, 3), dtype=np.int16)
        self.assertEqual(grid.shape, (2, 3))
        self.assertTrue(all(item == 0 and item.dtype == np.dtype(np.int16) for item in grid.flat))
        grid[0, 0] += 1
        self.assertEqual(grid[0, 1], 0)

    def test_full(self):
        halves = full(3, "1/2", dtype=np.int8)
        self.assertEqual(list(halves), [Rational(1, 2)] * 3)
        self.assertIsNot(halves[0], halves[1])

    def test_zeros_like_keeps_element_primitive(self):
        source = as_rational_array([Rational(1, 2, dtype=np.int32), Rational(3, dtype=np.int32)])
        self.assertTrue(all(item.dtype == np.dtype(np.int32) for item in zeros_like(source)))


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
