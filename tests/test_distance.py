"""
Tests for the mixed-type distance function.
"""

import itertools
import unittest

import numpy as np

from survey_clustering.data import DistanceConfig, QuestionType
from survey_clustering.distance import (
    MixedDistance,
    free_text_distance,
    jaccard_distance,
    levenshtein,
    numeric_distance,
    ordinal_distance,
)
from survey_clustering.exceptions import ConfigurationError

TYPES = [
    QuestionType.NUMERIC,
    QuestionType.ORDINAL,
    QuestionType.SINGLE_CATEGORY,
    QuestionType.MULTI_CATEGORY,
    QuestionType.FREE_TEXT,
]

ROWS = [
    [2.0, 'low', 'red', frozenset({'x', 'y'}), 'cat'],
    [7.0, 'high', 'red', frozenset({'y', 'z'}), 'cats'],
    [10.0, 'medium', 'blue', frozenset(), 'kitten'],
    [0.0, 'low', 'green', frozenset({'x'}), ''],
]


def make_distance():
    config = DistanceConfig()
    config.set_numeric_range(0, 0, 10)
    config.set_ordinal_options(1, ['low', 'medium', 'high'])
    return MixedDistance(TYPES, config)


class LevenshteinTest(unittest.TestCase):
    """Test cases for the edit distance."""

    def test_known_values(self):
        self.assertEqual(levenshtein("cat", "cats"), 1)
        self.assertEqual(levenshtein("kitten", "sitting"), 3)
        self.assertEqual(levenshtein("", "abc"), 3)
        self.assertEqual(levenshtein("same", "same"), 0)

    def test_symmetric(self):
        self.assertEqual(levenshtein("flaw", "lawn"), levenshtein("lawn", "flaw"))


class ColumnDistanceTest(unittest.TestCase):
    """Test cases for the per-question distances."""

    def test_numeric_normalised_by_range(self):
        self.assertAlmostEqual(numeric_distance(2, 7, 0, 10), 0.5)

    def test_numeric_empty_range_is_zero(self):
        self.assertEqual(numeric_distance(3, 9, 5, 5), 0.0)

    def test_ordinal_position(self):
        options = ('low', 'medium', 'high')
        self.assertAlmostEqual(ordinal_distance('low', 'high', options), 1.0)
        self.assertAlmostEqual(ordinal_distance('low', 'medium', options), 0.5)

    def test_ordinal_unknown_option(self):
        with self.assertRaises(ValueError):
            ordinal_distance('low', 'extreme', ('low', 'high'))

    def test_single_category_identical_is_zero(self):
        """Two identical single-category answers are at distance exactly 0."""
        distance = MixedDistance([QuestionType.SINGLE_CATEGORY], DistanceConfig())
        self.assertEqual(distance.row_distance(['blue'], ['blue']), 0.0)
        self.assertEqual(distance.row_distance(['blue'], ['red']), 1.0)

    def test_multi_category_jaccard(self):
        self.assertAlmostEqual(jaccard_distance({'x', 'y'}, {'y', 'z'}), 1 - 1 / 3)

    def test_multi_category_both_empty(self):
        self.assertEqual(jaccard_distance(set(), frozenset()), 0.0)

    def test_multi_category_accepts_comma_strings(self):
        self.assertAlmostEqual(jaccard_distance("x, y", ['y', 'z']), 1 - 1 / 3)

    def test_free_text_discounts_length_gap(self):
        self.assertEqual(free_text_distance("cat", "cats"), 0.0)

    def test_free_text_substitutions(self):
        # lev 3, length gap 1, denominator 7 - 1
        self.assertAlmostEqual(free_text_distance("kitten", "sitting"), 2 / 6)
        self.assertAlmostEqual(free_text_distance("abc", "xyz"), 1.0)

    def test_free_text_zero_denominator(self):
        self.assertEqual(free_text_distance("", ""), 0.0)
        self.assertEqual(free_text_distance("", "abc"), 0.0)


class MixedDistanceTest(unittest.TestCase):
    """Test cases for row distances."""

    def setUp(self):
        self.distance = make_distance()

    def test_row_distance_is_mean_of_columns(self):
        expected = (0.5 + 1.0 + 0.0 + (1 - 1 / 3) + 0.0) / 5
        self.assertAlmostEqual(self.distance.row_distance(ROWS[0], ROWS[1]), expected)

    def test_symmetry(self):
        for a, b in itertools.combinations(ROWS, 2):
            self.assertAlmostEqual(
                self.distance.row_distance(a, b),
                self.distance.row_distance(b, a)
            )
            for column in range(len(TYPES)):
                self.assertAlmostEqual(
                    self.distance.column_distance(column, a[column], b[column]),
                    self.distance.column_distance(column, b[column], a[column])
                )

    def test_bounds(self):
        for a, b in itertools.product(ROWS, repeat=2):
            d = self.distance.row_distance(a, b)
            self.assertGreaterEqual(d, 0.0)
            self.assertLessEqual(d, 1.0)
            for column in range(len(TYPES)):
                dc = self.distance.column_distance(column, a[column], b[column])
                self.assertGreaterEqual(dc, 0.0)
                self.assertLessEqual(dc, 1.0)

    def test_self_distance_is_zero(self):
        for row in ROWS:
            self.assertEqual(self.distance.row_distance(row, row), 0.0)

    def test_missing_numeric_range(self):
        distance = MixedDistance([QuestionType.NUMERIC], DistanceConfig())
        with self.assertRaises(ConfigurationError):
            distance.row_distance([1.0], [2.0])

    def test_missing_ordinal_options(self):
        distance = MixedDistance([QuestionType.ORDINAL], DistanceConfig())
        with self.assertRaises(ConfigurationError):
            distance.row_distance(['a'], ['a'])

    def test_single_option_ordinal(self):
        config = DistanceConfig()
        config.set_ordinal_options(0, ['only'])
        distance = MixedDistance([QuestionType.ORDINAL], config)
        with self.assertRaises(ConfigurationError):
            distance.row_distance(['only'], ['only'])

    def test_absent_value_rejected(self):
        with self.assertRaises(ValueError):
            self.distance.row_distance(ROWS[0], [None] + ROWS[1][1:])

    def test_partial_distance_skips_absent_and_excluded(self):
        a = [2.0, None, 'red', frozenset({'x'}), 'cat']
        b = [7.0, 'low', 'blue', None, 'cat']
        # only columns 0 and 4 are shared; column 2 excluded
        self.assertAlmostEqual(self.distance.partial_distance(a, b, exclude=2), 0.25)

    def test_partial_distance_without_shared_columns(self):
        a = [2.0, None, None, None, None]
        b = [None, 'low', 'red', frozenset(), 'x']
        self.assertEqual(self.distance.partial_distance(a, b), float('inf'))

    def test_pairwise_matrix(self):
        matrix = self.distance.pairwise(ROWS)
        self.assertEqual(matrix.shape, (4, 4))
        np.testing.assert_allclose(matrix, matrix.T)
        np.testing.assert_allclose(np.diag(matrix), 0.0)
        self.assertAlmostEqual(matrix[0, 1], self.distance.row_distance(ROWS[0], ROWS[1]))

    def test_to_representatives(self):
        matrix = self.distance.to_representatives(ROWS, [ROWS[0], ROWS[2]])
        self.assertEqual(matrix.shape, (4, 2))
        self.assertEqual(matrix[0, 0], 0.0)
        self.assertEqual(matrix[2, 1], 0.0)


if __name__ == "__main__":
    unittest.main()
