"""
Mixed-type distance between survey respondents.

Each question contributes a distance normalised to [0, 1] according to its
type, and a row distance is the arithmetic mean over the questions:

- Numeric: |a - b| / (max - min), 0 when the range is empty
- Ordinal: |pos(a) - pos(b)| / (n_options - 1)
- Single category: 0 if equal, else 1
- Multi category: Jaccard distance, 0 when both sets are empty
- Free text: Levenshtein distance with the pure length difference
  discounted, (lev - d) / (max_len - d) with d = |len(a) - len(b)|
"""

from typing import Any, Optional, Sequence

import numpy as np

from ..data.loader import as_option_set, is_absent
from ..data.questions import DistanceConfig, QuestionType


def levenshtein(a: str, b: str) -> int:
    """
    Compute the edit distance between two strings.

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of single-character insertions, deletions and
        substitutions turning ``a`` into ``b``
    """
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def numeric_distance(a: float, b: float, min_value: float, max_value: float) -> float:
    if max_value == min_value:
        return 0.0
    return abs(float(a) - float(b)) / (max_value - min_value)


def ordinal_distance(a: Any, b: Any, options: Sequence[str]) -> float:
    try:
        pos_a = options.index(str(a))
        pos_b = options.index(str(b))
    except ValueError:
        raise ValueError(
            f"Ordinal answer not among configured options {list(options)}: {a!r} / {b!r}"
        ) from None
    return abs(pos_a - pos_b) / (len(options) - 1)


def single_category_distance(a: Any, b: Any) -> float:
    return 0.0 if a == b else 1.0


def jaccard_distance(a: Any, b: Any) -> float:
    """1 - |A ∩ B| / |A ∪ B| over two option sets (0 when both are empty)."""
    set_a = as_option_set(a)
    set_b = as_option_set(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return 1.0 - len(set_a & set_b) / len(union)


def free_text_distance(a: Any, b: Any) -> float:
    a, b = str(a), str(b)
    length_gap = abs(len(a) - len(b))
    denominator = max(len(a), len(b)) - length_gap
    if denominator == 0:
        return 0.0
    return (levenshtein(a, b) - length_gap) / denominator


class MixedDistance:
    """
    Distance function over rows of heterogeneous answers.

    Args:
        question_types: Column-aligned question types
        config: Numeric ranges and ordinal orderings by column
    """

    def __init__(self, question_types: Sequence[QuestionType], config: DistanceConfig):
        self.question_types = list(question_types)
        self.config = config

    @property
    def n_questions(self) -> int:
        return len(self.question_types)

    def column_distance(self, column: int, a: Any, b: Any) -> float:
        """Normalised distance between two answers to the same question."""
        if is_absent(a) or is_absent(b):
            raise ValueError(f"Absent answer in column {column} reached the distance function")

        question_type = self.question_types[column]
        if question_type is QuestionType.NUMERIC:
            min_value, max_value = self.config.numeric_range(column)
            return numeric_distance(a, b, min_value, max_value)
        if question_type is QuestionType.ORDINAL:
            return ordinal_distance(a, b, self.config.ordering(column))
        if question_type is QuestionType.SINGLE_CATEGORY:
            return single_category_distance(a, b)
        if question_type is QuestionType.MULTI_CATEGORY:
            return jaccard_distance(a, b)
        return free_text_distance(a, b)

    def row_distance(self, row_a: Sequence[Any], row_b: Sequence[Any]) -> float:
        """Mean of the per-question distances between two complete rows."""
        total = 0.0
        for column in range(self.n_questions):
            total += self.column_distance(column, row_a[column], row_b[column])
        return total / self.n_questions

    def partial_distance(
        self,
        row_a: Sequence[Any],
        row_b: Sequence[Any],
        exclude: Optional[int] = None
    ) -> float:
        """
        Mean distance over the columns both rows have answered.

        Args:
            row_a: First row, may contain absent cells
            row_b: Second row, may contain absent cells
            exclude: Column to leave out

        Returns:
            Mean distance, or +inf when the rows share no answered column
        """
        total = 0.0
        compared = 0
        for column in range(self.n_questions):
            if column == exclude:
                continue
            a, b = row_a[column], row_b[column]
            if is_absent(a) or is_absent(b):
                continue
            total += self.column_distance(column, a, b)
            compared += 1
        if compared == 0:
            return float('inf')
        return total / compared

    def pairwise(self, rows: Sequence[Sequence[Any]]) -> np.ndarray:
        """Symmetric n x n matrix of row distances with a zero diagonal."""
        n = len(rows)
        distances = np.zeros((n, n), dtype=float)
        for i in range(n):
            for j in range(i + 1, n):
                d = self.row_distance(rows[i], rows[j])
                distances[i, j] = d
                distances[j, i] = d
        return distances

    def to_representatives(
        self,
        rows: Sequence[Sequence[Any]],
        representatives: Sequence[Sequence[Any]]
    ) -> np.ndarray:
        """n x k matrix of distances from every row to every representative."""
        distances = np.empty((len(rows), len(representatives)), dtype=float)
        for i, row in enumerate(rows):
            for c, representative in enumerate(representatives):
                distances[i, c] = self.row_distance(row, representative)
        return distances
