"""
K-nearest-neighbour imputation of missing answers.

Each absent cell is filled from the respondents closest to its row,
measured with the mixed-type distance restricted to the questions both
respondents answered. Cells with no donor fall back to a fixed default.
"""

from collections import Counter
from typing import Any, List, Sequence, Tuple

from ..distance.mixed import MixedDistance
from .loader import as_option_set, as_rows, count_absent, is_absent
from .questions import DistanceConfig, QuestionType

DEFAULT_NEIGHBORS = 5
DEFAULT_EPSILON = 1e-4


def impute_missing_values(
    data: Any,
    question_types: Sequence[QuestionType],
    config: DistanceConfig,
    n_neighbors: int = DEFAULT_NEIGHBORS,
    epsilon: float = DEFAULT_EPSILON,
    verbose: bool = True
) -> List[list]:
    """
    Fill every absent cell of an answer matrix.

    Cells are filled row by row on a working copy, so values imputed
    earlier take part in later neighbour searches. The caller's data is
    left untouched.

    Args:
        data: Answer matrix (DataFrame or sequence of rows)
        question_types: Column-aligned question types
        config: Numeric ranges and ordinal orderings by column
        n_neighbors: Number of donors per cell
        epsilon: Added to donor distances before inverting them
        verbose: Whether to print a summary

    Returns:
        New matrix with no absent cells
    """
    rows = as_rows(data)
    distance = MixedDistance(question_types, config)
    n_missing = count_absent(rows)
    n_fallback = 0

    for i, row in enumerate(rows):
        for column in range(len(row)):
            if not is_absent(row[column]):
                continue
            neighbours = nearest_donors(rows, i, column, distance, n_neighbors)
            if neighbours:
                row[column] = impute_from_neighbors(
                    neighbours, question_types[column], epsilon
                )
            else:
                row[column] = default_value(question_types[column], column, config)
                n_fallback += 1

    if verbose:
        print(f"✓ Imputed {n_missing} missing answers "
              f"({n_fallback} from defaults, k={n_neighbors})")

    return rows


def nearest_donors(
    rows: Sequence[Sequence[Any]],
    target: int,
    column: int,
    distance: MixedDistance,
    n_neighbors: int = DEFAULT_NEIGHBORS
) -> List[Tuple[float, Any]]:
    """
    Find the closest rows that answered a given question.

    Args:
        rows: Working matrix
        target: Index of the row with the missing answer
        column: Column being imputed
        distance: Mixed-type distance
        n_neighbors: Maximum number of donors

    Returns:
        Up to ``n_neighbors`` (distance, value) pairs, nearest first
    """
    candidates = []
    for j, other in enumerate(rows):
        if j == target or is_absent(other[column]):
            continue
        d = distance.partial_distance(rows[target], other, exclude=column)
        if d == float('inf'):
            continue
        candidates.append((d, other[column]))

    candidates.sort(key=lambda c: c[0])
    return candidates[:n_neighbors]


def impute_from_neighbors(
    neighbours: Sequence[Tuple[float, Any]],
    question_type: QuestionType,
    epsilon: float = DEFAULT_EPSILON
) -> Any:
    """Synthesise a fill value from donor (distance, value) pairs."""
    if question_type is QuestionType.NUMERIC:
        weights = [1.0 / (d + epsilon) for d, _ in neighbours]
        weighted = sum(w * float(v) for w, (_, v) in zip(weights, neighbours))
        return weighted / sum(weights)

    if question_type is QuestionType.MULTI_CATEGORY:
        counts = Counter()
        for _, value in neighbours:
            counts.update(as_option_set(value))
        half = len(neighbours) / 2
        return frozenset(option for option, n in counts.items() if n > half)

    # majority vote; ties go to the value seen first (nearest donor)
    counts = Counter(value for _, value in neighbours)
    return counts.most_common(1)[0][0]


def default_value(question_type: QuestionType, column: int, config: DistanceConfig) -> Any:
    """Fill value used when no other respondent answered the question."""
    if question_type is QuestionType.NUMERIC:
        min_value, max_value = config.numeric_range(column)
        return (min_value + max_value) / 2.0
    if question_type is QuestionType.ORDINAL:
        options = config.ordering(column)
        return options[len(options) // 2]
    if question_type is QuestionType.MULTI_CATEGORY:
        return frozenset()
    return ''
