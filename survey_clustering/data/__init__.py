"""Survey questions, answer matrix assembly and imputation."""

from .questions import (
    QuestionType,
    Question,
    DistanceConfig,
    question_types_of
)
from .loader import (
    is_absent,
    as_option_set,
    as_rows,
    count_absent,
    build_answer_matrix
)
from .imputation import (
    impute_missing_values,
    nearest_donors,
    impute_from_neighbors,
    default_value
)

__all__ = [
    'QuestionType',
    'Question',
    'DistanceConfig',
    'question_types_of',
    'is_absent',
    'as_option_set',
    'as_rows',
    'count_absent',
    'build_answer_matrix',
    'impute_missing_values',
    'nearest_donors',
    'impute_from_neighbors',
    'default_value'
]
