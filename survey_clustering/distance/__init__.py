"""Mixed-type distance between survey respondents."""

from .mixed import (
    MixedDistance,
    levenshtein,
    numeric_distance,
    ordinal_distance,
    single_category_distance,
    jaccard_distance,
    free_text_distance
)

__all__ = [
    'MixedDistance',
    'levenshtein',
    'numeric_distance',
    'ordinal_distance',
    'single_category_distance',
    'jaccard_distance',
    'free_text_distance'
]
