"""
Question descriptors and per-column distance configuration.

A survey is seen by the engine as an ordered list of question types,
aligned by column index with the answer matrix, plus side data for the
columns whose distance depends on it (numeric ranges and ordinal
orderings).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..exceptions import ConfigurationError


class QuestionType(Enum):
    """Kinds of question the distance function knows how to compare."""
    NUMERIC = "numeric"
    ORDINAL = "ordinal"
    SINGLE_CATEGORY = "single_category"
    MULTI_CATEGORY = "multi_category"
    FREE_TEXT = "free_text"

    @classmethod
    def parse(cls, value) -> "QuestionType":
        """Accept an enum member, its value or its name (any case)."""
        if isinstance(value, cls):
            return value
        key = str(value).strip()
        for member in cls:
            if key.lower() in (member.value, member.name.lower()):
                return member
        raise ConfigurationError(f"Unknown question type: {value!r}")


@dataclass
class Question:
    """
    A survey question as far as clustering is concerned.

    Args:
        question_id: Identifier used by answer tables
        question_type: Kind of question
        min_value: Lower bound for numeric questions
        max_value: Upper bound for numeric questions
        options: Option list; ordered for ordinal questions
        text: Optional question wording
    """
    question_id: str
    question_type: QuestionType
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    options: Tuple[str, ...] = ()
    text: str = ""

    def __post_init__(self):
        self.question_type = QuestionType.parse(self.question_type)
        self.options = tuple(self.options)

    def validate(self):
        """Check that the question carries the side data its type needs."""
        if self.question_type is QuestionType.NUMERIC:
            if self.min_value is None or self.max_value is None:
                raise ConfigurationError(
                    f"Numeric question {self.question_id!r} needs min_value and max_value"
                )
            if self.min_value > self.max_value:
                raise ConfigurationError(
                    f"Numeric question {self.question_id!r} has min_value > max_value"
                )
        elif self.question_type is QuestionType.ORDINAL:
            if len(self.options) < 2:
                raise ConfigurationError(
                    f"Ordinal question {self.question_id!r} needs at least two options"
                )
        return self


@dataclass
class DistanceConfig:
    """
    Per-column side data for the mixed-type distance.

    Numeric columns need a (min, max) range and ordinal columns need an
    ordered option list. Nothing is checked when values are stored; a
    missing entry only fails once a distance needs it.
    """
    numeric_ranges: Dict[int, Tuple[float, float]] = field(default_factory=dict)
    ordinal_options: Dict[int, Tuple[str, ...]] = field(default_factory=dict)

    def set_numeric_range(self, column: int, min_value: float, max_value: float):
        self.numeric_ranges[column] = (float(min_value), float(max_value))

    def set_ordinal_options(self, column: int, options: Sequence[str]):
        self.ordinal_options[column] = tuple(str(o) for o in options)

    def numeric_range(self, column: int) -> Tuple[float, float]:
        try:
            min_value, max_value = self.numeric_ranges[column]
        except KeyError:
            raise ConfigurationError(
                f"No numeric range configured for numeric column {column}"
            ) from None
        if min_value > max_value:
            raise ConfigurationError(
                f"Numeric column {column} has min {min_value} > max {max_value}"
            )
        return min_value, max_value

    def ordering(self, column: int) -> Tuple[str, ...]:
        try:
            options = self.ordinal_options[column]
        except KeyError:
            raise ConfigurationError(
                f"No option ordering configured for ordinal column {column}"
            ) from None
        if len(options) < 2:
            raise ConfigurationError(
                f"Ordinal column {column} has {len(options)} option(s); at least two are required"
            )
        return options

    def validate(self, question_types: Sequence[QuestionType]):
        """Fail on the first column whose type needs side data that is missing."""
        for column, question_type in enumerate(question_types):
            if question_type is QuestionType.NUMERIC:
                self.numeric_range(column)
            elif question_type is QuestionType.ORDINAL:
                self.ordering(column)

    @classmethod
    def from_questions(cls, questions: Iterable[Question]) -> "DistanceConfig":
        config = cls()
        for column, question in enumerate(questions):
            if question.question_type is QuestionType.NUMERIC:
                if question.min_value is not None and question.max_value is not None:
                    config.set_numeric_range(column, question.min_value, question.max_value)
            elif question.question_type is QuestionType.ORDINAL:
                config.set_ordinal_options(column, question.options)
        return config


def question_types_of(questions: Iterable[Question]) -> List[QuestionType]:
    """Column-aligned list of question types."""
    return [q.question_type for q in questions]
