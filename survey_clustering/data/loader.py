"""
Answer matrix assembly.

The engine works on a rectangular list of rows, one per respondent and one
cell per question. This module turns caller data (pandas tables, nested
lists) into that shape and normalises the cell values the distance
function compares.
"""

from typing import Any, FrozenSet, Hashable, List, Optional, Sequence, Tuple

import pandas as pd

from .questions import Question, QuestionType

_SET_TYPES = (set, frozenset, list, tuple)


def is_absent(value: Any) -> bool:
    """
    Check whether an answer cell is missing.

    Args:
        value: Cell value

    Returns:
        True for None and NaN; set-like values are never absent
    """
    if isinstance(value, _SET_TYPES):
        return False
    return bool(pd.isna(value))


def as_option_set(value: Any) -> FrozenSet[str]:
    """
    Coerce a multi-category answer to a set of option strings.

    Handles sets, lists, tuples and comma-separated strings. Blank
    entries are dropped.
    """
    if value is None:
        return frozenset()
    if isinstance(value, str):
        parts = value.split(',')
    elif isinstance(value, _SET_TYPES):
        parts = [str(v) for v in value if v is not None]
    else:
        parts = [str(value)]
    return frozenset(p.strip() for p in parts if p.strip())


def as_rows(data: Any) -> List[list]:
    """
    Copy caller data into a list of mutable rows.

    Args:
        data: DataFrame or sequence of row sequences

    Returns:
        List of lists (a fresh copy; the input is never mutated)
    """
    if isinstance(data, pd.DataFrame):
        return [list(row) for row in data.itertuples(index=False, name=None)]
    return [list(row) for row in data]


def count_absent(rows: Sequence[Sequence[Any]]) -> int:
    """Number of missing cells in a matrix."""
    return sum(1 for row in rows for value in row if is_absent(value))


def build_answer_matrix(
    answers: pd.DataFrame,
    questions: Sequence[Question],
    respondent_col: str = 'respondent_id',
    question_col: str = 'question_id',
    value_col: str = 'value',
    verbose: bool = True
) -> Tuple[List[list], List[Hashable]]:
    """
    Build the answer matrix from a long-format answers table.

    Columns follow the order of ``questions``. Unanswered questions become
    absent cells and answers to questions not in the list are ignored.
    Multi-category answers are normalised to option sets.

    Args:
        answers: One row per (respondent, question) answer
        questions: Survey questions in column order
        respondent_col: Column holding respondent identifiers
        question_col: Column holding question identifiers
        value_col: Column holding the answer value
        verbose: Whether to print a summary

    Returns:
        Tuple of (rows, respondent ids in row order)
    """
    column_of = {q.question_id: i for i, q in enumerate(questions)}
    respondent_ids = list(pd.unique(answers[respondent_col]))
    row_of = {rid: i for i, rid in enumerate(respondent_ids)}

    rows: List[list] = [[None] * len(questions) for _ in respondent_ids]
    ignored = 0
    for rid, qid, value in answers[[respondent_col, question_col, value_col]].itertuples(
            index=False, name=None):
        column = column_of.get(qid)
        if column is None:
            ignored += 1
            continue
        rows[row_of[rid]][column] = _normalise(value, questions[column])

    if verbose:
        n_absent = count_absent(rows)
        print(f"✓ Built answer matrix: {len(rows)} respondents x {len(questions)} questions")
        print(f"  Missing cells: {n_absent}")
        if ignored:
            print(f"  Ignored {ignored} answers to unknown questions")

    return rows, respondent_ids


def _normalise(value: Any, question: Question) -> Optional[Any]:
    if is_absent(value):
        return None
    if question.question_type is QuestionType.MULTI_CATEGORY:
        return as_option_set(value)
    if question.question_type is QuestionType.NUMERIC:
        return float(value)
    return str(value)
