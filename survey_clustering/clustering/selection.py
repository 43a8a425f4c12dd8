"""
Choosing the number of clusters for a survey.

Each k in a range is clustered several times with different seeds and the
run with the best silhouette is kept; the best k is the one whose kept
run has the highest silhouette.
"""

from typing import Any, Hashable, List, Optional, Sequence, Tuple

import pandas as pd

from ..config import Config, get_default_config
from ..data.imputation import impute_missing_values
from ..data.loader import as_rows
from ..data.questions import DistanceConfig, Question, question_types_of
from ..exceptions import ConfigurationError
from .base import ClusteringStrategy
from .kmeans import KMeans, KMeansPlusPlus
from .kmedoids import KMedoids
from .result import ClusteringResult

ALGORITHMS = {
    'kmeans': KMeans,
    '1': KMeans,
    'kmeans++': KMeansPlusPlus,
    '2': KMeansPlusPlus,
    'kmedoids': KMedoids,
    '3': KMedoids,
}


def create_strategy(
    algorithm: str,
    k: int,
    max_iter: int = 100,
    random_seed: Optional[int] = None,
    verbose: bool = False
) -> ClusteringStrategy:
    """
    Create a clustering strategy by name.

    Args:
        algorithm: "kmeans", "kmeans++" or "kmedoids" (any case), or the
            menu aliases "1", "2", "3"
        k: Number of clusters
        max_iter: Maximum number of iterations
        random_seed: Seed for the strategy's random generator
        verbose: Whether the strategy prints progress

    Returns:
        Unconfigured strategy instance
    """
    try:
        cls = ALGORITHMS[str(algorithm).strip().lower()]
    except KeyError:
        raise ConfigurationError(f"Unknown clustering algorithm: {algorithm!r}") from None
    return cls(k, max_iter=max_iter, random_seed=random_seed, verbose=verbose)


def configure_strategy(strategy: ClusteringStrategy, questions: Sequence[Question]) -> ClusteringStrategy:
    """Push question types, numeric ranges and ordinal orderings into a strategy."""
    strategy.set_question_types(question_types_of(questions))
    config = DistanceConfig.from_questions(questions)
    for column, (min_value, max_value) in config.numeric_ranges.items():
        strategy.set_numeric_range(column, min_value, max_value)
    for column, options in config.ordinal_options.items():
        strategy.set_ordinal_options(column, options)
    return strategy


def run_for_k(
    rows: Sequence[Sequence[Any]],
    questions: Sequence[Question],
    k: int,
    algorithm: str = 'kmeans',
    max_iter: int = 100,
    n_runs: int = 10,
    seed_stride: int = 1000,
    random_seed: Optional[int] = None
) -> ClusteringResult:
    """
    Cluster with a fixed k several times and keep the best run.

    Run r uses seed ``r * seed_stride`` (plus ``random_seed`` when given),
    so a sweep is reproducible.

    Args:
        rows: Complete answer matrix
        questions: Survey questions in column order
        k: Number of clusters
        algorithm: Strategy name
        max_iter: Maximum iterations per run
        n_runs: Number of runs
        seed_stride: Seed spacing between runs
        random_seed: Offset added to every run seed

    Returns:
        Result with the highest silhouette (earliest run on ties)
    """
    best = None
    offset = random_seed or 0
    for run in range(max(n_runs, 1)):
        strategy = create_strategy(algorithm, k, max_iter, random_seed=offset + run * seed_stride)
        result = configure_strategy(strategy, questions).execute(rows)
        if best is None or result.silhouette > best.silhouette:
            best = result
    return best


def run_k_range(
    rows: Sequence[Sequence[Any]],
    questions: Sequence[Question],
    k_max: int,
    k_min: int = 2,
    algorithm: str = 'kmeans',
    max_iter: int = 100,
    n_runs: int = 10,
    seed_stride: int = 1000,
    random_seed: Optional[int] = None,
    verbose: bool = True
) -> List[ClusteringResult]:
    """
    Find the best clustering for every k in [k_min, k_max].

    Args:
        rows: Complete answer matrix
        questions: Survey questions in column order
        k_max: Largest k to try (clamped to the number of respondents)
        k_min: Smallest k to try
        algorithm: Strategy name
        max_iter: Maximum iterations per run
        n_runs: Runs per k
        seed_stride: Seed spacing between runs
        random_seed: Offset added to every run seed
        verbose: Whether to print progress

    Returns:
        One result per k, in increasing k
    """
    if k_max < 2:
        raise ConfigurationError(f"k_max must be >= 2, got {k_max}")
    if not questions:
        raise ConfigurationError("At least one question is required")
    if rows is None or len(rows) == 0:
        raise ConfigurationError("No respondents to cluster")

    k_max = min(k_max, len(rows))
    if verbose:
        print(f"\n[Clustering] Sweeping k={k_min}..{k_max} with {algorithm} ({n_runs} runs per k)...")

    results = []
    for k in range(k_min, k_max + 1):
        result = run_for_k(rows, questions, k, algorithm, max_iter, n_runs, seed_stride, random_seed)
        results.append(result)
        if verbose:
            print(f"  k={k}: silhouette = {result.silhouette:.4f}, inertia = {result.inertia:.4f}")

    if verbose and results:
        best = find_best_result(results)
        print(f"\n✓ Best number of clusters: {best.k}")
        print(f"  Best silhouette score: {best.silhouette:.4f}")

    return results


def find_best_result(results: Sequence[ClusteringResult]) -> Optional[ClusteringResult]:
    """Result with the highest silhouette (first one on ties), or None."""
    if not results:
        return None
    best = results[0]
    for result in results:
        if result.silhouette > best.silhouette:
            best = result
    return best


def results_to_frame(results: Sequence[ClusteringResult]) -> pd.DataFrame:
    """Tabulate a sweep: one row per result."""
    return pd.DataFrame(
        [(r.k, r.algorithm, r.silhouette, r.inertia, r.n_iterations) for r in results],
        columns=['k', 'algorithm', 'silhouette', 'inertia', 'n_iterations']
    )


def cluster_survey(
    data: Any,
    questions: Sequence[Question],
    respondent_ids: Optional[Sequence[Hashable]] = None,
    survey_id: Optional[str] = None,
    config: Optional[Config] = None
) -> Tuple[Optional[ClusteringResult], List[ClusteringResult]]:
    """
    Impute, sweep k and pick the best clustering of a survey.

    Args:
        data: Answer matrix, absent cells allowed
        questions: Survey questions in column order
        respondent_ids: Identifier of each row (defaults to row positions)
        survey_id: Survey identifier attached to the results
        config: Pipeline configuration

    Returns:
        Tuple of (best result, results for every k tried)
    """
    config = config or get_default_config()
    verbose = config.verbose
    for question in questions:
        question.validate()

    rows = as_rows(data)
    if respondent_ids is None:
        respondent_ids = list(range(len(rows)))
    if len(respondent_ids) != len(rows):
        raise ConfigurationError(
            f"Got {len(respondent_ids)} respondent ids for {len(rows)} rows"
        )

    if verbose:
        print("=" * 50)
        print(f"CLUSTERING SURVEY {survey_id or ''}".rstrip())
        print("=" * 50)

    complete = impute_missing_values(
        rows,
        question_types_of(questions),
        DistanceConfig.from_questions(questions),
        n_neighbors=config.imputation.n_neighbors,
        epsilon=config.imputation.epsilon,
        verbose=verbose
    )

    settings = config.clustering
    results = run_k_range(
        complete, questions,
        k_max=settings.k_max,
        k_min=settings.k_min,
        algorithm=settings.algorithm,
        max_iter=settings.max_iter,
        n_runs=settings.n_runs,
        seed_stride=settings.seed_stride,
        random_seed=settings.random_seed,
        verbose=verbose
    )
    results = [r.with_respondents(respondent_ids, survey_id) for r in results]
    return find_best_result(results), results
