"""
Shared machinery for the clustering strategies.

Every strategy is configured the same way (question types, numeric
ranges, ordinal orderings, seed) and runs the same loop: assign each row
to its nearest representative, rebuild the representatives, stop once
neither changes. Subclasses differ in how representatives are
initialised and updated.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional, Sequence

import numpy as np

from ..data.loader import as_rows, count_absent
from ..data.questions import DistanceConfig, QuestionType
from ..distance.mixed import MixedDistance
from ..exceptions import ConfigurationError
from .result import ClusteringResult


class ClusteringStrategy(ABC):
    """
    Base class for clustering strategies over mixed-type survey answers.

    Configuration must be complete before :meth:`execute` is called and is
    not changed while it runs.

    Args:
        k: Number of clusters
        max_iter: Maximum number of assign/update iterations
        random_seed: Seed for the strategy's own random generator
            (None draws from system entropy)
        verbose: Whether to print progress
    """

    name = "Clustering"

    def __init__(
        self,
        k: int,
        max_iter: int = 100,
        random_seed: Optional[int] = None,
        verbose: bool = False
    ):
        self.k = k
        self.max_iter = max_iter
        self.verbose = verbose
        self.random_seed = random_seed
        self.question_types: Optional[List[QuestionType]] = None
        self.distance_config = DistanceConfig()
        self.rng = np.random.default_rng(random_seed)

    # === Configuration ===

    def set_question_types(self, question_types: Sequence[QuestionType]):
        self.question_types = [QuestionType.parse(t) for t in question_types]

    def set_numeric_range(self, column: int, min_value: float, max_value: float):
        self.distance_config.set_numeric_range(column, min_value, max_value)

    def set_ordinal_options(self, column: int, options: Sequence[str]):
        self.distance_config.set_ordinal_options(column, options)

    def set_seed(self, seed: Optional[int]):
        """Replace the random generator with a freshly seeded one."""
        self.random_seed = seed
        self.rng = np.random.default_rng(seed)

    # === Execution ===

    def execute(self, data: Any) -> ClusteringResult:
        """
        Cluster an answer matrix.

        Args:
            data: Complete answer matrix (DataFrame or sequence of rows);
                absent cells must have been imputed beforehand

        Returns:
            ClusteringResult with assignment, representatives and metrics

        Raises:
            ConfigurationError: If the data, k or the column configuration
                is invalid. Raised before any iteration runs.
        """
        rows = self._validate(data)
        distance = MixedDistance(self.question_types, self.distance_config)

        if self.verbose:
            print(f"\n[{self.name}] Clustering {len(rows)} respondents into {self.k} clusters...")

        result = self._run(rows, distance)

        if self.verbose:
            print(f"✓ {self.name} finished after {result.n_iterations} iterations")
            print(f"  Silhouette: {result.silhouette:.4f}  Inertia: {result.inertia:.4f}")

        return result

    @abstractmethod
    def _run(self, rows: List[list], distance: MixedDistance) -> ClusteringResult:
        """Run the strategy on validated rows."""

    def _validate(self, data: Any) -> List[list]:
        if data is None:
            raise ConfigurationError("Data cannot be None")
        rows = as_rows(data)
        n = len(rows)
        if n == 0:
            raise ConfigurationError("Dataset cannot be empty")
        if self.k <= 0:
            raise ConfigurationError(f"k must be > 0, got {self.k}")
        if self.k > n:
            raise ConfigurationError(
                f"k cannot exceed the number of respondents ({n}), got {self.k}"
            )
        if self.max_iter < 1:
            raise ConfigurationError(f"max_iter must be >= 1, got {self.max_iter}")
        if self.question_types is None:
            raise ConfigurationError("Question types are not set; call set_question_types() first")

        width = len(self.question_types)
        if width == 0:
            raise ConfigurationError("At least one question type is required")
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ConfigurationError(
                    f"Row {i} has {len(row)} answers but {width} question types are set"
                )
        self.distance_config.validate(self.question_types)

        n_absent = count_absent(rows)
        if n_absent:
            raise ConfigurationError(
                f"Dataset has {n_absent} absent answers; impute them before clustering"
            )
        return rows

    # === Shared helpers ===

    def _nearest(self, distances: np.ndarray) -> np.ndarray:
        """Index of the closest representative per row (first one on ties)."""
        return np.argmin(distances, axis=1)

    def _weighted_seeds(self, n: int, distances_to: Callable[[int], np.ndarray]) -> List[int]:
        """
        Pick k distinct row indices spread apart.

        The first index is uniform; each next one is drawn with probability
        proportional to the squared distance from a row to its nearest
        already chosen row. When every remaining row coincides with a chosen
        one the draw is uniform over the remaining rows.

        Args:
            n: Number of rows
            distances_to: Maps a row index to the distances from every row to it

        Returns:
            k distinct row indices in the order they were chosen
        """
        chosen = [int(self.rng.integers(n))]
        nearest = np.asarray(distances_to(chosen[0]), dtype=float)

        while len(chosen) < self.k:
            candidates = np.setdiff1d(np.arange(n), chosen)
            weights = nearest[candidates] ** 2
            total = weights.sum()
            if total > 0:
                pick = int(self.rng.choice(candidates, p=weights / total))
            else:
                pick = int(self.rng.choice(candidates))
            chosen.append(pick)
            nearest = np.minimum(nearest, distances_to(pick))

        return chosen
