"""
K-means clustering of survey respondents.

Centres are synthesised rows built column by column from the members of
each cluster:

- Numeric: arithmetic mean
- Ordinal, single category, free text: most frequent answer
- Multi category: every option reaching the highest frequency

KMeansPlusPlus only changes how the first centres are picked.
"""

from collections import Counter
from typing import Any, List

import numpy as np

from ..data.loader import as_option_set
from ..data.questions import QuestionType
from ..distance.mixed import MixedDistance
from ..evaluation.metrics import compute_inertia, compute_silhouette
from .base import ClusteringStrategy
from .result import ClusteringResult


class KMeans(ClusteringStrategy):
    """
    K-means over mixed-type answers.

    Initial centres are k distinct rows drawn uniformly without
    replacement. A cluster left empty after assignment gets a uniformly
    random row as its new centre, which may coincide with another centre.
    """

    name = "KMeans"

    def _run(self, rows: List[list], distance: MixedDistance) -> ClusteringResult:
        n = len(rows)
        centers = self._initial_centers(rows, distance)
        labels = np.full(n, -1)
        n_iter = 0

        while n_iter < self.max_iter:
            new_labels = self._nearest(distance.to_representatives(rows, centers))
            changed = not np.array_equal(new_labels, labels)
            labels = new_labels

            new_centers = self._update_centers(rows, labels)
            n_iter += 1

            stable = not changed and new_centers == centers
            centers = new_centers
            if stable:
                break

            if self.verbose:
                print(f"  iter {n_iter}: assignment {'changed' if changed else 'stable'}")

        own = distance.to_representatives(rows, centers)[np.arange(n), labels]
        return ClusteringResult(
            labels=labels,
            representatives=centers,
            silhouette=compute_silhouette(distance.pairwise(rows), labels, self.k),
            inertia=compute_inertia(own),
            algorithm=self.name,
            k=self.k,
            n_iterations=n_iter,
        )

    def _initial_centers(self, rows: List[list], distance: MixedDistance) -> List[list]:
        picks = self.rng.choice(len(rows), size=self.k, replace=False)
        return [list(rows[i]) for i in picks]

    def _update_centers(self, rows: List[list], labels: np.ndarray) -> List[list]:
        buckets: List[List[list]] = [[] for _ in range(self.k)]
        for row, cluster in zip(rows, labels):
            buckets[cluster].append(row)

        centers = []
        for members in buckets:
            if not members:
                # empty cluster: reseed to a random row
                centers.append(list(rows[int(self.rng.integers(len(rows)))]))
                continue
            centers.append([
                self._column_center(members, column, question_type)
                for column, question_type in enumerate(self.question_types)
            ])
        return centers

    @staticmethod
    def _column_center(members: List[list], column: int, question_type: QuestionType) -> Any:
        values = [row[column] for row in members]

        if question_type is QuestionType.NUMERIC:
            return sum(float(v) for v in values) / len(values)

        if question_type is QuestionType.MULTI_CATEGORY:
            freq = Counter()
            for value in values:
                freq.update(as_option_set(value))
            if not freq:
                return frozenset()
            top = max(freq.values())
            return frozenset(option for option, count in freq.items() if count == top)

        return Counter(values).most_common(1)[0][0]


class KMeansPlusPlus(KMeans):
    """
    K-means with spread-out initial centres.

    The first centre is a uniformly random row; each next one is a row
    drawn with probability proportional to its squared distance to the
    nearest centre chosen so far. Iteration is the same as KMeans.
    """

    name = "KMeans++"

    def _initial_centers(self, rows: List[list], distance: MixedDistance) -> List[list]:
        def distances_to(pick: int) -> np.ndarray:
            return np.array([distance.row_distance(row, rows[pick]) for row in rows])

        picks = self._weighted_seeds(len(rows), distances_to)
        return [list(rows[i]) for i in picks]
