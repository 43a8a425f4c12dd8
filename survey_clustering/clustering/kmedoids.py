"""
K-medoids clustering of survey respondents.

Representatives are actual respondents, so no averaging of categorical or
free-text answers is needed. All row distances are computed once up front
and reused by seeding, assignment, the medoid search and the metrics.
"""

from typing import List

import numpy as np

from ..distance.mixed import MixedDistance
from ..evaluation.metrics import compute_inertia, compute_silhouette
from .base import ClusteringStrategy
from .result import ClusteringResult


class KMedoids(ClusteringStrategy):
    """
    K-medoids over mixed-type answers.

    Seeding follows the k-means++ scheme. Each update picks, per cluster,
    the member with the smallest total distance to the other members
    (exhaustive search). An empty cluster gets a random row that is not
    already a medoid.
    """

    name = "KMedoids"

    def _run(self, rows: List[list], distance: MixedDistance) -> ClusteringResult:
        n = len(rows)
        distances = distance.pairwise(rows)

        medoids = np.array(self._weighted_seeds(n, lambda pick: distances[:, pick]))
        labels = np.full(n, -1)
        n_iter = 0

        while n_iter < self.max_iter:
            new_labels = self._nearest(distances[:, medoids])
            changed = not np.array_equal(new_labels, labels)
            labels = new_labels

            new_medoids = self._update_medoids(distances, labels)
            n_iter += 1

            stable = not changed and np.array_equal(new_medoids, medoids)
            medoids = new_medoids
            if stable:
                break

            if self.verbose:
                print(f"  iter {n_iter}: medoids {medoids.tolist()}")

        return ClusteringResult(
            labels=labels,
            representatives=[list(rows[m]) for m in medoids],
            silhouette=compute_silhouette(distances, labels, self.k),
            inertia=compute_inertia(distances[np.arange(n), medoids[labels]]),
            algorithm=self.name,
            k=self.k,
            n_iterations=n_iter,
        )

    def _update_medoids(self, distances: np.ndarray, labels: np.ndarray) -> np.ndarray:
        medoids = np.full(self.k, -1)

        for cluster in range(self.k):
            members = np.flatnonzero(labels == cluster)
            if len(members) == 0:
                continue
            totals = distances[np.ix_(members, members)].sum(axis=1)
            medoids[cluster] = members[int(np.argmin(totals))]

        empty = np.flatnonzero(medoids == -1)
        if len(empty):
            used = set(medoids[medoids >= 0].tolist())
            for cluster in empty:
                free = np.array([i for i in range(len(labels)) if i not in used])
                pick = int(self.rng.choice(free))
                medoids[cluster] = pick
                used.add(pick)

        return medoids
