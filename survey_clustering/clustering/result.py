"""Clustering result container."""

from dataclasses import dataclass, replace
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple

import pandas as pd


@dataclass(frozen=True)
class ClusteringResult:
    """
    Outcome of a single clustering run.

    Respondent and survey identifiers are unknown to the algorithms and are
    attached afterwards with :meth:`with_respondents`.

    Attributes:
        labels: Cluster index of each row
        representatives: One row-shaped representative per cluster
        silhouette: Mean silhouette coefficient
        inertia: Sum of squared distances to the representatives
        algorithm: Name of the algorithm that produced the result
        k: Number of clusters
        n_iterations: Iterations actually run
        respondent_ids: Identifier of each row, in row order
        survey_id: Survey the rows answered
    """
    labels: Tuple[int, ...]
    representatives: Tuple[Tuple[Any, ...], ...]
    silhouette: float
    inertia: float
    algorithm: str
    k: int
    n_iterations: int
    respondent_ids: Optional[Tuple[Hashable, ...]] = None
    survey_id: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'labels', tuple(int(g) for g in self.labels))
        object.__setattr__(
            self, 'representatives', tuple(tuple(r) for r in self.representatives)
        )
        if self.respondent_ids is not None:
            object.__setattr__(self, 'respondent_ids', tuple(self.respondent_ids))

    def with_respondents(
        self,
        respondent_ids: Sequence[Hashable],
        survey_id: Optional[str] = None
    ) -> 'ClusteringResult':
        """Copy of this result with respondent ids (and survey id) attached."""
        return replace(
            self,
            respondent_ids=tuple(respondent_ids),
            survey_id=survey_id if survey_id is not None else self.survey_id
        )

    def groups_by_cluster(self) -> List[List[Hashable]]:
        """
        Group respondent ids by cluster.

        Returns:
            List of k lists; list c holds the ids of the rows in cluster c
        """
        if self.respondent_ids is None:
            raise ValueError("Respondent ids have not been attached to this result")
        if len(self.respondent_ids) != len(self.labels):
            raise ValueError(
                f"Got {len(self.respondent_ids)} respondent ids for {len(self.labels)} rows"
            )
        groups: List[List[Hashable]] = [[] for _ in range(self.k)]
        for rid, cluster in zip(self.respondent_ids, self.labels):
            groups[cluster].append(rid)
        return groups

    def cluster_sizes(self) -> Dict[int, int]:
        sizes = {c: 0 for c in range(self.k)}
        for cluster in self.labels:
            sizes[cluster] += 1
        return sizes

    def to_frame(self) -> pd.DataFrame:
        """One row per respondent with its cluster index."""
        ids = self.respondent_ids if self.respondent_ids is not None else range(len(self.labels))
        return pd.DataFrame({
            'respondent_id': list(ids),
            'cluster': list(self.labels),
        })

    def summary(self) -> Dict:
        return {
            'algorithm': self.algorithm,
            'k': self.k,
            'silhouette': float(self.silhouette),
            'inertia': float(self.inertia),
            'n_iterations': self.n_iterations,
            'cluster_sizes': self.cluster_sizes(),
            'survey_id': self.survey_id,
        }
