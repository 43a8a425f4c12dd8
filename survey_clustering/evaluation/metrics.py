"""
Cluster quality metrics.

Both metrics work from distances already computed with the mixed-type
distance, so they apply unchanged to synthesised centres and medoids.
"""

import numpy as np
from typing import Dict, Sequence
from sklearn.metrics import silhouette_samples


def compute_inertia(distances_to_representative: Sequence[float]) -> float:
    """
    Compute the inertia of a clustering.

    Not guaranteed to decrease monotonically across iterations: the
    discrete medoid search can raise it transiently.

    Args:
        distances_to_representative: Distance from each row to the
            representative of its cluster

    Returns:
        Sum of squared distances
    """
    d = np.asarray(distances_to_representative, dtype=float)
    return float(np.sum(d ** 2))


def compute_silhouette(distance_matrix: np.ndarray, labels: Sequence[int], k: int) -> float:
    """
    Compute the mean silhouette coefficient.

    For row i in cluster c, a(i) is the mean distance to the other members
    of c (0 when i is alone in c) and b(i) the smallest mean distance to the
    members of another non-empty cluster; s(i) = (b - a) / max(a, b), or 0
    when both are 0. A row alone in its cluster therefore scores 1 unless
    it coincides with a row of another cluster.

    Args:
        distance_matrix: Symmetric n x n row distances
        labels: Cluster index of each row
        k: Number of clusters requested

    Returns:
        Mean silhouette in [-1, 1]; 0.0 when undefined (n <= 1, k <= 1,
        a single populated cluster, or only singleton clusters)
    """
    labels = np.asarray(labels)
    n = len(labels)
    if n <= 1 or k <= 1:
        return 0.0

    clusters, counts = np.unique(labels, return_counts=True)
    if len(clusters) < 2 or len(clusters) == n:
        return 0.0

    distances = np.array(distance_matrix, dtype=float, copy=True)
    np.fill_diagonal(distances, 0.0)
    scores = silhouette_samples(distances, labels, metric='precomputed')

    # silhouette_samples scores singletons 0; here a(i) = 0 for them
    for cluster in clusters[counts == 1]:
        i = int(np.flatnonzero(labels == cluster)[0])
        b = min(distances[i, labels == other].mean() for other in clusters if other != cluster)
        scores[i] = 1.0 if b > 0 else 0.0

    return float(np.mean(scores))


def compute_cluster_sizes(labels: Sequence[int], k: int) -> Dict[int, int]:
    """Number of rows in each of the k clusters (empty clusters included)."""
    counts = np.bincount(np.asarray(labels, dtype=int), minlength=k)
    return {c: int(counts[c]) for c in range(k)}


def print_clustering_metrics(result, title: str = "CLUSTERING") -> Dict:
    """
    Print the quality metrics of a clustering result.

    Args:
        result: ClusteringResult to report on
        title: Title for the metrics display

    Returns:
        Dictionary with the reported values
    """
    sizes = compute_cluster_sizes(result.labels, result.k)
    metrics = {
        'algorithm': result.algorithm,
        'k': result.k,
        'silhouette': result.silhouette,
        'inertia': result.inertia,
        'n_iterations': result.n_iterations,
        'cluster_sizes': sizes,
    }

    print(f"\n{'='*70}")
    print(f"{title} RESULTS ({result.algorithm}, k={result.k})")
    print(f"{'='*70}")
    print(f"Silhouette: {result.silhouette:.4f}")
    print(f"Inertia:    {result.inertia:.4f}")
    print(f"Iterations: {result.n_iterations}")
    print("\nCluster sizes:")
    n = max(len(result.labels), 1)
    for c, size in sizes.items():
        print(f"  Cluster {c}: {size:4d} respondents ({size / n * 100:5.1f}%)")

    return metrics
