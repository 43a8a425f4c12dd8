"""Cluster quality metrics."""

from .metrics import (
    compute_inertia,
    compute_silhouette,
    compute_cluster_sizes,
    print_clustering_metrics
)

__all__ = [
    'compute_inertia',
    'compute_silhouette',
    'compute_cluster_sizes',
    'print_clustering_metrics'
]
