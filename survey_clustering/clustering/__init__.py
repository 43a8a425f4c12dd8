"""Clustering strategies for survey respondents."""

from .result import ClusteringResult
from .base import ClusteringStrategy
from .kmeans import KMeans, KMeansPlusPlus
from .kmedoids import KMedoids
from .selection import (
    create_strategy,
    configure_strategy,
    run_for_k,
    run_k_range,
    find_best_result,
    results_to_frame,
    cluster_survey
)

__all__ = [
    'ClusteringResult',
    'ClusteringStrategy',
    'KMeans',
    'KMeansPlusPlus',
    'KMedoids',
    'create_strategy',
    'configure_strategy',
    'run_for_k',
    'run_k_range',
    'find_best_result',
    'results_to_frame',
    'cluster_survey'
]
