"""
Configuration settings for survey respondent clustering.

This module centralizes the configurable parameters of the imputation
step and of the clustering sweep.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ImputationConfig:
    """K-nearest-neighbour imputation settings."""
    n_neighbors: int = 5
    epsilon: float = 1e-4  # keeps 1 / distance finite for exact matches


@dataclass
class ClusteringConfig:
    """Clustering configuration."""
    algorithm: str = "kmeans"  # kmeans, kmeans++ or kmedoids
    k_min: int = 2
    k_max: int = 10  # clamped to the number of respondents
    max_iter: int = 100

    # Repeated runs per k, keeping the best silhouette
    n_runs: int = 10
    seed_stride: int = 1000
    random_seed: Optional[int] = None


@dataclass
class Config:
    """Main configuration container."""
    clustering: ClusteringConfig = field(default_factory=ClusteringConfig)
    imputation: ImputationConfig = field(default_factory=ImputationConfig)

    verbose: bool = True


def get_default_config() -> Config:
    """Return default configuration."""
    return Config()


def get_config_from_args(args) -> Config:
    """
    Create configuration from command-line arguments.

    For applications that parse their own argparse flags (algorithm,
    k_max, max_iter, n_runs, random_seed, n_neighbors, verbose) and hand
    the result to cluster_survey. Attributes that are missing or None keep
    their defaults.
    """
    config = get_default_config()

    # Override with args if provided
    if getattr(args, 'algorithm', None) is not None:
        config.clustering.algorithm = args.algorithm
    if getattr(args, 'k_max', None) is not None:
        config.clustering.k_max = args.k_max
    if getattr(args, 'max_iter', None) is not None:
        config.clustering.max_iter = args.max_iter
    if getattr(args, 'n_runs', None) is not None:
        config.clustering.n_runs = args.n_runs
    if getattr(args, 'random_seed', None) is not None:
        config.clustering.random_seed = args.random_seed
    if getattr(args, 'n_neighbors', None) is not None:
        config.imputation.n_neighbors = args.n_neighbors
    if getattr(args, 'verbose', None) is not None:
        config.verbose = args.verbose

    return config
