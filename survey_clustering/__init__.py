"""
Clustering of survey respondents with mixed-type answers.

This package provides modules for:
- Survey question descriptors and answer matrix assembly
- K-nearest-neighbour imputation of missing answers
- Mixed-type distances (numeric, ordinal, categorical, free text)
- K-Means, K-Means++ and K-Medoids clustering
- Quality metrics (inertia, silhouette) and best-k selection
"""

from . import data
from . import distance
from . import evaluation
from . import clustering
from .exceptions import ConfigurationError

__version__ = "1.0.0"
