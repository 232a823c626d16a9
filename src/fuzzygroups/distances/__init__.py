"""Distance metrics for the fuzzy grouping engine."""

from .euclidean import EuclideanDistance

__all__ = [
    'EuclideanDistance'
]
