"""Clustering algorithm implementations."""

from .fuzzy_cmeans import FuzzyCMeans, FuzzyCMeansObjective

__all__ = [
    'FuzzyCMeans',
    'FuzzyCMeansObjective'
]
