"""Cluster center update strategies."""

from .mean import WeightedMeanUpdater

__all__ = [
    'WeightedMeanUpdater'
]
