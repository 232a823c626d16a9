"""Visualization utilities for grouping results."""

from .plot_groups import (
    plot_fuzzy_memberships,
    plot_groups,
    plot_objective
)

__all__ = [
    'plot_fuzzy_memberships',
    'plot_groups',
    'plot_objective'
]
