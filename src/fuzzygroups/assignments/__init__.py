"""Membership update and group formation strategies."""

from .fuzzy import FuzzyAssignment
from .hard import HardAssignment, select_group_id
from .balanced import (
    BalancedAssignment,
    balance_targets,
    sort_by_confidence,
    rank_destinations
)

__all__ = [
    # Fuzzy memberships
    'FuzzyAssignment',

    # Group formation
    'HardAssignment',
    'BalancedAssignment',
    'select_group_id',
    'balance_targets',
    'sort_by_confidence',
    'rank_destinations'
]
