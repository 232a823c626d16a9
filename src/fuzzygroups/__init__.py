"""
FuzzyGroups: balanced group formation with Fuzzy C-Means.

This package partitions a population of entities, each described by a
numeric feature vector, into overlapping clusters with Fuzzy C-Means and
then hardens the fuzzy partition into disjoint groups of near-equal size.
All arithmetic runs in exact decimal precision.

Example usage:
    >>> from fuzzygroups import FuzzyCMeans, load_population
    >>>
    >>> population = load_population('dataset.csv')
    >>>
    >>> fcm = FuzzyCMeans(group_count=7, max_iteration=100, min_improvement='0.001')
    >>> fcm.build_model(population)
    >>>
    >>> # Get balanced groups
    >>> for group in fcm.form_groups():
    ...     print(group.id, group.member_names)
"""

__version__ = '0.1.0'

# Core data structures
from .base import (
    Entity,
    ClusterCenter,
    MembershipRow,
    MembershipMatrix,
    Group,
    EngineState,
    IterationRecord,
    FuzzyCMeansConfig
)

# Import main algorithm
from .algorithms.fuzzy_cmeans import FuzzyCMeans, FuzzyCMeansObjective

from .exceptions import (
    FuzzyGroupsError,
    InvalidParameter,
    LengthMismatch,
    RedistributionExhausted,
    OrphanMemberWarning
)

from .datasets import load_initial_vectors, load_population, make_random_population

# Import visualization
from .visualization import (
    plot_fuzzy_memberships,
    plot_groups,
    plot_objective
)

__all__ = [
    # Algorithm
    'FuzzyCMeans',
    'FuzzyCMeansObjective',
    'FuzzyCMeansConfig',

    # Core data structures
    'Entity',
    'ClusterCenter',
    'MembershipRow',
    'MembershipMatrix',
    'Group',
    'EngineState',
    'IterationRecord',

    # Errors
    'FuzzyGroupsError',
    'InvalidParameter',
    'LengthMismatch',
    'RedistributionExhausted',
    'OrphanMemberWarning',

    # Record sources
    'load_initial_vectors',
    'load_population',
    'make_random_population',

    # Visualization
    'plot_fuzzy_memberships',
    'plot_groups',
    'plot_objective',

    # Version
    '__version__'
]
