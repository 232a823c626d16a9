"""Base classes and interfaces for the fuzzy grouping engine."""

from .interfaces import (
    InitializationStrategy,
    ParameterUpdater,
    DistanceMetric,
    AssignmentStrategy,
    GroupingStrategy,
    ConvergenceCriterion,
    ClusteringObjective
)

from .data_structures import (
    Entity,
    ClusterCenter,
    MembershipRow,
    MembershipMatrix,
    Group,
    EngineState,
    IterationRecord
)

from .config import FuzzyCMeansConfig

from .clustering_base import BaseClusteringAlgorithm

__all__ = [
    # Interfaces
    'InitializationStrategy',
    'ParameterUpdater',
    'DistanceMetric',
    'AssignmentStrategy',
    'GroupingStrategy',
    'ConvergenceCriterion',
    'ClusteringObjective',

    # Data structures
    'Entity',
    'ClusterCenter',
    'MembershipRow',
    'MembershipMatrix',
    'Group',
    'EngineState',
    'IterationRecord',

    # Configuration
    'FuzzyCMeansConfig',

    # Base algorithm
    'BaseClusteringAlgorithm'
]
