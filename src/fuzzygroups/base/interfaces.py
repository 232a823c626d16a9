"""
Core interfaces for the fuzzy grouping engine.

This module defines the abstract base classes the engine is assembled from,
so each step of the alternating optimization and of group formation can be
swapped independently.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Sequence, Tuple

if TYPE_CHECKING:
    from .data_structures import ClusterCenter, Entity, Group, MembershipMatrix

# distances[k][i]: distance between cluster k's center and entity i
DistanceMatrix = List[List[Decimal]]


class InitializationStrategy(ABC):
    """Abstract base class for membership matrix initialization."""

    @abstractmethod
    def initialize(self, entities: Sequence['Entity'], n_clusters: int,
                   **kwargs) -> 'MembershipMatrix':
        """Create the initial partition matrix.

        Args:
            entities: Population, in input order
            n_clusters: Number of clusters K

        Returns:
            MembershipMatrix whose rows each sum to 1
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for cluster center updates."""

    @abstractmethod
    def update(self, matrix: 'MembershipMatrix',
               previous: Sequence['ClusterCenter'] = (),
               **kwargs) -> List['ClusterCenter']:
        """Recompute every cluster center from the current memberships.

        Args:
            matrix: Current partition matrix
            previous: Centers from the last iteration (may be empty)

        Returns:
            List of K cluster centers, ids 1..K
        """
        pass


class DistanceMetric(ABC):
    """Abstract base class for distance computations."""

    @abstractmethod
    def compute(self, left: Sequence[Decimal], right: Sequence[Decimal]) -> Decimal:
        """Distance between two vectors of equal length."""
        pass

    def matrix(self, centers: Sequence['ClusterCenter'],
               entities: Sequence['Entity']) -> DistanceMatrix:
        """Distances for every (cluster, entity) pair, cluster-major."""
        return [
            [self.compute(center.vector, entity.vector) for entity in entities]
            for center in centers
        ]


class AssignmentStrategy(ABC):
    """Abstract base class for membership updates from distances."""

    @abstractmethod
    def compute_assignments(self, matrix: 'MembershipMatrix',
                            distances: DistanceMatrix,
                            **kwargs) -> Dict[str, Any]:
        """Rewrite the memberships of ``matrix`` in place.

        Args:
            matrix: Partition matrix to update
            distances: (K, n) distance matrix

        Returns:
            Auxiliary information about the update
        """
        pass

    @property
    @abstractmethod
    def is_soft(self) -> bool:
        """Whether this strategy produces graded memberships."""
        return False


class GroupingStrategy(ABC):
    """Abstract base class for turning a partition into disjoint groups."""

    @abstractmethod
    def form(self, matrix: 'MembershipMatrix', centers: Sequence['ClusterCenter'],
             **kwargs) -> Tuple[List['Group'], List[Any]]:
        """Build groups from the final partition.

        Returns:
            Groups ordered by id, and any rows that could not be placed
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged.

        Args:
            current_state: Dictionary containing current algorithm state

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, matrix: 'MembershipMatrix', distances: DistanceMatrix,
                **kwargs) -> Decimal:
        """Compute objective function value.

        Args:
            matrix: Current partition matrix
            distances: (K, n) distance matrix

        Returns:
            Scalar objective value
        """
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass
