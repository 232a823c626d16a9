"""
Fuzzy C-Means clustering with balanced group formation.

Soft clustering algorithm where each entity has fractional membership
in all clusters. The fuzziness is controlled by the mass parameter m.
After the model is built, the fuzzy partition is hardened into disjoint
groups whose sizes differ by at most one.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence, Union

import torch

from ..base.clustering_base import BaseClusteringAlgorithm, IterationCallback
from ..base.config import FuzzyCMeansConfig
from ..base.data_structures import Group, MembershipMatrix, MembershipRow
from ..base.interfaces import ClusteringObjective, DistanceMatrix, GroupingStrategy
from ..assignments.fuzzy import FuzzyAssignment
from ..assignments.balanced import BalancedAssignment
from ..distances.euclidean import EuclideanDistance
from ..initialization.random import UniformRandomInit
from ..initialization.from_previous import FromPreviousInit
from ..updates.mean import WeightedMeanUpdater
from ..utils.convergence import ChangeInObjective
from ..utils.decimal_ops import DEFAULT_PRECISION, ZERO, Number, decimal_context, to_decimal
from ..utils.validation import PopulationLike, check_mass, check_min_improvement


class FuzzyCMeansObjective(ClusteringObjective):
    """Fuzzy C-Means objective function.

    J = Σ_e Σ_c u_ec^m * d_ce
    where u_ec is membership and d_ce is the (unsquared) distance.
    """

    def __init__(self, m: Number = 2):
        """
        Args:
            m: Fuzziness exponent
        """
        self.m = to_decimal(m)

    def compute(self, matrix: MembershipMatrix, distances: DistanceMatrix,
                **kwargs) -> Decimal:
        """Compute fuzzy objective value."""
        total = ZERO
        for i, row in enumerate(matrix):
            for k, u in enumerate(row.vector):
                total += (u ** self.m) * distances[k][i]
        return total

    @property
    def minimize(self) -> bool:
        return True


class FuzzyCMeans(BaseClusteringAlgorithm):
    """Fuzzy C-Means (FCM) grouping engine.

    FCM allows each entity to belong to multiple clusters with
    different degrees of membership. The algorithm iteratively updates
    cluster centers and memberships until the objective stops improving,
    then ``form_groups`` turns the partition into balanced disjoint groups.

    Parameters
    ----------
    group_count : int
        Number of clusters / groups
    max_iteration : int, default=100
        Maximum number of iterations. Reaching it is not an error; the
        partition built so far is kept.
    min_improvement : decimal, default=0.001
        Stop once the objective changes by less than this. Must lie in (0, 1).
    mass : decimal, default=2
        Fuzziness exponent m. Must be > 1.
        - m→1: close to hard clustering
        - m=2: standard FCM
        - m→∞: all entities have equal membership in all clusters
    initial_vectors : sequence, optional
        Seeded membership rows, one per entity. Entities without a row
        start from a uniform-random one.
    random_state : int or torch.Generator, optional
        Seed for uniform-random initialization
    precision : int, default=28
        Significant digits for decimal arithmetic
    verbose : int, default=0
        Verbosity level
    callback : callable, optional
        Called as ``callback(iteration, objective, improvement)`` after
        every iteration

    Attributes
    ----------
    partition_matrix_ : MembershipMatrix
        Final membership rows, in population order
    cluster_centers : list of ClusterCenter
        Final centers, ids 1..K
    u_ : Tensor of shape (n_samples, group_count)
        Final membership matrix as float64
    cluster_centers_ : Tensor of shape (group_count, n_features)
        Final centers as float64
    objective_ : Decimal
        Objective value of the last iteration
    state_ : EngineState
        RUNNING (stopped at max_iteration), CONVERGED or FAILED
    history_ : list of IterationRecord
        One record per iteration
    orphans_ : list of MembershipRow
        Rows dropped by the last ``form_groups`` call

    Examples
    --------
    >>> from fuzzygroups import FuzzyCMeans
    >>>
    >>> population = [(1, 'Ann', [1, 3, -5, 7]), (2, 'Bob', [9, -1, 3, 1]), ...]
    >>> fcm = FuzzyCMeans(group_count=2, min_improvement='0.001')
    >>> fcm.build_model(population)
    >>>
    >>> # Get fuzzy memberships
    >>> memberships = fcm.u_
    >>>
    >>> # Get balanced groups
    >>> groups = fcm.form_groups()
    """

    def __init__(self,
                 group_count: int,
                 max_iteration: int = 100,
                 min_improvement: Number = Decimal('0.001'),
                 mass: Number = 2,
                 initial_vectors: Optional[Sequence[Optional[Sequence[Number]]]] = None,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 precision: int = DEFAULT_PRECISION,
                 verbose: int = 0,
                 callback: Optional[IterationCallback] = None,
                 grouping_strategy: Optional[GroupingStrategy] = None):
        """Initialize Fuzzy C-Means."""
        super().__init__(
            group_count=group_count,
            max_iteration=max_iteration,
            verbose=verbose,
            random_state=random_state,
            precision=precision,
            callback=callback
        )

        self.min_improvement = min_improvement
        self.mass = mass
        self.initial_vectors = initial_vectors
        self.grouping_strategy = grouping_strategy

        self.groups_: Optional[List[Group]] = None
        self.orphans_: List[MembershipRow] = []

    @classmethod
    def from_config(cls, config: FuzzyCMeansConfig, **kwargs: Any) -> 'FuzzyCMeans':
        """Build an engine from a configuration record.

        Keyword arguments (``callback``, ``grouping_strategy``) are passed
        through unchanged.
        """
        return cls(
            group_count=config.group_count,
            max_iteration=config.max_iteration,
            min_improvement=config.min_improvement,
            mass=config.mass,
            initial_vectors=config.initial_vectors,
            random_state=config.random_state,
            precision=config.precision,
            verbose=config.verbose,
            **kwargs
        )

    def _check_parameters(self) -> None:
        """Mass must be > 1 and min_improvement within (0, 1)."""
        super()._check_parameters()
        self._min_improvement = check_min_improvement(self.min_improvement)
        self._mass = check_mass(self.mass)

    def _create_components(self) -> None:
        """Create FCM specific components."""
        # Initialization
        if self.initial_vectors is None:
            self.initialization_strategy = UniformRandomInit(self.random_state)
        else:
            self.initialization_strategy = FromPreviousInit(self.initial_vectors,
                                                            self.random_state)

        # Weighted mean updater
        self.update_strategy = WeightedMeanUpdater(m=self._mass)

        self.distance_metric = EuclideanDistance()

        # Fuzzy assignment
        self.assignment_strategy = FuzzyAssignment(m=self._mass)

        self.convergence_criterion = ChangeInObjective(min_improvement=self._min_improvement)

        self.objective = FuzzyCMeansObjective(m=self._mass)

    def fit(self, population: PopulationLike, y: Any = None) -> 'FuzzyCMeans':
        """Fit Fuzzy C-Means clustering.

        Parameters
        ----------
        population : sequence of Entity, (id, name, vector) tuples, or 2D array
            Entities to partition
        y : Ignored
            Not used

        Returns
        -------
        self : FuzzyCMeans
            Fitted estimator

        Raises
        ------
        InvalidParameter
            If mass <= 1 or min_improvement is outside (0, 1)
        """
        if self.verbose:
            print(f"Fuzzy C-Means: {self.group_count} clusters with m={self.mass}")

        self.groups_ = None
        self.orphans_ = []
        super().fit(population, y)
        return self

    def build_model(self, population: PopulationLike) -> 'FuzzyCMeans':
        """Alias of :meth:`fit`."""
        return self.fit(population)

    def form_groups(self) -> List[Group]:
        """Harden the fuzzy partition into balanced disjoint groups.

        Each entity joins the group of its highest membership (lowest id on
        ties), then members are moved out of overfull groups until every
        group holds between floor(n/K) and ceil(n/K) members.

        Returns
        -------
        groups : list of Group
            Ordered by id

        Raises
        ------
        RedistributionExhausted
            If an overfull group cannot hand a member to any other group
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")

        strategy = self.grouping_strategy or BalancedAssignment()
        with decimal_context(self.precision):
            groups, orphans = strategy.form(self.partition_matrix_, self.centers_)

        if self.verbose and orphans:
            print(f"Dropped {len(orphans)} orphan member(s)")

        self.groups_ = groups
        self.orphans_ = orphans
        return groups

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        params = super().get_params(deep)
        params.update({
            'min_improvement': self.min_improvement,
            'mass': self.mass,
            'initial_vectors': self.initial_vectors,
            'grouping_strategy': self.grouping_strategy
        })
        return params

    def to_config(self) -> FuzzyCMeansConfig:
        """Configuration record describing this engine."""
        return FuzzyCMeansConfig(
            group_count=self.group_count,
            max_iteration=self.max_iteration,
            min_improvement=self.min_improvement,
            mass=self.mass,
            initial_vectors=self.initial_vectors,
            random_state=self.random_state if not isinstance(self.random_state, torch.Generator) else None,
            precision=self.precision,
            verbose=self.verbose
        )
