"""
Base class for the fuzzy grouping engine.

Provides the common algorithmic skeleton for alternating optimization
between center updates and membership updates.
"""

from abc import abstractmethod
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Union
import time
import warnings

import torch
from torch import Tensor

from .interfaces import (
    AssignmentStrategy, ParameterUpdater, DistanceMetric,
    InitializationStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import (
    ClusterCenter, EngineState, Entity, IterationRecord, MembershipMatrix, MembershipRow
)
from ..assignments.hard import select_group_id
from ..utils.decimal_ops import DEFAULT_PRECISION, decimal_context
from ..utils.validation import (
    PopulationLike, check_group_count, check_max_iteration, validate_population
)

# callback(iteration, objective, improvement)
IterationCallback = Callable[[int, Decimal, Decimal], None]


class BaseClusteringAlgorithm:
    """Base class implementing the alternating optimization framework.

    Subclasses need to specify:
    - Initialization strategy
    - Center update strategy
    - Distance metric
    - Membership assignment strategy
    - Convergence criterion
    - Objective function

    One iteration runs: center update -> distance matrix -> membership
    update -> normalization (soft assignments) -> objective -> convergence
    check. The loop stops on convergence or once ``max_iteration``
    iterations have run; the latter is not an error.
    """

    def __init__(self,
                 group_count: int,
                 max_iteration: int = 100,
                 verbose: int = 0,
                 random_state: Optional[Union[int, torch.Generator]] = None,
                 precision: int = DEFAULT_PRECISION,
                 callback: Optional[IterationCallback] = None):
        """
        Args:
            group_count: Number of clusters K
            max_iteration: Maximum iterations
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Random seed for reproducibility
            precision: Significant digits for decimal arithmetic
            callback: Called once per iteration with
                (iteration, objective, improvement)
        """
        self.group_count = group_count
        self.max_iteration = max_iteration
        self.verbose = verbose
        self.random_state = random_state
        self.precision = precision
        self.callback = callback

        # These will be set by subclasses
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.distance_metric: Optional[DistanceMetric] = None
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None

        # Algorithm state
        self.fitted_ = False
        self.state_: Optional[EngineState] = None
        self.converged_ = False
        self.n_iter_ = 0
        self.history_: List[IterationRecord] = []
        self.entities_: List[Entity] = []
        self.partition_matrix_: Optional[MembershipMatrix] = None
        self.centers_: List[ClusterCenter] = []
        self.objective_: Optional[Decimal] = None

    def _check_parameters(self) -> None:
        """Validate numeric parameters at model-build entry.

        Subclasses extend this; raising here leaves the model in the
        ``FAILED`` state before any iteration runs.
        """
        check_max_iteration(self.max_iteration)

    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.initialization_strategy
        - self.update_strategy
        - self.distance_metric
        - self.assignment_strategy
        - self.convergence_criterion
        - self.objective
        """
        pass

    def fit(self, population: PopulationLike, y: Any = None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            population: Entities, (id, name, vector) tuples, or a 2D array
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        return self._fit(population)

    def fit_predict(self, population: PopulationLike, y: Any = None) -> Tensor:
        """Fit and return 1-based hard group ids of the population."""
        self.fit(population)
        return self._hard_labels(self.partition_matrix_)

    def predict(self, population: PopulationLike) -> Tensor:
        """Predict 1-based group ids for new data.

        Args:
            population: Data in any format accepted by ``fit``

        Returns:
            (n,) tensor of group ids; 0 marks a row with no positive membership
        """
        return self._hard_labels(self._memberships_for(population))

    def predict_proba(self, population: PopulationLike) -> Tensor:
        """Memberships of new data against the fitted centers.

        Returns:
            (n, K) float64 tensor whose rows sum to 1
        """
        return self._memberships_for(population).to_tensor()

    def _memberships_for(self, population: PopulationLike) -> MembershipMatrix:
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        entities = validate_population(population)
        with decimal_context(self.precision):
            matrix = MembershipMatrix(
                [MembershipRow(e, [Decimal(0)] * self.group_count) for e in entities],
                self.group_count
            )
            distances = self.distance_metric.matrix(self.centers_, entities)
            self.assignment_strategy.compute_assignments(matrix, distances)
            if self.assignment_strategy.is_soft:
                matrix.normalize()
        return matrix

    @staticmethod
    def _hard_labels(matrix: MembershipMatrix) -> Tensor:
        return torch.tensor([select_group_id(row) for row in matrix], dtype=torch.long)

    def _fit(self, population: PopulationLike) -> 'BaseClusteringAlgorithm':
        """Internal fit method implementing the alternating optimization."""
        self.state_ = EngineState.RUNNING
        self.fitted_ = False
        self.converged_ = False

        try:
            self._check_parameters()
            entities = validate_population(population)
            check_group_count(self.group_count, len(entities))
            with decimal_context(self.precision):
                self._run(entities)
        except Exception:
            self.state_ = EngineState.FAILED
            raise

        self.fitted_ = True
        return self

    def _run(self, entities: List[Entity]) -> None:
        self._create_components()

        if self.verbose:
            print(f"Initializing {self.group_count} clusters for {len(entities)} entities...")

        start_time = time.time()
        self.entities_ = entities
        matrix = self.initialization_strategy.initialize(entities, self.group_count)
        self.partition_matrix_ = matrix

        self.n_iter_ = 0
        self.history_ = []
        self.centers_ = []
        self.objective_ = None
        self.convergence_criterion.reset()

        converged = False
        iteration = 1
        while iteration <= self.max_iteration:
            iter_start_time = time.time()

            # Update step
            self.centers_ = self.update_strategy.update(matrix, previous=self.centers_)

            # Assignment step
            distances = self.distance_metric.matrix(self.centers_, entities)
            aux_info = self.assignment_strategy.compute_assignments(matrix, distances)
            if self.assignment_strategy.is_soft:
                matrix.normalize()

            # Compute objective
            objective_value = self.objective.compute(matrix, distances, aux_info=aux_info)

            # Check convergence
            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'objective': objective_value,
                'matrix': matrix,
                'centers': self.centers_
            })
            improvement = self._last_improvement(objective_value)

            self.objective_ = objective_value
            self.n_iter_ = iteration
            self.history_.append(IterationRecord(
                iteration=iteration,
                objective=objective_value,
                improvement=improvement,
                converged=converged,
                centers=tuple(self.centers_)
            ))
            if self.callback is not None:
                self.callback(iteration, objective_value, improvement)

            # Logging
            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                obj_direction = "↓" if self.objective.minimize else "↑"
                print(f"Iteration {iteration:8d} of {self.max_iteration:8d}: "
                      f"objective = {float(objective_value):.6f} {obj_direction} "
                      f"improvement = {float(improvement):.6f} ({iter_time:.3f}s)")

            if converged:
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

            iteration += 1

        self.converged_ = converged
        if converged:
            self.state_ = EngineState.CONVERGED

        total_time = time.time() - start_time

        if self.verbose:
            if not converged:
                warnings.warn(f"Failed to converge after {self.max_iteration} iterations")
            print(f"Total fitting time: {total_time:.3f}s")

    def _last_improvement(self, objective_value: Decimal) -> Decimal:
        """Absolute objective change recorded by the convergence check."""
        history = self.convergence_criterion.history
        if history and 'improvement' in history[-1]:
            return history[-1]['improvement']
        return abs(objective_value - (self.objective_ or Decimal(0)))

    @property
    def cluster_centers(self) -> List[ClusterCenter]:
        """Final cluster centers as decimal records."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return list(self.centers_)

    @property
    def cluster_centers_(self) -> Tensor:
        """Get cluster centers as a (K, d) float64 tensor."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return torch.tensor(
            [[float(v) for v in center.vector] for center in self.centers_],
            dtype=torch.float64
        )

    @property
    def u_(self) -> Tensor:
        """Final membership matrix as an (n, K) float64 tensor."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self.partition_matrix_.to_tensor()

    @property
    def inertia_(self) -> float:
        """Get final objective value."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return float(self.objective_)

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'group_count': self.group_count,
            'max_iteration': self.max_iteration,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'precision': self.precision,
            'callback': self.callback
        }

    def set_params(self, **params) -> 'BaseClusteringAlgorithm':
        """Set parameters (sklearn compatibility)."""
        for key, value in params.items():
            setattr(self, key, value)
        return self
