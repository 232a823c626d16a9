"""
Convergence criteria for the FCM iteration engine.

The engine stops as soon as the objective moves by less than a fixed
absolute amount between two consecutive iterations.
"""

from decimal import Decimal
from typing import Dict, Any, Optional

from ..base.interfaces import ConvergenceCriterion
from .decimal_ops import Number, ZERO, to_decimal


class ChangeInObjective(ConvergenceCriterion):
    """Convergence based on absolute change in objective function.

    The previous objective starts at zero, so the first iteration compares
    against 0 rather than being skipped.
    """

    def __init__(self, min_improvement: Number = Decimal('0.001'),
                 initial_objective: Number = ZERO):
        """
        Args:
            min_improvement: Stop once |J_new - J_prev| is strictly below this
            initial_objective: Value J_prev holds before the first iteration
        """
        super().__init__()
        self.min_improvement = to_decimal(min_improvement)
        self.initial_objective = to_decimal(initial_objective)
        self._prev_objective = self.initial_objective
        self.last_improvement: Optional[Decimal] = None

    @property
    def previous_objective(self) -> Decimal:
        return self._prev_objective

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if objective has stabilized."""
        current_objective = to_decimal(current_state['objective'])
        improvement = abs(current_objective - self._prev_objective)
        self.last_improvement = improvement

        converged = improvement < self.min_improvement

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history) + 1),
            'objective': current_objective,
            'previous': self._prev_objective,
            'improvement': improvement,
            'converged': converged
        })

        # J_prev only advances while the loop keeps running
        if not converged:
            self._prev_objective = current_objective

        return converged

    def reset(self):
        """Reset convergence history and the stored objective."""
        super().reset()
        self._prev_objective = self.initial_objective
        self.last_improvement = None
