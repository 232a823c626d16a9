"""
Membership-weighted mean update for cluster centers.
"""

from decimal import Decimal
from typing import List, Sequence

from ..base.interfaces import ParameterUpdater
from ..base.data_structures import ClusterCenter, MembershipMatrix
from ..utils.decimal_ops import ZERO, Number, divide, scale, to_decimal, total, vector_sum


class WeightedMeanUpdater(ParameterUpdater):
    """Updates each center to the membership-weighted mean of the population.

    center_k = Σ_e u_ek^m * x_e / Σ_e u_ek^m
    """

    def __init__(self, m: Number = 2):
        """
        Args:
            m: Fuzziness exponent applied to memberships before weighting
        """
        self.m = to_decimal(m)

    def update(self, matrix: MembershipMatrix,
               previous: Sequence[ClusterCenter] = (),
               **kwargs) -> List[ClusterCenter]:
        """Recompute all centers.

        Args:
            matrix: Current partition matrix
            previous: Last centers, used when a cluster has no weight at all

        Returns:
            Centers with ids 1..K
        """
        centers = []
        for k in range(matrix.n_clusters):
            weights = [u ** self.m for u in matrix.column(k)]
            weight_total = total(weights)

            if weight_total > ZERO:
                weighted = vector_sum(
                    scale(row.entity.vector, w) for row, w in zip(matrix, weights)
                )
                vector = divide(weighted, weight_total)
            elif k < len(previous):
                # No membership mass - keep current center
                vector = list(previous[k].vector)
            else:
                vector = divide(
                    vector_sum(row.entity.vector for row in matrix),
                    Decimal(len(matrix))
                )

            centers.append(ClusterCenter(k + 1, tuple(vector)))

        return centers
