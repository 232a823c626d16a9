"""
Euclidean distance metric for fuzzy grouping.

Distances are computed in exact decimal arithmetic and are *not* squared:
both the membership update and the objective use the plain distance.
"""

from decimal import Decimal
from typing import Sequence

from ..base.interfaces import DistanceMetric
from ..utils.decimal_ops import distance


class EuclideanDistance(DistanceMetric):
    """Euclidean distance ``sqrt(sum((a_i - b_i)^2))``."""

    def compute(self, left: Sequence[Decimal], right: Sequence[Decimal]) -> Decimal:
        """Compute the distance between two vectors.

        Raises:
            LengthMismatch: If the vectors differ in length
        """
        return distance(left, right)
