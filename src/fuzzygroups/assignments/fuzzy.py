"""
Fuzzy membership update for Fuzzy C-Means.

Implements the membership calculation where each entity has fractional
membership in all clusters, computed from its distance to every center.
"""

from decimal import Decimal
from typing import Any, Dict, List

from ..base.interfaces import AssignmentStrategy, DistanceMatrix
from ..base.data_structures import MembershipMatrix
from ..exceptions import InvalidParameter
from ..utils.decimal_ops import ONE, ZERO, Number, divide, to_decimal, total


class FuzzyAssignment(AssignmentStrategy):
    """Fuzzy membership update.

    Uses the formula:
    u_ej = d_je^(-2/(m-1)) / Σ_k d_ke^(-2/(m-1))

    where d_je is the distance from entity e to the center of cluster j.
    An entity lying exactly on one or more centers has no finite value
    under this formula; it gets full membership in those clusters, split
    evenly if several centers coincide, and 0 everywhere else.
    """

    def __init__(self, m: Number = 2):
        """
        Args:
            m: Fuzziness exponent (m > 1). Higher values make clustering fuzzier.
        """
        super().__init__()
        self.m = to_decimal(m)
        if not self.m > ONE:
            raise InvalidParameter(f"Fuzziness exponent m must be > 1, got {m}")

    @property
    def is_soft(self) -> bool:
        """Fuzzy assignments are soft."""
        return True

    @property
    def exponent(self) -> Decimal:
        return Decimal(-2) / (self.m - ONE)

    def compute_assignments(self, matrix: MembershipMatrix,
                            distances: DistanceMatrix,
                            **kwargs) -> Dict[str, Any]:
        """Rewrite every membership row from the distance matrix.

        Args:
            matrix: Partition matrix, updated in place
            distances: (K, n) distances, cluster-major

        Returns:
            aux_info: Dictionary with the indices of entities that coincide
            with a center and their nearest-center distances
        """
        exact_matches = []
        min_distances = []

        for i, row in enumerate(matrix):
            row_distances = [distances[k][i] for k in range(matrix.n_clusters)]
            min_distances.append(min(row_distances))

            if any(d == ZERO for d in row_distances):
                exact_matches.append(i)
                row.vector = self._exact_row(row_distances)
            else:
                row.vector = self._compute_fuzzy_row(row_distances)

        return {
            'exact_matches': exact_matches,
            'min_distances': min_distances,
            'fuzziness': self.m
        }

    def _compute_fuzzy_row(self, distances: List[Decimal]) -> List[Decimal]:
        """Compute fuzzy memberships for a single entity with nonzero distances."""
        raised = [d ** self.exponent for d in distances]
        return divide(raised, total(raised))

    def _exact_row(self, distances: List[Decimal]) -> List[Decimal]:
        hits = [k for k, d in enumerate(distances) if d == ZERO]
        share = ONE / Decimal(len(hits))
        return [share if k in hits else ZERO for k in range(len(distances))]
