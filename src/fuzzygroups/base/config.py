"""
Configuration record for the FCM grouping engine.

Replaces module-level tunables: every run is described by one
``FuzzyCMeansConfig`` handed to the engine factory.
"""

from dataclasses import asdict, dataclass, replace
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..utils.decimal_ops import DEFAULT_PRECISION, Number


@dataclass(frozen=True)
class FuzzyCMeansConfig:
    """Options recognized by :class:`~fuzzygroups.algorithms.FuzzyCMeans`.

    Attributes:
        group_count: Number of clusters / groups K
        max_iteration: Upper bound on FCM iterations
        min_improvement: Stop once the objective moves by less than this,
            must lie in (0, 1)
        mass: Fuzziness exponent m, must be > 1
        initial_vectors: Optional seeded membership rows, one per entity
        random_state: Seed for uniform-random initialization
        precision: Significant digits for decimal arithmetic
        verbose: 0 silent, 1 progress, 2 every iteration
    """

    group_count: int
    max_iteration: int = 100
    min_improvement: Number = Decimal('0.001')
    mass: Number = Decimal(2)
    initial_vectors: Optional[Sequence[Optional[Sequence[Number]]]] = None
    random_state: Optional[int] = None
    precision: int = DEFAULT_PRECISION
    verbose: int = 0

    def replace(self, **changes: Any) -> 'FuzzyCMeansConfig':
        """Return a copy with the given fields changed."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
