"""
Initialization from caller-supplied membership vectors.

Useful for warm starts or when a domain expert has a good initial guess.
"""

from typing import Optional, Sequence, Union

import torch

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import Entity, MembershipMatrix, MembershipRow
from ..exceptions import LengthMismatch
from ..utils.decimal_ops import ZERO, Number, to_decimal_vector
from .random import UniformRandomInit


class FromPreviousInit(InitializationStrategy):
    """Initialize from seeded membership vectors.

    Vectors are used verbatim, in population order. An entity without a
    vector (the sequence is shorter than the population, or holds ``None``
    at that index) gets a uniform-random row instead.
    """

    def __init__(self, initial_vectors: Sequence[Optional[Sequence[Number]]],
                 random_state: Optional[Union[int, torch.Generator]] = None):
        """
        Args:
            initial_vectors: One membership vector per entity
            random_state: Seed for the random fallback rows
        """
        self.initial_vectors = initial_vectors
        self.fallback = UniformRandomInit(random_state)

    def initialize(self, entities: Sequence[Entity], n_clusters: int,
                   **kwargs) -> MembershipMatrix:
        """Initialize from the seeded vectors.

        Raises:
            LengthMismatch: If a supplied vector's length is not n_clusters
            ValueError: If a supplied vector has negative components
        """
        rows = []
        for i, entity in enumerate(entities):
            seeded = self.initial_vectors[i] if i < len(self.initial_vectors) else None
            if seeded is None:
                vector = self.fallback.random_vector(n_clusters)
            else:
                vector = to_decimal_vector(seeded)
                if len(vector) != n_clusters:
                    raise LengthMismatch(len(vector), n_clusters)
                if any(v < ZERO for v in vector):
                    raise ValueError(f"Initial vector of entity {entity.id} has negative memberships")
            rows.append(MembershipRow(entity, vector))

        return MembershipMatrix(rows, n_clusters)
