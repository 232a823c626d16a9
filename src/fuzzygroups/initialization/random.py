"""
Uniform-random initialization of the membership matrix.

Each entity receives a vector of nonnegative uniform draws normalized by
their sum, so every row starts as a valid fuzzy membership.
"""

from typing import List, Optional, Sequence, Union

import torch

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import Entity, MembershipMatrix, MembershipRow
from ..utils.decimal_ops import ZERO, divide, to_decimal, total
from ..utils.validation import check_random_state


class UniformRandomInit(InitializationStrategy):
    """Random initialization with uniformly distributed memberships.

    Draws come from a ``torch.Generator``; seeding it makes the initial
    partition reproducible.
    """

    def __init__(self, random_state: Optional[Union[int, torch.Generator]] = None):
        """
        Args:
            random_state: Seed or generator; None draws a fresh seed
        """
        self.generator = check_random_state(random_state)

    def random_vector(self, length: int) -> List:
        """Draw one membership vector of the given length that sums to 1."""
        while True:
            draws = torch.rand(length, generator=self.generator, dtype=torch.float64)
            vector = [to_decimal(v) for v in draws.tolist()]
            vector_total = total(vector)
            if vector_total > ZERO:
                return divide(vector, vector_total)

    def initialize(self, entities: Sequence[Entity], n_clusters: int,
                   **kwargs) -> MembershipMatrix:
        """Initialize memberships with random uniform vectors.

        Args:
            entities: Population
            n_clusters: Number of clusters

        Returns:
            MembershipMatrix with one random row per entity
        """
        rows = [MembershipRow(entity, self.random_vector(n_clusters)) for entity in entities]
        return MembershipMatrix(rows, n_clusters)
