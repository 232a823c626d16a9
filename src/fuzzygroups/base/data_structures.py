"""
Core data structures for the fuzzy grouping engine.

Entities and cluster centers are immutable value records. Membership rows
and groups are mutable, and owned by the membership matrix and the group
formation step respectively.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Iterator, List, Optional, Sequence, Tuple

import torch
from torch import Tensor

from ..utils.decimal_ops import Number, ZERO, divide, to_decimal, total


@dataclass(frozen=True)
class Entity:
    """A member of the population: identifier, display name, feature vector."""

    id: int
    name: str
    vector: Tuple[Decimal, ...]

    @classmethod
    def from_scores(cls, id: Number, name: str, scores: Sequence[Number]) -> 'Entity':
        """Build an entity from raw record fields.

        Integer-like strings are parsed for ``id``; scores may be ints,
        floats, Decimals or numeric strings.

        Raises:
            ValueError: If the id or a score cannot be parsed as a number.
        """
        try:
            entity_id = int(id)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Unable to parse {id!r} as number") from e
        try:
            vector = tuple(to_decimal(s) for s in scores)
        except (TypeError, InvalidOperation) as e:
            raise ValueError(f"Unable to parse scores {scores!r} of entity {entity_id}") from e
        return cls(entity_id, str(name), vector)

    @property
    def dimension(self) -> int:
        return len(self.vector)


@dataclass(frozen=True)
class ClusterCenter:
    """Centroid of one cluster. ``id`` is 1-based."""

    id: int
    vector: Tuple[Decimal, ...]


@dataclass
class MembershipRow:
    """An entity paired with its membership in every cluster."""

    entity: Entity
    vector: List[Decimal]

    def total(self) -> Decimal:
        return total(self.vector)

    def membership(self, group_id: int) -> Decimal:
        """Membership value for a 1-based group id."""
        return self.vector[group_id - 1]


class MembershipMatrix:
    """The partition matrix U: one membership row per entity, input order.

    Rows are indexed by position only; the order carries no meaning
    beyond matching the population passed to the engine.
    """

    def __init__(self, rows: List[MembershipRow], n_clusters: int):
        """
        Args:
            rows: Membership rows, one per entity
            n_clusters: Number of clusters K (length of every row vector)
        """
        for row in rows:
            if len(row.vector) != n_clusters:
                raise ValueError(f"Membership row of entity {row.entity.id} has "
                                 f"{len(row.vector)} values, expected {n_clusters}")
        self.rows = rows
        self.n_clusters = n_clusters

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[MembershipRow]:
        return iter(self.rows)

    def __getitem__(self, index: int) -> MembershipRow:
        return self.rows[index]

    @property
    def n_points(self) -> int:
        return len(self.rows)

    def column(self, cluster_idx: int) -> List[Decimal]:
        """Memberships of every entity in the cluster at 0-based ``cluster_idx``."""
        return [row.vector[cluster_idx] for row in self.rows]

    def normalize(self) -> None:
        """Divide each row by its own sum so that it sums to 1."""
        for row in self.rows:
            row_sum = row.total()
            if row_sum > ZERO:
                row.vector = divide(row.vector, row_sum)

    def copy(self) -> 'MembershipMatrix':
        return MembershipMatrix(
            [MembershipRow(row.entity, list(row.vector)) for row in self.rows],
            self.n_clusters
        )

    def to_tensor(self, dtype: torch.dtype = torch.float64) -> Tensor:
        """Export memberships as an (n, K) tensor."""
        return torch.tensor(
            [[float(v) for v in row.vector] for row in self.rows],
            dtype=dtype
        ).reshape(len(self.rows), self.n_clusters)


@dataclass
class Group:
    """A disjoint group formed from the fuzzy partition.

    ``center`` is a snapshot of the matching cluster center; ``members`` is
    rearranged by the rebalancer and left alone once returned.
    """

    id: int
    center: Tuple[Decimal, ...]
    members: List[MembershipRow] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.members)

    @property
    def member_ids(self) -> List[int]:
        return [member.entity.id for member in self.members]

    @property
    def member_names(self) -> List[str]:
        return [member.entity.name for member in self.members]


class EngineState(Enum):
    """Lifecycle of one model build."""

    RUNNING = 'running'
    CONVERGED = 'converged'
    FAILED = 'failed'


@dataclass(frozen=True)
class IterationRecord:
    """Trace of a single FCM iteration."""

    iteration: int
    objective: Decimal
    improvement: Decimal
    converged: bool = False
    centers: Optional[Tuple[ClusterCenter, ...]] = None
