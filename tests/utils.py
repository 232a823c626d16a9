# tests/utils.py
"""
Small, reusable helpers used across the FuzzyGroups test suite.

Functions:
- row_sums(matrix): Decimal sum of every membership row.
- assert_rows_sum_to_one(matrix, tol): row-sum invariant check.
- group_sizes(groups): member count per group, in group order.
- make_matrix(vectors): partition matrix with dummy entities for grouping tests.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import json
import time
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from fuzzygroups.base.data_structures import Entity, Group, MembershipMatrix, MembershipRow

TOLERANCE = Decimal("1e-9")


def row_sums(matrix: MembershipMatrix) -> List[Decimal]:
    return [row.total() for row in matrix]


def assert_rows_sum_to_one(matrix: MembershipMatrix, tol: Decimal = TOLERANCE) -> None:
    for row in matrix:
        s = row.total()
        assert abs(s - 1) < tol, f"row of entity {row.entity.id} sums to {s}"
        assert all(Decimal(0) <= v <= Decimal(1) + tol for v in row.vector), row.vector


def group_sizes(groups: Sequence[Group]) -> List[int]:
    return [len(g) for g in groups]


def make_matrix(vectors: Sequence[Sequence[Any]]) -> MembershipMatrix:
    """
    Build a partition matrix from raw membership rows. Entity i (1-based)
    gets the one-feature vector (i,), which grouping code never looks at.
    """
    rows = [
        MembershipRow(
            Entity(i, f"E{i}", (Decimal(i),)),
            [Decimal(str(v)) for v in vector],
        )
        for i, vector in enumerate(vectors, start=1)
    ]
    return MembershipMatrix(rows, len(vectors[0]))


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("fit", {"n": 8, "K": 2}):
    ...     model.fit(population)

    Output
    ------
    [timing] fit {"n":8,"K":2} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.
    """
    meta_str = ""
    if meta:
        try:
            meta_str = " " + json.dumps(meta, separators=(",", ":"))
        except Exception:
            meta_str = " " + repr(meta)
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
