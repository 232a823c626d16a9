# tests/test_decimal_ops.py
"""
U1 — Exact decimal vector arithmetic

Covers:
- Elementwise add / subtract / power / scale / divide and the reductions.
- Euclidean distance and its length check.
- Float inputs are read through their decimal repr (0.1 is one tenth).
- Repeated accumulation does not drift under the default precision.
"""

from __future__ import annotations

from decimal import Decimal

import pytest

from fuzzygroups.exceptions import FuzzyGroupsError, LengthMismatch
from fuzzygroups.utils.decimal_ops import (
    add, decimal_context, distance, divide, power, scale, subtract, to_decimal,
    to_decimal_vector, total, vector_sum
)


def D(*values):
    return [Decimal(str(v)) for v in values]


def test_elementwise_operations():
    a = D(1, 2, 3)
    b = D("0.5", "0.25", 4)

    assert add(a, b) == D("1.5", "2.25", 7)
    assert subtract(a, b) == D("0.5", "1.75", -1)
    assert power(a, 2) == D(1, 4, 9)
    assert scale(a, Decimal("0.5")) == D("0.5", 1, "1.5")
    assert divide(a, Decimal(4)) == D("0.25", "0.5", "0.75")


def test_total_and_vector_sum():
    assert total(D("0.1", "0.2", "0.3")) == Decimal("0.6")
    assert total([]) == Decimal(0)
    assert vector_sum([D(1, 2), D(3, 4), D("0.5", "0.5")]) == D("4.5", "6.5")

    with pytest.raises(ValueError):
        vector_sum([])


def test_distance_is_euclidean():
    assert distance(D(0, 0), D(3, 4)) == Decimal(5)
    assert distance(D(1, 1, 1), D(1, 1, 1)) == Decimal(0)
    assert distance(D(2), D(-1)) == Decimal(3)


@pytest.mark.parametrize("op", [add, subtract, distance])
def test_length_mismatch(op):
    with pytest.raises(LengthMismatch) as info:
        op(D(1, 2, 3), D(1, 2))
    err = info.value
    assert (err.left, err.right) == (3, 2)
    assert "left => 3" in str(err) and "right => 2" in str(err)
    assert isinstance(err, FuzzyGroupsError)
    assert isinstance(err, ValueError)


def test_to_decimal_conversions():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal(3) == Decimal(3)
    assert to_decimal(" 2.50 ") == Decimal("2.50")
    assert to_decimal(Decimal("7")) == Decimal("7")
    assert to_decimal_vector([1, "2", 0.5]) == D(1, 2, "0.5")

    with pytest.raises(TypeError):
        to_decimal(True)
    with pytest.raises(TypeError):
        to_decimal(None)  # type: ignore[arg-type]


def test_accumulation_does_not_drift():
    acc = Decimal(0)
    for _ in range(1000):
        acc += to_decimal(0.1)
    assert acc == Decimal(100)

    thirds = [Decimal(1) / Decimal(3)] * 3
    assert abs(total(thirds) - 1) < Decimal("1e-25")


def test_decimal_context_bounds_precision():
    with decimal_context(5):
        third = Decimal(1) / Decimal(3)
    assert third == Decimal("0.33333")

    with decimal_context(50):
        third = Decimal(1) / Decimal(3)
    assert len(third.as_tuple().digits) == 50
