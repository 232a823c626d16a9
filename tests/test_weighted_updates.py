# tests/test_weighted_updates.py
"""
U7 — Membership-weighted center update

Covers:
- Centers are Σ u^m x / Σ u^m per cluster with ids 1..K.
- Larger memberships pull a center toward their entities.
- A cluster without any membership keeps its previous center, or falls
  back to the population mean on the first iteration.
"""

from __future__ import annotations

from decimal import Decimal

from fuzzygroups.base.data_structures import (
    ClusterCenter, Entity, MembershipMatrix, MembershipRow
)
from fuzzygroups.updates import WeightedMeanUpdater


def _matrix(points, memberships):
    rows = [
        MembershipRow(Entity.from_scores(i, f"P{i}", p), [Decimal(str(u)) for u in us])
        for i, (p, us) in enumerate(zip(points, memberships), start=1)
    ]
    return MembershipMatrix(rows, len(memberships[0]))


def test_hard_memberships_give_plain_means():
    m = _matrix([[0, 0], [2, 2], [10, 10], [12, 14]],
                [[1, 0], [1, 0], [0, 1], [0, 1]])
    centers = WeightedMeanUpdater(m=2).update(m)
    assert [c.id for c in centers] == [1, 2]
    assert centers[0].vector == (Decimal(1), Decimal(1))
    assert centers[1].vector == (Decimal(11), Decimal(12))


def test_weights_are_raised_to_mass():
    m = _matrix([[0], [10]], [[0.5, 0.5], [0.25, 0.75]])
    c1, c2 = WeightedMeanUpdater(m=2).update(m)
    # weights 0.25 / 0.0625 -> (0*0.25 + 10*0.0625) / 0.3125 = 2
    assert c1.vector == (Decimal(2),)
    # weights 0.25 / 0.5625 -> 5.625 / 0.8125
    assert c2.vector == (Decimal("5.625") / Decimal("0.8125"),)


def test_heavier_weights_pull_center():
    light = _matrix([[0], [10]], [[0.5, 0.5], [0.5, 0.5]])
    heavy = _matrix([[0], [10]], [[0.5, 0.5], [0.9, 0.1]])
    c_light = WeightedMeanUpdater(m=2).update(light)[0]
    c_heavy = WeightedMeanUpdater(m=2).update(heavy)[0]
    assert c_light.vector[0] == Decimal(5)
    assert c_heavy.vector[0] > c_light.vector[0]


def test_empty_cluster_keeps_previous_center():
    m = _matrix([[0, 0], [4, 4]], [[1, 0], [1, 0]])
    previous = [ClusterCenter(1, (Decimal(9), Decimal(9))),
                ClusterCenter(2, (Decimal(-3), Decimal(7)))]
    centers = WeightedMeanUpdater(m=2).update(m, previous=previous)
    assert centers[0].vector == (Decimal(2), Decimal(2))
    assert centers[1].vector == (Decimal(-3), Decimal(7))


def test_empty_cluster_without_history_uses_population_mean():
    m = _matrix([[0, 0], [4, 6]], [[1, 0], [1, 0]])
    centers = WeightedMeanUpdater(m=2).update(m)
    assert centers[1].vector == (Decimal(2), Decimal(3))
