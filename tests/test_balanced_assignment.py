# tests/test_balanced_assignment.py
"""
U8 — Hard assignment and balanced group formation

Covers:
- Strictly-greatest selection; the lowest id wins ties; all-zero rows are orphans.
- Floor / ceiling size targets.
- Members sorted by confidence before redistribution.
- Destination ranking by next-best membership.
- Redistribution scenarios: overfull donors, underfull receivers, a full
  preferred destination, and the exhausted path.
- Random partitions always end within [floor(N/k), ceil(N/k)].
"""

from __future__ import annotations

from decimal import Decimal

import numpy as np
import pytest

from fuzzygroups.assignments import (
    BalancedAssignment, HardAssignment, balance_targets, rank_destinations,
    select_group_id, sort_by_confidence
)
from fuzzygroups.base.data_structures import ClusterCenter, Group
from fuzzygroups.exceptions import OrphanMemberWarning, RedistributionExhausted
import utils


def _centers(k):
    return [ClusterCenter(i, (Decimal(i),)) for i in range(1, k + 1)]


def _form(vectors):
    m = utils.make_matrix(vectors)
    strategy = BalancedAssignment()
    groups, orphans = strategy.form(m, _centers(m.n_clusters))
    return strategy, groups, orphans


# ---------------------------------------------------------------------------
# Step A: hard assignment
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("vector,expected", [
    ([0.7, 0.3], 1),
    ([0.3, 0.7], 2),
    ([0.5, 0.5], 1),
    ([0.2, 0.4, 0.4], 2),
    ([0.25, 0.25, 0.25, 0.25], 1),
    ([0, 0, 0], 0),
])
def test_select_group_id(vector, expected):
    row = utils.make_matrix([vector])[0]
    assert select_group_id(row) == expected


def test_hard_assignment_groups_in_id_order():
    m = utils.make_matrix([[0.1, 0.9], [0.8, 0.2], [0.6, 0.4]])
    centers = list(reversed(_centers(2)))
    groups, orphans = HardAssignment().form(m, centers)
    assert [g.id for g in groups] == [1, 2]
    assert groups[0].member_ids == [2, 3]
    assert groups[1].member_ids == [1]
    assert groups[1].center == (Decimal(2),)
    assert orphans == []


def test_orphans_are_reported_and_dropped():
    m = utils.make_matrix([[1, 0], [0, 0], [0, 1]])
    with pytest.warns(OrphanMemberWarning, match="selectedGroupId: 0"):
        groups, orphans = HardAssignment().form(m, _centers(2))
    assert [o.entity.id for o in orphans] == [2]
    assert sum(len(g) for g in groups) == 2


def test_missing_center_makes_orphans():
    m = utils.make_matrix([[0.1, 0.9], [0.9, 0.1]])
    with pytest.warns(OrphanMemberWarning):
        groups, orphans = HardAssignment().form(m, _centers(1))
    assert [o.entity.id for o in orphans] == [1]
    assert groups[0].member_ids == [2]


# ---------------------------------------------------------------------------
# Steps B-C: targets and ordering
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("n,k,expected", [
    (8, 2, (4, 4)),
    (10, 4, (2, 3)),
    (7, 3, (2, 3)),
    (5, 5, (1, 1)),
    (3, 5, (0, 1)),
])
def test_balance_targets(n, k, expected):
    assert balance_targets(n, k) == expected


def test_sort_by_confidence_ascending():
    m = utils.make_matrix([[0.9, 0.1], [0.6, 0.4], [0.75, 0.25]])
    group = Group(1, (Decimal(0),), list(m))
    sort_by_confidence([group])
    assert group.member_ids == [2, 3, 1]


def test_rank_destinations():
    row = utils.make_matrix([[0.2, 0.5, 0.3]])[0]
    assert rank_destinations(row, 2) == [3, 1]

    tied = utils.make_matrix([[0.4, 0.3, 0.3]])[0]
    assert rank_destinations(tied, 1) == [2, 3]


# ---------------------------------------------------------------------------
# Step D: redistribution
# ---------------------------------------------------------------------------

def test_balanced_input_is_untouched():
    strategy, groups, orphans = _form([[0.9, 0.1], [0.8, 0.2], [0.3, 0.7], [0.1, 0.9]])
    assert utils.group_sizes(groups) == [2, 2]
    assert strategy.n_moves_ == 0
    assert groups[0].member_ids == [2, 1]


def test_overfull_group_moves_least_confident_member():
    # hard sizes [4, 2, 2, 2], targets [2, 3]
    strategy, groups, _ = _form([
        [0.7, 0.1, 0.1, 0.1],
        [0.6, 0.1, 0.2, 0.1],
        [0.5, 0.1, 0.1, 0.3],
        [0.4, 0.35, 0.15, 0.1],
        [0.1, 0.7, 0.1, 0.1],
        [0.1, 0.6, 0.2, 0.1],
        [0.1, 0.1, 0.7, 0.1],
        [0.1, 0.2, 0.6, 0.1],
        [0.1, 0.1, 0.1, 0.7],
        [0.1, 0.1, 0.2, 0.6],
    ])
    assert utils.group_sizes(groups) == [3, 3, 2, 2]
    assert strategy.n_moves_ == 1
    assert groups[0].member_ids == [3, 2, 1]
    # moved members join at the end
    assert groups[1].member_ids == [6, 5, 4]


def test_underfull_group_is_filled_from_donor_at_ceiling():
    # hard sizes [3, 3, 1], targets [2, 3]
    strategy, groups, _ = _form([
        [0.8, 0.1, 0.1],
        [0.7, 0.2, 0.1],
        [0.5, 0.2, 0.3],
        [0.1, 0.8, 0.1],
        [0.2, 0.7, 0.1],
        [0.1, 0.5, 0.4],
        [0.1, 0.1, 0.8],
    ])
    assert utils.group_sizes(groups) == [2, 3, 2]
    assert groups[2].member_ids == [7, 3]
    assert strategy.n_moves_ == 1


def test_full_preferred_destination_is_skipped():
    # hard sizes [4, 2, 0], targets [2, 2]; group 2 is everyone's second choice
    strategy, groups, _ = _form([
        [0.9, 0.05, 0.05],
        [0.8, 0.15, 0.05],
        [0.6, 0.3, 0.1],
        [0.5, 0.4, 0.1],
        [0.1, 0.8, 0.1],
        [0.1, 0.7, 0.2],
    ])
    assert utils.group_sizes(groups) == [2, 2, 2]
    assert groups[1].member_ids == [6, 5]
    assert groups[2].member_ids == [4, 3]
    assert strategy.n_moves_ == 2


def test_redistribution_exhausted():
    m = utils.make_matrix([[0.9, 0.1]] * 3 + [[0.1, 0.9]] * 2)
    g1 = Group(1, (Decimal(1),), list(m)[:3])
    g2 = Group(2, (Decimal(2),), list(m)[3:])
    with pytest.raises(RedistributionExhausted, match="No group can accept"):
        BalancedAssignment().redistribute([g1, g2], min_size=1, max_size=2)


def test_orphans_are_left_out_of_balanced_groups():
    m = utils.make_matrix([[1, 0], [0.9, 0.1], [0, 0], [0.2, 0.8]])
    with pytest.warns(OrphanMemberWarning):
        groups, orphans = BalancedAssignment().form(m, _centers(2))
    assert [o.entity.id for o in orphans] == [3]
    assert sorted(i for g in groups for i in g.member_ids) == [1, 2, 4]


@pytest.mark.parametrize("n,k", [(7, 2), (10, 3), (10, 4), (13, 5), (20, 6), (9, 9), (25, 7)])
def test_random_partitions_are_balanced(rng, n, k):
    for _ in range(5):
        # skewed memberships so the hard assignment is lopsided
        alpha = np.linspace(3.0, 0.3, k)
        vectors = [[round(float(v), 6) for v in rng.dirichlet(alpha)] for _ in range(n)]
        _, groups, orphans = _form(vectors)

        lo, hi = balance_targets(n, k)
        assert orphans == []
        assert all(lo <= len(g) <= hi for g in groups), utils.group_sizes(groups)
        ids = sorted(i for g in groups for i in g.member_ids)
        assert ids == list(range(1, n + 1))
