"""
Size-balanced group formation.

Hardens a fuzzy partition into groups whose sizes differ by at most one,
moving the least confident members of overfull groups to their next-best
cluster that still has room.
"""

from typing import List, Optional, Sequence, Tuple

from ..base.interfaces import GroupingStrategy
from ..base.data_structures import ClusterCenter, Group, MembershipMatrix, MembershipRow
from ..exceptions import RedistributionExhausted
from .hard import HardAssignment


def balance_targets(n_points: int, n_groups: int) -> Tuple[int, int]:
    """Floor and ceiling group sizes for ``n_points`` split ``n_groups`` ways."""
    min_size = n_points // n_groups
    max_size = -(-n_points // n_groups)
    return min_size, max_size


def sort_by_confidence(groups: Sequence[Group]) -> None:
    """Order each group's members by their membership in that group, lowest first."""
    for group in groups:
        group.members.sort(key=lambda member: member.membership(group.id))


def rank_destinations(member: MembershipRow, current_id: int) -> List[int]:
    """Group ids ordered by the member's membership, highest first.

    Ties keep ascending id order; ``current_id`` is excluded.
    """
    ranked = sorted(
        range(1, len(member.vector) + 1),
        key=lambda group_id: member.vector[group_id - 1],
        reverse=True
    )
    # sorted(reverse=True) keeps equal keys in their original order
    return [group_id for group_id in ranked if group_id != current_id]


class BalancedAssignment(GroupingStrategy):
    """Hard assignment followed by greedy redistribution.

    A group gives away its lowest-confidence member while it holds more
    than ``max_size`` members, or more than ``min_size`` while some other
    group is still below ``min_size``. The member goes to the highest-ranked
    other cluster that is below ``min_size``; once no group is below the
    floor, to the highest-ranked one below ``max_size``.
    """

    def __init__(self, hard_assignment: Optional[HardAssignment] = None):
        self.hard_assignment = hard_assignment or HardAssignment()
        self.n_moves_ = 0

    def form(self, matrix: MembershipMatrix, centers: Sequence[ClusterCenter],
             **kwargs) -> Tuple[List[Group], List[MembershipRow]]:
        """Build balanced groups.

        Returns:
            groups: Groups ordered by id
            orphans: Rows dropped by the hard assignment

        Raises:
            RedistributionExhausted: If an overfull group has a member that
                no other group may accept
        """
        groups, orphans = self.hard_assignment.form(matrix, centers)
        if not groups:
            return groups, orphans

        min_size, max_size = balance_targets(len(matrix), len(groups))
        sort_by_confidence(groups)
        self.n_moves_ = self.redistribute(groups, min_size, max_size)

        return groups, orphans

    def redistribute(self, groups: List[Group], min_size: int, max_size: int) -> int:
        """Move members until every group fits the size bounds.

        Returns:
            Number of members moved
        """
        by_id = {group.id: group for group in groups}
        n_moves = 0

        for group in groups:
            while self._must_give(group, groups, min_size, max_size):
                member = group.members[0]
                destination = self._find_destination(member, group, by_id, groups,
                                                     min_size, max_size)
                if destination is None:
                    raise RedistributionExhausted(
                        f"No group can accept entity {member.entity.id} from group "
                        f"{group.id} (sizes: {[len(g) for g in groups]}, "
                        f"bounds: [{min_size}, {max_size}])"
                    )
                destination.members.append(group.members.pop(0))
                n_moves += 1

        return n_moves

    @staticmethod
    def _must_give(group: Group, groups: Sequence[Group],
                   min_size: int, max_size: int) -> bool:
        if len(group) > max_size:
            return True
        return len(group) > min_size and any(len(g) < min_size for g in groups)

    @staticmethod
    def _find_destination(member: MembershipRow, donor: Group, by_id: dict,
                          groups: Sequence[Group], min_size: int,
                          max_size: int) -> Optional[Group]:
        floor_reached = all(len(g) >= min_size for g in groups)
        for group_id in rank_destinations(member, donor.id):
            candidate = by_id.get(group_id)
            if candidate is None:
                continue
            if len(candidate) < min_size:
                return candidate
            if floor_reached and len(candidate) < max_size:
                return candidate
        return None
