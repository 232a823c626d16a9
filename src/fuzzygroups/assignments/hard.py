"""
Hard assignment of a fuzzy partition into disjoint groups.
"""

import warnings
from typing import List, Sequence, Tuple

from ..base.interfaces import GroupingStrategy
from ..base.data_structures import ClusterCenter, Group, MembershipMatrix, MembershipRow
from ..exceptions import OrphanMemberWarning
from ..utils.decimal_ops import ZERO


def select_group_id(row: MembershipRow) -> int:
    """Id of the cluster with the strictly greatest membership.

    Scans ids in ascending order, so the lowest id wins an exact tie.
    Returns 0 when no membership is positive.
    """
    selected = 0
    best = ZERO
    for group_id, value in enumerate(row.vector, start=1):
        if value > best:
            best = value
            selected = group_id
    return selected


class HardAssignment(GroupingStrategy):
    """Assigns every row to the group of its highest membership.

    Rows whose selected id matches no group are orphans: they are reported
    with an :class:`OrphanMemberWarning` and left out of every group.
    """

    def form(self, matrix: MembershipMatrix, centers: Sequence[ClusterCenter],
             **kwargs) -> Tuple[List[Group], List[MembershipRow]]:
        """Build one group per center and fill it.

        Returns:
            groups: Groups ordered by id
            orphans: Rows that could not be matched to a group
        """
        groups = sorted(
            (Group(center.id, tuple(center.vector)) for center in centers),
            key=lambda group: group.id
        )
        by_id = {group.id: group for group in groups}

        orphans = []
        for row in matrix:
            selected_id = select_group_id(row)
            group = by_id.get(selected_id)
            if group is None:
                warnings.warn(
                    f"Orphan member detected (selectedGroupId: {selected_id}, "
                    f"availableGroupId: {','.join(str(g.id) for g in groups)}): "
                    f"entity {row.entity.id}",
                    OrphanMemberWarning
                )
                orphans.append(row)
            else:
                group.members.append(row)

        return groups, orphans
