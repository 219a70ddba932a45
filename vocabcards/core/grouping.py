"""Partition a flat dataset into numbered study groups."""

from dataclasses import dataclass, field
from typing import Iterable

from vocabcards.core.models import VocabItem


@dataclass(frozen=True)
class GroupIndex:
    """Items keyed by group id, plus the sorted list of group ids."""
    groups: dict[int, tuple[VocabItem, ...]] = field(default_factory=dict)
    group_ids: tuple[int, ...] = ()

    def __contains__(self, group_id) -> bool:
        return group_id in self.groups

    def items(self, group_id: int) -> tuple[VocabItem, ...]:
        """Canonical (key-sorted) order of a group; empty for unknown ids."""
        return self.groups.get(group_id, ())

    def flatten(self) -> list[VocabItem]:
        """All items, groups in ascending id order."""
        return [item for gid in self.group_ids for item in self.groups[gid]]


def build_group_index(items: Iterable[VocabItem]) -> GroupIndex:
    """Build a GroupIndex from a dataset.

    Items are stably sorted by key, then partitioned by group. Group ids
    are sorted numerically rather than by first appearance.
    """
    partitions: dict[int, list[VocabItem]] = {}
    for item in sorted(items, key=lambda i: i.key):
        partitions.setdefault(item.group, []).append(item)

    return GroupIndex(
        groups={gid: tuple(members) for gid, members in partitions.items()},
        group_ids=tuple(sorted(partitions)),
    )
