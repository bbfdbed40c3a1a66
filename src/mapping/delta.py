# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Change sets between two mapping snapshots."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from mapping.tree import EntryTree

V = TypeVar("V")


@dataclass(frozen=True)
class MappingDelta(Generic[V]):
    """Describe which entries changed relative to a base mapping tree.

    Writers that rewrite their whole output ignore the delta; incremental
    writers use ``changes`` to limit what they touch.

    Attributes:
        base_mappings: Mappings as they were before the changes.
        changes: Placeholder tree holding every changed entry.
    """

    base_mappings: EntryTree[V]
    changes: EntryTree[object] = field(default_factory=EntryTree)

    @classmethod
    def added(cls, mappings: EntryTree[V]) -> "MappingDelta[V]":
        """Build a delta marking every entry of ``mappings`` as changed.

        Args:
            mappings: Newly created mappings.

        Returns:
            Delta against an empty base.
        """
        changes: EntryTree[object] = EntryTree()
        for entry in mappings.all_entries():
            changes.insert(entry)
        return cls(base_mappings=EntryTree(), changes=changes)

    def is_empty(self) -> bool:
        return self.changes.is_empty()
