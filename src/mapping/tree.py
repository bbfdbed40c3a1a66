# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Hierarchical entry-keyed mapping storage."""

import logging
from dataclasses import dataclass
from typing import Generic, Iterator, TypeVar

from mapping.entry import Entry

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(frozen=True)
class EntryMapping:
    """Record a rename of one entry.

    Attributes:
        target_name: Name substituted for the entry's own name. For top-level
            classes this is the package-qualified name; for nested classes and
            members it is the simple name.
    """

    target_name: str

    def __post_init__(self) -> None:
        if not self.target_name:
            raise ValueError("Mapping target name must not be empty")


class EntryTreeNode(Generic[V]):
    """Hold one entry's value and the keys of its direct children."""

    def __init__(self, entry: Entry) -> None:
        self._entry = entry
        self._value: V | None = None
        self._children: dict[Entry, None] = {}

    def __repr__(self) -> str:
        return f"EntryTreeNode({self._entry!s}, value={self._value!r})"

    @property
    def entry(self) -> Entry:
        return self._entry

    @property
    def value(self) -> V | None:
        return self._value

    @property
    def children(self) -> tuple[Entry, ...]:
        return tuple(self._children)

    def has_value(self) -> bool:
        return self._value is not None

    def is_empty(self) -> bool:
        """Check whether the node carries neither a value nor children."""
        return self._value is None and not self._children


class EntryTree(Generic[V]):
    """Store values per entry in a tree shaped by class/member containment.

    Nodes live in a flat arena keyed by entry; parent nodes refer to their
    children by key. Inserting an entry creates placeholder nodes for every
    enclosing class that is not yet present, so each node is reachable from a
    root node. Lookups never raise; unknown entries yield ``None`` or an empty
    result.
    """

    def __init__(self) -> None:
        self._nodes: dict[Entry, EntryTreeNode[V]] = {}
        self._roots: dict[Entry, None] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[EntryTreeNode[V]]:
        """Iterate every node depth-first, parents before children."""
        for root in list(self._roots):
            yield from self._walk(root)

    def _walk(self, entry: Entry) -> Iterator[EntryTreeNode[V]]:
        node = self._nodes[entry]
        yield node
        for child in node.children:
            yield from self._walk(child)

    def insert(self, entry: Entry, value: V | None = None) -> None:
        """Create or overwrite the node for ``entry``.

        Args:
            entry: Entry to store.
            value: Value to attach; ``None`` keeps an explicit placeholder.
        """
        parent: EntryTreeNode[V] | None = None
        for link in entry.ancestry():
            node = self._nodes.get(link)
            if node is None:
                node = EntryTreeNode(link)
                self._nodes[link] = node
                if parent is None:
                    self._roots[link] = None
                else:
                    parent._children[link] = None
            parent = node
        assert parent is not None
        parent._value = value

    def remove(self, entry: Entry) -> V | None:
        """Remove the value stored for ``entry`` and prune empty nodes.

        Args:
            entry: Entry whose value is removed.

        Returns:
            The removed value, or ``None`` when nothing was stored.
        """
        node = self._nodes.get(entry)
        if node is None:
            return None
        removed = node._value
        node._value = None
        self._prune(entry)
        return removed

    def _prune(self, entry: Entry) -> None:
        chain = entry.ancestry()
        for index in range(len(chain) - 1, -1, -1):
            link = chain[index]
            node = self._nodes.get(link)
            if node is None or not node.is_empty():
                return
            del self._nodes[link]
            if index == 0:
                self._roots.pop(link, None)
            else:
                self._nodes[chain[index - 1]]._children.pop(link, None)
            logger.debug("Pruned empty node (entry=%s)", link)

    def find_node(self, entry: Entry) -> EntryTreeNode[V] | None:
        return self._nodes.get(entry)

    def get(self, entry: Entry) -> V | None:
        """Return the value stored at ``entry`` itself, without inheritance."""
        node = self._nodes.get(entry)
        if node is None:
            return None
        return node.value

    def contains(self, entry: Entry) -> bool:
        return self.get(entry) is not None

    def get_children(self, entry: Entry) -> tuple[Entry, ...]:
        node = self._nodes.get(entry)
        if node is None:
            return ()
        return node.children

    def root_nodes(self) -> list[EntryTreeNode[V]]:
        return [self._nodes[entry] for entry in self._roots]

    def root_entries(self) -> list[Entry]:
        return list(self._roots)

    def all_entries(self) -> Iterator[Entry]:
        """Lazily yield the entry of every node at any depth."""
        return (node.entry for node in self)

    def is_empty(self) -> bool:
        return not self._nodes
