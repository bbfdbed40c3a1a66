# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Resolve the deobfuscated form of entries from a mapping tree."""

import logging
from typing import Protocol, TypeVar

from mapping.descriptor import MethodDescriptor, TypeDescriptor
from mapping.entry import ClassEntry, Entry, FieldEntry, MethodEntry
from mapping.tree import EntryMapping, EntryTree

logger = logging.getLogger(__name__)

D = TypeVar("D", TypeDescriptor, MethodDescriptor)


class EntryResolver(Protocol):
    """Map an entry onto the canonical entry that owns its mapping."""

    def resolve_first_entry(self, entry: Entry) -> Entry:
        """Return the entry whose mapping applies to ``entry``."""


class VoidEntryResolver:
    """Resolve every entry to itself."""

    def resolve_first_entry(self, entry: Entry) -> Entry:
        return entry


class MappingTranslator:
    """Translate entries by applying the renames stored in a mapping tree.

    A class is translated by translating its outer class first and then
    substituting its own name when its node is mapped. Members take the
    translated owner, their own mapped name (class renames never rename
    members) and a descriptor whose class references are translated the
    same way. The tree is only read, so repeated calls on an unchanged tree
    return equal results.
    """

    def __init__(
        self,
        mappings: EntryTree[EntryMapping],
        resolver: EntryResolver | None = None,
    ) -> None:
        """Initialize translator.

        Args:
            mappings: Tree holding the renames.
            resolver: Strategy to canonicalize entries before lookup.
        """
        self._mappings = mappings
        self._resolver = resolver if resolver is not None else VoidEntryResolver()

    def translate(self, entry: Entry) -> Entry:
        """Return ``entry`` with every applicable rename applied.

        Args:
            entry: Obfuscated entry.

        Returns:
            Entry of the same kind carrying deobfuscated names.
        """
        match entry:
            case ClassEntry():
                return self._translate_class(entry)
            case FieldEntry() | MethodEntry():
                return entry.__class__(
                    parent=self._translate_class(entry.parent),
                    name=self._target_name(entry),
                    desc=self.translate_descriptor(entry.desc),
                )
        raise TypeError(f"Unsupported entry type: {type(entry).__name__}")

    def translate_descriptor(self, desc: D) -> D:
        """Translate every class referenced by a descriptor."""
        return desc.remap(self._translate_class_name)

    def _translate_class(self, entry: ClassEntry) -> ClassEntry:
        parent = entry.parent
        translated_parent = None if parent is None else self._translate_class(parent)
        return ClassEntry(self._target_name(entry), translated_parent)

    def _translate_class_name(self, name: str) -> str:
        return self._translate_class(ClassEntry(name)).full_name

    def _target_name(self, entry: Entry) -> str:
        resolved = self._resolver.resolve_first_entry(entry)
        if resolved != entry:
            logger.debug("Resolved entry (entry=%s resolved=%s)", entry, resolved)
        mapping = self._mappings.get(resolved)
        if mapping is None:
            return entry.name
        return mapping.target_name
