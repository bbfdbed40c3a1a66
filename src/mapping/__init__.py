# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for mapping components."""

from mapping.delta import MappingDelta
from mapping.descriptor import MethodDescriptor, TypeDescriptor
from mapping.entry import ClassEntry, Entry, FieldEntry, MethodEntry
from mapping.formats import MappingFormat, check_path_type, write_mappings
from mapping.serde import NAME_DEOBF, NAME_OBF, TinyMappingsWriter
from mapping.translator import EntryResolver, MappingTranslator, VoidEntryResolver
from mapping.tree import EntryMapping, EntryTree, EntryTreeNode
from mapping.writer import (
    MappingIOError,
    MappingsError,
    MappingsOption,
    MappingsOptionError,
    MappingsWriter,
    NullProgressListener,
    PathType,
    ProgressListener,
    UnsupportedLayoutError,
)

__all__ = [
    "ClassEntry",
    "Entry",
    "EntryMapping",
    "EntryResolver",
    "EntryTree",
    "EntryTreeNode",
    "FieldEntry",
    "MappingDelta",
    "MappingFormat",
    "MappingIOError",
    "MappingTranslator",
    "MappingsError",
    "MappingsOption",
    "MappingsOptionError",
    "MappingsWriter",
    "MethodDescriptor",
    "MethodEntry",
    "NAME_DEOBF",
    "NAME_OBF",
    "NullProgressListener",
    "PathType",
    "ProgressListener",
    "TinyMappingsWriter",
    "TypeDescriptor",
    "UnsupportedLayoutError",
    "VoidEntryResolver",
    "check_path_type",
    "write_mappings",
]
