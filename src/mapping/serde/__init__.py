# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Mapping file writers."""

from mapping.serde.tiny import NAME_DEOBF, NAME_OBF, TinyMappingsWriter

__all__ = ["NAME_DEOBF", "NAME_OBF", "TinyMappingsWriter"]
