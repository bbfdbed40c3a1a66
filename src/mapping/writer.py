# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Mapping writer contracts."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping, Protocol

from mapping.delta import MappingDelta
from mapping.tree import EntryMapping, EntryTree

IndexSupplier = Callable[[], object]


class MappingsError(RuntimeError):
    """Represent a failure while exporting mappings."""


class MappingIOError(MappingsError):
    """Represent a destination that cannot be created or written."""


class UnsupportedLayoutError(MappingsError):
    """Represent a destination layout the writer cannot produce."""


class MappingsOptionError(MappingsError):
    """Represent an unknown or invalid writer option."""


class PathType(Enum):
    """Physical layout of a mapping destination."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class MappingsOption:
    """Describe one string option recognized by a writer.

    Attributes:
        name: Option key as passed in the options mapping.
        default: Value used when the option is not supplied.
        description: Human-readable help text.
    """

    name: str
    default: str = ""
    description: str = ""


class ProgressListener(Protocol):
    """Receive fire-and-forget progress notifications."""

    def init(self, total: int, title: str) -> None:
        """Announce the number of steps of the upcoming job."""

    def step(self, done: int, message: str) -> None:
        """Report that ``done`` steps have completed."""


class NullProgressListener:
    """Ignore all progress notifications."""

    def init(self, total: int, title: str) -> None:
        return None

    def step(self, done: int, message: str) -> None:
        return None


class MappingsWriter(Protocol):
    """Define the contract shared by all mapping writers."""

    def all_options(self) -> frozenset[MappingsOption]:
        """Return the options this writer recognizes."""

    def supported_path_types(self) -> frozenset[PathType]:
        """Return the destination layouts this writer can produce."""

    def write(
        self,
        mappings: EntryTree[EntryMapping],
        delta: MappingDelta[EntryMapping] | None,
        path: Path,
        progress: ProgressListener,
        options: Mapping[str, str],
        index_supplier: IndexSupplier | None = None,
    ) -> None:
        """Write ``mappings`` to ``path``."""


def resolve_options(
    known: frozenset[MappingsOption], options: Mapping[str, str]
) -> dict[str, str]:
    """Validate supplied options and fill in defaults.

    Args:
        known: Options recognized by the writer.
        options: Caller-supplied option values keyed by option name.

    Returns:
        Value for every known option.

    Raises:
        MappingsOptionError: If an option is unknown or not a string.
    """
    known_by_name = {option.name: option for option in known}
    unknown = sorted(set(options) - set(known_by_name))
    if unknown:
        raise MappingsOptionError(f"Unknown mapping options: {', '.join(unknown)}")
    resolved: dict[str, str] = {}
    for name, option in known_by_name.items():
        value = options.get(name, option.default)
        if not isinstance(value, str):
            raise MappingsOptionError(
                f"Option {name} must be a string, got {type(value).__name__}"
            )
        resolved[name] = value
    return resolved
