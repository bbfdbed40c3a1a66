# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Registry of mapping formats and their writers."""

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, Mapping

from mapping.delta import MappingDelta
from mapping.serde import TinyMappingsWriter
from mapping.tree import EntryMapping, EntryTree
from mapping.writer import (
    MappingsError,
    MappingsOption,
    MappingsWriter,
    NullProgressListener,
    PathType,
    ProgressListener,
    UnsupportedLayoutError,
)

logger = logging.getLogger(__name__)


class MappingFormat(Enum):
    """Mapping formats this package can write."""

    TINY_FILE = "tiny_file"

    @classmethod
    def from_name(cls, name: str) -> "MappingFormat":
        """Look up a format by its value or member name, ignoring case.

        Raises:
            MappingsError: If no format matches.
        """
        wanted = name.strip().lower()
        for fmt in cls:
            if wanted in (fmt.value, fmt.name.lower()):
                return fmt
        known = ", ".join(fmt.value for fmt in cls)
        raise MappingsError(f"Unknown mapping format {name!r} (known: {known})")

    def writer(self) -> MappingsWriter:
        return _WRITER_FACTORIES[self]()

    @property
    def supported_path_types(self) -> frozenset[PathType]:
        return self.writer().supported_path_types()

    @property
    def options(self) -> frozenset[MappingsOption]:
        return self.writer().all_options()


_WRITER_FACTORIES: dict[MappingFormat, Callable[[], MappingsWriter]] = {
    MappingFormat.TINY_FILE: TinyMappingsWriter,
}


def check_path_type(fmt: MappingFormat, path_type: PathType) -> None:
    """Reject destination layouts a format cannot produce.

    Raises:
        UnsupportedLayoutError: If ``fmt`` does not support ``path_type``.
    """
    if path_type not in fmt.supported_path_types:
        raise UnsupportedLayoutError(
            f"Format {fmt.value} does not support {path_type.value} destinations"
        )


def write_mappings(
    fmt: MappingFormat,
    mappings: EntryTree[EntryMapping],
    path: Path,
    options: Mapping[str, str],
    path_type: PathType = PathType.FILE,
    progress: ProgressListener | None = None,
    delta: MappingDelta[EntryMapping] | None = None,
) -> None:
    """Validate the destination layout and write ``mappings`` with ``fmt``.

    Args:
        fmt: Output format.
        mappings: Mapping tree to write.
        path: Destination path.
        options: Writer options keyed by option name.
        path_type: Requested destination layout.
        progress: Optional progress receiver.
        delta: Changes since the last write; defaults to "everything added".

    Raises:
        UnsupportedLayoutError: If the layout is unsupported; nothing is written.
        MappingsOptionError: If an option is unknown.
        MappingIOError: If writing fails.
    """
    check_path_type(fmt, path_type)
    if delta is None:
        delta = MappingDelta.added(mappings)
    logger.debug(
        "Writing mappings (format=%s path=%s entries=%d)", fmt.value, path, len(mappings)
    )
    fmt.writer().write(
        mappings,
        delta,
        path,
        progress if progress is not None else NullProgressListener(),
        options,
    )
