# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Tiny v1 mapping file writer."""

import logging
from pathlib import Path
from typing import Mapping, Sequence, TextIO

from mapping.delta import MappingDelta
from mapping.entry import ClassEntry, Entry, FieldEntry, MethodEntry
from mapping.translator import MappingTranslator, VoidEntryResolver
from mapping.tree import EntryMapping, EntryTree
from mapping.writer import (
    IndexSupplier,
    MappingIOError,
    MappingsOption,
    PathType,
    ProgressListener,
    UnsupportedLayoutError,
    resolve_options,
)

logger = logging.getLogger(__name__)

VERSION_CONSTANT = "v1"

NAME_OBF = MappingsOption(
    name="nameObf", description="Label of the obfuscated naming scheme."
)
NAME_DEOBF = MappingsOption(
    name="nameDeobf", description="Label of the deobfuscated naming scheme."
)
_OPTIONS: frozenset[MappingsOption] = frozenset({NAME_OBF, NAME_DEOBF})

# Children are written in this kind order at every level.
_CHILD_KINDS: tuple[type, ...] = (FieldEntry, MethodEntry, ClassEntry)


class _LineSink:
    """Write tab-separated lines, dropping exact repeats of earlier lines."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._written: set[str] = set()
        self.lines_written = 0
        self.duplicates_dropped = 0

    def write(self, fields: Sequence[str]) -> None:
        line = "\t".join(fields) + "\n"
        if line in self._written:
            self.duplicates_dropped += 1
            logger.debug("Dropped duplicate line (line=%r)", line)
            return
        self._written.add(line)
        self._stream.write(line)
        self.lines_written += 1


class TinyMappingsWriter:
    """Write a mapping tree as a single tiny v1 file.

    The file starts with a ``v1`` header naming both schemes, followed by one
    line per renamed class, field or method. Root entries are visited in
    order of their string form; below each entry fields come first, then
    methods, then nested classes, each sorted by string form. The set of
    written lines lives only for one ``write`` call.
    """

    def all_options(self) -> frozenset[MappingsOption]:
        return _OPTIONS

    def supported_path_types(self) -> frozenset[PathType]:
        return frozenset({PathType.FILE})

    def write(
        self,
        mappings: EntryTree[EntryMapping],
        delta: MappingDelta[EntryMapping] | None,
        path: Path,
        progress: ProgressListener,
        options: Mapping[str, str],
        index_supplier: IndexSupplier | None = None,
    ) -> None:
        """Replace ``path`` with the tiny rendering of ``mappings``.

        The delta and index supplier are accepted for writer compatibility
        and not used; the whole tree is always written.

        Args:
            mappings: Mapping tree to serialize. Must not change during the call.
            delta: Ignored.
            path: Destination file.
            progress: Receives one step per root entry.
            options: ``nameObf`` and ``nameDeobf`` header labels.
            index_supplier: Ignored.

        Raises:
            MappingsOptionError: If ``options`` contains unknown keys.
            UnsupportedLayoutError: If ``path`` is an existing directory.
            MappingIOError: If the file cannot be created or written. No
                destination file is left behind in that case.
        """
        resolved = resolve_options(_OPTIONS, options)
        path = Path(path)
        if path.is_dir():
            raise UnsupportedLayoutError(
                f"Tiny mappings must be written to a file, got directory: {path}"
            )
        tmp_path = path.with_name(f"{path.name}.tmp")
        try:
            path.unlink(missing_ok=True)
            with tmp_path.open("w", encoding="utf-8", newline="\n") as stream:
                sink = _LineSink(stream)
                self._write_mappings(sink, mappings, progress, resolved)
            tmp_path.replace(path)
        except OSError as exc:
            logger.warning("Failed writing mappings (path=%s error=%s)", path, exc)
            raise MappingIOError(f"Failed writing mappings to {path}: {exc}") from exc
        finally:
            _discard(tmp_path)

        logger.info(
            "Wrote tiny mappings",
            extra={
                "path": str(path),
                "lines": sink.lines_written,
                "duplicates": sink.duplicates_dropped,
            },
        )

    def _write_mappings(
        self,
        sink: _LineSink,
        mappings: EntryTree[EntryMapping],
        progress: ProgressListener,
        options: dict[str, str],
    ) -> None:
        sink.write((VERSION_CONSTANT, options[NAME_OBF.name], options[NAME_DEOBF.name]))

        translator = MappingTranslator(mappings, VoidEntryResolver())
        roots = sorted(mappings.root_entries(), key=str)
        progress.init(len(roots), "Writing tiny mappings")
        for done, entry in enumerate(roots, start=1):
            self._write_entry(sink, mappings, translator, entry)
            progress.step(done, str(entry))

    def _write_entry(
        self,
        sink: _LineSink,
        mappings: EntryTree[EntryMapping],
        translator: MappingTranslator,
        entry: Entry,
    ) -> None:
        node = mappings.find_node(entry)
        if node is None:
            return

        mapping = node.value
        if mapping is not None and entry.name != mapping.target_name:
            sink.write(_serialize(entry, translator))

        for kind in _CHILD_KINDS:
            children = [child for child in node.children if isinstance(child, kind)]
            for child in sorted(children, key=str):
                self._write_entry(sink, mappings, translator, child)


def _serialize(entry: Entry, translator: MappingTranslator) -> tuple[str, ...]:
    """Build the fields of one entry line.

    Class lines carry the obfuscated and translated full names. Field and
    method lines carry the obfuscated owner, descriptor and name.
    """
    match entry:
        case ClassEntry():
            translated = translator.translate(entry)
            return ("CLASS", entry.full_name, translated.full_name)
        case FieldEntry():
            return ("FIELD", entry.parent.full_name, str(entry.desc), entry.name)
        case MethodEntry():
            return ("METHOD", entry.parent.full_name, str(entry.desc), entry.name)
    raise TypeError(f"Unsupported entry type: {type(entry).__name__}")


def _discard(tmp_path: Path) -> None:
    try:
        tmp_path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning(
            "Failed removing temporary file (path=%s error=%s)", tmp_path, exc
        )
