# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Export a JSON-described mapping tree to a mapping file."""

import argparse
import json
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from mapping import (
    NAME_DEOBF,
    NAME_OBF,
    ClassEntry,
    EntryMapping,
    EntryTree,
    FieldEntry,
    MappingFormat,
    MappingsError,
    MethodEntry,
    PathType,
    write_mappings,
)
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, TaskID

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportSummary:
    """Represent export phase counters."""

    entries: int
    mapped_entries: int
    elapsed_ms: int


class ValidationError(RuntimeError):
    """Represent user input validation failure."""


class TreeLoadError(RuntimeError):
    """Represent an unreadable or malformed mapping tree document."""


class RichProgressListener:
    """Forward writer progress to a Rich progress display."""

    def __init__(self, progress: Progress) -> None:
        """Initialize listener.

        Args:
            progress: Started Rich progress display.
        """
        self._progress = progress
        self._task: TaskID | None = None

    def init(self, total: int, title: str) -> None:
        self._task = self._progress.add_task(title, total=total)

    def step(self, done: int, message: str) -> None:
        if self._task is None:
            return
        self._progress.update(self._task, completed=done)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(prog="mapping-export")
    parser.add_argument("--input", required=True, help="Mapping tree JSON document.")
    parser.add_argument("--output", required=True, help="Destination mapping file.")
    parser.add_argument(
        "--format",
        default=MappingFormat.TINY_FILE.value,
        help="Output format name.",
    )
    parser.add_argument(
        "--name-obf", default="", help="Label of the obfuscated naming scheme."
    )
    parser.add_argument(
        "--name-deobf", default="", help="Label of the deobfuscated naming scheme."
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logs.")
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run mapping export command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning("Argument parsing failed (argv=%s)", argv)
        return 2
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    console = Console(file=stdout, force_terminal=False, color_system="truecolor")
    _emit_marker(console=console, phase="validation", state="start")
    try:
        input_path, output_path = _validate_paths(
            input_path=Path(args.input), output_path=Path(args.output)
        )
        fmt = MappingFormat.from_name(args.format)
    except (ValidationError, MappingsError) as exc:
        logger.warning("Validation failed (error=%s)", exc)
        stderr.write(f"{exc}\n")
        return 2
    _emit_marker(console=console, phase="validation", state="done")

    _emit_marker(console=console, phase="load", state="start")
    try:
        tree = load_tree(input_path)
    except TreeLoadError as exc:
        logger.warning("Load failed (path=%s error=%s)", input_path, exc)
        stderr.write(f"Load failed: {exc}\n")
        return 2
    _emit_marker(console=console, phase="load", state="done")

    _emit_marker(console=console, phase="write", state="start")
    started = time.monotonic()
    try:
        with Progress(console=console, transient=True) as progress:
            write_mappings(
                fmt,
                tree,
                output_path,
                options={
                    NAME_OBF.name: args.name_obf,
                    NAME_DEOBF.name: args.name_deobf,
                },
                path_type=PathType.FILE,
                progress=RichProgressListener(progress),
            )
    except MappingsError as exc:
        logger.warning("Write failed (path=%s error=%s)", output_path, exc)
        stderr.write(f"Write failed: {exc}\n")
        return 2
    _emit_marker(console=console, phase="write", state="done")

    summary = ExportSummary(
        entries=len(tree),
        mapped_entries=sum(1 for node in tree if node.has_value()),
        elapsed_ms=int(round((time.monotonic() - started) * 1000)),
    )
    _emit_summary(
        console=console,
        summary={
            "entries": summary.entries,
            "mapped_entries": summary.mapped_entries,
            "elapsed_ms": summary.elapsed_ms,
        },
    )
    console.print("status=success", highlight=False)
    return 0


def _emit_marker(console: Console, phase: str, state: str) -> None:
    console.print(f"{phase}:{state}", markup=False, highlight=False)


def _emit_summary(console: Console, summary: dict[str, int]) -> None:
    fields = " ".join(f"{key}={value}" for key, value in summary.items())
    console.print(fields, markup=False, highlight=False)


def _validate_paths(input_path: Path, output_path: Path) -> tuple[Path, Path]:
    """Validate required input and output path constraints.

    Args:
        input_path: Input path from user args.
        output_path: Output path from user args.

    Returns:
        Normalized absolute input and output paths.

    Raises:
        ValidationError: If path constraints are not met.
    """
    input_abs = input_path.resolve()
    output_abs = output_path.resolve()

    if not input_abs.is_file():
        raise ValidationError(f"Input file does not exist: {input_abs}")
    if output_abs.is_dir():
        raise ValidationError(f"Output path must not be a directory: {output_abs}")
    if not output_abs.parent.is_dir():
        raise ValidationError(f"Output directory does not exist: {output_abs.parent}")
    if input_abs == output_abs:
        raise ValidationError("Input and output paths must differ")
    return input_abs, output_abs


def load_tree(path: Path) -> EntryTree[EntryMapping]:
    """Load a mapping tree from a JSON document.

    The document holds a ``classes`` list. Each class has a ``name``, an
    optional ``target`` and optional ``fields``, ``methods`` and nested
    ``classes`` lists; members additionally carry a ``desc``.

    Args:
        path: JSON document path.

    Returns:
        Populated mapping tree.

    Raises:
        TreeLoadError: If the file cannot be read or is malformed.
    """
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise TreeLoadError(str(exc)) from exc

    tree: EntryTree[EntryMapping] = EntryTree()
    try:
        if not isinstance(document, dict):
            raise TypeError("Top-level JSON value must be an object")
        for item in document.get("classes", []):
            _load_class(tree, item, parent=None)
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise TreeLoadError(f"Malformed mapping tree: {exc}") from exc
    return tree


def _load_class(
    tree: EntryTree[EntryMapping], item: dict[str, Any], parent: ClassEntry | None
) -> None:
    entry = ClassEntry(_string(item, "name"), parent)
    tree.insert(entry, _mapping(item))
    for field_item in item.get("fields", []):
        field_entry = FieldEntry(
            entry, _string(field_item, "name"), _string(field_item, "desc")
        )
        tree.insert(field_entry, _mapping(field_item))
    for method_item in item.get("methods", []):
        method_entry = MethodEntry(
            entry, _string(method_item, "name"), _string(method_item, "desc")
        )
        tree.insert(method_entry, _mapping(method_item))
    for class_item in item.get("classes", []):
        _load_class(tree, class_item, parent=entry)


def _string(item: dict[str, Any], key: str) -> str:
    value = item[key]
    if not isinstance(value, str):
        raise TypeError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _mapping(item: dict[str, Any]) -> EntryMapping | None:
    target = item.get("target")
    if target is None:
        return None
    if not isinstance(target, str):
        raise TypeError(f"Target name must be a string, got {type(target).__name__}")
    return EntryMapping(target)


def main() -> None:
    """Run mapping export CLI."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
