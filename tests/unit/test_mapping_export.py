# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the mapping export CLI."""

import io
import json
from pathlib import Path
from typing import Any

import pytest

from cli.mapping_export import TreeLoadError, load_tree, run
from mapping import ClassEntry, EntryMapping, FieldEntry, MethodEntry


def _write_json(path: Path, document: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


_DOCUMENT = {
    "classes": [
        {
            "name": "a",
            "target": "HelloWorld",
            "fields": [{"name": "b", "desc": "I", "target": "counter"}],
            "methods": [{"name": "c", "desc": "(La;)V", "target": "greet"}],
            "classes": [{"name": "d", "target": "Inner"}],
        },
        {"name": "e", "fields": [{"name": "f", "desc": "J"}]},
    ]
}


def test_cli_001_requires_input_and_output_arguments() -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run([], stdout=stdout, stderr=stderr)

    assert exit_code == 2


def test_cli_002_fails_when_input_is_missing(tmp_path: Path) -> None:
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["--input", str(tmp_path / "missing.json"), "--output", str(tmp_path / "o")],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Input file does not exist" in stderr.getvalue()


def test_cli_003_fails_when_output_is_a_directory(tmp_path: Path) -> None:
    input_path = _write_json(tmp_path / "tree.json", _DOCUMENT)
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["--input", str(input_path), "--output", str(tmp_path)],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 2
    assert "must not be a directory" in stderr.getvalue()


def test_cli_004_fails_on_unknown_format(tmp_path: Path) -> None:
    input_path = _write_json(tmp_path / "tree.json", _DOCUMENT)
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        [
            "--input",
            str(input_path),
            "--output",
            str(tmp_path / "out.tiny"),
            "--format",
            "srg",
        ],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Unknown mapping format" in stderr.getvalue()
    assert not (tmp_path / "out.tiny").exists()


def test_cli_005_fails_on_malformed_document(tmp_path: Path) -> None:
    input_path = _write_json(tmp_path / "tree.json", {"classes": [{"target": "X"}]})
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["--input", str(input_path), "--output", str(tmp_path / "out.tiny")],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Load failed" in stderr.getvalue()


def test_cli_006_exports_tiny_file(tmp_path: Path) -> None:
    input_path = _write_json(tmp_path / "tree.json", _DOCUMENT)
    output_path = tmp_path / "out.tiny"
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        [
            "--input",
            str(input_path),
            "--output",
            str(output_path),
            "--name-obf",
            "left",
            "--name-deobf",
            "right",
        ],
        stdout=stdout,
        stderr=stderr,
    )

    assert exit_code == 0
    assert stderr.getvalue() == ""
    assert output_path.read_text(encoding="utf-8").splitlines() == [
        "v1\tleft\tright",
        "CLASS\ta\tHelloWorld",
        "FIELD\ta\tI\tb",
        "METHOD\ta\t(La;)V\tc",
        "CLASS\ta$d\tHelloWorld$Inner",
    ]
    output = stdout.getvalue()
    assert "\x1b" not in output
    assert "validation:done\nload:start\nload:done\nwrite:start" in output
    assert "write:done" in output
    assert "entries=6 mapped_entries=4" in output
    assert "status=success" in output


def test_cli_007_load_tree_builds_nested_entries(tmp_path: Path) -> None:
    tree = load_tree(_write_json(tmp_path / "tree.json", _DOCUMENT))

    assert tree.get(ClassEntry("a$d")) == EntryMapping("Inner")
    assert tree.get(FieldEntry(ClassEntry("a"), "b", "I")) == EntryMapping("counter")
    assert tree.get(MethodEntry(ClassEntry("a"), "c", "(La;)V")) == EntryMapping(
        "greet"
    )
    assert tree.find_node(FieldEntry(ClassEntry("e"), "f", "J")) is not None
    assert tree.get(ClassEntry("e")) is None


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"classes": [{"name": 3}]},
        {"classes": [{"name": "a", "fields": [{"name": "b"}]}]},
        {"classes": [{"name": "a", "fields": [{"name": "b", "desc": "Q"}]}]},
        {"classes": [{"name": "a", "target": ""}]},
        {"classes": ["a"]},
    ],
)
def test_cli_008_load_tree_rejects_malformed_documents(
    tmp_path: Path, document: Any
) -> None:
    with pytest.raises(TreeLoadError):
        load_tree(_write_json(tmp_path / "tree.json", document))


def test_cli_009_load_tree_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "tree.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(TreeLoadError):
        load_tree(path)
