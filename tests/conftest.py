import sys
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()

from mapping import ClassEntry, EntryMapping, EntryTree, FieldEntry  # noqa: E402


@pytest.fixture
def hello_world_tree() -> EntryTree[EntryMapping]:
    """Class ``a`` renamed to ``HelloWorld`` with field ``b:I`` renamed to ``counter``."""
    tree: EntryTree[EntryMapping] = EntryTree()
    owner = ClassEntry("a")
    tree.insert(owner, EntryMapping("HelloWorld"))
    tree.insert(FieldEntry(owner, "b", "I"), EntryMapping("counter"))
    return tree
