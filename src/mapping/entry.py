# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Entry model for class, field and method symbols."""

from dataclasses import dataclass, replace
from typing import Union

from mapping.descriptor import MethodDescriptor, TypeDescriptor

_INNER_SEPARATOR = "$"
_PACKAGE_SEPARATOR = "/"


def _split_inner(name: str) -> tuple[str, str] | None:
    """Split ``Outer$Inner`` at the last separator when both sides are named."""
    index = name.rfind(_INNER_SEPARATOR)
    if index <= 0 or index == len(name) - 1:
        return None
    outer, inner = name[:index], name[index + 1 :]
    if outer.endswith(_PACKAGE_SEPARATOR):
        return None
    return outer, inner


@dataclass(frozen=True)
class ClassEntry:
    """Identify one class.

    Top-level classes carry their package in ``name`` (``com/example/Foo``).
    Nested classes carry only their own simple name and point at the outer
    class through ``parent``. A ``$`` in ``name`` is split into nested
    classes, also below an explicit parent, so ``ClassEntry("Outer$Mid$Inner")``
    and ``ClassEntry("Mid$Inner", ClassEntry("Outer"))`` compare equal.

    Attributes:
        name: Class name; package-qualified for top-level classes.
        parent: Outer class for nested classes, otherwise ``None``.
    """

    name: str
    parent: "ClassEntry | None" = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Class name must not be empty")
        split = _split_inner(self.name)
        if split is None:
            return
        outer, inner = split
        object.__setattr__(self, "parent", ClassEntry(outer, self.parent))
        object.__setattr__(self, "name", inner)

    def __str__(self) -> str:
        return self.full_name

    @property
    def descriptor(self) -> None:
        return None

    @property
    def containing_class(self) -> "ClassEntry | None":
        return self.parent

    @property
    def is_inner_class(self) -> bool:
        return self.parent is not None

    @property
    def full_name(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.full_name}{_INNER_SEPARATOR}{self.name}"

    @property
    def simple_name(self) -> str:
        return self.name.rsplit(_PACKAGE_SEPARATOR, 1)[-1]

    @property
    def package_name(self) -> str | None:
        outermost = self.outermost_class
        if _PACKAGE_SEPARATOR not in outermost.name:
            return None
        return outermost.name.rsplit(_PACKAGE_SEPARATOR, 1)[0]

    @property
    def outermost_class(self) -> "ClassEntry":
        entry = self
        while entry.parent is not None:
            entry = entry.parent
        return entry

    def with_name(self, name: str) -> "ClassEntry":
        return replace(self, name=name)

    def with_parent(self, parent: "ClassEntry | None") -> "ClassEntry":
        return replace(self, parent=parent)

    def ancestry(self) -> tuple["Entry", ...]:
        """Return the containment chain from the outermost class to ``self``."""
        if self.parent is None:
            return (self,)
        return self.parent.ancestry() + (self,)


@dataclass(frozen=True)
class FieldEntry:
    """Identify one field by owner, name and type descriptor.

    Attributes:
        parent: Declaring class.
        name: Field name.
        desc: Field type; plain strings are parsed into ``TypeDescriptor``.
    """

    parent: ClassEntry
    name: str
    desc: TypeDescriptor

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field name must not be empty")
        if isinstance(self.desc, str):
            object.__setattr__(self, "desc", TypeDescriptor(self.desc))

    def __str__(self) -> str:
        return f"{self.parent.full_name}.{self.name}:{self.desc}"

    @property
    def descriptor(self) -> TypeDescriptor:
        return self.desc

    @property
    def containing_class(self) -> ClassEntry:
        return self.parent

    def with_name(self, name: str) -> "FieldEntry":
        return replace(self, name=name)

    def with_parent(self, parent: ClassEntry) -> "FieldEntry":
        return replace(self, parent=parent)

    def ancestry(self) -> tuple["Entry", ...]:
        return self.parent.ancestry() + (self,)


@dataclass(frozen=True)
class MethodEntry:
    """Identify one method by owner, name and method descriptor.

    Attributes:
        parent: Declaring class.
        name: Method name.
        desc: Method descriptor; plain strings are parsed into
            ``MethodDescriptor``.
    """

    parent: ClassEntry
    name: str
    desc: MethodDescriptor

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Method name must not be empty")
        if isinstance(self.desc, str):
            object.__setattr__(self, "desc", MethodDescriptor(self.desc))

    def __str__(self) -> str:
        return f"{self.parent.full_name}.{self.name}{self.desc}"

    @property
    def descriptor(self) -> MethodDescriptor:
        return self.desc

    @property
    def containing_class(self) -> ClassEntry:
        return self.parent

    def with_name(self, name: str) -> "MethodEntry":
        return replace(self, name=name)

    def with_parent(self, parent: ClassEntry) -> "MethodEntry":
        return replace(self, parent=parent)

    def ancestry(self) -> tuple["Entry", ...]:
        return self.parent.ancestry() + (self,)


Entry = Union[ClassEntry, FieldEntry, MethodEntry]
