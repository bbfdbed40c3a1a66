# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""JVM type and method descriptors."""

from dataclasses import dataclass, field
from typing import Callable

_PRIMITIVES: frozenset[str] = frozenset("BCDFIJSZ")

NameRemapper = Callable[[str], str]


def _scan_type(text: str, start: int, allow_void: bool = False) -> int:
    """Scan one field type starting at ``start``.

    Args:
        text: Descriptor text.
        start: Index of the first character of the type.
        allow_void: Whether ``V`` is accepted (method return types only).

    Returns:
        Index one past the end of the scanned type.

    Raises:
        ValueError: If no valid type starts at ``start``.
    """
    index = start
    while index < len(text) and text[index] == "[":
        index += 1
    if index >= len(text):
        raise ValueError(f"Truncated descriptor: {text!r}")
    head = text[index]
    if head in _PRIMITIVES:
        return index + 1
    if head == "V" and allow_void and index == start:
        return index + 1
    if head == "L":
        end = text.find(";", index)
        if end <= index + 1:
            raise ValueError(f"Malformed class reference in descriptor: {text!r}")
        return end + 1
    raise ValueError(f"Unexpected character {head!r} in descriptor: {text!r}")


def _remap_type(text: str, remap: NameRemapper) -> str:
    dims = len(text) - len(text.lstrip("["))
    if text[dims] != "L":
        return text
    return f"{text[:dims]}L{remap(text[dims + 1:-1])};"


@dataclass(frozen=True, order=True)
class TypeDescriptor:
    """Represent a field type descriptor such as ``I`` or ``[La/b/C;``."""

    desc: str

    def __post_init__(self) -> None:
        if _scan_type(self.desc, 0) != len(self.desc):
            raise ValueError(f"Trailing characters in type descriptor: {self.desc!r}")

    def __str__(self) -> str:
        return self.desc

    @property
    def array_dimension(self) -> int:
        return len(self.desc) - len(self.desc.lstrip("["))

    @property
    def is_primitive(self) -> bool:
        return self.desc[self.array_dimension] != "L"

    @property
    def class_name(self) -> str | None:
        """Return the referenced class name, looking through array dimensions."""
        if self.is_primitive:
            return None
        return self.desc[self.array_dimension + 1 : -1]

    def remap(self, remap: NameRemapper) -> "TypeDescriptor":
        """Return a descriptor with the referenced class name remapped.

        Args:
            remap: Maps an internal class name to its replacement.

        Returns:
            New descriptor; primitives are returned unchanged.
        """
        return TypeDescriptor(_remap_type(self.desc, remap))


@dataclass(frozen=True, order=True)
class MethodDescriptor:
    """Represent a method descriptor such as ``(ILa;)V``."""

    desc: str
    argument_descs: tuple[TypeDescriptor, ...] = field(
        init=False, compare=False, repr=False
    )
    return_desc: str = field(init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        text = self.desc
        if not text.startswith("("):
            raise ValueError(f"Method descriptor must start with '(': {text!r}")
        arguments: list[TypeDescriptor] = []
        index = 1
        while index < len(text) and text[index] != ")":
            end = _scan_type(text, index)
            arguments.append(TypeDescriptor(text[index:end]))
            index = end
        if index >= len(text):
            raise ValueError(f"Unterminated argument list: {text!r}")
        end = _scan_type(text, index + 1, allow_void=True)
        if end != len(text):
            raise ValueError(f"Trailing characters in method descriptor: {text!r}")
        object.__setattr__(self, "argument_descs", tuple(arguments))
        object.__setattr__(self, "return_desc", text[index + 1 :])

    def __str__(self) -> str:
        return self.desc

    def class_names(self) -> list[str]:
        """Return referenced class names in declaration order, return type last."""
        names = [arg.class_name for arg in self.argument_descs]
        if self.return_desc != "V":
            names.append(TypeDescriptor(self.return_desc).class_name)
        return [name for name in names if name is not None]

    def remap(self, remap: NameRemapper) -> "MethodDescriptor":
        """Return a descriptor with every referenced class name remapped."""
        arguments = "".join(str(arg.remap(remap)) for arg in self.argument_descs)
        return_desc = self.return_desc
        if return_desc != "V":
            return_desc = _remap_type(return_desc, remap)
        return MethodDescriptor(f"({arguments}){return_desc}")
