# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for JVM descriptors."""

import pytest

from mapping import MethodDescriptor, TypeDescriptor


def test_desc_001_type_descriptor_accepts_primitives_classes_and_arrays() -> None:
    assert TypeDescriptor("I").is_primitive
    assert TypeDescriptor("[[J").array_dimension == 2
    assert TypeDescriptor("La/b/C;").class_name == "a/b/C"
    assert TypeDescriptor("[La;").class_name == "a"
    assert TypeDescriptor("Z").class_name is None


@pytest.mark.parametrize("text", ["", "V", "L;", "La", "Q", "II", "[", "La;I"])
def test_desc_002_type_descriptor_rejects_malformed_text(text: str) -> None:
    with pytest.raises(ValueError):
        TypeDescriptor(text)


def test_desc_003_method_descriptor_splits_arguments_and_return() -> None:
    desc = MethodDescriptor("(I[La;Lb/C;)Ld;")

    assert [str(arg) for arg in desc.argument_descs] == ["I", "[La;", "Lb/C;"]
    assert desc.return_desc == "Ld;"
    assert desc.class_names() == ["a", "b/C", "d"]
    assert MethodDescriptor("()V").class_names() == []


@pytest.mark.parametrize("text", ["", "V", "(I", "()", "()[V", "(V)V", "()VI"])
def test_desc_004_method_descriptor_rejects_malformed_text(text: str) -> None:
    with pytest.raises(ValueError):
        MethodDescriptor(text)


def test_desc_005_remap_replaces_class_references_only() -> None:
    names = {"a": "com/example/Foo", "b": "com/example/Bar"}

    def remap(name: str) -> str:
        return names.get(name, name)

    assert str(TypeDescriptor("[La;").remap(remap)) == "[Lcom/example/Foo;"
    assert str(TypeDescriptor("I").remap(remap)) == "I"
    assert (
        str(MethodDescriptor("(ILa;Lz;)Lb;").remap(remap))
        == "(ILcom/example/Foo;Lz;)Lcom/example/Bar;"
    )
    assert str(MethodDescriptor("([La;)V").remap(remap)) == "([Lcom/example/Foo;)V"


def test_desc_006_descriptors_compare_by_text() -> None:
    assert MethodDescriptor("(I)V") == MethodDescriptor("(I)V")
    assert hash(TypeDescriptor("La;")) == hash(TypeDescriptor("La;"))
    assert sorted([TypeDescriptor("J"), TypeDescriptor("I")])[0] == TypeDescriptor("I")
