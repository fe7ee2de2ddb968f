from typing import List, Optional

import pytest

from xmlserde.attribute import XmlOptions
from xmlserde.field import U8, FieldKind, FieldType, ModelField
from xmlserde.events import XmlError


class Page:
    pass


def test_simple_type_names():
    assert FieldKind.STRING.simple_type_name() == "str"
    assert FieldKind.U8.visitor_name() == "visit_u8"
    with pytest.raises(ValueError):
        FieldKind.VEC.simple_type_name()


def test_from_annotation():
    assert FieldType.from_annotation(str) == FieldType(FieldKind.STRING)
    assert FieldType.from_annotation(U8) == FieldType(FieldKind.U8)
    assert FieldType.from_annotation(Optional[bool]) == FieldType(
        FieldKind.OPTION, FieldType(FieldKind.BOOL))
    assert FieldType.from_annotation(List[Page]) == FieldType(
        FieldKind.VEC, FieldType(FieldKind.STRUCT, struct=Page))
    assert FieldType.from_annotation(list[str] | None).data_type.kind is FieldKind.VEC


def test_unsupported_annotation():
    with pytest.raises(TypeError):
        FieldType.from_annotation(int | str)


def test_labels():
    field = ModelField("author", str, XmlOptions(rename="author-release", prefix="ss"))
    assert field.renamed_label_without_namespace() == "author-release"
    assert field.renamed_label(XmlOptions(default_namespace="ss")) == "author-release"
    assert field.renamed_label(XmlOptions()) == "ss:author-release"
    assert ModelField("title", str).renamed_label(XmlOptions()) == "title"


def test_visitor_ident():
    field = ModelField("with_dots", str, XmlOptions(rename="maj.min.bug"))
    assert field.visitor_ident("mod.Book") == "__Visitor_MajMinBug_modBook"
    assert ModelField("x", str).visitor_ident(None).endswith("_")


def test_default_value():
    assert ModelField("b", bool, XmlOptions(default=lambda: True)).default_value() is True
    field = ModelField("n", int)
    assert not field.has_default and field.default_value() is None


def test_should_skip():
    class Owner:
        value = 3

        def is_three(self, v):
            return v == 3

    assert ModelField("value", int, XmlOptions(skip_serializing_if="is_three")).should_skip(Owner())
    assert not ModelField("value", int, XmlOptions(skip_serializing_if=lambda v: v > 5)).should_skip(Owner())
    assert not ModelField("value", int).should_skip(Owner())


def test_field_check_namespace():
    root = XmlOptions(namespaces={"x": "urn:x"})
    field = ModelField("r", str, XmlOptions(prefix="x"))
    field.check_namespace(root, "urn:x", "r")
    with pytest.raises(XmlError):
        field.check_namespace(root, "urn:y", "r")