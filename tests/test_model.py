import dataclasses
from typing import Optional

import pytest

from xmlserde.field import FieldKind
from xmlserde.model import (
    is_model,
    model_fields,
    model_options,
    xml_field,
    xml_model,
)


@xml_model
class Plain:
    name: str


@xml_model(rename="base", prefix="ss", namespaces={"ss": "urn:sheet"})
class Renamed:
    item: str
    label: str = xml_field(attribute=True, rename="Label")


def test_bare_decorator_keeps_class_name():
    options = model_options(Plain)
    assert options.rename is None
    assert options.xml_element_name("Plain") == "Plain"


def test_decorator_options_are_recorded():
    options = model_options(Renamed)
    assert options.rename == "base"
    assert options.prefix == "ss"
    assert options.namespaces == {"ss": "urn:sheet"}
    assert options.prefix_namespace() == "ss:"


def test_decorated_class_is_a_dataclass():
    class Fresh:
        name: str

    decorated = xml_model(Fresh)
    assert dataclasses.is_dataclass(decorated)
    assert is_model(decorated)
    assert decorated("a") == decorated("a")
    assert decorated("a") != decorated("b")
    assert [f.name for f in model_fields(decorated)] == ["name"]


def test_fields_in_declaration_order_with_options():
    fields = model_fields(Renamed)
    assert [f.name for f in fields] == ["item", "label"]
    assert fields[0].is_attribute is False
    assert fields[1].is_attribute is True
    assert fields[1].renamed_label_without_namespace() == "Label"


def test_fields_of_instance_match_class():
    instance = Renamed("x", "y")
    assert [f.name for f in model_fields(instance)] == [f.name for f in model_fields(Renamed)]


def test_field_kinds_follow_annotations():
    @xml_model
    class Kinds:
        many: list[str]
        maybe: Optional[str]
        inner: Plain

    kinds = [f.field_type.kind for f in model_fields(Kinds)]
    assert kinds == [FieldKind.VEC, FieldKind.OPTION, FieldKind.STRUCT]


def test_default_is_dataclass_default_and_xml_default():
    @xml_model
    class WithDefault:
        background: str = xml_field(default="my_default_value")

    assert WithDefault().background == "my_default_value"
    field = model_fields(WithDefault)[0]
    assert field.has_default
    assert field.default_value() == "my_default_value"


def test_default_factory_gives_fresh_values():
    @xml_model
    class WithFactory:
        items: list = xml_field(default_factory=list)

    first, second = WithFactory(), WithFactory()
    first.items.append(1)
    assert second.items == []
    assert model_fields(WithFactory)[0].default_value() == []


def test_default_and_factory_together_rejected():
    with pytest.raises(ValueError):
        xml_field(default=1, default_factory=list)


def test_skip_serializing_if_is_used():
    @xml_model
    class Skippy:
        value: str = xml_field(skip_serializing_if=lambda v: v == "")

    field = model_fields(Skippy)[0]
    assert field.should_skip(Skippy(""))
    assert not field.should_skip(Skippy("kept"))


def test_is_model():
    @dataclasses.dataclass
    class NotModel:
        value: int

    assert is_model(Plain)
    assert is_model(Plain("a"))
    assert not is_model(NotModel)
    assert not is_model(42)


def test_non_model_rejected():
    class Nothing:
        pass

    with pytest.raises(TypeError):
        model_options(Nothing)
    with pytest.raises(TypeError):
        model_fields(Nothing)


def test_decorating_non_class_rejected():
    with pytest.raises(TypeError):
        xml_model(lambda: None)