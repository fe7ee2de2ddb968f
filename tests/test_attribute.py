import pytest

from xmlserde.attribute import XmlOptions
from xmlserde.events import XmlError


def test_parse_empty_attributes():
    assert XmlOptions.parse([]) == XmlOptions(
        attribute=False, default=None, default_namespace=None, flatten=False,
        namespaces={}, prefix=None, rename=None, skip_serializing_if=None, text=False,
    )


def test_parse_attributes():
    assert XmlOptions.parse(["yaserde(attribute)"]) == XmlOptions(attribute=True)


def test_only_parse_yaserde_attributes():
    assert XmlOptions.parse(["serde(flatten)"]) == XmlOptions()


def test_parse_attributes_with_values():
    attrs = XmlOptions.parse([
        'yaserde(attribute, flatten, default_namespace="example", '
        'namespace="example: http://example.org")'
    ])
    assert attrs == XmlOptions(
        attribute=True, flatten=True, default_namespace="example",
        namespaces={"example": "http://example.org"},
    )


def test_unprefixed_namespace_and_rename():
    attrs = XmlOptions.parse(['yaserde(namespace="urn:a", rename="Item", prefix="ss")'])
    assert attrs.namespaces == {None: "urn:a"}
    assert attrs.xml_element_name("item") == "Item"
    assert attrs.prefix_namespace() == "ss:"


def test_prefix_namespace_default_matches():
    attrs = XmlOptions(prefix="ss", default_namespace="ss")
    assert attrs.prefix_namespace() == ""
    assert XmlOptions().xml_element_name("item") == "item"


def test_check_namespace():
    attrs = XmlOptions(prefix="ss", namespaces={"ss": "urn:ss", "x": "urn:x"})
    attrs.check_namespace("x", None, "Row", False)
    attrs.check_namespace("x", "urn:x", "Row", False)
    attrs.check_namespace(None, "urn:ss", "Row", True)
    with pytest.raises(XmlError, match="bad namespace for Row, found urn:ss"):
        attrs.check_namespace("x", "urn:ss", "Row", False)