# xmlserde

Turn annotated Python data classes into XML and back again.

Fields are written as child elements by default. Options on a field can
make it an XML attribute instead. They can also make it the element's text,
flatten a list into its parent, rename it, give it a namespace prefix, give
it a default, or skip it when a predicate holds. Options on the class set the
element's name, its prefix, its namespaces and its default namespace.

## Describing a document

```python
from dataclasses import dataclass, field

from xmlserde.model import xml_model, xml_field


@xml_model(rename="sub")
@dataclass
class SubStruct:
    subitem: str = xml_field(attribute=True, rename="sub_item", default="")
    text: str = xml_field(text=True, default="")


@xml_model(rename="base")
@dataclass
class XmlStruct:
    item: str = xml_field(attribute=True, rename="Item", default="")
    sub_struct: SubStruct = xml_field(rename="sub", default_factory=SubStruct)
    tags: list[str] = field(default_factory=list)
```

`xml_model` can be used bare (`@xml_model`) or with the options `rename`,
`prefix`, `namespaces` (a mapping of prefix to URI, `None` for the default
namespace), `default_namespace` and `root`. A class that is not yet a
dataclass is made into one. Without `rename`, the element is named after the
class.

`xml_field` takes `attribute`, `text`, `flatten`, `rename`, `prefix`,
`default`, `default_factory` and `skip_serializing_if`. A field whose value
equals its `default` (or the result of its `default_factory`) is left out
when writing. `skip_serializing_if` is a callable taking the field's value,
or the name of a method on the model that takes it.

Supported field types are `str`, `bool`, `int`, `float`, enums, other models,
`Optional[...]` of any of these and `list[...]` of any of these. Annotations
must be real types, so do not use `from __future__ import annotations` in the
module that defines the models. A list is written as one element per item,
all with the field's name; with `flatten=True` the items' own content is
written straight into the parent. Enum members are written as their value
when it is a string, otherwise as their name.

Plain `int` and `float` are read as 64-bit values. For narrower ranges,
annotate with `I8`, `U8`, `I16`, `U16`, `I32`, `U32`, `I64`, `U64`, `F32` or
`F64` from `xmlserde.field`; out-of-range numbers are rejected when reading.

`xmlserde.model` also offers `is_model`, `model_options` and `model_fields`
to inspect declared models.

## Writing XML

```python
from xmlserde.ser import to_string

model = XmlStruct(
    item="something",
    sub_struct=SubStruct(subitem="sub_something", text="text_content"),
)
print(to_string(model))
# <?xml version="1.0" encoding="utf-8"?><base Item="something"><sub sub_item="sub_something">text_content</sub></base>
```

To pretty-print, change the indent, or leave out the XML declaration, pass a
`Config` (`perform_indent`, `indent_string`, `write_document_declaration`):

```python
from xmlserde.ser import Config, to_string_with_config

print(to_string_with_config(model, Config(perform_indent=True)))
```

`to_string_content` returns only what goes inside the root element.
`serialize_with_writer` writes to a text stream you give it and returns that
stream; `serialize_with_writer_content` does the same for the content only.

## Reading XML

```python
from xmlserde.de import from_str

loaded = from_str(
    XmlStruct,
    '<base Item="something"><sub sub_item="sub_something">text_content</sub></base>',
)
assert loaded == model
```

`from_reader` does the same for a stream of text or bytes. Whitespace around
text is trimmed and comments are ignored. Elements and attributes that the
model does not know about are skipped. Fields that are missing take their
dataclass defaults, or an empty value for their type (`""`, `False`, `0`,
`[]`, `None`, a default model, the first enum member). When a model declares
namespaces, elements in a namespace not bound to the expected prefix are
rejected.

Malformed XML, mismatched tags, unknown enum values and values that do not
fit the field's type raise `xmlserde.events.XmlError`.

## Custom types

A value with an `xml_serialize(serializer)` method writes itself, and a class
with an `xml_deserialize(deserializer)` classmethod reads itself.

Both work on event objects from `xmlserde.events`: `StartElement`,
`EndElement`, `Characters` and `EndDocument`, with names given as `Name`. The
`Serializer` in `xmlserde.ser` writes events with `write`. The `Deserializer`
in `xmlserde.de` offers `peek`, `next_event`, `skip_element`,
`read_inner_value` and `expect_end_element` for walking the event stream,
and `depth` for the current nesting level. `xmlserde.events.read_events`
turns a document into events and `EventWriter` turns events into text.

`xmlserde.visitor.Visitor` is a base class for turning text into values: each
of its `visit_bool`, `visit_i8` … `visit_f64` and `visit_str` methods raises
`XmlError` (for example `Unexpected bool ""`) unless a subclass overrides it.

## What it does not do

This is a library only: it has no command-line tool, and it does not
validate documents against a schema.