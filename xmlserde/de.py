"""Deserializing XML documents into models and plain values."""

from __future__ import annotations

import dataclasses
import enum
import logging
import re
from typing import IO, Any, Callable, Iterable, TypeVar
from xml.sax.saxutils import escape

from xmlserde.events import (
    Characters,
    EndDocument,
    EndElement,
    Name,
    StartElement,
    XmlError,
    XmlEvent,
    read_events,
)
from xmlserde.field import FieldKind, FieldType, ModelField
from xmlserde.model import is_model, model_fields, model_options

_log = logging.getLogger(__name__)

T = TypeVar("T")

_INT_RANGES = {
    FieldKind.I8: (-(2**7), 2**7 - 1),
    FieldKind.U8: (0, 2**8 - 1),
    FieldKind.I16: (-(2**15), 2**15 - 1),
    FieldKind.U16: (0, 2**16 - 1),
    FieldKind.I32: (-(2**31), 2**31 - 1),
    FieldKind.U32: (0, 2**32 - 1),
    FieldKind.I64: (-(2**63), 2**63 - 1),
    FieldKind.U64: (0, 2**64 - 1),
}
_FLOATS = (FieldKind.F32, FieldKind.F64)
_INT_TEXT = re.compile(r"[+-]?[0-9]+\Z")


class Deserializer:
    """Reads events one at a time, with one event of look-ahead and depth tracking."""

    def __init__(self, events: Iterable[XmlEvent]):
        self._events = iter(events)
        self._depth = 0
        self._peeked: XmlEvent | None = None

    @classmethod
    def from_reader(cls, reader: str | bytes | IO) -> "Deserializer":
        return cls(read_events(reader))

    @property
    def depth(self) -> int:
        return self._depth

    def _inner_next(self) -> XmlEvent:
        event = next(self._events, None)
        return EndDocument() if event is None else event

    def peek(self) -> XmlEvent:
        """Return the next event without consuming it."""
        if self._peeked is None:
            self._peeked = self._inner_next()
        return self._peeked

    def next_event(self) -> XmlEvent:
        """Consume and return the next event."""
        if self._peeked is not None:
            event, self._peeked = self._peeked, None
        else:
            event = self._inner_next()
        if isinstance(event, StartElement):
            self._depth += 1
        elif isinstance(event, EndElement):
            self._depth -= 1
        _log.debug("Fetched %r, new depth %d", event, self._depth)
        return event

    def skip_element(self, callback: Callable[[XmlEvent], Any] | None = None) -> None:
        """Consume events up to and including the end of the current element."""
        depth = self._depth
        while self._depth >= depth:
            event = self.next_event()
            if callback is not None:
                callback(event)
            if isinstance(event, EndDocument):
                raise XmlError("End of document, missing some content ?")

    def read_inner_value(self, func: Callable[["Deserializer"], T]) -> T:
        """Read an element's start, let func read its content, then expect its end."""
        event = self.next_event()
        if not isinstance(event, StartElement):
            raise XmlError("Internal error: Bad Event")
        result = func(self)
        self.expect_end_element(event.name)
        return result

    def expect_end_element(self, start_name: Name) -> None:
        event = self.next_event()
        if not isinstance(event, EndElement):
            raise XmlError(f"Unexpected token </{start_name.local_name}>")
        if event.name is not None and event.name != start_name:
            raise XmlError(
                f"End tag </{event.name.local_name}> didn't match "
                f"the start tag <{start_name.local_name}>"
            )


def _parse_int(kind: FieldKind, text: str) -> int:
    if not text:
        raise XmlError("cannot parse integer from empty string")
    low, high = _INT_RANGES[kind]
    if not _INT_TEXT.match(text) or (low == 0 and text.startswith("-")):
        raise XmlError("invalid digit found in string")
    value = int(text)
    if value > high:
        raise XmlError("number too large to fit in target type")
    if value < low:
        raise XmlError("number too small to fit in target type")
    return value


def _parse_float(text: str) -> float:
    if not text or "_" in text or any(c.isspace() for c in text):
        raise XmlError("invalid float literal")
    try:
        return float(text)
    except ValueError as exc:
        raise XmlError("invalid float literal") from exc


def _parse_simple(kind: FieldKind, text: str) -> Any:
    if kind is FieldKind.STRING:
        return text
    if kind is FieldKind.BOOL:
        if text == "true":
            return True
        if text == "false":
            return False
        raise XmlError("provided string was not `true` or `false`")
    if kind in _FLOATS:
        return _parse_float(text)
    if kind in _INT_RANGES:
        return _parse_int(kind, text)
    raise XmlError(f"Not a simple type: {kind.name}")


def _read_characters(de: Deserializer) -> str:
    event = de.peek()
    if isinstance(event, Characters):
        de.next_event()
        return event.text
    return ""


def _read_child(field_type: FieldType, de: Deserializer) -> Any:
    kind = field_type.kind
    if kind is FieldKind.OPTION:
        return _read_child(field_type.data_type, de)
    if kind is FieldKind.VEC:
        raise XmlError("a nested list cannot be read from a single element")
    if kind is FieldKind.STRUCT:
        return deserialize(field_type.struct, de)
    return _parse_simple(kind, de.read_inner_value(_read_characters))


def _from_text(field_type: FieldType, text: str, label: str) -> Any:
    kind = field_type.kind
    if kind is FieldKind.OPTION:
        return _from_text(field_type.data_type, text, label)
    if kind is FieldKind.VEC:
        raise XmlError(f"a list cannot be read from the text of {label}")
    if kind is FieldKind.STRUCT:
        wrapped = f"<{label}>{escape(text)}</{label}>"
        return deserialize(field_type.struct, Deserializer.from_reader(wrapped))
    return _parse_simple(kind, text)


def _type_default(field_type: FieldType) -> Any:
    kind = field_type.kind
    if kind is FieldKind.STRING:
        return ""
    if kind is FieldKind.BOOL:
        return False
    if kind in _FLOATS:
        return 0.0
    if kind in _INT_RANGES:
        return 0
    if kind is FieldKind.OPTION:
        return None
    if kind is FieldKind.VEC:
        return []
    struct = field_type.struct
    if is_model(struct):
        return _build(struct, model_fields(struct), {})
    if issubclass(struct, enum.Enum):
        for member in struct:
            return member
        raise XmlError(f"no default value for {struct.__name__}")
    try:
        return struct()
    except TypeError as exc:
        raise XmlError(f"no default value for {struct.__name__}") from exc


def _build(cls: type, fields: list[ModelField], values: dict[str, Any]) -> Any:
    declared = {f.name: f for f in dataclasses.fields(cls)}
    kwargs: dict[str, Any] = {}
    for field in fields:
        spec = declared[field.name]
        if not spec.init:
            continue
        if field.name in values:
            kwargs[field.name] = values[field.name]
        elif spec.default is dataclasses.MISSING and spec.default_factory is dataclasses.MISSING:
            kwargs[field.name] = _type_default(field.field_type)
    return cls(**kwargs)


def _find_attribute(attributes: dict[Name, str], field: ModelField) -> str | None:
    label = field.renamed_label_without_namespace()
    matches = [(name, value) for name, value in attributes.items() if name.local_name == label]
    for name, value in matches:
        if name.prefix == field.options.prefix:
            return value
    return matches[0][1] if matches else None


def _check_child_namespace(options, field: ModelField, name: Name) -> None:
    if not options.namespaces:
        return
    if field.options.prefix is None:
        options.check_namespace(None, name.namespace, name.local_name, True)
    else:
        field.check_namespace(options, name.namespace, name.local_name)


def _read_field(field: ModelField, values: dict[str, Any], de: Deserializer) -> None:
    field_type = field.field_type
    if field_type.kind is FieldKind.OPTION and field_type.data_type.kind is FieldKind.VEC:
        field_type = field_type.data_type
    if field_type.kind is FieldKind.VEC:
        values.setdefault(field.name, []).append(_read_child(field_type.data_type, de))
    else:
        values[field.name] = _read_child(field_type, de)


def _deserialize_model(cls: type, de: Deserializer) -> Any:
    options = model_options(cls)
    fields = model_fields(cls)
    start = de.next_event()
    if not isinstance(start, StartElement):
        raise XmlError(f"expected a start element for {cls.__name__}, found {start!r}")
    if options.namespaces:
        options.check_namespace(None, start.name.namespace, start.name.local_name, True)

    values: dict[str, Any] = {}
    children: dict[str, ModelField] = {}
    text_fields: list[ModelField] = []
    for field in fields:
        label = field.renamed_label_without_namespace()
        if field.is_attribute:
            raw = _find_attribute(start.attributes, field)
            if raw is not None:
                values[field.name] = _from_text(field.field_type, raw, label)
        elif field.is_text_content:
            text_fields.append(field)
        else:
            children.setdefault(label, field)

    depth = de.depth
    while True:
        event = de.peek()
        if isinstance(event, StartElement):
            field = children.get(event.name.local_name) if de.depth == depth else None
            if field is None:
                de.next_event()
                de.skip_element()
                continue
            _check_child_namespace(options, field, event.name)
            _read_field(field, values, de)
        elif isinstance(event, EndElement):
            de.next_event()
            if de.depth < depth:
                break
        elif isinstance(event, Characters):
            de.next_event()
            if de.depth == depth:
                for field in text_fields:
                    values[field.name] = _from_text(
                        field.field_type, event.text, field.renamed_label_without_namespace()
                    )
        else:
            raise XmlError("End of document, missing some content ?")

    return _build(cls, fields, values)


def _deserialize_enum(cls: type[enum.Enum], de: Deserializer) -> enum.Enum:
    text = de.read_inner_value(_read_characters)
    for member in cls:
        if (member.value if isinstance(member.value, str) else member.name) == text:
            return member
    for member in cls:
        if member.name == text:
            return member
    raise XmlError(f"unknown value {text!r} for {cls.__name__}")


def deserialize(cls: Any, deserializer: Deserializer) -> Any:
    """Read a value of the given type from a deserializer.

    Classes with an ``xml_deserialize(deserializer)`` classmethod read themselves.
    """
    custom = getattr(cls, "xml_deserialize", None)
    if callable(custom):
        return custom(deserializer)
    if is_model(cls):
        return _deserialize_model(cls, deserializer)
    if isinstance(cls, type) and issubclass(cls, enum.Enum):
        return _deserialize_enum(cls, deserializer)
    try:
        field_type = FieldType.from_annotation(cls)
    except TypeError as exc:
        raise XmlError(str(exc)) from exc
    if field_type.kind is FieldKind.STRUCT:
        raise XmlError(f"cannot deserialize {getattr(cls, '__name__', cls)!r}")
    return _read_child(field_type, deserializer)


def from_str(cls: Any, text: str | bytes) -> Any:
    """Read a value of the given type from an XML document held in a string."""
    return deserialize(cls, Deserializer.from_reader(text))


def from_reader(cls: Any, reader: IO) -> Any:
    """Read a value of the given type from an XML document in a stream."""
    return deserialize(cls, Deserializer.from_reader(reader))