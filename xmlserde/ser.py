"""Serializing models and plain values into XML text."""

from __future__ import annotations

import enum
import io
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import IO, Any

from xmlserde.events import (
    Characters,
    EmitterConfig,
    EndElement,
    EventWriter,
    Name,
    StartElement,
    XmlError,
    XmlEvent,
)
from xmlserde.field import ModelField
from xmlserde.model import is_model, model_fields, model_options


@dataclass
class Config:
    """Output formatting choices."""

    perform_indent: bool = False
    write_document_declaration: bool = True
    indent_string: str | None = None


class Serializer:
    """Writes events and carries the state shared between nested values."""

    def __init__(self, writer: EventWriter):
        self.writer = writer
        self.skip_start_end = False
        self.start_event_name: str | None = None
        self._scopes: list[dict[str | None, str]] = [{}]

    @classmethod
    def from_writer(cls, stream: IO[str], config: Config | None = None) -> "Serializer":
        config = config or Config()
        emitter = EmitterConfig(
            perform_indent=config.perform_indent,
            write_document_declaration=config.write_document_declaration,
        )
        if config.indent_string is not None:
            emitter.indent_string = config.indent_string
        return cls(EventWriter(stream, emitter))

    @classmethod
    def for_inner(cls, stream: IO[str]) -> "Serializer":
        return cls(EventWriter(stream, EmitterConfig(write_document_declaration=False)))

    def write(self, event: XmlEvent) -> None:
        self.writer.write(event)

    def into_inner(self) -> IO[str]:
        return self.writer.into_inner()

    def _enter_scope(self, namespaces: dict[str | None, str]) -> dict[str | None, str]:
        current = self._scopes[-1]
        declared = {p: uri for p, uri in namespaces.items() if current.get(p) != uri}
        self._scopes.append({**current, **declared})
        return declared

    def _leave_scope(self) -> None:
        self._scopes.pop()


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        return format(Decimal(text), "f")
    return text


def _is_scalar(value: Any) -> bool:
    return not isinstance(value, enum.Enum) and isinstance(value, (str, bool, int, float))


def _format(value: Any) -> str:
    if isinstance(value, enum.Enum):
        return value.value if isinstance(value.value, str) else value.name
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, (int, str)):
        return str(value)
    raise XmlError(f"cannot format {value!r} as text")


def _name(qualified: str) -> Name:
    prefix, sep, local = qualified.partition(":")
    return Name(local, prefix=prefix) if sep else Name(qualified)


def _content(value: Any) -> str:
    if _is_scalar(value) or isinstance(value, enum.Enum):
        return _format(value)
    if isinstance(value, list):
        raise XmlError("a list cannot be written as a single text value")
    return to_string_content(value)


def _omitted(field: ModelField, owner: Any, value: Any) -> bool:
    if field.should_skip(owner):
        return True
    return field.has_default and value == field.default_value()


def _take_state(serializer: Serializer) -> tuple[bool, str | None]:
    state = (serializer.skip_start_end, serializer.start_event_name)
    serializer.skip_start_end = False
    serializer.start_event_name = None
    return state


def _serialize_child(item: Any, label: str, flatten: bool, serializer: Serializer) -> None:
    if _is_scalar(item):
        serializer.write(StartElement(_name(label)))
        serializer.write(Characters(_format(item)))
        serializer.write(EndElement(_name(label)))
        return
    serializer.skip_start_end = flatten
    serializer.start_event_name = None if flatten else label
    try:
        serialize(item, serializer)
    finally:
        serializer.skip_start_end = False
        serializer.start_event_name = None


def _serialize_model(model: Any, serializer: Serializer) -> None:
    options = model_options(model)
    fields = model_fields(model)
    skip, given_name = _take_state(serializer)
    element = given_name or options.prefix_namespace() + options.xml_element_name(
        type(model).__name__
    )

    if not skip:
        attributes: dict[Name, str] = {}
        for field in fields:
            if not field.is_attribute:
                continue
            value = getattr(model, field.name)
            if value is None or _omitted(field, model, value):
                continue
            attributes[_name(field.renamed_label(options))] = _content(value)
        declared = serializer._enter_scope(options.namespaces)
        serializer.write(StartElement(_name(element), attributes, declared))

    for field in fields:
        if field.is_attribute:
            continue
        value = getattr(model, field.name)
        if field.is_text_content:
            serializer.write(Characters("" if value is None else _content(value)))
            continue
        if _omitted(field, model, value):
            continue
        if value is None:
            items: list[Any] = []
        elif isinstance(value, list):
            items = value
        else:
            items = [value]
        label = field.renamed_label(options)
        for item in items:
            _serialize_child(item, label, field.is_flatten, serializer)

    if not skip:
        serializer.write(EndElement(_name(element)))
        serializer._leave_scope()


def _serialize_enum(member: enum.Enum, serializer: Serializer) -> None:
    skip, given_name = _take_state(serializer)
    element = given_name or type(member).__name__
    if not skip:
        serializer.write(StartElement(_name(element)))
    serializer.write(Characters(_format(member)))
    if not skip:
        serializer.write(EndElement(_name(element)))


def serialize(value: Any, serializer: Serializer) -> None:
    """Write a value through a serializer.

    Objects with an ``xml_serialize(serializer)`` method write themselves.
    """
    custom = getattr(value, "xml_serialize", None)
    if callable(custom) and not isinstance(value, type):
        custom(serializer)
    elif is_model(value) and not isinstance(value, type):
        _serialize_model(value, serializer)
    elif isinstance(value, enum.Enum):
        _serialize_enum(value, serializer)
    elif _is_scalar(value):
        serializer.write(Characters(_format(value)))
    else:
        raise XmlError(f"cannot serialize {type(value).__name__} value {value!r}")


def serialize_with_writer(model: Any, writer: IO[str], config: Config | None = None) -> IO[str]:
    """Serialize a model to a text stream and return the stream."""
    serializer = Serializer.from_writer(writer, config or Config())
    serialize(model, serializer)
    return serializer.into_inner()


def to_string(model: Any) -> str:
    """Serialize a model to a string without formatting."""
    return serialize_with_writer(model, io.StringIO(), Config()).getvalue()


def to_string_with_config(model: Any, config: Config) -> str:
    """Serialize a model to a string using the given formatting."""
    return serialize_with_writer(model, io.StringIO(), config).getvalue()


def serialize_with_writer_content(model: Any, writer: IO[str]) -> IO[str]:
    """Write only the content of a model, without its own start and end tags."""
    serializer = Serializer.for_inner(writer)
    serializer.skip_start_end = True
    serialize(model, serializer)
    return serializer.into_inner()


def to_string_content(model: Any) -> str:
    """Return the content of a model, without its own start and end tags."""
    return serialize_with_writer_content(model, io.StringIO()).getvalue()