"""XML event stream: reading documents into events and writing events out."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import IO, Iterator, Union
from xml.parsers import expat


class XmlError(Exception):
    """Raised when XML cannot be read, written or mapped onto a model."""


@dataclass(frozen=True)
class Name:
    """A qualified XML name."""

    local_name: str
    namespace: str | None = None
    prefix: str | None = None

    @property
    def qualified(self) -> str:
        return f"{self.prefix}:{self.local_name}" if self.prefix else self.local_name

    def __str__(self) -> str:
        if self.namespace is not None:
            return f"{{{self.namespace}}}{self.qualified}"
        return self.qualified


@dataclass
class StartElement:
    name: Name
    attributes: dict[Name, str] = field(default_factory=dict)
    namespace: dict[str | None, str] = field(default_factory=dict)


@dataclass
class EndElement:
    name: Name | None = None


@dataclass
class Characters:
    text: str


@dataclass
class EndDocument:
    pass


XmlEvent = Union[StartElement, EndElement, Characters, EndDocument]


def _split_name(raw: str) -> Name:
    parts = raw.split(" ")
    if len(parts) == 3:
        return Name(parts[1], parts[0], parts[2])
    if len(parts) == 2:
        return Name(parts[1], parts[0])
    return Name(raw)


def _parse(data: str | bytes) -> list[XmlEvent]:
    events: list[XmlEvent] = []
    text: list[str] = []
    pending_ns: dict[str | None, str] = {}
    scopes: list[dict[str | None, str]] = [{}]

    def flush() -> None:
        content = "".join(text).strip()
        text.clear()
        if content:
            events.append(Characters(content))

    def on_ns(prefix, uri):
        pending_ns[prefix] = uri

    def on_start(raw, attrs):
        flush()
        scope = {**scopes[-1], **pending_ns}
        pending_ns.clear()
        scopes.append(scope)
        attributes = {_split_name(k): v for k, v in zip(attrs[::2], attrs[1::2])}
        events.append(StartElement(_split_name(raw), attributes, dict(scope)))

    def on_end(raw):
        flush()
        scopes.pop()
        events.append(EndElement(_split_name(raw)))

    parser = expat.ParserCreate(namespace_separator=" ")
    parser.namespace_prefixes = True
    parser.ordered_attributes = True
    parser.buffer_text = True
    parser.StartNamespaceDeclHandler = on_ns
    parser.StartElementHandler = on_start
    parser.EndElementHandler = on_end
    parser.CharacterDataHandler = text.append
    try:
        parser.Parse(data, True)
    except expat.ExpatError as exc:
        raise XmlError(str(exc)) from exc
    flush()
    events.append(EndDocument())
    return events


def read_events(source: str | bytes | IO) -> Iterator[XmlEvent]:
    """Yield the events of a document, trimmed, coalesced and without comments."""
    data = source.read() if hasattr(source, "read") else source
    data = data.lstrip()
    yield from _parse(data)


@dataclass
class EmitterConfig:
    perform_indent: bool = False
    write_document_declaration: bool = True
    indent_string: str = "  "


def _escape_text(value: str) -> str:
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _escape_attr(value: str) -> str:
    return _escape_text(value).replace('"', "&quot;")


def _qname(name: Name | str) -> str:
    return name.qualified if isinstance(name, Name) else name


class EventWriter:
    """Writes events as XML text to a text stream."""

    def __init__(self, stream: IO[str] | None = None, config: EmitterConfig | None = None):
        self._stream = stream if stream is not None else io.StringIO()
        self._config = config or EmitterConfig()
        self._stack: list[str] = []
        self._had_child: list[bool] = []
        self._open = False
        self._started = False
        self._wrote = False

    def _out(self, text: str) -> None:
        self._stream.write(text)
        self._wrote = True

    def _close_open(self) -> None:
        if self._open:
            self._out(">")
            self._open = False

    def _newline(self, depth: int) -> None:
        if self._config.perform_indent and self._wrote:
            self._out("\n" + self._config.indent_string * depth)

    def write(self, event: XmlEvent) -> None:
        if not self._started:
            self._started = True
            if self._config.write_document_declaration:
                self._out('<?xml version="1.0" encoding="utf-8"?>')
        if isinstance(event, StartElement):
            self._close_open()
            if self._had_child:
                self._had_child[-1] = True
            self._newline(len(self._stack))
            name = _qname(event.name)
            parts = [f"<{name}"]
            for prefix, uri in event.namespace.items():
                key = f"xmlns:{prefix}" if prefix else "xmlns"
                parts.append(f' {key}="{_escape_attr(uri)}"')
            for attr, value in event.attributes.items():
                parts.append(f' {_qname(attr)}="{_escape_attr(value)}"')
            self._out("".join(parts))
            self._stack.append(name)
            self._had_child.append(False)
            self._open = True
        elif isinstance(event, EndElement):
            if not self._stack:
                raise XmlError("end element without a matching start element")
            name = self._stack.pop()
            had_child = self._had_child.pop()
            if self._open:
                self._out(" />")
                self._open = False
            else:
                if had_child:
                    self._newline(len(self._stack))
                self._out(f"</{name}>")
        elif isinstance(event, Characters):
            self._close_open()
            self._out(_escape_text(event.text))
        elif isinstance(event, EndDocument):
            self._close_open()
        else:
            raise XmlError(f"cannot write event {event!r}")

    def into_inner(self) -> IO[str]:
        return self._stream