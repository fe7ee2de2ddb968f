import io

import pytest

from xmlserde.events import (
    Characters,
    EmitterConfig,
    EndDocument,
    EndElement,
    EventWriter,
    Name,
    StartElement,
    XmlError,
    read_events,
)


def test_read_simple_document():
    events = list(read_events("<book><title>Little prince</title></book>"))
    assert [type(e) for e in events] == [
        StartElement, StartElement, Characters, EndElement, EndElement, EndDocument
    ]
    assert events[1].name.local_name == "title"
    assert events[2].text == "Little prince"


def test_whitespace_comments_and_cdata():
    doc = "\n  <?xml version=\"1.0\"?>\n<a> <!-- c --> <b><![CDATA[x]]>y</b>\n</a>"
    events = list(read_events(doc))
    texts = [e.text for e in events if isinstance(e, Characters)]
    assert texts == ["xy"]


def test_attributes_and_namespaces():
    doc = '<a xmlns:ns="urn:test" ns:k="1" plain="2"><ns:c/></a>'
    events = list(read_events(doc))
    start = events[0]
    assert start.attributes[Name("plain")] == "2"
    assert start.attributes[Name("k", "urn:test", "ns")] == "1"
    assert events[1].name == Name("c", "urn:test", "ns")
    assert events[1].namespace["ns"] == "urn:test"


def test_read_from_stream():
    events = list(read_events(io.BytesIO(b"<x>1</x>")))
    assert events[1] == Characters("1")


def test_malformed_raises():
    with pytest.raises(XmlError):
        list(read_events("<a><b></a>"))


def test_name_str():
    assert str(Name("item", prefix="ss")) == "ss:item"


def _render(events, config=None):
    writer = EventWriter(io.StringIO(), config)
    for event in events:
        writer.write(event)
    return writer.into_inner().getvalue()


def test_write_empty_element():
    out = _render([StartElement(Name("base")), EndElement()])
    assert out == '<?xml version="1.0" encoding="utf-8"?><base />'


def test_write_attributes():
    out = _render(
        [
            StartElement(Name("base"), {Name("item"): "something"}),
            StartElement(Name("sub"), {Name("subitem"): "sub-something"}),
            EndElement(),
            EndElement(),
        ],
        EmitterConfig(write_document_declaration=False),
    )
    assert out == '<base item="something"><sub subitem="sub-something" /></base>'


def test_write_read_round_trip():
    events = [
        StartElement(Name("a")),
        StartElement(Name("b"), {Name("k"): 'q"<&'}),
        Characters("t & <u>"),
        EndElement(),
        EndElement(),
    ]
    out = _render(events)
    back = list(read_events(out))
    assert back[1].attributes[Name("k")] == 'q"<&'
    assert back[2] == Characters("t & <u>")


def test_indentation_structure():
    out = _render(
        [StartElement(Name("a")), StartElement(Name("b")), Characters("x"),
         EndElement(), EndElement()],
        EmitterConfig(perform_indent=True, write_document_declaration=False),
    )
    assert out.splitlines() == ["<a>", "  <b>x</b>", "</a>"]


def test_unbalanced_end_raises():
    writer = EventWriter(io.StringIO())
    with pytest.raises(XmlError):
        writer.write(EndElement())