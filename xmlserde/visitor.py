"""Visitors that turn text values into Python values."""

from __future__ import annotations

from xmlserde.events import XmlError


def _debug(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\").replace('"', '\\"')
        .replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
    )
    return f'"{escaped}"'


class Visitor:
    """Base visitor: every visit rejects its input unless overridden."""

    def _unexpected(self, kind: str, v: str):
        raise XmlError(f"Unexpected {kind} {_debug(v)}")

    def visit_bool(self, v):
        return self._unexpected("bool", v)

    def visit_i8(self, v):
        return self._unexpected("i8", v)

    def visit_u8(self, v):
        return self._unexpected("u8", v)

    def visit_i16(self, v):
        return self._unexpected("i16", v)

    def visit_u16(self, v):
        return self._unexpected("u16", v)

    def visit_i32(self, v):
        return self._unexpected("i32", v)

    def visit_u32(self, v):
        return self._unexpected("u32", v)

    def visit_i64(self, v):
        return self._unexpected("i64", v)

    def visit_u64(self, v):
        return self._unexpected("u64", v)

    def visit_f32(self, v):
        return self._unexpected("f32", v)

    def visit_f64(self, v):
        return self._unexpected("f64", v)

    def visit_str(self, v):
        return self._unexpected("str", v)