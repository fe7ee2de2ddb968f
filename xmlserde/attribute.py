"""Options that steer how a model or field maps onto XML."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from xmlserde.events import XmlError

_LEXEME_PATTERN = re.compile(r'\s*(?:([A-Za-z_]\w*)|("(?:[^"\\]|\\.)*")|(\S))')


def _lex(text: str) -> Iterable[tuple[str, str]]:
    for match in _LEXEME_PATTERN.finditer(text):
        ident, literal, punct = match.groups()
        if ident is not None:
            yield "ident", ident
        elif literal is not None:
            yield "literal", literal
        elif punct is not None:
            yield "punct", punct


def _get_value(lexemes: Iterator[tuple[str, str]]) -> str | None:
    operator = next(lexemes, None)
    value = next(lexemes, None)
    if operator is None or value is None:
        return None
    if operator == ("punct", "=") and value[0] == "literal":
        return value[1].replace('"', "")
    return None


@dataclass
class XmlOptions:
    attribute: bool = False
    default: object = None
    default_namespace: str | None = None
    flatten: bool = False
    namespaces: dict[str | None, str] = field(default_factory=dict)
    prefix: str | None = None
    rename: str | None = None
    skip_serializing_if: object = None
    text: bool = False

    @classmethod
    def parse(cls, attrs: Iterable[str]) -> "XmlOptions":
        """Build options from annotations such as 'yaserde(attribute, rename="x")'."""
        options = cls()
        for attr in attrs:
            path, sep, rest = attr.strip().partition("(")
            if path.strip() != "yaserde" or not sep or not rest.rstrip().endswith(")"):
                continue
            lexemes = iter(_lex(rest.rstrip()[:-1]))
            for kind, value in lexemes:
                if kind != "ident":
                    continue
                if value == "attribute":
                    options.attribute = True
                elif value == "flatten":
                    options.flatten = True
                elif value == "text":
                    options.text = True
                elif value in ("default", "default_namespace", "prefix", "rename",
                               "skip_serializing_if"):
                    setattr(options, value, _get_value(lexemes))
                elif value == "namespace":
                    namespace = _get_value(lexemes)
                    if namespace is not None:
                        parts = namespace.split(": ")
                        if len(parts) == 2:
                            options.namespaces[parts[0]] = parts[1]
                        elif len(parts) == 1:
                            options.namespaces[None] = parts[0]
        return options

    def xml_element_name(self, ident: str) -> str:
        return self.rename if self.rename is not None else ident

    def prefix_namespace(self) -> str:
        if self.default_namespace == self.prefix or self.prefix is None:
            return ""
        return self.prefix + ":"

    def check_namespace(self, prefix, element_namespace, element_name, take_root_prefix) -> None:
        """Raise XmlError if element_namespace is not the one bound to the prefix."""
        if element_namespace is None:
            return
        configured = self.prefix if take_root_prefix else prefix
        allowed = {ns for key, ns in self.namespaces.items() if key == configured}
        if element_namespace not in allowed:
            raise XmlError(f"bad namespace for {element_name}, found {element_namespace}")