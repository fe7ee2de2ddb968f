"""Field kinds and per-field mapping information."""

from __future__ import annotations

import enum
import re
import types
import typing
from dataclasses import dataclass
from typing import NewType, Union

from xmlserde.attribute import XmlOptions

I8 = NewType("I8", int)
U8 = NewType("U8", int)
I16 = NewType("I16", int)
U16 = NewType("U16", int)
I32 = NewType("I32", int)
U32 = NewType("U32", int)
I64 = NewType("I64", int)
U64 = NewType("U64", int)
F32 = NewType("F32", float)
F64 = NewType("F64", float)


class FieldKind(enum.Enum):
    STRING = "str"
    BOOL = "bool"
    I8 = "i8"
    U8 = "u8"
    I16 = "i16"
    U16 = "u16"
    I32 = "i32"
    U32 = "u32"
    I64 = "i64"
    U64 = "u64"
    F32 = "f32"
    F64 = "f64"
    OPTION = "option"
    VEC = "vec"
    STRUCT = "struct"

    def simple_type_name(self) -> str:
        if self in (FieldKind.OPTION, FieldKind.VEC, FieldKind.STRUCT):
            raise ValueError(f"Not a simple type: {self.name}")
        return self.value

    def visitor_name(self) -> str:
        return f"visit_{self.simple_type_name()}"


_SIMPLE = {
    str: FieldKind.STRING, bool: FieldKind.BOOL, int: FieldKind.I64, float: FieldKind.F64,
    I8: FieldKind.I8, U8: FieldKind.U8, I16: FieldKind.I16, U16: FieldKind.U16,
    I32: FieldKind.I32, U32: FieldKind.U32, I64: FieldKind.I64, U64: FieldKind.U64,
    F32: FieldKind.F32, F64: FieldKind.F64,
}


@dataclass(frozen=True)
class FieldType:
    kind: FieldKind
    data_type: "FieldType | None" = None
    struct: type | None = None

    @classmethod
    def from_annotation(cls, annotation) -> "FieldType":
        simple = _SIMPLE.get(annotation)
        if simple is not None:
            return cls(simple)
        origin = typing.get_origin(annotation)
        args = typing.get_args(annotation)
        if origin in (Union, types.UnionType):
            inner = [a for a in args if a is not type(None)]
            if len(inner) != 1 or len(inner) == len(args):
                raise TypeError(f"unable to match {annotation!r}")
            return cls(FieldKind.OPTION, cls.from_annotation(inner[0]))
        if origin is list:
            if len(args) != 1:
                raise TypeError(f"unable to match {annotation!r}")
            return cls(FieldKind.VEC, cls.from_annotation(args[0]))
        if isinstance(annotation, type):
            return cls(FieldKind.STRUCT, struct=annotation)
        raise TypeError(f"unable to match {annotation!r}")


_WORD = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def _upper_camel(text: str) -> str:
    return "".join(word.capitalize() for word in _WORD.findall(text))


class ModelField:
    """A model field together with its XML options."""

    def __init__(self, name: str, annotation, options: XmlOptions | None = None):
        self.name = name
        self.annotation = annotation
        self.options = options or XmlOptions()
        self.field_type = FieldType.from_annotation(annotation)

    @property
    def is_attribute(self) -> bool:
        return self.options.attribute

    @property
    def is_text_content(self) -> bool:
        return self.options.text

    @property
    def is_flatten(self) -> bool:
        return self.options.flatten

    @property
    def has_default(self) -> bool:
        return self.options.default is not None

    def renamed_label_without_namespace(self) -> str:
        return self.options.rename if self.options.rename is not None else self.name

    def renamed_label(self, root_options: XmlOptions) -> str:
        prefix = self.options.prefix
        if root_options.default_namespace == prefix or prefix is None:
            return self.renamed_label_without_namespace()
        return f"{prefix}:{self.renamed_label_without_namespace()}"

    def visitor_ident(self, struct_name: str | None) -> str:
        label = _upper_camel(self.renamed_label_without_namespace().replace(".", "_"))
        struct_id = "".join(struct_name.split(".")) if struct_name else ""
        return f"__Visitor_{label}_{struct_id}"

    def default_value(self):
        default = self.options.default
        return default() if callable(default) else default

    def should_skip(self, owner) -> bool:
        check = self.options.skip_serializing_if
        if check is None:
            return False
        value = getattr(owner, self.name)
        if isinstance(check, str):
            return bool(getattr(owner, check)(value))
        return bool(check(value))

    def check_namespace(self, root_options, element_namespace, element_name) -> None:
        root_options.check_namespace(self.options.prefix, element_namespace, element_name, False)