"""Declaring classes that map onto XML documents."""

from __future__ import annotations

import dataclasses
import weakref
from typing import Any, Callable, Mapping

from xmlserde.attribute import XmlOptions
from xmlserde.field import ModelField

_OPTIONS_ATTR = "__xml_options__"
_ROOT_ATTR = "__xml_root__"
_METADATA_KEY = "xmlserde"
_MISSING = dataclasses.MISSING

_field_cache: "weakref.WeakKeyDictionary[type, tuple[ModelField, ...]]" = (
    weakref.WeakKeyDictionary()
)


def xml_model(
    cls: type | None = None,
    *,
    rename: str | None = None,
    root: str | None = None,
    prefix: str | None = None,
    namespaces: Mapping[str | None, str] | None = None,
    default_namespace: str | None = None,
):
    """Mark a class as an XML model, turning it into a dataclass if needed.

    Usable bare (``@xml_model``) or with options (``@xml_model(rename="base")``).
    ``root`` records the element name the document is expected to start with.
    """
    options = XmlOptions(
        rename=rename,
        prefix=prefix,
        namespaces=dict(namespaces or {}),
        default_namespace=default_namespace,
    )

    def decorate(klass: type) -> type:
        if not isinstance(klass, type):
            raise TypeError(f"xml_model expects a class, got {klass!r}")
        if not dataclasses.is_dataclass(klass):
            klass = dataclasses.dataclass(klass)
        setattr(klass, _OPTIONS_ATTR, dataclasses.replace(options, namespaces=dict(options.namespaces)))
        setattr(klass, _ROOT_ATTR, root)
        _field_cache.pop(klass, None)
        return klass

    return decorate if cls is None else decorate(cls)


def xml_field(
    *,
    attribute: bool = False,
    text: bool = False,
    flatten: bool = False,
    rename: str | None = None,
    prefix: str | None = None,
    default: Any = _MISSING,
    default_factory: Callable[[], Any] | Any = _MISSING,
    skip_serializing_if: Callable[[Any], bool] | str | None = None,
):
    """Declare a model field together with how it appears in XML.

    A ``default`` or ``default_factory`` is both the dataclass default and the
    value that is left out when serializing and filled in when it is missing.
    """
    if default is not _MISSING and default_factory is not _MISSING:
        raise ValueError("cannot specify both default and default_factory")
    options = XmlOptions(
        attribute=attribute,
        text=text,
        flatten=flatten,
        rename=rename,
        prefix=prefix,
        skip_serializing_if=skip_serializing_if,
    )
    kwargs: dict[str, Any] = {"metadata": {_METADATA_KEY: options}}
    if default is not _MISSING:
        options.default = default
        kwargs["default"] = default
    elif default_factory is not _MISSING:
        options.default = default_factory
        kwargs["default_factory"] = default_factory
    return dataclasses.field(**kwargs)


def _class_of(obj: Any) -> type:
    return obj if isinstance(obj, type) else type(obj)


def is_model(obj: Any) -> bool:
    """Tell whether a class or instance is a declared XML model."""
    klass = _class_of(obj)
    return dataclasses.is_dataclass(klass) and isinstance(
        getattr(klass, _OPTIONS_ATTR, None), XmlOptions
    )


def _model_class(obj: Any) -> type:
    klass = _class_of(obj)
    if not is_model(klass):
        raise TypeError(f"{klass.__name__} is not an XML model")
    return klass


def model_options(cls: Any) -> XmlOptions:
    """Return the options a model class (or instance) was declared with."""
    return getattr(_model_class(cls), _OPTIONS_ATTR)


def model_fields(cls: Any) -> list[ModelField]:
    """Return the fields of a model class (or instance) in declaration order."""
    klass = _model_class(cls)
    cached = _field_cache.get(klass)
    if cached is None:
        cached = tuple(
            ModelField(f.name, f.type, f.metadata.get(_METADATA_KEY))
            for f in dataclasses.fields(klass)
        )
        _field_cache[klass] = cached
    return list(cached)