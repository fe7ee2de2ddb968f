"""Serialize and deserialize annotated data classes to and from XML."""

__version__ = "0.7.1"

__all__ = ["__version__"]