"""Convert values to raw strings

:mod:`rawconv` is the encoding half of a text based configuration layer. It
converts arbitrary python values to a canonical raw string (a
:class:`Value`) and fails loudly on anything it doesn't know about.

Out of the box only scalars are handled (see :func:`marshal`); support for new
types is added per type via :func:`register` or on an independent
:class:`Marshaler`.
"""
from __future__ import annotations

from importlib import metadata

from . import stdtypes  # noqa: F401
from .encode import (
    ConversionError,
    MarshalFunc,
    Marshaler,
    TextMarshaler,
    UnsupportedTypeError,
    get_marshal_func,
    marshal,
    register,
    register_marshal_func,
)
from .kinds import Kind, kind_of
from .value import Value

# https://packaging.python.org/en/latest/guides/single-sourcing-package-version/
__version__ = metadata.version(__name__)

__all__ = (
    "ConversionError",
    "Kind",
    "MarshalFunc",
    "Marshaler",
    "TextMarshaler",
    "UnsupportedTypeError",
    "Value",
    "get_marshal_func",
    "kind_of",
    "marshal",
    "register",
    "register_marshal_func",
)
