"""
``rawconv.kinds``: What a value looks like to the encoder
=========================================================

The built-in conversions don't look at the exact type of a value but at its
:class:`Kind`. Subclasses of the builtin scalar types get the kind of their
base, fixed width :mod:`ctypes` scalars get a sized kind::

  >>> import ctypes
  >>> kind_of(True), kind_of(3), kind_of(ctypes.c_uint8(200))
  (<Kind.BOOL>, <Kind.INT>, <Kind.UINT8>)

References are :const:`None` (the null reference) and :mod:`ctypes` pointers.
:func:`deref` follows them::

  >>> deref(ctypes.pointer(ctypes.pointer(ctypes.c_int32(-42)))).value
  -42
  >>> deref(ctypes.pointer(ctypes.POINTER(ctypes.c_int32)())) is None
  True

"""
from __future__ import annotations

import ctypes
import enum
from typing import Any, Final, Type

__all__ = ("Kind", "classify", "kind_of", "deref")


@enum.unique
class Kind(enum.Enum):
    """The closed set of shapes the built-in conversions know about."""

    #: :const:`None`, the null reference.
    NONE = ("none", 0)
    #: A :mod:`ctypes` pointer or a :class:`ctypes.c_wchar_p`.
    POINTER = ("pointer", 0)
    STRING = ("string", 0)
    BOOL = ("bool", 0)
    #: A python :class:`int` (unbounded).
    INT = ("int", 0)
    INT8 = ("int", 8)
    INT16 = ("int", 16)
    INT32 = ("int", 32)
    INT64 = ("int", 64)
    UINT8 = ("uint", 8)
    UINT16 = ("uint", 16)
    UINT32 = ("uint", 32)
    UINT64 = ("uint", 64)
    FLOAT32 = ("float", 32)
    FLOAT64 = ("float", 64)
    COMPLEX64 = ("complex", 64)
    COMPLEX128 = ("complex", 128)
    UNSUPPORTED = ("unsupported", 0)

    @property
    def family(self) -> str:
        return self.value[0]

    @property
    def bits(self) -> int:
        "The width of the kind in bits, 0 if it's unbounded or not numeric."
        return self.value[1]

    def __repr__(self) -> str:
        return f"<Kind.{self.name}>"


def _sized(family: str, ty: Type[Any]) -> Kind:
    return Kind((family, 8 * ctypes.sizeof(ty)))


_BUILTIN_KINDS: Final[dict[type, Kind]] = {
    str: Kind.STRING,
    bool: Kind.BOOL,
    int: Kind.INT,
    float: Kind.FLOAT64,
    complex: Kind.COMPLEX128,
}

# The aliases (`c_int32`, `c_size_t`...) are the same classes as these.
_CTYPES_KINDS: Final[dict[type, Kind]] = {
    ctypes.c_wchar: Kind.STRING,
    ctypes.c_bool: Kind.BOOL,
    **{
        ty: _sized("int", ty)
        for ty in (
            ctypes.c_byte,
            ctypes.c_short,
            ctypes.c_int,
            ctypes.c_long,
            ctypes.c_longlong,
        )
    },
    **{
        ty: _sized("uint", ty)
        for ty in (
            ctypes.c_ubyte,
            ctypes.c_ushort,
            ctypes.c_uint,
            ctypes.c_ulong,
            ctypes.c_ulonglong,
        )
    },
    ctypes.c_float: Kind.FLOAT32,
    ctypes.c_double: Kind.FLOAT64,
    # `.value` is a python float so the extra precision is already gone.
    ctypes.c_longdouble: Kind.FLOAT64,
}

# Only available on interpreters built with C complex support.
for _name, _kind in (
    ("c_float_complex", Kind.COMPLEX64),
    ("c_double_complex", Kind.COMPLEX128),
):
    if hasattr(ctypes, _name):
        _CTYPES_KINDS[getattr(ctypes, _name)] = _kind


def _is_pointer(v: Any) -> bool:
    return isinstance(v, (ctypes._Pointer, ctypes.c_wchar_p))


def classify(v: Any) -> tuple[Kind, Any]:
    """Get the kind of *v* and the plain python value to format.

    For most values the plain value is *v* itself; for :mod:`ctypes` scalars
    it's their ``value``.

        >>> classify(ctypes.c_float(0.5))
        (<Kind.FLOAT32>, 0.5)
    """
    if v is None:
        return Kind.NONE, v
    if _is_pointer(v):
        return Kind.POINTER, v
    for cls in type(v).__mro__:
        kind = _BUILTIN_KINDS.get(cls)
        if kind is not None:
            return kind, v
        kind = _CTYPES_KINDS.get(cls)
        if kind is not None:
            return kind, v.value
    return Kind.UNSUPPORTED, v


def kind_of(v: Any) -> Kind:
    return classify(v)[0]


def deref(v: Any) -> Any:
    """Follow references until we reach something that isn't one.

    Returns :const:`None` if any of the references along the way is null.
    """
    while _is_pointer(v):
        if not v:
            return None
        if isinstance(v, ctypes.c_wchar_p):
            return v.value
        v = v.contents
    return v
