"""
``rawconv.encode``: Marshal values to their raw representation
==============================================================

A :class:`Marshaler` turns values into :class:`~rawconv.Value`. It looks for a
function registered for the exact type of the value, first in its own table
then in the one of the global :data:`default_marshaler`. If there's none it
falls back to the built-in conversions which handle the scalar
:class:`~rawconv.kinds.Kind`:

    >>> marshal(True), marshal(-42), marshal(0.1), marshal(None)
    (Value('true'), Value('-42'), Value('0.1'), Value(''))

References are followed before converting and a null reference (at any depth)
is converted to an empty value, it is never an error.

Registrations are not synchronised: register all the functions you need
before marshaling from several threads.

"""
from __future__ import annotations

import inspect
import types
import typing
from typing import Any, Callable, Protocol, Type, TypeAlias, TypeVar

from . import _fmt, kinds
from .registry import Registry
from .value import Value

T = TypeVar("T")

__all__ = (
    "MarshalFunc",
    "Marshaler",
    "TextMarshaler",
    "UnsupportedTypeError",
    "ConversionError",
    "default_marshaler",
    "exec_marshal_func",
    "marshal",
    "get_marshal_func",
    "register_marshal_func",
    "register",
)

#: A function that converts a value to its raw string. Failures are reported
#: by raising an exception.
MarshalFunc: TypeAlias = Callable[[Any], str]


class UnsupportedTypeError(TypeError):
    """Values of this type cannot be marshaled.

    Attributes:
      type: The type of the value that was passed in.
    """

    type: Type[Any]

    def __init__(self, typ: Type[Any]) -> None:
        super().__init__(f"unsupported type: {typ.__qualname__}")
        self.type = typ


class ConversionError(ValueError):
    """A marshal function failed.

    The original exception is available as ``__cause__``.

    Attributes:
      type: The type the failing function was called on.
    """

    type: Type[Any]

    def __init__(self, typ: Type[Any], msg: str) -> None:
        super().__init__(f"cannot marshal {typ.__qualname__}: {msg}")
        self.type = typ


@typing.runtime_checkable
class TextMarshaler(Protocol):
    """Values that know how to convert themselves to a raw string.

    This is only consulted when no function is registered for the type.
    """

    def marshal_text(self) -> str:  # pragma: no cover
        ...


def _marshal_text(v: TextMarshaler) -> str:
    return v.marshal_text()


def exec_marshal_func(fn: MarshalFunc, v: Any) -> Value:
    """Run *fn* on *v* after following the references in *v*.

    If *v* is a null reference *fn* isn't called and we return an empty
    :class:`~rawconv.Value`.
    """
    val = kinds.deref(v)
    if val is None:
        return Value()
    try:
        res = fn(val)
        if not isinstance(res, str):
            raise TypeError(
                f"marshal function returned {type(res).__name__!r}, "
                "expected 'str'"
            )
    except Exception as e:
        raise ConversionError(type(v), str(e)) from e
    return Value(res)


class Marshaler:
    """Marshal values according to a table of registered functions.

    Every marshaler falls back to :data:`default_marshaler` for types that
    aren't registered in its own table. Its own registrations are never seen
    by the default marshaler or by other marshalers.

        >>> m = Marshaler().register(float, lambda f: f"{f:.2f}")
        >>> m.marshal(1 / 3), marshal(0.25)
        (Value('0.33'), Value('0.25'))

    """

    __slots__ = ("_registry",)

    _registry: Registry[MarshalFunc]

    def __init__(self) -> None:
        self._registry = Registry()

    def register(self, typ: Type[Any], fn: MarshalFunc) -> Marshaler:
        """Register *fn* for values of type *typ* on this marshaler only.

        This replaces any function previously registered for *typ*. Returns
        the marshaler so calls can be chained.
        """
        self._registry.add(typ, fn)
        return self

    def func(self, typ: Type[Any]) -> MarshalFunc | None:
        """Get the function registered for *typ*.

        Looks in this marshaler's table first then in the one of
        :data:`default_marshaler`. Returns ``None`` if neither has a function
        for *typ*.
        """
        if self._registry.initialized():
            fn = self._registry.find(typ)
            if fn is not None:
                return fn
        return default_marshaler._registry.find(typ)

    def copy(self) -> Marshaler:
        res = Marshaler()
        res._registry = self._registry.copy()
        return res

    def marshal(self, v: Any) -> Value:
        """Get the raw string representation of *v*.

        Raises:
          UnsupportedTypeError: if there is no way to convert *v*.
          ConversionError: if the function registered for *v* failed.
        """
        typ = type(v)
        fn = self.func(typ)
        if fn is not None:
            return exec_marshal_func(fn, v)

        val = kinds.deref(v)
        if val is None:
            return Value()
        if isinstance(val, TextMarshaler):
            return exec_marshal_func(_marshal_text, v)

        kind, plain = kinds.classify(val)
        match kind.family:
            case "string":
                # Ignore `__str__` overrides in subclasses.
                return Value(str.__str__(plain))
            case "bool":
                return Value("true" if plain else "false")
            case "int" | "uint":
                return Value(str(int(plain)))
            case "float":
                return Value(_fmt.format_float(float(plain), kind.bits))
            case "complex":
                return Value(_fmt.format_complex(complex(plain), kind.bits))
        raise UnsupportedTypeError(typ)


#: The global marshaler used by :func:`marshal` and as a fallback by all the
#: other marshalers.
default_marshaler = Marshaler()


def marshal(v: Any) -> Value:
    """Get the raw string representation of *v* using the default marshaler.

    Out of the box the supported types are:

    + :class:`str`, :class:`bool`, :class:`int`, :class:`float`,
      :class:`complex` and their subclasses,
    + the fixed width scalars of :mod:`ctypes`,
    + :class:`datetime.timedelta` and the results of :mod:`urllib.parse`,
    + values that implement :class:`TextMarshaler`,
    + :const:`None` and :mod:`ctypes` pointers to any of the above.

    Support for new types can be added via :func:`register`.
    """
    return default_marshaler.marshal(v)


def get_marshal_func(typ: Type[Any]) -> MarshalFunc | None:
    """Get the function registered globally for *typ* (or ``None``)."""
    return default_marshaler.func(typ)


def register_marshal_func(typ: Type[Any], fn: MarshalFunc) -> None:
    """Register *fn* for *typ* on the default marshaler.

    This affects every marshaler that doesn't have its own function for
    *typ*.
    """
    default_marshaler.register(typ, fn)


def _infer_arg_type(f: Callable[[T], str]) -> Type[T]:
    values = list(inspect.signature(f, eval_str=True).parameters.values())
    if len(values) != 1:
        raise ValueError(
            "The registered function should take only one argument"
        )
    [arg] = values
    ty: Type[T] | None = arg.annotation
    if ty is inspect.Parameter.empty:
        raise ValueError(
            f"Cannot infer the type to register {f.__name__!r} for, "
            "annotate its argument or pass `type`"
        )
    origin = typing.get_origin(ty)
    if origin in (typing.Union, types.UnionType):
        raise ValueError(
            f"Cannot register {f.__name__!r} for the union {ty}, "
            "register it for each type with `type`"
        )
    if origin is not None:
        ty = origin
    assert ty is not None
    return ty


@typing.overload
def register(function: Callable[[T], str], /) -> Callable[[T], str]:
    ...  # pragma: no cover


@typing.overload
def register(
    *, type: Type[T] | None = None
) -> Callable[[Callable[[T], str]], Callable[[T], str]]:
    ...  # pragma: no cover


def register(
    function: Callable[[T], str] | None = None,
    /,
    *,
    type: Type[T] | None = None,
) -> Callable[[T], str] | Callable[[Callable[[T], str]], Callable[[T], str]]:
    """Register a function to use while marshaling values of a given type.

    If *type* is not specified, :func:`register` uses the type annotation on
    the first argument to deduce which type to register *function* for.

    Here are three equivalent ways to add support for
    :class:`fractions.Fraction`::

        >>> import fractions

        >>> @register
        ... def _marshal_fraction(f: fractions.Fraction) -> str:
        ...   return f"{f.numerator}/{f.denominator}"

        >>> @register()
        ... def _marshal_fraction(f: fractions.Fraction) -> str:
        ...   return f"{f.numerator}/{f.denominator}"

        >>> @register(type=fractions.Fraction)
        ... def _marshal_fraction(f):
        ...   return f"{f.numerator}/{f.denominator}"

        >>> marshal(fractions.Fraction(3, 6))
        Value('1/2')

    Args:

      function: The function we are registering

      type: The type we are registering the function for

    """

    def wrapper(function: Callable[[T], str]) -> Callable[[T], str]:
        cls = _infer_arg_type(function) if type is None else type
        register_marshal_func(cls, function)
        return function

    if function is None:
        return wrapper
    return wrapper(function)

