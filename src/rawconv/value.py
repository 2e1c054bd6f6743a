"""
``rawconv.value``: The raw string representation
================================================
"""
from __future__ import annotations

__all__ = ("Value",)


class Value(str):
    """The raw string representation of a marshaled value.

    A :class:`Value` is a plain :class:`str` with no imposed structure; the
    subclass only exists to make the output of :func:`rawconv.marshal` easy to
    tell apart from arbitrary strings.

        >>> Value("42")
        Value('42')
        >>> Value() == ""
        True
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Value({str.__repr__(self)})"
