"""
Number and duration formatting
==============================

Floats are written with the shortest decimal representation that reads back
as the same value at the given width, in ``%g`` style: the exponent form is
only used when the decimal exponent is smaller than -4 or at least 6.

    >>> format_float(3.14), format_float(1e6), format_float(0.0001)
    ('3.14', '1e+06', '0.0001')
    >>> format_complex(complex(1.5, -2))
    '(1.5-2j)'
    >>> format_duration(datetime.timedelta(hours=1, minutes=2, seconds=3.5))
    '1h2m3.5s'

"""
from __future__ import annotations

import datetime
import decimal
import math
import struct
from typing import Final

__all__ = ("format_float", "format_complex", "format_duration")

_WIDTHS: Final = (32, 64)

_F32: Final = struct.Struct("f")

_MICROSECOND: Final = datetime.timedelta(microseconds=1)


def _round32(x: float) -> float:
    return _F32.unpack(_F32.pack(x))[0]


def _roundtrips(s: str, x: float, bits: int) -> bool:
    y = float(s)
    if bits == 32:
        try:
            y = _round32(y)
        except OverflowError:
            return False
    return y == x


def _shortest32(x: float) -> decimal.Decimal:
    exact = decimal.Decimal(x)
    for prec in range(1, 10):
        nearest = decimal.Decimal(f"{x:.{prec - 1}e}")
        ulp = decimal.Decimal(1).scaleb(nearest.adjusted() - prec + 1)
        # At a power of two the gap below x is half the gap above, the nearest
        # candidate can miss while one of its neighbours reads back as x.
        found = [
            c
            for c in (nearest, nearest + ulp, nearest - ulp)
            if _roundtrips(str(c), x, 32)
        ]
        if found:
            return min(found, key=lambda c: abs(c - exact))
    raise AssertionError(f"{x!r} is not a float32")  # pragma: no cover


def _shortest_digits(x: float, bits: int) -> tuple[str, int]:
    """Decompose the positive finite float *x* into ``0.<digits> * 10**dp``.

    *digits* is the shortest digit string that reads back as *x* at the given
    width and has no trailing zeros.
    """
    # `repr` already gives the shortest string that round-trips at 64 bits.
    d = decimal.Decimal(repr(x)) if bits == 64 else _shortest32(x)
    _sign, digit_tuple, exponent = d.as_tuple()
    assert isinstance(exponent, int)
    digits = "".join(map(str, digit_tuple))
    dp = len(digits) + exponent
    return digits.rstrip("0"), dp


def format_float(x: float, bits: int = 64) -> str:
    if bits not in _WIDTHS:
        raise ValueError(f"Invalid float width: {bits}")
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    sign = "-" if math.copysign(1.0, x) < 0 else ""
    if x == 0:
        return sign + "0"
    digits, dp = _shortest_digits(abs(x), bits)
    exp = dp - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0]
        if len(digits) > 1:
            mantissa += "." + digits[1:]
        return f"{sign}{mantissa}e{'-' if exp < 0 else '+'}{abs(exp):02d}"
    if dp <= 0:
        return f"{sign}0.{'0' * -dp}{digits}"
    if dp >= len(digits):
        return sign + digits + "0" * (dp - len(digits))
    return f"{sign}{digits[:dp]}.{digits[dp:]}"


def format_complex(c: complex, bits: int = 128) -> str:
    """Format *c* as a literal that :class:`complex` can read back.

    *bits* is the width of the whole number, each component gets half.
    """
    if bits not in (64, 128):
        raise ValueError(f"Invalid complex width: {bits}")
    re = format_float(c.real, bits // 2)
    im = format_float(c.imag, bits // 2)
    if im[0] not in "+-":
        im = "+" + im
    return f"({re}{im}j)"


def _fixed(value: int, unit: int) -> str:
    # `value / unit` without trailing zeros, `unit` is a power of 10.
    whole, rem = divmod(value, unit)
    if not rem:
        return str(whole)
    width = len(str(unit)) - 1
    return f"{whole}.{rem:0{width}d}".rstrip("0")


def format_duration(td: datetime.timedelta) -> str:
    """Format *td* as a compact duration: ``72h3m0.5s``, ``1.5ms``...

    The largest unit is the hour; durations under a second are written in
    milliseconds or microseconds.
    """
    usecs = td // _MICROSECOND
    if usecs == 0:
        return "0s"
    sign = "-" if usecs < 0 else ""
    usecs = abs(usecs)
    if usecs < 1_000:
        return f"{sign}{usecs}µs"
    if usecs < 1_000_000:
        return f"{sign}{_fixed(usecs, 1_000)}ms"
    secs, frac = divmod(usecs, 1_000_000)
    mins, secs = divmod(secs, 60)
    hours, mins = divmod(mins, 60)
    out = _fixed(secs * 1_000_000 + frac, 1_000_000) + "s"
    if hours:
        return f"{sign}{hours}h{mins}m{out}"
    if mins:
        return f"{sign}{mins}m{out}"
    return sign + out
