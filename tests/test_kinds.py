from __future__ import annotations

import ctypes
import enum

import pytest

from rawconv import kinds
from rawconv.kinds import Kind


class MyStr(str):
    pass


class Color(enum.IntEnum):
    RED = 1


class Point(ctypes.Structure):
    _fields_ = [("x", ctypes.c_int), ("y", ctypes.c_int)]


@pytest.mark.parametrize(
    ("value", "kind"),
    (
        ("abc", Kind.STRING),
        (MyStr("abc"), Kind.STRING),
        (ctypes.c_wchar("a"), Kind.STRING),
        (True, Kind.BOOL),
        (ctypes.c_bool(False), Kind.BOOL),
        (2**100, Kind.INT),
        (Color.RED, Kind.INT),
        (ctypes.c_int8(1), Kind.INT8),
        (ctypes.c_int16(1), Kind.INT16),
        (ctypes.c_int32(1), Kind.INT32),
        (ctypes.c_int64(1), Kind.INT64),
        (ctypes.c_uint8(1), Kind.UINT8),
        (ctypes.c_uint16(1), Kind.UINT16),
        (ctypes.c_uint32(1), Kind.UINT32),
        (ctypes.c_uint64(1), Kind.UINT64),
        (1.5, Kind.FLOAT64),
        (ctypes.c_float(1.5), Kind.FLOAT32),
        (ctypes.c_double(1.5), Kind.FLOAT64),
        (1j, Kind.COMPLEX128),
        (None, Kind.NONE),
        (ctypes.pointer(ctypes.c_int(1)), Kind.POINTER),
        (ctypes.POINTER(ctypes.c_int)(), Kind.POINTER),
        (ctypes.c_wchar_p("abc"), Kind.POINTER),
        (b"abc", Kind.UNSUPPORTED),
        (ctypes.c_char(b"a"), Kind.UNSUPPORTED),
        ([1, 2], Kind.UNSUPPORTED),
        (Point(1, 2), Kind.UNSUPPORTED),
        (object(), Kind.UNSUPPORTED),
    ),
)
def test_kind_of(value, kind):
    assert kinds.kind_of(value) is kind


def test_bits():
    assert Kind.INT.bits == 0
    assert Kind.UINT16.bits == 16
    assert Kind.FLOAT32.bits == 32
    assert Kind.COMPLEX64.bits == 64
    assert Kind.INT64.family == Kind.INT.family == "int"


def test_classify_unwraps_ctypes():
    assert kinds.classify(ctypes.c_uint8(200)) == (Kind.UINT8, 200)
    assert kinds.classify(ctypes.c_int32(-42)) == (Kind.INT32, -42)
    s = MyStr("x")
    kind, plain = kinds.classify(s)
    assert kind is Kind.STRING and plain is s


def test_deref():
    i = ctypes.c_int32(7)
    assert kinds.deref(5) == 5
    assert kinds.deref(None) is None
    assert kinds.deref(ctypes.pointer(i)).value == 7
    assert kinds.deref(ctypes.pointer(ctypes.pointer(i))).value == 7
    assert kinds.deref(ctypes.c_wchar_p("hi")) == "hi"


@pytest.mark.parametrize(
    "value",
    (
        ctypes.POINTER(ctypes.c_int32)(),
        ctypes.pointer(ctypes.POINTER(ctypes.c_int32)()),
        ctypes.pointer(ctypes.pointer(ctypes.POINTER(ctypes.c_double)())),
        ctypes.c_wchar_p(),
    ),
)
def test_deref_null(value):
    assert kinds.deref(value) is None
