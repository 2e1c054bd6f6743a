from __future__ import annotations

import ctypes
import datetime
import urllib.parse

import pytest

import rawconv


@pytest.mark.parametrize(
    ("td", "expected"),
    (
        (datetime.timedelta(), "0s"),
        (datetime.timedelta(milliseconds=1.5), "1.5ms"),
        (datetime.timedelta(minutes=5), "5m0s"),
        (datetime.timedelta(days=-1), "-24h0m0s"),
    ),
)
def test_timedelta(td, expected):
    assert rawconv.marshal(td) == expected


@pytest.mark.parametrize(
    "url",
    (
        "https://user@example.com:8080/a/b?q=1&r=2#frag",
        "file:///etc/hosts",
        "relative/path",
    ),
)
def test_urls(url):
    assert rawconv.marshal(urllib.parse.urlsplit(url)) == url
    assert rawconv.marshal(urllib.parse.urlparse(url)) == url


def test_defrag():
    res = urllib.parse.urldefrag("https://example.com/a#b")
    assert rawconv.marshal(res) == "https://example.com/a#b"


def test_registered_on_default():
    assert rawconv.get_marshal_func(datetime.timedelta) is not None
    assert rawconv.get_marshal_func(urllib.parse.SplitResult) is not None


def test_override_per_marshaler():
    m = rawconv.Marshaler().register(
        datetime.timedelta, lambda td: str(td.total_seconds())
    )
    assert m.marshal(datetime.timedelta(seconds=90)) == "90.0"
    assert rawconv.marshal(datetime.timedelta(seconds=90)) == "1m30s"


def test_bytes_urls_unsupported():
    with pytest.raises(rawconv.UnsupportedTypeError):
        rawconv.marshal(urllib.parse.urlsplit(b"https://example.com"))


def test_value():
    v = rawconv.marshal(ctypes.c_uint16(7))
    assert repr(v) == "Value('7')"
    assert v == "7" and not rawconv.Value()
