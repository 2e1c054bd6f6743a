"""
``rawconv.stdtypes``: Standard library value types
==================================================

Functions registered on the default marshaler for value types of the standard
library. They go through the same registry as user types so they can be
overridden per marshaler (or globally with :func:`rawconv.register`).

    >>> import rawconv
    >>> rawconv.marshal(datetime.timedelta(minutes=1, seconds=30))
    Value('1m30s')
    >>> rawconv.marshal(urllib.parse.urlsplit("https://example.com/?q=1"))
    Value('https://example.com/?q=1')

"""
from __future__ import annotations

import datetime
import urllib.parse

from . import _fmt
from .encode import register

__all__ = ()


@register
def _marshal_timedelta(td: datetime.timedelta) -> str:
    return _fmt.format_duration(td)


@register(type=urllib.parse.SplitResult)
@register(type=urllib.parse.ParseResult)
@register(type=urllib.parse.DefragResult)
def _marshal_url(
    url: urllib.parse.SplitResult
    | urllib.parse.ParseResult
    | urllib.parse.DefragResult,
) -> str:
    return url.geturl()
