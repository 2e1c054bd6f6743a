from __future__ import annotations

import pytest

from rawconv import encode


# Applies to the doctests under src/ as well as to tests/.
@pytest.fixture(autouse=True)
def _auto_clean(monkeypatch):
    monkeypatch.setattr(
        encode, "default_marshaler", encode.default_marshaler.copy()
    )
