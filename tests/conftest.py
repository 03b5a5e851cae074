"""Shared test fixtures for debugkit test suite."""

import io
from datetime import datetime

import pytest

from debugkit import emitter as _emitter_mod
from debugkit.emitter import Emitter


FIXED_TIME = datetime(2026, 10, 18, 9, 5, 7, 123456)


# ---------------------------------------------------------------------------
# Singleton isolation
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _reset_emitter():
    """Reset the module-level Emitter singleton around each test."""
    saved = _emitter_mod._emitter
    _emitter_mod._emitter = None
    yield
    _emitter_mod._emitter = saved


# ---------------------------------------------------------------------------
# Sinks
# ---------------------------------------------------------------------------
@pytest.fixture
def buf():
    """A StringIO buffer for capturing text output."""
    return io.StringIO()


@pytest.fixture
def bbuf():
    """A BytesIO buffer for capturing binary output."""
    return io.BytesIO()


# ---------------------------------------------------------------------------
# Emitters
# ---------------------------------------------------------------------------
@pytest.fixture
def fixed_clock():
    """A clock that always returns FIXED_TIME."""
    return lambda: FIXED_TIME


@pytest.fixture
def make_emitter(buf, fixed_clock):
    """Factory for Emitters writing to ``buf`` with a fixed clock."""
    def _make(mask=None, **settings):
        settings.setdefault("file", buf)
        settings.setdefault("clock", fixed_clock)
        return Emitter(mask=mask, **settings)
    return _make
