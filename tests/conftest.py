"""Shared pytest fixtures for the whitescan test suite."""

import io

import pytest

from whitescan import LineBuffer
from whitescan.config import reset_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Keep settings singletons and WHITESCAN_* variables from leaking between tests."""
    for name in ("WHITESCAN_ENCODING", "WHITESCAN_DECODE_ERRORS", "WHITESCAN_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def make_reader():
    """Build a LineBuffer over an in-memory byte source."""

    def _make(data, **kwargs):
        if isinstance(data, str):
            data = data.encode("utf-8")
        return LineBuffer(io.BytesIO(data), **kwargs)

    return _make


@pytest.fixture
def sample_reader(make_reader):
    """Reader over the five-line sample used to pin newline semantics."""
    return make_reader(b"1 2\n\n3 4 5\n6 7\n8\n")
