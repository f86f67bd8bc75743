"""Pytest fixtures shared by the sanitag test-suite."""
from __future__ import annotations

import pytest

import sanitag
from sanitag import Sanitizer, strict_policy, ugc_policy


@pytest.fixture()
def sanitizer() -> Sanitizer:  # noqa: D401
    """Return a fresh sanitizer carrying the ``strict`` and ``ugc`` presets."""
    return Sanitizer({"strict": strict_policy(), "ugc": ugc_policy()})


@pytest.fixture()
def restore_default():  # noqa: D401
    """Reinstate the process-wide default sanitizer after the test."""
    original = sanitag.default()
    yield original
    sanitag.set_default(original)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):  # noqa: D401
    """Keep host configuration from leaking into tests."""
    monkeypatch.delenv("SANITAG_TAG_KEY", raising=False)
    monkeypatch.delenv("SANITAG_MAX_DEPTH", raising=False)
    yield


@pytest.fixture(autouse=True)
def _silence_logging(caplog):  # noqa: D401
    """Reduce noise – most tests assert behaviour, not log output."""
    caplog.set_level("WARNING")
    yield


@pytest.fixture()
def anyio_backend():  # noqa: D401
    """Force *anyio* tests to use the standard asyncio backend only."""
    return "asyncio"
