from __future__ import annotations

import io

import pytest

from fakes import FakeTransport, RecordingLogger


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def out() -> io.BytesIO:
    return io.BytesIO()


@pytest.fixture
def diag() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture(autouse=True)
def _clean_kurl_env(monkeypatch) -> None:
    for name in ("KURL_CONNECT_TIMEOUT", "KURL_USER_AGENT", "KURL_INSECURE"):
        monkeypatch.delenv(name, raising=False)
