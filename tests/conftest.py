from __future__ import annotations

import os
from pathlib import Path

import pytest

from blobtour.logging_utils import setup_test_logging
from blobtour.settings import WalkthroughSettings
from tests.support.fake_blob import FakeBlobServiceClient, FakeContainerClient, PaceRecorder

os.environ.setdefault("ENV", "test")

_STORAGE_ENV = (
    "AZURE_STORAGE_CONNECTION_STRING",
    "AZURE_STORAGE_ACCOUNT",
    "AZURE_STORAGE_ACCOUNT_KEY",
    "SENTRY_DSN",
)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    setup_test_logging(Path("blobtour-logs/"))
    yield


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch):
    """Keep developer credentials out of the tests."""
    for key in _STORAGE_ENV:
        monkeypatch.delenv(key, raising=False)
    for key in list(os.environ):
        if key.startswith("BLOBTOUR_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def anyio_backend():
    """Force anyio-powered async tests to run under asyncio backend only."""
    return "asyncio"


@pytest.fixture
def service() -> FakeBlobServiceClient:
    return FakeBlobServiceClient()


@pytest.fixture
def container() -> FakeContainerClient:
    return FakeContainerClient("wtblobtest")


@pytest.fixture
def pace() -> PaceRecorder:
    return PaceRecorder()


@pytest.fixture
def walk_settings(tmp_path: Path) -> WalkthroughSettings:
    return WalkthroughSettings(
        local_dir=tmp_path / "files",
        temp_root=tmp_path / "scratch",
        interactive=False,
    )
