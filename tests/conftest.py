"""Shared pytest fixtures for the antiswear service tests."""

from __future__ import annotations

import importlib
import os
import sys
from pathlib import Path
from typing import Callable

import pytest

SERVICE_DIR = Path(__file__).resolve().parents[1] / "antiswear_service"
if str(SERVICE_DIR) not in sys.path:
    sys.path.insert(0, str(SERVICE_DIR))

# Tests never reach out for nltk data.
os.environ.setdefault("NLTK_AUTO_DOWNLOAD", "0")


@pytest.fixture()
def make_client(monkeypatch) -> Callable[..., "TestClient"]:
    """Build a TestClient around a freshly configured application."""

    from fastapi.testclient import TestClient

    def _factory(**env: str) -> TestClient:
        monkeypatch.delenv("ANTISWEAR_API_KEYS", raising=False)
        monkeypatch.setenv("ANTISWEAR_PROFILES", "en,ru")
        monkeypatch.setenv("ANTISWEAR_MODE", "text")
        for key, value in env.items():
            monkeypatch.setenv(key, value)

        app_module = importlib.import_module("app")
        app_module = importlib.reload(app_module)
        return TestClient(app_module.app)

    return _factory


@pytest.fixture()
def api_client(make_client):
    return make_client()


@pytest.fixture(scope="session")
def punkt_data(tmp_path_factory):
    """Fetch nltk punkt once into a private data directory."""

    import nltk

    data_dir = tmp_path_factory.mktemp("nltk_data")
    for resource in ("punkt_tab", "punkt"):
        nltk.download(resource, download_dir=str(data_dir), quiet=True)
    nltk.data.path.insert(0, str(data_dir))
    yield data_dir
    nltk.data.path.remove(str(data_dir))
