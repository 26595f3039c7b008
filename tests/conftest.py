"""Shared fixtures for pytest-based integration and unit tests."""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Iterable

import pytest
from fastapi.testclient import TestClient

# Ensure the learnkit package is importable when tests run from repo root
PROJECT_ROOT = Path(__file__).resolve().parents[1]
BACKEND_PATH = PROJECT_ROOT / "backend"
if str(BACKEND_PATH) not in sys.path:
    sys.path.insert(0, str(BACKEND_PATH))

# Predictable settings for the app under test; must be set before import
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("ENABLE_METRICS", "true")


# ---------------------------------------------------------------------------
# Core FastAPI app fixture
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def app():
    """Return the FastAPI application instance."""
    from learnkit.main import app as fastapi_app

    return fastapi_app


@pytest.fixture(scope="session")
def client(app) -> Iterable[TestClient]:
    """Provide a shared TestClient for API integration tests."""
    with TestClient(app) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# Fresh registries for unit tests
# ---------------------------------------------------------------------------


@pytest.fixture
def bandit_registry():
    from learnkit.services.learning import BanditRegistry

    registry = BanditRegistry()
    yield registry
    registry.clear()


@pytest.fixture
def optimizer_registry():
    from learnkit.services.learning import OptimizerRegistry

    registry = OptimizerRegistry()
    yield registry
    registry.clear()
