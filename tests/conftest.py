"""Shared fixtures: test settings, a fixed clock, sample portfolio and API client."""

import os
from datetime import date
from pathlib import Path

import pytest

# Settings load at import time
os.environ["CONFIG"] = str(Path(__file__).parent / "resources" / "test.yaml")

from fastapi.testclient import TestClient  # noqa: E402

from rentledger_backend.main import app  # noqa: E402
from rentledger_backend.modules.portfolio.state import PortfolioState  # noqa: E402
from rentledger_backend.modules.sync.dependencies import get_store, get_today  # noqa: E402
from rentledger_backend.modules.sync.store import InMemoryDocumentStore  # noqa: E402

from .factories import (  # noqa: E402
    EDITOR,
    RESTRICTED_VIEWER,
    SUPER_ADMIN,
    TODAY,
    auth_headers,
    documents_for,
    sample_state,
)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def state() -> PortfolioState:
    return sample_state()


@pytest.fixture
def store(state) -> InMemoryDocumentStore:
    return InMemoryDocumentStore(documents_for(state))


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_today] = lambda: TODAY
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return auth_headers(SUPER_ADMIN)


@pytest.fixture
def viewer_headers() -> dict[str, str]:
    return auth_headers(RESTRICTED_VIEWER)


@pytest.fixture
def editor_headers() -> dict[str, str]:
    return auth_headers(EDITOR)
