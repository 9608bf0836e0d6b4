"""
Pytest configuration and shared fixtures for luhnlab API tests.
"""

from typing import Generator

import pytest
from fastapi.testclient import TestClient

from luhnlab.api.deps import get_api_key_resolver, get_quota_gate
from luhnlab.main import app
from luhnlab.security.plans import ApiKeyResolver
from luhnlab.security.ratelimit import InMemoryQuotaStore, QuotaGate

API_KEYS = {
    "pro-key": "pro",
    "team-key": "team",
}


@pytest.fixture
def quota_gate() -> QuotaGate:
    """Fresh in-memory quota gate per test."""
    return QuotaGate(InMemoryQuotaStore())


@pytest.fixture
def client(quota_gate) -> Generator[TestClient, None, None]:
    """Test client with fixed API keys and an isolated quota gate."""
    app.dependency_overrides[get_api_key_resolver] = lambda: ApiKeyResolver(API_KEYS)
    app.dependency_overrides[get_quota_gate] = lambda: quota_gate
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def pro_headers() -> dict[str, str]:
    return {"X-API-Key": "pro-key"}
