"""
Test configuration and fixtures for the Catalog Match backend test suite.

Provides:
- A fresh Workspace per test, injected through the get_workspace dependency
- FastAPI TestClient fixture
"""
import pytest
from fastapi.testclient import TestClient

from sourcing.catalog_match import Workspace


@pytest.fixture()
def workspace():
    """Provide an empty workspace for each test."""
    return Workspace()


@pytest.fixture()
def client(workspace):
    """Provide a FastAPI TestClient bound to the per-test workspace."""
    from backend.api.main import app
    from backend.core.session import get_workspace

    app.dependency_overrides[get_workspace] = lambda: workspace
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
