"""
Pytest configuration and fixtures for employee API tests

This module provides shared fixtures for unit and integration tests.
"""
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.api.config import AppConfig
from src.employees import EmployeeService, EmployeeStore


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't require the HTTP stack"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that drive the API through the test client"
    )


# =======================
# COLLABORATOR STUBS
# =======================

class StubContentClient:
    """Stands in for ExternalContentClient without network access."""

    def __init__(self, quote: str = "Stub quote", joke: str = "Stub joke"):
        self.quote = quote
        self.joke = joke
        self.calls = 0

    def fetch_all(self) -> tuple[str, str]:
        self.calls += 1
        return self.quote, self.joke


# =======================
# SERVICE FIXTURES
# =======================

@pytest.fixture
def store() -> EmployeeStore:
    """Empty in-memory employee store"""
    return EmployeeStore()


@pytest.fixture
def content_client() -> StubContentClient:
    return StubContentClient()


@pytest.fixture
def service(store, content_client) -> EmployeeService:
    """Employee service using the bundled rules file and stubbed content"""
    return EmployeeService(store, content_client)


@pytest.fixture
def client(service) -> TestClient:
    """
    Test client for an app wired to the ``service`` fixture

    Returns:
        TestClient that returns 500 responses instead of raising
    """
    app = create_app(config=AppConfig(), service=service)
    return TestClient(app, raise_server_exceptions=False)


# =======================
# SAMPLE DATA FIXTURES
# =======================

@pytest.fixture
def valid_payload() -> Dict[str, Any]:
    """Minimal valid create payload"""
    return {
        "firstName": "Leslie",
        "lastName": "Knope",
        "hireDate": "2009-04-09",
        "role": "MANAGER",
    }


@pytest.fixture
def replace_payload(valid_payload) -> Dict[str, Any]:
    """Minimal valid replace payload (quote and joke are required on PUT)"""
    return {
        **valid_payload,
        "quote": "We need to remember what's important in life.",
        "joke": "Why did the scarecrow win an award? He was outstanding in his field.",
    }
