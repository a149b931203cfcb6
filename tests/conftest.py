"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from flashlearn.auth import (  # noqa: E402
    AuthService,
    MemoryStorage,
    PersistenceBridge,
    create_user_store,
)


DEMO_EMAIL = "demo@flashlearn.ai"
DEMO_PASSWORD = "demo123"
DEMO_UID = "demo-user-123"


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark based on test file location
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


class RecordingSleep:
    """Stand-in for asyncio.sleep that returns immediately and records each delay."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def fake_sleep():
    return RecordingSleep()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def user_store():
    """Store seeded with the demo account."""
    return create_user_store(DEMO_EMAIL, DEMO_PASSWORD, DEMO_UID)


@pytest.fixture
def auth_service(user_store, storage, fake_sleep):
    """AuthService over in-memory storage with no real waiting."""
    return AuthService(
        store=user_store,
        bridge=PersistenceBridge(storage),
        sleep=fake_sleep,
    )
