"""
Shared test fixtures for the emolamp-server test suite.

Every fixture builds a fresh application context so tests never share
store contents.
"""

import pytest
from fastapi.testclient import TestClient

from emolamp_server.app import create_app
from emolamp_server.config import Settings
from emolamp_server.services import build_context
from factories import UTC


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

@pytest.fixture
def settings():
    """Settings pinned to UTC with both API surfaces enabled."""
    return Settings(mode="all", timezone="UTC", enable_docs=False)


@pytest.fixture
def context(settings):
    return build_context(settings)


@pytest.fixture
def app(settings, context):
    return create_app(settings, context)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def tz():
    return UTC
