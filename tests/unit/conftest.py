"""Unit test configuration.

Unit tests should be fast and isolated - no external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from recyclehub.core.config import Settings
from recyclehub.factory import create_app


if TYPE_CHECKING:
    from fastapi import FastAPI


# Mark all tests in this directory as unit tests
pytestmark = pytest.mark.unit


@pytest.fixture
def test_settings() -> Settings:
    """Create settings for the test environment."""
    return Settings(APP_ENV="test")


@pytest.fixture
def mock_status_service() -> MagicMock:
    """Create mock status service."""
    service = MagicMock()
    service.list_statuses = AsyncMock(return_value=[])
    service.get_default_status = AsyncMock(return_value=None)
    service.get_status_for_display = AsyncMock()
    return service


@pytest.fixture
def app(test_settings: Settings, mock_status_service: MagicMock) -> FastAPI:
    """Create an app with the status service already in place."""
    application = create_app(test_settings)
    application.state.status_service = mock_status_service
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """Create a test client without running the lifespan."""
    return TestClient(app)
