"""Unit tests for application factory.

Tests cover:
- create_app function
- Middleware setup
- Router setup
"""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recyclehub.core.config import Settings
from recyclehub.core.middleware import LoggingMiddleware, RequestIDMiddleware
from recyclehub.factory import create_app


pytestmark = pytest.mark.unit


def _middleware_classes(app: FastAPI) -> list[type]:
    return [m.cls for m in app.user_middleware]


class TestCreateApp:
    """Tests for create_app function."""

    def test_creates_fastapi_instance(self, test_settings: Settings) -> None:
        """Should create a FastAPI instance."""
        app = create_app(test_settings)

        assert isinstance(app, FastAPI)
        assert app.title == test_settings.app.name
        assert app.version == test_settings.app.version

    def test_stores_settings_and_empty_service(self, test_settings: Settings) -> None:
        """Should store settings and leave the status service to the lifespan."""
        app = create_app(test_settings)

        assert app.state.settings is test_settings
        assert app.state.status_service is None

    def test_disables_docs_in_production(self) -> None:
        """Should disable docs endpoints in production."""
        app = create_app(Settings(APP_ENV="production"))

        assert app.docs_url is None
        assert app.openapi_url is None

    def test_enables_docs_outside_production(self, test_settings: Settings) -> None:
        """Should expose docs outside production."""
        assert create_app(test_settings).docs_url == "/docs"


class TestSetupMiddleware:
    """Tests for middleware setup."""

    def test_request_id_is_outermost(self, test_settings: Settings) -> None:
        """Should add the request ID middleware last so it runs first."""
        classes = _middleware_classes(create_app(test_settings))

        assert classes[0] is RequestIDMiddleware
        assert classes[1] is LoggingMiddleware

    def test_cors_only_when_configured(self) -> None:
        """Should add CORS only when origins are configured."""
        without = create_app(Settings(APP_ENV="test"))
        with_cors = create_app(
            Settings(APP_ENV="test", api={"cors_origins": "https://recyclehub.test"})
        )

        assert CORSMiddleware not in _middleware_classes(without)
        assert CORSMiddleware in _middleware_classes(with_cors)


class TestSetupRouters:
    """Tests for router setup."""

    def test_mounts_v1_routes(self, test_settings: Settings) -> None:
        """Should mount every endpoint under the API prefix."""
        paths = {route.path for route in create_app(test_settings).routes}

        assert "/api/v1/health" in paths
        assert "/api/v1/ready" in paths
        assert "/api/v1/statuses/{kind}" in paths
        assert "/api/v1/statuses/{kind}/default" in paths
        assert "/api/v1/statuses/{kind}/{name}" in paths
        assert "/api/v1/utilities/slugs" in paths
        assert "/api/v1/utilities/filenames" in paths
        assert "/" in paths
