"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Tests run against the real YAML files under config/settings/, located
through the .project_root marker, so pytest must be started from the
project root.
"""

from collections.abc import Generator

import pytest

from intake.backend.core.config import get_app_config
from intake.backend.forms import registry as registry_module


@pytest.fixture(autouse=True)
def _fresh_state() -> Generator[None, None, None]:
    """Reload configuration and drop mounted pages around every test."""
    get_app_config.cache_clear()
    registry_module._registry = None
    yield
    get_app_config.cache_clear()
    registry_module._registry = None


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
