"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- HTTP clients
- Mock settings/configuration
- Sample snapshot data
- Temporary files
"""

import os
from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
import structlog
from httpx import ASGITransport, AsyncClient

from mhtml_snapshot.api.app import app
from mhtml_snapshot.config import Settings
from .fixtures.snapshots import SAMPLE_SNAPSHOTS


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """
    Create async HTTP client for testing FastAPI endpoints.

    Yields:
        AsyncClient instance
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mock_settings() -> Settings:
    """Settings instance with test configuration."""
    return Settings(
        max_snapshot_size_mb=1,
        include_part_data=False,
        log_level="INFO",
        log_json=False,
    )


@pytest.fixture
def simple_snapshot() -> bytes:
    """Single HTML part snapshot."""
    return SAMPLE_SNAPSHOTS["simple"]


@pytest.fixture
def browser_snapshot() -> bytes:
    """
    Browser-style snapshot with a quoted-printable page and a base64 image.

    Returns:
        bytes of a two-part snapshot
    """
    return SAMPLE_SNAPSHOTS["browser"]


@pytest.fixture
def malformed_snapshot() -> bytes:
    """Snapshot whose second part has an unparsable header block."""
    return SAMPLE_SNAPSHOTS["malformed_part_header"]


@pytest.fixture
def tmp_snapshot_file(tmp_path) -> Generator[str, None, None]:
    """
    Create temporary .mhtml file for file-based tests.

    Yields:
        Path to temporary .mhtml file
    """
    path = tmp_path / "page.mhtml"
    path.write_bytes(SAMPLE_SNAPSHOTS["browser"])
    yield str(path)


@pytest.fixture(autouse=True)
def reset_env_vars():
    """
    Reset environment variables before each test.

    This prevents test pollution from env var changes.
    """
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def reset_structlog():
    """
    Restore structlog defaults after each test.

    Tests that call setup_logging() must not leak configuration.
    """
    yield
    structlog.reset_defaults()


def pytest_configure(config):
    """
    Register custom markers.
    """
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (API, end-to-end)"
    )
