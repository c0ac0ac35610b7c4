"""
Global test configuration and shared fixtures.
"""

from contextlib import suppress
import logging
import os
from unittest.mock import patch

import pytest

from srs_assist.client import RateLimitConfig, RateLimiter
from srs_assist.config import resolve_config
from tests.helpers import FakeClock


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent .env files from leaking into tests.

    Opt-in escape hatch: mark a test with @pytest.mark.allow_dotenv.
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "srs_assist.config.env_loader.load_dotenv",
            lambda *_args, **_kwargs: False,
        )


@pytest.fixture(autouse=True)
def isolate_env(request, monkeypatch):
    """Ensure a clean GEMINI_* / SRS_ASSIST_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return

    for key in list(os.environ.keys()):
        if key.startswith(("GEMINI_", "SRS_ASSIST_")):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)


def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "integration: Component integration tests with mocked APIs",
        "allow_dotenv: Permit python-dotenv to load files in this test",
        "allow_env_pollution: Keep the caller's environment unchanged",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---


@pytest.fixture
def mock_api_key():
    """Provide a consistent, fake API key for tests."""
    return "test_api_key_12345_67890_abcdef_ghijkl"


@pytest.fixture
def mock_env(mock_api_key, monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", mock_api_key)


@pytest.fixture
def resolved_config(mock_api_key):
    """Resolved configuration with a fake key and a roomy rate window."""
    return resolve_config(api_key=mock_api_key, rate_limit_max_requests=100)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def make_limiter(fake_clock):
    def _make(max_requests: int = 30, window_seconds: float = 60):
        return RateLimiter(
            RateLimitConfig(max_requests=max_requests, window_seconds=window_seconds),
            clock=fake_clock,
        )

    return _make


@pytest.fixture
def mocked_internal_genai_client():
    """
    Mocks the ``google.genai.Client`` that GeminiClient instantiates.

    Tests drive ``models.generate_content`` through ``return_value`` or
    ``side_effect``; nothing touches the network.
    """
    with patch("srs_assist.gemini_client.genai.Client") as mock_genai:
        yield mock_genai.return_value
