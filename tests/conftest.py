"""Pytest configuration and fixtures."""

import os

import httpx
import pytest

# Set test environment variables before importing app modules
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("CHAT_BACKEND", "rest")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so each test sees its own environment."""
    from config.settings import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def gemini_ok_body():
    return {
        "candidates": [
            {"content": {"role": "model", "parts": [{"text": "Hello from Gemini"}]}}
        ]
    }


@pytest.fixture
def mock_transport():
    """Build an httpx.MockTransport that records every request it sees."""

    def factory(handler):
        seen = []

        def record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)

        transport = httpx.MockTransport(record)
        transport.requests = seen
        return transport

    return factory
