"""Pytest configuration and fixtures for oauth1-client tests."""

import pytest

from oauth1_client.oauth import Consumer


@pytest.fixture
def mock_response():
    """Create a mock response object with customizable status code and body text."""

    class MockResponse:
        def __init__(self, text="", status_code=200):
            self.text = text
            self.status_code = status_code
            self.content = text.encode("utf-8")

    return MockResponse


@pytest.fixture
def consumer() -> Consumer:
    """Return an HMAC-SHA1 consumer with all three endpoints."""
    return Consumer(
        key="ck",
        secret="cs",
        request_token_uri="https://api.example.com/oauth/request_token",
        access_token_uri="https://api.example.com/oauth/access_token",
        authorize_uri="https://api.example.com/oauth/authorize",
    )


@pytest.fixture
def fixed_rng():
    """Random source that always picks the first character."""

    class FirstChoice:
        def choice(self, seq):
            return seq[0]

    return FirstChoice()


@pytest.fixture
def fixed_clock():
    """Clock pinned to a known Unix time in seconds."""
    return lambda: 1300000000.25
