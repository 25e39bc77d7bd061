"""Security functions for OAuth 1.0a endpoints."""

import logging
from urllib.parse import urlparse

import httpx
import validators

from .exceptions import SecurityError

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = {"http", "https"}


def create_hardened_client(timeout_seconds: int = 30) -> httpx.Client:
    """Create a hardened HTTP client with security settings and timeouts.

    httpx never sends ``Expect: 100-continue``, which some request token
    endpoints refuse.

    Args:
        timeout_seconds: Request timeout in seconds

    Returns:
        Configured httpx.Client instance
    """
    return httpx.Client(
        timeout=httpx.Timeout(
            connect=10.0,  # Time to establish connection
            read=timeout_seconds,  # Time to read response
            write=10.0,  # Time to send request
            pool=5.0,  # Time to get connection from pool
        ),
        limits=httpx.Limits(
            max_keepalive_connections=5, max_connections=10, keepalive_expiry=30.0
        ),
        follow_redirects=False,  # Don't follow redirects automatically for security
        verify=True,  # Verify SSL certificates
    )


def validate_scheme(scheme: str) -> bool:
    return scheme in ALLOWED_SCHEMES


def valid_url(url: str) -> None:
    """
    Validate that a token endpoint URL is safe to send credentials to.

    Checks that the value is a well formed URL, that it uses http or https,
    and that it carries no embedded username or password.

    Args:
        url: The URL to validate

    Raises:
        SecurityError: If the URL fails any check
    """
    if not url or not validators.url(
        url, simple_host=True, validate_scheme=validate_scheme
    ):
        error_msg = f"Not a valid endpoint URL: {url!r}"
        logger.error(error_msg)
        raise SecurityError(error_msg)

    url_parts = urlparse(url)
    if url_parts.username or url_parts.password:
        error_msg = f"Endpoint URL must not embed credentials: {url_parts.hostname}"
        logger.error(error_msg)
        raise SecurityError(error_msg)
