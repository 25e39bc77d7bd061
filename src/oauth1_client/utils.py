"""Utility functions for OAuth 1.0a."""

import logging
import string
import urllib.parse
from typing import Any

from authlib.common.security import generate_token

from .exceptions import InvalidParameterError

logger = logging.getLogger(__name__)

NONCE_CHARS = string.digits + string.ascii_lowercase


def rand_str(length: int, rng: Any = None) -> str:
    """
    Generate a random string for use as an OAuth nonce.

    Characters are drawn with replacement from ``[0-9a-z]``.

    Args:
        length: Number of characters to generate
        rng: Optional random source exposing ``choice``; defaults to a CSPRNG

    Returns:
        The random string
    """
    if rng is None:
        return generate_token(length, chars=NONCE_CHARS)
    return "".join(rng.choice(NONCE_CHARS) for _ in range(length))


def percent_encode(value: Any) -> str:
    """
    Percent-encode a value as required by RFC 3986.

    The form encoder leaves ``*`` alone and turns spaces into ``+``, OAuth
    needs ``%2A`` and ``%20`` instead, and ``~`` must never be escaped.

    Args:
        value: The value to encode, converted with ``str()`` if needed

    Returns:
        The encoded string
    """
    return (
        urllib.parse.quote_plus(str(value), safe="")
        .replace("+", "%20")
        .replace("*", "%2A")
        .replace("%7E", "~")
    )


def build_authorize_url(authorize_uri: str, token: str, callback: str | None = None) -> str:
    """
    Build the URL where the user approves the consumer's access.

    Args:
        authorize_uri: The provider's user authorization endpoint
        token: The request token to be authorized
        callback: Optional URL the provider redirects to after approval

    Returns:
        The authorization URL with ``oauth_token`` (and ``oauth_callback``)

    Raises:
        InvalidParameterError: If the endpoint or token is missing
    """
    if not authorize_uri:
        error_msg = "Cannot build authorization URL: authorize_uri is required"
        logger.error(error_msg)
        raise InvalidParameterError(error_msg)

    if not token:
        error_msg = "Cannot build authorization URL: token is required"
        logger.error(error_msg)
        raise InvalidParameterError(error_msg)

    query = f"oauth_token={percent_encode(token)}"
    if callback:
        query += f"&oauth_callback={percent_encode(callback)}"

    if authorize_uri.endswith(("?", "&")):
        separator = ""
    elif urllib.parse.urlsplit(authorize_uri).query:
        separator = "&"
    else:
        separator = "?"
    auth_url = f"{authorize_uri}{separator}{query}"
    logger.info("Built authorization URL with encoded parameters")
    return auth_url
