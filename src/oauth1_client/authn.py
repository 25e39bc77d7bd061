"""OAuth 1.0a authentication flow helpers.

This module strings the protocol operations together for the common
three-legged case and signs outgoing httpx requests with an access token.
"""

import logging
import time
import urllib.parse
from typing import Any, Callable, Generator, List, Tuple

import httpx

from .oauth import (
    Consumer,
    Token,
    access_token,
    authorization_header,
    oauth_params,
    request_token,
    user_authorization_uri,
)
from .exceptions import InvalidParameterError
from .signature import base_string, encode_params, sign

logger = logging.getLogger(__name__)

FORM_URLENCODED = "application/x-www-form-urlencoded"


def get_authorization_url(
    consumer: Consumer,
    callback: str | None = None,
    *,
    client: httpx.Client | None = None,
) -> Tuple[Token, str]:
    """Fetch a request token and build the URL the user must visit.

    Args:
        consumer: The consumer asking for access
        callback: Where the provider sends the user afterwards, or ``"oob"``
        client: Optional HTTP client for the token request

    Returns:
        The request token and the authorization URL

    Raises:
        Various exceptions from the oauth1_client module if any step fails
    """
    try:
        token = request_token(consumer, callback, client=client)
    except Exception as e:
        logger.error("Failed to obtain a request token for %s: %s", consumer.key, e)
        raise

    # Out-of-band callbacks are announced with the token request only
    approval_callback = callback if callback and callback != "oob" else None
    auth_url = user_authorization_uri(consumer, token.token, approval_callback)
    logger.info("Generated authorization URL for consumer %s", consumer.key)
    return token, auth_url


def complete_authorization(
    consumer: Consumer,
    token: Token,
    verifier: str | None = None,
    *,
    client: httpx.Client | None = None,
) -> Token:
    """Exchange an approved request token for an access token.

    The request token secret is folded into the signing key.
    """
    try:
        result = access_token(
            consumer,
            token.token,
            verifier,
            request_token_secret=token.secret,
            client=client,
        )
    except Exception as e:
        logger.error("Failed to exchange request token for %s: %s", consumer.key, e)
        raise

    logger.info("Completed authorization for consumer %s", consumer.key)
    return result


def _split_url(url: httpx.URL) -> Tuple[str, List[Tuple[str, str]]]:
    scheme, netloc, path, query, _ = urllib.parse.urlsplit(str(url))
    base_url = urllib.parse.urlunsplit((scheme.lower(), netloc.lower(), path, "", ""))
    return base_url, urllib.parse.parse_qsl(query, keep_blank_values=True)


class OAuth1Auth(httpx.Auth):
    """Signs httpx requests with OAuth 1.0a credentials.

    Query parameters and form-encoded body parameters are part of the
    signature; the credentials travel in the Authorization header.

    Example:
        >>> auth = OAuth1Auth(consumer, token.token, token.secret)
        >>> httpx.get("https://api.example.com/1/me", auth=auth)
    """

    requires_request_body = True

    def __init__(
        self,
        consumer: Consumer,
        token: str,
        token_secret: str,
        realm: str | None = None,
        *,
        clock: Callable[[], float] = time.time,
        rng: Any = None,
    ):
        self.consumer = consumer
        self.token = token
        self.token_secret = token_secret
        self.realm = realm
        self.clock = clock
        self.rng = rng

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        base_url, params = _split_url(request.url)

        content_type = request.headers.get("Content-Type", "")
        if content_type.split(";")[0].strip() == FORM_URLENCODED:
            body = request.content.decode("utf-8")
            params += urllib.parse.parse_qsl(body, keep_blank_values=True)

        names = [name for name, _ in params]
        if len(set(names)) != len(names):
            error_msg = f"Cannot sign repeated parameters for {base_url}: {sorted(names)}"
            logger.error(error_msg)
            raise InvalidParameterError(error_msg)

        signed = oauth_params(self.consumer, self.token, clock=self.clock, rng=self.rng)
        # Providers decode every header value and re-encode it, oauth_* included
        signature_base = base_string(
            request.method, base_url, encode_params({**dict(params), **signed})
        )
        signed["oauth_signature"] = sign(
            self.consumer, signature_base, self.token_secret
        )
        request.headers["Authorization"] = authorization_header(self.realm, signed)
        logger.debug("Signed %s request to %s", request.method, base_url)
        yield request
