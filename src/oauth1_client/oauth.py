"""OAuth 1.0a consumer protocol operations.

Covers the three legs of the flow (request token, user authorization,
access token) and the per-request credentials used to call protected
resources once an access token is held.
"""

import logging
import time
import urllib.parse
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping, NamedTuple

import httpx

from .exceptions import (
    InvalidParameterError,
    MalformedResponseBody,
    ProtocolError,
)
from .security import create_hardened_client, valid_url
from .signature import (
    HMAC_SHA1,
    base_string,
    encode_params,
    get_signature_method,
    sign,
)
from .utils import build_authorize_url, percent_encode, rand_str

logger = logging.getLogger(__name__)

OAUTH_VERSION = "1.0"
NONCE_LENGTH = 30


@dataclass(frozen=True)
class Consumer:
    """An application registered with an OAuth 1.0a service provider."""

    key: str
    secret: str = field(repr=False)
    request_token_uri: str = ""
    access_token_uri: str = ""
    authorize_uri: str = ""
    signature_method: str = HMAC_SHA1

    def __post_init__(self):
        """Validate required parameters after initialization."""
        if not self.key:
            raise InvalidParameterError("key is required")
        if self.secret is None:
            raise InvalidParameterError("secret is required")


class Token(NamedTuple):
    """A request token or access token with its secret."""

    token: str
    secret: str

    @classmethod
    def from_content(cls, content: Mapping[str, str]) -> "Token":
        """
        Extract the token pair from a decoded token endpoint response.

        Raises:
            MalformedResponseBody: If either field is missing
        """
        try:
            return cls(content["oauth_token"], content["oauth_token_secret"])
        except KeyError as e:
            error_msg = f"Token response is missing {e.args[0]}"
            logger.error(error_msg)
            raise MalformedResponseBody(error_msg) from e


def oauth_params(
    consumer: Consumer,
    token: str | None = None,
    verifier: str | None = None,
    *,
    callback: str | None = None,
    clock: Callable[[], float] = time.time,
    rng: Any = None,
) -> Dict[str, str]:
    """
    Build the ``oauth_*`` parameters for a request.

    ``oauth_signature`` is not included; callers sign these parameters and
    add it themselves.

    Args:
        consumer: The consumer making the request
        token: Request or access token, if any
        verifier: Verifier returned by the provider after user approval
        callback: Callback URL announced when requesting a token
        clock: Source of the current time in seconds
        rng: Random source for the nonce

    Returns:
        The unsigned OAuth parameters

    Raises:
        UnsupportedSignatureMethod: If the consumer's method is not registered
    """
    params = {
        "oauth_consumer_key": consumer.key,
        "oauth_signature_method": get_signature_method(consumer.signature_method).name,
        "oauth_timestamp": str(int(clock())),
        "oauth_nonce": rand_str(NONCE_LENGTH, rng),
        "oauth_version": OAUTH_VERSION,
    }
    if token:
        params["oauth_token"] = token
    if verifier:
        params["oauth_verifier"] = verifier
    if callback:
        params["oauth_callback"] = callback
    return params


def parse_form_encoded(body: str) -> Dict[str, str]:
    """
    Decode an ``&``-separated ``key=value`` response body.

    Args:
        body: The response text

    Returns:
        The decoded parameters; empty for an empty body

    Raises:
        MalformedResponseBody: If a pair has no ``=``
    """
    if not body or not body.strip():
        return {}

    content = {}
    for pair in body.strip().split("&"):
        if not pair:
            continue
        if "=" not in pair:
            error_msg = f"Malformed key=value pair in response body: {pair!r}"
            logger.error(error_msg)
            raise MalformedResponseBody(error_msg)
        key, value = pair.split("=", 1)
        content[urllib.parse.unquote_plus(key)] = urllib.parse.unquote_plus(value)
    return content


def success_content(response: httpx.Response) -> Dict[str, str]:
    """
    Check a token endpoint response and decode its body.

    Args:
        response: The HTTP response

    Returns:
        The decoded form-encoded parameters

    Raises:
        ProtocolError: If the status code is outside [200, 300)
        MalformedResponseBody: If the body cannot be decoded
    """
    status_code = response.status_code
    if status_code < 200 or status_code >= 300:
        logger.error("Got non-success response %s: %s", status_code, response.text)
        raise ProtocolError(status_code)
    return parse_form_encoded(response.text)


def _post_for_content(
    url: str, params: Dict[str, str], client: httpx.Client | None
) -> Dict[str, str]:
    valid_url(url)

    logger.info("Sending token request to: %s", url)
    if client is not None:
        response = client.post(url, data=params)
    else:
        with create_hardened_client() as hardened_client:
            response = hardened_client.post(url, data=params)

    return success_content(response)


def request_token_content(
    consumer: Consumer,
    callback: str | None = None,
    *,
    client: httpx.Client | None = None,
    clock: Callable[[], float] = time.time,
    rng: Any = None,
) -> Dict[str, str]:
    """
    Fetch a request token and return every parameter the provider sent.

    Raises:
        InvalidParameterError: If the consumer has no request token URI
        ProtocolError: If the provider answers with a non-success status
    """
    if not consumer.request_token_uri:
        error_msg = "Cannot fetch request token: request_token_uri is required"
        logger.error(error_msg)
        raise InvalidParameterError(error_msg)

    params = oauth_params(consumer, callback=callback, clock=clock, rng=rng)
    signature_base = base_string(
        "POST", consumer.request_token_uri, encode_params(params)
    )
    params["oauth_signature"] = sign(consumer, signature_base)

    content = _post_for_content(consumer.request_token_uri, params, client)
    logger.info("Obtained request token")
    return content


def request_token(
    consumer: Consumer,
    callback: str | None = None,
    *,
    client: httpx.Client | None = None,
    clock: Callable[[], float] = time.time,
    rng: Any = None,
) -> Token:
    """
    Fetch a request token for the consumer.

    Args:
        consumer: The consumer to fetch a token for
        callback: Optional callback URL (``oauth_callback``); providers that
            require one accept ``"oob"`` for out-of-band verification
        client: HTTP client to use; a hardened client is created if omitted
        clock: Source of the current time in seconds
        rng: Random source for the nonce

    Returns:
        The request token and its secret

    Raises:
        ProtocolError: If the provider answers with a non-success status
        MalformedResponseBody: If the response lacks the token pair
        SecurityError: If the endpoint URL is rejected
    """
    return Token.from_content(
        request_token_content(consumer, callback, client=client, clock=clock, rng=rng)
    )


def user_authorization_uri(
    consumer: Consumer, token: str, callback: str | None = None
) -> str:
    """
    Build the URI where the user approves the consumer's access to their account.

    Args:
        consumer: The consumer asking for access
        token: The request token to authorize
        callback: Optional URL the provider redirects to afterwards

    Returns:
        The authorization URI
    """
    return build_authorize_url(consumer.authorize_uri, token, callback)


def access_token_content(
    consumer: Consumer,
    request_token: str,
    verifier: str | None = None,
    *,
    request_token_secret: str | None = None,
    client: httpx.Client | None = None,
    clock: Callable[[], float] = time.time,
    rng: Any = None,
) -> Dict[str, str]:
    """
    Exchange a request token and return every parameter the provider sent.

    Raises:
        InvalidParameterError: If the consumer has no access token URI
        ProtocolError: If the provider answers with a non-success status
    """
    if not consumer.access_token_uri:
        error_msg = "Cannot fetch access token: access_token_uri is required"
        logger.error(error_msg)
        raise InvalidParameterError(error_msg)

    params = oauth_params(consumer, request_token, verifier, clock=clock, rng=rng)
    params["oauth_signature"] = sign(
        consumer,
        base_string("POST", consumer.access_token_uri, encode_params(params)),
        request_token_secret,
    )

    content = _post_for_content(consumer.access_token_uri, params, client)
    logger.info("Obtained access token")
    return content


def access_token(
    consumer: Consumer,
    request_token: str,
    verifier: str | None = None,
    *,
    request_token_secret: str | None = None,
    client: httpx.Client | None = None,
    clock: Callable[[], float] = time.time,
    rng: Any = None,
) -> Token:
    """
    Exchange an authorized request token for an access token.

    Without a verifier this follows OAuth 1.0. With one, the verifier the
    provider handed to the user (or to the callback) is sent along as per
    OAuth 1.0a, which also covers PIN based flows.

    Args:
        consumer: The consumer the request token was issued to
        request_token: The authorized request token
        verifier: Optional ``oauth_verifier``
        request_token_secret: Request token secret to include in the signing key
        client: HTTP client to use; a hardened client is created if omitted
        clock: Source of the current time in seconds
        rng: Random source for the nonce

    Returns:
        The access token and its secret

    Raises:
        ProtocolError: If the provider answers with a non-success status
        MalformedResponseBody: If the response lacks the token pair
        SecurityError: If the endpoint URL is rejected
    """
    return Token.from_content(
        access_token_content(
            consumer,
            request_token,
            verifier,
            request_token_secret=request_token_secret,
            client=client,
            clock=clock,
            rng=rng,
        )
    )


def credentials(
    consumer: Consumer,
    token: str,
    token_secret: str,
    method: str,
    uri: str,
    request_params: Mapping[str, Any] | None = None,
    *,
    clock: Callable[[], float] = time.time,
    rng: Any = None,
) -> Dict[str, str]:
    """
    Return the credentials needed to access a protected resource.

    The returned parameters go into the Authorization header (see
    ``authorization_header``) or onto the request as query parameters. The
    request parameters are signed but not included in the result.

    Parameter values enter the base string as given, so request parameters
    must already be percent-encoded (see ``signature.encode_params``).

    Args:
        consumer: The consumer making the request
        token: Access token
        token_secret: Access token secret
        method: HTTP method of the request
        uri: Request URI without query string
        request_params: Query or form parameters sent with the request
        clock: Source of the current time in seconds
        rng: Random source for the nonce

    Returns:
        The ``oauth_*`` parameters including ``oauth_signature``
    """
    unsigned_oauth_params = oauth_params(consumer, token, clock=clock, rng=rng)
    unsigned_params = {**(request_params or {}), **unsigned_oauth_params}

    signed = dict(unsigned_oauth_params)
    signed["oauth_signature"] = sign(
        consumer, base_string(method, uri, unsigned_params), token_secret
    )
    return signed


def authorization_header(realm: str | None, credentials: Mapping[str, str]) -> str:
    """
    Format credentials for the Authorization HTTP header.

    Args:
        realm: Protection realm, omitted when None
        credentials: Parameters returned by ``credentials``

    Returns:
        The header value, e.g. ``OAuth realm="x",oauth_consumer_key="..."``

    Raises:
        InvalidParameterError: If the realm cannot be a quoted-string
    """
    entries = []
    if realm is not None:
        if any(char in realm for char in '"\\\r\n'):
            error_msg = f"Realm cannot contain quotes, backslashes or newlines: {realm!r}"
            logger.error(error_msg)
            raise InvalidParameterError(error_msg)
        entries.append(f'realm="{realm}"')
    entries.extend(
        f'{key}="{percent_encode(value)}"'
        for key, value in credentials.items()
        if key != "realm"
    )
    return "OAuth " + ",".join(entries)
