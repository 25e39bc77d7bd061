"""OAuth 1.0a Consumer Client.

This package provides the client side of the OAuth 1.0 / 1.0a three-legged
authorization protocol. It obtains request tokens, builds the user
authorization URL, exchanges approved request tokens for access tokens and
signs requests to protected resources.

Key features:
- RFC 3986 percent encoding and signature base strings
- HMAC-SHA1, PLAINTEXT and RSA-SHA1 signature methods, with a registry for more
- Request token, user authorization and access token operations
- Per-request credentials and Authorization header formatting
- An httpx auth class that signs outgoing requests

Example usage:
    >>> import oauth1_client
    >>> consumer = oauth1_client.Consumer(
    ...     "key", "secret",
    ...     request_token_uri="https://api.example.com/oauth/request_token",
    ...     access_token_uri="https://api.example.com/oauth/access_token",
    ...     authorize_uri="https://api.example.com/oauth/authorize",
    ... )
    >>> token, auth_url = oauth1_client.get_authorization_url(consumer, "oob")
"""

import logging
from .utils import rand_str, percent_encode
from .signature import (
    HMAC_SHA1,
    PLAINTEXT,
    RSA_SHA1,
    SignatureMethod,
    base_string,
    encode_params,
    get_signature_method,
    register_signature_method,
    sign,
)
from .oauth import (
    Consumer,
    Token,
    oauth_params,
    request_token,
    request_token_content,
    user_authorization_uri,
    access_token,
    access_token_content,
    credentials,
    authorization_header,
    success_content,
    parse_form_encoded,
)
from .exceptions import (
    Oauth1Error,
    ProtocolError,
    UnsupportedSignatureMethod,
    MalformedResponseBody,
    SecurityError,
    InvalidParameterError,
)
from .authn import get_authorization_url, complete_authorization, OAuth1Auth

# Set up null handler to prevent "No handler found" warnings
logging.getLogger(__name__).addHandler(logging.NullHandler())

# Version information
__version__ = "0.1.0"


__all__ = [
    # Core functionality
    "rand_str",
    "percent_encode",
    "base_string",
    "encode_params",
    "sign",
    "SignatureMethod",
    "register_signature_method",
    "get_signature_method",
    "HMAC_SHA1",
    "PLAINTEXT",
    "RSA_SHA1",
    "Consumer",
    "Token",
    "oauth_params",
    "request_token",
    "request_token_content",
    "user_authorization_uri",
    "access_token",
    "access_token_content",
    "credentials",
    "authorization_header",
    "success_content",
    "parse_form_encoded",
    "get_authorization_url",
    "complete_authorization",
    "OAuth1Auth",
    # Exceptions
    "Oauth1Error",
    "ProtocolError",
    "UnsupportedSignatureMethod",
    "MalformedResponseBody",
    "SecurityError",
    "InvalidParameterError",
]
