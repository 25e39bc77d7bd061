"""Signature base strings and signature methods for OAuth 1.0a.

Signature methods live in a registry keyed by their provider-facing name
(``HMAC-SHA1``, ``PLAINTEXT``, ``RSA-SHA1``). A consumer names the method it
uses and ``sign`` dispatches on that name, so adding a method only means
registering another ``SignatureMethod`` subclass.
"""

import base64
import hashlib
import hmac
import logging
from typing import Any, Callable, Dict, Mapping, Type

from authlib.oauth1.rfc5849 import rsa

from .exceptions import UnsupportedSignatureMethod
from .utils import percent_encode

logger = logging.getLogger(__name__)

HMAC_SHA1 = "HMAC-SHA1"
PLAINTEXT = "PLAINTEXT"
RSA_SHA1 = "RSA-SHA1"

_SIGNATURE_METHODS: Dict[str, "SignatureMethod"] = {}


def base_string(method: str, base_url: str, params: Mapping[str, Any]) -> str:
    """
    Build the signature base string for a request.

    Parameters are sorted by name and rendered as ``name=value`` with their
    values as given; the joined parameter string is then percent-encoded as a
    whole.

    Args:
        method: HTTP method, any case
        base_url: Request URL without query string
        params: OAuth and request parameters to sign

    Returns:
        The string fed to the signature method
    """
    normalized = "&".join(f"{name}={params[name]}" for name in sorted(params))
    result = "&".join(
        [method.upper(), percent_encode(base_url), percent_encode(normalized)]
    )
    logger.debug("Signature base string: %s", result)
    return result


def encode_params(params: Mapping[str, Any]) -> Dict[str, str]:
    """Percent-encode parameter names and values ahead of ``base_string``."""
    return {percent_encode(name): percent_encode(value) for name, value in params.items()}


class SignatureMethod:
    """Base class for signature methods."""

    name: str = ""

    def sign(self, consumer: Any, base_string: str, token_secret: str | None = None) -> str:
        raise NotImplementedError


def register_signature_method(
    name: str,
) -> Callable[[Type[SignatureMethod]], Type[SignatureMethod]]:
    """Class decorator adding a signature method to the registry."""

    def decorator(cls: Type[SignatureMethod]) -> Type[SignatureMethod]:
        cls.name = name.upper()
        _SIGNATURE_METHODS[cls.name] = cls()
        logger.debug("Registered signature method %s", cls.name)
        return cls

    return decorator


def get_signature_method(name: str) -> SignatureMethod:
    """
    Look up a registered signature method.

    Args:
        name: Method name, case-insensitive

    Returns:
        The signature method instance

    Raises:
        UnsupportedSignatureMethod: If nothing is registered under the name
    """
    method = _SIGNATURE_METHODS.get(str(name or "").upper())
    if method is None:
        error_msg = f"Unsupported signature method: {name!r}"
        logger.error(error_msg)
        raise UnsupportedSignatureMethod(error_msg)
    return method


def supported_signature_methods() -> list[str]:
    return sorted(_SIGNATURE_METHODS)


def sign(consumer: Any, base_string: str, token_secret: str | None = None) -> str:
    """
    Sign a base string with the consumer's signature method.

    Args:
        consumer: The consumer whose secret and method are used
        base_string: The signature base string
        token_secret: Secret of the request or access token, if any

    Returns:
        The ``oauth_signature`` value

    Raises:
        UnsupportedSignatureMethod: If the consumer's method is not registered
    """
    method = get_signature_method(consumer.signature_method)
    return method.sign(consumer, base_string, token_secret)


@register_signature_method(HMAC_SHA1)
class HmacSha1SignatureMethod(SignatureMethod):
    def sign(self, consumer, base_string, token_secret=None):
        key = f"{consumer.secret}&{token_secret or ''}"
        digest = hmac.new(
            key.encode("utf-8"), base_string.encode("utf-8"), hashlib.sha1
        ).digest()
        return base64.b64encode(digest).decode("ascii")


@register_signature_method(PLAINTEXT)
class PlaintextSignatureMethod(SignatureMethod):
    def sign(self, consumer, base_string, token_secret=None):
        return f"{percent_encode(consumer.secret)}&{percent_encode(token_secret or '')}"


@register_signature_method(RSA_SHA1)
class RsaSha1SignatureMethod(SignatureMethod):
    """RSA-SHA1 with the consumer secret holding a PEM private key.

    The token secret takes no part in RSA signatures.
    """

    def sign(self, consumer, base_string, token_secret=None):
        signature = rsa.sign_sha1(base_string.encode("utf-8"), consumer.secret)
        return base64.b64encode(signature).decode("ascii")
