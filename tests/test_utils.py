"""Tests for utility functions."""

import random
import re

import pytest
from oauth1_client.utils import build_authorize_url, percent_encode, rand_str
from oauth1_client.exceptions import InvalidParameterError


def test_percent_encode_rfc3986():
    """Test the characters where RFC 3986 differs from form encoding."""
    assert percent_encode(" ") == "%20"
    assert percent_encode("~") == "~"
    assert percent_encode("*") == "%2A"
    assert percent_encode("A") == "A"
    assert percent_encode("+") == "%2B"


def test_percent_encode_reserved_and_unicode():
    """Test that reserved characters and non-ASCII text are escaped."""
    assert percent_encode("-._") == "-._"
    assert percent_encode("http://a.b/c?d=e&f") == "http%3A%2F%2Fa.b%2Fc%3Fd%3De%26f"
    assert percent_encode("é") == "%C3%A9"
    assert percent_encode(1300000000) == "1300000000"


def test_rand_str():
    """Test generating a nonce."""
    nonce = rand_str(30)
    assert len(nonce) == 30
    assert re.match(r"^[0-9a-z]{30}$", nonce)
    assert rand_str(0) == ""


def test_rand_str_with_rng():
    """Test that an injected random source makes the nonce reproducible."""
    assert rand_str(12, random.Random(7)) == rand_str(12, random.Random(7))
    assert re.match(r"^[0-9a-z]{12}$", rand_str(12, random.Random(7)))


def test_rand_str_uniqueness():
    """Test that nonces do not repeat."""
    nonces = {rand_str(30) for _ in range(10000)}
    assert len(nonces) == 10000


def test_build_authorize_url():
    """Test building an authorization URL."""
    url = build_authorize_url("https://api.example.com/oauth/authorize", "abc")
    assert url == "https://api.example.com/oauth/authorize?oauth_token=abc"


def test_build_authorize_url_with_callback():
    """Test that the callback is percent-encoded."""
    url = build_authorize_url(
        "https://api.example.com/oauth/authorize",
        "abc",
        "https://app.example.com/cb?x=1",
    )
    assert url == (
        "https://api.example.com/oauth/authorize?oauth_token=abc"
        "&oauth_callback=https%3A%2F%2Fapp.example.com%2Fcb%3Fx%3D1"
    )


def test_build_authorize_url_with_existing_query():
    """Test appending to an endpoint that already has a query string."""
    url = build_authorize_url("https://api.example.com/authorize?lang=en", "a b")
    assert url == "https://api.example.com/authorize?lang=en&oauth_token=a%20b"


def test_build_authorize_url_missing_params():
    """Test error handling for missing parameters."""
    with pytest.raises(InvalidParameterError):
        build_authorize_url("", "abc")
    with pytest.raises(InvalidParameterError):
        build_authorize_url("https://api.example.com/oauth/authorize", "")
