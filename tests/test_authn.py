"""Tests for the authentication flow helpers."""

import re
import urllib.parse
from unittest.mock import patch

import httpx
import pytest
from oauth1_client.authn import (
    OAuth1Auth,
    complete_authorization,
    get_authorization_url,
)
from oauth1_client.oauth import Token
from oauth1_client.signature import base_string, encode_params, sign
from oauth1_client.exceptions import InvalidParameterError, ProtocolError


def _header_params(header):
    assert header.startswith("OAuth ")
    pairs = re.findall(r'([a-z_]+)="([^"]*)"', header[len("OAuth "):])
    return {k: urllib.parse.unquote(v) for k, v in pairs}


@patch("oauth1_client.authn.request_token")
def test_get_authorization_url(mock_request_token, consumer):
    """Test fetching a request token and building the URL."""
    mock_request_token.return_value = Token("rt", "rts")

    token, url = get_authorization_url(consumer, "https://app.example.com/cb")

    assert token == Token("rt", "rts")
    assert url == (
        "https://api.example.com/oauth/authorize?oauth_token=rt"
        "&oauth_callback=https%3A%2F%2Fapp.example.com%2Fcb"
    )
    mock_request_token.assert_called_once_with(
        consumer, "https://app.example.com/cb", client=None
    )


@patch("oauth1_client.authn.request_token")
def test_get_authorization_url_out_of_band(mock_request_token, consumer):
    """Test that 'oob' is not passed on to the authorization URL."""
    mock_request_token.return_value = Token("rt", "rts")

    _, url = get_authorization_url(consumer, "oob")

    assert url == "https://api.example.com/oauth/authorize?oauth_token=rt"


@patch("oauth1_client.authn.request_token")
def test_get_authorization_url_error(mock_request_token, consumer):
    """Test that request token failures propagate."""
    mock_request_token.side_effect = ProtocolError(401)

    with pytest.raises(ProtocolError):
        get_authorization_url(consumer)


@patch("oauth1_client.authn.access_token")
def test_complete_authorization(mock_access_token, consumer):
    """Test that the request token secret is used for the exchange."""
    mock_access_token.return_value = Token("at", "ats")

    result = complete_authorization(consumer, Token("rt", "rts"), "1234")

    assert result == Token("at", "ats")
    mock_access_token.assert_called_once_with(
        consumer, "rt", "1234", request_token_secret="rts", client=None
    )


def _signing_client(auth, captured):
    def handler(request):
        captured.append(request)
        return httpx.Response(200, json={"ok": True})

    return httpx.Client(auth=auth, transport=httpx.MockTransport(handler))


def _verify_like_provider(consumer, request, url, token_secret, request_params=None):
    """Rebuild the signature from the decoded header the way a provider does."""
    params = _header_params(request.headers["Authorization"])
    signature = params.pop("oauth_signature")
    params.pop("realm", None)
    params.update(request_params or {})
    expected = sign(
        consumer, base_string(request.method, url, encode_params(params)), token_secret
    )
    assert signature == expected
    return params


def test_oauth1_auth_signs_query_parameters(consumer, fixed_clock, fixed_rng):
    """Test that query parameters are covered by the signature."""
    captured = []
    auth = OAuth1Auth(
        consumer, "tok", "tsec", realm="Example", clock=fixed_clock, rng=fixed_rng
    )

    with _signing_client(auth, captured) as client:
        response = client.get(
            "https://api.example.com/1/statuses", params={"q": "a b", "count": 5}
        )

    assert response.status_code == 200
    header = _header_params(captured[0].headers["Authorization"])
    assert header["realm"] == "Example"
    assert header["oauth_timestamp"] == "1300000000"

    params = _verify_like_provider(
        consumer,
        captured[0],
        "https://api.example.com/1/statuses",
        "tsec",
        {"q": "a b", "count": "5"},
    )
    assert params["oauth_token"] == "tok"


def test_oauth1_auth_token_with_reserved_characters(consumer, fixed_clock, fixed_rng):
    """Test that tokens containing reserved characters are encoded before signing."""
    captured = []
    auth = OAuth1Auth(consumer, "A=tok/en+1", "tsec", clock=fixed_clock, rng=fixed_rng)

    with _signing_client(auth, captured) as client:
        client.get("https://api.example.com/1/me", params={"fields": "a,b"})

    assert 'oauth_token="A%3Dtok%2Fen%2B1"' in captured[0].headers["Authorization"]
    params = _verify_like_provider(
        consumer,
        captured[0],
        "https://api.example.com/1/me",
        "tsec",
        {"fields": "a,b"},
    )
    assert params["oauth_token"] == "A=tok/en+1"


def test_oauth1_auth_signs_form_body(consumer, fixed_clock, fixed_rng):
    """Test that form-encoded body parameters are covered by the signature."""
    captured = []
    auth = OAuth1Auth(consumer, "tok", "tsec", clock=fixed_clock, rng=fixed_rng)

    with _signing_client(auth, captured) as client:
        client.post("https://api.example.com/1/update", data={"status": "hi there"})

    assert "realm" not in _header_params(captured[0].headers["Authorization"])
    _verify_like_provider(
        consumer,
        captured[0],
        "https://api.example.com/1/update",
        "tsec",
        {"status": "hi there"},
    )


def test_oauth1_auth_ignores_json_body(consumer, fixed_clock, fixed_rng):
    """Test that non-form bodies are not signed."""
    captured = []
    auth = OAuth1Auth(consumer, "tok", "tsec", clock=fixed_clock, rng=fixed_rng)

    with _signing_client(auth, captured) as client:
        client.post("https://api.example.com/1/update", json={"status": "hi"})

    _verify_like_provider(
        consumer, captured[0], "https://api.example.com/1/update", "tsec"
    )


def test_oauth1_auth_rejects_repeated_parameters(consumer):
    """Test that repeated parameter names are refused rather than mis-signed."""
    captured = []
    auth = OAuth1Auth(consumer, "tok", "tsec")

    with _signing_client(auth, captured) as client:
        with pytest.raises(InvalidParameterError):
            client.get("https://api.example.com/1/items", params=[("id", "1"), ("id", "2")])

    assert captured == []
