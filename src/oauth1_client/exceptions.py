"""Custom exceptions for the OAuth 1.0a consumer."""


class Oauth1Error(Exception):
    """Base exception for all oauth1-client errors."""


class ProtocolError(Oauth1Error):
    """A token endpoint answered with a non-success HTTP status."""

    def __init__(self, status_code: int, message: str | None = None):
        self.status_code = status_code
        super().__init__(message or f"Got non-success response {status_code}.")


class UnsupportedSignatureMethod(Oauth1Error):
    """No signer is registered for the requested signature method."""


class MalformedResponseBody(Oauth1Error):
    """A provider response could not be parsed into key=value pairs."""


class SecurityError(Oauth1Error):
    """Security-related error."""


class InvalidParameterError(Oauth1Error):
    """Invalid parameter provided to a function."""
