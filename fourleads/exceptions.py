"""Exceptions raised by the 4leads client.

A non-2xx HTTP status is not an exception: it comes back as a normal
``Response``. These errors only cover failures to complete the exchange.
"""

from typing import Optional


class FourLeadsError(Exception):
    """Base exception for 4leads client errors."""


class ConfigurationError(FourLeadsError):
    """Raised when the client is built with an unusable key, host or option."""


class TransportError(FourLeadsError):
    """Raised when the HTTP exchange itself fails (DNS, TLS, refused, timeout)."""


class SerializationError(FourLeadsError):
    """Raised when a request body can't be encoded as JSON."""


class ResponseParseError(FourLeadsError):
    """Raised when a non-empty response body is not valid JSON."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: bytes = b''):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
