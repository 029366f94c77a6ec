"""Errors raised by the FCM client.

Each send failure maps to one subclass of ``FCMError`` naming the stage
that failed. The client never retries; callers decide what to do.
"""

from typing import Optional


class FCMError(Exception):
    """Base class for all client errors."""


class SerializationError(FCMError):
    """The outbound message could not be encoded as JSON."""


class TransportError(FCMError):
    """The request could not be built or executed (includes connect timeouts)."""


class GatewayError(FCMError):
    """The gateway answered with a status other than 200.

    The body is kept as text; error bodies are not assumed to be JSON.
    """

    def __init__(self, status_code: int, reason: str, body: str):
        self.status_code = status_code
        self.reason = reason
        self.body = body
        super().__init__(f"{self.status_line}: {body}")

    @property
    def status_line(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


class DecodeError(FCMError):
    """A 200 response body did not match the response shape."""

    def __init__(self, message: str, body: Optional[str] = None):
        self.body = body
        super().__init__(message)
