"""Exception types raised by the TokBox client.

WHY: Callers need to tell a rejected request (bad key, unknown archive)
apart from a network failure or a response the client could not make
sense of. One typed exception per failure kind lets them catch exactly
what they can handle.

HOW: Every exception derives from TokboxError. ApiError carries the
decoded {"message", "code"} error body; the others carry the raw body
text so the failure can be debugged without re-running the request.

RULES:
- Nothing is retried; every error reaches the immediate caller
- str(ApiError) is the remote message, matching the error body
- Raw bodies are kept verbatim, never truncated or re-encoded
"""

from __future__ import annotations

from typing import Any


class TokboxError(Exception):
    """Base class for every error raised by tokbox_client."""


class SigningError(TokboxError):
    """Raised when the bearer token claims cannot be signed."""


class TransportError(TokboxError):
    """Raised when the HTTP call itself fails (DNS, refused, timeout).

    The original httpx exception is available as __cause__.
    """


class ApiError(TokboxError):
    """Raised when the platform answers with status >= 400.

    WHY: The REST API reports business failures (invalid key, archive
    not found, session not archivable) as a JSON body with a message and
    a numeric code. Callers branch on the code.

    HOW: Built from the decoded error body; status_code is the HTTP
    status of the response, which usually equals code.

    RULES:
    - message and code always come from the response body
    - str(error) returns the message alone
    """

    def __init__(self, message: str, code: int, status_code: int | None = None) -> None:
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(message)

    def __repr__(self) -> str:
        return "ApiError(message={!r}, code={!r})".format(self.message, self.code)


class MalformedErrorBody(TokboxError):
    """Raised when an error response (status >= 400) is not a JSON error object."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__("error response {} has malformed body: {}".format(status_code, body))


class DecodeError(TokboxError):
    """Raised when a successful response does not match the expected JSON shape."""

    def __init__(self, body: str, reason: str | None = None) -> None:
        self.body = body
        self.reason = reason
        message = "cannot decode response body: {}".format(body)
        if reason:
            message = "{} ({})".format(message, reason)
        super().__init__(message)


class UnexpectedResponseShape(TokboxError):
    """Raised when valid JSON breaks a documented invariant of the endpoint."""

    def __init__(self, message: str, payload: Any = None) -> None:
        self.payload = payload
        super().__init__(message)
