"""Exception hierarchy for ovhapi.

All exceptions inherit from :class:`OvhError`, which carries a ``kind``
(:class:`ErrorKind`) so callers can branch on the failure class instead of
matching message strings, and an ``exit_code`` taken from
:mod:`ovhapi.exit_codes` for the CLI.

Subclass hierarchy::

    OvhError
    +-- ConfigError            (configuration,  exit 3)
    +-- EncodingError          (encoding,       exit 7)
    +-- TransportError         (transport,      exit 6)
    |   +-- RequestTimeoutError
    +-- APIError               (remote,         exit 4)
    +-- UnexpectedStatusError  (remote_opaque,  exit 5)

Nothing in the library retries or swallows these: every one of them reaches
the immediate caller of :meth:`~ovhapi.client.Client.call` or
:meth:`~ovhapi.client.Client.create`.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from ovhapi.exit_codes import (
    EXIT_CONFIG_ERROR,
    EXIT_CONNECTION_ERROR,
    EXIT_ENCODING_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_REMOTE_ERROR,
    EXIT_UNEXPECTED_STATUS,
)

if TYPE_CHECKING:
    from ovhapi.models import ErrorPayload


class ErrorKind(str, enum.Enum):
    """Failure classes surfaced by the client."""

    CONFIGURATION = "configuration"
    ENCODING = "encoding"
    TRANSPORT = "transport"
    REMOTE = "remote"
    REMOTE_OPAQUE = "remote_opaque"


class OvhError(Exception):
    """Base exception for all ovhapi errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    kind: ErrorKind = ErrorKind.CONFIGURATION
    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(OvhError):
    """Raised for unusable endpoints, credentials or configuration files."""

    kind = ErrorKind.CONFIGURATION
    exit_code = EXIT_CONFIG_ERROR


class EncodingError(OvhError):
    """Raised when a request payload cannot be serialised to JSON.

    No network request is attempted when this is raised.
    """

    kind = ErrorKind.ENCODING
    exit_code = EXIT_ENCODING_ERROR


class TransportError(OvhError):
    """Raised on network-level failures (DNS, connect, TLS, protocol)."""

    kind = ErrorKind.TRANSPORT
    exit_code = EXIT_CONNECTION_ERROR


class RequestTimeoutError(TransportError):
    """Raised when a call exceeds the client's configured timeout."""


class APIError(OvhError):
    """The API answered with an unexpected status and a structured error body.

    The exception message is the decoded ``message`` field.  The machine
    readable ``errorCode`` / ``httpCode`` are available on :attr:`payload`.

    Attributes:
        status_code: Numeric HTTP status of the response.
        status: Reason phrase of the response.
        payload: The decoded :class:`~ovhapi.models.ErrorPayload`.
    """

    kind = ErrorKind.REMOTE
    exit_code = EXIT_REMOTE_ERROR

    def __init__(self, status_code: int, status: str, payload: ErrorPayload):
        message = payload.message or f"{status_code} - {status}"
        super().__init__(message)
        self.status_code = status_code
        self.status = status
        self.payload = payload

    @property
    def error_code(self) -> str:
        """Provider error code, e.g. ``"CLIENT_NOT_FOUND"``."""
        return self.payload.error_code


class UnexpectedStatusError(OvhError):
    """The API answered with an unexpected status and no decodable error body.

    Typical sources are proxies and plain-text 5xx pages.  The message is
    ``"<code> - <status text>"``.
    """

    kind = ErrorKind.REMOTE_OPAQUE
    exit_code = EXIT_UNEXPECTED_STATUS

    def __init__(self, status_code: int, status: str):
        super().__init__(f"{status_code} - {status}")
        self.status_code = status_code
        self.status = status
