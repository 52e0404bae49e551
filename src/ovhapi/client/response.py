"""Response envelope and error classification.

Every call returns an :class:`APIResponse` regardless of status; deciding
whether the status is a success is left to the caller, who knows which
codes an endpoint is expected to return.  :meth:`APIResponse.decode_error`
does that classification:

1. status in the expected set -- success, ``None``;
2. body decodes as an :class:`~ovhapi.models.ErrorPayload` --
   :class:`~ovhapi.exceptions.APIError` carrying the payload;
3. anything else (empty body, HTML page from a proxy, wrong shape) --
   :class:`~ovhapi.exceptions.UnexpectedStatusError` built from the status.
"""

from __future__ import annotations

import json
from collections.abc import Collection
from dataclasses import dataclass
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from ovhapi.exceptions import APIError, OvhError, UnexpectedStatusError
from ovhapi.models import ErrorPayload


@dataclass(frozen=True)
class APIResponse:
    """Status and raw body of one API call.

    Attributes:
        status_code: Numeric HTTP status.
        status: Reason phrase (``"Not Found"``).
        body: Raw response body, possibly empty.
    """

    status_code: int
    status: str
    body: bytes = b""

    @classmethod
    def from_httpx(cls, response: httpx.Response, body: Optional[bytes] = None) -> APIResponse:
        """Normalise an :class:`httpx.Response`.

        *body* is the content of a streamed response; without it the
        response must have been read.
        """
        return cls(
            status_code=response.status_code,
            status=response.reason_phrase or "",
            body=response.content if body is None else body,
        )

    def json(self) -> Any:
        """Decode the body as JSON.  Returns ``None`` for an empty body."""
        if not self.body:
            return None
        return json.loads(self.body)

    def decode_error(self, expected_codes: Collection[int] = (200,)) -> Optional[OvhError]:
        """Classify this response against the codes the caller expected.

        Args:
            expected_codes: Statuses that mean success for this call.

        Returns:
            ``None`` on success, otherwise the error describing the failure
            (not raised).
        """
        if self.status_code in expected_codes:
            return None
        payload = decode_error_payload(self.body)
        if payload is not None:
            return APIError(self.status_code, self.status, payload)
        return UnexpectedStatusError(self.status_code, self.status)

    def raise_for_status(self, expected_codes: Collection[int] = (200,)) -> None:
        """Raise the error from :meth:`decode_error`, if any.

        Raises:
            APIError: Unexpected status with a structured error body.
            UnexpectedStatusError: Unexpected status otherwise.
        """
        exc = self.decode_error(expected_codes)
        if exc is not None:
            raise exc


def decode_error_payload(body: bytes) -> Optional[ErrorPayload]:
    """Decode *body* as an :class:`~ovhapi.models.ErrorPayload`.

    Returns:
        The payload, or ``None`` when the body is empty, is not JSON, or
        does not have the error object shape.
    """
    if not body:
        return None
    try:
        return ErrorPayload.model_validate_json(body)
    except ValidationError:
        return None
