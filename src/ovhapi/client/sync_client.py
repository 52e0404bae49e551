"""Synchronous signed-request client.

This module provides :class:`Client`, a blocking client for the API family
listed in :mod:`ovhapi.endpoints`.  It wraps :class:`httpx.Client` and
layers on:

- **Clock calibration** -- :meth:`Client.create` measures the offset to the
  server clock once, before the client is handed out.
- **Request signing** -- authenticated calls carry the timestamp, consumer
  and signature headers from :func:`~ovhapi.auth.signer.sign_request`.
- **Response normalisation** -- every call returns an
  :class:`~ovhapi.client.response.APIResponse`; status classification is
  left to :meth:`~ovhapi.client.response.APIResponse.decode_error`.

There is no retry, cache or backoff: every failure reaches the caller on
the first attempt.  A client holds no per-call mutable state, so one
instance can be shared between threads.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Optional

import httpx

from ovhapi.auth.clock import synchronize
from ovhapi.auth.signer import HEADER_APPLICATION, sign_request
from ovhapi.client.response import APIResponse
from ovhapi.endpoints import resolve_endpoint
from ovhapi.exceptions import (
    ConfigError,
    EncodingError,
    RequestTimeoutError,
    TransportError,
)
from ovhapi.models import DEFAULT_TIMEOUT, ClientConfig

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json;charset=utf-8"


def encode_body(data: Any) -> bytes:
    """Serialise *data* to the compact JSON bytes that are sent and signed.

    Raises:
        EncodingError: If *data* is not JSON-serialisable, including NaN
            and infinite floats.
    """
    try:
        return json.dumps(
            data, separators=(",", ":"), ensure_ascii=False, allow_nan=False
        ).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise EncodingError(f"Cannot encode request body as JSON: {exc}") from exc


class Client:
    """Signed-request client bound to one endpoint and one set of credentials.

    Use :meth:`create` (or :func:`ovhapi.create_client`) rather than the
    constructor: it performs the clock calibration that authenticated calls
    depend on.  The constructor takes an already known ``time_delta``.

    Args:
        endpoint: Endpoint name from :mod:`ovhapi.endpoints` or a base URL.
        application_key: Public application key, sent on every call.
        application_secret: Application secret, only ever folded into the
            signature.
        consumer_key: Consumer key scoping the calling identity.
        time_delta: Seconds the local clock runs ahead of the server.
        timeout: Per-call timeout in seconds.
        http_client: Transport to use.  When ``None`` the client builds one
            and closes it in :meth:`close`.
        clock: Local time source in epoch seconds.

    Example::

        with Client.create("ovh-eu", ak, as_, ck) as client:
            me = client.get("/me")
            me.raise_for_status()
    """

    def __init__(
        self,
        endpoint: str,
        application_key: str = "",
        application_secret: str = "",
        consumer_key: str = "",
        *,
        time_delta: int = 0,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._endpoint = resolve_endpoint(endpoint)
        self._application_key = application_key
        self._application_secret = application_secret
        self._consumer_key = consumer_key
        self._time_delta = time_delta
        self._timeout = timeout
        self._clock = clock
        self._owns_http_client = http_client is None
        self._http = http_client if http_client is not None else httpx.Client()

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #

    @classmethod
    def create(
        cls,
        endpoint: str,
        application_key: str = "",
        application_secret: str = "",
        consumer_key: str = "",
        *,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.Client] = None,
        clock: Callable[[], float] = time.time,
    ) -> Client:
        """Build a client calibrated against the server clock.

        An uncalibrated draft performs the unauthenticated ``/auth/time``
        call; the returned client is a fresh instance holding the measured
        offset.

        Raises:
            TransportError: If the time call cannot be completed.
            APIError: If the time call returns an error status.
            UnexpectedStatusError: Likewise, without a structured body.
            ConfigError: If the time body is not an integer.
        """
        draft = cls(
            endpoint,
            application_key,
            application_secret,
            consumer_key,
            timeout=timeout,
            http_client=http_client,
            clock=clock,
        )
        try:
            time_delta = synchronize(draft, clock)
        except BaseException:
            draft.close()
            raise
        client = cls(
            endpoint,
            application_key,
            application_secret,
            consumer_key,
            time_delta=time_delta,
            timeout=timeout,
            http_client=draft._http,
            clock=clock,
        )
        # The draft's transport is handed over, ownership included.
        client._owns_http_client = draft._owns_http_client
        return client

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        http_client: Optional[httpx.Client] = None,
        clock: Callable[[], float] = time.time,
    ) -> Client:
        """Build a calibrated client from a resolved :class:`~ovhapi.models.ClientConfig`."""
        return cls.create(
            config.endpoint,
            config.application_key,
            config.application_secret.get_secret_value(),
            config.consumer_key.get_secret_value(),
            timeout=config.timeout,
            http_client=http_client,
            clock=clock,
        )

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_http_client:
            self._http.close()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(endpoint={self._endpoint!r}, "
            f"application_key={self._application_key!r}, time_delta={self._time_delta})"
        )

    # ------------------------------------------------------------------ #
    # Read-only attributes
    # ------------------------------------------------------------------ #

    @property
    def endpoint(self) -> str:
        """Resolved base URL (``""`` for an unknown endpoint name)."""
        return self._endpoint

    @property
    def application_key(self) -> str:
        return self._application_key

    @property
    def time_delta(self) -> int:
        """Seconds the local clock runs ahead of the server clock."""
        return self._time_delta

    @property
    def timeout(self) -> float:
        return self._timeout

    # ------------------------------------------------------------------ #
    # Public request methods
    # ------------------------------------------------------------------ #

    def get(self, path: str, need_auth: bool = True) -> APIResponse:
        """Send a GET request on *path*."""
        return self.call("GET", path, None, need_auth)

    def post(self, path: str, data: Any = None, need_auth: bool = True) -> APIResponse:
        """Send a POST request on *path* with *data* as JSON body."""
        return self.call("POST", path, data, need_auth)

    def put(self, path: str, data: Any = None, need_auth: bool = True) -> APIResponse:
        """Send a PUT request on *path* with *data* as JSON body."""
        return self.call("PUT", path, data, need_auth)

    def delete(self, path: str, need_auth: bool = True) -> APIResponse:
        """Send a DELETE request on *path*."""
        return self.call("DELETE", path, None, need_auth)

    def timestamp(self) -> int:
        """Current time in epoch seconds, corrected to the server clock."""
        return int(self._clock()) - self._time_delta

    def call(
        self,
        method: str,
        path: str,
        data: Any = None,
        need_auth: bool = True,
    ) -> APIResponse:
        """Send one request and return its normalised response.

        The status code is not checked; use
        :meth:`~ovhapi.client.response.APIResponse.raise_for_status` with the
        codes the endpoint is expected to return.

        Args:
            method: HTTP method; signed as sent, i.e. upper-cased.
            path: Path appended verbatim to the base URL.
            data: JSON-serialisable body, or ``None`` for no body.
            need_auth: Sign the request.  Unsigned calls carry no timestamp,
                consumer or signature headers at all, which ``/auth/time``,
                ``/auth/credential`` and some order endpoints require.

        Returns:
            The :class:`~ovhapi.client.response.APIResponse`.

        Raises:
            EncodingError: If *data* cannot be serialised (nothing is sent).
            ConfigError: If the target URL is malformed.
            RequestTimeoutError: If the call, body included, exceeds
                :attr:`timeout`.
            TransportError: On any other network failure.
        """
        target = f"{self._endpoint}{path}"
        body = encode_body(data) if data is not None else b""

        headers: dict[str, str] = {}
        if data is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        headers[HEADER_APPLICATION] = self._application_key

        try:
            request = self._http.build_request(
                method,
                target,
                content=body or None,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.InvalidURL as exc:
            raise ConfigError(f"Invalid request URL {target!r}: {exc}") from exc

        # Sign what goes on the wire: httpx upper-cases the method and
        # re-encodes the URL.
        if need_auth:
            request.headers.update(
                sign_request(
                    self._application_secret,
                    self._consumer_key,
                    request.method,
                    str(request.url),
                    body,
                    self.timestamp(),
                )
            )

        logger.debug("%s %s (auth=%s)", request.method, request.url, need_auth)
        deadline = time.monotonic() + self._timeout
        try:
            response = self._http.send(request, stream=True)
            try:
                content = self._read_body(response, deadline)
            finally:
                response.close()
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(
                f"{request.method} {target} timed out after {self._timeout}s"
            ) from exc
        except httpx.TransportError as exc:
            raise TransportError(f"{request.method} {target} failed: {exc}") from exc

        result = APIResponse.from_httpx(response, body=content)
        logger.debug("%s %s -> %d %s", request.method, target, result.status_code, result.status)
        return result

    def _read_body(self, response: httpx.Response, deadline: float) -> bytes:
        """Read a streamed body, failing once *deadline* has passed.

        httpx applies the timeout per read, so a server trickling bytes
        would otherwise hold the call open indefinitely.
        """
        chunks: list[bytes] = []
        for chunk in response.iter_bytes():
            chunks.append(chunk)
            if time.monotonic() > deadline:
                raise RequestTimeoutError(
                    f"{response.request.method} {response.request.url} "
                    f"timed out after {self._timeout}s"
                )
        return b"".join(chunks)
