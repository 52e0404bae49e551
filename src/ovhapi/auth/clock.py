"""Clock calibration against the API's authoritative time.

Signed requests are only accepted within a short window around the
server's clock.  A client therefore measures, once, how far the local
clock is from the server's, and subtracts that offset from every timestamp
it signs afterwards.
"""

from __future__ import annotations

import json
import logging
import time
from typing import TYPE_CHECKING, Callable

from ovhapi.exceptions import ConfigError

if TYPE_CHECKING:
    from ovhapi.client.sync_client import Client

logger = logging.getLogger(__name__)

TIME_PATH = "/auth/time"
"""Unauthenticated path returning the server time as a bare JSON integer."""


def parse_server_time(body: bytes) -> int:
    """Decode a ``/auth/time`` body into epoch seconds.

    Args:
        body: Raw response body, e.g. ``b"1366560945"``.

    Returns:
        The server time in seconds since the epoch.

    Raises:
        ConfigError: If the body is not a single JSON integer.
    """
    try:
        value = json.loads(body)
    except (UnicodeDecodeError, ValueError) as exc:
        raise ConfigError(f"Cannot decode server time from {body[:64]!r}: {exc}") from exc
    # bool is an int subclass; "true" is not a timestamp
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Server time is not an integer: {body[:64]!r}")
    return value


def compute_time_delta(local_now: float, server_time: int) -> int:
    """Return ``local - server`` in whole seconds.

    Positive when the local clock runs ahead of the server.
    """
    return int(local_now) - server_time


def fetch_server_time(client: Client) -> int:
    """Return the server time observed through one unsigned ``GET /auth/time``.

    Raises:
        APIError: If the call returns an error status.
        UnexpectedStatusError: Likewise, without a structured body.
        ConfigError: If the body is not an integer.
    """
    response = client.get(TIME_PATH, need_auth=False)
    response.raise_for_status()
    return parse_server_time(response.body)


def synchronize(client: Client, clock: Callable[[], float] = time.time) -> int:
    """Measure the offset between *clock* and the server behind *client*.

    Issues one unauthenticated ``GET /auth/time`` through *client*.  Nothing
    is retried: a transport error, an error status or an undecodable body
    propagates to the caller.

    Args:
        client: A client whose base URL points at the API; its own offset
            is not used since the call is unsigned.
        clock: Local time source in epoch seconds.

    Returns:
        The offset to subtract from local time when signing.
    """
    server_time = fetch_server_time(client)
    delta = compute_time_delta(clock(), server_time)
    logger.debug("Clock offset with %s: %+d s", client.endpoint, delta)
    return delta
