"""ovhapi -- signed-request client for the OVH API family.

Every call to the API carries the application key; authenticated calls are
additionally signed with the application secret and consumer key over the
exact method, URL, body and a timestamp corrected to the server clock.

Typical usage::

    import ovhapi

    client = ovhapi.create_client("ovh-eu")   # credentials from ovh.conf / OVH_*
    response = client.get("/me")
    response.raise_for_status()
    print(response.json())

Modules:
    endpoints: Endpoint name to base URL registry.
    auth: Request signature and clock calibration.
    client: :class:`Client` and the :class:`APIResponse` envelope.
    config: Credential resolution from ``ovh.conf`` files and environment.
    exceptions: :class:`OvhError` hierarchy and :class:`ErrorKind`.
    app: ``ovhapi`` command line entry point.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Callable, Optional

from ovhapi.client import APIResponse, Client
from ovhapi.config import resolve_client_config
from ovhapi.exceptions import (
    APIError,
    ConfigError,
    EncodingError,
    ErrorKind,
    OvhError,
    RequestTimeoutError,
    TransportError,
    UnexpectedStatusError,
)
from ovhapi.models import DEFAULT_TIMEOUT

if TYPE_CHECKING:
    import httpx

__version__ = "0.1.0"


def create_client(
    endpoint: Optional[str] = None,
    application_key: Optional[str] = None,
    application_secret: Optional[str] = None,
    consumer_key: Optional[str] = None,
    *,
    timeout: Optional[float] = None,
    http_client: Optional[httpx.Client] = None,
    clock: Optional[Callable[[], float]] = None,
) -> Client:
    """Resolve configuration and return a clock-calibrated :class:`Client`.

    Arguments left as ``None`` are read from ``OVH_*`` environment variables
    and ``ovh.conf`` files, see :func:`ovhapi.config.resolve_client_config`.

    Raises:
        ConfigError: If a configuration file is invalid or the time
            endpoint does not return an integer.
        TransportError: If the server cannot be reached.
    """
    config = resolve_client_config(
        endpoint=endpoint,
        application_key=application_key,
        application_secret=application_secret,
        consumer_key=consumer_key,
        timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
    )
    return Client.from_config(
        config, http_client=http_client, clock=clock if clock is not None else time.time
    )


__all__ = [
    "APIError",
    "APIResponse",
    "Client",
    "ConfigError",
    "EncodingError",
    "ErrorKind",
    "OvhError",
    "RequestTimeoutError",
    "TransportError",
    "UnexpectedStatusError",
    "__version__",
    "create_client",
]
