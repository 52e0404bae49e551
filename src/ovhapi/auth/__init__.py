"""Request authentication for ovhapi.

Two pieces make up the protocol:

- :mod:`ovhapi.auth.signer` -- the pure SHA-1 signature over secret,
  consumer key, method, URL, body and timestamp, plus the header names.
- :mod:`ovhapi.auth.clock` -- the one-shot calibration of local time against
  the server's ``/auth/time`` so that signed timestamps fall inside the
  server's freshness window.
"""

from ovhapi.auth.clock import (
    TIME_PATH,
    compute_time_delta,
    fetch_server_time,
    parse_server_time,
    synchronize,
)
from ovhapi.auth.signer import (
    HEADER_APPLICATION,
    HEADER_CONSUMER,
    HEADER_SIGNATURE,
    HEADER_TIMESTAMP,
    SIGNATURE_VERSION,
    compute_signature,
    sign_request,
)

__all__ = [
    "HEADER_APPLICATION",
    "HEADER_CONSUMER",
    "HEADER_SIGNATURE",
    "HEADER_TIMESTAMP",
    "SIGNATURE_VERSION",
    "TIME_PATH",
    "compute_signature",
    "compute_time_delta",
    "fetch_server_time",
    "parse_server_time",
    "sign_request",
    "synchronize",
]
