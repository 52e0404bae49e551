"""Request signing for authenticated API calls.

The API authenticates a call by recomputing a digest over the application
secret, the consumer key, the exact method, URL and body bytes of the
request, and the timestamp the client claims to have sent it at.  The
digest is SHA-1 rendered as lowercase hex and prefixed with the protocol
version tag ``$1$``.  SHA-1 is what the server verifies; it must not be
swapped for another hash.

See Also:
    :mod:`ovhapi.auth.clock` for how the timestamp is corrected against the
    server clock before it is signed.
"""

from __future__ import annotations

import hashlib

SIGNATURE_VERSION = "$1$"
"""Prefix identifying the signature scheme."""

HEADER_APPLICATION = "X-Ovh-Application"
HEADER_TIMESTAMP = "X-Ovh-Timestamp"
HEADER_CONSUMER = "X-Ovh-Consumer"
HEADER_SIGNATURE = "X-Ovh-Signature"

AUTH_HEADERS = (HEADER_TIMESTAMP, HEADER_CONSUMER, HEADER_SIGNATURE)
"""Headers present on authenticated calls only."""

_SEPARATOR = b"+"


def compute_signature(
    application_secret: str,
    consumer_key: str,
    method: str,
    url: str,
    body: bytes,
    timestamp: int,
) -> str:
    """Compute the ``X-Ovh-Signature`` value for one request.

    The six inputs are joined with ``+`` in this fixed order.  No escaping
    is applied; the server performs the same concatenation.

    Args:
        application_secret: The application secret.
        consumer_key: The consumer key the call is made on behalf of.
        method: HTTP method exactly as sent (``"GET"``).
        url: Full target URL exactly as sent.
        body: Raw request body, ``b""`` when there is none.
        timestamp: Corrected epoch seconds, as sent in ``X-Ovh-Timestamp``.

    Returns:
        ``"$1$"`` followed by 40 lowercase hex digits.

    Example::

        >>> compute_signature("secret", "ck", "GET", "https://eu.api.ovh.com/1.0/me", b"", 1366560945)[:3]
        '$1$'
    """
    to_sign = _SEPARATOR.join(
        [
            application_secret.encode("utf-8"),
            consumer_key.encode("utf-8"),
            method.encode("utf-8"),
            url.encode("utf-8"),
            body,
            str(timestamp).encode("ascii"),
        ]
    )
    return SIGNATURE_VERSION + hashlib.sha1(to_sign).hexdigest()


def sign_request(
    application_secret: str,
    consumer_key: str,
    method: str,
    url: str,
    body: bytes,
    timestamp: int,
) -> dict[str, str]:
    """Build the authentication headers for one request.

    Returns:
        ``X-Ovh-Timestamp``, ``X-Ovh-Consumer``, ``Accept`` and
        ``X-Ovh-Signature`` headers, ready to merge into the request.
    """
    return {
        HEADER_TIMESTAMP: str(timestamp),
        HEADER_CONSUMER: consumer_key,
        "Accept": "application/json",
        HEADER_SIGNATURE: compute_signature(
            application_secret, consumer_key, method, url, body, timestamp
        ),
    }
