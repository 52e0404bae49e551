"""Registry of the API deployments reachable with the same signing protocol.

Each brand and region is served from its own base URL.  Callers select one
by short name (``"ovh-eu"``) or pass a base URL directly.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

ENDPOINTS: Mapping[str, str] = MappingProxyType(
    {
        "ovh-eu": "https://eu.api.ovh.com/1.0",
        "ovh-ca": "https://ca.api.ovh.com/1.0",
        "kimsufi-eu": "https://eu.api.kimsufi.com/1.0",
        "kimsufi-ca": "https://ca.api.kimsufi.com/1.0",
        "soyoustart-eu": "https://eu.api.soyoustart.com/1.0",
        "soyoustart-ca": "https://ca.api.soyoustart.com/1.0",
        "runabove-ca": "https://api.runabove.com/1.0",
    }
)
"""Read-only mapping of endpoint names to base URLs."""


def resolve_endpoint(name: str) -> str:
    """Return the base URL for *name*.

    A name containing ``/`` is taken to be a URL already and is returned
    unchanged.  Unknown names resolve to ``""``; the mistake surfaces as a
    transport error on the first request rather than here.

    Args:
        name: An endpoint name such as ``"ovh-ca"``, or a base URL.

    Returns:
        The base URL, without a trailing slash for registry entries.
    """
    if "/" in name:
        return name
    return ENDPOINTS.get(name, "")


def list_endpoints() -> list[tuple[str, str]]:
    """Return ``(name, url)`` pairs sorted by name."""
    return sorted(ENDPOINTS.items())
