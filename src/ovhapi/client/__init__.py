"""HTTP client module for ovhapi.

Provides the blocking :class:`Client` that wraps :mod:`httpx` with clock
calibration and request signing, and the :class:`APIResponse` envelope
every call returns.

Example::

    from ovhapi.client import Client

    with Client.create("ovh-eu", ak, as_, ck) as client:
        resp = client.get("/me")
        resp.raise_for_status()
        print(resp.json()["nichandle"])
"""

from ovhapi.client.response import APIResponse, decode_error_payload
from ovhapi.client.sync_client import Client

__all__ = ["APIResponse", "Client", "decode_error_payload"]
