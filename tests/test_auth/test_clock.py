"""Tests for clock calibration."""

from __future__ import annotations

import httpx
import pytest

from ovhapi.auth.clock import (
    compute_time_delta,
    fetch_server_time,
    parse_server_time,
    synchronize,
)
from ovhapi.client import Client
from ovhapi.exceptions import ConfigError, TransportError, UnexpectedStatusError

BASE_URL = "https://eu.api.ovh.com/1.0"


class TestParseServerTime:
    def test_integer(self) -> None:
        assert parse_server_time(b"1366560945") == 1366560945

    def test_surrounding_whitespace(self) -> None:
        assert parse_server_time(b" 1366560945\n") == 1366560945

    def test_beyond_32_bits(self) -> None:
        assert parse_server_time(b"4294967297") == 4294967297

    @pytest.mark.parametrize(
        "body",
        [b"", b"abc", b"12.5", b'"1366560945"', b"true", b"null", b"[1]", b"{}"],
    )
    def test_rejects_non_integers(self, body: bytes) -> None:
        with pytest.raises(ConfigError):
            parse_server_time(body)


class TestComputeTimeDelta:
    def test_local_ahead(self) -> None:
        assert compute_time_delta(1005.0, 1000) == 5

    def test_local_behind(self) -> None:
        assert compute_time_delta(990.9, 1000) == -10

    def test_fraction_truncated(self) -> None:
        assert compute_time_delta(1000.99, 1000) == 0


class TestFetchServerTime:
    def test_returns_observed_time(self, fake_api, clock) -> None:
        fake_api.server_time = 1_700_000_000
        client = Client(BASE_URL, http_client=fake_api.http, clock=clock)
        assert fetch_server_time(client) == 1_700_000_000

    def test_undecodable_body(self, fake_api, clock) -> None:
        fake_api.route("GET", "/auth/time", content=b"<html></html>")
        client = Client(BASE_URL, http_client=fake_api.http, clock=clock)
        with pytest.raises(ConfigError):
            fetch_server_time(client)


class TestSynchronize:
    def test_offset_from_server(self, fake_api, clock) -> None:
        draft = Client(BASE_URL, "ak", "as", "ck", http_client=fake_api.http, clock=clock)
        assert synchronize(draft, clock) == 5

    def test_time_call_is_unsigned(self, fake_api, clock) -> None:
        draft = Client(BASE_URL, "ak", "as", "ck", http_client=fake_api.http, clock=clock)
        synchronize(draft, clock)
        request = fake_api.last_request()
        assert str(request.url) == BASE_URL + "/auth/time"
        assert "X-Ovh-Signature" not in request.headers
        assert request.headers["X-Ovh-Application"] == "ak"

    def test_error_status_propagates(self, fake_api, clock) -> None:
        fake_api.route("GET", "/auth/time", status_code=503, content=b"<html>down</html>")
        draft = Client(BASE_URL, http_client=fake_api.http, clock=clock)
        with pytest.raises(UnexpectedStatusError, match="503 - Service Unavailable"):
            synchronize(draft, clock)

    def test_transport_error_propagates(self, clock) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.Client(transport=httpx.MockTransport(handler))
        draft = Client(BASE_URL, http_client=http, clock=clock)
        with pytest.raises(TransportError):
            synchronize(draft, clock)
