"""Tests for the transport adapter, JSON codec and Outcome."""

from __future__ import annotations

import httpx
import pytest

from stance_vault.client.codec import JsonCodec
from stance_vault.client.response import Outcome
from stance_vault.client.transport import HttpxTransport, TransportResponse
from stance_vault.exceptions import CodecError, DecodeError, EncodeError, TransportError
from stance_vault.models import ClientConfig


class TestTransportResponse:
    @pytest.mark.parametrize("status", [200, 201, 204, 299])
    def test_2xx_is_success(self, status: int) -> None:
        assert TransportResponse(status).is_success

    @pytest.mark.parametrize("status", [199, 301, 400, 403, 404, 500, 503])
    def test_other_statuses_are_not(self, status: int) -> None:
        assert not TransportResponse(status).is_success

    def test_defaults(self) -> None:
        response = TransportResponse(200)
        assert response.headers == {}
        assert response.body == b""
        assert response.reason == ""


class TestHttpxTransport:
    def test_returns_raw_response(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.headers["x-test"] == "1"
            assert request.content == b"payload"
            return httpx.Response(418, content=b'{"teapot": true}')

        transport = HttpxTransport(
            ClientConfig(), transport=httpx.MockTransport(handler)
        )
        response = transport.send(
            "POST", "http://127.0.0.1:8200/v1/x", {"X-Test": "1"}, b"payload"
        )

        assert response.status_code == 418
        assert response.reason == "I'm a teapot"
        assert response.body == b'{"teapot": true}'
        assert not response.is_success
        transport.close()

    def test_timeout_is_fatal(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        transport = HttpxTransport(ClientConfig(), transport=httpx.MockTransport(handler))
        with pytest.raises(TransportError):
            transport.send("GET", "http://127.0.0.1:8200/v1/x", {})

    def test_close_is_idempotent(self) -> None:
        transport = HttpxTransport(ClientConfig())
        transport.close()
        transport.close()
        assert transport.closed

    def test_send_after_close_raises_without_new_client(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={})

        transport = HttpxTransport(ClientConfig(), transport=httpx.MockTransport(handler))
        transport.send("GET", "http://127.0.0.1:8200/v1/x", {})
        transport.close()

        with pytest.raises(TransportError, match="transport is closed"):
            transport.send("POST", "http://127.0.0.1:8200/v1/auth/token/renew-self", {})
        assert len(calls) == 1
        assert transport._client is None


class TestJsonCodec:
    def test_encode(self) -> None:
        assert JsonCodec().encode({"a": "é"}) == '{"a": "é"}'.encode("utf-8")

    def test_decode(self) -> None:
        assert JsonCodec().decode(b'{"auth": {"lease_duration": 10}}') == {
            "auth": {"lease_duration": 10}
        }

    @pytest.mark.parametrize("raw", [b"", b"  \n"])
    def test_empty_body_is_none(self, raw: bytes) -> None:
        assert JsonCodec().decode(raw) is None

    @pytest.mark.parametrize("raw", [b"not json", b"{\"a\":", b"\xff\xfe"])
    def test_malformed_body_raises(self, raw: bytes) -> None:
        with pytest.raises(DecodeError):
            JsonCodec().decode(raw)

    def test_unserialisable_value_raises_encode_error(self) -> None:
        with pytest.raises(EncodeError) as excinfo:
            JsonCodec().encode({1, 2})
        assert isinstance(excinfo.value, CodecError)
        assert not isinstance(excinfo.value, DecodeError)


class TestOutcome:
    def test_truthiness_follows_tag(self) -> None:
        assert Outcome.success({})
        assert not Outcome.failure({"errors": ["x"]})

    def test_failure_with_empty_body_is_still_falsy(self) -> None:
        assert not Outcome.failure(None, 500)

    def test_errors(self) -> None:
        assert Outcome.failure({"errors": ["a", "b"]}).errors == ["a", "b"]
        assert Outcome.failure(None).errors == []
        assert Outcome.success({"errors": ["ignored"]}).errors == []

    def test_repr(self) -> None:
        assert repr(Outcome.failure({}, 403)) == "Outcome.failure({}, status_code=403)"
