"""
Tests for JsonRpcGateway: canned JSON-RPC responses, no network.

Test plan:
- Envelope: method name, params wrapped in a one-element list, empty
  params object when none given, sent to the configured URL
- Success: result object returned, ok is True
- RPC errors: status "error" and a bare "error" field both fail, detail
  prefers error_message, raw result kept
- Transport: exceptions become transport_failed responses, missing
  result object is a transport failure
"""

from typing import Any

import pytest

from brt_client.gateway import TRANSPORT_ERROR, JsonRpcGateway, parse_response

URL = "http://localhost:5005"


class FakeTransport:
    """Returns a canned JSON-RPC response for testing."""

    def __init__(self, response: dict[str, Any]) -> None:
        self._response = response
        self.calls: list[tuple[str, dict[str, Any]]] = []

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((url, payload))
        return self._response


class ErrorTransport:
    """Raises on post_json to simulate transport failures."""

    def __init__(self, exc: Exception) -> None:
        self._exc = exc

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        raise self._exc


LEDGER_CLOSED = {
    "result": {
        "ledger_hash": "8" * 64,
        "ledger_index": 500,
        "status": "success",
    },
}

ACT_NOT_FOUND = {
    "result": {
        "account": "rUnfunded",
        "error": "actNotFound",
        "error_code": 19,
        "error_message": "Account not found.",
        "status": "error",
    },
}

BARE_ERROR = {
    "result": {
        "error": "noNetwork",
    },
}


class TestEnvelope:
    @pytest.mark.asyncio
    async def test_sends_method(self) -> None:
        transport = FakeTransport(LEDGER_CLOSED)
        gateway = JsonRpcGateway(URL, transport)
        await gateway.call("ledger_closed")
        _, payload = transport.calls[0]
        assert payload["method"] == "ledger_closed"

    @pytest.mark.asyncio
    async def test_empty_params_object(self) -> None:
        transport = FakeTransport(LEDGER_CLOSED)
        gateway = JsonRpcGateway(URL, transport)
        await gateway.call("ledger_closed")
        _, payload = transport.calls[0]
        assert payload["params"] == [{}]

    @pytest.mark.asyncio
    async def test_params_wrapped_in_list(self) -> None:
        transport = FakeTransport(LEDGER_CLOSED)
        gateway = JsonRpcGateway(URL, transport)
        await gateway.call("account_info", {"account": "rA"})
        _, payload = transport.calls[0]
        assert payload["params"] == [{"account": "rA"}]

    @pytest.mark.asyncio
    async def test_sends_to_url(self) -> None:
        transport = FakeTransport(LEDGER_CLOSED)
        gateway = JsonRpcGateway("http://node.example:5005", transport)
        await gateway.call("ledger_closed")
        url, _ = transport.calls[0]
        assert url == "http://node.example:5005"
        assert gateway.url == "http://node.example:5005"

    @pytest.mark.asyncio
    async def test_request_ids_increase(self) -> None:
        transport = FakeTransport(LEDGER_CLOSED)
        gateway = JsonRpcGateway(URL, transport)
        await gateway.call("ledger_closed")
        await gateway.call("ledger_closed")
        first, second = (payload["id"] for _, payload in transport.calls)
        assert second > first


class TestSuccess:
    @pytest.mark.asyncio
    async def test_result_returned(self) -> None:
        gateway = JsonRpcGateway(URL, FakeTransport(LEDGER_CLOSED))
        response = await gateway.call("ledger_closed")
        assert response.ok is True
        assert response.result is not None
        assert response.result["ledger_index"] == 500
        assert response.error is None


class TestRpcError:
    @pytest.mark.asyncio
    async def test_status_error_fails(self) -> None:
        gateway = JsonRpcGateway(URL, FakeTransport(ACT_NOT_FOUND))
        response = await gateway.call("account_info", {"account": "rUnfunded"})
        assert response.ok is False
        assert response.error == "actNotFound"
        assert response.transport_failed is False

    @pytest.mark.asyncio
    async def test_detail_prefers_error_message(self) -> None:
        gateway = JsonRpcGateway(URL, FakeTransport(ACT_NOT_FOUND))
        response = await gateway.call("account_info", {"account": "rUnfunded"})
        assert response.detail == "Account not found."

    @pytest.mark.asyncio
    async def test_bare_error_field_fails(self) -> None:
        gateway = JsonRpcGateway(URL, FakeTransport(BARE_ERROR))
        response = await gateway.call("fee")
        assert response.ok is False
        assert response.error == "noNetwork"
        assert response.detail == "fee: noNetwork"

    def test_raw_result_kept_on_error(self) -> None:
        response = parse_response("account_info", ACT_NOT_FOUND)
        assert response.result is not None
        assert response.result["error_code"] == 19


class TestTransportError:
    @pytest.mark.asyncio
    async def test_exception_becomes_failure(self) -> None:
        gateway = JsonRpcGateway(URL, ErrorTransport(ConnectionError("refused")))
        response = await gateway.call("ledger_closed")
        assert response.ok is False
        assert response.transport_failed is True
        assert response.error == TRANSPORT_ERROR
        assert response.detail is not None
        assert "refused" in response.detail

    @pytest.mark.asyncio
    async def test_timeout_becomes_failure(self) -> None:
        gateway = JsonRpcGateway(URL, ErrorTransport(TimeoutError("timed out")))
        response = await gateway.call("tx", {"transaction": "A" * 64})
        assert response.transport_failed is True

    def test_missing_result_is_transport_failure(self) -> None:
        response = parse_response("ledger", {"jsonrpc": "2.0"})
        assert response.transport_failed is True
        assert response.ok is False
