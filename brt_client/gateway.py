"""
BRT RPC gateway: the network boundary.

Executes a named rippled-style JSON-RPC method and returns a boring
frozen result. No exceptions for "expected" failures: connection
errors, HTTP errors and RPC-level errors are all captured in
RpcResponse so the core never has to catch anything.

Envelope conventions:
    - Request: {"method": "<name>", "params": [{...}]}
    - Success: {"result": {"status": "success", ...}}
    - Error:   {"result": {"status": "error", "error": "...", ...}}

A result carrying an ``error`` field is a failure even when ``status``
is missing or claims success.

No retry loops. No secrets. No ledger logic beyond the envelope.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from brt_client.transport import HttpxTransport, JsonRpcTransport

logger = logging.getLogger(__name__)

# Error token recorded when the request never produced a JSON-RPC result.
TRANSPORT_ERROR = "transportError"

_request_ids = itertools.count(1)


@dataclass(frozen=True)
class RpcResponse:
    """Result of a single gateway call.

    Attributes:
        result: The ``result`` object of the response. Kept on RPC-level
            errors for diagnostics; None when no result was received.
        error: Node error token (e.g. "actNotFound", "lgrNotFound") or
            TRANSPORT_ERROR. None on success.
        detail: Human-readable detail for diagnostics.
        transport_failed: True when the call never reached the node or
            the reply was not a usable JSON-RPC response.
    """

    result: dict[str, Any] | None = None
    error: str | None = None
    detail: str | None = None
    transport_failed: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None and self.result is not None


@runtime_checkable
class RpcGateway(Protocol):
    """Interface for executing remote procedures on a BRT node."""

    async def call(
        self, method: str, params: dict[str, Any] | None = None
    ) -> RpcResponse:
        """Execute ``method`` with ``params``.

        Never raises for transport or RPC failures; those are
        captured in the returned RpcResponse.
        """
        ...


class JsonRpcGateway:
    """JSON-RPC implementation of RpcGateway.

    Args:
        url: The node JSON-RPC endpoint URL (e.g. "http://localhost:5005").
        transport: Injectable transport for HTTP POST. Defaults to
            HttpxTransport. Pass a FakeTransport for testing.
    """

    def __init__(
        self,
        url: str,
        transport: JsonRpcTransport | None = None,
    ) -> None:
        self._url = url
        self._transport = transport or HttpxTransport()

    @property
    def url(self) -> str:
        """The JSON-RPC endpoint URL."""
        return self._url

    async def call(
        self, method: str, params: dict[str, Any] | None = None
    ) -> RpcResponse:
        payload = {
            "method": method,
            "params": [params or {}],
            "id": next(_request_ids),
        }
        logger.debug("rpc call %s", method)

        try:
            response = await self._transport.post_json(self._url, payload)
        except Exception as exc:
            logger.debug("rpc call %s failed at transport: %s", method, exc)
            return RpcResponse(
                error=TRANSPORT_ERROR,
                detail=f"{method} failed: {exc}",
                transport_failed=True,
            )

        return parse_response(method, response)


def parse_response(method: str, response: dict[str, Any]) -> RpcResponse:
    """Unwrap a JSON-RPC envelope into an RpcResponse (pure, no I/O)."""
    result = response.get("result")
    if not isinstance(result, dict):
        return RpcResponse(
            error=TRANSPORT_ERROR,
            detail=f"{method}: no result object in response",
            transport_failed=True,
        )

    if result.get("status") == "error" or "error" in result:
        error = result.get("error") or "unknown"
        logger.debug("rpc call %s returned error %s", method, error)
        return RpcResponse(
            result=result,
            error=str(error),
            detail=result.get("error_message") or f"{method}: {error}",
        )

    return RpcResponse(result=result)
