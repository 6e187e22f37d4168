"""
HTTP transport beneath the BRT JSON-RPC gateway.

JsonRpcGateway only builds envelopes and reads results; getting bytes to
a rippled-style node and back is this module's job. Anything that can
POST a dict and hand back the decoded reply satisfies JsonRpcTransport,
so tests drive the gateway with canned replies instead of a node.

HttpxTransport is the production transport: one short-lived
httpx.AsyncClient per call, with the node's optional basic auth
(rpcuser / rpcpassword).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class JsonRpcTransport(Protocol):
    """What JsonRpcGateway needs from the wire."""

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST one ``{"method", "params", "id"}`` envelope to a BRT node.

        Returns the decoded reply object. Raise on anything that keeps
        the reply from being a JSON object (refused connection, timeout,
        non-2xx status, undecodable body); the gateway turns the
        exception into ``RpcResponse(transport_failed=True)``.
        """
        ...


class HttpxTransport:
    """Posts gateway envelopes to a BRT node over httpx.

    Args:
        timeout: Request timeout in seconds.
        user: Optional HTTP basic auth user name.
        password: Optional HTTP basic auth password. Ignored without user.
    """

    def __init__(
        self,
        timeout: float = 30.0,
        user: str = "",
        password: str = "",
    ) -> None:
        self._timeout = timeout
        self._auth = (user, password) if user else None

    @property
    def timeout(self) -> float:
        return self._timeout

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Raises httpx errors as-is and ValueError for a non-object body."""
        import httpx

        async with httpx.AsyncClient(timeout=self._timeout, auth=self._auth) as client:
            response = await client.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
            result = response.json()

        if not isinstance(result, dict):
            raise ValueError(
                f"JSON-RPC response was not an object, got {type(result).__name__}"
            )
        return result
