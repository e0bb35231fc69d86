"""
JSON-RPC contract reader for the payment chain.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

import httpx

from .base import Provider
from ..config import settings
from ..core.execution.abi import AbiError, AbiFragment, decode_function_result, encode_function_data

logger = logging.getLogger(__name__)


class RpcError(Exception):
    """Contract read failed (transport, node error or undecodable result)."""
    pass


class JsonRpcContractReader(Provider):
    """Reads contract state via ``eth_call`` against ``latest``."""

    name = "base_rpc"

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        *,
        timeout_s: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._rpc_url = rpc_url or settings.base_rpc_url
        self.timeout_s = timeout_s or settings.request_timeout_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._request_id = 0

    async def ready(self) -> bool:
        return bool(self._rpc_url)

    async def health_check(self) -> Dict[str, Any]:
        if not await self.ready():
            return {"status": "disabled", "reason": "RPC URL not configured"}

        try:
            result = await self._rpc_call("eth_chainId", [])
            return {"status": "healthy", "chainId": int(result, 16)}
        except Exception as exc:
            return {"status": "error", "reason": str(exc)}

    async def read_contract(
        self,
        address: str,
        abi: Sequence[AbiFragment],
        function_name: str,
        args: Sequence[Any] = (),
    ) -> Any:
        try:
            data = encode_function_data(abi, function_name, args)
        except AbiError as exc:
            raise RpcError(str(exc)) from exc

        result = await self._rpc_call("eth_call", [{"to": address, "data": data}, "latest"])
        if not isinstance(result, str):
            raise RpcError(f"Invalid eth_call response for {function_name}")

        try:
            return decode_function_result(abi, function_name, result)
        except AbiError as exc:
            raise RpcError(f"Could not decode {function_name}() from {address}: {exc}") from exc

    async def aclose(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()

    async def _rpc_call(self, method: str, params: list[Any]) -> Any:
        if not self._client or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout_s, transport=self._transport)

        self._request_id += 1
        try:
            response = await self._client.post(
                self._rpc_url,
                json={"jsonrpc": "2.0", "id": self._request_id, "method": method, "params": params},
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.warning("RPC %s failed: %s", method, exc)
            raise RpcError(f"RPC {method} failed: {exc}") from exc

        if not isinstance(payload, dict):
            raise RpcError(f"RPC {method} returned a non-object payload")
        if "error" in payload:
            raise RpcError(str(payload["error"]))
        return payload.get("result")


__all__ = ["RpcError", "JsonRpcContractReader"]
