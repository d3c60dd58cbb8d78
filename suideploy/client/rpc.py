"""
Sui fullnode JSON-RPC client.

Thin async wrapper over httpx; each public method maps to one RPC method
and returns its `result` member unchanged.
"""

from __future__ import annotations

import itertools
from typing import Any, Optional

import httpx

from suideploy.constants import RPC_TIMEOUT
from suideploy.exceptions import SuiRpcError


class SuiRpcClient:
    """Async JSON-RPC client for a Sui fullnode."""

    def __init__(
        self,
        url: str,
        timeout: float = RPC_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self._ids = itertools.count(1)
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def __aenter__(self) -> "SuiRpcClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def call(self, method: str, params: list[Any]) -> Any:
        """
        Invoke an RPC method.

        Raises:
            SuiRpcError: On transport failure, non-2xx status or a JSON-RPC error
        """
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}

        try:
            response = await self._http.post(self.url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            raise SuiRpcError(method, f"HTTP {e.response.status_code} from {self.url}") from e
        except httpx.HTTPError as e:
            raise SuiRpcError(method, f"Request to {self.url} failed: {e}") from e
        except ValueError as e:
            raise SuiRpcError(method, "Response is not valid JSON") from e

        error = body.get("error")
        if error:
            raise SuiRpcError(method, error.get("message", str(error)), code=error.get("code"))

        return body.get("result")

    async def get_balance(self, owner: str, coin_type: Optional[str] = None) -> dict:
        return await self.call("suix_getBalance", [owner, coin_type])

    async def get_coins(self, owner: str, coin_type: Optional[str] = None) -> dict:
        return await self.call("suix_getCoins", [owner, coin_type, None, None])

    async def get_object(self, object_id: str, options: Optional[dict] = None) -> dict:
        return await self.call("sui_getObject", [object_id, options or {}])

    async def get_owned_objects(
        self,
        owner: str,
        struct_type: Optional[str] = None,
        options: Optional[dict] = None,
        cursor: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> dict:
        query: dict[str, Any] = {"options": options or {}}
        if struct_type:
            query["filter"] = {"StructType": struct_type}
        return await self.call("suix_getOwnedObjects", [owner, query, cursor, limit])

    async def move_call(
        self,
        signer: str,
        package_id: str,
        module: str,
        function: str,
        type_arguments: list[str],
        arguments: list[Any],
        gas_budget: int,
        gas: Optional[str] = None,
    ) -> dict:
        """Server-built transaction bytes for a single Move call (unsafe_moveCall)."""
        return await self.call(
            "unsafe_moveCall",
            [
                signer,
                package_id,
                module,
                function,
                type_arguments,
                arguments,
                gas,
                str(gas_budget),
            ],
        )

    async def execute_transaction_block(
        self,
        tx_bytes: str,
        signatures: list[str],
        options: Optional[dict] = None,
        request_type: str = "WaitForLocalExecution",
    ) -> dict:
        return await self.call(
            "sui_executeTransactionBlock",
            [tx_bytes, signatures, options or {}, request_type],
        )

    async def get_transaction_block(self, digest: str, options: Optional[dict] = None) -> dict:
        return await self.call("sui_getTransactionBlock", [digest, options or {}])
