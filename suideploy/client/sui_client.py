"""
SuiTestClient

RPC client plus signing identity used by the integration tests.

Configured from the environment:
- SUI_NETWORK        (default: localnet)
- SUI_RPC_URL        (overrides the network's fullnode URL)
- TEST_PRIVATE_KEY   (suiprivkey1... or base64; ephemeral key when unset)
- PACKAGE_ID         (default: 0x0, meaning "not deployed")
"""

from __future__ import annotations

import asyncio
import base64
import os
from typing import Any, Iterable, Mapping, Optional

from suideploy.client.keypair import Ed25519Keypair
from suideploy.client.rpc import SuiRpcClient
from suideploy.client.transactions import MoveCall
from suideploy.constants import (
    ENV_NETWORK,
    ENV_PACKAGE_ID,
    ENV_RPC_URL,
    ENV_TEST_PRIVATE_KEY,
    FALLBACK_NETWORK,
    FULLNODE_URLS,
    TX_CONFIRM_DELAY,
    TX_CONFIRM_MAX_ATTEMPTS,
    TX_GAS_BUDGET,
    UNSET_PACKAGE_ID,
)
from suideploy.exceptions import ConfigurationError, SuiRpcError, TransactionError
from suideploy.models.deployment import TransactionOutcome

SUI_COIN_TYPE = "0x2::sui::SUI"

RESPONSE_OPTIONS = {
    "showEffects": True,
    "showObjectChanges": True,
    "showEvents": True,
}

OBJECT_OPTIONS = {
    "showContent": True,
    "showType": True,
    "showOwner": True,
}


def fullnode_url(network: str) -> str:
    try:
        return FULLNODE_URLS[network]
    except KeyError:
        raise ConfigurationError(
            f"Unknown network '{network}'",
            context=f"Known networks: {', '.join(FULLNODE_URLS)}; or set {ENV_RPC_URL}",
        ) from None


class SuiTestClient:
    """Signs and submits Move calls as a single test account."""

    def __init__(
        self,
        network: str = FALLBACK_NETWORK,
        rpc_url: Optional[str] = None,
        private_key: Optional[str] = None,
        package_id: Optional[str] = None,
        rpc: Optional[SuiRpcClient] = None,
        keypair: Optional[Ed25519Keypair] = None,
    ):
        self.network = network
        self.rpc = rpc or SuiRpcClient(rpc_url or fullnode_url(network))

        if keypair is not None:
            self.keypair = keypair
        elif private_key:
            self.keypair = Ed25519Keypair.from_secret_key(private_key)
        else:
            self.keypair = Ed25519Keypair.generate()

        self.package_id = package_id or UNSET_PACKAGE_ID

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "SuiTestClient":
        """Build from environment variables (os.environ by default)."""
        env = os.environ if env is None else env
        return cls(
            network=env.get(ENV_NETWORK) or FALLBACK_NETWORK,
            rpc_url=env.get(ENV_RPC_URL) or None,
            private_key=env.get(ENV_TEST_PRIVATE_KEY) or None,
            package_id=env.get(ENV_PACKAGE_ID) or None,
        )

    async def __aenter__(self) -> "SuiTestClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.rpc.aclose()

    @property
    def address(self) -> str:
        return self.keypair.to_sui_address()

    @property
    def has_package(self) -> bool:
        return self.package_id != UNSET_PACKAGE_ID

    def move_call(self, module: str, function: str, *arguments: Any) -> MoveCall:
        """MoveCall against the configured package."""
        return MoveCall.of(self.package_id, module, function, *arguments)

    async def get_balance(self, coin_type: Optional[str] = None) -> int:
        """Total balance in the smallest unit (MIST for SUI)."""
        result = await self.rpc.get_balance(self.address, coin_type)
        return int(result["totalBalance"])

    async def get_object(self, object_id: str) -> dict:
        """Object response with content, type and owner."""
        return await self.rpc.get_object(object_id, OBJECT_OPTIONS)

    async def get_object_fields(self, object_id: str) -> dict:
        response = await self.get_object(object_id)
        return ((response.get("data") or {}).get("content") or {}).get("fields") or {}

    async def get_owned_objects(self, struct_type: Optional[str] = None) -> list[dict]:
        """Objects owned by the test address, optionally filtered by type."""
        response = await self.rpc.get_owned_objects(
            self.address,
            struct_type=struct_type,
            options={"showContent": True, "showType": True},
        )
        return response.get("data", [])

    async def get_coins(self, coin_type: str = SUI_COIN_TYPE) -> list[dict]:
        response = await self.rpc.get_coins(self.address, coin_type)
        return response.get("data", [])

    async def build_transaction(self, call: MoveCall, gas_budget: int = TX_GAS_BUDGET) -> bytes:
        package, module, function = call.parts
        result = await self.rpc.move_call(
            signer=self.address,
            package_id=package,
            module=module,
            function=function,
            type_arguments=call.type_arguments,
            arguments=call.arguments,
            gas_budget=gas_budget,
        )
        return base64.b64decode(result["txBytes"])

    async def execute_transaction(self, call: MoveCall, gas_budget: int = TX_GAS_BUDGET) -> dict:
        """
        Sign and submit a Move call, waiting for local execution.

        Returns:
            Response with effects, objectChanges and events

        Raises:
            SuiRpcError: If the fullnode rejects the transaction
            TransactionError: If the effects report a failure
        """
        tx_bytes = await self.build_transaction(call, gas_budget)
        signature = self.keypair.sign_transaction(tx_bytes)

        response = await self.rpc.execute_transaction_block(
            base64.b64encode(tx_bytes).decode(),
            [signature],
            RESPONSE_OPTIONS,
        )

        outcome = TransactionOutcome.from_response(response)
        if not outcome.is_success:
            raise TransactionError(f"Transaction {call.target} failed", error=outcome.error)

        return response

    async def wait_for_transaction(
        self,
        digest: str,
        max_attempts: int = TX_CONFIRM_MAX_ATTEMPTS,
        delay: float = TX_CONFIRM_DELAY,
    ) -> dict:
        """
        Poll until the fullnode knows the transaction digest.

        Raises:
            SuiRpcError: If the digest is still unknown after max_attempts
        """
        last_error: Optional[SuiRpcError] = None
        for _ in range(max_attempts):
            try:
                return await self.rpc.get_transaction_block(digest, {"showEffects": True})
            except SuiRpcError as e:
                last_error = e
                await asyncio.sleep(delay)

        raise SuiRpcError(
            "sui_getTransactionBlock",
            f"Transaction {digest} not confirmed after {max_attempts} attempts",
        ) from last_error

    async def execute_and_confirm(self, call: MoveCall) -> dict:
        response = await self.execute_transaction(call)
        if response.get("digest"):
            await self.wait_for_transaction(response["digest"])
        return response

    async def execute_sequentially(self, calls: Iterable[MoveCall]) -> list[dict]:
        """
        Run calls one at a time, each confirmed before the next is built.

        Calls mutating the same owned object must not overlap.
        """
        responses = []
        for call in calls:
            responses.append(await self.execute_and_confirm(call))
        return responses
