"""
Fixtures for tests against a live Sui network.

Configuration comes from the project's .env (SUI_NETWORK, SUI_RPC_URL,
TEST_PRIVATE_KEY, PACKAGE_ID). Every test is skipped while PACKAGE_ID is
unset or the fullnode cannot be reached.
"""

import warnings
from pathlib import Path

import pytest
import pytest_asyncio
from dotenv import load_dotenv

from suideploy.client import SuiTestClient
from suideploy.exceptions import SuiRpcError

PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Below 0.1 SUI the full suite may run out of gas
LOW_BALANCE_WARNING = 100_000_000

load_dotenv(PROJECT_ROOT / ".env")


@pytest_asyncio.fixture
async def sui_client():
    client = SuiTestClient.from_env()
    if not client.has_package:
        await client.aclose()
        pytest.skip("PACKAGE_ID not set; run `suideploy deploy <network>` first")

    try:
        balance = await client.get_balance()
    except SuiRpcError as e:
        await client.aclose()
        pytest.skip(f"Sui fullnode unreachable at {client.rpc.url}: {e.message}")

    if balance == 0:
        await client.aclose()
        pytest.skip(f"{client.address} has no SUI; fund it or set TEST_PRIVATE_KEY")
    if balance < LOW_BALANCE_WARNING:
        warnings.warn(f"{client.address} holds {balance} MIST, at least 0.1 SUI is recommended")

    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def counter_id(sui_client):
    """A freshly created Counter owned by the test address."""
    response = await sui_client.execute_and_confirm(sui_client.move_call("counter", "create"))
    created = [c for c in response["objectChanges"] if c["type"] == "created"]
    return created[0]["objectId"]
