"""
suideploy RPC Test Client

Async fullnode client and signing identity used to exercise a deployed package.
"""

from .keypair import Ed25519Keypair
from .rpc import SuiRpcClient
from .sui_client import SuiTestClient
from .transactions import MoveCall

__all__ = [
    "Ed25519Keypair",
    "SuiRpcClient",
    "SuiTestClient",
    "MoveCall",
]
