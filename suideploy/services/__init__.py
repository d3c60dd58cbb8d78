"""
suideploy Services Layer

sui CLI access, network resolution and the deploy/upgrade orchestration.
"""

from .sui_cli import SuiCLI
from .network_resolver import NetworkResolver
from .deployer import ContractDeployer

__all__ = [
    "SuiCLI",
    "NetworkResolver",
    "ContractDeployer",
]
