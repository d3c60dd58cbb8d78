"""
suideploy Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import (
    ValidationResult,
    ExecutionResult,
)
from .deployment import (
    TxStatus,
    NetworkEnvironment,
    DeploymentRecord,
    ObjectChange,
    TransactionOutcome,
)

__all__ = [
    # Results
    "ValidationResult",
    "ExecutionResult",
    # Deployment
    "TxStatus",
    "NetworkEnvironment",
    "DeploymentRecord",
    "ObjectChange",
    "TransactionOutcome",
]
