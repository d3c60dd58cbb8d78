"""
Deployment Models

Dataclass models for network environments, persisted deployment records,
and read-only projections of transaction responses.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Mapping
from enum import Enum

from suideploy.constants import (
    ENV_NETWORK,
    ENV_PACKAGE_ID,
    ENV_PUBLISHER_ID,
    ENV_ADMIN_CAP_ID,
    ENV_GLOBAL_CONFIG_ID,
    ENV_UPGRADE_CAP_ID,
)


class TxStatus(Enum):
    """Execution status reported in transaction effects."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class NetworkEnvironment:
    """A network environment configured in the sui CLI."""

    alias: str
    is_active: bool = False

    def __repr__(self) -> str:
        return f"NetworkEnvironment(alias={self.alias}, active={self.is_active})"


# Record field -> persisted env key
RECORD_ENV_KEYS = {
    "network": ENV_NETWORK,
    "package_id": ENV_PACKAGE_ID,
    "publisher_id": ENV_PUBLISHER_ID,
    "admin_cap_id": ENV_ADMIN_CAP_ID,
    "global_config_id": ENV_GLOBAL_CONFIG_ID,
    "upgrade_cap_id": ENV_UPGRADE_CAP_ID,
}


@dataclass
class DeploymentRecord:
    """Identifiers known about a published package at a given point."""

    network: str
    package_id: Optional[str] = None
    publisher_id: Optional[str] = None
    admin_cap_id: Optional[str] = None
    global_config_id: Optional[str] = None
    upgrade_cap_id: Optional[str] = None

    def __post_init__(self):
        if self.package_id is not None and not self.package_id.startswith("0x"):
            raise ValueError(f"Package id must be a 0x-prefixed hex string: {self.package_id}")

    def to_env(self) -> Dict[str, str]:
        """Persisted key/value pairs; absent fields are omitted."""
        values = {}
        for attr, key in RECORD_ENV_KEYS.items():
            value = getattr(self, attr)
            if value:
                values[key] = value
        return values

    @classmethod
    def from_env(cls, env: Mapping[str, Optional[str]], network: str = "") -> "DeploymentRecord":
        """Load a record from persisted key/value pairs."""
        kwargs = {
            attr: env.get(key) or None
            for attr, key in RECORD_ENV_KEYS.items()
            if attr != "network"
        }
        return cls(network=env.get(ENV_NETWORK) or network, **kwargs)


@dataclass
class ObjectChange:
    """One entry of a transaction response's objectChanges list."""

    type: str
    object_id: Optional[str] = None
    object_type: str = ""
    package_id: Optional[str] = None
    owner: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ObjectChange":
        """Create from a JSON objectChanges entry."""
        return cls(
            type=data.get("type", ""),
            object_id=data.get("objectId"),
            object_type=data.get("objectType") or "",
            package_id=data.get("packageId"),
            owner=data.get("owner"),
        )


@dataclass
class TransactionOutcome:
    """
    Read-only projection of a publish/call/upgrade/execute response.

    Accepts both the sui CLI's --json output and the fullnode's
    sui_executeTransactionBlock result, which share the same shape.
    """

    status: TxStatus
    changes: list[ObjectChange] = field(default_factory=list)
    error: Optional[str] = None
    digest: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_response(cls, data: Dict[str, Any]) -> "TransactionOutcome":
        """Project a JSON response."""
        status_block = (data.get("effects") or {}).get("status") or {}
        status = (
            TxStatus.SUCCESS
            if status_block.get("status") == TxStatus.SUCCESS.value
            else TxStatus.FAILURE
        )
        changes = [ObjectChange.from_dict(c) for c in data.get("objectChanges") or []]
        return cls(
            status=status,
            changes=changes,
            error=status_block.get("error"),
            digest=data.get("digest"),
            raw=data,
        )

    @property
    def is_success(self) -> bool:
        return self.status == TxStatus.SUCCESS

    @property
    def created_objects(self) -> list[ObjectChange]:
        return [c for c in self.changes if c.type == "created"]

    @property
    def mutated_objects(self) -> list[ObjectChange]:
        return [c for c in self.changes if c.type == "mutated"]

    def published_package_id(self) -> Optional[str]:
        """Package id of the first published change, if any."""
        for change in self.changes:
            if change.type == "published" and change.package_id:
                return change.package_id
        return None

    def find_created(self, type_substring: str) -> Optional[str]:
        """Object id of the first created object whose type contains the substring."""
        for change in self.created_objects:
            if type_substring in change.object_type:
                return change.object_id
        return None

    def __repr__(self) -> str:
        return f"TransactionOutcome(status={self.status.value}, changes={len(self.changes)})"
