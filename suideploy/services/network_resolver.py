"""
Network Resolver

Determines which sui CLI environment is currently active.
Resolution is never fatal: any failure falls back to localnet.
"""

import json
from typing import Optional

from suideploy.constants import (
    ACTIVE_ENV_MARKER,
    ENV_TABLE_DELIMITERS,
    FALLBACK_NETWORK,
)
from suideploy.exceptions import SuiDeployError
from suideploy.logger import DeployLogger
from suideploy.models.deployment import NetworkEnvironment
from suideploy.services.sui_cli import SuiCLI


def _split_row(line: str) -> list[str]:
    for delimiter in ENV_TABLE_DELIMITERS:
        if delimiter in line:
            return [cell.strip() for cell in line.split(delimiter)]
    return []


def _parse_json_envs(output: str) -> Optional[tuple[list[dict], Optional[str]]]:
    """`sui client envs --json` prints [[{alias, rpc, ...}], "active"]."""
    try:
        data = json.loads(output)
    except (json.JSONDecodeError, TypeError):
        return None

    if isinstance(data, list) and len(data) == 2 and isinstance(data[0], list):
        return data[0], data[1] if isinstance(data[1], str) else None
    return None


def parse_active_environment(output: str) -> Optional[str]:
    """
    Extract the active environment alias from `sui client envs` output.

    The first row carrying the active marker wins; its second cell
    (the one after the leading table border) is the alias.

    Returns:
        Alias, or None if no active row is found
    """
    json_envs = _parse_json_envs(output)
    if json_envs is not None:
        return json_envs[1]

    for line in output.splitlines():
        if ACTIVE_ENV_MARKER not in line:
            continue
        cells = _split_row(line)
        if len(cells) > 1 and cells[1]:
            return cells[1]
        return None

    return None


def parse_environments(output: str) -> list[NetworkEnvironment]:
    """All environments listed in `sui client envs` output."""
    json_envs = _parse_json_envs(output)
    if json_envs is not None:
        envs, active = json_envs
        return [
            NetworkEnvironment(alias=env.get("alias", ""), is_active=env.get("alias") == active)
            for env in envs
        ]

    environments = []
    for line in output.splitlines():
        cells = _split_row(line)
        if len(cells) < 3 or not cells[1] or cells[1] == "alias":
            continue
        environments.append(
            NetworkEnvironment(
                alias=cells[1],
                is_active=any(cell == ACTIVE_ENV_MARKER for cell in cells[2:]),
            )
        )
    return environments


class NetworkResolver:
    """Resolves the active sui CLI network."""

    def __init__(self, cli: SuiCLI, logger: Optional[DeployLogger] = None):
        self.cli = cli
        self.logger = logger
        self.used_fallback = False
        self.warnings: list[str] = []

    def _fallback(self, message: str) -> str:
        self.used_fallback = True
        self.warnings.append(message)
        if self.logger:
            self.logger.warning(message)
        return FALLBACK_NETWORK

    def resolve(self) -> str:
        """
        Active network alias, or the fallback when it cannot be determined.

        A fallback sets used_fallback and appends a message to warnings
        whether or not a logger is attached.
        """
        try:
            result = self.cli.list_envs()
        except SuiDeployError as e:
            return self._fallback(
                f"Could not list sui environments ({e.message}), using {FALLBACK_NETWORK}"
            )

        if self.logger:
            aliases = ", ".join(env.alias for env in parse_environments(result.output))
            self.logger.log(f"Configured environments: {aliases or 'none'}", "DEBUG")

        alias = parse_active_environment(result.output)
        if not alias:
            return self._fallback(f"No active sui environment found, using {FALLBACK_NETWORK}")

        return alias
