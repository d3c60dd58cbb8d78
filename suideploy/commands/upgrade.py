"""Upgrade command - Authorize and publish an upgrade of the deployed package"""

import click
from pathlib import Path
from typing import Optional

from suideploy.commands.deploy import DeployCommand


class UpgradeCommand(DeployCommand):
    """Upgrade the package whose ids are recorded in .env."""

    operation = "upgrade"
    title = "Upgrade Package"

    def __init__(
        self,
        network: Optional[str] = None,
        project_dir: Optional[Path] = None,
        env_path: Optional[Path] = None,
        verbose: bool = False,
        json_output: bool = False,
    ):
        super().__init__(
            network=network,
            upgrade=True,
            project_dir=project_dir,
            env_path=env_path,
            verbose=verbose,
            json_output=json_output,
        )

    def next_steps(self) -> list[str]:
        return [
            "After upgrading:",
            "  1. Run the tests to make sure everything still works: pytest tests/integration",
            "  2. Call upgrade_version on existing Counter objects if the module expects it",
            "  3. Verify the new entry functions on the upgraded package",
        ]

    def remediation_hints(self) -> list[str]:
        return [
            f"Make sure {self.env_file.path} exists and contains PACKAGE_ID and PUBLISHER_ID",
            "Make sure the active address owns the upgrade authority",
            "Check network connectivity",
            "Check the gas balance: sui client balance",
        ]


@click.command(name="upgrade")
@click.argument("network", required=False)
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Move package directory (default: current directory)",
)
@click.option(
    "--env-file",
    "env_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file holding PACKAGE_ID and PUBLISHER_ID (default: <project>/.env)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def upgrade(network, project_dir, env_path, verbose, json_output):
    """
    Upgrade the deployed Move package

    Uses the active network unless NETWORK is given. Only PACKAGE_ID
    is rewritten in .env; every other key is left untouched.

    Examples:
        suideploy upgrade
        suideploy upgrade localnet
    """
    cmd = UpgradeCommand(
        network=network,
        project_dir=project_dir,
        env_path=env_path,
        verbose=verbose,
        json_output=json_output,
    )
    cmd.run()
