"""Deploy command - Build and publish (or upgrade) the Move package"""

import click
from pathlib import Path
from typing import Optional

from suideploy.base import BaseCommand
from suideploy.models import DeploymentRecord
from suideploy.services import ContractDeployer, SuiCLI
from suideploy.utils import ProjectUtils, summarize


class DeployCommand(BaseCommand):
    """Build the Move package and publish it, or upgrade the published one."""

    operation = "deploy"
    title = "Deploy Package"

    def __init__(
        self,
        network: Optional[str] = None,
        upgrade: bool = False,
        project_dir: Optional[Path] = None,
        env_path: Optional[Path] = None,
        verbose: bool = False,
        json_output: bool = False,
    ):
        super().__init__(project_dir=project_dir, verbose=verbose, json_output=json_output)
        self.network = network
        self.upgrade = upgrade
        self.env_file = ProjectUtils.get_env_file(self.project_root, env_path)

    def create_deployer(self) -> ContractDeployer:
        """Wire the deployer to this command's project and config file."""
        return ContractDeployer(
            network=self.network,
            upgrade=self.upgrade,
            project_dir=self.project_root,
            env_file=self.env_file,
            cli=SuiCLI(self.project_root, passthrough=not self.json_output),
        )

    def execute(self) -> None:
        """Execute deploy command."""
        deployer = self.create_deployer()
        if self.upgrade:
            deployer.load_previous_deployment()

        # Logs and header are keyed by the resolved network
        network = deployer.resolve_target()

        self.show_header(
            title=self.title,
            subtitle="Upgrade of the persisted package" if self.upgrade else None,
            network=network,
            details={"Project": self.project_root, "Config": self.env_file.path},
        )

        deployer.set_logger(self.init_logger(network, self.operation))
        package_id = deployer.deploy()

        if self.json_output:
            record = DeploymentRecord.from_env(self.env_file.values(), network=network)
            self.output_json(
                {
                    "network": network,
                    "network_fallback": deployer.network_fallback,
                    "package_id": package_id,
                    "upgrade": self.upgrade,
                    "env_file": str(self.env_file.path),
                    "values": record.to_env(),
                    "warnings": deployer.warnings,
                }
            )
            return

        self.console.print()
        self.print_success("Upgrade complete" if self.upgrade else "Deployment complete")
        for key, value in summarize(
            {"Package ID": package_id, "Network": network}
        ).items():
            self.console.print(f"  [dim]{key}:[/dim] [cyan]{value}[/cyan]")

        self.console.print()
        for line in self.next_steps():
            self.print_dim(line)

        if self.logger:
            self.console.print(f"\n[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    def next_steps(self) -> list[str]:
        return [
            "Run the integration tests against the published package:",
            "  pytest tests/integration",
        ]

    def remediation_hints(self) -> list[str]:
        return [
            "Check that the sui CLI is installed and on PATH",
            "Check the active address has enough gas: sui client balance",
            "Run `sui move build` to see compiler errors",
        ]


@click.command(name="deploy")
@click.argument("network", required=False)
@click.option("--upgrade", is_flag=True, help="Upgrade the package recorded in .env")
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
    help="Config file receiving the identifiers (default: <project>/.env)",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def deploy(network, upgrade, project_dir, env_path, verbose, json_output):
    """
    Build and publish the Move package

    This command will:
    1. Resolve the active sui network and switch if NETWORK differs
    2. Build the package with `sui move build`
    3. Publish it (or upgrade it with --upgrade)
    4. Save PACKAGE_ID and the created object ids to .env

    Examples:
        suideploy deploy
        suideploy deploy testnet
        suideploy deploy devnet --upgrade
    """
    cmd = DeployCommand(
        network=network,
        upgrade=upgrade,
        project_dir=project_dir,
        env_path=env_path,
        verbose=verbose,
        json_output=json_output,
    )
    cmd.run()
