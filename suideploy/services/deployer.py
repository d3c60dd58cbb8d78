"""
Contract Deployer

Sequences the sui CLI calls that publish or upgrade a Move package and
persists the identifiers found in the responses.

Flow:
1. Resolve and (if needed) switch the active network
2. Log active address and balance
3. Build the package and check the build output
4. Publish, or authorize + upgrade
5. Upsert identifiers into .env

Every failure aborts the run; nothing is retried or rolled back.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from suideploy.constants import (
    AUTHORIZE_UPGRADE_FUNCTION,
    AUTHORIZE_UPGRADE_GAS_BUDGET,
    AUTHORIZE_UPGRADE_MODULE,
    ADMIN_CAP_TYPE,
    ENV_PACKAGE_ID,
    ENV_PUBLISHER_ID,
    ENV_UPGRADE_CAP_ID,
    GLOBAL_CONFIG_TYPE,
    PUBLISH_GAS_BUDGET,
    PUBLISHER_TYPE,
    SYSTEM_PACKAGE_ID,
    UPGRADE_CAP_TYPE,
    UPGRADE_GAS_BUDGET,
)
from suideploy.core.env_file import EnvFile
from suideploy.core.manifest import build_output_dir, read_package_name
from suideploy.exceptions import (
    MissingDeploymentError,
    SuiDeployError,
    TransactionError,
)
from suideploy.logger import DeployLogger
from suideploy.models.deployment import DeploymentRecord, TransactionOutcome
from suideploy.services.network_resolver import NetworkResolver
from suideploy.services.sui_cli import SuiCLI
from suideploy.utils import EnvironmentValidator, ProjectUtils


def require_success(response: Dict[str, Any], action: str) -> TransactionOutcome:
    """
    Project a response and fail unless its effects report success.

    Raises:
        TransactionError: With the tool's reported error
    """
    outcome = TransactionOutcome.from_response(response)
    if not outcome.is_success:
        raise TransactionError(f"{action} failed", error=outcome.error or "unknown error")
    return outcome


class ContractDeployer:
    """
    Publishes or upgrades the Move package in project_dir.

    Responsibilities:
    - Network selection
    - Build verification
    - Publish / upgrade transactions
    - Persisting identifiers
    """

    def __init__(
        self,
        network: Optional[str] = None,
        upgrade: bool = False,
        project_dir: Optional[Path] = None,
        env_file: Optional[EnvFile] = None,
        cli: Optional[SuiCLI] = None,
        logger: Optional[DeployLogger] = None,
    ):
        """
        Initialize deployer.

        Args:
            network: Target network (defaults to the active one)
            upgrade: Upgrade the persisted package instead of publishing
            project_dir: Move package directory (defaults to cwd)
            env_file: Persisted config (defaults to <project_dir>/.env)
            cli: sui CLI adapter
            logger: Optional DeployLogger
        """
        self.requested_network = network
        self.upgrade = upgrade
        self.project_dir = ProjectUtils.get_project_root(project_dir)
        self.env_file = env_file or ProjectUtils.get_env_file(self.project_dir)
        self.logger = logger
        self.cli = cli or SuiCLI(self.project_dir, logger=logger)
        self.resolver = NetworkResolver(self.cli, logger=logger)
        self.network: Optional[str] = network
        self.active_network: Optional[str] = None
        self.network_fallback = False
        self.previous: Optional[DeploymentRecord] = None
        self.warnings: list[str] = []

    def _step(self, name: str) -> None:
        if self.logger:
            self.logger.step(name)

    def _success(self, message: str) -> None:
        if self.logger:
            self.logger.success(message)

    def _warning(self, message: str) -> None:
        self.warnings.append(message)
        if self.logger:
            self.logger.warning(message)

    def set_logger(self, logger: Optional[DeployLogger]) -> None:
        """
        Attach a logger after construction.

        Warnings raised before the logger existed are replayed into it.
        """
        self.logger = logger
        self.cli.logger = logger
        self.resolver.logger = logger
        if logger:
            for message in self.warnings:
                logger.warning(message)

    def get_network(self) -> Optional[str]:
        return self.network

    def resolve_target(self) -> str:
        """
        Resolve the active network once and pick the target.

        The target is the requested network, else the active one.
        network_fallback is set when the target is the fallback alias
        because the active network could not be determined.
        """
        if self.active_network is None:
            self.active_network = self.resolver.resolve()
            self.warnings.extend(self.resolver.warnings)
            self.network = self.requested_network or self.active_network
            self.network_fallback = self.requested_network is None and self.resolver.used_fallback
        return self.network

    def deploy(self) -> str:
        """
        Run the full publish or upgrade flow.

        Returns:
            Published (or upgraded) package id
        """
        if self.upgrade:
            # Fail before touching the network when nothing was published
            record = self.previous or self.load_previous_deployment()
            self.prepare()
            return self.upgrade_package(record)

        self.prepare()
        return self.publish_package()

    def prepare(self) -> Path:
        """
        Shared prefix: network, account info, build.

        Returns:
            Build output directory
        """
        self._step("Selecting network")
        self.resolve_target()
        active = self.active_network

        if self.network != active:
            self.cli.switch_env(self.network)
            self._success(f"Switched from {active} to {self.network}")
        else:
            self._success(f"Using active network {self.network}")

        self._step("Checking account")
        address = self.cli.active_address()
        self._success(f"Active address: {address}")
        balance = self.cli.balance()
        if self.logger:
            self.logger.log(f"Balance:\n{balance}")
        self._success("Balance queried")

        self._step("Building Move package")
        self.cli.build()
        package_name = read_package_name(self.project_dir)
        build_dir = build_output_dir(self.project_dir, package_name)
        self._success(f"Built {package_name} ({build_dir})")

        return build_dir

    def publish_package(self) -> str:
        """
        Publish the package and persist every identifier found.

        Returns:
            New package id
        """
        self._step("Publishing package")
        response = self.cli.publish(gas_budget=PUBLISH_GAS_BUDGET)
        outcome = require_success(response, "Publish")

        package_id = outcome.published_package_id()
        if not package_id:
            raise TransactionError("Publish response contains no published package id")

        record = DeploymentRecord(
            network=self.network,
            package_id=package_id,
            publisher_id=outcome.find_created(PUBLISHER_TYPE),
            admin_cap_id=outcome.find_created(ADMIN_CAP_TYPE),
            global_config_id=outcome.find_created(GLOBAL_CONFIG_TYPE),
        )
        self._success(f"Package published: {package_id}")

        for label, value in (
            ("Publisher", record.publisher_id),
            ("AdminCap", record.admin_cap_id),
            ("GlobalConfig", record.global_config_id),
        ):
            if value:
                self._success(f"{label}: {value}")

        self._step("Saving configuration")
        self.env_file.upsert(record.to_env())
        self._success(f"Configuration saved to {self.env_file.path}")

        return package_id

    def load_previous_deployment(self) -> DeploymentRecord:
        """
        Persisted record needed for an upgrade.

        Raises:
            MissingDeploymentError: If PACKAGE_ID or PUBLISHER_ID is missing
        """
        values = self.env_file.values()
        validation = EnvironmentValidator.validate_env_vars(
            values, [ENV_PACKAGE_ID, ENV_PUBLISHER_ID]
        )
        if not validation.is_valid:
            raise MissingDeploymentError(validation.errors, str(self.env_file.path))

        self.previous = DeploymentRecord.from_env(values, network=self.network or "")
        return self.previous

    def upgrade_package(self, record: Optional[DeploymentRecord] = None) -> str:
        """
        Authorize and run an upgrade of the persisted package.

        Only PACKAGE_ID is rewritten on success.

        Returns:
            Upgraded package id
        """
        self._step("Loading previous deployment")
        if record is None:
            record = self.load_previous_deployment()
        self._success(f"Current package: {record.package_id}")

        self._step("Authorizing upgrade")
        response = self.cli.call(
            package=SYSTEM_PACKAGE_ID,
            module=AUTHORIZE_UPGRADE_MODULE,
            function=AUTHORIZE_UPGRADE_FUNCTION,
            args=[record.publisher_id],
            gas_budget=AUTHORIZE_UPGRADE_GAS_BUDGET,
        )
        outcome = require_success(response, "Upgrade authorization")

        upgrade_cap_id = outcome.find_created(UPGRADE_CAP_TYPE)
        if not upgrade_cap_id:
            raise TransactionError("Upgrade authorization created no UpgradeCap")
        self._success(f"UpgradeCap: {upgrade_cap_id}")

        self._step("Upgrading package")
        try:
            response = self.cli.upgrade(upgrade_cap_id, gas_budget=UPGRADE_GAS_BUDGET)
            outcome = require_success(response, "Upgrade")
            new_package_id = outcome.published_package_id()
            if not new_package_id:
                raise TransactionError("Upgrade response contains no published package id")
        except SuiDeployError:
            # The authorized capability outlives the failed upgrade
            self.env_file.upsert({ENV_UPGRADE_CAP_ID: upgrade_cap_id})
            self._warning(
                f"Upgrade failed after authorization; {ENV_UPGRADE_CAP_ID}={upgrade_cap_id} "
                f"recorded in {self.env_file.path}"
            )
            raise

        self._success(f"Package upgraded: {record.package_id} → {new_package_id}")

        self._step("Saving configuration")
        self.env_file.upsert({ENV_PACKAGE_ID: new_package_id})
        self._success(f"{ENV_PACKAGE_ID} updated in {self.env_file.path}")

        return new_package_id
