"""
Shared fixtures for the suideploy test suite.

The sui binary is never executed: SuiCLI receives a FakeSuiRunner that
answers each `sui <group> <command>` with canned output from tests/fixtures.
"""

import pytest

from suideploy.core.env_file import EnvFile
from suideploy.services.deployer import ContractDeployer
from suideploy.services.sui_cli import SuiCLI
from tests.helpers import ACTIVE_ADDRESS, FakeSuiRunner, fixture_text

MOVE_TOML = """[package]
name = "counter"
edition = "2024.beta"

[dependencies]
Sui = { git = "https://github.com/MystenLabs/sui.git", subdir = "crates/sui-framework/packages/sui-framework", rev = "framework/testnet" }

[addresses]
counter = "0x0"
"""


@pytest.fixture
def move_project(tmp_path):
    """Move package directory with a manifest and a finished build."""
    project = tmp_path / "counter"
    project.mkdir()
    (project / "Move.toml").write_text(MOVE_TOML, encoding="utf-8")
    (project / "build" / "counter").mkdir(parents=True)
    (project / "env.example").write_text(
        "# Sui network\nSUI_NETWORK=localnet\nTEST_PRIVATE_KEY=\nPACKAGE_ID=0x0\n",
        encoding="utf-8",
    )
    return project


@pytest.fixture
def sui_runner():
    runner = FakeSuiRunner()
    runner.respond("client", "envs", stdout=fixture_text("sui_client_envs.txt"))
    runner.respond("client", "active-address", stdout=f"{ACTIVE_ADDRESS}\n")
    runner.respond("client", "balance", stdout="SUI  10.00 SUI\n")
    runner.respond("move", "build", stdout="BUILDING counter\n")
    runner.respond("client", "switch", stdout="Active environment switched to [devnet]\n")
    runner.respond_json("client", "publish", "publish_success.json")
    runner.respond_json("client", "call", "authorize_upgrade.json")
    runner.respond_json("client", "upgrade", "upgrade_success.json")
    return runner


@pytest.fixture
def sui_cli(move_project, sui_runner):
    return SuiCLI(move_project, runner=sui_runner)


@pytest.fixture
def env_file(move_project):
    return EnvFile(move_project / ".env", template_path=move_project / "env.example")


@pytest.fixture
def make_deployer(move_project, env_file, sui_cli):
    def _make(network=None, upgrade=False):
        return ContractDeployer(
            network=network,
            upgrade=upgrade,
            project_dir=move_project,
            env_file=env_file,
            cli=sui_cli,
        )

    return _make
