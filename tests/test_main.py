"""CLI tests through click's CliRunner."""

import json

import pytest
from click.testing import CliRunner

from suideploy import __version__
from suideploy.main import cli
from suideploy.services.sui_cli import SuiCLI


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def fake_sui(monkeypatch, sui_runner):
    """Route every SuiCLI built by the commands through the fake runner."""

    def make_cli(project_dir, logger=None, passthrough=True):
        return SuiCLI(project_dir, logger=logger, runner=sui_runner, passthrough=passthrough)

    monkeypatch.setattr("suideploy.commands.deploy.SuiCLI", make_cli)
    return sui_runner


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_deploy_json(runner, move_project):
    result = runner.invoke(cli, ["deploy", "--project-dir", str(move_project), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["package_id"] == "0xabc"
    assert payload["network"] == "testnet"
    assert payload["upgrade"] is False
    assert payload["values"]["PUBLISHER_ID"] == "0x1111"


def test_deploy_writes_log_file(runner, move_project):
    result = runner.invoke(cli, ["deploy", "--project-dir", str(move_project)])

    assert result.exit_code == 0, result.output
    logs = list((move_project / "logs" / "testnet").rglob("*_deploy.log"))
    assert len(logs) == 1
    assert "Status: SUCCESS" in logs[0].read_text()
    assert not (move_project / "logs" / "active").exists()
    assert "Network: testnet" in result.output
    assert (move_project / ".env").exists()


def test_custom_env_file(runner, move_project, tmp_path):
    env_path = tmp_path / "deployed.env"

    result = runner.invoke(
        cli,
        ["deploy", "--project-dir", str(move_project), "--env-file", str(env_path), "--json"],
    )

    assert result.exit_code == 0, result.output
    assert "PACKAGE_ID=0xabc" in env_path.read_text()
    assert not (move_project / ".env").exists()


def test_upgrade_without_deployment_fails(runner, move_project, fake_sui):
    result = runner.invoke(cli, ["upgrade", "--project-dir", str(move_project), "--json"])

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["error"].startswith("MissingDeploymentError: Missing PACKAGE_ID, PUBLISHER_ID")
    assert "suideploy deploy" in payload["details"]["context"]
    assert fake_sui.calls == []


def test_upgrade_json(runner, move_project):
    (move_project / ".env").write_text("PACKAGE_ID=0xabc\nPUBLISHER_ID=0x1111\n")

    result = runner.invoke(cli, ["upgrade", "--project-dir", str(move_project), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["package_id"] == "0xdef"
    assert payload["upgrade"] is True


def test_deploy_upgrade_flag_matches_upgrade_command(runner, move_project, fake_sui):
    (move_project / ".env").write_text("PACKAGE_ID=0xabc\nPUBLISHER_ID=0x1111\n")

    result = runner.invoke(cli, ["deploy", "--upgrade", "--project-dir", str(move_project), "--json"])

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["package_id"] == "0xdef"
    assert fake_sui.invoked("client", "upgrade")


def test_failed_publish_exits_non_zero(runner, move_project, fake_sui):
    fake_sui.respond_json("client", "publish", "publish_failure.json")

    result = runner.invoke(cli, ["deploy", "--project-dir", str(move_project), "--json"])

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["error"] == "TransactionError: Publish failed"
    assert payload["details"]["context"] == "Error: InsufficientGas"


def test_deploy_json_excludes_unrelated_env_keys(runner, move_project):
    (move_project / ".env").write_text(
        "SUI_NETWORK=testnet\nTEST_PRIVATE_KEY=suiprivkey1SECRETSECRET\nPACKAGE_ID=0x0\n"
    )

    result = runner.invoke(cli, ["deploy", "--project-dir", str(move_project), "--json"])

    assert result.exit_code == 0, result.output
    assert "SECRET" not in result.stdout
    assert json.loads(result.stdout)["values"] == {
        "SUI_NETWORK": "testnet",
        "PACKAGE_ID": "0xabc",
        "PUBLISHER_ID": "0x1111",
        "ADMIN_CAP_ID": "0x2222",
        "GLOBAL_CONFIG_ID": "0x3333",
    }
    assert "TEST_PRIVATE_KEY=suiprivkey1SECRETSECRET" in (move_project / ".env").read_text()


def test_deploy_json_stdout_is_only_the_document(runner, move_project, fake_sui):
    result = runner.invoke(cli, ["deploy", "devnet", "--project-dir", str(move_project), "--json"])

    assert result.exit_code == 0, result.output
    assert fake_sui.invoked("client", "switch")
    assert fake_sui.invoked("move", "build")
    assert "BUILDING counter" not in result.stdout
    assert json.loads(result.stdout)["network"] == "devnet"


def test_deploy_json_reports_network_fallback(runner, move_project, fake_sui):
    fake_sui.respond("client", "envs", returncode=1, stderr="Cannot open wallet config")

    result = runner.invoke(cli, ["deploy", "--project-dir", str(move_project), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["network"] == "localnet"
    assert payload["network_fallback"] is True
    assert any("using localnet" in warning for warning in payload["warnings"])


def test_deploy_json_with_explicit_network_is_not_a_fallback(runner, move_project, fake_sui):
    fake_sui.respond("client", "envs", returncode=1, stderr="Cannot open wallet config")

    result = runner.invoke(cli, ["deploy", "testnet", "--project-dir", str(move_project), "--json"])

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["network"] == "testnet"
    assert payload["network_fallback"] is False
