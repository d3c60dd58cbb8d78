"""Tests for project helpers."""

import pytest

from suideploy.core.manifest import read_package_name
from suideploy.exceptions import PreconditionError
from suideploy.utils import EnvironmentValidator, ProjectUtils, mask_value, summarize


def test_package_name_uses_first_name_line(tmp_path):
    (tmp_path / "Move.toml").write_text(
        '[package]\nname = "counter"\n\n[dependencies.Other]\nname = "other"\n'
    )

    assert read_package_name(tmp_path) == "counter"


def test_manifest_without_name(tmp_path):
    (tmp_path / "Move.toml").write_text("[package]\nedition = \"2024.beta\"\n")

    with pytest.raises(PreconditionError, match="Could not read package name"):
        read_package_name(tmp_path)


def test_env_file_defaults_to_project_dotenv(tmp_path):
    env = ProjectUtils.get_env_file(tmp_path)

    assert env.path == tmp_path / ".env"
    assert env.template_path == tmp_path / "env.example"


def test_validator_reports_empty_values():
    result = EnvironmentValidator.validate_env_vars(
        {"PACKAGE_ID": "0xabc", "PUBLISHER_ID": ""}, ["PACKAGE_ID", "PUBLISHER_ID"]
    )

    assert not result.is_valid
    assert result.errors == ["PUBLISHER_ID"]


def test_mask_value():
    address = "0x5b1c7f2e3a9d4c6b8e0f1a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d5e6f7"

    assert mask_value(address) == "0x5b1c7f…d5e6f7"
    assert mask_value("0xabc") == "0xabc"
    assert mask_value(None) == "-"


def test_summarize_drops_empty_values():
    assert summarize({"Package ID": "0xabc", "Admin": None}) == {"Package ID": "0xabc"}
