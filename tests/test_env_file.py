"""Tests for EnvFile key=value upserts."""

from suideploy.core.env_file import EnvFile


def test_replaces_existing_key_in_place(tmp_path):
    path = tmp_path / ".env"
    path.write_text("# header\nSUI_NETWORK=localnet\nPACKAGE_ID=0x0\nOTHER=keep\n")

    EnvFile(path).upsert({"PACKAGE_ID": "0xabc"})

    assert path.read_text() == "# header\nSUI_NETWORK=localnet\nPACKAGE_ID=0xabc\nOTHER=keep\n"


def test_appends_missing_key_with_leading_newline(tmp_path):
    path = tmp_path / ".env"
    path.write_text("SUI_NETWORK=testnet")

    EnvFile(path).upsert({"PUBLISHER_ID": "0x1111"})

    assert path.read_text() == "SUI_NETWORK=testnet\nPUBLISHER_ID=0x1111\n"


def test_missing_file_is_seeded_from_template(tmp_path):
    template = tmp_path / "env.example"
    template.write_text("# Sui network\nSUI_NETWORK=localnet\nPACKAGE_ID=0x0\n")
    path = tmp_path / ".env"

    EnvFile(path, template_path=template).upsert({"SUI_NETWORK": "devnet", "PACKAGE_ID": "0xabc"})

    assert path.read_text() == "# Sui network\nSUI_NETWORK=devnet\nPACKAGE_ID=0xabc\n"
    assert template.read_text() == "# Sui network\nSUI_NETWORK=localnet\nPACKAGE_ID=0x0\n"


def test_missing_file_and_template_starts_empty(tmp_path):
    path = tmp_path / ".env"

    EnvFile(path, template_path=tmp_path / "absent.example").upsert({"PACKAGE_ID": "0xabc"})

    assert path.read_text() == "\nPACKAGE_ID=0xabc\n"


def test_only_first_matching_line_is_replaced(tmp_path):
    path = tmp_path / ".env"
    path.write_text("PACKAGE_ID=0x1\nPACKAGE_ID=0x2\n")

    EnvFile(path).upsert({"PACKAGE_ID": "0x3"})

    assert path.read_text() == "PACKAGE_ID=0x3\nPACKAGE_ID=0x2\n"


def test_keys_are_case_sensitive_and_anchored(tmp_path):
    path = tmp_path / ".env"
    path.write_text("package_id=lower\nOLD_PACKAGE_ID=0x9\n")

    EnvFile(path).upsert({"PACKAGE_ID": "0xabc"})

    assert path.read_text() == "package_id=lower\nOLD_PACKAGE_ID=0x9\n\nPACKAGE_ID=0xabc\n"


def test_value_with_backslashes_is_written_literally(tmp_path):
    path = tmp_path / ".env"
    path.write_text("TEST_PRIVATE_KEY=old\n")

    EnvFile(path).upsert({"TEST_PRIVATE_KEY": r"a\1b\g<0>"})

    assert path.read_text() == "TEST_PRIVATE_KEY=a\\1b\\g<0>\n"


def test_none_values_are_skipped(tmp_path):
    path = tmp_path / ".env"
    path.write_text("PACKAGE_ID=0x0\n")

    EnvFile(path).upsert({"PACKAGE_ID": "0xabc", "ADMIN_CAP_ID": None})

    assert path.read_text() == "PACKAGE_ID=0xabc\n"


def test_upsert_is_idempotent(tmp_path):
    path = tmp_path / ".env"
    path.write_text("SUI_NETWORK=localnet\n")
    env = EnvFile(path)

    first = env.upsert({"PACKAGE_ID": "0xabc"})
    second = env.upsert({"PACKAGE_ID": "0xabc"})

    assert first == second


def test_values_reads_back_through_dotenv(tmp_path):
    path = tmp_path / ".env"
    path.write_text("# comment\nSUI_NETWORK=testnet\nPACKAGE_ID=0xabc\n")
    env = EnvFile(path)

    assert env.values() == {"SUI_NETWORK": "testnet", "PACKAGE_ID": "0xabc"}
    assert env.get("PACKAGE_ID") == "0xabc"
    assert env.get("PUBLISHER_ID") is None


def test_values_of_missing_file_is_empty(tmp_path):
    env = EnvFile(tmp_path / ".env")

    assert not env.exists()
    assert env.values() == {}


def test_upsert_creates_parent_directories(tmp_path):
    path = tmp_path / "config" / "deploy.env"

    EnvFile(path).upsert({"PACKAGE_ID": "0xabc"})

    assert path.exists()
