"""Test helpers: canned sui CLI output and a subprocess stand-in."""

import json
import subprocess
import sys
from pathlib import Path

FIXTURES_DIR = Path(__file__).parent / "fixtures"

ACTIVE_ADDRESS = "0x5b1c7f2e3a9d4c6b8e0f1a2b3c4d5e6f708192a3b4c5d6e7f8091a2b3c4d5e6f7"


def fixture_text(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


def load_fixture(name: str) -> dict:
    return json.loads(fixture_text(name))


class FakeSuiRunner:
    """
    subprocess.run stand-in keyed on the first two sui arguments.

    Output of calls that are not captured goes to the inherited stdout,
    as a real child process would write it.
    """

    def __init__(self):
        self.calls: list[list[str]] = []
        self.responses: dict[tuple, tuple[int, str, str]] = {}

    def respond(self, group: str, command: str, stdout: str = "", stderr: str = "", returncode: int = 0):
        self.responses[(group, command)] = (returncode, stdout, stderr)
        return self

    def respond_json(self, group: str, command: str, fixture: str):
        return self.respond(group, command, stdout=fixture_text(fixture))

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        returncode, stdout, stderr = self.responses.get(tuple(cmd[1:3]), (0, "", ""))
        if not kwargs.get("capture_output", False):
            sys.stdout.write(stdout)
            sys.stderr.write(stderr)
            stdout, stderr = None, None
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)

    def commands(self) -> list[str]:
        return [" ".join(cmd) for cmd in self.calls]

    def invoked(self, group: str, command: str) -> bool:
        return any(tuple(cmd[1:3]) == (group, command) for cmd in self.calls)
