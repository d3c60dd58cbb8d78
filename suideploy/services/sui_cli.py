"""
Sui CLI Adapter

Narrow wrapper around the `sui` binary. Every invocation goes through
_run_command so exit codes, logging and JSON parsing are handled in one place.
"""

import json
import subprocess
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from suideploy.constants import (
    SUI_BINARY,
    PUBLISH_GAS_BUDGET,
    UPGRADE_GAS_BUDGET,
)
from suideploy.exceptions import SuiCommandError
from suideploy.logger import DeployLogger
from suideploy.models.results import ExecutionResult


class SuiCLI:
    """
    Executes sui CLI commands for one Move project.

    Responsibilities:
    - Environment listing and switching
    - Address / balance queries
    - Build, publish, call and upgrade
    - JSON response parsing
    """

    def __init__(
        self,
        project_dir: Path,
        logger: Optional[DeployLogger] = None,
        binary: str = SUI_BINARY,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        passthrough: bool = True,
    ):
        """
        Initialize the adapter.

        Args:
            project_dir: Move package directory (cwd for every command)
            logger: Optional logger receiving commands and their output
            binary: sui executable name or path
            runner: subprocess.run compatible callable
            passthrough: Let switch and build write to the terminal; when False
                their output is captured and only logged
        """
        self.project_dir = Path(project_dir)
        self.logger = logger
        self.binary = binary
        self.runner = runner
        self.passthrough = passthrough

    def _run_command(
        self, args: list[str], capture_output: bool = True, check: bool = True
    ) -> ExecutionResult:
        """
        Run a sui command.

        Args:
            args: Command arguments (e.g., ['client', 'envs'])
            capture_output: Capture stdout/stderr; False passes them through to the terminal
            check: Whether to raise on non-zero exit

        Returns:
            ExecutionResult object

        Raises:
            SuiCommandError: If the command cannot start, or fails and check=True
        """
        cmd = [self.binary] + args
        cmd_string = " ".join(cmd)

        if self.logger:
            self.logger.log_command(cmd_string)

        try:
            result = self.runner(
                cmd,
                cwd=self.project_dir,
                capture_output=capture_output,
                text=True,
                encoding="utf-8",
                check=False,
            )
        except (OSError, subprocess.SubprocessError) as e:
            raise SuiCommandError(
                f"Failed to execute sui command: {cmd_string}",
                context=str(e),
            ) from e

        exec_result = ExecutionResult(
            returncode=result.returncode,
            stdout=(result.stdout or "") if capture_output else "",
            stderr=(result.stderr or "") if capture_output else "",
            command=cmd_string,
        )

        if self.logger:
            self.logger.log_output(exec_result.stdout, "stdout")
            self.logger.log_output(exec_result.stderr, "stderr")

        if check and exec_result.is_failure:
            context = f"Exit code: {exec_result.returncode}"
            if exec_result.stderr.strip():
                context += f"\nError: {exec_result.stderr.strip()}"
            raise SuiCommandError(f"sui command failed: {cmd_string}", context=context)

        return exec_result

    def _run_json(self, args: list[str]) -> Dict[str, Any]:
        """Run a command with --json and parse its stdout."""
        result = self._run_command(args + ["--json"])
        return parse_json_output(result.stdout, result.command)

    def list_envs(self) -> ExecutionResult:
        """`sui client envs` (tabular text)."""
        return self._run_command(["client", "envs"])

    def switch_env(self, alias: str) -> ExecutionResult:
        """`sui client switch --env <alias>`."""
        return self._run_command(
            ["client", "switch", "--env", alias], capture_output=not self.passthrough
        )

    def active_address(self) -> str:
        return self._run_command(["client", "active-address"]).stdout.strip()

    def balance(self) -> str:
        return self._run_command(["client", "balance"]).stdout.strip()

    def build(self) -> ExecutionResult:
        """`sui move build`."""
        return self._run_command(["move", "build"], capture_output=not self.passthrough)

    def publish(self, gas_budget: int = PUBLISH_GAS_BUDGET) -> Dict[str, Any]:
        return self._run_json(["client", "publish", "--gas-budget", str(gas_budget)])

    def call(
        self,
        package: str,
        module: str,
        function: str,
        args: list[str],
        gas_budget: int,
    ) -> Dict[str, Any]:
        """`sui client call` a Move function."""
        cmd = [
            "client",
            "call",
            "--package",
            package,
            "--module",
            module,
            "--function",
            function,
        ]
        if args:
            cmd += ["--args"] + list(args)
        cmd += ["--gas-budget", str(gas_budget)]
        return self._run_json(cmd)

    def upgrade(
        self, upgrade_cap_id: str, gas_budget: int = UPGRADE_GAS_BUDGET
    ) -> Dict[str, Any]:
        return self._run_json(
            [
                "client",
                "upgrade",
                "--upgrade-capability",
                upgrade_cap_id,
                "--gas-budget",
                str(gas_budget),
            ]
        )


def parse_json_output(stdout: str, command: str = "") -> Dict[str, Any]:
    """
    Parse the JSON document in a sui --json stdout.

    The CLI may print version-mismatch warnings ahead of the document,
    so parsing starts at the first '{'.

    Raises:
        SuiCommandError: If no JSON object can be decoded
    """
    text = stdout.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    start = text.find("{")
    if start != -1:
        try:
            document, _ = json.JSONDecoder().raw_decode(text[start:])
            return document
        except json.JSONDecodeError:
            pass

    raise SuiCommandError(
        f"Could not parse JSON output of: {command or 'sui'}",
        context=text[:500] or "(empty output)",
    )
