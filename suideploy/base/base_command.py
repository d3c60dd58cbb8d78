"""
Base Command Class

Abstract base for all suideploy CLI commands.
Provides common functionality and structure.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional, Any, Dict
import json
from rich.console import Console
from suideploy.exceptions import SuiDeployError
from suideploy.ui_components import show_header
from suideploy.logger import DeployLogger
from suideploy.utils import get_project_root


class BaseCommand(ABC):
    """
    Abstract base command class.

    Provides:
    - Logger initialization
    - Header display
    - Error handling
    - JSON output support
    """

    def __init__(
        self,
        project_dir: Optional[Path] = None,
        verbose: bool = False,
        json_output: bool = False,
    ):
        self.verbose = verbose
        self.json_output = json_output
        self.console = Console()
        self.project_root = get_project_root(project_dir)
        self.logger: Optional[DeployLogger] = None

    def init_logger(self, network: str, command_name: str) -> Optional[DeployLogger]:
        """
        Initialize command logger (skip in JSON mode).

        Args:
            network: Target network name
            command_name: Command name

        Returns:
            DeployLogger instance or None if JSON mode
        """
        if self.json_output:
            return None
        self.logger = DeployLogger(
            network, command_name, verbose=self.verbose, project_root=self.project_root
        )
        return self.logger

    def output_json(self, data: Dict[str, Any], exit_code: int = 0) -> None:
        """
        Output data as JSON and exit on error.

        Args:
            data: Data to output as JSON
            exit_code: Exit code (0 for success, non-zero for error)
        """
        print(json.dumps(data, indent=2))
        if exit_code != 0:
            raise SystemExit(exit_code)

    def output_json_error(
        self, error: str, details: Optional[Dict[str, Any]] = None, exit_code: int = 1
    ) -> None:
        """
        Output error as JSON and exit.

        Args:
            error: Error message
            details: Optional error details
            exit_code: Exit code
        """
        error_data: Dict[str, Any] = {"error": error}
        if details:
            error_data["details"] = details
        self.output_json(error_data, exit_code=exit_code)

    def show_header(
        self,
        title: str,
        subtitle: Optional[str] = None,
        network: Optional[str] = None,
        details: Optional[dict] = None,
    ) -> None:
        """Show command header (skip in JSON or verbose mode)."""
        if not self.verbose and not self.json_output:
            show_header(
                title=title,
                subtitle=subtitle,
                network=network,
                details=details,
                console=self.console,
            )

    def print_success(self, message: str) -> None:
        """Print success message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[green]✓ {message}[/green]")

    def print_error(self, message: str) -> None:
        """Print error message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[red]✗ {message}[/red]")

    def print_warning(self, message: str) -> None:
        """Print warning message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[yellow]⚠ {message}[/yellow]")

    def print_dim(self, message: str) -> None:
        """Print dim message (skip in JSON mode)."""
        if not self.json_output:
            self.console.print(f"[dim]{message}[/dim]")

    def remediation_hints(self) -> list[str]:
        """Troubleshooting lines shown after a failure."""
        return []

    def _show_log_path(self) -> None:
        if self.logger:
            self.console.print(f"[dim]Logs saved to:[/dim] {self.logger.log_path}\n")

    def _fail(self, title: str, error: Any, context: Optional[str] = None) -> None:
        if self.json_output:
            details = {"context": context} if context else None
            self.output_json_error(f"{title}: {error}", details=details)

        if self.logger:
            self.logger.log_error(f"{title}: {error}", context=context)
        else:
            self.console.print(f"\n[bold red]✗ {title}:[/bold red] {error}")
            if context:
                self.console.print(f"  [color(208)]{context}[/color(208)]")
        self.console.print()

        hints = self.remediation_hints()
        if hints:
            self.console.print("[bold]Troubleshooting:[/bold]")
            for number, hint in enumerate(hints, 1):
                self.console.print(f"  [dim]{number}.[/dim] {hint}")
            self.console.print()

        self._show_log_path()
        raise SystemExit(1)

    @abstractmethod
    def execute(self, **kwargs) -> None:
        """
        Execute command logic.

        Must be implemented by subclasses.
        """
        pass

    def run(self, **kwargs) -> None:
        """
        Run command with error handling.

        Args:
            **kwargs: Command arguments
        """
        try:
            self.execute(**kwargs)
        except KeyboardInterrupt:
            self.console.print("\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            self._show_log_path()
            raise SystemExit(130)
        except SystemExit:
            raise
        except SuiDeployError as e:
            self._fail(type(e).__name__, e.message, e.context)
        except FileNotFoundError as e:
            self._fail("File not found", e)
        except PermissionError as e:
            self._fail("Permission denied", e, "Try running with appropriate permissions")
        except ValueError as e:
            self._fail("Invalid value", e)
        except Exception as e:
            self._fail(type(e).__name__, e)
        finally:
            if self.logger:
                self.logger.close()
