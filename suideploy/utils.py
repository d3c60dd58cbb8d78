"""
CLI Utilities

Core utility functions and classes for the suideploy CLI.
"""

from pathlib import Path
from typing import Optional, Dict, List, Mapping

from suideploy.constants import ENV_FILE, ENV_TEMPLATE_FILE
from suideploy.core.env_file import EnvFile
from suideploy.models.results import ValidationResult


class ProjectUtils:
    """Utilities for locating the Move project and its config files."""

    @staticmethod
    def get_project_root(project_dir: Optional[Path] = None) -> Path:
        """
        Get the Move project directory.

        Args:
            project_dir: Explicit directory (defaults to the current directory)

        Returns:
            Resolved project path
        """
        return Path(project_dir or Path.cwd()).resolve()

    @staticmethod
    def get_env_file(project_root: Path, env_path: Optional[Path] = None) -> EnvFile:
        """
        Get the persisted deployment config for a project.

        Args:
            project_root: Move project directory
            env_path: Explicit .env path (defaults to <project>/.env)

        Returns:
            EnvFile seeded from <project>/env.example when missing
        """
        return EnvFile(
            Path(env_path) if env_path else project_root / ENV_FILE,
            template_path=project_root / ENV_TEMPLATE_FILE,
        )


class EnvironmentValidator:
    """Validates persisted configuration values."""

    @staticmethod
    def validate_env_vars(
        env: Mapping[str, Optional[str]], required_keys: List[str]
    ) -> ValidationResult:
        """
        Validate required variables are present.

        Args:
            env: Dictionary of variables
            required_keys: List of required variable names

        Returns:
            ValidationResult whose errors are the missing (or empty) keys, in order
        """
        result = ValidationResult(is_valid=True)

        for key in required_keys:
            if not env.get(key):
                result.add_error(key)

        return result


def get_project_root(project_dir: Optional[Path] = None) -> Path:
    """Get the Move project directory."""
    return ProjectUtils.get_project_root(project_dir)


def mask_value(value: Optional[str], keep: int = 6) -> str:
    """Shorten an object id or address for console output."""
    if not value:
        return "-"
    if len(value) <= keep * 2 + 3:
        return value
    return f"{value[:keep + 2]}…{value[-keep:]}"


def summarize(values: Dict[str, Optional[str]]) -> Dict[str, str]:
    """Drop empty values and shorten the rest for header display."""
    return {key: mask_value(value) for key, value in values.items() if value}
