"""Move.toml package manifest lookup."""

import re
from pathlib import Path

from suideploy.constants import MOVE_MANIFEST, BUILD_DIR
from suideploy.exceptions import PreconditionError

NAME_PATTERN = re.compile(r'^\s*name\s*=\s*"([^"]+)"', re.MULTILINE)


def read_package_name(project_dir: Path) -> str:
    """
    Read the package name from the project's Move.toml.

    Only the first `name = "..."` line is used.

    Raises:
        PreconditionError: If the manifest is missing or has no name
    """
    manifest_path = Path(project_dir) / MOVE_MANIFEST

    if not manifest_path.exists():
        raise PreconditionError(
            f"Move manifest not found: {manifest_path}",
            context="Run suideploy from the Move package directory or pass --project-dir",
        )

    match = NAME_PATTERN.search(manifest_path.read_text(encoding="utf-8"))
    if not match:
        raise PreconditionError(
            f"Could not read package name from {manifest_path}",
            context='Expected a line like: name = "my_package"',
        )

    return match.group(1)


def build_output_dir(project_dir: Path, package_name: str) -> Path:
    """
    Expected build directory for a compiled package.

    Raises:
        PreconditionError: If the directory does not exist
    """
    build_dir = Path(project_dir) / BUILD_DIR / package_name
    if not build_dir.is_dir():
        raise PreconditionError(
            f"Build output not found: {build_dir}",
            context="Make sure `sui move build` completed successfully",
        )
    return build_dir
