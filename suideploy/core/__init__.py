"""
suideploy Core

Configuration file and manifest handling.
"""

from .env_file import EnvFile
from .manifest import read_package_name, build_output_dir

__all__ = [
    "EnvFile",
    "read_package_name",
    "build_output_dir",
]
