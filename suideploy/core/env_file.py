"""
EnvFile - key=value upserts for the persisted deployment config

Handles:
- Seeding a missing .env from env.example (or starting empty)
- Replacing KEY=... lines in place, appending new keys at the end
- Reading values back through python-dotenv

Unrelated lines (comments, other keys) are preserved verbatim.
"""

import re
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values


class EnvFile:
    """
    Minimal key/value upserter over a .env file.

    Writes are whole-file overwrites.
    """

    def __init__(self, path: Path, template_path: Optional[Path] = None):
        """
        Initialize EnvFile.

        Args:
            path: Target .env file
            template_path: File used as initial content when path is missing
        """
        self.path = Path(path)
        self.template_path = Path(template_path) if template_path else None

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> str:
        """
        Current content of the file.

        Falls back to the template, then to an empty string.
        """
        if self.path.exists():
            return self.path.read_text(encoding="utf-8")
        if self.template_path and self.template_path.exists():
            return self.template_path.read_text(encoding="utf-8")
        return ""

    def values(self) -> Dict[str, Optional[str]]:
        """Parsed key/value pairs of the file (empty if it does not exist)."""
        if not self.path.exists():
            return {}
        return dict(dotenv_values(self.path))

    def get(self, key: str) -> Optional[str]:
        return self.values().get(key) or None

    @staticmethod
    def apply(content: str, key: str, value: str) -> str:
        """
        Replace the KEY= line in content, or append it.

        Args:
            content: Existing file content
            key: Variable name (case-sensitive)
            value: New value

        Returns:
            Updated content
        """
        pattern = re.compile(rf"^{re.escape(key)}=.*$", re.MULTILINE)
        line = f"{key}={value}"

        if pattern.search(content):
            return pattern.sub(lambda _: line, content, count=1)
        return content + f"\n{line}\n"

    def upsert(self, values: Dict[str, Optional[str]]) -> str:
        """
        Update or append each key and write the file.

        Keys whose value is None are skipped.

        Args:
            values: Mapping of key -> new value

        Returns:
            The written content
        """
        content = self.read()

        for key, value in values.items():
            if value is None:
                continue
            content = self.apply(content, key, value)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(content, encoding="utf-8")
        return content
