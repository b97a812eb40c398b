"""File and directory writing helpers."""

import json
from pathlib import Path
from typing import Any


class FileWriter:
    """Create directories and write text or JSON files.

    All writes create missing parent directories and overwrite existing files.
    """

    def ensure_directory(self, path: Path) -> None:
        """Create a directory (and parents) if it does not exist."""
        path.mkdir(parents=True, exist_ok=True)

    def write_text(self, path: Path, content: str) -> None:
        """Write UTF-8 text to path."""
        self.ensure_directory(path.parent)
        path.write_text(content, encoding="utf-8")

    def write_json(self, path: Path, value: Any, indent: int = 2) -> None:
        """Write value as indented JSON, preserving key order."""
        text = json.dumps(value, indent=indent, ensure_ascii=False)
        self.write_text(path, text + "\n")
