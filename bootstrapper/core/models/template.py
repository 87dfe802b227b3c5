"""
Generated file model — used by all generators.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file rendered from one of the built-in templates.

    Attributes:
        path:      Relative path from project root.
        content:   Full file content.
        overwrite: Whether to overwrite if already exists.
        reason:    Why this file was generated.
    """

    path: str
    content: str
    overwrite: bool = False
    reason: str = ""

    def write(self, root: Path) -> bool:
        """Write the file below ``root``.

        Returns:
            True if written, False if it existed and ``overwrite`` is off.
        """
        target = root / self.path
        if target.exists() and not self.overwrite:
            return False
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.content, encoding="utf-8")
        return True
