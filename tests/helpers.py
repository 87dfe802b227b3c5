"""
Test doubles and small builders shared by the test modules.
"""

import textwrap
from pathlib import Path

from bootstrapper.core.errors import ApplicationExists
from bootstrapper.core.models.state import BOOTSTRAP_DIR

SCAFFOLD = ("CONTRIBUTING.md", "CHANGELOG.md", "ISSUE_TEMPLATE.md")


class FakeDownloader:
    """Stands in for the archive download: creates the application skeleton."""

    def __init__(self, root: Path, error: Exception | None = None):
        self.root = root
        self.error = error
        self.calls = 0

    def download(self, force: bool = False) -> None:
        self.calls += 1
        if self.error is not None:
            raise self.error
        if (self.root / BOOTSTRAP_DIR).is_dir() and not force:
            raise ApplicationExists("-> October is already installed. Use --force to reinstall.")
        (self.root / BOOTSTRAP_DIR).mkdir(parents=True, exist_ok=True)
        (self.root / "plugins").mkdir(exist_ok=True)
        for name in SCAFFOLD:
            (self.root / name).write_text("scaffold\n")


class Messages(list):
    """Collects (style, message) pairs from a reporter."""

    def __call__(self, message: str, style: str = "info") -> None:
        self.append((style, message))

    def __bool__(self) -> bool:
        # A reporter is always truthy, even before it has collected anything.
        return True

    def texts(self, style: str | None = None) -> list[str]:
        return [m for s, m in self if style is None or s == style]


def write_config(root: Path, content: str = "") -> Path:
    """Write october.yaml into ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    path = root / "october.yaml"
    path.write_text(textwrap.dedent(content))
    return path


def make_plugin(root: Path, vendor: str, name: str) -> Path:
    """Create an installed plugin directory with a file in it."""
    path = root / "plugins" / vendor.lower() / name.lower()
    path.mkdir(parents=True, exist_ok=True)
    (path / "Plugin.php").write_text("<?php // installed\n")
    return path
