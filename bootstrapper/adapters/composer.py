"""
Composer adapter — install the application's PHP dependencies.

Prefers a global ``composer`` on PATH and falls back to a
``composer.phar`` in the project root, run with the configured php.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from bootstrapper.adapters.shell.command import CommandResult, CommandRunner

logger = logging.getLogger(__name__)

INSTALL_FLAGS = ("--no-interaction", "--prefer-dist", "--no-scripts")


class Composer:
    """Thin wrapper over the composer CLI."""

    def __init__(self, root: Path, php: str = "php", runner: CommandRunner | None = None):
        self.root = root
        self.php = php
        self.runner = runner or CommandRunner()

    def executable(self) -> list[str]:
        """Command prefix used to invoke composer."""
        phar = self.root / "composer.phar"
        if shutil.which("composer") is None and phar.is_file():
            return [self.php, str(phar)]
        return ["composer"]

    def install(self) -> CommandResult:
        command = [*self.executable(), "install", *INSTALL_FLAGS]
        result = self.runner.run(command, cwd=self.root)
        if result.ok:
            logger.info("composer install ok (%dms)", result.duration_ms)
        else:
            logger.error("composer install failed: %s", result.describe_failure())
        return result
