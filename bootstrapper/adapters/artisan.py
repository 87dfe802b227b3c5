"""
Artisan adapter — the CMS's own command line (``php artisan ...``).

Every call returns the CommandResult of the subprocess. Whether a
failing migration aborts the run while a failing cache clear does not
is decided by the orchestrator, not here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from bootstrapper.adapters.shell.command import CommandResult, CommandRunner

logger = logging.getLogger(__name__)

MIGRATE = ("october:up",)
FRESH = ("october:fresh",)
CLEAR_COMPILED = ("clear-compiled",)
CLEAR_CACHE = ("cache:clear",)


class Artisan:
    """Run artisan commands in a project root with a given php binary."""

    def __init__(self, root: Path, php: str = "php", runner: CommandRunner | None = None):
        self.root = root
        self.php = php
        self.runner = runner or CommandRunner()

    def call(self, *args: str) -> CommandResult:
        command = [self.php, "artisan", *args]
        result = self.runner.run(command, cwd=self.root)
        if result.ok:
            logger.info("artisan %s ok (%dms)", " ".join(args), result.duration_ms)
        else:
            logger.warning("artisan %s failed: %s", " ".join(args), result.describe_failure())
        return result

    def migrate(self) -> CommandResult:
        return self.call(*MIGRATE)

    def remove_demo_content(self) -> CommandResult:
        return self.call(*FRESH)

    def set_project(self, project_id: str) -> CommandResult:
        return self.call("october:util", "set", "project", f"--projectId={project_id}")

    def clear_compiled(self) -> CommandResult:
        return self.call(*CLEAR_COMPILED)

    def clear_cache(self) -> CommandResult:
        return self.call(*CLEAR_CACHE)

    def install_plugin(self, identity: str) -> CommandResult:
        return self.call("plugin:install", identity)

    def install_theme(self, name: str) -> CommandResult:
        return self.call("theme:install", name)
