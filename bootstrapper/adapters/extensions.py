"""
Extension installers — put plugin and theme files in place.

Declarations with a remote source are cloned with git. Everything else
is installed from the marketplace through artisan. Neither installer
decides *whether* to install; that is the resolver's job for plugins
and the orchestrator's for the theme.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from bootstrapper.adapters.artisan import Artisan
from bootstrapper.adapters.shell.command import CommandResult, CommandRunner
from bootstrapper.core.errors import (
    ExtensionExists,
    ExtensionInstallError,
    ThemeExists,
    ThemeInstallError,
)
from bootstrapper.core.models.extension import ExtensionDeclaration, ThemeDeclaration

logger = logging.getLogger(__name__)


def git_clone(
    runner: CommandRunner,
    source: str,
    target: Path,
    branch: str | None = None,
) -> CommandResult:
    """Shallow-clone ``source`` into ``target``."""
    command = ["git", "clone", "--depth", "1"]
    if branch:
        command += ["--branch", branch]
    command += [source, str(target)]
    target.parent.mkdir(parents=True, exist_ok=True)
    return runner.run(command)


class PluginInstaller:
    """Install and remove plugin directories below ``plugins/``."""

    def __init__(self, root: Path, artisan: Artisan, runner: CommandRunner | None = None):
        self.root = root
        self.artisan = artisan
        self.runner = runner or artisan.runner

    def path_for(self, declaration: ExtensionDeclaration) -> Path:
        return self.root / declaration.directory

    def is_installed(self, declaration: ExtensionDeclaration) -> bool:
        return self.path_for(declaration).is_dir()

    def install(self, declaration: ExtensionDeclaration) -> None:
        """Install one plugin.

        Raises:
            ExtensionExists: The plugin directory is already present.
            ExtensionInstallError: git or artisan failed.
        """
        target = self.path_for(declaration)
        if target.is_dir():
            raise ExtensionExists(f"-> Plugin {declaration.identity} is already installed.")

        if declaration.remote_source:
            logger.info("Cloning %s from %s", declaration.identity, declaration.remote_source)
            result = git_clone(self.runner, declaration.remote_source, target, declaration.branch)
        else:
            logger.info("Installing %s from the marketplace", declaration.identity)
            result = self.artisan.install_plugin(declaration.identity)

        if not result.ok:
            raise ExtensionInstallError(
                f"Failed to install plugin {declaration.identity}: {result.describe_failure()}"
            )

    def remove(self, declaration: ExtensionDeclaration) -> None:
        """Delete the plugin directory. OSError propagates to the caller.

        Raises:
            PermissionError: The directory does not resolve to
                ``plugins/<vendor>/<name>``.
        """
        target = self.path_for(declaration)
        plugins = (self.root / "plugins").resolve()
        if target.resolve().parent.parent != plugins:
            raise PermissionError(f"Refusing to remove {target}: not a plugin directory below {plugins}")
        if target.is_dir():
            shutil.rmtree(target)
            logger.info("Removed %s", target)


class ThemeInstaller:
    """Install the site theme below ``themes/``."""

    def __init__(self, root: Path, artisan: Artisan, runner: CommandRunner | None = None):
        self.root = root
        self.artisan = artisan
        self.runner = runner or artisan.runner

    def install(self, declaration: ThemeDeclaration) -> None:
        """Install the theme.

        Raises:
            ThemeExists: ``themes/<name>`` is already present.
            ThemeInstallError: git or artisan failed.
        """
        target = self.root / declaration.directory
        if target.is_dir():
            raise ThemeExists(f"-> Theme {declaration.name} is already installed.")

        if declaration.remote_source:
            result = git_clone(self.runner, declaration.remote_source, target, declaration.branch)
        else:
            result = self.artisan.install_theme(declaration.name)

        if not result.ok:
            raise ThemeInstallError(result.describe_failure())
