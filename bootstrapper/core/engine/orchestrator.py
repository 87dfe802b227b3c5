"""
Orchestrator — the provisioning workflow, one stage after the other.

Each stage returns a StageResult. The loop records it, reports its
message and stops at the first ``failed`` result. Nothing is rolled
back: every stage is written to be safe to repeat, so the fix for a
failed run is to run it again.

Flow:
    preflight → first run? → config → download → composer → .env
    → database file → migrate → theme → project id → plugins
    → migrate plugins → deployment → .gitignore → first-run cleanup
    → clear cache → done
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable

from bootstrapper.adapters.artisan import Artisan
from bootstrapper.adapters.composer import Composer
from bootstrapper.adapters.downloader import ApplicationDownloader, archive_support
from bootstrapper.adapters.extensions import PluginInstaller, ThemeInstaller
from bootstrapper.adapters.shell.command import CommandRunner
from bootstrapper.core.config.loader import (
    CONFIG_FILE,
    ConfigError,
    find_config_file,
    load_config,
)
from bootstrapper.core.errors import (
    ApplicationExists,
    BootstrapError,
    DeploymentExists,
    ThemeExists,
)
from bootstrapper.core.models.config import InstallConfig
from bootstrapper.core.models.stage import StageResult
from bootstrapper.core.models.state import ProvisioningState
from bootstrapper.core.persistence.tracking import GITIGNORE_FILE, TrackingStore
from bootstrapper.core.services.declarations import parse_theme
from bootstrapper.core.services.deployment import create_deployment
from bootstrapper.core.services.generators.env_file import ENV_FILE, generate_env
from bootstrapper.core.services.generators.gitignore import gitignore_template
from bootstrapper.core.services.generators.readme import generate_readme
from bootstrapper.core.services.resolver import ExtensionResolver

logger = logging.getLogger(__name__)

Reporter = Callable[[str, str], None]

# Files from the October repository that make no sense in a project
SCAFFOLD_FILES = ("CONTRIBUTING.md", "CHANGELOG.md", "ISSUE_TEMPLATE.md")

READY_MESSAGE = "Application ready! Build something amazing."


def log_reporter(message: str, style: str = "info") -> None:
    """Default reporter: progress goes to the log only."""
    level = logging.ERROR if style == "error" else logging.INFO
    logger.log(level, message)


class Orchestrator:
    """Drive one provisioning run against a project root.

    Collaborators are built from ``root`` and ``php`` unless given; tests
    pass a MockCommandRunner and a fake downloader.
    """

    def __init__(
        self,
        root: Path,
        config_path: Path | None = None,
        force: bool = False,
        php: str = "php",
        reporter: Reporter | None = None,
        runner: CommandRunner | None = None,
        downloader: ApplicationDownloader | None = None,
        capability_check: Callable[[], bool] = archive_support,
    ):
        self.root = root
        self.config_path = config_path
        self.report = reporter or log_reporter
        self.capability_check = capability_check
        self.state = ProvisioningState(root=root, force=force, php=php)

        self.runner = runner or CommandRunner()
        self.artisan = Artisan(root, php=self.state.php, runner=self.runner)
        self.composer = Composer(root, php=self.state.php, runner=self.runner)
        self.downloader = downloader or ApplicationDownloader(root)
        self.plugins = PluginInstaller(root, self.artisan, self.runner)
        self.themes = ThemeInstaller(root, self.artisan, self.runner)

        self.config: InstallConfig | None = None
        self.store: TrackingStore | None = None

    # ── Workflow ─────────────────────────────────────────────────

    def stages(self) -> list[tuple[str, Callable[[], StageResult]]]:
        return [
            ("preflight", self._preflight),
            ("first-run", self._detect_first_run),
            ("config", self._load_config),
            ("download", self._download),
            ("dependencies", self._install_dependencies),
            ("settings", self._write_settings),
            ("database", self._prepare_database),
            ("migrate", self._migrate),
            ("theme", self._install_theme),
            ("project", self._set_project),
            ("plugins", self._install_plugins),
            ("migrate-plugins", self._migrate_plugins),
            ("deployment", self._install_deployment),
            ("gitignore", self._write_gitignore),
            ("cleanup", self._first_run_cleanup),
            ("cache", self._clear_cache),
            ("done", self._finish),
        ]

    def run(self) -> bool:
        """Run every stage in order. Never raises.

        Returns:
            True if the run reached the end, False if a stage failed.
        """
        for name, stage in self.stages():
            result = self._run_stage(name, stage)
            self.state.record(result)

            if result.failed:
                self.report(result.message, "error")
                logger.error("Stage '%s' failed: %s", name, result.message)
                self._flush_pending_tracking()
                return False

            if result.status in ("recovered", "skipped") and result.message:
                self.report(result.message, "comment")

        return True

    def _run_stage(self, name: str, stage: Callable[[], StageResult]) -> StageResult:
        start = time.monotonic()
        try:
            result = stage()
        except Exception as e:
            logger.debug("Stage '%s' raised", name, exc_info=True)
            result = StageResult.failure(name, f"{name}: {e}")
        result.duration_ms = int((time.monotonic() - start) * 1000)
        logger.info("stage %s → %s (%dms)", name, result.status, result.duration_ms)
        return result

    def _flush_pending_tracking(self) -> None:
        """Persist plugin markers when a later stage aborted the run."""
        plugins_ran = any(r.stage == "plugins" for r in self.state.results)
        flushed = any(r.stage == "gitignore" for r in self.state.results)
        if self.store is None or not plugins_ran or flushed or not self.store.dirty:
            return
        try:
            self.store.flush()
        except OSError as e:
            self.report(f"Failed to write {GITIGNORE_FILE}: {e}", "error")

    # ── Stages ───────────────────────────────────────────────────

    def _preflight(self) -> StageResult:
        if not self.capability_check():
            return StageResult.failure(
                "preflight",
                "The zlib module is not available, zip archives cannot be extracted. "
                "Please install it and try again.",
            )
        return StageResult.success("preflight")

    def _detect_first_run(self) -> StageResult:
        first_run = self.state.detect_first_run()
        return StageResult.success("first-run", metadata={"first_run": first_run})

    def _load_config(self) -> StageResult:
        path = self.config_path or find_config_file(self.root)
        if path is None:
            return StageResult.failure(
                "config", f"No {CONFIG_FILE} found in {self.root}. Create one or specify --config."
            )
        try:
            self.config = load_config(path)
        except ConfigError as e:
            return StageResult.failure("config", str(e))

        template = gitignore_template(self.config.git.bare_repo)
        self.store = TrackingStore.load(self.root / GITIGNORE_FILE, template)
        return StageResult.success("config", str(path))

    def _download(self) -> StageResult:
        self.report("Downloading latest October CMS...", "info")
        try:
            self.downloader.download(self.state.force)
        except ApplicationExists as e:
            return StageResult.recovered("download", str(e))
        except (BootstrapError, OSError) as e:
            return StageResult.failure("download", str(e))
        return StageResult.success("download")

    def _install_dependencies(self) -> StageResult:
        self.report("Installing composer dependencies...", "info")
        result = self.composer.install()
        if not result.ok:
            return StageResult.failure(
                "dependencies", f"Failed to install composer dependencies: {result.describe_failure()}"
            )
        return StageResult.success("dependencies")

    def _write_settings(self) -> StageResult:
        self.report("Setting up config files...", "info")
        exists = (self.root / ENV_FILE).is_file()

        if exists and not self.state.first_run and not self.state.force:
            return StageResult.skip(
                "settings", "-> Configuration already set up. Use --force to regenerate."
            )

        generate_env(self.config, self.root, first_run=self.state.first_run).write(self.root)
        return StageResult.success("settings", ENV_FILE)

    def _prepare_database(self) -> StageResult:
        db = self.config.database
        if not db.is_file_based or not db.database:
            return StageResult.skip("database")

        path = Path(db.database)
        if not path.is_absolute():
            path = self.root / path

        if path.exists() or not path.parent.is_dir():
            return StageResult.skip("database")

        self.report(f"Creating {path} ...", "info")
        path.touch()
        return StageResult.success("database", str(path))

    def _migrate(self) -> StageResult:
        self.report("Migrating database...", "info")
        result = self.artisan.migrate()
        if not result.ok:
            return StageResult.failure("migrate", f"Migration failed: {result.describe_failure()}")
        return StageResult.success("migrate")

    def _install_theme(self) -> StageResult:
        declaration = self.config.theme_declaration
        if declaration is None:
            return StageResult.skip("theme", "No theme to install")

        self.report("Installing Theme...", "info")
        try:
            self.themes.install(parse_theme(declaration))
        except ThemeExists as e:
            return StageResult.recovered("theme", str(e))
        except (BootstrapError, OSError) as e:
            return StageResult.failure("theme", f"Failed to install theme: {e}")
        return StageResult.success("theme", declaration)

    def _set_project(self) -> StageResult:
        project_id = self.config.project_id
        if project_id is None:
            return StageResult.skip("project")

        self.report("Setting Project ID...", "info")
        result = self.artisan.set_project(project_id)
        if not result.ok:
            return StageResult.recovered(
                "project", f"-> Could not set project id: {result.describe_failure()}"
            )
        return StageResult.success("project", project_id)

    def _install_plugins(self) -> StageResult:
        declarations = self.config.plugin_declarations
        if not declarations:
            return StageResult.skip("plugins", "No plugins to install")

        self.report("Installing Plugins...", "info")
        resolver = ExtensionResolver(self.plugins, self.store, reporter=self.report)
        report = resolver.provision(declarations)
        self.state.decisions.update(report.decisions)
        tracked = self.store.managed_identities()
        logger.info("Tracked plugins: %s", ", ".join(tracked) or "none")
        return StageResult.success(
            "plugins",
            report.summary(),
            metadata={
                "outcomes": [o.to_dict() for o in report.outcomes],
                "tracked": tracked,
            },
        )

    def _migrate_plugins(self) -> StageResult:
        if not self.config.plugin_declarations:
            return StageResult.skip("migrate-plugins")

        self.report("Migrating plugin tables...", "info")
        result = self.artisan.migrate()
        if not result.ok:
            return StageResult.failure(
                "migrate-plugins", f"Migration failed: {result.describe_failure()}"
            )
        return StageResult.success("migrate-plugins")

    def _install_deployment(self) -> StageResult:
        kind = self.config.deployment_kind
        if kind is None:
            return StageResult.skip("deployment", "No deployments to install")

        self.report(f"Setting up {kind} deployment.", "info")
        try:
            deployment = create_deployment(kind, self.root, self.config, self.store)
            written = deployment.install(self.state.force)
        except DeploymentExists as e:
            return StageResult.recovered("deployment", str(e))
        except (BootstrapError, OSError) as e:
            return StageResult.failure("deployment", str(e))
        return StageResult.success("deployment", ", ".join(written))

    def _write_gitignore(self) -> StageResult:
        self.report(f"Creating {GITIGNORE_FILE}...", "info")
        try:
            self.store.flush()
        except OSError as e:
            return StageResult.failure("gitignore", f"Failed to write {GITIGNORE_FILE}: {e}")
        return StageResult.success("gitignore")

    def _first_run_cleanup(self) -> StageResult:
        if not self.state.first_run:
            return StageResult.skip("cleanup")

        self.report("Removing demo data...", "info")
        result = self.artisan.remove_demo_content()
        if not result.ok:
            self.report(f"-> Could not remove demo data: {result.describe_failure()}", "comment")

        self.report("Creating README...", "info")
        generate_readme(self.config).write(self.root)

        self.report("Cleaning up...", "info")
        removed = []
        for name in SCAFFOLD_FILES:
            target = self.root / name
            if target.is_file():
                target.unlink()
                removed.append(name)

        return StageResult.success("cleanup", metadata={"removed": removed})

    def _clear_cache(self) -> StageResult:
        self.report("Clearing cache...", "info")
        for call in (self.artisan.clear_compiled, self.artisan.clear_cache):
            result = call()
            if not result.ok:
                self.report(f"-> {result.display} failed: {result.describe_failure()}", "comment")
        return StageResult.success("cache")

    def _finish(self) -> StageResult:
        self.report(READY_MESSAGE, "comment")
        return StageResult.success("done")
