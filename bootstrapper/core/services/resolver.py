"""
Extension resolver — decide what to do with each declared plugin.

The decision depends on three facts: is the plugin directory on disk,
does the tracking store hold a marker for it, and what did the
declaration ask for.

    installed | marker | policy    | remote | decision
    ----------+--------+-----------+--------+----------
    no        |   -    |    -      |   -    | install
    yes       |  yes   | unmanaged |   -    | skip
    yes       |   -    |    -      |  set   | reinstall
    yes       |   -    |    -      | unset  | skip

A directory without a marker was put there by a developer. It is only
replaced when the declaration names a remote source to refresh from.
A tracked, managed plugin without a remote source is left alone as
well: there is nothing newer to fetch it from than what is installed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from bootstrapper.adapters.extensions import PluginInstaller
from bootstrapper.core.errors import ExtensionExists, MalformedDeclaration
from bootstrapper.core.models.extension import Decision, ExtensionDeclaration
from bootstrapper.core.persistence.tracking import TrackingStore
from bootstrapper.core.services.declarations import parse_declaration

logger = logging.getLogger(__name__)

Reporter = Callable[[str, str], None]


def resolve(
    declaration: ExtensionDeclaration,
    installed: bool,
    store: TrackingStore,
) -> Decision:
    """Decide whether to install, reinstall or skip one declaration.

    Pure: reads the store but never changes it.
    """
    if not installed:
        return Decision.INSTALL

    marked = store.has_managed_marker(declaration.vendor, declaration.name)
    if marked and not declaration.managed:
        return Decision.SKIP

    if declaration.remote_source:
        return Decision.REINSTALL

    return Decision.SKIP


@dataclass
class ExtensionOutcome:
    """What happened to one declaration."""

    identity: str
    decision: Decision
    status: str = "ok"  # ok, exists, skipped, failed
    error: str | None = None

    def to_dict(self) -> dict:
        return {
            "identity": self.identity,
            "decision": self.decision.value,
            "status": self.status,
            "error": self.error,
        }


@dataclass
class ExtensionReport:
    """Result of provisioning a list of declarations."""

    outcomes: list[ExtensionOutcome] = field(default_factory=list)

    @property
    def installed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "ok" and o.decision != Decision.SKIP)

    @property
    def skipped(self) -> int:
        return sum(1 for o in self.outcomes if o.status in ("skipped", "exists"))

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == "failed")

    @property
    def decisions(self) -> dict[str, Decision]:
        return {o.identity: o.decision for o in self.outcomes}

    def summary(self) -> str:
        return f"{self.installed} installed, {self.skipped} skipped, {self.failed} failed"


def _log_only(message: str, style: str = "info") -> None:
    logger.info(message)


class ExtensionResolver:
    """Run the plugin loop: resolve, remove, install, record.

    Failures are isolated to the declaration they happen in. A failed
    plugin gets no tracking marker, and the loop moves on.
    """

    def __init__(
        self,
        installer: PluginInstaller,
        store: TrackingStore,
        reporter: Reporter | None = None,
    ):
        self.installer = installer
        self.store = store
        self.report = reporter or _log_only

    def provision(self, raws: list[str]) -> ExtensionReport:
        report = ExtensionReport()
        for raw in raws:
            report.outcomes.append(self.provision_one(raw))
        logger.info("Plugins: %s", report.summary())
        return report

    def provision_one(self, raw: str) -> ExtensionOutcome:
        try:
            declaration = parse_declaration(raw)
        except MalformedDeclaration as e:
            outcome = ExtensionOutcome(identity=raw, decision=Decision.SKIP)
            return self._failed(outcome, str(e))
        identity = declaration.identity

        installed = self.installer.is_installed(declaration)
        decision = resolve(declaration, installed, self.store)
        outcome = ExtensionOutcome(identity=identity, decision=decision)
        logger.debug("%s: installed=%s → %s", identity, installed, decision.value)

        if decision is Decision.SKIP:
            self.report(f"-> Skipping re-downloading of {identity}", "comment")
            outcome.status = "skipped"
        else:
            if decision is Decision.REINSTALL:
                self.report(
                    f"Removing {identity} directory to re-download the newest version...",
                    "comment",
                )
                try:
                    self.installer.remove(declaration)
                except OSError as e:
                    return self._failed(outcome, f"Failed to remove {identity}: {e}")

            self.report(f"-> Installing {identity}", "info")
            try:
                self.installer.install(declaration)
            except ExtensionExists as e:
                self.report(str(e), "comment")
                outcome.status = "exists"
            except Exception as e:
                return self._failed(outcome, str(e))

        if declaration.managed:
            self.store.add_managed_marker(declaration.vendor, declaration.name)

        return outcome

    def _failed(self, outcome: ExtensionOutcome, error: str) -> ExtensionOutcome:
        self.report(error, "error")
        logger.error("Plugin %s failed: %s", outcome.identity, error)
        outcome.status = "failed"
        outcome.error = error
        return outcome
