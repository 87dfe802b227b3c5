"""
ProvisioningState — what one run knows about itself.

Constructed at run start from the CLI flags and a probe of the target
directory, read by every stage, and thrown away when the process exits.
Nothing here is persisted; the only durable record a run leaves behind
is the tracking store (.gitignore).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from bootstrapper.core.models.extension import Decision
from bootstrapper.core.models.stage import StageResult

# Its absence means the application was never installed here
BOOTSTRAP_DIR = "bootstrap"


@dataclass
class ProvisioningState:
    """Process-wide state of a single provisioning run."""

    root: Path
    force: bool = False
    first_run: bool = False
    php: str = "php"
    results: list[StageResult] = field(default_factory=list)
    decisions: dict[str, Decision] = field(default_factory=dict)

    def detect_first_run(self) -> bool:
        """No prior installation in ``root``, or --force: behave as a first run."""
        self.first_run = self.force or not (self.root / BOOTSTRAP_DIR).is_dir()
        return self.first_run

    def record(self, result: StageResult) -> None:
        self.results.append(result)

    @property
    def succeeded(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def failed_stage(self) -> StageResult | None:
        """The stage that aborted the run, if any."""
        for result in self.results:
            if result.failed:
                return result
        return None

    def to_dict(self) -> dict:
        return {
            "root": str(self.root),
            "force": self.force,
            "first_run": self.first_run,
            "php": self.php,
            "succeeded": self.succeeded,
            "stages": [r.model_dump(mode="json") for r in self.results],
            "decisions": {k: v.value for k, v in self.decisions.items()},
        }
