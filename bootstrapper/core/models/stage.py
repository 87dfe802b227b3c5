"""
StageResult — the outcome contract between stages and the orchestrator.

Each provisioning stage returns exactly one StageResult. The orchestrator
never inspects exceptions to decide whether to continue: a stage that
can recover says so with ``recovered``, a stage with nothing to do says
``skipped``, and ``failed`` stops the run.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class StageResult(BaseModel):
    """Result of running one provisioning stage."""

    stage: str
    status: Literal["ok", "recovered", "skipped", "failed"] = "ok"
    message: str = ""
    duration_ms: int = 0
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """Whether the run may continue after this stage."""
        return self.status != "failed"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, stage: str, message: str = "", **kwargs: Any) -> StageResult:
        """Create a success result."""
        return cls(stage=stage, status="ok", message=message, **kwargs)

    @classmethod
    def recovered(cls, stage: str, message: str, **kwargs: Any) -> StageResult:
        """An expected condition (e.g. already installed) was handled."""
        return cls(stage=stage, status="recovered", message=message, **kwargs)

    @classmethod
    def skip(cls, stage: str, reason: str = "", **kwargs: Any) -> StageResult:
        """Nothing to do for this stage."""
        return cls(stage=stage, status="skipped", message=reason, **kwargs)

    @classmethod
    def failure(cls, stage: str, error: str, **kwargs: Any) -> StageResult:
        """Create a fatal failure result."""
        return cls(stage=stage, status="failed", message=error, **kwargs)
