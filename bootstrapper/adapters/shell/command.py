"""
Command runner — execute external commands and capture their output.

This is the most fundamental adapter: php, composer and git all run
through it. It NEVER raises for a failing command. Non-zero exits,
timeouts and missing binaries come back as a CommandResult with
``ok == False``; deciding whether that is fatal is the caller's job.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
import time
from pathlib import Path
from typing import Sequence

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 900


class CommandResult(BaseModel):
    """Outcome of one external command."""

    command: list[str]
    return_code: int | None = None
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = 0
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.return_code == 0

    @property
    def display(self) -> str:
        return shlex.join(self.command)

    def describe_failure(self) -> str:
        """One-line explanation of why the command failed."""
        if self.error:
            return self.error
        detail = self.stderr or self.stdout
        if detail:
            return detail.splitlines()[-1]
        return f"'{self.display}' exited with code {self.return_code}"


class CommandRunner:
    """Run commands with ``subprocess.run`` and capture output."""

    def __init__(self, timeout: int = DEFAULT_TIMEOUT):
        self.timeout = timeout

    def run(
        self,
        command: Sequence[str],
        cwd: Path | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        args = [str(part) for part in command]
        timeout = timeout or self.timeout

        logger.debug("Executing: %s (cwd=%s)", shlex.join(args), cwd)
        start = time.monotonic()

        try:
            proc = subprocess.run(
                args,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            return CommandResult(
                command=args,
                error=f"'{shlex.join(args)}' timed out after {timeout}s",
                duration_ms=int((time.monotonic() - start) * 1000),
            )
        except OSError as e:
            return CommandResult(
                command=args,
                error=f"Cannot execute '{args[0]}': {e}",
            )

        result = CommandResult(
            command=args,
            return_code=proc.returncode,
            stdout=proc.stdout.strip(),
            stderr=proc.stderr.strip(),
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        if not result.ok:
            logger.debug("Command failed (%s): %s", result.return_code, result.stderr)
        return result
