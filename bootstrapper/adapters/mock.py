"""
Mock command runner — test double for everything that shells out.

Records every command instead of executing it. By default every command
succeeds; individual commands can be configured to fail or to run a
side effect (e.g. create the directory a real ``git clone`` would).
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

from bootstrapper.adapters.shell.command import CommandResult


class MockCommandRunner:
    """Universal mock runner for testing.

    Commands are matched by substring against the space-joined command
    line, so ``set_failure("october:up")`` fails every migration.
    """

    def __init__(self, default_output: str = "[mock] executed"):
        self._default_output = default_output
        self._failures: dict[str, str] = {}
        self._effects: list[tuple[str, Callable[[list[str], Path | None], None]]] = []
        self._call_log: list[list[str]] = []

    @property
    def call_log(self) -> list[list[str]]:
        """All commands this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def commands(self) -> list[str]:
        """The received commands as space-joined strings."""
        return [" ".join(c) for c in self._call_log]

    def called(self, fragment: str) -> int:
        """How many received commands contain ``fragment``."""
        return sum(1 for c in self.commands() if fragment in c)

    def set_failure(self, fragment: str, error: str = "Mock failure") -> None:
        """Configure matching commands to exit with status 1."""
        self._failures[fragment] = error

    def on(self, fragment: str, effect: Callable[[list[str], Path | None], None]) -> None:
        """Run ``effect(command, cwd)`` whenever a matching command is received."""
        self._effects.append((fragment, effect))

    def reset(self) -> None:
        self._call_log.clear()

    def run(
        self,
        command: Sequence[str],
        cwd: Path | None = None,
        timeout: int | None = None,
    ) -> CommandResult:
        args = [str(part) for part in command]
        self._call_log.append(args)
        line = " ".join(args)

        for fragment, error in self._failures.items():
            if fragment in line:
                return CommandResult(command=args, return_code=1, stderr=error)

        for fragment, effect in self._effects:
            if fragment in line:
                effect(args, cwd)

        return CommandResult(command=args, return_code=0, stdout=self._default_output)
