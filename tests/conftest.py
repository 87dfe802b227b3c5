"""
Shared test fixtures and configuration.
"""

from pathlib import Path

import pytest

from bootstrapper.adapters.mock import MockCommandRunner
from bootstrapper.core.engine.orchestrator import Orchestrator
from bootstrapper.core.persistence.tracking import TrackingStore
from tests.helpers import FakeDownloader, Messages


@pytest.fixture
def runner() -> MockCommandRunner:
    return MockCommandRunner()


@pytest.fixture
def messages() -> Messages:
    return Messages()


@pytest.fixture
def store(tmp_path: Path) -> TrackingStore:
    """An empty tracking store backed by a temp .gitignore."""
    return TrackingStore.load(tmp_path / ".gitignore")


@pytest.fixture
def make_orchestrator(runner: MockCommandRunner, messages: Messages):
    """Factory for an orchestrator wired to the mock runner and a fake download."""

    def _make(
        root: Path,
        force: bool = False,
        downloader=None,
        capability_check=lambda: True,
    ) -> Orchestrator:
        return Orchestrator(
            root=root,
            force=force,
            reporter=messages,
            runner=runner,
            downloader=downloader or FakeDownloader(root),
            capability_check=capability_check,
        )

    return _make
