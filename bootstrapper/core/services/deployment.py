"""
Deployment integrations — set up how the project gets to production.

Integrations are looked up by the ``git.deployment`` value. Each one
writes its files into the project root and may add ignore directives
to the tracking store.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path

from bootstrapper.core.errors import DeploymentExists, UnknownDeployment
from bootstrapper.core.models.config import InstallConfig
from bootstrapper.core.persistence.tracking import TrackingStore
from bootstrapper.core.services.generators.gitlab_ci import generate_gitlab_files

logger = logging.getLogger(__name__)


class Deployment(ABC):
    """Base class for deployment integrations."""

    def __init__(self, root: Path, config: InstallConfig, store: TrackingStore):
        self.root = root
        self.config = config
        self.store = store

    @property
    @abstractmethod
    def name(self) -> str:
        """The ``git.deployment`` value selecting this integration."""

    @abstractmethod
    def install(self, force: bool = False) -> list[str]:
        """Write the integration's files.

        Returns:
            Relative paths of the files written.

        Raises:
            DeploymentExists: The files exist and ``force`` is off.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class GitlabDeployment(Deployment):
    """GitLab CI + Envoy."""

    @property
    def name(self) -> str:
        return "gitlab"

    def install(self, force: bool = False) -> list[str]:
        files = generate_gitlab_files(self.config, force=force)
        if (self.root / files[0].path).exists() and not force:
            raise DeploymentExists("-> Deployment is already set up. Use --force to overwrite.")

        written = [f.path for f in files if f.write(self.root)]
        self.store.add_ignore(".envoy", comment="Deployment")
        logger.info("GitLab deployment files written: %s", ", ".join(written))
        return written


DEPLOYMENTS: dict[str, type[Deployment]] = {
    "gitlab": GitlabDeployment,
}


def create_deployment(
    kind: str,
    root: Path,
    config: InstallConfig,
    store: TrackingStore,
) -> Deployment:
    """Instantiate the integration registered under ``kind``.

    Raises:
        UnknownDeployment: No integration has that name.
    """
    cls = DEPLOYMENTS.get(kind.strip().lower())
    if cls is None:
        valid = ", ".join(sorted(DEPLOYMENTS))
        raise UnknownDeployment(f"Unknown deployment '{kind}'. Valid: {valid}")
    return cls(root, config, store)
