"""
Error taxonomy for a provisioning run.

The "...Exists" errors are expected conditions on a re-run: the
orchestrator reports them as comments and keeps going. Everything else
is a real failure, and whether it aborts the run is decided by the
stage that catches it.
"""

from __future__ import annotations


class BootstrapError(Exception):
    """Base class for all bootstrapper errors."""


class MalformedDeclaration(BootstrapError, ValueError):
    """An extension declaration has no usable vendor and name."""

    def __init__(self, raw: str, reason: str = ""):
        self.raw = raw
        detail = f": {reason}" if reason else ""
        super().__init__(f"Malformed plugin declaration '{raw}'{detail}")


# ── Application ─────────────────────────────────────────────────


class ApplicationExists(BootstrapError):
    """The application is already present in the target directory."""


class DownloadError(BootstrapError):
    """The application archive could not be fetched or unpacked."""


# ── Extensions ──────────────────────────────────────────────────


class ExtensionExists(BootstrapError):
    """The plugin directory is already present."""


class ExtensionInstallError(BootstrapError):
    """A plugin could not be installed."""


class ThemeExists(BootstrapError):
    """The theme directory is already present."""


class ThemeInstallError(BootstrapError):
    """A theme could not be installed."""


# ── Deployments ─────────────────────────────────────────────────


class DeploymentExists(BootstrapError):
    """Deployment files are already present."""


class UnknownDeployment(BootstrapError, ValueError):
    """No deployment integration is registered under the given name."""
