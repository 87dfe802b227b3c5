"""
Extension models — parsed plugin declarations and resolver decisions.

A declaration is the user's intent ("this plugin should be here, from
this source"). Whether the bootstrapper actually touches the plugin
directory is decided later by the resolver, against what is on disk and
what the tracking store remembers.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class UpdatePolicy(str, Enum):
    """Who owns the lifecycle of a plugin."""

    MANAGED = "managed"      # the bootstrapper may re-install it
    UNMANAGED = "unmanaged"  # never touched once present


class Decision(str, Enum):
    """What the resolver wants done with one declaration."""

    INSTALL = "install"
    REINSTALL = "reinstall"  # remove the directory, install from remote source
    SKIP = "skip"


class ExtensionDeclaration(BaseModel):
    """One parsed entry of the ``plugins`` list in october.yaml."""

    vendor: str
    name: str
    update_policy: UpdatePolicy = UpdatePolicy.MANAGED
    remote_source: str | None = None
    branch: str | None = None
    raw: str = ""

    @property
    def identity(self) -> str:
        """Unique, case-sensitive key: ``Vendor.Name``."""
        return f"{self.vendor}.{self.name}"

    @property
    def managed(self) -> bool:
        return self.update_policy is UpdatePolicy.MANAGED

    @property
    def directory(self) -> str:
        """Plugin directory relative to the project root."""
        return f"plugins/{self.vendor.lower()}/{self.name.lower()}"

    def __str__(self) -> str:
        return self.identity


class ThemeDeclaration(BaseModel):
    """The ``cms.theme`` entry: ``name[@remoteSource[:branch]]``."""

    name: str
    remote_source: str | None = None
    branch: str | None = None

    @property
    def directory(self) -> str:
        return f"themes/{self.name}"
