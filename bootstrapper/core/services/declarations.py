"""
Declaration parser — turn ``plugins`` entries into ExtensionDeclarations.

Grammar::

    [!]Vendor.Name[@remoteSource[:branch]]

``!`` marks the plugin as unmanaged: once present it is never replaced.
The name is split on the first dot. A ``:branch`` suffix is only taken
from the source when the text after the last colon has no slash in it,
so ``https://host/repo.git`` and ``git@host:org/repo.git`` stay intact.
"""

from __future__ import annotations

import re

from bootstrapper.core.errors import MalformedDeclaration
from bootstrapper.core.models.extension import (
    ExtensionDeclaration,
    ThemeDeclaration,
    UpdatePolicy,
)

UNMANAGED_MARKER = "!"

# Vendor and name become directory names below plugins/
_IDENTIFIER = re.compile(r"[A-Za-z0-9_]+")
_THEME_NAME = re.compile(r"[A-Za-z0-9_-]+")


def _split_source(source: str) -> tuple[str, str | None]:
    """Split ``source[:branch]`` into (source, branch)."""
    head, sep, tail = source.rpartition(":")
    if sep and head and tail and "/" not in tail:
        return head, tail
    return source, None


def parse_declaration(raw: str) -> ExtensionDeclaration:
    """Parse one plugin declaration.

    Raises:
        MalformedDeclaration: If no non-empty vendor and name can be read.
    """
    text = (raw or "").strip()
    policy = UpdatePolicy.MANAGED

    if text.startswith(UNMANAGED_MARKER):
        policy = UpdatePolicy.UNMANAGED
        text = text[len(UNMANAGED_MARKER):].lstrip()

    identity, at, source = text.partition("@")
    vendor, dot, name = identity.strip().partition(".")

    if not dot:
        raise MalformedDeclaration(raw, "expected Vendor.Name")
    if not vendor or not name:
        raise MalformedDeclaration(raw, "vendor and name must not be empty")
    if not (_IDENTIFIER.fullmatch(vendor) and _IDENTIFIER.fullmatch(name)):
        raise MalformedDeclaration(raw, "vendor and name may only contain letters, digits and underscores")

    remote: str | None = None
    branch: str | None = None
    if at:
        source = source.strip()
        if not source:
            raise MalformedDeclaration(raw, "empty remote source after '@'")
        remote, branch = _split_source(source)

    return ExtensionDeclaration(
        vendor=vendor,
        name=name,
        update_policy=policy,
        remote_source=remote,
        branch=branch,
        raw=raw,
    )


def parse_declarations(raws: list[str]) -> list[ExtensionDeclaration]:
    """Parse a list of declarations, failing on the first malformed one."""
    return [parse_declaration(raw) for raw in raws]


def parse_theme(raw: str) -> ThemeDeclaration:
    """Parse the ``cms.theme`` value: ``name[@remoteSource[:branch]]``."""
    name, at, source = (raw or "").strip().partition("@")
    name = name.strip()
    if not _THEME_NAME.fullmatch(name):
        raise MalformedDeclaration(raw, "expected a theme name")

    if not at:
        return ThemeDeclaration(name=name)

    source = source.strip()
    if not source:
        raise MalformedDeclaration(raw, "empty remote source after '@'")
    remote, branch = _split_source(source)
    return ThemeDeclaration(name=name, remote_source=remote, branch=branch)
