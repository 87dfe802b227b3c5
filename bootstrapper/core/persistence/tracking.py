"""
Tracking store — the record of plugins the bootstrapper manages.

The store lives inside the project's .gitignore. Every managed plugin
gets a header comment plus an ignore line for its directory::

    # Vendor.Name
    plugins/vendor/name

The header is what marks a plugin as "installed by us, safe to
replace". The plugin directory is ignored because it is reproducible
from october.yaml. Everything else in the file is left exactly as it
was found.

The file is read once when the store is loaded and written once by
``flush()`` (atomic write: temp file, then rename). Mutations in
between only touch the in-memory lines.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)

GITIGNORE_FILE = ".gitignore"


def marker_header(vendor: str, name: str) -> str:
    """The comment line identifying a managed plugin."""
    return f"# {vendor}.{name}"


def plugin_ignore_line(vendor: str, name: str) -> str:
    return f"plugins/{vendor.lower()}/{name.lower()}"


class TrackingStore:
    """In-memory model of .gitignore with a narrow mutation interface."""

    def __init__(self, path: Path, content: str = "", existed: bool = False):
        self._path = path
        self._lines = content.splitlines()
        self._loaded = list(self._lines)
        self._existed = existed
        self._trailing_newline = content.endswith("\n") or not content

    @classmethod
    def load(cls, path: Path, template: str = "") -> TrackingStore:
        """Read the store from ``path``, or start from ``template`` if absent."""
        if path.is_file():
            content = path.read_text(encoding="utf-8")
            logger.debug("Loaded tracking store from %s", path)
            return cls(path, content, existed=True)

        logger.info("No %s at %s, starting from template", path.name, path.parent)
        return cls(path, template, existed=False)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dirty(self) -> bool:
        """Whether the file on disk is out of date with the in-memory lines."""
        return not self._existed or self._lines != self._loaded

    # ── Queries ──────────────────────────────────────────────────

    def has_managed_marker(self, vendor: str, name: str) -> bool:
        header = marker_header(vendor, name)
        return any(line.rstrip() == header for line in self._lines)

    def managed_identities(self) -> list[str]:
        """Identities of all markers, in file order."""
        identities = []
        for i, line in enumerate(self._lines[:-1]):
            if not line.startswith("# "):
                continue
            identity = line[2:].strip()
            vendor, dot, name = identity.partition(".")
            if dot and self._lines[i + 1].strip() == plugin_ignore_line(vendor, name):
                identities.append(identity)
        return identities

    def has_ignore(self, pattern: str) -> bool:
        return any(line.strip() == pattern for line in self._lines)

    # ── Mutations ────────────────────────────────────────────────

    def add_managed_marker(self, vendor: str, name: str) -> None:
        """Record a managed plugin. Adding an existing marker is a no-op."""
        if self.has_managed_marker(vendor, name):
            return
        self._append_block([marker_header(vendor, name), plugin_ignore_line(vendor, name)])
        logger.debug("Added tracking marker for %s.%s", vendor, name)

    def add_ignore(self, pattern: str, comment: str | None = None) -> None:
        """Add an ignore directive unrelated to plugin tracking."""
        if self.has_ignore(pattern):
            return
        block = [f"# {comment}"] if comment else []
        block.append(pattern)
        self._append_block(block)

    def _append_block(self, block: list[str]) -> None:
        if self._lines and self._lines[-1].strip():
            self._lines.append("")
        self._lines.extend(block)

    # ── Persistence ──────────────────────────────────────────────

    def render(self) -> str:
        content = "\n".join(self._lines)
        if self._trailing_newline or self._lines != self._loaded:
            content += "\n"
        return content

    def flush(self) -> None:
        """Write the store back to disk (atomic write)."""
        content = self.render()
        self._path.parent.mkdir(parents=True, exist_ok=True)

        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=".gitignore_",
                suffix=".tmp",
            )
            os.close(fd)
            tmp = Path(tmp_path)
            try:
                tmp.write_text(content, encoding="utf-8")
                tmp.replace(self._path)
                logger.debug("Tracking store saved to %s", self._path)
            except Exception:
                tmp.unlink(missing_ok=True)
                raise
        except Exception as e:
            logger.error("Failed to save tracking store to %s: %s", self._path, e)
            raise

        self._loaded = list(self._lines)
        self._existed = True
        self._trailing_newline = content.endswith("\n")
