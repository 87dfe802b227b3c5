"""
Application downloader — fetch and unpack the October CMS archive.

The archive is a GitHub branch zip with one top-level directory
(``october-master/``). Its contents are copied into the project root,
merging with whatever is already there.
"""

from __future__ import annotations

import importlib.util
import logging
import shutil
import tempfile
import urllib.request
import zipfile
from pathlib import Path

from bootstrapper import __version__
from bootstrapper.core.errors import ApplicationExists, DownloadError
from bootstrapper.core.models.state import BOOTSTRAP_DIR

logger = logging.getLogger(__name__)

DEFAULT_ARCHIVE_URL = "https://github.com/octobercms/october/archive/master.zip"


def archive_support() -> bool:
    """Whether zip archives can be extracted (zlib is compiled in)."""
    return importlib.util.find_spec("zlib") is not None


class ApplicationDownloader:
    """Download the application archive into a project root."""

    def __init__(self, root: Path, url: str = DEFAULT_ARCHIVE_URL, timeout: int = 60):
        self.root = root
        self.url = url
        self.timeout = timeout

    def is_installed(self) -> bool:
        return (self.root / BOOTSTRAP_DIR).is_dir()

    def download(self, force: bool = False) -> None:
        """Fetch and unpack the application.

        Raises:
            ApplicationExists: The application is present and ``force`` is off.
            DownloadError: Fetching or unpacking failed.
        """
        if self.is_installed() and not force:
            raise ApplicationExists("-> October is already installed. Use --force to reinstall.")

        with tempfile.TemporaryDirectory(prefix="october_") as tmp:
            archive = Path(tmp) / "october.zip"
            self._fetch(archive)
            extracted = Path(tmp) / "extracted"
            source = self._extract(archive, extracted)
            self._merge_into_root(source)

        logger.info("Application unpacked into %s", self.root)

    def _fetch(self, target: Path) -> None:
        logger.debug("Downloading %s", self.url)
        req = urllib.request.Request(
            self.url,
            headers={"User-Agent": f"october-bootstrapper/{__version__}"},
        )
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as resp, target.open("wb") as fh:
                shutil.copyfileobj(resp, fh)
        except OSError as e:
            raise DownloadError(f"Failed to download {self.url}: {e}") from e

    def _extract(self, archive: Path, target: Path) -> Path:
        try:
            with zipfile.ZipFile(archive) as zf:
                for member in zf.namelist():
                    resolved = (target / member).resolve()
                    if not resolved.is_relative_to(target.resolve()):
                        raise DownloadError(f"Refusing to extract unsafe path: {member}")
                zf.extractall(target)
        except zipfile.BadZipFile as e:
            raise DownloadError(f"Downloaded file is not a valid zip archive: {e}") from e

        entries = list(target.iterdir())
        if len(entries) == 1 and entries[0].is_dir():
            return entries[0]
        return target

    def _merge_into_root(self, source: Path) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        try:
            for entry in source.iterdir():
                destination = self.root / entry.name
                if entry.is_dir():
                    shutil.copytree(entry, destination, dirs_exist_ok=True)
                else:
                    shutil.copy2(entry, destination)
        except OSError as e:
            raise DownloadError(f"Failed to copy application files: {e}") from e
