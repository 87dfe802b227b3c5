"""
Configuration loader — reads october.yaml into the InstallConfig model.

It reads YAML, validates against the Pydantic schema, and checks every
plugin declaration up front so that a typo fails the run before any
file has been touched.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from bootstrapper.core.errors import BootstrapError, MalformedDeclaration
from bootstrapper.core.models.config import InstallConfig
from bootstrapper.core.services.declarations import parse_declarations

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "october.yaml"
_ALTERNATE_NAMES = ("october.yml",)


class ConfigError(BootstrapError):
    """Raised when october.yaml is invalid or missing."""


def find_config_file(root: Path | None = None) -> Path | None:
    """Look for october.yaml (or october.yml) in ``root``.

    Args:
        root: Directory to look in (default: cwd).

    Returns:
        Path to the config file, or None if not found.
    """
    base = (root or Path.cwd()).resolve()
    for name in (CONFIG_FILE, *_ALTERNATE_NAMES):
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None) -> InstallConfig:
    """Load and validate the install configuration.

    Args:
        path: Explicit path to october.yaml. If None, looks in cwd.

    Returns:
        Validated InstallConfig model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(
            f"No {CONFIG_FILE} found. Create one or specify --config."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading install config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = InstallConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    try:
        parse_declarations(config.plugin_declarations)
    except MalformedDeclaration as e:
        raise ConfigError(str(e)) from e

    logger.info(
        "Loaded config from %s with %d plugin declaration(s)",
        path,
        len(config.plugin_declarations),
    )
    return config
