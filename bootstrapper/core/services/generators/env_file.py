"""
.env generator — October's runtime settings, rendered from october.yaml.

An existing APP_KEY is carried over so that regenerating the file with
--force does not invalidate sessions and encrypted data.
"""

from __future__ import annotations

import base64
import secrets
from pathlib import Path

from bootstrapper.core.models.config import InstallConfig
from bootstrapper.core.models.template import GeneratedFile

ENV_FILE = ".env"


def parse_env_file(path: Path) -> dict[str, str]:
    """Parse a .env file into a key/value dict.

    Handles:
    - KEY=value
    - KEY="value"
    - KEY='value'
    - export KEY=value
    - Comments (#)
    - Empty lines
    """
    result: dict[str, str] = {}
    if not path.is_file():
        return result

    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        return result

    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if line.startswith("export "):
            line = line[7:].strip()

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        value = value.strip()

        if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
            value = value[1:-1]

        result[key.strip()] = value

    return result


def generate_app_key() -> str:
    """A Laravel-style application key (base64 of 32 random bytes)."""
    return "base64:" + base64.b64encode(secrets.token_bytes(32)).decode("ascii")


def _quote(value: str | int | bool | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    if any(ch in text for ch in " #\"'$"):
        return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return text


def generate_env(config: InstallConfig, root: Path, first_run: bool = False) -> GeneratedFile:
    """Render .env from the install configuration.

    Args:
        config: The loaded october.yaml.
        root: Project root (to read an existing APP_KEY).
        first_run: Development defaults (debug on, caches off) on first run.
    """
    existing = parse_env_file(root / ENV_FILE)
    app_key = existing.get("APP_KEY") or generate_app_key()

    db = config.database
    mail = config.mail
    debug = config.app.debug or first_run

    values: list[tuple[str, str | int | bool | None]] = [
        ("APP_DEBUG", debug),
        ("APP_URL", config.app.url),
        ("APP_KEY", app_key),
        ("APP_LOCALE", config.app.locale),
        ("", None),
        ("DB_CONNECTION", db.connection),
        ("DB_HOST", db.host),
        ("DB_PORT", db.port),
        ("DB_DATABASE", db.database),
        ("DB_USERNAME", db.username),
        ("DB_PASSWORD", db.password),
        ("", None),
        ("CACHE_DRIVER", "file"),
        ("SESSION_DRIVER", "file"),
        ("QUEUE_CONNECTION", "sync"),
        ("", None),
        ("MAIL_DRIVER", mail.driver),
        ("MAIL_HOST", mail.host),
        ("MAIL_PORT", mail.port),
        ("MAIL_USERNAME", mail.username),
        ("MAIL_PASSWORD", mail.password),
        ("MAIL_FROM_NAME", mail.name),
        ("MAIL_FROM_ADDRESS", mail.address),
        ("", None),
        ("ROUTES_CACHE", not debug),
        ("ASSET_CACHE", not debug),
        ("CMS_EDIT_MODE", config.cms.edit_mode),
    ]

    lines = [f"{key}={_quote(value)}" if key else "" for key, value in values]

    return GeneratedFile(
        path=ENV_FILE,
        content="\n".join(lines) + "\n",
        overwrite=True,
        reason="first run settings" if first_run else "regenerated settings",
    )
