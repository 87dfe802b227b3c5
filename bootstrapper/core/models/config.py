"""
Install configuration — the typed view of october.yaml.

Optional sections are modeled as defaults and optional values rather
than missing keys: "no theme" is ``None``, "no plugins" is an empty
list. Callers read them through the accessor properties and never have
to catch a lookup error.
"""

from __future__ import annotations

from typing import Any, get_args

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)


def _to_str(value: Any) -> Any:
    """YAML turns ``1234`` into an int; identifiers and passwords are strings."""
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _is_text(annotation: Any) -> bool:
    if annotation is str:
        return True
    args = get_args(annotation)
    return str in args and all(a in (str, type(None)) for a in args)


class _Section(BaseModel):
    """Base for october.yaml sections.

    YAML reads unquoted values like ``2024`` or ``3.14`` as numbers;
    every text field takes them back as strings.
    """

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any, info: ValidationInfo) -> Any:
        field = cls.model_fields.get(info.field_name)
        if field is None or not _is_text(field.annotation):
            return value
        if value is None and field.annotation is not str:
            return None
        return _to_str(value)


class AppSettings(_Section):
    """The ``app`` section."""

    name: str = "October CMS"
    url: str = "http://localhost"
    locale: str = "en"
    debug: bool = True


class CmsSettings(_Section):
    """The ``cms`` section."""

    theme: str | None = None
    edit_mode: bool = False


class DatabaseSettings(_Section):
    """The ``database`` section."""

    connection: str = "mysql"
    host: str = "localhost"
    port: int | None = None
    username: str = ""
    password: str = ""
    database: str = ""

    @property
    def is_file_based(self) -> bool:
        return self.connection == "sqlite"


class GitSettings(_Section):
    """The ``git`` section."""

    model_config = ConfigDict(populate_by_name=True)

    deployment: str | None = None
    bare_repo: bool = Field(default=False, alias="bareRepo")


class MailSettings(_Section):
    """The ``mail`` section."""

    driver: str = "log"
    host: str = ""
    port: int | None = None
    username: str = ""
    password: str = ""
    name: str = ""
    address: str = ""


class InstallConfig(BaseModel):
    """Root configuration model — loaded from october.yaml."""

    app: AppSettings = Field(default_factory=AppSettings)
    cms: CmsSettings = Field(default_factory=CmsSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    git: GitSettings = Field(default_factory=GitSettings)
    mail: MailSettings = Field(default_factory=MailSettings)
    plugins: list[str] = Field(default_factory=list)
    project: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_empty_sections(cls, data: Any) -> Any:
        # "plugins:" with nothing under it parses as None
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    @field_validator("project", mode="before")
    @classmethod
    def _project_as_string(cls, value: Any) -> Any:
        # YAML reads 123e4 as a float, only quoting keeps the original text
        if isinstance(value, float):
            raise ValueError(
                f"project id was read as the number {value}, quote it in october.yaml"
            )
        return _to_str(value)

    @field_validator("plugins", mode="before")
    @classmethod
    def _plugins_as_strings(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [str(v) for v in value if v is not None]
        return value

    # ── Accessors for optional settings ──────────────────────────

    @property
    def theme_declaration(self) -> str | None:
        theme = (self.cms.theme or "").strip()
        return theme or None

    @property
    def project_id(self) -> str | None:
        project = (self.project or "").strip()
        return project or None

    @property
    def plugin_declarations(self) -> list[str]:
        return [p for p in self.plugins if p.strip()]

    @property
    def deployment_kind(self) -> str | None:
        kind = (self.git.deployment or "").strip()
        return kind or None
