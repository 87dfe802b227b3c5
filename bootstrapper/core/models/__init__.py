"""
Domain models — Pydantic types for the bootstrapper.

All models are re-exported here for convenient access:

    from bootstrapper.core.models import InstallConfig, ExtensionDeclaration, StageResult
"""

from bootstrapper.core.models.config import (
    AppSettings,
    CmsSettings,
    DatabaseSettings,
    GitSettings,
    InstallConfig,
    MailSettings,
)
from bootstrapper.core.models.extension import (
    Decision,
    ExtensionDeclaration,
    ThemeDeclaration,
    UpdatePolicy,
)
from bootstrapper.core.models.stage import StageResult
from bootstrapper.core.models.state import ProvisioningState
from bootstrapper.core.models.template import GeneratedFile

__all__ = [
    # config.py
    "AppSettings",
    "CmsSettings",
    "DatabaseSettings",
    # extension.py
    "Decision",
    "ExtensionDeclaration",
    # template.py
    "GeneratedFile",
    "GitSettings",
    "InstallConfig",
    "MailSettings",
    # state.py
    "ProvisioningState",
    # stage.py
    "StageResult",
    "ThemeDeclaration",
    "UpdatePolicy",
]
