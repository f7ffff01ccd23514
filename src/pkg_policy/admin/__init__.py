"""
pkg_policy.admin

Keycloak admin wiring for the password policy reconciler:

- PolicyAdminSettings: Keycloak admin connection + desired policy.
- settings_from_env / settings_from_yaml: loaders for env vars or a YAML file.
- apply_password_policy_from_env: sync wrapper for CLI / initContainers.
"""

from __future__ import annotations

from .settings import PolicyAdminSettings
from .config_file import settings_from_yaml
from .env import settings_from_env, apply_password_policy_from_env

__all__ = [
    "PolicyAdminSettings",
    "settings_from_env",
    "settings_from_yaml",
    "apply_password_policy_from_env",
]
