"""
YAML configuration loader.

Example:

    keycloak:
      server-url: https://sso.example.com
      realm: master              # realm used for the admin login
      client-id: admin-cli
      username: admin
      password: secret
      target-realm: master       # realm whose policy is reconciled
      verify-ssl: true
      timeout: 30
      password-policy:
        desired-policy-string: "passwordHistory(5) and maxLength(128)"

    logging:
      level: INFO
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from ..domain.exceptions import InvalidConfigurationError
from .settings import PolicyAdminSettings, parse_bool


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise InvalidConfigurationError(f"'{key}' must be a mapping")
    return value


def settings_from_yaml(config_path: str | Path) -> PolicyAdminSettings:
    """Load settings from a YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as exc:
        raise InvalidConfigurationError(f"Config file {config_path} is not valid YAML: {exc}") from exc
    except OSError as exc:
        raise InvalidConfigurationError(f"Cannot read config file {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidConfigurationError(f"Config file {config_path} must contain a mapping")

    kc = _section(data, "keycloak")
    policy = _section(kc, "password-policy")
    logging_data = _section(data, "logging")

    missing = [k for k in ("server-url", "username", "password") if not kc.get(k)]
    if missing:
        raise InvalidConfigurationError(
            f"Missing Keycloak admin settings in {config_path}: {', '.join('keycloak.' + m for m in missing)}"
        )

    try:
        timeout = float(kc.get("timeout", 30.0))
    except (TypeError, ValueError) as exc:
        raise InvalidConfigurationError(f"keycloak.timeout must be a number, got {kc.get('timeout')!r}") from exc

    return PolicyAdminSettings(
        keycloak_base_url=str(kc["server-url"]),
        keycloak_admin_user=str(kc["username"]),
        keycloak_admin_pass=str(kc["password"]),
        keycloak_realm=str(kc.get("target-realm") or "master"),
        desired_policy=str(policy.get("desired-policy-string") or ""),
        admin_realm=str(kc.get("realm") or "master"),
        admin_client_id=str(kc.get("client-id") or "admin-cli"),
        verify_ssl=parse_bool(kc.get("verify-ssl"), True),
        timeout_seconds=timeout,
        log_level=str(logging_data.get("level", "INFO")),
    )
