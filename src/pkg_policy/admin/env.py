from __future__ import annotations

import asyncio
import os
from typing import Optional

from ..domain.exceptions import InvalidConfigurationError
from .settings import PolicyAdminSettings, parse_bool


def _bool(key: str, default: bool = True) -> bool:
    return parse_bool(os.getenv(key), default)


def _float(key: str, default: float) -> float:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise InvalidConfigurationError(f"{key} must be a number, got {raw!r}") from exc


def settings_from_env() -> PolicyAdminSettings:
    base_url = os.getenv("KEYCLOAK_BASE_URL")
    admin_user = os.getenv("KEYCLOAK_ADMIN_USER")
    admin_pass = os.getenv("KEYCLOAK_ADMIN_PASS")
    if not all([base_url, admin_user, admin_pass]):
        missing = [
            n
            for n, v in [
                ("KEYCLOAK_BASE_URL", base_url),
                ("KEYCLOAK_ADMIN_USER", admin_user),
                ("KEYCLOAK_ADMIN_PASS", admin_pass),
            ]
            if not v
        ]
        raise InvalidConfigurationError(f"Missing Keycloak admin settings: {', '.join(missing)}")

    return PolicyAdminSettings(
        keycloak_base_url=base_url,
        keycloak_admin_user=admin_user,
        keycloak_admin_pass=admin_pass,
        keycloak_realm=os.getenv("KEYCLOAK_REALM") or "master",
        desired_policy=os.getenv("KEYCLOAK_PASSWORD_POLICY", ""),
        admin_realm=os.getenv("KEYCLOAK_ADMIN_REALM") or "master",
        admin_client_id=os.getenv("KEYCLOAK_ADMIN_CLIENT_ID") or "admin-cli",
        verify_ssl=_bool("VERIFY_SSL", True),
        timeout_seconds=_float("KEYCLOAK_TIMEOUT", 30.0),
        log_level=os.getenv("LOG_LEVEL") or "INFO",
    )


async def _apply(settings: PolicyAdminSettings, policy: Optional[str]) -> str:
    # imported here: the factory pulls in the Keycloak adapter, which needs admin.settings
    from ..integrations.common.policy_factory import create_password_policy_service

    service = create_password_policy_service(settings)
    try:
        if policy is None:
            return await service.apply_configured_policy()
        return await service.reconciler.apply_desired_policy(policy)
    finally:
        await service.aclose()


def apply_password_policy_from_env(policy: Optional[str] = None) -> str:
    """
    Convenience sync wrapper using env-configured settings.

    Applies `policy` if given, otherwise KEYCLOAK_PASSWORD_POLICY.
    """
    settings = settings_from_env()
    return asyncio.run(_apply(settings, policy))
