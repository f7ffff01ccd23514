from __future__ import annotations

from dataclasses import dataclass, field

TRUTHY = {"1", "true", "yes", "on"}


def parse_bool(raw: object, default: bool = True) -> bool:
    """Parse a config flag given as a bool or a string such as "false" / "on"."""
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().lower() in TRUTHY


@dataclass(frozen=True, slots=True)
class PolicyAdminSettings:
    """
    Keycloak admin connection + desired password policy.

    Host code decides how to construct this (env, YAML file, etc.).
    Loaded once at start-up and never mutated afterwards.
    """
    keycloak_base_url: str
    keycloak_admin_user: str
    keycloak_admin_pass: str = field(repr=False)
    keycloak_realm: str = "master"

    # `desired-policy-string`
    desired_policy: str = ""

    # Admin login
    admin_realm: str = "master"
    admin_client_id: str = "admin-cli"
    verify_ssl: bool = True
    timeout_seconds: float = 30.0

    log_level: str = "INFO"

    @property
    def base_url_slash(self) -> str:
        b = self.keycloak_base_url.strip()
        return b if b.endswith("/") else b + "/"

    @property
    def target_realm(self) -> str:
        return self.keycloak_realm.strip()
