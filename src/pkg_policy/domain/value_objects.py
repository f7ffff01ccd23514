# src/pkg_policy/domain/value_objects.py

from __future__ import annotations

from dataclasses import dataclass

from .exceptions import InvalidConfigurationError


@dataclass(frozen=True, slots=True)
class RealmName:
    """
    Represents a Keycloak realm name (the target of reconciliation).
    """
    value: str

    def __post_init__(self) -> None:
        if not self.value or not self.value.strip():
            raise InvalidConfigurationError("Realm name is empty")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class DesiredPolicy:
    """
    Password policy string we want the provider to hold.

    Opaque: only emptiness is checked here. Whether something like
    `maxLength(8) and length(12)` is acceptable is up to the provider.
    The value is kept verbatim (not trimmed).
    """
    value: str

    @classmethod
    def parse(cls, raw: object, *, realm: str | None = None) -> "DesiredPolicy":
        if not isinstance(raw, str) or not raw.strip():
            raise InvalidConfigurationError(
                "Password policy string is empty. Configure 'desired-policy-string'.",
                realm=realm,
            )
        return cls(raw)

    def __str__(self) -> str:
        return self.value
