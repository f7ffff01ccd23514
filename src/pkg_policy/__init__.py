"""
pkg_policy

Reconciles a realm-wide password policy held by a Keycloak server against
a desired value from static configuration, and translates the admin API's
failures into a small error taxonomy callers can act on.
"""

__version__ = "0.1.0"

from .domain.constants import PASSWORD_POLICY_FIELD
from .domain.exceptions import (
    AdminSessionError,
    AdminAuthError,
    AdminTransportError,
    AdminResponseError,
    PasswordPolicyError,
    InvalidConfigurationError,
    AuthFailedError,
    RealmNotFoundError,
    FetchFailedError,
    RemoteRejectedError,
    RemoteUnavailableError,
    UnclassifiedError,
)
from .domain.value_objects import RealmName, DesiredPolicy
from .domain.ports import AdminSession, RealmAccessor

from .application.use_cases.reconcile_policy import PolicyReconciler

from .admin import PolicyAdminSettings, settings_from_env, settings_from_yaml
from .adapters.keycloak.admin_session import KeycloakAdminSession, KeycloakRealmAccessor
from .integrations.common.policy_factory import PasswordPolicyService, create_password_policy_service

__all__ = [
    "__version__",
    "PASSWORD_POLICY_FIELD",
    # domain core
    "RealmName",
    "DesiredPolicy",
    "AdminSession",
    "RealmAccessor",
    # exceptions
    "AdminSessionError",
    "AdminAuthError",
    "AdminTransportError",
    "AdminResponseError",
    "PasswordPolicyError",
    "InvalidConfigurationError",
    "AuthFailedError",
    "RealmNotFoundError",
    "FetchFailedError",
    "RemoteRejectedError",
    "RemoteUnavailableError",
    "UnclassifiedError",
    # use cases
    "PolicyReconciler",
    # wiring
    "PolicyAdminSettings",
    "settings_from_env",
    "settings_from_yaml",
    "PasswordPolicyService",
    "create_password_policy_service",
    # adapters
    "KeycloakAdminSession",
    "KeycloakRealmAccessor",
]
