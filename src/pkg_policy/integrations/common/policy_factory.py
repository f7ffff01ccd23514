from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import httpx

from ...adapters.keycloak.admin_session import KeycloakAdminSession
from ...admin.settings import PolicyAdminSettings
from ...application.use_cases.reconcile_policy import PolicyReconciler


@dataclass(slots=True)
class PasswordPolicyService:
    """
    Framework-agnostic password policy facade.

    Binds the reconciler to the configured `desired-policy-string`.
    Integrations (FastAPI, CLI) adapt this to their own surfaces.
    """

    reconciler: PolicyReconciler
    desired_policy: str
    session: Optional[KeycloakAdminSession] = None

    @property
    def realm(self) -> str:
        return self.reconciler.realm

    async def get_current_policy(self) -> str:
        return await self.reconciler.get_current_policy()

    async def apply_configured_policy(self) -> str:
        return await self.reconciler.apply_desired_policy(self.desired_policy)

    def confirmation(self, policy: str) -> str:
        return f"Updated realm '{self.realm}' password policy to:\n{policy}"

    async def aclose(self) -> None:
        if self.session is not None:
            await self.session.close()


def create_password_policy_service(
        settings: PolicyAdminSettings,
        *,
        client: Optional[httpx.AsyncClient] = None,
) -> PasswordPolicyService:
    """
    High-level factory: Keycloak settings -> PasswordPolicyService.

    - builds a KeycloakAdminSession
    - wires a PolicyReconciler for the target realm
    """
    session = KeycloakAdminSession(settings, client=client)
    reconciler = PolicyReconciler(session=session, realm=settings.target_realm)
    return PasswordPolicyService(
        reconciler=reconciler,
        desired_policy=settings.desired_policy,
        session=session,
    )
