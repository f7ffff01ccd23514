from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from .errors import ERROR_STATUS_MAP, status_code_for
from .routes import create_password_policy_router, DEFAULT_PREFIX
from ..common.policy_factory import create_password_policy_service, PasswordPolicyService
from ...admin.settings import PolicyAdminSettings


def create_password_policy_app(
    settings: PolicyAdminSettings,
    *,
    service: PasswordPolicyService | None = None,
    prefix: str = DEFAULT_PREFIX,
) -> FastAPI:
    """
    High-level helper for a standalone FastAPI app:

    - Creates a PasswordPolicyService from Keycloak settings (unless given)
    - Mounts the password policy router under `prefix`
    - Closes the admin session on shutdown
    """
    svc = service or create_password_policy_service(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await svc.aclose()

    app = FastAPI(title="Password policy", lifespan=lifespan)
    app.include_router(create_password_policy_router(svc, prefix=prefix))
    return app


__all__ = [
    "ERROR_STATUS_MAP",
    "create_password_policy_app",
    "create_password_policy_router",
    "status_code_for",
]
