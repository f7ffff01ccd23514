from __future__ import annotations

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from ...domain.exceptions import PasswordPolicyError
from ..common.policy_factory import PasswordPolicyService
from .errors import status_code_for

DEFAULT_PREFIX = "/api/password-policy"


def create_password_policy_router(
        service: PasswordPolicyService,
        *,
        prefix: str = DEFAULT_PREFIX,
) -> APIRouter:
    """
    Router exposing:

        GET  {prefix}          -> current policy (text/plain, may be empty)
        POST {prefix}/update   -> apply the configured desired policy
    """
    router = APIRouter(prefix=prefix, tags=["password-policy"])

    @router.get("", response_class=PlainTextResponse)
    async def get_password_policy() -> str:
        try:
            return await service.get_current_policy()
        except PasswordPolicyError as exc:
            raise HTTPException(status_code=status_code_for(exc), detail=str(exc)) from exc

    @router.post("/update", response_class=PlainTextResponse)
    async def update_password_policy() -> str:
        try:
            policy = await service.apply_configured_policy()
        except PasswordPolicyError as exc:
            raise HTTPException(status_code=status_code_for(exc), detail=str(exc)) from exc
        return service.confirmation(policy)

    return router
