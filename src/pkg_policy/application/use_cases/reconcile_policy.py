from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, NoReturn

from ...domain.constants import PASSWORD_POLICY_FIELD, Phase
from ...domain.exceptions import (
    AdminAuthError,
    AdminResponseError,
    AdminTransportError,
    AuthFailedError,
    FetchFailedError,
    PasswordPolicyError,
    RealmNotFoundError,
    RemoteRejectedError,
    RemoteUnavailableError,
    UnclassifiedError,
)
from ...domain.ports import AdminSession, RealmAccessor
from ...domain.value_objects import DesiredPolicy, RealmName

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PolicyReconciler:
    """
    Application use case:
    - read the password policy of one realm
    - overwrite it with a desired value (fetch -> mutate one field -> submit)
    - translate admin session failures into the PasswordPolicyError taxonomy

    Stateless between calls. Nothing is retried here: only the caller knows
    whether a FetchFailedError / RemoteUnavailableError is worth another try.

    Concurrent `apply_desired_policy` calls for the same realm are NOT
    coordinated; two overlapping fetch/submit pairs race and the provider's
    own concurrency control (if any) decides. Serialize calls on the caller
    side if that matters.
    """

    session: AdminSession
    realm: str

    def __post_init__(self) -> None:
        self.realm = str(RealmName(self.realm))

    # ------------------------------------------------------------------ #
    # public operations
    # ------------------------------------------------------------------ #

    async def get_current_policy(self) -> str:
        """
        Return the realm's password policy, or "" if none is configured.

        Raises:
            FetchFailedError
            AuthFailedError
            RealmNotFoundError
            UnclassifiedError
        """
        representation = await self._fetch(self._accessor())
        policy = representation.get(PASSWORD_POLICY_FIELD)
        return policy or ""

    async def apply_desired_policy(self, desired: str) -> str:
        """
        Overwrite the realm's password policy with `desired`.

        Every other field of the fetched representation is submitted
        untouched. Returns the applied policy string.

        Raises:
            InvalidConfigurationError (before any remote call)
            FetchFailedError / AuthFailedError / RealmNotFoundError (nothing written)
            RemoteRejectedError
            RemoteUnavailableError
            UnclassifiedError
        """
        policy = DesiredPolicy.parse(desired, realm=self.realm)

        logger.info("Updating password policy on realm '%s' to: %s", self.realm, policy)

        accessor = self._accessor()
        representation = await self._fetch(accessor)
        previous = representation.get(PASSWORD_POLICY_FIELD)
        representation[PASSWORD_POLICY_FIELD] = policy.value

        try:
            await accessor.submit(representation)
        except Exception as exc:
            self._raise_translated(exc, Phase.SUBMIT)

        logger.info(
            "Password policy updated successfully for realm '%s' (previous: %r)",
            self.realm,
            previous,
        )
        return policy.value

    # ------------------------------------------------------------------ #
    # internal helpers
    # ------------------------------------------------------------------ #

    def _accessor(self) -> RealmAccessor:
        return self.session.realm(self.realm)

    async def _fetch(self, accessor: RealmAccessor) -> Dict[str, Any]:
        logger.debug("Fetching realm representation for '%s'", self.realm)
        try:
            representation = await accessor.fetch()
        except Exception as exc:
            self._raise_translated(exc, Phase.FETCH)

        if not isinstance(representation, dict):
            err = UnclassifiedError(
                f"Realm '{self.realm}' representation is not an object: "
                f"{type(representation).__name__}",
                realm=self.realm,
            )
            logger.error("%s", err)
            raise err
        return representation

    def _raise_translated(self, exc: Exception, phase: Phase) -> NoReturn:
        err = self._translate(exc, phase)
        logger.error(
            "Failed to %s realm '%s': %s. Status=%s, Body=%s",
            phase.value,
            self.realm,
            err.kind,
            err.status_code,
            err.body,
        )
        if err is exc:
            raise err
        raise err from exc

    def _translate(self, exc: Exception, phase: Phase) -> PasswordPolicyError:
        if isinstance(exc, PasswordPolicyError):
            return exc

        realm = self.realm
        status_code = getattr(exc, "status_code", None)
        body = getattr(exc, "body", None)
        detail = dict(realm=realm, status_code=status_code, body=body)

        if isinstance(exc, AdminAuthError):
            return AuthFailedError(
                f"Admin credentials rejected while trying to {phase.value} realm '{realm}'",
                **detail,
            )

        if phase is Phase.FETCH:
            if isinstance(exc, AdminTransportError):
                return FetchFailedError(f"Could not read realm '{realm}': {exc}", **detail)
            if isinstance(exc, AdminResponseError):
                if status_code == 404:
                    return RealmNotFoundError(f"Realm '{realm}' not found", **detail)
                if status_code is not None and 500 <= status_code <= 599:
                    return FetchFailedError(f"Provider failed reading realm '{realm}'", **detail)
        else:
            if isinstance(exc, AdminTransportError):
                return RemoteUnavailableError(
                    f"Could not submit realm '{realm}', outcome unknown: {exc}",
                    **detail,
                )
            if isinstance(exc, AdminResponseError) and status_code is not None:
                if 400 <= status_code <= 499:
                    return RemoteRejectedError(
                        f"Provider rejected password policy for realm '{realm}'",
                        **detail,
                    )
                if 500 <= status_code <= 599:
                    return RemoteUnavailableError(
                        f"Provider failed updating realm '{realm}'",
                        **detail,
                    )

        return UnclassifiedError(
            f"Unexpected failure during {phase.value} of realm '{realm}': {exc!r}",
            **detail,
        )
