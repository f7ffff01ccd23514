from __future__ import annotations

from typing import Optional


# --- Admin session (port contract) ---------------------------------------


class AdminSessionError(Exception):
    """Base for failures raised by an AdminSession / RealmAccessor."""

    def __init__(
            self,
            message: str,
            *,
            status_code: Optional[int] = None,
            body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class AdminAuthError(AdminSessionError):
    """Raised when the provider rejects the admin credentials."""
    pass


class AdminTransportError(AdminSessionError):
    """Raised when the provider cannot be reached (connect, read, timeout)."""
    pass


class AdminResponseError(AdminSessionError):
    """Raised when the provider answers with an unexpected status or body."""
    pass


# --- Password policy taxonomy --------------------------------------------


class PasswordPolicyError(Exception):
    """
    Base for every failure surfaced by PolicyReconciler.

    Carries the remote status code and response body (when there was one)
    so callers can log or act on them.
    """

    retryable: bool = False

    def __init__(
            self,
            message: str,
            *,
            realm: Optional[str] = None,
            status_code: Optional[int] = None,
            body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.realm = realm
        self.status_code = status_code
        self.body = body

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        msg = super().__str__()
        if self.status_code is not None:
            msg = f"{msg} (status={self.status_code})"
        if self.body:
            msg = f"{msg}: {self.body}"
        return msg


class InvalidConfigurationError(PasswordPolicyError):
    """Raised when local configuration is unusable. Never reaches the network."""
    pass


class AuthFailedError(PasswordPolicyError):
    """Raised when the admin credentials are rejected."""
    pass


class RealmNotFoundError(PasswordPolicyError):
    """Raised when the target realm does not exist on the provider."""
    pass


class FetchFailedError(PasswordPolicyError):
    """Raised when reading the realm fails at transport level or with a 5xx."""
    retryable = True


class RemoteRejectedError(PasswordPolicyError):
    """Raised when the provider refuses the write (4xx). Resubmitting won't help."""
    pass


class RemoteUnavailableError(PasswordPolicyError):
    """Raised when the provider fails the write transiently (5xx, transport)."""
    retryable = True


class UnclassifiedError(PasswordPolicyError):
    """Raised for anything that does not fit the categories above."""
    pass
