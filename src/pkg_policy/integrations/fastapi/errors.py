from __future__ import annotations

from fastapi import status

from ...domain.exceptions import (
    AuthFailedError,
    FetchFailedError,
    InvalidConfigurationError,
    RealmNotFoundError,
    RemoteRejectedError,
    RemoteUnavailableError,
)

# Upstream misconfiguration / refusal -> 502, transient upstream trouble -> 503.
ERROR_STATUS_MAP: dict[type[Exception], int] = {
    InvalidConfigurationError: status.HTTP_400_BAD_REQUEST,
    AuthFailedError: status.HTTP_502_BAD_GATEWAY,
    RealmNotFoundError: status.HTTP_502_BAD_GATEWAY,
    RemoteRejectedError: status.HTTP_502_BAD_GATEWAY,
    RemoteUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    FetchFailedError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def status_code_for(exc: Exception) -> int:
    """HTTP status for a password policy failure; 500 for anything unmapped."""
    for exc_type, code in ERROR_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
