from __future__ import annotations

from typing import Any, Dict, Protocol


class RealmAccessor(Protocol):
    """
    Port for reading and writing one realm's representation.

    Implementations live in the adapters layer (e.g. Keycloak admin REST).
    """

    async def fetch(self) -> Dict[str, Any]:
        """
        Return a fresh copy of the realm representation.

        Raises:
          - AdminAuthError
          - AdminTransportError
          - AdminResponseError (carries status code and body)
        """
        ...

    async def submit(self, representation: Dict[str, Any]) -> None:
        """
        Replace the realm representation on the provider.

        Raises the same exceptions as `fetch`.
        """
        ...


class AdminSession(Protocol):
    """
    Port for an authenticated administrative channel to the identity provider.
    """

    def realm(self, name: str) -> RealmAccessor:
        ...
