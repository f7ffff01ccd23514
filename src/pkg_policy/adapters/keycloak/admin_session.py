from __future__ import annotations

import asyncio
import time
import urllib.parse
from typing import Any, Dict, Optional

import httpx

from ...admin.settings import PolicyAdminSettings
from ...domain.exceptions import AdminAuthError, AdminResponseError, AdminTransportError
from ...domain.ports import AdminSession, RealmAccessor


class KeycloakAdminSession(AdminSession):
    """
    Adapter implementing the AdminSession port on top of Keycloak's admin REST API.

    - obtains admin tokens (password grant against the admin realm)
    - refreshes the token once on 401
    - maps httpx failures onto AdminAuthError / AdminTransportError / AdminResponseError

    Holds no business rules. Cancellation and timeouts of the underlying
    httpx client are propagated, never swallowed.
    """

    def __init__(self, settings: PolicyAdminSettings, client: Optional[httpx.AsyncClient] = None):
        self.s = settings
        self._client = client or httpx.AsyncClient(
            verify=self.s.verify_ssl,
            timeout=self.s.timeout_seconds,
        )
        self._token: Optional[str] = None
        self._token_exp: float = 0.0
        self._lock = asyncio.Lock()

    async def close(self) -> None:
        await self._client.aclose()

    def realm(self, name: str) -> RealmAccessor:
        return KeycloakRealmAccessor(self, name)

    # ------------------------------------------------------------------ #
    # token management
    # ------------------------------------------------------------------ #

    def _token_valid(self) -> bool:
        return bool(self._token) and time.time() < (self._token_exp - 20)

    async def _get_token(self, *, force: bool = False) -> str:
        if not force and self._token_valid():
            return self._token  # type: ignore[return-value]

        async with self._lock:
            if not force and self._token_valid():
                return self._token  # type: ignore[return-value]

            realm = urllib.parse.quote(self.s.admin_realm, safe="")
            token_url = f"{self.s.base_url_slash}realms/{realm}/protocol/openid-connect/token"
            data = {
                "client_id": self.s.admin_client_id,
                "username": self.s.keycloak_admin_user,
                "password": self.s.keycloak_admin_pass,
                "grant_type": "password",
            }
            try:
                resp = await self._client.post(token_url, data=data)
            except httpx.TransportError as e:
                raise AdminTransportError(f"Failed to reach token endpoint: {e}") from e

            if resp.status_code >= 500:
                raise AdminResponseError(
                    f"Token endpoint failed: {resp.status_code}",
                    status_code=resp.status_code,
                    body=resp.text,
                )
            if resp.status_code >= 400:
                raise AdminAuthError(
                    f"Failed to obtain admin token: {resp.status_code}",
                    status_code=resp.status_code,
                    body=resp.text,
                )

            try:
                payload = resp.json()
                self._token = payload["access_token"]
            except (ValueError, KeyError, TypeError) as e:
                raise AdminResponseError(
                    "Token endpoint returned an unexpected payload",
                    status_code=resp.status_code,
                    body=resp.text,
                ) from e
            self._token_exp = time.time() + float(payload.get("expires_in", 60))
            return self._token

    def _auth_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}

    async def _send(
        self,
        method: str,
        url: str,
        token: str,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        try:
            return await self._client.request(
                method,
                url,
                headers=self._auth_headers(token),
                json=json,
            )
        except httpx.TransportError as e:
            raise AdminTransportError(f"{method} {url} failed: {e}") from e

    async def request(
        self,
        method: str,
        url: str,
        *,
        json: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        token = await self._get_token()
        resp = await self._send(method, url, token, json)
        if resp.status_code == 401:
            # refresh once
            token = await self._get_token(force=True)
            resp = await self._send(method, url, token, json)

        if resp.status_code in (401, 403):
            raise AdminAuthError(
                f"{method} {url} not authorized: {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )
        if resp.is_error:
            raise AdminResponseError(
                f"{method} {url} failed: {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )
        return resp

    # ------------------------------------------------------------------ #
    # base helpers
    # ------------------------------------------------------------------ #

    def realm_admin_url(self, name: str) -> str:
        return f"{self.s.base_url_slash}admin/realms/{urllib.parse.quote(name, safe='')}"


class KeycloakRealmAccessor(RealmAccessor):
    """RealmAccessor for `GET/PUT {base}/admin/realms/{realm}`."""

    def __init__(self, session: KeycloakAdminSession, name: str) -> None:
        self._session = session
        self.name = name

    async def fetch(self) -> Dict[str, Any]:
        resp = await self._session.request("GET", self._session.realm_admin_url(self.name))
        try:
            payload = resp.json()
        except ValueError as e:
            raise AdminResponseError(
                f"Realm '{self.name}' response is not JSON",
                status_code=resp.status_code,
                body=resp.text,
            ) from e
        if not isinstance(payload, dict):
            raise AdminResponseError(
                f"Realm '{self.name}' response is not a JSON object",
                status_code=resp.status_code,
                body=resp.text,
            )
        return payload

    async def submit(self, representation: Dict[str, Any]) -> None:
        await self._session.request(
            "PUT",
            self._session.realm_admin_url(self.name),
            json=representation,
        )
