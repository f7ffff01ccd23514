# tests/test_fastapi_routes.py
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pkg_policy.admin.settings import PolicyAdminSettings
from pkg_policy.domain.exceptions import (
    AdminAuthError,
    AdminResponseError,
    AdminTransportError,
    RemoteRejectedError,
    UnclassifiedError,
)
from pkg_policy.integrations.common.policy_factory import PasswordPolicyService
from pkg_policy.integrations.fastapi import (
    create_password_policy_app,
    create_password_policy_router,
    status_code_for,
)

POLICY = "passwordHistory(5) and maxLength(128)"


def make_client(reconciler, desired=POLICY) -> TestClient:
    service = PasswordPolicyService(reconciler=reconciler, desired_policy=desired)
    app = FastAPI()
    app.include_router(create_password_policy_router(service))
    return TestClient(app, raise_server_exceptions=False)


def test_get_password_policy(reconciler):
    client = make_client(reconciler)

    resp = client.get("/api/password-policy")

    assert resp.status_code == 200
    assert resp.text == "length(8)"
    assert resp.headers["content-type"].startswith("text/plain")


def test_get_password_policy_empty(reconciler, realm_store):
    realm_store.representation.pop("passwordPolicy")
    client = make_client(reconciler)

    resp = client.get("/api/password-policy")

    assert resp.status_code == 200
    assert resp.text == ""


def test_update_password_policy(reconciler, realm_store):
    client = make_client(reconciler)

    resp = client.post("/api/password-policy/update")

    assert resp.status_code == 200
    assert resp.text == f"Updated realm 'acme' password policy to:\n{POLICY}"
    assert realm_store.representation["passwordPolicy"] == POLICY


def test_update_with_blank_configured_policy_is_400(reconciler, realm_store):
    client = make_client(reconciler, desired="  ")

    resp = client.post("/api/password-policy/update")

    assert resp.status_code == 400
    assert realm_store.calls == 0


@pytest.mark.parametrize(
    "attr, error, expected_status",
    [
        ("fetch_error", AdminAuthError("bad creds", status_code=401), 502),
        ("fetch_error", AdminResponseError("missing", status_code=404), 502),
        ("fetch_error", AdminTransportError("refused"), 503),
        ("submit_error", AdminResponseError("bad policy", status_code=400, body="Invalid policy"), 502),
        ("submit_error", AdminResponseError("down", status_code=500, body="NPE"), 503),
        ("submit_error", RuntimeError("what"), 500),
    ],
)
def test_update_error_mapping(reconciler, realm_store, attr, error, expected_status):
    setattr(realm_store, attr, error)
    client = make_client(reconciler)

    resp = client.post("/api/password-policy/update")

    assert resp.status_code == expected_status


def test_rejection_detail_carries_provider_body(reconciler, realm_store):
    realm_store.submit_error = AdminResponseError(
        "bad policy", status_code=400, body='{"error":"Invalid config for hashAlgorithm"}'
    )
    client = make_client(reconciler)

    resp = client.post("/api/password-policy/update")

    assert resp.status_code == 502
    assert "Invalid config for hashAlgorithm" in resp.json()["detail"]


def test_get_error_mapping(reconciler, realm_store):
    realm_store.fetch_error = AdminResponseError("missing", status_code=404)
    client = make_client(reconciler)

    assert client.get("/api/password-policy").status_code == 502


def test_status_code_for_unmapped_exceptions():
    assert status_code_for(UnclassifiedError("x")) == 500
    assert status_code_for(RuntimeError("x")) == 500
    assert status_code_for(RemoteRejectedError("x")) == 502


def test_create_password_policy_app_closes_service(reconciler):
    closed = []

    class ClosingService(PasswordPolicyService):
        async def aclose(self) -> None:
            closed.append(True)

    service = ClosingService(reconciler=reconciler, desired_policy=POLICY)
    settings = PolicyAdminSettings("https://sso.example.com", "admin", "pw", keycloak_realm="acme")
    app = create_password_policy_app(settings, service=service)

    with TestClient(app) as client:
        assert client.get("/api/password-policy").text == "length(8)"
        assert client.post("/api/password-policy/update").status_code == 200

    assert closed == [True]
