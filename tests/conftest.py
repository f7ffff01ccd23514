# tests/conftest.py
import copy
from typing import Any, Dict, List, Optional

import pytest

from pkg_policy.application.use_cases.reconcile_policy import PolicyReconciler


class FakeRealmAccessor:
    """In-memory realm that counts calls and can be told to fail."""

    def __init__(self, representation: Optional[Dict[str, Any]] = None) -> None:
        self.representation = representation or {}
        self.fetch_error: Optional[BaseException] = None
        self.submit_error: Optional[BaseException] = None
        self.fetch_calls = 0
        self.submit_calls = 0
        self.submitted: List[Dict[str, Any]] = []

    @property
    def calls(self) -> int:
        return self.fetch_calls + self.submit_calls

    async def fetch(self) -> Dict[str, Any]:
        self.fetch_calls += 1
        if self.fetch_error is not None:
            raise self.fetch_error
        return copy.deepcopy(self.representation)

    async def submit(self, representation: Dict[str, Any]) -> None:
        self.submit_calls += 1
        if self.submit_error is not None:
            raise self.submit_error
        self.submitted.append(copy.deepcopy(representation))
        self.representation = copy.deepcopy(representation)


class FakeAdminSession:
    def __init__(self, accessor: FakeRealmAccessor) -> None:
        self.accessor = accessor
        self.requested: List[str] = []

    def realm(self, name: str) -> FakeRealmAccessor:
        self.requested.append(name)
        return self.accessor


@pytest.fixture
def realm_store() -> FakeRealmAccessor:
    return FakeRealmAccessor(
        {
            "id": "2f6e-acme",
            "realm": "acme",
            "enabled": True,
            "passwordPolicy": "length(8)",
            "accessTokenLifespan": 300,
            "smtpServer": {"host": "smtp.acme.test", "port": "25"},
            "attributes": {"frontendUrl": ""},
        }
    )


@pytest.fixture
def admin_session(realm_store: FakeRealmAccessor) -> FakeAdminSession:
    return FakeAdminSession(realm_store)


@pytest.fixture
def reconciler(admin_session: FakeAdminSession) -> PolicyReconciler:
    return PolicyReconciler(session=admin_session, realm="acme")
