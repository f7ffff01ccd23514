# tests/test_domain.py
import pytest

from pkg_policy.domain.exceptions import (
    AuthFailedError,
    FetchFailedError,
    InvalidConfigurationError,
    PasswordPolicyError,
    RealmNotFoundError,
    RemoteRejectedError,
    RemoteUnavailableError,
    UnclassifiedError,
)
from pkg_policy.domain.value_objects import DesiredPolicy, RealmName


def test_realm_name_value_object():
    assert str(RealmName("acme")) == "acme"

    with pytest.raises(InvalidConfigurationError):
        RealmName("")
    with pytest.raises(InvalidConfigurationError):
        RealmName("   ")


def test_desired_policy_is_kept_verbatim():
    policy = DesiredPolicy.parse("  passwordHistory(5) and maxLength(128) ")
    assert policy.value == "  passwordHistory(5) and maxLength(128) "
    assert str(policy) == policy.value


@pytest.mark.parametrize("raw", ["", "   ", "\n\t", None, 42])
def test_desired_policy_rejects_blank_or_non_string(raw):
    with pytest.raises(InvalidConfigurationError) as exc_info:
        DesiredPolicy.parse(raw, realm="acme")
    assert exc_info.value.realm == "acme"
    assert "desired-policy-string" in str(exc_info.value)


def test_taxonomy_shares_a_base():
    for cls in (
        InvalidConfigurationError,
        AuthFailedError,
        RealmNotFoundError,
        FetchFailedError,
        RemoteRejectedError,
        RemoteUnavailableError,
        UnclassifiedError,
    ):
        assert issubclass(cls, PasswordPolicyError)


def test_only_transient_errors_are_retryable():
    assert FetchFailedError("x").retryable
    assert RemoteUnavailableError("x").retryable

    assert not RemoteRejectedError("x").retryable
    assert not AuthFailedError("x").retryable
    assert not RealmNotFoundError("x").retryable
    assert not InvalidConfigurationError("x").retryable
    assert not UnclassifiedError("x").retryable


def test_error_carries_remote_detail():
    err = RemoteRejectedError(
        "Provider rejected password policy",
        realm="acme",
        status_code=400,
        body='{"errorMessage":"Invalid config for hashIterations"}',
    )
    assert err.realm == "acme"
    assert err.status_code == 400
    assert err.body == '{"errorMessage":"Invalid config for hashIterations"}'
    assert err.kind == "RemoteRejectedError"
    assert "status=400" in str(err)
    assert "Invalid config for hashIterations" in str(err)


def test_error_str_without_remote_detail():
    assert str(AuthFailedError("nope")) == "nope"
