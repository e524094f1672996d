# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import threading
from unittest.mock import patch

import pytest
import requests
from azure.core.credentials import AccessToken, TokenCredential

from MarketingCloud.DataExtensions.core._auth import Credentials, _TokenManager
from MarketingCloud.DataExtensions.core._error_codes import INVALID_RESPONSE, NETWORK_ERROR
from MarketingCloud.DataExtensions.core._http import _HttpClient
from MarketingCloud.DataExtensions.core.errors import AuthError
from tests.unit.test_helpers import ScriptedTransport, auth_response, make_response

BASE_URL = "https://mcapi.salesforce.com/data/v1"


@pytest.fixture
def credentials():
    return Credentials(access_key="test-key", secret_key="test-secret", base_url=BASE_URL)


@pytest.fixture
def manager(credentials, fake_clock):
    return _TokenManager(credentials, _HttpClient(timeout_ms=30000), clock=fake_clock.time)


def test_is_token_credential(manager):
    assert isinstance(manager, TokenCredential)


def test_first_call_authenticates(manager, fake_clock):
    transport = ScriptedTransport([auth_response("mock-jwt-token", 3600)])
    with patch("requests.request", transport):
        token = manager._acquire_token()

    assert token == "mock-jwt-token"
    assert manager.token == "mock-jwt-token"
    assert manager.expires_at == fake_clock.now + 3600
    method, url, kwargs = transport.calls[0]
    assert method == "POST"
    assert url == f"{BASE_URL}/auth"
    assert kwargs["headers"] == {"Content-Type": "application/json"}
    assert kwargs["json"] == {"accessKey": "test-key", "secretKey": "test-secret"}
    assert kwargs["timeout"] == 30.0


def test_cached_token_reused_before_expiry(manager, fake_clock):
    transport = ScriptedTransport([auth_response("t1", 3600)])
    with patch("requests.request", transport):
        manager._acquire_token()
        fake_clock.advance(3599.999)
        assert manager._acquire_token() == "t1"
    assert len(transport.calls) == 1


def test_reauthenticates_at_expiry(manager, fake_clock):
    transport = ScriptedTransport([auth_response("t1", 3600), auth_response("t2", 3600)])
    with patch("requests.request", transport):
        manager._acquire_token()
        fake_clock.advance(3600)
        assert manager._acquire_token() == "t2"
        fake_clock.advance(10)
        assert manager._acquire_token() == "t2"
    assert len(transport.calls) == 2


def test_expires_in_defaults_to_one_hour(manager, fake_clock):
    transport = ScriptedTransport([auth_response("t1", None)])
    start = fake_clock.now
    with patch("requests.request", transport):
        manager._acquire_token()
    assert manager.expires_at == start + 3600


def test_uses_current_credentials(manager, credentials):
    credentials.update(access_key="rotated", base_url="https://other.example.com/")
    transport = ScriptedTransport([auth_response()])
    with patch("requests.request", transport):
        manager._acquire_token()
    _, url, kwargs = transport.calls[0]
    assert url == "https://other.example.com/auth"
    assert kwargs["json"] == {"accessKey": "rotated", "secretKey": "test-secret"}


def test_non_success_raises_auth_error_with_status(manager):
    transport = ScriptedTransport([make_response(401, {"message": "bad credentials"}, reason="Unauthorized")])
    with patch("requests.request", transport):
        with pytest.raises(AuthError) as ei:
            manager._acquire_token()
    assert ei.value.status_code == 401
    assert ei.value.details == {"message": "bad credentials"}
    assert "Authentication failed" in str(ei.value)
    assert manager.token is None


def test_auth_is_not_retried(manager):
    transport = ScriptedTransport([make_response(503, None, reason="Service Unavailable")])
    with patch("requests.request", transport):
        with pytest.raises(AuthError) as ei:
            manager._acquire_token()
    assert ei.value.status_code == 503
    assert len(transport.calls) == 1


def test_network_failure_wraps_cause(manager):
    cause = requests.exceptions.ConnectionError("connection refused")
    transport = ScriptedTransport([cause])
    with patch("requests.request", transport):
        with pytest.raises(AuthError) as ei:
            manager._acquire_token()
    assert ei.value.status_code is None
    assert ei.value.subcode == NETWORK_ERROR
    assert ei.value.__cause__ is cause
    assert "connection refused" in ei.value.details["cause"]


def test_missing_token_is_invalid_response(manager):
    transport = ScriptedTransport([make_response(200, {"expiresIn": 3600})])
    with patch("requests.request", transport):
        with pytest.raises(AuthError) as ei:
            manager._acquire_token()
    assert ei.value.subcode == INVALID_RESPONSE


def test_non_json_body_is_invalid_response(manager):
    transport = ScriptedTransport([make_response(200, "<html>")])
    with patch("requests.request", transport):
        with pytest.raises(AuthError) as ei:
            manager._acquire_token()
    assert ei.value.subcode == INVALID_RESPONSE


def test_get_token_returns_access_token(manager, fake_clock):
    transport = ScriptedTransport([auth_response("t1", 60)])
    with patch("requests.request", transport):
        access = manager.get_token("ignored-scope")
    assert isinstance(access, AccessToken)
    assert access.token == "t1"
    assert access.expires_on == int(fake_clock.now + 60)


def test_failed_auth_can_be_retried_by_next_call(manager):
    transport = ScriptedTransport([make_response(500, None), auth_response("t1")])
    with patch("requests.request", transport):
        with pytest.raises(AuthError):
            manager._acquire_token()
        assert manager._acquire_token() == "t1"


def test_concurrent_callers_share_one_authentication(manager):
    started = threading.Event()
    release = threading.Event()
    calls = []

    def slow_auth(method, url, **kwargs):
        calls.append(url)
        started.set()
        release.wait(timeout=5)
        return make_response(200, {"token": "shared", "expiresIn": 3600})

    results = []

    def worker():
        results.append(manager._acquire_token())

    with patch("requests.request", slow_auth):
        first = threading.Thread(target=worker)
        first.start()
        assert started.wait(timeout=5)
        others = [threading.Thread(target=worker) for _ in range(4)]
        for t in others:
            t.start()
        release.set()
        for t in [first] + others:
            t.join(timeout=5)

    assert results == ["shared"] * 5
    assert len(calls) == 1


def test_concurrent_waiters_receive_shared_failure(manager):
    started = threading.Event()
    release = threading.Event()
    calls = []

    def failing_auth(method, url, **kwargs):
        calls.append(url)
        started.set()
        release.wait(timeout=5)
        return make_response(401, {"message": "nope"})

    errors = []

    def worker():
        try:
            manager._acquire_token()
        except AuthError as exc:
            errors.append(exc)

    with patch("requests.request", failing_auth):
        first = threading.Thread(target=worker)
        first.start()
        assert started.wait(timeout=5)
        pending = manager._pending
        waiting = threading.Event()
        original_result = pending.result

        def observed_result(timeout=None):
            waiting.set()
            return original_result(timeout)

        pending.result = observed_result
        second = threading.Thread(target=worker)
        second.start()
        assert waiting.wait(timeout=5)
        release.set()
        first.join(timeout=5)
        second.join(timeout=5)

    assert len(errors) == 2
    assert all(e.status_code == 401 for e in errors)
    assert len(calls) == 1


@pytest.mark.parametrize("expires_in", ["soon", [3600], {"seconds": 3600}])
def test_unusable_expires_in_is_invalid_response(manager, expires_in):
    transport = ScriptedTransport([make_response(200, {"token": "t", "expiresIn": expires_in})])
    with patch("requests.request", transport):
        with pytest.raises(AuthError) as ei:
            manager._acquire_token()
    assert ei.value.subcode == INVALID_RESPONSE
    assert ei.value.details["expiresIn"] == expires_in
    assert isinstance(ei.value.__cause__, (TypeError, ValueError))
    assert manager.token is None
