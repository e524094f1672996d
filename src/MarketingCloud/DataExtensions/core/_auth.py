# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Credential storage and bearer-token lifecycle.

:class:`_TokenManager` exchanges the access/secret key pair for a bearer token at
``{base_url}/auth`` and caches it until its expiry. It implements
:class:`azure.core.credentials.TokenCredential`, so the cached token is also
available as an :class:`azure.core.credentials.AccessToken`.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, Optional

import requests
from azure.core.credentials import AccessToken, TokenCredential

from ._error_codes import INVALID_RESPONSE, NETWORK_ERROR
from ._http import _HttpClient, _safe_json
from .errors import AuthError

_logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN = 3600


@dataclass
class Credentials:
    """Mutable access key / secret key / service root triple."""

    access_key: str = ""
    secret_key: str = ""
    base_url: str = ""

    def update(
        self,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        """Merge non-empty fields; empty or omitted values keep the current ones."""
        if access_key:
            self.access_key = access_key
        if secret_key:
            self.secret_key = secret_key
        if base_url:
            self.base_url = base_url.rstrip("/")


@dataclass(frozen=True)
class _CachedToken:
    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


class _TokenManager(TokenCredential):
    """
    Obtain and cache the bearer token for one client instance.

    The token is valid while ``clock() < expires_at``; no skew margin is applied.
    Concurrent callers that find no valid token share a single in-flight
    authentication instead of each issuing their own.

    :param credentials: Credential store read at authentication time.
    :param http: Transport used for the ``/auth`` call.
    :param clock: Callable returning the current epoch time in seconds.
    """

    def __init__(
        self,
        credentials: Credentials,
        http: _HttpClient,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._credentials = credentials
        self._http = http
        self._clock = clock or time.time
        self._token: Optional[_CachedToken] = None
        self._pending: Optional[Future] = None
        self._lock = threading.Lock()

    @property
    def token(self) -> Optional[str]:
        return self._token.value if self._token else None

    @property
    def expires_at(self) -> Optional[float]:
        return self._token.expires_at if self._token else None

    def get_token(self, *scopes: str, **kwargs: Any) -> AccessToken:
        """Return the cached or freshly acquired token as an :class:`AccessToken`. Scopes are ignored."""
        cached = self._acquire()
        return AccessToken(cached.value, int(cached.expires_at))

    def _acquire_token(self) -> str:
        """Return a bearer token string, authenticating when none is cached or it has expired."""
        return self._acquire().value

    def _acquire(self) -> _CachedToken:
        with self._lock:
            cached = self._token
            if cached is not None and cached.is_valid(self._clock()):
                _logger.debug("Using cached bearer token")
                return cached
            pending = self._pending
            owner = pending is None
            if owner:
                pending = self._pending = Future()

        if not owner:
            _logger.debug("Waiting on in-flight authentication")
            return pending.result()

        try:
            fresh = self._authenticate()
        except BaseException as exc:
            with self._lock:
                self._pending = None
            pending.set_exception(exc)
            raise
        with self._lock:
            self._token = fresh
            self._pending = None
        pending.set_result(fresh)
        return fresh

    def _authenticate(self) -> _CachedToken:
        url = f"{self._credentials.base_url}/auth"
        payload = {
            "accessKey": self._credentials.access_key,
            "secretKey": self._credentials.secret_key,
        }
        _logger.debug("Requesting bearer token from %s", url)
        try:
            r = self._http._request(
                "POST",
                url,
                headers={"Content-Type": "application/json"},
                json=payload,
            )
        except requests.exceptions.RequestException as exc:
            raise AuthError(
                f"Authentication failed: {exc}",
                subcode=NETWORK_ERROR,
                details={"cause": str(exc)},
            ) from exc

        if not 200 <= r.status_code < 300:
            raise AuthError(
                f"Authentication failed: {r.status_code} {getattr(r, 'reason', '') or ''}".rstrip(),
                status_code=r.status_code,
                details=_safe_json(r),
            )

        try:
            body = r.json()
        except ValueError as exc:
            raise AuthError("Authentication failed: response body is not JSON", subcode=INVALID_RESPONSE) from exc
        token = body.get("token") if isinstance(body, dict) else None
        if not token:
            raise AuthError(
                "Authentication failed: response did not include a token",
                subcode=INVALID_RESPONSE,
                details=body if isinstance(body, dict) else {},
            )

        expires_in = body.get("expiresIn") or DEFAULT_EXPIRES_IN
        try:
            expires_at = self._clock() + float(expires_in)
        except (TypeError, ValueError) as exc:
            raise AuthError(
                f"Authentication failed: invalid expiresIn {expires_in!r}",
                subcode=INVALID_RESPONSE,
                details=body,
            ) from exc
        _logger.info("Acquired bearer token valid for %s seconds", expires_in)
        return _CachedToken(value=token, expires_at=expires_at)
