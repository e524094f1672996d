# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Authenticated request dispatch against the Data Extensions REST API."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import requests

from ..core._auth import Credentials, _TokenManager
from ..core._error_codes import INVALID_PAYLOAD, INVALID_RESPONSE, NETWORK_ERROR
from ..core._http import _HttpClient, _RetryExecutor, _safe_json
from ..core.errors import RequestError

_logger = logging.getLogger(__name__)


class _RestClient:
    """
    Compose bearer-authenticated JSON requests and run them through the retry executor.

    :param credentials: Credential store; ``base_url`` is read per request.
    :param auth: Token manager supplying the bearer token.
    :param http: Transport applying the configured timeout.
    :param retry: Retry executor wrapping each attempt.
    """

    def __init__(
        self,
        credentials: Credentials,
        auth: _TokenManager,
        http: _HttpClient,
        retry: _RetryExecutor,
    ) -> None:
        self._credentials = credentials
        self.auth = auth
        self._http = http
        self._retry = retry

    def _headers(self) -> Dict[str, str]:
        """Build standard JSON headers with bearer auth."""
        token = self.auth._acquire_token()
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }

    def _request(self, endpoint: str, method: str, body: Optional[Any] = None) -> Any:
        """
        Send ``method`` to ``{base_url}{endpoint}`` and return the parsed JSON body.

        :param endpoint: Path (and query string) relative to the service root.
        :param method: HTTP method.
        :param body: JSON-serializable payload, or None for no body.
        :return: Parsed JSON response, or None for an empty success body.
        :raises AuthError: If the bearer token cannot be obtained.
        :raises RequestError: On a non-success response after retries, a network
            failure, an unparsable success body, or a body that cannot be
            serialized to JSON (raised before authentication).
        """
        data: Optional[str] = None
        if body is not None:
            try:
                data = json.dumps(body)
            except (TypeError, ValueError) as exc:
                raise RequestError(
                    f"Data request failed: payload is not JSON serializable: {exc}",
                    subcode=INVALID_PAYLOAD,
                    details={"cause": str(exc)},
                ) from exc
        kwargs: Dict[str, Any] = {"headers": self._headers()}
        if data is not None:
            kwargs["data"] = data
        url = f"{self._credentials.base_url}{endpoint}"

        def send() -> Any:
            _logger.debug("%s %s", method, url)
            try:
                r = self._http._request(method, url, **kwargs)
            except requests.exceptions.RequestException as exc:
                raise RequestError(
                    f"Data request failed: {exc}",
                    subcode=NETWORK_ERROR,
                    details={"cause": str(exc)},
                ) from exc
            if not 200 <= r.status_code < 300:
                raise RequestError(
                    f"Data request failed: {r.status_code} {getattr(r, 'reason', '') or ''}".rstrip(),
                    status_code=r.status_code,
                    details=_safe_json(r),
                )
            return self._parse_body(r)

        return self._retry.execute(send)

    @staticmethod
    def _parse_body(r: requests.Response) -> Any:
        if not r.text:
            return None
        try:
            return r.json()
        except ValueError as exc:
            raise RequestError(
                "Data request failed: response body is not JSON",
                status_code=r.status_code,
                subcode=INVALID_RESPONSE,
                details={"body_excerpt": r.text[:200]},
            ) from exc
