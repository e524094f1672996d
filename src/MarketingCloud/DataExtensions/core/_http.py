# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP transport and retry execution.

This module provides :class:`~MarketingCloud.DataExtensions.core._http._HttpClient`,
a thin wrapper around the requests library that applies the configured timeout,
and :class:`~MarketingCloud.DataExtensions.core._http._RetryExecutor`, which
re-runs a request producer on transient HTTP statuses with exponential backoff.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional, TypeVar

import requests

from ._error_codes import is_transient_status

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class _HttpClient:
    """
    HTTP transport with a default per-request timeout.

    :param timeout_ms: Default request timeout in milliseconds. Converted to seconds
        for ``requests``.
    :type timeout_ms: :class:`int` | None
    """

    def __init__(self, timeout_ms: Optional[int] = None) -> None:
        self.timeout_ms = timeout_ms

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute a single HTTP request.

        :param method: HTTP method (GET, POST, ...).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()``.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: On network-level failures.
        """
        if "timeout" not in kwargs and self.timeout_ms is not None:
            kwargs["timeout"] = self.timeout_ms / 1000.0
        return requests.request(method, url, **kwargs)


class _RetryExecutor:
    """
    Run a request producer, retrying failures that carry a transient HTTP status.

    A failure is retried when its ``status_code`` attribute is one of 429, 500, 502,
    503 or 504; anything else propagates on first occurrence. The wait before retry
    ``n`` (zero-based attempt index) is ``base_delay_ms * 2**n`` and goes through the
    injected ``sleep`` callable, so tests can substitute simulated time.

    :param max_retries: Maximum number of attempts (default: 3).
    :type max_retries: :class:`int`
    :param base_delay_ms: Base backoff delay in milliseconds (default: 1000).
    :type base_delay_ms: :class:`int`
    :param sleep: Callable taking a delay in seconds. Defaults to :func:`time.sleep`.
    """

    def __init__(
        self,
        max_retries: int = 3,
        base_delay_ms: int = 1000,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self._sleep = sleep or time.sleep

    def delay_ms(self, attempt: int, base_delay_ms: Optional[int] = None) -> int:
        base = self.base_delay_ms if base_delay_ms is None else base_delay_ms
        return base * (2**attempt)

    def execute(
        self,
        producer: Callable[[], T],
        max_retries: Optional[int] = None,
        base_delay_ms: Optional[int] = None,
    ) -> T:
        """
        Call ``producer`` until it succeeds or the attempt budget is spent.

        :param producer: Zero-argument callable performing one attempt.
        :param max_retries: Overrides the configured attempt budget for this call.
        :param base_delay_ms: Overrides the configured base delay for this call.
        :return: The producer's result.
        :raises Exception: The most recent failure once attempts are exhausted, or the
            first non-transient failure.
        """
        attempts = max(1, self.max_retries if max_retries is None else max_retries)
        for attempt in range(attempts):
            try:
                return producer()
            except Exception as exc:
                status = getattr(exc, "status_code", None)
                if not is_transient_status(status) or attempt == attempts - 1:
                    raise
                delay = self.delay_ms(attempt, base_delay_ms)
                _logger.warning(
                    "Transient HTTP %s on attempt %d/%d; retrying in %d ms",
                    status,
                    attempt + 1,
                    attempts,
                    delay,
                )
                self._sleep(delay / 1000.0)
        # Unreachable: the loop either returns or raises
        raise RuntimeError("Unexpected end of retry loop")


def _safe_json(r: requests.Response) -> Any:
    """Parse an error body, falling back to an empty dict when it is not JSON."""
    try:
        return r.json()
    except ValueError:
        return {}
