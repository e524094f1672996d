# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_BASE_URL = "https://mcapi.salesforce.com/data/v1"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY_MS = 1000


@dataclass(frozen=True)
class MarketingCloudConfig:
    """
    Construction-time settings for :class:`~MarketingCloud.DataExtensions.client.MarketingCloudClient`.

    :param access_key: API access key sent to the ``/auth`` endpoint.
    :type access_key: str
    :param secret_key: API secret key sent to the ``/auth`` endpoint.
    :type secret_key: str
    :param base_url: Service root, e.g. ``"https://mcapi.salesforce.com/data/v1"``.
    :type base_url: str
    :param data_extension_key: When set, registered under the name ``"default"``.
    :type data_extension_key: str or None
    :param timeout_ms: Per-request timeout in milliseconds (default: 30000).
    :type timeout_ms: int
    :param max_retries: Maximum attempts per data request (default: 3).
    :type max_retries: int
    :param retry_delay_ms: Base delay in milliseconds for exponential backoff (default: 1000).
    :type retry_delay_ms: int
    """

    access_key: str = ""
    secret_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    data_extension_key: Optional[str] = None

    # HTTP retry and timeout configuration
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay_ms: int = DEFAULT_RETRY_DELAY_MS

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "MarketingCloudConfig":
        """
        Create a configuration from ``MC_*`` environment variables.

        Unset or empty variables keep the defaults.

        :param environ: Mapping to read instead of :data:`os.environ`.
        :return: Configuration instance.
        :rtype: ~MarketingCloud.DataExtensions.core.config.MarketingCloudConfig
        :raises ValueError: If a numeric variable is not an integer.
        """
        env = os.environ if environ is None else environ
        return cls(
            access_key=env.get("MC_ACCESS_KEY") or "",
            secret_key=env.get("MC_SECRET_KEY") or "",
            base_url=env.get("MC_BASE_URL") or DEFAULT_BASE_URL,
            data_extension_key=env.get("MC_DATA_EXTENSION_KEY") or None,
            timeout_ms=_int_from_env(env, "MC_TIMEOUT_MS", DEFAULT_TIMEOUT_MS),
            max_retries=_int_from_env(env, "MC_MAX_RETRIES", DEFAULT_MAX_RETRIES),
            retry_delay_ms=_int_from_env(env, "MC_RETRY_DELAY_MS", DEFAULT_RETRY_DELAY_MS),
        )


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = (env.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
