# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .core._auth import Credentials, _TokenManager
from .core._http import _HttpClient, _RetryExecutor
from .core.config import MarketingCloudConfig
from .data._registry import DEFAULT_DATA_EXTENSION, _DataExtensionRegistry
from .data._rest import _RestClient
from .models.row import DataRow, create_data_collection, create_data_object
from .operations.query import QueryOperations
from .operations.rows import RowOperations


class MarketingCloudClient:
    """
    High-level client for Marketing Cloud Data Extensions.

    Writes and reads rows of named Data Extensions through the REST API. The client
    exchanges the access/secret key pair for a bearer token, caches it until expiry,
    retries transient failures (429, 500, 502, 503, 504) with exponential backoff, and
    validates row shape before sending anything.

    Operations are available both as flat methods (``client.upsert_data(...)``) and
    under namespaces:

    - ``client.rows``: upsert, insert, update
    - ``client.query``: get, odata, find_by_key, builder

    :param access_key: API access key. Overrides ``config.access_key``.
    :type access_key: :class:`str` | None
    :param secret_key: API secret key. Overrides ``config.secret_key``.
    :type secret_key: :class:`str` | None
    :param base_url: Service root. Overrides ``config.base_url``. Trailing slash is removed.
    :type base_url: :class:`str` | None
    :param data_extension_key: Key registered under the name ``"default"``.
    :type data_extension_key: :class:`str` | None
    :param config: Optional configuration. Defaults to
        :meth:`~MarketingCloud.DataExtensions.core.config.MarketingCloudConfig.from_env`.
    :type config: ~MarketingCloud.DataExtensions.core.config.MarketingCloudConfig | None
    :param clock: Callable returning epoch seconds, used for token expiry. Defaults to ``time.time``.
    :param sleep: Callable taking seconds, used for retry backoff. Defaults to ``time.sleep``.

    Example::

        from MarketingCloud.DataExtensions.client import MarketingCloudClient

        client = MarketingCloudClient("ACCESS_KEY", "SECRET_KEY")
        client.add_data_extension("customers", "CUSTOMERS_DE_KEY")

        rows = MarketingCloudClient.create_data_collection([
            {"keys": {"email": "ana@example.com"}, "values": {"name": "Ana"}},
        ])
        client.upsert_data(rows, data_extension_name="customers")
        row = client.find_by_key("email", "ana@example.com", "customers")
    """

    def __init__(
        self,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        data_extension_key: Optional[str] = None,
        config: Optional[MarketingCloudConfig] = None,
        clock: Optional[Callable[[], float]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ) -> None:
        self._config = config or MarketingCloudConfig.from_env()
        self.credentials = Credentials(
            access_key=access_key if access_key is not None else self._config.access_key,
            secret_key=secret_key if secret_key is not None else self._config.secret_key,
            base_url=(base_url or self._config.base_url).rstrip("/"),
        )
        self._http = _HttpClient(timeout_ms=self._config.timeout_ms)
        self._retry = _RetryExecutor(
            max_retries=self._config.max_retries,
            base_delay_ms=self._config.retry_delay_ms,
            sleep=sleep,
        )
        self.auth = _TokenManager(self.credentials, self._http, clock=clock)
        self._rest: Optional[_RestClient] = None

        self._registry = _DataExtensionRegistry()
        default_key = data_extension_key or self._config.data_extension_key
        if default_key:
            self._registry.add(DEFAULT_DATA_EXTENSION, default_key)

        # Initialize operation namespaces
        self.rows = RowOperations(self)
        self.query = QueryOperations(self)

    @property
    def config(self) -> MarketingCloudConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self.credentials.base_url

    @property
    def timeout_ms(self) -> int:
        return self._config.timeout_ms

    @property
    def max_retries(self) -> int:
        return self._config.max_retries

    @property
    def retry_delay_ms(self) -> int:
        return self._config.retry_delay_ms

    @property
    def data_extensions(self) -> Dict[str, str]:
        """Copy of the registered ``name -> key`` mapping."""
        return self._registry.as_dict()

    def _get_rest(self) -> _RestClient:
        """Get or create the internal REST dispatcher."""
        if self._rest is None:
            self._rest = _RestClient(self.credentials, self.auth, self._http, self._retry)
        return self._rest

    # ---------------- Credentials and registry ----------------
    def set_credentials(
        self,
        access_key: Optional[str] = None,
        secret_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> None:
        """
        Update credentials in place. Empty or omitted values keep the current ones.

        A cached token stays in use until it expires.
        """
        self.credentials.update(access_key=access_key, secret_key=secret_key, base_url=base_url)

    def add_data_extension(self, name: str, key: str) -> "MarketingCloudClient":
        """
        Register a Data Extension key under ``name``. Re-adding a name replaces its key.

        :return: The client, for chaining.
        """
        self._registry.add(name, key)
        return self

    def remove_data_extension(self, name: str) -> "MarketingCloudClient":
        """Unregister ``name``. Unknown names are ignored."""
        self._registry.remove(name)
        return self

    # ---------------- Writes ----------------
    def upsert_data(
        self,
        data: List[DataRow],
        options: Optional[Dict[str, Any]] = None,
        data_extension_name: str = DEFAULT_DATA_EXTENSION,
    ) -> Any:
        """
        Insert or update rows. See :meth:`RowOperations.upsert
        <MarketingCloud.DataExtensions.operations.rows.RowOperations.upsert>`.
        """
        return self.rows.upsert(data, options, data_extension_name)

    def insert_data(self, data: List[DataRow], data_extension_name: str = DEFAULT_DATA_EXTENSION) -> Any:
        return self.rows.insert(data, data_extension_name)

    def update_data(self, data: List[DataRow], data_extension_name: str = DEFAULT_DATA_EXTENSION) -> Any:
        return self.rows.update(data, data_extension_name)

    # ---------------- Reads ----------------
    def query_data(
        self,
        filter: Optional[Dict[str, Any]] = None,
        data_extension_name: str = DEFAULT_DATA_EXTENSION,
    ) -> Any:
        """
        Query rows with a filter specification. See :meth:`QueryOperations.get
        <MarketingCloud.DataExtensions.operations.query.QueryOperations.get>`.
        """
        return self.query.get(filter, data_extension_name)

    def query_with_odata(
        self,
        odata_filter: str,
        options: Optional[Dict[str, Any]] = None,
        data_extension_name: str = DEFAULT_DATA_EXTENSION,
    ) -> Any:
        return self.query.odata(odata_filter, options, data_extension_name)

    def find_by_key(
        self,
        key_field: str,
        key_value: Any,
        data_extension_name: str = DEFAULT_DATA_EXTENSION,
    ) -> Optional[Dict[str, Any]]:
        """Return the first row whose ``key_field`` equals ``key_value``, or None."""
        return self.query.find_by_key(key_field, key_value, data_extension_name)

    # ---------------- Row helpers ----------------
    @staticmethod
    def create_data_object(keys: Mapping[str, Any], values: Mapping[str, Any]) -> DataRow:
        return create_data_object(keys, values)

    @staticmethod
    def create_data_collection(items: Iterable[Mapping[str, Any]]) -> List[DataRow]:
        return create_data_collection(items)


__all__ = ["MarketingCloudClient"]
