# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Query operations namespace."""

from __future__ import annotations

from typing import Any, Dict, Optional, TYPE_CHECKING

from ..data._filter_query import _build_filter_query
from ..data._registry import DEFAULT_DATA_EXTENSION
from ..models.query_builder import QueryBuilder

if TYPE_CHECKING:
    from ..client import MarketingCloudClient


class QueryOperations:
    """
    Query operations for reading rows. Accessed via ``client.query``.

    Example:
        Plain equality filter::

            rows = client.query.get({"city": "Lisbon"}, "customers")

        OData predicate with ordering and paging::

            rows = client.query.odata("price lt 100", {"$orderby": "name asc", "$top": 20}, "products")

        Single row by key::

            row = client.query.find_by_key("email", "ana@example.com", "customers")

        Fluent builder::

            rows = client.query.builder("customers").filter_eq("tier", "gold").top(10).execute()
    """

    def __init__(self, client: "MarketingCloudClient") -> None:
        self._client = client

    def get(
        self,
        filter: Optional[Dict[str, Any]] = None,
        data_extension: str = DEFAULT_DATA_EXTENSION,
    ) -> Any:
        """
        Query rows of a registered Data Extension.

        :param filter: Filter specification: plain ``field: scalar`` pairs and any of
            ``$filter``, ``$orderby``, ``$top``, ``$skip``.
        :type filter: dict or None
        :param data_extension: Registered Data Extension name.
        :type data_extension: str
        :return: List of ``{"keys", "values"}`` rows as returned by the service.

        :raises DataExtensionNotFoundError: If ``data_extension`` is not registered.
        :raises AuthError: If authentication fails.
        :raises RequestError: If the service rejects the request.
        """
        key = self._client._registry.resolve(data_extension)
        query_string = _build_filter_query(filter)
        return self._client._get_rest()._request(f"/dataextensions/key:{key}/rows{query_string}", "GET")

    def odata(
        self,
        predicate: str,
        options: Optional[Dict[str, Any]] = None,
        data_extension: str = DEFAULT_DATA_EXTENSION,
    ) -> Any:
        """
        Query rows with an OData ``$filter`` predicate.

        :param predicate: Raw OData predicate, e.g. ``"price lt 100"``.
        :param options: Additional directives (``$orderby``, ``$top``, ``$skip``) or
            plain pairs; an explicit ``$filter`` here replaces ``predicate``.
        :param data_extension: Registered Data Extension name.
        :return: List of rows.
        """
        spec: Dict[str, Any] = {"$filter": predicate}
        spec.update(options or {})
        return self.get(spec, data_extension)

    def find_by_key(
        self,
        key_field: str,
        key_value: Any,
        data_extension: str = DEFAULT_DATA_EXTENSION,
    ) -> Optional[Dict[str, Any]]:
        """
        Fetch the first row whose ``key_field`` equals ``key_value``.

        :param key_field: Key field name.
        :param key_value: Key value; compared as a quoted string literal.
        :param data_extension: Registered Data Extension name.
        :return: The first matching row, or None when nothing matches.
        """
        escaped = str(key_value).replace("'", "''")
        rows = self.get({"$filter": f"{key_field} eq '{escaped}'", "$top": 1}, data_extension)
        if isinstance(rows, list) and rows:
            return rows[0]
        return None

    def builder(self, data_extension: str = DEFAULT_DATA_EXTENSION) -> QueryBuilder:
        """
        Create a :class:`~MarketingCloud.DataExtensions.models.query_builder.QueryBuilder`
        bound to this client, so ``execute()`` runs the query.
        """
        qb = QueryBuilder(data_extension)
        qb._query_ops = self
        return qb
