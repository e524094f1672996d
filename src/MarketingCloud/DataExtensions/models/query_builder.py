# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Fluent query builder for Data Extension row queries.

Produces the filter specification consumed by ``client.query.get()``: plain
equality pairs plus the ``$filter``, ``$orderby``, ``$top`` and ``$skip`` directives.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..operations.query import QueryOperations


@dataclass
class QueryBuilder:
    """
    Fluent interface for building Data Extension queries.

    :param data_extension: Registered Data Extension name to query.
    :type data_extension: str

    Example:
        Build and execute a query (via client)::

            rows = (client.query.builder("customers")
                    .filter_eq("status", "active")
                    .filter_gt("age", 30)
                    .order_by("name")
                    .top(50)
                    .execute())

        Build a standalone filter specification::

            spec = QueryBuilder().where("city", "Lisbon").top(10).build()
            # {'city': 'Lisbon', '$top': 10}
    """

    data_extension: str = "default"
    _params: Dict[str, Any] = field(default_factory=dict)
    _filter: List[str] = field(default_factory=list)
    _orderby: List[str] = field(default_factory=list)
    _top: Optional[int] = None
    _skip: Optional[int] = None
    _query_ops: Optional["QueryOperations"] = field(default=None, compare=False, repr=False)

    def where(self, field_name: str, value: Any) -> "QueryBuilder":
        """
        Add a plain ``field=value`` query parameter.

        :param field_name: Field name.
        :param value: Scalar value (str, int, float or bool).
        :return: Self for method chaining.
        """
        self._params[field_name] = value
        return self

    def filter_eq(self, column: str, value: Any) -> "QueryBuilder":
        """
        Add equality filter (column eq value).

        Example::

            query = QueryBuilder().filter_eq("email", "ana@example.com")
        """
        self._filter.append(f"{column} eq {self._format_value(value)}")
        return self

    def filter_ne(self, column: str, value: Any) -> "QueryBuilder":
        """Add not-equal filter (column ne value)."""
        self._filter.append(f"{column} ne {self._format_value(value)}")
        return self

    def filter_gt(self, column: str, value: Any) -> "QueryBuilder":
        """Add greater-than filter (column gt value)."""
        self._filter.append(f"{column} gt {self._format_value(value)}")
        return self

    def filter_ge(self, column: str, value: Any) -> "QueryBuilder":
        """Add greater-than-or-equal filter (column ge value)."""
        self._filter.append(f"{column} ge {self._format_value(value)}")
        return self

    def filter_lt(self, column: str, value: Any) -> "QueryBuilder":
        """Add less-than filter (column lt value)."""
        self._filter.append(f"{column} lt {self._format_value(value)}")
        return self

    def filter_le(self, column: str, value: Any) -> "QueryBuilder":
        """Add less-than-or-equal filter (column le value)."""
        self._filter.append(f"{column} le {self._format_value(value)}")
        return self

    def filter_contains(self, column: str, value: str) -> "QueryBuilder":
        """Add contains filter (contains(column, value))."""
        self._filter.append(f"contains({column}, {self._format_value(value)})")
        return self

    def filter_startswith(self, column: str, value: str) -> "QueryBuilder":
        """Add startswith filter (startswith(column, value))."""
        self._filter.append(f"startswith({column}, {self._format_value(value)})")
        return self

    def filter_raw(self, filter_string: str) -> "QueryBuilder":
        """
        Add a raw OData filter string.

        Example::

            query = QueryBuilder().filter_raw("(tier eq 'gold' or tier eq 'platinum')")
        """
        self._filter.append(filter_string)
        return self

    def order_by(self, column: str, descending: bool = False) -> "QueryBuilder":
        """
        Add sorting order. Can be called multiple times for multi-column sorting.

        :param column: Column name to sort by.
        :param descending: Sort in descending order.
        """
        self._orderby.append(f"{column} desc" if descending else f"{column} asc")
        return self

    def top(self, count: int) -> "QueryBuilder":
        """Limit the number of returned rows."""
        if count < 1:
            raise ValueError("top count must be at least 1")
        self._top = count
        return self

    def skip(self, count: int) -> "QueryBuilder":
        """Skip the first ``count`` rows."""
        if count < 0:
            raise ValueError("skip count must not be negative")
        self._skip = count
        return self

    @staticmethod
    def _format_value(value: Any) -> str:
        """
        Format a value as an OData literal.

        :param value: Value to format.
        :return: OData-formatted value string.
        :rtype: str
        """
        if value is None:
            return "null"
        if isinstance(value, str):
            # Escape single quotes by doubling them
            escaped = value.replace("'", "''")
            return f"'{escaped}'"
        if isinstance(value, bool):
            return str(value).lower()
        return str(value)

    def build(self) -> Dict[str, Any]:
        """
        Build the filter specification.

        :return: Plain pairs followed by whichever of ``$filter``, ``$orderby``,
            ``$top``, ``$skip`` were set.
        :rtype: dict

        Example::

            QueryBuilder().filter_eq("tier", "gold").top(10).build()
            # {'$filter': "tier eq 'gold'", '$top': 10}
        """
        spec: Dict[str, Any] = dict(self._params)
        if self._filter:
            spec["$filter"] = " and ".join(self._filter)
        if self._orderby:
            spec["$orderby"] = ",".join(self._orderby)
        if self._top is not None:
            spec["$top"] = self._top
        if self._skip is not None:
            spec["$skip"] = self._skip
        return spec

    def execute(self) -> Any:
        """
        Execute the query and return the matching rows.

        Only available when the builder was created via ``client.query.builder(name)``.

        :raises RuntimeError: If the builder is not bound to a client.
        """
        if self._query_ops is None:
            raise RuntimeError(
                "Cannot execute: query was not created via client.query.builder(). "
                "Use client.query.get(query.build(), name) instead."
            )
        return self._query_ops.get(self.build(), self.data_extension)


__all__ = ["QueryBuilder"]
