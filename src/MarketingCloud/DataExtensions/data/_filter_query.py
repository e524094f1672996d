# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Serialization of filter specifications into OData-style query strings.

A filter specification is a mapping of plain ``field: scalar`` equality pairs plus
the reserved directives ``$filter``, ``$orderby``, ``$top`` and ``$skip``.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional
from urllib.parse import quote

from ..core._error_codes import QUERY_INVALID_DIRECTIVE
from ..core.errors import QueryError

FILTER = "$filter"
ORDERBY = "$orderby"
TOP = "$top"
SKIP = "$skip"

RESERVED_DIRECTIVES = (FILTER, ORDERBY, TOP, SKIP)

# encodeURIComponent's unreserved set, apostrophe excluded
_URI_COMPONENT_SAFE = "!*()"


def _encode_component(value: Any) -> str:
    return quote(_scalar_text(value), safe=_URI_COMPONENT_SAFE)


def _scalar_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float, bool))


def _directive_number(directive: str, value: Any) -> str:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return str(value)
    if isinstance(value, float) and value.is_integer() and value >= 0:
        return str(int(value))
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return str(int(value))
    raise QueryError(
        f"{directive} must be a non-negative integer, got {value!r}",
        subcode=QUERY_INVALID_DIRECTIVE,
        details={"directive": directive, "value": repr(value)},
    )


def _build_filter_query(filter_spec: Optional[Mapping[str, Any]]) -> str:
    """
    Turn a filter specification into a query string.

    Plain scalar pairs are emitted first in insertion order as ``key=value`` with the
    value percent-encoded; non-scalar values are skipped. Then, in this fixed order,
    any present ``$filter`` and ``$orderby`` (percent-encoded) and ``$top`` and
    ``$skip`` (raw decimal).

    :param filter_spec: Mapping of plain pairs and reserved directives, or None.
    :return: ``"?k=v&..."`` or ``""`` when nothing was emitted.
    :rtype: str
    :raises QueryError: If ``$top`` or ``$skip`` is not a non-negative integer.

    Example::

        _build_filter_query({"name": "Test", "age": 30})
        # '?name=Test&age=30'
    """
    if not filter_spec:
        return ""

    parts: List[str] = []
    for key, value in filter_spec.items():
        if key in RESERVED_DIRECTIVES:
            continue
        if _is_scalar(value):
            parts.append(f"{key}={_encode_component(value)}")

    for directive in (FILTER, ORDERBY):
        value = filter_spec.get(directive)
        if value is not None and value != "":
            parts.append(f"{directive}={_encode_component(value)}")

    for directive in (TOP, SKIP):
        value = filter_spec.get(directive)
        if value is not None:
            parts.append(f"{directive}={_directive_number(directive, value)}")

    return f"?{'&'.join(parts)}" if parts else ""
