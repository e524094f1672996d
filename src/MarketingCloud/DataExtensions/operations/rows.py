# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Row write operations namespace."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..data._registry import DEFAULT_DATA_EXTENSION
from ..data._validation import _validate_rows

if TYPE_CHECKING:
    from ..client import MarketingCloudClient

_logger = logging.getLogger(__name__)


class RowOperations:
    """
    Row write operations. Accessed via ``client.rows``.

    Example::

        rows = [create_data_object({"email": "ana@example.com"}, {"name": "Ana"})]
        client.rows.upsert(rows, data_extension="customers")
        client.rows.insert(rows, "customers")
        client.rows.update(rows, "customers")
    """

    def __init__(self, client: "MarketingCloudClient") -> None:
        self._client = client

    def upsert(
        self,
        rows: List[Dict[str, Any]],
        options: Optional[Dict[str, Any]] = None,
        data_extension: str = DEFAULT_DATA_EXTENSION,
    ) -> Any:
        """
        Insert or update rows in a registered Data Extension.

        Rows are validated and the Data Extension key resolved before any network call.

        :param rows: List of ``{"keys": {...}, "values": {...}}`` items.
        :type rows: list[dict]
        :param options: Operation options such as ``{"operation": "insert"}``. Accepted
            but not transmitted; the service infers the operation from the payload.
        :type options: dict or None
        :param data_extension: Registered Data Extension name.
        :type data_extension: str
        :return: Parsed JSON response from the service.

        :raises ShapeError: If ``rows`` is not a list of well-formed rows.
        :raises DataExtensionNotFoundError: If ``data_extension`` is not registered.
        :raises AuthError: If authentication fails.
        :raises RequestError: If the service rejects the request.
        """
        _validate_rows(rows)
        key = self._client._registry.resolve(data_extension)
        if options and options.get("operation"):
            _logger.debug("Operation hint %r is not sent to the service", options["operation"])
        return self._client._get_rest()._request(f"/dataextensions/key:{key}/rows", "POST", list(rows))

    def insert(self, rows: List[Dict[str, Any]], data_extension: str = DEFAULT_DATA_EXTENSION) -> Any:
        """Insert rows. Equivalent to :meth:`upsert` with ``{"operation": "insert"}``."""
        return self.upsert(rows, {"operation": "insert"}, data_extension)

    def update(self, rows: List[Dict[str, Any]], data_extension: str = DEFAULT_DATA_EXTENSION) -> Any:
        """Update rows. Equivalent to :meth:`upsert` with ``{"operation": "update"}``."""
        return self.upsert(rows, {"operation": "update"}, data_extension)
