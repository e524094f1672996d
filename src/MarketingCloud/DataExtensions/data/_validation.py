# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Structural validation of row payloads before they are sent."""

from __future__ import annotations

from typing import Any, Mapping

from ..core._error_codes import SHAPE_MISSING_KEYS, SHAPE_MISSING_VALUES, SHAPE_NOT_AN_ARRAY
from ..core.errors import ShapeError


def _validate_rows(rows: Any) -> None:
    """
    Check that ``rows`` is a list of ``{"keys": {...}, "values": {...}}`` items.

    Stops at the first offending item, in list order.

    :raises ShapeError: ``not-an-array`` when ``rows`` is not a list or tuple,
        ``missing-keys`` when an item's ``keys`` is absent, not a mapping or empty,
        ``missing-values`` when an item's ``values`` is absent or not a mapping.
    """
    if not isinstance(rows, (list, tuple)):
        raise ShapeError(
            "Invalid data: rows must be provided as a list",
            subcode=SHAPE_NOT_AN_ARRAY,
            details={"type": type(rows).__name__},
        )
    for index, item in enumerate(rows):
        keys = item.get("keys") if isinstance(item, Mapping) else None
        if not isinstance(keys, Mapping) or len(keys) == 0:
            raise ShapeError(
                'Invalid data: each item must have a non-empty "keys" mapping',
                subcode=SHAPE_MISSING_KEYS,
                details={"index": index},
            )
        values = item.get("values")
        if not isinstance(values, Mapping):
            raise ShapeError(
                'Invalid data: each item must have a "values" mapping',
                subcode=SHAPE_MISSING_VALUES,
                details={"index": index},
            )
