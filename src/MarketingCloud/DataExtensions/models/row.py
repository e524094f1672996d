# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Row payload shape for Data Extension writes and reads.

A row pairs the identifying ``keys`` (primary key fields of the Data Extension)
with the ``values`` to write. The REST API accepts and returns lists of these.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, TypedDict

Scalar = Any
FilterSpec = Dict[str, Any]


class DataRow(TypedDict):
    """One ``{"keys": ..., "values": ...}`` row."""

    keys: Dict[str, Scalar]
    values: Dict[str, Scalar]


def create_data_object(keys: Mapping[str, Scalar], values: Mapping[str, Scalar]) -> DataRow:
    """
    Build a row in the shape expected by the Data Extensions API.

    :param keys: Primary key fields identifying the row.
    :param values: Fields to insert or update.
    :return: ``{"keys": keys, "values": values}``.

    Example::

        row = create_data_object({"email": "a@example.com"}, {"name": "Ana"})
    """
    return {"keys": keys, "values": values}


def create_data_collection(items: Iterable[Mapping[str, Any]]) -> List[DataRow]:
    """Map ``{"keys", "values"}`` items through :func:`create_data_object` into a new list."""
    return [create_data_object(item.get("keys"), item.get("values")) for item in items]


__all__ = ["DataRow", "FilterSpec", "create_data_object", "create_data_collection"]
