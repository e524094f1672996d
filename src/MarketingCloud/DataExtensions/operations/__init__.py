# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Operation namespace classes for the Data Extensions client.

- RowOperations: upsert/insert/update of rows
- QueryOperations: filtered reads, OData queries and key lookups
"""

__all__ = []
