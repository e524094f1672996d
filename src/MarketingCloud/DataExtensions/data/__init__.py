# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data access layer for the Data Extensions client.

Internal modules: the Data Extension registry, row shape validation, query
string serialization and the authenticated REST dispatcher.
"""

__all__ = []
