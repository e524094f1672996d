# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Core infrastructure components for the Data Extensions client.

This module contains the foundational components including configuration,
structured errors, credential/token handling, and the HTTP transport.
"""

from .config import MarketingCloudConfig
from .errors import (
    DataExtensionError,
    ShapeError,
    QueryError,
    DataExtensionNotFoundError,
    AuthError,
    RequestError,
)

__all__ = [
    "MarketingCloudConfig",
    "DataExtensionError",
    "ShapeError",
    "QueryError",
    "DataExtensionNotFoundError",
    "AuthError",
    "RequestError",
]
