# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Data models and type definitions for the Data Extensions client.

- :mod:`~MarketingCloud.DataExtensions.models.row`: row payload shape and helpers.
- :mod:`~MarketingCloud.DataExtensions.models.query_builder`: fluent filter builder.

Note:
    This ``__init__.py`` does NOT import/export models. Import directly from
    the specific module files.
"""

__all__ = []
