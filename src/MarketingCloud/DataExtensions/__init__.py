# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Python client for Marketing Cloud Data Extensions.

Import the client from :mod:`MarketingCloud.DataExtensions.client`::

    from MarketingCloud.DataExtensions.client import MarketingCloudClient
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
