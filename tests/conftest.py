# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for Data Extensions client tests.

This module provides common test fixtures, fake time sources, and configuration
that can be used across all test modules.
"""

import pytest

from MarketingCloud.DataExtensions.client import MarketingCloudClient
from MarketingCloud.DataExtensions.core.config import MarketingCloudConfig
from tests.unit.test_helpers import FakeClock


@pytest.fixture
def fake_clock():
    """Simulated clock; ``sleep`` advances ``time`` without blocking."""
    return FakeClock()


@pytest.fixture
def test_config():
    """Test configuration with explicit credentials and a default Data Extension."""
    return MarketingCloudConfig(
        access_key="test-key",
        secret_key="test-secret",
        base_url="https://mc.example.com/data/v1",
        data_extension_key="de-default",
        timeout_ms=5000,
        max_retries=3,
        retry_delay_ms=1000,
    )


@pytest.fixture
def client(test_config, fake_clock):
    """Client wired to the fake clock for both token expiry and backoff."""
    return MarketingCloudClient(config=test_config, clock=fake_clock.time, sleep=fake_clock.sleep)


@pytest.fixture
def sample_rows():
    """Two well-formed rows."""
    return [
        {"keys": {"email": "ana@example.com"}, "values": {"name": "Ana", "phone": "555-0100"}},
        {"keys": {"email": "rui@example.com"}, "values": {"name": "Rui"}},
    ]
