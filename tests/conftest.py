"""Pytest configuration and shared fixtures for cf-admin-client tests."""

import logging

import pytest

from cf_admin_client import CloudFoundryClient, CloudFoundryConfig
from cf_admin_client.testing import FakeCloudController

API_ENDPOINT = "https://example.com/api"
ACCESS_TOKEN = "qwerty123456"


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear Cloud Foundry and test environment variables before each test.

    This prevents a developer's CF_* settings (or a .env file loaded by an
    earlier test) from leaking into configuration tests.
    """
    import os

    test_prefixes = ("CF_", "TEST_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def fake_cc():
    return FakeCloudController(API_ENDPOINT)


@pytest.fixture
def config():
    return CloudFoundryConfig(
        api_endpoint=API_ENDPOINT,
        access_token=ACCESS_TOKEN,
        logger=logging.getLogger("cf_admin_client.tests"),
    )


@pytest.fixture
async def client(config, fake_cc):
    async with CloudFoundryClient(config, transport=fake_cc.transport) as cf:
        yield cf
