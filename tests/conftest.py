"""Shared fixtures for remotepin tests."""

from __future__ import annotations

import pytest
from pytest_metadata.plugin import metadata_key

from remotepin.models.config import ClientConfig
from remotepin.orchestrator.add import RemotePinAdder
from remotepin.orchestrator.ls import RemotePinLister
from remotepin.orchestrator.rm import RemotePinRemover
from remotepin.registry.services import ServiceRegistry

from tests.mocks import (
    MockClientFactory,
    MockPinningClient,
    MockResolver,
    MockSwarm,
)

TEST_SERVICE = "pinbox"
TEST_SERVICE_URL = "https://pins.example.com/psa"
TEST_SERVICE_KEY = "secret-token-abc123"

KUBO_RPC_URL = "http://127.0.0.1:5001"


def pytest_configure(config):
    """Add the test service endpoints to the HTML report Environment table."""
    meta = config.stash.setdefault(metadata_key, {})
    meta["Pinning Service"] = TEST_SERVICE_URL
    meta["Kubo RPC"] = KUBO_RPC_URL


def make_test_config(**overrides) -> ClientConfig:
    """Build a ClientConfig suitable for testing."""
    defaults = dict(
        log_level="debug",
        repo_path="/nonexistent/remotepin",
        kubo_rpc_url=KUBO_RPC_URL,
        kubo_timeout=5,
        default_service="",
        poll_interval=0.01,
        request_timeout=5,
        page_size=10,
    )
    defaults.update(overrides)
    return ClientConfig(**defaults)


@pytest.fixture
def repo_root(tmp_path):
    """A fresh on-disk repo root; the SQLite file is created on first open."""
    return str(tmp_path / "repo")


@pytest.fixture
def pin_client():
    return MockPinningClient()


@pytest.fixture
def client_factory(pin_client):
    return MockClientFactory(pin_client)


@pytest.fixture
def registry(repo_root, client_factory):
    """ServiceRegistry over a real SQLite repo with a mocked pinning client."""
    return ServiceRegistry(repo_root, client_factory=client_factory)


@pytest.fixture
async def service(registry):
    """Name of a registered service."""
    await registry.add_service(TEST_SERVICE, TEST_SERVICE_URL, TEST_SERVICE_KEY)
    return TEST_SERVICE


@pytest.fixture
def mock_resolver():
    return MockResolver()


@pytest.fixture
def mock_swarm():
    return MockSwarm()


@pytest.fixture
def adder(registry, mock_resolver, mock_swarm):
    return RemotePinAdder(registry, mock_resolver, mock_swarm, poll_interval=0.01)


@pytest.fixture
def lister(registry):
    return RemotePinLister(registry)


@pytest.fixture
def remover(registry, lister):
    return RemotePinRemover(registry, lister)
