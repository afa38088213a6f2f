"""
Test configuration and fixtures for the MyChain client core tests
"""

import inspect

import pytest

from mychain_core.keymanager.identity import IdentityProvider
from tests.mock_transport import MockNodeTransport

# Standard BIP39 test vector (for testing only - never use with real funds)
TEST_MNEMONIC = (
    "abandon abandon abandon abandon abandon abandon "
    "abandon abandon abandon abandon abandon about"
)
# A second well-formed address: "mychain1" + 38 bech32 characters
RECEIVER_ADDRESS = "mychain1" + "q" * 32 + "8x7kz2"


@pytest.fixture
def mock_transport():
    """In-memory node transport, no network calls"""
    return MockNodeTransport()


@pytest.fixture
def identity_provider():
    return IdentityProvider()


@pytest.fixture
def test_identity(identity_provider):
    return identity_provider.from_secret(TEST_MNEMONIC)


@pytest.fixture
def test_address(identity_provider, test_identity):
    return identity_provider.primary_address(test_identity)


@pytest.fixture
def receiver_address():
    return RECEIVER_ADDRESS


# Mark all async tests
def pytest_collection_modifyitems(config, items):
    """Automatically mark async tests"""
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: mark test as unit test")
    config.addinivalue_line("markers", "integration: mark test as integration test")
