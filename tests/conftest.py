"""
Test Configuration and Fixtures

Shared fixtures for status, transport and probe tests.

To use pytest:
    pip install -e ".[test]"
    pytest tests/
"""

from unittest.mock import AsyncMock

import pytest

from config.settings import PING_TARGETS
from probe.controllers.round_runner import DualStackRoundRunner
from probe.controllers.status_manager import StatusManager, reset_status_manager
from probe.implementations.mock_ping_runner import MockPingRunner
from transport.implementations.mock_emitter import MockEmitter

# =============================================================================
# TRANSPORT FIXTURES
# =============================================================================


@pytest.fixture
def mock_emitter():
    """
    Provide a fresh MockEmitter for each test.

    Usage:
        def test_something(mock_emitter):
            mock_emitter.emit("probe:status:update", "ready")
            assert mock_emitter.get_last("probe:status:update") == "ready"
    """
    return MockEmitter()


# =============================================================================
# PROBE FIXTURES
# =============================================================================


@pytest.fixture
def targets():
    """The fixed probe targets"""
    return list(PING_TARGETS)


@pytest.fixture
def mock_ping_runner():
    """
    Provide a MockPingRunner answering every target cleanly.

    Script failures per test:
        mock_ping_runner.set_error("ns1.dns.nl", exit_code=1)
    """
    return MockPingRunner()


@pytest.fixture
def round_runner(mock_ping_runner):
    """Provide DualStackRoundRunner on the mock runner (3 packets)"""
    return DualStackRoundRunner(mock_ping_runner, packets=3)


@pytest.fixture
def dependency_check():
    """Dependency check that always succeeds"""
    return AsyncMock(return_value=True)


@pytest.fixture
def status_manager(mock_emitter, round_runner, dependency_check):
    """
    Provide StatusManager wired to mocks, with a long round interval so
    no scheduled round fires during a test.
    """
    manager = StatusManager(
        mock_emitter,
        round_runner=round_runner,
        dependency_check=dependency_check,
        interval=3600,
    )
    yield manager
    manager._cancel_pending_round()


@pytest.fixture(autouse=True)
def clean_status_manager_registry():
    """Make sure no test sees another test's process-wide StatusManager"""
    reset_status_manager()
    yield
    reset_status_manager()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """
    Configure pytest with custom markers.
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "unit_integration: Integration tests")
    config.addinivalue_line("markers", "slow: Slow tests")
