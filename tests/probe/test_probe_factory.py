"""
Probe Factory Tests

To run:
    pytest tests/probe/test_probe_factory.py -v
"""

from unittest.mock import patch

import pytest

from probe.factory import ProbeFactory, create_ping_runner
from probe.implementations.mock_ping_runner import MockPingRunner
from probe.implementations.system_ping_runner import SystemPingRunner
from probe.interfaces.ping_runner_interface import PingNotAvailableError

WHICH = "probe.implementations.system_ping_runner.shutil.which"


@pytest.mark.unit
def test_mock_mode():
    assert isinstance(ProbeFactory.create_ping_runner(mode="mock"), MockPingRunner)


@pytest.mark.unit
def test_real_mode_with_ping_installed():
    with patch(WHICH, return_value="/bin/ping"):
        assert isinstance(ProbeFactory.create_ping_runner(mode="real"), SystemPingRunner)


@pytest.mark.unit
def test_real_mode_without_ping_raises():
    with patch(WHICH, return_value=None):
        with pytest.raises(PingNotAvailableError):
            ProbeFactory.create_ping_runner(mode="real")


@pytest.mark.unit
def test_auto_mode_falls_back_to_mock():
    with patch(WHICH, return_value=None):
        assert isinstance(ProbeFactory.create_ping_runner(), MockPingRunner)


@pytest.mark.unit
def test_create_ping_runner_force_mock():
    with patch(WHICH, return_value="/bin/ping"):
        assert isinstance(create_ping_runner(force_mock=True), MockPingRunner)
        assert isinstance(create_ping_runner(), SystemPingRunner)
