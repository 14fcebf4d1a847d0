"""
Probe Factory

Factory pattern for creating ping runner implementations.
Automatically selects the system ping binary or the mock based on
availability.
"""

import logging
from typing import Literal

from probe.implementations.mock_ping_runner import MockPingRunner
from probe.implementations.system_ping_runner import SystemPingRunner
from probe.interfaces.ping_runner_interface import (
    PingNotAvailableError,
    PingRunnerInterface,
)

# Type alias for better type hints
RunnerMode = Literal["auto", "real", "mock"]


class ProbeFactory:
    """
    Factory for creating ping runners.

    Usage:
        # Auto-detect (uses ping(8) if installed, mock otherwise)
        runner = ProbeFactory.create_ping_runner()

        # Force mock mode (useful for testing)
        runner = ProbeFactory.create_ping_runner(mode="mock")

        # Force real runner (raises error if ping is missing)
        runner = ProbeFactory.create_ping_runner(mode="real")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_ping_runner(cls, mode: RunnerMode = "auto") -> PingRunnerInterface:
        """
        Create a ping runner.

        Args:
            mode: "auto" (detect), "real" (force system ping), "mock"

        Returns:
            PingRunnerInterface implementation

        Raises:
            PingNotAvailableError: If mode="real" but ping is not installed
        """
        if mode == "mock":
            cls._logger.info("Creating Mock Ping Runner")
            return MockPingRunner()

        runner = SystemPingRunner()

        if mode == "real":
            if not runner.is_available():
                raise PingNotAvailableError(
                    "Real ping runner requested but ping is not installed",
                )
            cls._logger.info("Creating System Ping Runner (forced)")
            return runner

        # mode == "auto" - try real first, fall back to mock
        if runner.is_available():
            cls._logger.info("Creating System Ping Runner (auto-detected)")
            return runner

        cls._logger.warning("ping not available, using Mock Ping Runner")
        return MockPingRunner()


def create_ping_runner(force_mock: bool = False) -> PingRunnerInterface:
    """
    Quick ping runner creation.

    Args:
        force_mock: If True, always use mock

    Returns:
        Ping runner interface
    """
    mode = "mock" if force_mock else "auto"
    return ProbeFactory.create_ping_runner(mode=mode)
