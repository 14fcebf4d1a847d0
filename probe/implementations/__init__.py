"""
Probe Implementations Package

Concrete ping runner implementations.
"""

from probe.implementations.mock_ping_runner import MockPingRunner, build_ping_output
from probe.implementations.system_ping_runner import SystemPingRunner, build_ping_command

__all__ = [
    "MockPingRunner",
    "SystemPingRunner",
    "build_ping_command",
    "build_ping_output",
]
