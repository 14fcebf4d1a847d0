"""
Probe Interfaces Package

Exposes abstract interfaces for probe components.
"""

from probe.interfaces.ping_runner_interface import (
    PingCommandError,
    PingError,
    PingNotAvailableError,
    PingRunnerInterface,
)

# Public API
__all__ = [
    # Exceptions
    "PingCommandError",
    "PingError",
    "PingNotAvailableError",
    # Interface
    "PingRunnerInterface",
]
