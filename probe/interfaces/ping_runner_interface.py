"""
Ping Runner Interface

Abstract interface for anything that can execute one ping probe.
Defines the contract the round runner depends on.

Why an interface?
1. Testability: Can use MockPingRunner instead of spawning ping(8)
2. Flexibility: Easy to swap the system binary for another prober
3. Clear contract: run() either returns raw output or raises PingCommandError
"""

from abc import ABC, abstractmethod
from typing import Optional

from probe.models import PingOptions


class PingRunnerInterface(ABC):
    """
    Abstract base class for ping executors.
    """

    @abstractmethod
    async def run(self, options: PingOptions) -> str:
        """
        Run one ping probe to completion.

        Args:
            options: Target, IP version and packet count

        Returns:
            Raw text output of the probe (stdout)

        Raises:
            PingCommandError: If the probe could not be spawned
                (exit_code is None) or exited non-zero

        Example:
            output = await runner.run(PingOptions(ip_version=4,
                                                  target="ns1.dns.nl",
                                                  packets=3))
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the runner can execute probes on this system.

        Returns:
            True if probes can be run, False otherwise
        """
        pass


class PingError(Exception):
    """
    Base exception for ping execution errors.
    """
    pass


class PingNotAvailableError(PingError):
    """ping binary not installed or not executable"""
    pass


class PingCommandError(PingError):
    """
    Probe process failed.

    Attributes:
        exit_code: Process exit code, None if the process never ran
        stdout: Captured standard output
        stderr: Captured standard error
    """

    def __init__(
        self,
        message: str,
        exit_code: Optional[int] = None,
        stdout: str = "",
        stderr: str = "",
    ):
        super().__init__(message)
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr

    @property
    def output(self) -> str:
        """Captured output, stdout preferred over stderr"""
        return self.stdout or self.stderr or ""
