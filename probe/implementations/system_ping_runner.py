"""
System Ping Runner Implementation

Real probes using the iputils ping(8) binary in an asyncio subprocess.

This wraps ping to match our PingRunnerInterface.
"""

import asyncio
import logging
import shutil
from typing import List

from config.settings import PING_DEADLINE, PING_PACKET_INTERVAL
from probe.interfaces.ping_runner_interface import (
    PingCommandError,
    PingRunnerInterface,
)
from probe.models import PingOptions


def build_ping_command(options: PingOptions) -> List[str]:
    """
    Build the ping command line for one probe.

    unbuffer forces line-buffered output, only needed when progress is
    streamed while the probe runs.
    """
    command = [
        "ping",
        f"-{options.ip_version}",
        "-c", str(options.packets),
        "-i", str(PING_PACKET_INTERVAL),
        "-w", str(PING_DEADLINE),
        options.target,
    ]

    if options.in_progress_updates:
        command.insert(0, "unbuffer")

    return command


class SystemPingRunner(PingRunnerInterface):
    """
    Ping runner backed by the system ping binary.

    Usage:
        runner = SystemPingRunner()
        output = await runner.run(PingOptions(ip_version=6,
                                              target="k.root-servers.net",
                                              packets=3))
    """

    def __init__(self, binary: str = "ping"):
        self.logger = logging.getLogger(__name__)
        self.binary = binary

    def is_available(self) -> bool:
        return shutil.which(self.binary) is not None

    async def run(self, options: PingOptions) -> str:
        command = build_ping_command(options)
        self.logger.debug(f"Ping command: {' '.join(command)}")

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                stdin=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            # Never started, no exit code to report
            raise PingCommandError(
                f"Failed to start ping for {options.target}: {e}",
            ) from e

        stdout_bytes, stderr_bytes = await process.communicate()
        stdout = stdout_bytes.decode("utf-8", errors="ignore")
        stderr = stderr_bytes.decode("utf-8", errors="ignore")

        if process.returncode < 0:
            raise PingCommandError(
                f"ping -{options.ip_version} {options.target} killed by signal "
                f"{-process.returncode}",
                stdout=stdout,
                stderr=stderr,
            )

        if process.returncode != 0:
            raise PingCommandError(
                f"ping -{options.ip_version} {options.target} exited with code "
                f"{process.returncode}",
                exit_code=process.returncode,
                stdout=stdout,
                stderr=stderr,
            )

        return stdout
