"""
Mock Ping Runner Implementation

Simulated ping for development and testing without network access.

This is a "Test Double" (specifically, a "Fake" - it produces realistic
ping output and failures, but never touches the network).

Responses are scripted per target, optionally per IP version:
    runner.set_packet_loss("ns1.dns.nl", loss_percent=50, ip_version=6)
    runner.set_error("k.root-servers.net", exit_code=2, stderr="...")
"""

import asyncio
import logging
from typing import Dict, List, Optional, Tuple, Union

from probe.interfaces.ping_runner_interface import (
    PingCommandError,
    PingRunnerInterface,
)
from probe.models import PingOptions

# Key: (target, ip_version), ip_version None matches both families
_ResponseKey = Tuple[str, Optional[int]]
_Response = Union[str, Exception]

_ADDRESSES = {4: "192.0.2.1", 6: "2001:db8::1"}


def build_ping_output(
    target: str,
    ip_version: int = 4,
    packets: int = 3,
    received: Optional[int] = None,
) -> str:
    """
    Build iputils-style ping output.

    Args:
        target: Hostname shown in the output
        ip_version: 4 or 6 (picks a documentation address)
        packets: Packets transmitted
        received: Packets received (defaults to all of them)

    Returns:
        Raw text as printed by ping(8)
    """
    received = packets if received is None else received
    address = _ADDRESSES[ip_version]
    loss = round((packets - received) * 100 / packets) if packets else 100

    lines = [f"PING {target} ({address}) 56(84) bytes of data."]
    for seq in range(1, received + 1):
        lines.append(
            f"64 bytes from {target} ({address}): icmp_seq={seq} ttl=57 time=10.{seq} ms",
        )
    lines.append("")
    lines.append(f"--- {target} ping statistics ---")
    lines.append(
        f"{packets} packets transmitted, {received} received, "
        f"{loss}% packet loss, time {packets * 200}ms",
    )
    if received:
        lines.append("rtt min/avg/max/mdev = 10.100/10.200/10.300/0.050 ms")

    return "\n".join(lines) + "\n"


class MockPingRunner(PingRunnerInterface):
    """
    Scripted ping runner.

    Unscripted targets answer with a clean zero-loss run. Every call is
    recorded so tests can assert on what would have been executed.
    """

    def __init__(self, delay: float = 0.0):
        """
        Initialize mock runner.

        Args:
            delay: Seconds each probe takes (simulates network latency)
        """
        self.logger = logging.getLogger(__name__)
        self.delay = delay

        self._responses: Dict[_ResponseKey, _Response] = {}
        self.calls: List[PingOptions] = []

        self.logger.info("Mock Ping Runner initialized (simulation mode)")

    def is_available(self) -> bool:
        return True

    async def run(self, options: PingOptions) -> str:
        self.calls.append(options)
        self.logger.debug(f"[MOCK] ping -{options.ip_version} {options.target}")

        if self.delay:
            await asyncio.sleep(self.delay)

        response = self._lookup(options)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return build_ping_output(options.target, options.ip_version, options.packets)
        return response

    # =========================================================================
    # SCRIPTING
    # =========================================================================

    def set_output(self, target: str, output: str, ip_version: Optional[int] = None):
        """Return raw output for a target"""
        self._responses[(target, ip_version)] = output

    def set_packet_loss(
        self,
        target: str,
        loss_percent: float,
        ip_version: Optional[int] = None,
        packets: int = 10,
    ):
        """Return a finished run with the given packet loss"""
        received = packets - round(packets * loss_percent / 100)
        version = ip_version or 4
        self.set_output(
            target,
            build_ping_output(target, version, packets, received),
            ip_version,
        )

    def set_error(
        self,
        target: str,
        exit_code: Optional[int] = 1,
        stdout: str = "",
        stderr: str = "",
        ip_version: Optional[int] = None,
    ):
        """Fail the probe like a process that exited non-zero (or never ran)"""
        self._responses[(target, ip_version)] = PingCommandError(
            f"[MOCK] ping {target} failed",
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
        )

    def set_exception(self, target: str, error: Exception, ip_version: Optional[int] = None):
        """Raise an arbitrary exception for a target"""
        self._responses[(target, ip_version)] = error

    def reset(self):
        """Forget scripted responses and recorded calls"""
        self._responses.clear()
        self.calls.clear()

    def get_calls(self, ip_version: Optional[int] = None) -> List[PingOptions]:
        if ip_version is None:
            return list(self.calls)
        return [call for call in self.calls if call.ip_version == ip_version]

    def _lookup(self, options: PingOptions) -> Optional[_Response]:
        specific = self._responses.get((options.target, options.ip_version))
        if specific is not None:
            return specific
        return self._responses.get((options.target, None))
