"""
Ping Output Parser

Turns the raw text printed by iputils ping(8) into PingParseOutput.

Handles both header styles:
    PING k.root-servers.net (193.0.14.129) 56(84) bytes of data.
    PING k.root-servers.net(k.root-servers.net (2001:7fd::1)) 56 data bytes

A run is "finished" only when the statistics summary is present.
Anything else (unknown host, truncated output) is "failed".
"""

import re
from typing import Optional

from probe.constants import ParseStatus
from probe.models import PingParseOutput, PingStats

HEADER_RE = re.compile(
    r"^PING\s+(?P<hostname>\S+?)\s?\((?:\S+\s\()?(?P<address>[0-9a-fA-F:.]+)\)",
    re.MULTILINE,
)
NUMBER = r"\d+(?:\.\d+)?"

TRANSMITTED_RE = re.compile(r"(\d+) packets transmitted")
RECEIVED_RE = re.compile(r"(\d+) (?:packets )?received")
LOSS_RE = re.compile(rf"({NUMBER})% packet loss")
RTT_RE = re.compile(rf"=\s*({NUMBER})/({NUMBER})/({NUMBER})")


def _search_int(pattern: re.Pattern, text: str) -> Optional[int]:
    match = pattern.search(text)
    return int(match.group(1)) if match else None


def parse_stats(raw_output: str) -> Optional[PingStats]:
    """
    Extract the statistics summary.

    Returns:
        PingStats, or None if the output has no packet loss line
    """
    loss_match = LOSS_RE.search(raw_output)
    if not loss_match:
        return None

    total = _search_int(TRANSMITTED_RE, raw_output)
    rcv = _search_int(RECEIVED_RE, raw_output)
    drop = total - rcv if total is not None and rcv is not None else None

    stats = PingStats(total=total, rcv=rcv, drop=drop, loss=float(loss_match.group(1)))

    # rtt line is missing when nothing was received
    rtt_match = RTT_RE.search(raw_output)
    if rtt_match:
        stats.min, stats.avg, stats.max = (float(value) for value in rtt_match.groups())

    return stats


def parse(raw_output: str) -> PingParseOutput:
    """
    Parse raw ping output.

    Args:
        raw_output: stdout of a completed ping run

    Returns:
        PingParseOutput with status FINISHED and stats when a summary is
        present, status FAILED otherwise

    Example:
        result = parse(stdout)
        if result.status == ParseStatus.FINISHED and result.loss == 0:
            print("clean run")
    """
    raw_output = raw_output or ""
    header = HEADER_RE.search(raw_output)

    if not header:
        return PingParseOutput(status=ParseStatus.FAILED, raw_output=raw_output)

    stats = parse_stats(raw_output)
    status = ParseStatus.FINISHED if stats else ParseStatus.FAILED

    return PingParseOutput(
        status=status,
        raw_output=raw_output,
        resolved_address=header.group("address"),
        resolved_hostname=header.group("hostname"),
        stats=stats,
    )
