"""
Probe Constants

Enumerations shared by the parser, classifier and round runner.
"""

from enum import Enum


class ParseStatus(Enum):
    """Completion status reported by the ping output parser"""

    FINISHED = "finished"  # Summary block found, stats available
    FAILED = "failed"  # Unknown host, no summary, unreadable output


class OutcomeCategory(Enum):
    """Diagnostic category of one target's outcome (logging only)"""

    SUCCESSFUL = "successful"
    NO_EXIT_CODE = "unsuccessful-no-exit-code"  # spawn error, killed, ...
    EXITED_WITH_OUTPUT = "unsuccessful-exited-with-output"
    PACKET_LOSS = "unsuccessful-packet-loss"


# Probe type sent with every ping request
PROBE_TYPE_PING = "ping"
