"""
Probe Module

Dual-stack connectivity testing and the probe status it drives.

Public API:
    - StatusManager: Status state machine plus periodic ping test scheduler
    - init_status_manager / get_status_manager: Process-wide instance
    - DualStackRoundRunner: One IPv4 + IPv6 testing round
    - ProbeFactory / create_ping_runner: Runner creation with auto-detection
    - PingRunnerInterface: Probe execution contract
    - parse: Ping output parser

Usage:
    from probe import create_ping_runner, init_status_manager
    from transport import create_emitter

    manager = init_status_manager(create_emitter(), create_ping_runner())
    await manager.start()
"""

from probe.constants import OutcomeCategory, ParseStatus
from probe.controllers.round_runner import DualStackRoundRunner
from probe.controllers.status_manager import (
    StatusManager,
    StatusManagerNotInitializedError,
    get_status_manager,
    init_status_manager,
    reset_status_manager,
)
from probe.factory import ProbeFactory, create_ping_runner
from probe.interfaces.ping_runner_interface import (
    PingCommandError,
    PingError,
    PingRunnerInterface,
)
from probe.models import PingOptions, ProbeOutcome, RoundResult, RoundVerdict
from probe.utils.ping_parser import parse

__all__ = [
    "DualStackRoundRunner",
    "OutcomeCategory",
    "ParseStatus",
    "PingCommandError",
    "PingError",
    "PingOptions",
    "PingRunnerInterface",
    "ProbeFactory",
    "ProbeOutcome",
    "RoundResult",
    "RoundVerdict",
    "StatusManager",
    "StatusManagerNotInitializedError",
    "create_ping_runner",
    "get_status_manager",
    "init_status_manager",
    "parse",
    "reset_status_manager",
]
