import logging
import time
from enum import Enum
from typing import Dict, Optional

from transport.constants import (
    TOPIC_IPV4_SUPPORTED_UPDATE,
    TOPIC_IPV6_SUPPORTED_UPDATE,
    TOPIC_STATUS_UPDATE,
)
from transport.interfaces.emitter_interface import StatusEmitterInterface


class Status(Enum):
    INITIALIZING = "initializing"
    READY = "ready"
    UNBUFFER_MISSING = "unbuffer-missing"
    PING_TEST_FAILED = "ping-test-failed"
    SIGTERM = "sigterm"


class StatusStateMachine:
    """
    Probe status plus per-family support flags.

    Every update is an unconditional overwrite followed by an immediate
    broadcast of the new value. Transition legality is not checked here,
    callers decide what a transition means.
    """

    def __init__(self, emitter: StatusEmitterInterface):
        self.emitter = emitter
        self.logger = logging.getLogger(__name__)

        self.status = Status.INITIALIZING
        self.previous_status: Optional[Status] = None
        self.status_start_time = time.time()

        self.is_ipv4_supported = False
        self.is_ipv6_supported = False

        self.logger.info("State machine initialized in INITIALIZING state")

    def get_status(self) -> Status:
        """Get the current probe status"""
        return self.status

    def get_ipv4_supported(self) -> bool:
        return self.is_ipv4_supported

    def get_ipv6_supported(self) -> bool:
        return self.is_ipv6_supported

    def get_status_duration(self) -> float:
        """Get how long we've been in the current status (seconds)"""
        return time.time() - self.status_start_time

    def update_status(self, status: Status, reason: str = ""):
        """
        Overwrite the status and broadcast it.

        Re-entering the current status still broadcasts, so the server
        always sees the outcome of every round.
        """
        old_status = self.status
        self.previous_status = old_status
        self.status = status

        if old_status != status:
            self.status_start_time = time.time()
            log_msg = f"Status transition: {old_status.value} -> {status.value}"
            if reason:
                log_msg += f" ({reason})"
            self.logger.info(log_msg)

        self.send_status()

    def update_ipv4_supported(self, is_supported: bool):
        self.is_ipv4_supported = is_supported
        self.send_ipv4_supported()

    def update_ipv6_supported(self, is_supported: bool):
        self.is_ipv6_supported = is_supported
        self.send_ipv6_supported()

    # Broadcasting

    def send_status(self):
        self._emit(TOPIC_STATUS_UPDATE, self.status.value)

    def send_ipv4_supported(self):
        self._emit(TOPIC_IPV4_SUPPORTED_UPDATE, self.is_ipv4_supported)

    def send_ipv6_supported(self):
        self._emit(TOPIC_IPV6_SUPPORTED_UPDATE, self.is_ipv6_supported)

    def send_all(self):
        """Re-broadcast every value, e.g. after the transport reconnects"""
        self.send_status()
        self.send_ipv4_supported()
        self.send_ipv6_supported()

    def _emit(self, topic: str, payload):
        try:
            self.emitter.emit(topic, payload)
        except Exception as e:
            self.logger.error(f"Error broadcasting {topic}: {e}")

    def get_status_info(self) -> Dict:
        """Get detailed status information for debugging/monitoring"""
        return {
            "status": self.status.value,
            "previous_status": (
                self.previous_status.value if self.previous_status else None
            ),
            "status_duration": self.get_status_duration(),
            "ipv4_supported": self.is_ipv4_supported,
            "ipv6_supported": self.is_ipv6_supported,
        }
