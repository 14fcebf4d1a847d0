"""
Mock Emitter Implementation

In-memory event sink for development and testing without a server.
Every emitted event is recorded in order so tests can assert on exactly
what the orchestration server would have received.
"""

import logging
from typing import Any, List, Optional, Tuple

from transport.interfaces.emitter_interface import StatusEmitterInterface


class MockEmitter(StatusEmitterInterface):
    """
    Emitter that records events instead of sending them.

    Usage:
        emitter = MockEmitter()
        emitter.emit("probe:status:update", "ready")
        assert emitter.get_last("probe:status:update") == "ready"
    """

    def __init__(self, connected: bool = True):
        self.logger = logging.getLogger(__name__)
        self._events: List[Tuple[str, Any]] = []
        self._connected = connected

        self.logger.info("Mock Emitter initialized (simulation mode)")

    def emit(self, topic: str, payload: Any) -> None:
        """Record event"""
        self._events.append((topic, payload))
        self.logger.debug(f"[MOCK] emit {topic}: {payload}")

    def is_connected(self) -> bool:
        return self._connected

    # =========================================================================
    # TEST HELPERS
    # =========================================================================

    def set_connected(self, connected: bool) -> None:
        self._connected = connected

    def get_events(self, topic: Optional[str] = None) -> List[Tuple[str, Any]]:
        """Get recorded events, optionally only those for one topic"""
        if topic is None:
            return list(self._events)
        return [event for event in self._events if event[0] == topic]

    def get_payloads(self, topic: str) -> List[Any]:
        """Get payloads emitted on one topic, oldest first"""
        return [payload for _, payload in self.get_events(topic)]

    def get_last(self, topic: str) -> Any:
        """Get the most recent payload for a topic, or None"""
        payloads = self.get_payloads(topic)
        return payloads[-1] if payloads else None

    def clear(self) -> None:
        self._events.clear()
