"""
Status Emitter Interface

Abstract interface for the transport that broadcasts probe status changes
to the orchestration server.

Why an interface?
1. Testability: Can use MockEmitter instead of a live Socket.IO connection
2. Flexibility: Status logic does not care how events leave the process
3. Clear contract: emit() is fire-and-forget and must not block the caller
"""

from abc import ABC, abstractmethod
from typing import Any


class StatusEmitterInterface(ABC):
    """
    Abstract base class for status event transports.

    Implementations must deliver events in the order emit() was called.
    """

    @abstractmethod
    def emit(self, topic: str, payload: Any) -> None:
        """
        Broadcast one event.

        This should be NON-BLOCKING - the event is queued or sent
        immediately, the caller never waits for an acknowledgement.

        Args:
            topic: Event name (e.g. "probe:status:update")
            payload: JSON-serializable value

        Raises:
            EmitterError: If the event cannot be queued at all

        Example:
            emitter.emit("probe:status:update", "ready")
        """
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        """
        Check if the transport currently has a live connection.

        Returns:
            True if events will be delivered right away
        """
        pass


class EmitterError(Exception):
    """
    Exception raised when an event cannot be handed to the transport.

    Examples:
    - Event loop not running
    - Client was never connected
    """
    pass
