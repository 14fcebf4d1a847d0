"""
Socket.IO Emitter Implementation

Broadcasts status events to the orchestration server over a Socket.IO
connection (python-socketio AsyncClient).

emit() is called from synchronous state machine code, so each event is
scheduled as a task on the running event loop. Send failures are logged
here and never reach the state machine.
"""

import asyncio
import logging
from typing import Any, Callable, List, Optional, Set

import socketio
from socketio.exceptions import SocketIOError

from config.settings import SOCKET_NAMESPACE, SOCKET_RECONNECT, SOCKET_SERVER_URL
from transport.constants import CONNECT_TIMEOUT
from transport.interfaces.emitter_interface import (
    EmitterError,
    StatusEmitterInterface,
)


class SocketIOEmitter(StatusEmitterInterface):
    """
    Status emitter backed by a Socket.IO client.

    Usage:
        emitter = SocketIOEmitter("http://api.example.com")
        await emitter.connect()
        emitter.emit("probe:status:update", "ready")
        await emitter.disconnect()
    """

    def __init__(
        self,
        url: str = SOCKET_SERVER_URL,
        namespace: str = SOCKET_NAMESPACE,
        reconnection: bool = SOCKET_RECONNECT,
        client: Optional[socketio.AsyncClient] = None,
    ):
        """
        Initialize emitter.

        Args:
            url: Server base URL
            namespace: Socket.IO namespace probes connect to
            reconnection: Let the client reconnect after a dropped connection
            client: Pre-built client (tests), or None to create one
        """
        self.logger = logging.getLogger(__name__)

        self.url = url
        self.namespace = namespace
        self.client = client or socketio.AsyncClient(reconnection=reconnection)

        # Keep references so in-flight sends are not garbage collected
        self._pending: Set[asyncio.Task] = set()
        self._connect_callbacks: List[Callable[[], None]] = []

        self.client.on("connect", self._handle_connect, namespace=namespace)
        self.client.on("disconnect", self._handle_disconnect, namespace=namespace)

        self.logger.info(f"Socket.IO Emitter initialized (url: {url}{namespace})")

    async def connect(self) -> None:
        """
        Open the connection.

        Raises:
            socketio.exceptions.ConnectionError: If the server is unreachable
        """
        self.logger.info(f"Connecting to {self.url}{self.namespace}...")
        await self.client.connect(
            self.url,
            namespaces=[self.namespace],
            wait_timeout=CONNECT_TIMEOUT,
        )

    async def disconnect(self) -> None:
        """Flush pending sends and close the connection"""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        if self.client.connected:
            await self.client.disconnect()
        self.logger.info("Socket.IO Emitter disconnected")

    def on_connect(self, callback: Callable[[], None]) -> None:
        """Register a callback run on every (re)connection"""
        self._connect_callbacks.append(callback)

    def emit(self, topic: str, payload: Any) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise EmitterError(f"Cannot emit {topic}: no running event loop") from e

        task = loop.create_task(self._send(topic, payload))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def is_connected(self) -> bool:
        return self.client.connected

    async def _send(self, topic: str, payload: Any) -> None:
        try:
            await self.client.emit(topic, payload, namespace=self.namespace)
            self.logger.debug(f"Emitted {topic}: {payload}")
        except SocketIOError as e:
            self.logger.warning(f"Failed to emit {topic}: {e}")

    def _handle_connect(self) -> None:
        self.logger.info("Connected to server")
        for callback in self._connect_callbacks:
            try:
                callback()
            except Exception as e:
                self.logger.error(f"Error in connect callback: {e}")

    def _handle_disconnect(self, reason=None) -> None:
        self.logger.warning(f"Disconnected from server ({reason or 'unknown reason'})")
