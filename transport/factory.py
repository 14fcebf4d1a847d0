"""
Transport Factory

Single place to decide which emitter implementation the service uses.
"""

import logging
from typing import Literal

from config.settings import SOCKET_SERVER_URL
from transport.implementations.mock_emitter import MockEmitter
from transport.implementations.socketio_emitter import SocketIOEmitter
from transport.interfaces.emitter_interface import StatusEmitterInterface

EmitterMode = Literal["auto", "real", "mock"]

_logger = logging.getLogger(__name__)


def create_emitter(
    mode: EmitterMode = "auto",
    url: str = SOCKET_SERVER_URL,
) -> StatusEmitterInterface:
    """
    Create a status emitter.

    Args:
        mode: "auto" (Socket.IO when a server URL is set), "real", or "mock"
        url: Server base URL for the Socket.IO client

    Returns:
        StatusEmitterInterface implementation

    Raises:
        ValueError: If mode="real" but no server URL is configured
    """
    if mode == "mock":
        _logger.info("Creating Mock Emitter")
        return MockEmitter()

    if mode == "real":
        if not url:
            raise ValueError("Real emitter requested but SOCKET_SERVER_URL is empty")
        _logger.info("Creating Socket.IO Emitter (forced)")
        return SocketIOEmitter(url=url)

    if url:
        _logger.info("Creating Socket.IO Emitter (auto-detected)")
        return SocketIOEmitter(url=url)

    _logger.warning("No server URL configured, using Mock Emitter")
    return MockEmitter()
