"""
Transport Module

Delivery of probe status events to the orchestration server.

Public API:
    - StatusEmitterInterface: Emitter contract
    - SocketIOEmitter: Socket.IO client implementation
    - MockEmitter: In-memory implementation for tests
    - create_emitter: Factory with auto-detection
    - TOPIC_*: Event names

Usage:
    from transport import create_emitter

    emitter = create_emitter()
    emitter.emit(TOPIC_STATUS_UPDATE, "ready")
"""

from transport.constants import (
    TOPIC_IPV4_SUPPORTED_UPDATE,
    TOPIC_IPV6_SUPPORTED_UPDATE,
    TOPIC_STATUS_UPDATE,
)
from transport.factory import create_emitter
from transport.implementations.mock_emitter import MockEmitter
from transport.implementations.socketio_emitter import SocketIOEmitter
from transport.interfaces.emitter_interface import (
    EmitterError,
    StatusEmitterInterface,
)

__all__ = [
    "EmitterError",
    "MockEmitter",
    "SocketIOEmitter",
    "StatusEmitterInterface",
    "TOPIC_IPV4_SUPPORTED_UPDATE",
    "TOPIC_IPV6_SUPPORTED_UPDATE",
    "TOPIC_STATUS_UPDATE",
    "create_emitter",
]
