"""
Transport Implementations Package

Concrete emitter implementations.
"""

from transport.implementations.mock_emitter import MockEmitter
from transport.implementations.socketio_emitter import SocketIOEmitter

__all__ = [
    "MockEmitter",
    "SocketIOEmitter",
]
