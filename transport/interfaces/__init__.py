"""
Transport Interfaces Package

Exposes abstract interfaces for transport components.
"""

from transport.interfaces.emitter_interface import (
    EmitterError,
    StatusEmitterInterface,
)

# Public API
__all__ = [
    # Exceptions
    "EmitterError",
    # Interface
    "StatusEmitterInterface",
]
