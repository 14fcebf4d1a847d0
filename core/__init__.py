"""
Core utilities and modules.

Public API:
    - Status: Probe status enumeration
    - StatusStateMachine: Status and IP family support flags with broadcasting
    - has_required_dependencies: Check that required binaries are installed

Usage:
    from core import Status, has_required_dependencies

    if not await has_required_dependencies():
        state.update_status(Status.UNBUFFER_MISSING)
"""

from core.dependencies import get_missing_dependencies, has_required_dependencies
from core.state_machine import Status, StatusStateMachine

__all__ = [
    "Status",
    "StatusStateMachine",
    "get_missing_dependencies",
    "has_required_dependencies",
]
