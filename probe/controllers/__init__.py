"""
Probe Controllers Package

Classification, quorum evaluation, round execution and status management.
"""

from probe.controllers.classifier import classify_outcome, is_successful
from probe.controllers.quorum import evaluate_quorum
from probe.controllers.round_runner import DualStackRoundRunner
from probe.controllers.status_manager import StatusManager

__all__ = [
    "DualStackRoundRunner",
    "StatusManager",
    "classify_outcome",
    "evaluate_quorum",
    "is_successful",
]
