"""
phaseflow State Tracker
"""

from .tracker import (
    LEGAL_TRANSITIONS,
    StateTracker,
    TransitionEvent,
)

__all__ = [
    "LEGAL_TRANSITIONS",
    "StateTracker",
    "TransitionEvent",
]
