"""
phaseflow Progress Aggregator
"""

from .aggregator import (
    PhaseProgress,
    calculate_phase_progress,
    progress_by_category,
)

__all__ = [
    "PhaseProgress",
    "calculate_phase_progress",
    "progress_by_category",
]
