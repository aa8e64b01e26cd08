"""
phaseflow Progress Aggregator

Counts phases by stored status. Blocked is an overlay: a blocked phase is
also counted in its pending or in_progress bucket.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional, Sequence, Union

from phaseflow.core.dataclasses import PhaseDefinition, PhaseTemplate
from phaseflow.core.enums import CATEGORY_LABELS, PhaseCategory, PhaseStatus
from phaseflow.validation.engine import StateSource, build_status_map, get_blocked_phases


@dataclass(frozen=True)
class PhaseProgress:
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    pending: int = 0
    blocked: int = 0
    percent_complete: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "completed": self.completed,
            "in_progress": self.in_progress,
            "pending": self.pending,
            "blocked": self.blocked,
            "percent_complete": self.percent_complete,
        }


def _percent(completed: int, total: int) -> int:
    if total == 0:
        return 0
    ratio = Decimal(100 * completed) / Decimal(total)
    return int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def calculate_phase_progress(
    states: StateSource,
    phases: Optional[Union[PhaseTemplate, Sequence[PhaseDefinition]]] = None,
) -> PhaseProgress:
    """
    Progress counts for one project.

    Args:
        states: stored phase states (the set being counted)
        phases: in-scope phase definitions; needed for the blocked count,
            which is 0 when omitted

    Returns:
        PhaseProgress with percent_complete rounded half-up
    """
    status_map = build_status_map(states)
    statuses = list(status_map.values())

    completed = sum(1 for s in statuses if s == PhaseStatus.COMPLETE)
    in_progress = sum(1 for s in statuses if s == PhaseStatus.IN_PROGRESS)
    pending = sum(1 for s in statuses if s == PhaseStatus.PENDING)

    blocked = 0
    if phases is not None:
        blocked = sum(
            1 for phase_id in get_blocked_phases(phases, status_map)
            if phase_id in status_map
        )

    total = len(statuses)
    return PhaseProgress(
        total=total,
        completed=completed,
        in_progress=in_progress,
        pending=pending,
        blocked=blocked,
        percent_complete=_percent(completed, total),
    )


def progress_by_category(
    states: StateSource,
    phases: Union[PhaseTemplate, Sequence[PhaseDefinition]],
) -> Dict[PhaseCategory, PhaseProgress]:
    """Per-category progress, in CATEGORY_LABELS order; empty categories omitted."""
    if phases is None:
        raise TypeError("phases must not be None")
    phase_list = phases.phases if isinstance(phases, PhaseTemplate) else list(phases)
    status_map = build_status_map(states)
    blocked = get_blocked_phases(phase_list, status_map)

    result: Dict[PhaseCategory, PhaseProgress] = {}
    for category in CATEGORY_LABELS:
        members = [
            p.id for p in phase_list
            if p.category == category and p.id in status_map
        ]
        if not members:
            continue
        sub_map = {pid: status_map[pid] for pid in members}
        counts = calculate_phase_progress(sub_map)
        result[category] = PhaseProgress(
            total=counts.total,
            completed=counts.completed,
            in_progress=counts.in_progress,
            pending=counts.pending,
            blocked=sum(1 for pid in members if pid in blocked),
            percent_complete=counts.percent_complete,
        )
    return result
