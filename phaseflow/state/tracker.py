"""
phaseflow State Tracker

Owns the mutable per-project phase states. Validation is delegated to the
pure engine functions; the tracker only commits a change after the
engine accepts it, and records every committed transition.
"""

from __future__ import annotations
import copy
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union
import logging
import uuid

from phaseflow.core.dataclasses import (
    PhaseDefinition,
    PhaseTemplate,
    ProjectConfig,
    ProjectPhaseState,
)
from phaseflow.core.enums import IssueKind, PhaseStatus
from phaseflow.scope.filter import apply_scope, create_project_phases
from phaseflow.validation.engine import (
    phase_order_ids,
    validate_phase_completion,
    validate_phase_reorder,
)
from phaseflow.validation.overrides import OverrideRecord
from phaseflow.validation.taxonomy import Issue, ValidationResult

logger = logging.getLogger(__name__)


# ==================== Legal Transitions ====================
# Any status may go back to PENDING (reset); same-status is a no-op

LEGAL_TRANSITIONS: Dict[PhaseStatus, List[PhaseStatus]] = {
    PhaseStatus.PENDING: [
        PhaseStatus.IN_PROGRESS,
    ],
    PhaseStatus.IN_PROGRESS: [
        PhaseStatus.COMPLETE,
        PhaseStatus.PENDING,
    ],
    PhaseStatus.COMPLETE: [
        PhaseStatus.PENDING,
    ],
}


@dataclass
class TransitionEvent:
    """Record of a committed status change."""
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(default_factory=lambda: datetime.utcnow().isoformat())
    phase_id: str = ""
    from_status: str = ""
    to_status: str = ""
    source: str = ""
    override_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _untracked(phase_id: str) -> Issue:
    return Issue(
        kind=IssueKind.UNKNOWN_PHASE,
        message=f'Phase "{phase_id}" is not tracked for this project',
        phase_id=phase_id,
    )


def _missing(phase_id: str) -> Issue:
    return Issue(
        kind=IssueKind.MISSING_PHASE,
        message=f'Phase "{phase_id}" is missing from the proposed order',
        phase_id=phase_id,
    )


class StateTracker:
    """
    Per-project phase status store.

    Derived state (blocked, ready) is never kept here; callers pass
    ``snapshot()`` to the validation engine.
    """

    def __init__(self, states: Iterable[ProjectPhaseState]):
        self._states: Dict[str, ProjectPhaseState] = {}
        for state in states:
            if state.phase_id in self._states:
                raise ValueError(f"Duplicate phase state: {state.phase_id}")
            self._states[state.phase_id] = state
        self._history: List[TransitionEvent] = []

    @classmethod
    def from_template(cls, template: PhaseTemplate, config: ProjectConfig) -> "StateTracker":
        """Scope the template to the building and start every phase as pending."""
        return cls(create_project_phases(apply_scope(template, config)))

    # ==================== Reads ====================

    def __contains__(self, phase_id: object) -> bool:
        return phase_id in self._states

    def __len__(self) -> int:
        return len(self._states)

    def get(self, phase_id: str) -> Optional[ProjectPhaseState]:
        return self._states.get(phase_id)

    def status_of(self, phase_id: str) -> PhaseStatus:
        """Stored status; a phase with no state reads as pending."""
        state = self._states.get(phase_id)
        return state.status if state else PhaseStatus.PENDING

    def snapshot(self) -> List[ProjectPhaseState]:
        """Copies of the states, in project order."""
        return [copy.copy(self._states[pid]) for pid in self.ordered_phase_ids()]

    def status_map(self) -> Dict[str, PhaseStatus]:
        return {pid: state.status for pid, state in self._states.items()}

    def ordered_phase_ids(self) -> List[str]:
        return sorted(self._states, key=lambda pid: self._states[pid].order)

    def history(self, phase_id: Optional[str] = None) -> List[TransitionEvent]:
        events = self._history
        if phase_id:
            events = [e for e in events if e.phase_id == phase_id]
        return list(events)

    # ==================== Transitions ====================

    def can_transition(self, phase_id: str, to_status: PhaseStatus) -> Tuple[bool, Optional[str]]:
        """
        Check whether a stored status change is legal.

        Only the status lifecycle is checked here; dependency rules are
        enforced by complete_phase.

        Returns:
            Tuple of (allowed, reason if refused)
        """
        to_status = PhaseStatus.parse(to_status)
        state = self._states.get(phase_id)
        if state is None:
            return False, f"Unknown phase: {phase_id}"

        if state.status == to_status:
            return True, None

        if to_status not in LEGAL_TRANSITIONS.get(state.status, []):
            return False, (
                f"Transition from {state.status.value} to {to_status.value} not allowed"
            )
        return True, None

    def transition(
        self,
        phase_id: str,
        to_status: PhaseStatus,
        source: str = "user",
        override: Optional[OverrideRecord] = None,
    ) -> bool:
        """
        Apply a lifecycle transition.

        Returns:
            True if applied (or already in that status), False if refused
        """
        to_status = PhaseStatus.parse(to_status)
        allowed, reason = self.can_transition(phase_id, to_status)
        if not allowed:
            logger.info(f"Transition refused for '{phase_id}': {reason}")
            return False

        state = self._states[phase_id]
        if state.status == to_status:
            return True

        self._history.append(TransitionEvent(
            phase_id=phase_id,
            from_status=state.status.value,
            to_status=to_status.value,
            source=source,
            override_id=override.id if override else None,
        ))
        state.status = to_status
        logger.debug(f"Phase '{phase_id}' -> {to_status.value} ({source})")
        return True

    def complete_phase(
        self,
        phase_id: str,
        phases: Union[PhaseTemplate, Sequence[PhaseDefinition]],
        source: str = "user",
        override: Optional[OverrideRecord] = None,
    ) -> ValidationResult:
        """
        Validate, then mark a phase complete.

        Hard errors always refuse the change. Warnings refuse it unless
        ``override`` covers every one of them. A pending phase is moved
        through in_progress so the lifecycle stays legal. The validation
        result is returned whether or not the change was applied.
        """
        result = validate_phase_completion(phase_id, self.snapshot(), phases)

        if not result.valid:
            logger.info(f"Completion refused for '{phase_id}': {len(result.errors)} error(s)")
            return result

        if result.has_warnings and (override is None or not override.covers(result.warnings)):
            logger.info(
                f"Completion of '{phase_id}' needs an override for "
                f"{len(result.warnings)} warning(s)"
            )
            return result

        if phase_id not in self._states:
            logger.info(f"Completion refused for '{phase_id}': no state for phase")
            result.add_error(_untracked(phase_id))
            return result

        if self.status_of(phase_id) == PhaseStatus.PENDING:
            self.transition(phase_id, PhaseStatus.IN_PROGRESS, source, override)
        self.transition(phase_id, PhaseStatus.COMPLETE, source, override)
        return result

    def apply_reorder(
        self,
        new_order: Sequence[Union[PhaseDefinition, ProjectPhaseState, str]],
        phases: Union[PhaseTemplate, Sequence[PhaseDefinition]],
        override: Optional[OverrideRecord] = None,
    ) -> ValidationResult:
        """
        Validate a proposed order and, if acceptable, reassign ``order``
        for every tracked phase at once. Nothing changes on refusal.

        The order must be a permutation of the tracked phases: an id with
        no state is UNKNOWN_PHASE and a tracked phase left out is
        MISSING_PHASE.
        """
        result = validate_phase_reorder(new_order, phases)
        ids = phase_order_ids(new_order)

        flagged = {i.phase_id for i in result.errors if i.kind == IssueKind.UNKNOWN_PHASE}
        for phase_id in ids:
            if phase_id not in self._states and phase_id not in flagged:
                result.add_error(_untracked(phase_id))
                flagged.add(phase_id)
        listed = set(ids)
        for phase_id in self.ordered_phase_ids():
            if phase_id not in listed:
                result.add_error(_missing(phase_id))

        if not result.valid:
            logger.info(f"Reorder refused: {len(result.errors)} error(s)")
            return result
        if result.has_warnings and (override is None or not override.covers(result.warnings)):
            logger.info(f"Reorder needs an override for {len(result.warnings)} warning(s)")
            return result

        for index, phase_id in enumerate(ids):
            self._states[phase_id].order = index
        logger.debug(f"Reordered {len(ids)} phase(s)")
        return result

    def reset(self, template: PhaseTemplate, config: ProjectConfig) -> None:
        """Discard all states and rebuild them from the template."""
        self._states = {
            s.phase_id: s for s in create_project_phases(apply_scope(template, config))
        }
        logger.info(f"Phase states reset from template '{template.id}'")

    def to_list(self) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self.snapshot()]
