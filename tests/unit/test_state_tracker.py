"""
Unit tests for state/tracker.py

Tests lifecycle transitions, validate-then-commit completion, and
atomic reorder.
"""

import pytest

from phaseflow.catalog.builtin import get_builtin_template
from phaseflow.core.dataclasses import ProjectConfig, ProjectPhaseState
from phaseflow.core.enums import IssueKind, PhaseStatus
from phaseflow.state.tracker import LEGAL_TRANSITIONS, StateTracker, TransitionEvent
from phaseflow.validation.engine import validate_phase_completion
from phaseflow.validation.overrides import create_override_record


@pytest.fixture
def tracker(abc_template):
    return StateTracker.from_template(abc_template, ProjectConfig())


class TestTrackerCreation:
    """Test StateTracker creation."""

    def test_from_template(self, tracker):
        assert len(tracker) == 3
        assert tracker.ordered_phase_ids() == ["A", "B", "C"]
        assert all(s == PhaseStatus.PENDING for s in tracker.status_map().values())

    def test_duplicate_state_rejected(self):
        with pytest.raises(ValueError):
            StateTracker([ProjectPhaseState("A"), ProjectPhaseState("A")])

    def test_snapshot_is_copy(self, tracker):
        snapshot = tracker.snapshot()
        snapshot[0].status = PhaseStatus.COMPLETE
        assert tracker.status_of("A") == PhaseStatus.PENDING

    def test_unknown_phase_reads_pending(self, tracker):
        assert tracker.get("Z") is None
        assert tracker.status_of("Z") == PhaseStatus.PENDING


class TestTransitions:
    """Test lifecycle transitions."""

    def test_legal_table(self):
        assert PhaseStatus.IN_PROGRESS in LEGAL_TRANSITIONS[PhaseStatus.PENDING]
        assert PhaseStatus.COMPLETE in LEGAL_TRANSITIONS[PhaseStatus.IN_PROGRESS]
        for status in (PhaseStatus.IN_PROGRESS, PhaseStatus.COMPLETE):
            assert PhaseStatus.PENDING in LEGAL_TRANSITIONS[status]

    def test_start_and_finish(self, tracker):
        assert tracker.transition("A", PhaseStatus.IN_PROGRESS, source="test")
        assert tracker.transition("A", PhaseStatus.COMPLETE, source="test")
        assert tracker.status_of("A") == PhaseStatus.COMPLETE

    def test_pending_to_complete_refused(self, tracker):
        can, reason = tracker.can_transition("A", PhaseStatus.COMPLETE)
        assert not can
        assert "not allowed" in reason
        assert not tracker.transition("A", PhaseStatus.COMPLETE)
        assert tracker.status_of("A") == PhaseStatus.PENDING

    def test_same_status_is_noop(self, tracker):
        assert tracker.transition("A", PhaseStatus.PENDING)
        assert tracker.history() == []

    def test_unknown_phase_refused(self, tracker):
        can, reason = tracker.can_transition("Z", PhaseStatus.IN_PROGRESS)
        assert not can
        assert "Z" in reason

    def test_reset_to_pending(self, tracker):
        tracker.transition("A", "in_progress")
        tracker.transition("A", "complete")
        assert tracker.transition("A", "pending")
        assert tracker.status_of("A") == PhaseStatus.PENDING

    def test_history_recorded(self, tracker):
        tracker.transition("A", PhaseStatus.IN_PROGRESS, source="test")
        events = tracker.history()
        assert len(events) == 1
        assert isinstance(events[0], TransitionEvent)
        assert events[0].from_status == "pending"
        assert events[0].to_status == "in_progress"
        assert events[0].source == "test"
        assert tracker.history("B") == []


class TestCompletePhase:
    """Test validate-then-commit completion."""

    def test_hard_error_refuses(self, tracker, abc_template):
        result = tracker.complete_phase("B", abc_template)
        assert not result.valid
        assert tracker.status_of("B") == PhaseStatus.PENDING

    def test_clean_completion_applies(self, tracker, abc_template):
        result = tracker.complete_phase("A", abc_template)
        assert result.valid
        assert tracker.status_of("A") == PhaseStatus.COMPLETE
        assert [e.to_status for e in tracker.history("A")] == ["in_progress", "complete"]

    def test_warning_needs_override(self, tracker, abc_template):
        tracker.complete_phase("A", abc_template)
        result = tracker.complete_phase("C", abc_template)
        assert result.requires_override
        assert tracker.status_of("C") == PhaseStatus.PENDING

    def test_override_applies(self, tracker, abc_template):
        tracker.complete_phase("A", abc_template)
        warnings = validate_phase_completion("C", tracker.snapshot(), abc_template).warnings
        override = create_override_record("C", warnings, "user-1", "client sign-off")

        result = tracker.complete_phase("C", abc_template, override=override)
        assert result.valid
        assert tracker.status_of("C") == PhaseStatus.COMPLETE
        assert tracker.history("C")[-1].override_id == override.id

    def test_untracked_phase_refused(self, abc_template):
        tracker = StateTracker([ProjectPhaseState("B")])
        result = tracker.complete_phase("A", abc_template)
        assert not result.valid
        assert result.errors[-1].kind == IssueKind.UNKNOWN_PHASE


class TestApplyReorder:
    """Test atomic reorder."""

    def test_hard_violation_changes_nothing(self, tracker, abc_template):
        result = tracker.apply_reorder(["B", "A", "C"], abc_template)
        assert not result.valid
        assert tracker.ordered_phase_ids() == ["A", "B", "C"]

    def test_soft_violation_needs_override(self, tracker, abc_template):
        result = tracker.apply_reorder(["A", "C", "B"], abc_template)
        assert result.valid
        assert tracker.ordered_phase_ids() == ["A", "B", "C"]

        override = create_override_record(None, result.warnings, "user-1", "crew availability")
        tracker.apply_reorder(["A", "C", "B"], abc_template, override=override)
        assert tracker.ordered_phase_ids() == ["A", "C", "B"]

    def test_partial_order_refused(self, tracker, abc_template):
        result = tracker.apply_reorder(["B"], abc_template)
        assert not result.valid
        assert {i.phase_id for i in result.errors if i.kind == IssueKind.MISSING_PHASE} == {"A", "C"}
        assert {s.phase_id: s.order for s in tracker.snapshot()} == {"A": 0, "B": 1, "C": 2}

    def test_untracked_id_refused(self, abc_template):
        tracker = StateTracker([ProjectPhaseState("A", order=0), ProjectPhaseState("B", order=1)])
        result = tracker.apply_reorder(["A", "B", "C"], abc_template)
        assert not result.valid
        assert [i.phase_id for i in result.errors if i.kind == IssueKind.UNKNOWN_PHASE] == ["C"]
        assert tracker.ordered_phase_ids() == ["A", "B"]

    def test_scoped_permutation_applies(self):
        template = get_builtin_template("new_construction_multi_storey")
        tracker = StateTracker.from_template(template, ProjectConfig(storeys=1, has_basement=False))
        ids = tracker.ordered_phase_ids()
        result = tracker.apply_reorder(ids, template)
        assert result.valid
        assert tracker.ordered_phase_ids() == ids


class TestScopedTemplate:
    """A tracker built from a scoped template accepts the full template."""

    def test_complete_with_full_template(self):
        template = get_builtin_template("new_construction_multi_storey")
        tracker = StateTracker.from_template(template, ProjectConfig(storeys=1, has_basement=False))
        assert tracker.complete_phase("foundation", template).valid
        assert tracker.complete_phase("floor_framing_main", template).valid
        assert tracker.status_of("floor_framing_main") == PhaseStatus.COMPLETE

    def test_excluded_phase_refused(self):
        template = get_builtin_template("new_construction_multi_storey")
        tracker = StateTracker.from_template(template, ProjectConfig(storeys=1, has_basement=False))
        result = tracker.complete_phase("bearing_walls_basement", template)
        assert not result.valid
        assert result.errors[0].kind == IssueKind.UNKNOWN_PHASE


class TestReset:

    def test_reset_rebuilds(self, tracker, abc_template):
        tracker.complete_phase("A", abc_template)
        tracker.reset(abc_template, ProjectConfig())
        assert tracker.status_of("A") == PhaseStatus.PENDING
        assert tracker.to_list()[0] == {"phase_id": "A", "status": "pending", "order": 0}
