"""
Unit tests for progress/aggregator.py
"""

from phaseflow.core.enums import PhaseCategory
from phaseflow.progress.aggregator import (
    PhaseProgress,
    calculate_phase_progress,
    progress_by_category,
)


class TestCalculatePhaseProgress:
    """Test calculate_phase_progress."""

    def test_empty(self):
        progress = calculate_phase_progress([])
        assert progress == PhaseProgress()
        assert progress.percent_complete == 0

    def test_counts(self, states_factory):
        states = states_factory({"A": "complete", "B": "in_progress", "C": "pending"})
        progress = calculate_phase_progress(states)
        assert progress.total == 3
        assert progress.completed == 1
        assert progress.in_progress == 1
        assert progress.pending == 1
        assert progress.blocked == 0
        assert progress.percent_complete == 33

    def test_buckets_sum_to_total(self, states_factory):
        states = states_factory({"A": "complete", "B": "complete", "C": "in_progress", "D": "pending"})
        progress = calculate_phase_progress(states)
        assert progress.completed + progress.in_progress + progress.pending == progress.total

    def test_half_rounds_up(self, states_factory):
        statuses = {str(i): "pending" for i in range(8)}
        statuses["0"] = "complete"
        assert calculate_phase_progress(states_factory(statuses)).percent_complete == 13

    def test_two_thirds(self, states_factory):
        states = states_factory({"A": "complete", "B": "complete", "C": "pending"})
        assert calculate_phase_progress(states).percent_complete == 67

    def test_blocked_is_overlay(self, abc_phases, all_pending):
        progress = calculate_phase_progress(all_pending, abc_phases)
        assert progress.blocked == 1
        assert progress.pending == 3

    def test_to_dict(self, all_pending):
        data = calculate_phase_progress(all_pending).to_dict()
        assert data["total"] == 3
        assert data["percent_complete"] == 0


class TestProgressByCategory:

    def test_grouped(self, abc_phases, all_pending):
        grouped = progress_by_category(all_pending, abc_phases)
        assert list(grouped) == [PhaseCategory.FOUNDATION, PhaseCategory.STRUCTURAL]
        assert grouped[PhaseCategory.FOUNDATION].total == 1
        assert grouped[PhaseCategory.STRUCTURAL].total == 2
        assert grouped[PhaseCategory.STRUCTURAL].blocked == 1
