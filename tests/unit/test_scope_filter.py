"""
Unit tests for scope/filter.py
"""

import pytest

from phaseflow.core.dataclasses import (
    LocationScope,
    PhaseDefinition,
    PhaseTemplate,
    ProjectConfig,
    ScopeRule,
)
from phaseflow.core.enums import PhaseStatus, ScopeConditionType
from phaseflow.scope.filter import (
    apply_scope,
    create_project_phases,
    phase_in_scope,
    rule_applies,
)


@pytest.fixture
def scoped_template():
    return PhaseTemplate(
        id="scoped",
        name="Scoped",
        phases=(
            PhaseDefinition("everywhere", "Everywhere"),
            PhaseDefinition("basement_only", "Basement", location_scope=LocationScope.floors("basement")),
            PhaseDefinition("upper_only", "Upper", location_scope=LocationScope.floors("upper")),
            PhaseDefinition("kitchen_only", "Kitchen", location_scope=LocationScope.rooms("kitchen")),
            PhaseDefinition("garage_only", "Garage", location_scope=LocationScope.zones("garage")),
            PhaseDefinition("tail", "Tail"),
        ),
        scope_rules=(
            ScopeRule(ScopeConditionType.BUILDING_HAS, "single_storey", ("tail",)),
        ),
    )


class TestPhaseInScope:
    """Test location scope evaluation."""

    def test_all_always_in_scope(self):
        assert phase_in_scope(PhaseDefinition("a", "A"), ProjectConfig(storeys=0))

    def test_floors(self):
        phase = PhaseDefinition("a", "A", location_scope=LocationScope.floors("basement"))
        assert phase_in_scope(phase, ProjectConfig(has_basement=True))
        assert not phase_in_scope(phase, ProjectConfig(has_basement=False))

    def test_rooms_any_match(self):
        phase = PhaseDefinition("a", "A", location_scope=LocationScope.rooms("kitchen", "laundry"))
        assert phase_in_scope(phase, ProjectConfig(rooms={"laundry"}))
        assert not phase_in_scope(phase, ProjectConfig(rooms={"bathroom"}))

    def test_zones(self):
        phase = PhaseDefinition("a", "A", location_scope=LocationScope.zones("garage"))
        assert phase_in_scope(phase, ProjectConfig(zones={"garage"}))
        assert not phase_in_scope(phase, ProjectConfig())


class TestScopeRules:
    """Test template scope rule conditions."""

    def test_building_has(self):
        single = ScopeRule(ScopeConditionType.BUILDING_HAS, "single_storey")
        multi = ScopeRule(ScopeConditionType.BUILDING_HAS, "multi_storey")
        basement = ScopeRule(ScopeConditionType.BUILDING_HAS, "basement")
        assert rule_applies(single, ProjectConfig(storeys=1))
        assert not rule_applies(single, ProjectConfig(storeys=2))
        assert rule_applies(multi, ProjectConfig(storeys=3))
        assert rule_applies(basement, ProjectConfig(has_basement=True))

    def test_building_has_unknown_value(self):
        rule = ScopeRule(ScopeConditionType.BUILDING_HAS, "moat")
        assert not rule_applies(rule, ProjectConfig())

    def test_includes_and_excludes(self):
        includes = ScopeRule(ScopeConditionType.SCOPE_INCLUDES, "bathroom")
        excludes = ScopeRule(ScopeConditionType.SCOPE_EXCLUDES, "bathroom")
        with_bath = ProjectConfig(rooms={"bathroom"})
        assert rule_applies(includes, with_bath)
        assert not rule_applies(excludes, with_bath)
        assert rule_applies(excludes, ProjectConfig())

    def test_includes_matches_levels(self):
        rule = ScopeRule(ScopeConditionType.SCOPE_INCLUDES, "basement")
        assert rule_applies(rule, ProjectConfig(has_basement=True))


class TestApplyScope:
    """Test apply_scope."""

    def test_preserves_order(self, scoped_template):
        config = ProjectConfig(storeys=2, has_basement=True, rooms={"kitchen"}, zones={"garage"})
        phases = apply_scope(scoped_template, config)
        assert [p.id for p in phases] == [
            "everywhere", "basement_only", "upper_only", "kitchen_only", "garage_only", "tail",
        ]

    def test_excludes_out_of_scope(self, scoped_template):
        phases = apply_scope(scoped_template, ProjectConfig(storeys=1))
        assert [p.id for p in phases] == ["everywhere"]

    def test_rule_removal(self, scoped_template):
        phases = apply_scope(scoped_template, ProjectConfig(storeys=2))
        assert [p.id for p in phases] == ["everywhere", "upper_only", "tail"]

    def test_none_rejected(self, scoped_template):
        with pytest.raises(TypeError):
            apply_scope(None, ProjectConfig())
        with pytest.raises(TypeError):
            apply_scope(scoped_template, None)

    def test_does_not_mutate_template(self, scoped_template):
        before = scoped_template.phase_ids()
        apply_scope(scoped_template, ProjectConfig())
        assert scoped_template.phase_ids() == before


class TestCreateProjectPhases:

    def test_all_pending_in_order(self, abc_phases):
        states = create_project_phases(abc_phases)
        assert [s.phase_id for s in states] == ["A", "B", "C"]
        assert [s.order for s in states] == [0, 1, 2]
        assert all(s.status == PhaseStatus.PENDING for s in states)

    def test_empty(self):
        assert create_project_phases([]) == []
