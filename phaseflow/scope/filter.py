"""
phaseflow Scope Filter

Prunes a template's phase list down to the phases that apply to a specific
building. Relative template order is always preserved.
"""

from __future__ import annotations
from typing import List, Sequence
import logging

from phaseflow.core.dataclasses import (
    PhaseDefinition,
    PhaseTemplate,
    ProjectConfig,
    ProjectPhaseState,
    ScopeRule,
)
from phaseflow.core.enums import PhaseStatus, ScopeConditionType, ScopeType

logger = logging.getLogger(__name__)


# ==================== Location Scope ====================

def phase_in_scope(phase: PhaseDefinition, config: ProjectConfig) -> bool:
    """Evaluate a phase's location scope against the building."""
    scope = phase.location_scope

    if scope.type == ScopeType.ALL:
        return True
    if scope.type == ScopeType.FLOORS:
        levels = set(config.levels())
        return any(floor in levels for floor in scope.values)
    if scope.type == ScopeType.ROOMS:
        return any(room in config.rooms for room in scope.values)
    if scope.type == ScopeType.ZONES:
        return any(zone in config.zones for zone in scope.values)

    raise ValueError(f"Unhandled scope type: {scope.type}")


# ==================== Scope Rules ====================

def _building_has(value: str, config: ProjectConfig) -> bool:
    if value == "single_storey":
        return config.storeys == 1
    if value == "multi_storey":
        return config.storeys > 1
    if value == "basement":
        return config.has_basement
    if value == "freestanding":
        return "freestanding" in config.zones
    return False


def _scope_includes(value: str, config: ProjectConfig) -> bool:
    return value in config.rooms or value in config.zones or value in config.levels()


def rule_applies(rule: ScopeRule, config: ProjectConfig) -> bool:
    """Does a template scope rule's condition hold for this building?"""
    if rule.condition == ScopeConditionType.BUILDING_HAS:
        return _building_has(rule.value, config)
    if rule.condition == ScopeConditionType.SCOPE_INCLUDES:
        return _scope_includes(rule.value, config)
    if rule.condition == ScopeConditionType.SCOPE_EXCLUDES:
        return not _scope_includes(rule.value, config)

    raise ValueError(f"Unhandled scope condition: {rule.condition}")


# ==================== Filter ====================

def apply_scope(template: PhaseTemplate, config: ProjectConfig) -> List[PhaseDefinition]:
    """
    In-scope phases of ``template`` for the building described by ``config``.

    Location scopes are evaluated first, then template scope rules remove
    any further phases whose condition holds.
    """
    if template is None:
        raise TypeError("template must not be None")
    if config is None:
        raise TypeError("config must not be None")

    phases = [p for p in template.phases if phase_in_scope(p, config)]

    removed = set()
    for rule in template.scope_rules:
        if rule_applies(rule, config):
            removed.update(rule.remove_phase_ids)
    if removed:
        phases = [p for p in phases if p.id not in removed]

    logger.debug(
        f"Scope applied to '{template.id}': {len(phases)} of "
        f"{len(template.phases)} phases in scope"
    )
    return phases


def create_project_phases(phases: Sequence[PhaseDefinition]) -> List[ProjectPhaseState]:
    """Initial per-project states: all pending, ordered by filtered position."""
    return [
        ProjectPhaseState(phase_id=phase.id, status=PhaseStatus.PENDING, order=index)
        for index, phase in enumerate(phases)
    ]
