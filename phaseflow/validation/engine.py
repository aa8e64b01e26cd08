"""
phaseflow Validation Engine

Pure functions over (phases, states). Nothing here mutates its arguments
or keeps state between calls; blocked and ready sets are recomputed on
every call from the snapshot passed in.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union
import logging

from phaseflow.core.dataclasses import (
    DependencyConstraint,
    PhaseDefinition,
    PhaseTemplate,
    ProjectPhaseState,
)
from phaseflow.core.enums import DependencyKind, IssueKind, PhaseStatus
from phaseflow.dependencies.graph import PhaseDependencyGraph
from .taxonomy import BlockingDependency, Issue, ValidationResult

logger = logging.getLogger(__name__)

PhaseSource = Union[PhaseTemplate, Sequence[PhaseDefinition]]
StateSource = Union[Iterable[ProjectPhaseState], Mapping[str, Any]]

OPEN_STATUSES = (PhaseStatus.PENDING, PhaseStatus.IN_PROGRESS)


# =============================================================================
# INPUT NORMALIZATION
# =============================================================================

def _phase_list(phases: PhaseSource) -> Tuple[PhaseDefinition, ...]:
    if phases is None:
        raise TypeError("phases/template must not be None")
    if isinstance(phases, PhaseTemplate):
        return phases.phases
    return tuple(phases)


def _in_scope(phases: PhaseSource, status_map: Dict[str, PhaseStatus]) -> Tuple[PhaseDefinition, ...]:
    """
    Phases to validate against.

    A full template paired with project states is narrowed to the phases
    that have a state entry: scoping creates a state for every in-scope
    phase, so a template phase without one was excluded for this building
    and must neither block nor be offered as ready.
    """
    phase_list = _phase_list(phases)
    if isinstance(phases, PhaseTemplate) and status_map:
        return tuple(p for p in phase_list if p.id in status_map)
    return phase_list


def build_status_map(states: StateSource) -> Dict[str, PhaseStatus]:
    """
    phase_id -> stored status.

    Accepts ProjectPhaseState objects, plain dicts with ``phase_id`` (or
    ``id``) and ``status`` keys, or a mapping of phase_id -> status.
    """
    if states is None:
        raise TypeError("states must not be None")

    if isinstance(states, Mapping):
        return {pid: PhaseStatus.parse(status) for pid, status in states.items()}

    status_map: Dict[str, PhaseStatus] = {}
    for state in states:
        if isinstance(state, ProjectPhaseState):
            status_map[state.phase_id] = state.status
        elif isinstance(state, Mapping):
            parsed = ProjectPhaseState.from_dict(state)
            status_map[parsed.phase_id] = parsed.status
        else:
            raise TypeError(f"Unsupported phase state entry: {state!r}")
    return status_map


def _is_complete(status_map: Dict[str, PhaseStatus], phase_id: str) -> bool:
    return status_map.get(phase_id, PhaseStatus.PENDING) == PhaseStatus.COMPLETE


def _unmet(
    graph: PhaseDependencyGraph,
    status_map: Dict[str, PhaseStatus],
    phase_id: str,
    kind: DependencyKind,
) -> List[DependencyConstraint]:
    # Out-of-scope prerequisites never reach here; the graph drops them
    return [
        c for c in graph.constraints_for(phase_id, kind)
        if not _is_complete(status_map, c.requires_phase_id)
    ]


# =============================================================================
# BLOCKED / READY
# =============================================================================

def get_blocked_phases(
    phases: PhaseSource,
    states: StateSource,
) -> Dict[str, List[BlockingDependency]]:
    """
    Phases whose hard prerequisites are not all complete.

    Only pending and in-progress phases are considered: completion is
    sticky and never re-validated. The result is ordered by phase order;
    each value lists the unmet hard constraints with the prerequisite's
    display name.
    """
    status_map = build_status_map(states)
    graph = PhaseDependencyGraph(_in_scope(phases, status_map))

    blocked: Dict[str, List[BlockingDependency]] = {}
    for phase_id in graph.phase_ids():
        if status_map.get(phase_id, PhaseStatus.PENDING) not in OPEN_STATUSES:
            continue
        unmet = _unmet(graph, status_map, phase_id, DependencyKind.HARD)
        if unmet:
            blocked[phase_id] = [
                BlockingDependency(c, graph.phase_name(c.requires_phase_id))
                for c in unmet
            ]
    return blocked


def get_ready_phases(phases: PhaseSource, states: StateSource) -> List[PhaseDefinition]:
    """
    Pending phases with no unmet hard prerequisite.

    Soft dependencies are ignored entirely here.
    """
    status_map = build_status_map(states)
    phase_list = _in_scope(phases, status_map)
    blocked = get_blocked_phases(phase_list, status_map)

    return [
        phase for phase in phase_list
        if status_map.get(phase.id, PhaseStatus.PENDING) == PhaseStatus.PENDING
        and phase.id not in blocked
    ]


# =============================================================================
# COMPLETION
# =============================================================================

def validate_phase_completion(
    phase_id: str,
    states: StateSource,
    template: PhaseSource,
) -> ValidationResult:
    """
    Can ``phase_id`` be marked complete?

    Unmet hard prerequisites are errors (valid=False); unmet soft
    prerequisites are warnings that the caller may override. Excluded
    prerequisites are satisfied when ``template`` is the in-scope phase
    list, or a full template paired with the project states.
    """
    status_map = build_status_map(states)
    graph = PhaseDependencyGraph(_in_scope(template, status_map))
    result = ValidationResult()

    phase = graph.get_phase(phase_id)
    if phase is None:
        result.add_error(Issue(
            kind=IssueKind.UNKNOWN_PHASE,
            message=f'Phase "{phase_id}" not found in template',
            phase_id=phase_id,
            suggestion="Ensure the phase exists in the selected template",
        ))
        return result

    for constraint in _unmet(graph, status_map, phase_id, DependencyKind.HARD):
        required_name = graph.phase_name(constraint.requires_phase_id)
        message = f'Cannot complete "{phase.name}" - requires "{required_name}" to be complete first'
        if constraint.reason:
            message += f" ({constraint.reason})"
        result.add_error(Issue(
            kind=IssueKind.HARD_DEPENDENCY_UNMET,
            message=message,
            phase_id=phase_id,
            required_phase_id=constraint.requires_phase_id,
            required_phase_name=required_name,
            reason=constraint.reason,
            suggestion=f'Complete "{required_name}" before proceeding.',
        ))

    for constraint in _unmet(graph, status_map, phase_id, DependencyKind.SOFT):
        required_name = graph.phase_name(constraint.requires_phase_id)
        result.add_warning(Issue(
            kind=IssueKind.SOFT_DEPENDENCY_UNMET,
            message=f'"{required_name}" is typically completed before "{phase.name}"',
            phase_id=phase_id,
            required_phase_id=constraint.requires_phase_id,
            required_phase_name=required_name,
            reason=constraint.reason,
            suggestion=constraint.reason,
            can_override=constraint.can_override,
        ))

    return result


def validate_task_completion(
    trade_code: str,
    states: StateSource,
    template: PhaseSource,
) -> ValidationResult:
    """
    Validate completing a task by the phase its trade code belongs to.

    The first phase listing ``trade_code`` is checked; a task whose trade
    belongs to no phase is always valid.
    """
    for phase in _in_scope(template, build_status_map(states)):
        if trade_code in phase.trade_codes:
            return validate_phase_completion(phase.id, states, template)
    return ValidationResult()


# =============================================================================
# REORDER
# =============================================================================

def phase_order_ids(new_order: Sequence[Union[PhaseDefinition, ProjectPhaseState, str]]) -> List[str]:
    if new_order is None:
        raise TypeError("new_order must not be None")
    ids = []
    for item in new_order:
        if isinstance(item, PhaseDefinition):
            ids.append(item.id)
        elif isinstance(item, ProjectPhaseState):
            ids.append(item.phase_id)
        elif isinstance(item, str):
            ids.append(item)
        else:
            raise TypeError(f"Unsupported reorder entry: {item!r}")
    return ids


def validate_phase_reorder(
    new_order: Sequence[Union[PhaseDefinition, str]],
    template: PhaseSource,
) -> ValidationResult:
    """
    Check a proposed full re-sequencing against the dependency graph.

    Structural only: statuses are not consulted, so a complete phase is
    not exempt from ordering. Any hard violation rejects the whole
    reorder; soft violations are warnings. Prerequisites absent from the
    proposed order (removed by scoping) are skipped.
    """
    phase_list = _phase_list(template)
    by_id = {p.id: p for p in phase_list}
    ids = phase_order_ids(new_order)
    result = ValidationResult()

    positions: Dict[str, int] = {}
    for index, phase_id in enumerate(ids):
        if phase_id in positions:
            result.add_error(Issue(
                kind=IssueKind.DUPLICATE_PHASE,
                message=f'Phase "{phase_id}" appears more than once in the proposed order',
                phase_id=phase_id,
            ))
            continue
        positions[phase_id] = index
        if phase_id not in by_id:
            result.add_error(Issue(
                kind=IssueKind.UNKNOWN_PHASE,
                message=f'Phase "{phase_id}" not found in template',
                phase_id=phase_id,
                suggestion="Ensure the phase exists in the selected template",
            ))

    for phase_id, position in positions.items():
        phase = by_id.get(phase_id)
        if phase is None:
            continue

        for constraint in phase.dependencies:
            required_position = positions.get(constraint.requires_phase_id)
            if required_position is None or required_position < position:
                continue

            required = by_id.get(constraint.requires_phase_id)
            required_name = required.name if required else constraint.requires_phase_id

            if constraint.kind == DependencyKind.HARD:
                result.add_error(Issue(
                    kind=IssueKind.HARD_ORDER_VIOLATION,
                    message=f'"{phase.name}" cannot come before "{required_name}"',
                    phase_id=phase_id,
                    required_phase_id=constraint.requires_phase_id,
                    required_phase_name=required_name,
                    reason=constraint.reason,
                    suggestion=constraint.reason,
                ))
            else:
                result.add_warning(Issue(
                    kind=IssueKind.SOFT_ORDER_VIOLATION,
                    message=f'"{required_name}" is typically done before "{phase.name}"',
                    phase_id=phase_id,
                    required_phase_id=constraint.requires_phase_id,
                    required_phase_name=required_name,
                    reason=constraint.reason,
                    suggestion=constraint.reason,
                    can_override=constraint.can_override,
                ))

    if not result.valid:
        logger.debug(f"Reorder rejected with {len(result.errors)} error(s)")
    return result


# =============================================================================
# GRAPH UTILITIES
# =============================================================================

def get_dependent_phases(phase_id: str, template: PhaseSource) -> List[str]:
    """All phases that depend on ``phase_id``, directly or transitively."""
    graph = PhaseDependencyGraph(_phase_list(template))
    dependents = graph.all_dependents(phase_id)
    return [pid for pid in graph.phase_ids() if pid in dependents]


def get_prerequisite_phases(phase_id: str, template: PhaseSource) -> List[str]:
    """All phases ``phase_id`` depends on, directly or transitively."""
    graph = PhaseDependencyGraph(_phase_list(template))
    prerequisites = graph.all_prerequisites(phase_id)
    return [pid for pid in graph.phase_ids() if pid in prerequisites]


def build_dependency_graph(template: PhaseSource) -> Dict[str, Any]:
    """Renderable nodes/edges structure for a template or phase list."""
    return PhaseDependencyGraph(_phase_list(template)).to_dict()
