"""
phaseflow Core Dataclasses

Value types for phases, templates, building configuration and per-project
phase state. Definitions and templates are immutable; ProjectPhaseState is
the only mutable record and is owned by the StateTracker.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from phaseflow.core.enums import (
    DependencyKind,
    PhaseCategory,
    PhaseStatus,
    ScopeConditionType,
    ScopeType,
)


def _as_tuple(values: Optional[Iterable[Any]]) -> Tuple[Any, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(values)


def _as_frozenset(values: Optional[Iterable[Any]]) -> FrozenSet[Any]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        return frozenset([values])
    return frozenset(values)


# ==================== Dependency Constraint ====================

@dataclass(frozen=True)
class DependencyConstraint:
    """A single prerequisite declared by a phase."""
    requires_phase_id: str
    kind: DependencyKind = DependencyKind.HARD
    reason: str = ""
    can_override: bool = True

    def __post_init__(self):
        object.__setattr__(self, "kind", DependencyKind(self.kind))
        # Hard constraints are never overridable, whatever the data says
        if self.kind == DependencyKind.HARD:
            object.__setattr__(self, "can_override", False)

    @property
    def is_hard(self) -> bool:
        return self.kind == DependencyKind.HARD

    def to_dict(self) -> Dict[str, Any]:
        return {
            "requires_phase_id": self.requires_phase_id,
            "kind": self.kind.value,
            "reason": self.reason,
            "can_override": self.can_override,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DependencyConstraint":
        return cls(
            requires_phase_id=data["requires_phase_id"],
            kind=DependencyKind(data.get("kind", "hard")),
            reason=data.get("reason", ""),
            can_override=data.get("can_override", True),
        )


# ==================== Location Scope ====================

@dataclass(frozen=True)
class LocationScope:
    """
    The part of a building a phase applies to.

    ``values`` holds floor names, room types or zone names depending on
    ``type``; it is empty for ScopeType.ALL.
    """
    type: ScopeType = ScopeType.ALL
    values: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "type", ScopeType(self.type))
        object.__setattr__(self, "values", _as_tuple(self.values))

    @classmethod
    def everywhere(cls) -> "LocationScope":
        return cls(ScopeType.ALL)

    @classmethod
    def floors(cls, *floors: str) -> "LocationScope":
        return cls(ScopeType.FLOORS, floors)

    @classmethod
    def rooms(cls, *room_types: str) -> "LocationScope":
        return cls(ScopeType.ROOMS, room_types)

    @classmethod
    def zones(cls, *zones: str) -> "LocationScope":
        return cls(ScopeType.ZONES, zones)

    def to_dict(self) -> Dict[str, Any]:
        if self.type == ScopeType.ALL:
            return {"type": "all"}
        key = "roomTypes" if self.type == ScopeType.ROOMS else self.type.value
        return {"type": self.type.value, key: list(self.values)}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LocationScope":
        if not data:
            return cls.everywhere()
        scope_type = ScopeType(data.get("type", "all"))
        if scope_type == ScopeType.ALL:
            return cls.everywhere()
        if scope_type == ScopeType.ROOMS:
            values = data.get("roomTypes", data.get("room_types", data.get("rooms", ())))
        else:
            values = data.get(scope_type.value, ())
        return cls(scope_type, values)


# ==================== Scope Rule ====================

@dataclass(frozen=True)
class ScopeRule:
    """
    Template-level pruning rule: when the condition holds for a project,
    the listed phases are removed.
    """
    condition: ScopeConditionType
    value: str
    remove_phase_ids: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "condition", ScopeConditionType(self.condition))
        object.__setattr__(self, "remove_phase_ids", _as_tuple(self.remove_phase_ids))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "condition": {"type": self.condition.value, "value": self.value},
            "action": {"type": "remove_phase", "phaseIds": list(self.remove_phase_ids)},
        }


# ==================== Phase Definition ====================

@dataclass(frozen=True)
class PhaseDefinition:
    """Immutable definition of a construction phase."""
    id: str
    name: str
    short_name: str = ""
    category: PhaseCategory = PhaseCategory.OTHER
    trade_codes: FrozenSet[str] = frozenset()
    dependencies: Tuple[DependencyConstraint, ...] = ()
    location_scope: LocationScope = field(default_factory=LocationScope.everywhere)
    description: str = ""
    default_order: int = 0

    def __post_init__(self):
        object.__setattr__(self, "category", PhaseCategory(self.category))
        object.__setattr__(self, "trade_codes", _as_frozenset(self.trade_codes))
        object.__setattr__(self, "dependencies", _as_tuple(self.dependencies))

    @property
    def hard_dependencies(self) -> List[DependencyConstraint]:
        return [d for d in self.dependencies if d.kind == DependencyKind.HARD]

    @property
    def soft_dependencies(self) -> List[DependencyConstraint]:
        return [d for d in self.dependencies if d.kind == DependencyKind.SOFT]

    def dependency_ids(self) -> List[str]:
        return [d.requires_phase_id for d in self.dependencies]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "short_name": self.short_name,
            "category": self.category.value,
            "trade_codes": sorted(self.trade_codes),
            "dependencies": [d.to_dict() for d in self.dependencies],
            "location_scope": self.location_scope.to_dict(),
            "description": self.description,
            "default_order": self.default_order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhaseDefinition":
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            short_name=data.get("short_name", ""),
            category=PhaseCategory(data.get("category", "other")),
            trade_codes=data.get("trade_codes", ()),
            dependencies=[DependencyConstraint.from_dict(d) for d in data.get("dependencies", [])],
            location_scope=LocationScope.from_dict(data.get("location_scope")),
            description=data.get("description", ""),
            default_order=data.get("default_order", 0),
        )


# ==================== Phase Template ====================

@dataclass(frozen=True)
class PhaseTemplate:
    """
    A named, ordered collection of phases.

    The phase order is the default legal order only; legality is decided
    by the dependency constraints.
    """
    id: str
    name: str
    description: str = ""
    project_types: FrozenSet[str] = frozenset()
    phases: Tuple[PhaseDefinition, ...] = ()
    is_system: bool = False
    scope_rules: Tuple[ScopeRule, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "project_types", _as_frozenset(self.project_types))
        object.__setattr__(self, "phases", _as_tuple(self.phases))
        object.__setattr__(self, "scope_rules", _as_tuple(self.scope_rules))

    def phase_ids(self) -> List[str]:
        return [p.id for p in self.phases]

    def get_phase(self, phase_id: str) -> Optional[PhaseDefinition]:
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        return None

    def applies_to(self, project_type: str) -> bool:
        return project_type in self.project_types

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "project_types": sorted(self.project_types),
            "phases": [p.to_dict() for p in self.phases],
            "is_system": self.is_system,
            "scope_rules": [r.to_dict() for r in self.scope_rules],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PhaseTemplate":
        rules = []
        for rule in data.get("scope_rules", []):
            condition = rule.get("condition", {})
            action = rule.get("action", {})
            rules.append(ScopeRule(
                condition=ScopeConditionType(condition["type"]),
                value=condition.get("value", ""),
                remove_phase_ids=action.get("phaseIds", action.get("phase_ids", ())),
            ))
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            description=data.get("description", ""),
            project_types=data.get("project_types", ()),
            phases=[PhaseDefinition.from_dict(p) for p in data.get("phases", [])],
            is_system=data.get("is_system", False),
            scope_rules=rules,
        )


# ==================== Project Configuration ====================

@dataclass(frozen=True)
class ProjectConfig:
    """Physical configuration of the building a template is applied to."""
    storeys: int = 1
    has_basement: bool = False
    rooms: FrozenSet[str] = frozenset()
    zones: FrozenSet[str] = frozenset()

    def __post_init__(self):
        if self.storeys < 0:
            raise ValueError(f"storeys must be non-negative, got {self.storeys}")
        object.__setattr__(self, "rooms", _as_frozenset(self.rooms))
        object.__setattr__(self, "zones", _as_frozenset(self.zones))

    def levels(self) -> Tuple[str, ...]:
        """
        Level names present in the building, bottom up.

        basement (if any), main, upper, upper_2, upper_3, ...
        """
        levels = []
        if self.has_basement:
            levels.append("basement")
        if self.storeys >= 1:
            levels.append("main")
        if self.storeys >= 2:
            levels.append("upper")
        for storey in range(3, self.storeys + 1):
            levels.append(f"upper_{storey - 1}")
        return tuple(levels)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "storeys": self.storeys,
            "has_basement": self.has_basement,
            "rooms": sorted(self.rooms),
            "zones": sorted(self.zones),
        }

    @classmethod
    def from_intake(cls, intake_data: Optional[Dict[str, Any]]) -> "ProjectConfig":
        """Build a config from project intake data (layout/renovation/features)."""
        intake_data = intake_data or {}
        layout = intake_data.get("layout") or {}
        renovation = intake_data.get("renovation") or {}
        features = intake_data.get("features") or {}

        basement_type = layout.get("basement_type")
        has_basement = bool(layout.get("has_basement")) or (
            basement_type is not None and basement_type != "none"
        )

        return cls(
            storeys=int(layout.get("storeys") or 1),
            has_basement=has_basement,
            rooms=renovation.get("selected_rooms") or (),
            zones=[name for name, enabled in features.items() if enabled],
        )


@dataclass(frozen=True)
class ProjectAttributes:
    """
    Project attributes handed to the template suggester.

    Only ``project_type`` drives the suggestion. ``rooms``, ``storeys`` and
    ``has_basement`` travel with it so a caller choosing a template by hand
    or building the matching ProjectConfig has them in one place.
    """
    project_type: Optional[str] = None
    rooms: FrozenSet[str] = frozenset()
    storeys: Optional[int] = None
    has_basement: bool = False

    def __post_init__(self):
        object.__setattr__(self, "rooms", _as_frozenset(self.rooms))

    @classmethod
    def from_intake(cls, project: Dict[str, Any]) -> "ProjectAttributes":
        intake_data = project.get("intake_data") or {}
        config = ProjectConfig.from_intake(intake_data)
        return cls(
            project_type=project.get("intake_type"),
            rooms=config.rooms,
            storeys=config.storeys,
            has_basement=config.has_basement,
        )


# ==================== Project Phase State ====================

@dataclass
class ProjectPhaseState:
    """
    Stored state of one phase within one project.

    Blocked is never stored here; see validation.engine.get_blocked_phases.
    """
    phase_id: str
    status: PhaseStatus = PhaseStatus.PENDING
    order: int = 0

    def __post_init__(self):
        self.status = PhaseStatus.parse(self.status)

    @property
    def is_complete(self) -> bool:
        return self.status == PhaseStatus.COMPLETE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase_id": self.phase_id,
            "status": self.status.value,
            "order": self.order,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectPhaseState":
        return cls(
            phase_id=data.get("phase_id", data.get("id")),
            status=PhaseStatus.parse(data.get("status")),
            order=data.get("order", 0),
        )
