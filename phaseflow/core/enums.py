"""
phaseflow Core Enumerations

All enumeration types used throughout the sequencing engine.
"""

from enum import Enum
from typing import Optional


class PhaseCategory(str, Enum):
    """
    Trade grouping for a phase. Used for display and filtering only,
    never for dependency inference.
    """
    FOUNDATION = "foundation"
    STRUCTURAL = "structural"
    ENVELOPE = "envelope"
    PLUMBING = "plumbing"
    HVAC = "hvac"
    ELECTRICAL = "electrical"
    INSULATION = "insulation"
    DRYWALL = "drywall"
    PAINT = "paint"
    FLOORING = "flooring"
    TRIM = "trim"
    CABINETS = "cabinets"
    EXTERIOR = "exterior"
    PUNCHOUT = "punchout"
    OTHER = "other"


CATEGORY_LABELS = {
    PhaseCategory.FOUNDATION: "Foundation",
    PhaseCategory.STRUCTURAL: "Structural / Framing",
    PhaseCategory.ENVELOPE: "Envelope",
    PhaseCategory.PLUMBING: "Plumbing",
    PhaseCategory.HVAC: "HVAC",
    PhaseCategory.ELECTRICAL: "Electrical",
    PhaseCategory.INSULATION: "Insulation",
    PhaseCategory.DRYWALL: "Drywall",
    PhaseCategory.PAINT: "Paint",
    PhaseCategory.FLOORING: "Flooring",
    PhaseCategory.TRIM: "Trim / Millwork",
    PhaseCategory.CABINETS: "Cabinets / Fixtures",
    PhaseCategory.EXTERIOR: "Exterior",
    PhaseCategory.PUNCHOUT: "Punch-out / Final",
    PhaseCategory.OTHER: "Other",
}


class DependencyKind(str, Enum):
    """
    Strength of a dependency constraint.

    HARD constraints are structural or code requirements and are never
    overridable. SOFT constraints are best practice and may be violated
    with an explicit, recorded override.
    """
    HARD = "hard"
    SOFT = "soft"


class PhaseStatus(str, Enum):
    """
    Stored status of a phase within a project.

    There is no BLOCKED member: blocked is always derived
    from the dependency graph and the current statuses.
    """
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"

    @classmethod
    def parse(cls, value: Optional[str]) -> "PhaseStatus":
        """
        Parse an external status string.

        Accepts "completed" as an alias of "complete". A missing value and
        a legacy stored "blocked" both read as pending, since blocked is
        derived.
        """
        if value is None or value == "":
            return cls.PENDING
        if isinstance(value, cls):
            return value
        normalized = str(value).strip().lower()
        if normalized == "completed":
            return cls.COMPLETE
        if normalized == "blocked":
            return cls.PENDING
        return cls(normalized)


class ScopeType(str, Enum):
    """Location scope of a phase."""
    ALL = "all"
    FLOORS = "floors"
    ROOMS = "rooms"
    ZONES = "zones"


class IssueKind(str, Enum):
    """
    Validation issue taxonomy.

    CYCLIC_DEPENDENCY is listed for completeness; it is only ever raised
    at template registration, never returned from a validation call.
    """
    UNKNOWN_PHASE = "unknown_phase"
    DUPLICATE_PHASE = "duplicate_phase"
    MISSING_PHASE = "missing_phase"
    HARD_DEPENDENCY_UNMET = "hard_dependency_unmet"
    SOFT_DEPENDENCY_UNMET = "soft_dependency_unmet"
    HARD_ORDER_VIOLATION = "hard_order_violation"
    SOFT_ORDER_VIOLATION = "soft_order_violation"
    CYCLIC_DEPENDENCY = "cyclic_dependency"


class ScopeConditionType(str, Enum):
    """Condition kinds for template scope rules."""
    BUILDING_HAS = "building_has"
    SCOPE_INCLUDES = "scope_includes"
    SCOPE_EXCLUDES = "scope_excludes"
