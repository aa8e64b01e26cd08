"""
phaseflow Validation Taxonomy

Result types returned by the validation engine. Domain rule violations are
values of these types, never exceptions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from phaseflow.core.dataclasses import DependencyConstraint
from phaseflow.core.enums import IssueKind


# =============================================================================
# ISSUE
# =============================================================================

ERROR_KINDS = frozenset({
    IssueKind.UNKNOWN_PHASE,
    IssueKind.DUPLICATE_PHASE,
    IssueKind.MISSING_PHASE,
    IssueKind.HARD_DEPENDENCY_UNMET,
    IssueKind.HARD_ORDER_VIOLATION,
    IssueKind.CYCLIC_DEPENDENCY,
})

WARNING_KINDS = frozenset({
    IssueKind.SOFT_DEPENDENCY_UNMET,
    IssueKind.SOFT_ORDER_VIOLATION,
})


@dataclass(frozen=True)
class Issue:
    """A single validation error or warning."""
    kind: IssueKind
    message: str
    phase_id: Optional[str] = None
    required_phase_id: Optional[str] = None
    required_phase_name: Optional[str] = None
    reason: str = ""
    suggestion: str = ""
    can_override: bool = False

    @property
    def is_error(self) -> bool:
        return self.kind in ERROR_KINDS

    @property
    def key(self) -> tuple:
        """Identity used when matching overrides against warnings."""
        return (self.kind.value, self.phase_id, self.required_phase_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "phase_id": self.phase_id,
            "required_phase_id": self.required_phase_id,
            "required_phase_name": self.required_phase_name,
            "reason": self.reason,
            "suggestion": self.suggestion,
            "can_override": self.can_override,
        }


# =============================================================================
# VALIDATION RESULT
# =============================================================================

@dataclass
class ValidationResult:
    """
    Outcome of a completion or reorder check.

    ``valid`` is False only when there are errors. Warnings never make a
    result invalid; they require an explicit override before the caller
    commits.
    """
    valid: bool = True
    errors: List[Issue] = field(default_factory=list)
    warnings: List[Issue] = field(default_factory=list)

    def add_error(self, issue: Issue) -> None:
        self.errors.append(issue)
        self.valid = False

    def add_warning(self, issue: Issue) -> None:
        self.warnings.append(issue)

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def requires_override(self) -> bool:
        """Valid, but only committable with an override of the warnings."""
        return self.valid and self.has_warnings

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        return ValidationResult(
            valid=self.valid and other.valid,
            errors=self.errors + other.errors,
            warnings=self.warnings + other.warnings,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
        }


# =============================================================================
# BLOCKING DEPENDENCY
# =============================================================================

@dataclass(frozen=True)
class BlockingDependency:
    """An unsatisfied hard constraint, annotated for display."""
    constraint: DependencyConstraint
    required_phase_name: str

    @property
    def required_phase_id(self) -> str:
        return self.constraint.requires_phase_id

    @property
    def reason(self) -> str:
        return self.constraint.reason

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase_id": self.required_phase_id,
            "phase_name": self.required_phase_name,
            "reason": self.reason,
        }
