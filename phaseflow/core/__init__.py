"""
phaseflow core data model.
"""

from .enums import (
    CATEGORY_LABELS,
    DependencyKind,
    IssueKind,
    PhaseCategory,
    PhaseStatus,
    ScopeConditionType,
    ScopeType,
)
from .dataclasses import (
    DependencyConstraint,
    LocationScope,
    PhaseDefinition,
    PhaseTemplate,
    ProjectAttributes,
    ProjectConfig,
    ProjectPhaseState,
    ScopeRule,
)
from .exceptions import (
    PhaseflowError,
    TemplateIntegrityError,
    TemplateNotFoundError,
)

__all__ = [
    # Enums
    "CATEGORY_LABELS",
    "DependencyKind",
    "IssueKind",
    "PhaseCategory",
    "PhaseStatus",
    "ScopeConditionType",
    "ScopeType",
    # Dataclasses
    "DependencyConstraint",
    "LocationScope",
    "PhaseDefinition",
    "PhaseTemplate",
    "ProjectAttributes",
    "ProjectConfig",
    "ProjectPhaseState",
    "ScopeRule",
    # Exceptions
    "PhaseflowError",
    "TemplateIntegrityError",
    "TemplateNotFoundError",
]
