"""
phaseflow Validation Engine

Provides:
- get_blocked_phases / get_ready_phases: derived phase state
- validate_phase_completion / validate_phase_reorder: accept/reject decisions
- Issue / ValidationResult: structured results
- OverrideRecord: audit trail for overridden warnings
"""

from .taxonomy import (
    ERROR_KINDS,
    WARNING_KINDS,
    BlockingDependency,
    Issue,
    ValidationResult,
)
from .engine import (
    build_dependency_graph,
    build_status_map,
    phase_order_ids,
    get_blocked_phases,
    get_dependent_phases,
    get_prerequisite_phases,
    get_ready_phases,
    validate_phase_completion,
    validate_phase_reorder,
    validate_task_completion,
)
from .overrides import (
    OverrideRecord,
    create_override_record,
)

__all__ = [
    # Taxonomy
    "ERROR_KINDS",
    "WARNING_KINDS",
    "BlockingDependency",
    "Issue",
    "ValidationResult",
    # Engine
    "build_dependency_graph",
    "build_status_map",
    "phase_order_ids",
    "get_blocked_phases",
    "get_dependent_phases",
    "get_prerequisite_phases",
    "get_ready_phases",
    "validate_phase_completion",
    "validate_phase_reorder",
    "validate_task_completion",
    # Overrides
    "OverrideRecord",
    "create_override_record",
]
