"""
phaseflow Scope Filter
"""

from .filter import (
    apply_scope,
    create_project_phases,
    phase_in_scope,
    rule_applies,
)

__all__ = [
    "apply_scope",
    "create_project_phases",
    "phase_in_scope",
    "rule_applies",
]
