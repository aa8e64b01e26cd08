"""
phaseflow Dependency Graph

Provides:
- PhaseDependencyGraph: DAG of phase prerequisites
- check_acyclic: load-time cycle detection
"""

from .graph import (
    CyclicDependencyError,
    PhaseDependencyGraph,
    check_acyclic,
)

__all__ = [
    "CyclicDependencyError",
    "PhaseDependencyGraph",
    "check_acyclic",
]
