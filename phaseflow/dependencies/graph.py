"""
phaseflow Dependency Graph

Directed graph of phase prerequisites, built per call from an in-scope
phase list. Edges run prerequisite -> dependent.

Constraints pointing at phases outside the phase set are dropped from the
graph and recorded in ``out_of_scope``: an excluded phase can never be
completed, so it must never block a phase that is in scope.
"""

from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple
import logging

import networkx as nx

from phaseflow.core.dataclasses import DependencyConstraint, PhaseDefinition, PhaseTemplate
from phaseflow.core.enums import CATEGORY_LABELS, DependencyKind
from phaseflow.core.exceptions import TemplateIntegrityError

logger = logging.getLogger(__name__)


# =============================================================================
# EXCEPTIONS
# =============================================================================

class CyclicDependencyError(TemplateIntegrityError):
    """Raised when phase dependencies form a cycle (including a self-loop)."""

    def __init__(self, cycle: List[str], template_id: Optional[str] = None):
        self.cycle = cycle
        super().__init__(f"Cyclic dependency detected: {' -> '.join(cycle)}", template_id)


# =============================================================================
# DEPENDENCY GRAPH
# =============================================================================

class PhaseDependencyGraph:
    """
    In-memory view of a phase set's dependency constraints.

    Node attributes: ``phase`` (PhaseDefinition), ``position`` (index in
    the source sequence). Edge attributes: ``constraints`` (list of
    DependencyConstraint declared by the dependent on the prerequisite).
    """

    def __init__(self, phases: Sequence[PhaseDefinition]):
        self._graph = nx.DiGraph()
        self.out_of_scope: List[Tuple[str, DependencyConstraint]] = []

        for position, phase in enumerate(phases):
            self._graph.add_node(phase.id, phase=phase, position=position)

        for phase in phases:
            for constraint in phase.dependencies:
                prerequisite = constraint.requires_phase_id
                if prerequisite not in self._graph:
                    self.out_of_scope.append((phase.id, constraint))
                    continue
                if self._graph.has_edge(prerequisite, phase.id):
                    self._graph.edges[prerequisite, phase.id]["constraints"].append(constraint)
                else:
                    self._graph.add_edge(prerequisite, phase.id, constraints=[constraint])

        logger.debug(
            f"Dependency graph built: {self._graph.number_of_nodes()} phases, "
            f"{self._graph.number_of_edges()} edges, {len(self.out_of_scope)} out of scope"
        )

    @classmethod
    def from_template(cls, template: PhaseTemplate) -> "PhaseDependencyGraph":
        """Build the graph over every phase of a template."""
        return cls(template.phases)

    # ==================== Node Access ====================

    def __contains__(self, phase_id: object) -> bool:
        return phase_id in self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    @property
    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def get_phase(self, phase_id: str) -> Optional[PhaseDefinition]:
        if phase_id not in self._graph:
            return None
        return self._graph.nodes[phase_id]["phase"]

    def phase_name(self, phase_id: str) -> str:
        """Display name for a phase, falling back to its id."""
        phase = self.get_phase(phase_id)
        return phase.name if phase else phase_id

    def phase_ids(self) -> List[str]:
        return sorted(self._graph.nodes, key=self._position)

    def _position(self, phase_id: str) -> int:
        return self._graph.nodes[phase_id]["position"]

    # ==================== Dependency Queries ====================

    def constraints_for(
        self,
        phase_id: str,
        kind: Optional[DependencyKind] = None,
    ) -> List[DependencyConstraint]:
        """
        In-scope constraints declared by a phase, in declaration order.
        """
        phase = self.get_phase(phase_id)
        if phase is None:
            return []
        return [
            c for c in phase.dependencies
            if c.requires_phase_id in self._graph
            and (kind is None or c.kind == kind)
        ]

    def dependencies_of(self, phase_id: str, kind: Optional[DependencyKind] = None) -> List[str]:
        """Direct in-scope prerequisites of a phase."""
        seen: List[str] = []
        for constraint in self.constraints_for(phase_id, kind):
            if constraint.requires_phase_id not in seen:
                seen.append(constraint.requires_phase_id)
        return seen

    def dependents_of(self, phase_id: str) -> List[str]:
        """Direct dependents of a phase, in sequence order."""
        if phase_id not in self._graph:
            return []
        return sorted(self._graph.successors(phase_id), key=self._position)

    def all_prerequisites(self, phase_id: str) -> Set[str]:
        """Transitive prerequisites (hard and soft)."""
        if phase_id not in self._graph:
            return set()
        return set(nx.ancestors(self._graph, phase_id))

    def all_dependents(self, phase_id: str) -> Set[str]:
        """Transitive dependents (hard and soft)."""
        if phase_id not in self._graph:
            return set()
        return set(nx.descendants(self._graph, phase_id))

    # ==================== Structure ====================

    def find_cycle(self) -> Optional[List[str]]:
        """
        Return one cycle as a closed path ``[a, b, ..., a]``, or None.
        """
        try:
            edges = nx.find_cycle(self._graph, orientation="original")
        except nx.NetworkXNoCycle:
            return None
        path = [edges[0][0]] + [edge[1] for edge in edges]
        return path

    def is_acyclic(self) -> bool:
        return nx.is_directed_acyclic_graph(self._graph)

    def topological_order(self) -> List[str]:
        """
        Dependencies-first order, preferring sequence order among phases
        that are ready at the same time.
        """
        return list(nx.lexicographical_topological_sort(self._graph, key=self._position))

    def to_dict(self) -> Dict[str, Any]:
        """Node/edge structure for rendering the graph."""
        nodes = []
        for phase_id in self.phase_ids():
            phase = self.get_phase(phase_id)
            nodes.append({
                "id": phase.id,
                "name": phase.name,
                "short_name": phase.short_name,
                "category": phase.category.value,
                "category_label": CATEGORY_LABELS.get(phase.category, phase.category.value),
                "order": self._position(phase_id),
            })

        edges = []
        for phase_id in self.phase_ids():
            for constraint in self.constraints_for(phase_id):
                edges.append({
                    "from": constraint.requires_phase_id,
                    "to": phase_id,
                    "kind": constraint.kind.value,
                    "reason": constraint.reason,
                })

        return {"nodes": nodes, "edges": edges}


# =============================================================================
# INTEGRITY CHECK
# =============================================================================

def check_acyclic(phases: Iterable[PhaseDefinition], template_id: Optional[str] = None) -> None:
    """
    Raise CyclicDependencyError if the constraints among ``phases`` form
    a cycle. Self-loops are reported as ``[a, a]``.
    """
    phases = list(phases)
    for phase in phases:
        if phase.id in phase.dependency_ids():
            raise CyclicDependencyError([phase.id, phase.id], template_id)

    cycle = PhaseDependencyGraph(phases).find_cycle()
    if cycle:
        raise CyclicDependencyError(cycle, template_id)
