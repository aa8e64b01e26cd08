"""
phaseflow Template Registry

Holds phase templates by id and enforces load-time integrity: duplicate
phase ids, self-loops and dependency cycles are rejected when a template
is registered, so nothing downstream ever sees a malformed template.
"""

from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union
import json
import logging
import os

from phaseflow.core.dataclasses import PhaseTemplate
from phaseflow.core.exceptions import TemplateIntegrityError, TemplateNotFoundError
from phaseflow.dependencies.graph import PhaseDependencyGraph, check_acyclic
from .builtin import get_builtin_templates
from .schema import parse_template_document

logger = logging.getLogger(__name__)


class TemplateRegistry:
    """
    Ordered collection of validated templates.

    Registration order is significant: it is the priority order used by
    the template suggester.
    """

    def __init__(
        self,
        templates: Optional[Iterable[PhaseTemplate]] = None,
        strict_references: bool = False,
    ):
        self._templates: Dict[str, PhaseTemplate] = {}
        self.strict_references = strict_references
        for template in templates or ():
            self.register(template)

    @classmethod
    def with_builtins(cls, strict_references: bool = False) -> "TemplateRegistry":
        """Registry seeded with the built-in system templates."""
        return cls(get_builtin_templates(), strict_references=strict_references)

    # ==================== Registration ====================

    def register(self, template: PhaseTemplate, replace: bool = False) -> PhaseTemplate:
        """
        Validate and register a template.

        Raises:
            TemplateIntegrityError: duplicate template or phase id, or a
                dangling reference when strict_references is set
            CyclicDependencyError: dependencies form a cycle
        """
        if not isinstance(template, PhaseTemplate):
            raise TypeError(f"Expected PhaseTemplate, got {type(template).__name__}")

        if template.id in self._templates and not replace:
            raise TemplateIntegrityError("template id already registered", template.id)

        self._check_phase_ids(template)
        check_acyclic(template.phases, template.id)
        self._check_references(template)

        self._templates[template.id] = template

        graph = PhaseDependencyGraph.from_template(template)
        logger.info(
            f"Registered template '{template.id}': {len(graph)} phases, "
            f"{graph.edge_count} dependency edges"
        )
        return template

    def _check_phase_ids(self, template: PhaseTemplate) -> None:
        seen = set()
        for phase in template.phases:
            if phase.id in seen:
                raise TemplateIntegrityError(f"duplicate phase id '{phase.id}'", template.id)
            seen.add(phase.id)

    def _check_references(self, template: PhaseTemplate) -> None:
        known = set(template.phase_ids())
        for phase in template.phases:
            for constraint in phase.dependencies:
                if constraint.requires_phase_id in known:
                    continue
                message = (
                    f"phase '{phase.id}' depends on undefined phase "
                    f"'{constraint.requires_phase_id}'"
                )
                if self.strict_references:
                    raise TemplateIntegrityError(message, template.id)
                logger.warning(f"Template '{template.id}': {message}; treated as satisfied")

    def unregister(self, template_id: str) -> PhaseTemplate:
        if template_id not in self._templates:
            raise TemplateNotFoundError(template_id, self.template_ids())
        return self._templates.pop(template_id)

    # ==================== Loading ====================

    def load_documents(self, documents: Iterable[Dict[str, Any]]) -> List[PhaseTemplate]:
        """Parse and register template documents (JSON-shaped dicts)."""
        loaded = []
        for document in documents:
            loaded.append(self.register(parse_template_document(document)))
        return loaded

    def load_file(self, path: Union[str, Path]) -> List[PhaseTemplate]:
        """
        Load templates from a JSON file.

        The file holds either a single template document, a list of them,
        or an object with a ``templates`` list.
        """
        path = Path(path)
        with open(path) as f:
            data = json.load(f)

        if isinstance(data, dict) and "templates" in data:
            data = data["templates"]
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            raise TemplateIntegrityError(f"Unsupported template file layout: {path}")

        loaded = self.load_documents(data)
        logger.info(f"Loaded {len(loaded)} template(s) from {path}")
        return loaded

    # ==================== Lookup ====================

    def get_template(self, template_id: str) -> PhaseTemplate:
        """
        Raises:
            TemplateNotFoundError: if no template has this id
        """
        try:
            return self._templates[template_id]
        except KeyError:
            raise TemplateNotFoundError(template_id, self.template_ids()) from None

    def find_template(self, template_id: str) -> Optional[PhaseTemplate]:
        return self._templates.get(template_id)

    def list_templates(self) -> List[PhaseTemplate]:
        """All templates, in registration order."""
        return list(self._templates.values())

    def template_ids(self) -> List[str]:
        return list(self._templates.keys())

    def templates_for_project_type(self, project_type: str) -> List[PhaseTemplate]:
        return [t for t in self._templates.values() if t.applies_to(project_type)]

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self):
        return iter(self.list_templates())


# =============================================================================
# DEFAULT REGISTRY
# =============================================================================

_default_registry: Optional[TemplateRegistry] = None


def _env_template_paths() -> List[str]:
    raw = os.getenv("PHASEFLOW_TEMPLATE_PATHS", "")
    return [p for p in raw.split(os.pathsep) if p.strip()]


def build_registry(
    template_paths: Optional[Iterable[str]] = None,
    include_builtins: bool = True,
    strict_references: bool = False,
) -> TemplateRegistry:
    """Build a registry from built-ins plus any template files."""
    registry = (
        TemplateRegistry.with_builtins(strict_references)
        if include_builtins
        else TemplateRegistry(strict_references=strict_references)
    )
    for path in template_paths or ():
        registry.load_file(path)
    return registry


def default_registry() -> TemplateRegistry:
    """Get or create the process-wide registry."""
    global _default_registry
    if _default_registry is None:
        _default_registry = build_registry(_env_template_paths())
    return _default_registry


def reset_default_registry() -> None:
    global _default_registry
    _default_registry = None
