"""
phaseflow Template Suggester

Deterministic first-match over the registry's priority order. The
suggestion is advisory; applying a template is a separate step
(registry lookup plus scope filter).
"""

from __future__ import annotations
from typing import Optional
import logging

from phaseflow.catalog.registry import TemplateRegistry, default_registry
from phaseflow.core.dataclasses import PhaseTemplate, ProjectAttributes

logger = logging.getLogger(__name__)

# Priority order of the built-in templates (registration order)
SUGGESTION_ORDER = (
    "new_construction_multi_storey",
    "kitchen_renovation",
    "bathroom_renovation",
    "basement_finish",
    "deck_exterior",
)


def suggest_template(
    attributes: ProjectAttributes,
    registry: Optional[TemplateRegistry] = None,
) -> Optional[PhaseTemplate]:
    """
    First template in registry order whose project types include the
    project's type, or None.
    """
    if attributes is None:
        raise TypeError("attributes must not be None")

    project_type = attributes.project_type
    if not project_type:
        return None

    registry = registry if registry is not None else default_registry()
    for template in registry.list_templates():
        if template.applies_to(project_type):
            logger.debug(f"Suggested template '{template.id}' for project type '{project_type}'")
            return template

    logger.debug(f"No template matches project type '{project_type}'")
    return None
