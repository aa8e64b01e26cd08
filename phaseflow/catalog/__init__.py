"""
phaseflow Template Catalog

Provides:
- TemplateRegistry: validated, ordered template storage
- get_builtin_templates: the system templates
- parse_template_document: JSON template documents
"""

from .builtin import (
    BUILTIN_TEMPLATES,
    get_builtin_template,
    get_builtin_templates,
)
from .schema import (
    TemplateDocument,
    parse_template_document,
)
from .registry import (
    TemplateRegistry,
    build_registry,
    default_registry,
    reset_default_registry,
)

__all__ = [
    "BUILTIN_TEMPLATES",
    "get_builtin_template",
    "get_builtin_templates",
    "TemplateDocument",
    "parse_template_document",
    "TemplateRegistry",
    "build_registry",
    "default_registry",
    "reset_default_registry",
]
