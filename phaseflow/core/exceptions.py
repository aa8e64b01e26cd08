"""
phaseflow exceptions

Only data-integrity problems and programming errors are raised. Domain
rule violations are returned as validation issues instead.
"""

from typing import List, Optional


class PhaseflowError(Exception):
    """Base exception for phaseflow."""
    pass


class TemplateIntegrityError(PhaseflowError):
    """Raised when a template fails load-time integrity checks."""

    def __init__(self, message: str, template_id: Optional[str] = None):
        self.template_id = template_id
        if template_id:
            message = f"Template '{template_id}': {message}"
        super().__init__(message)


class TemplateNotFoundError(PhaseflowError, KeyError):
    """Raised when a template id is not registered."""

    def __init__(self, template_id: str, available: Optional[List[str]] = None):
        self.template_id = template_id
        self.available = available or []
        super().__init__(f"Unknown template: {template_id}")

    def __str__(self) -> str:
        return self.args[0]
