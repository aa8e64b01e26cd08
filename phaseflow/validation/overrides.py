"""
Override records for soft-dependency warnings.

An override is the explicit, auditable acknowledgement that lets a caller
commit a completion or reorder that only produced warnings.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple
import uuid

from .taxonomy import Issue


@dataclass(frozen=True)
class OverrideRecord:
    """Audit record of warnings a user chose to proceed past."""
    phase_id: Optional[str]
    warnings: Tuple[Issue, ...]
    user_id: str
    reason: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(default_factory=lambda: datetime.utcnow().isoformat())

    def covers(self, warnings: Iterable[Issue]) -> bool:
        """True if every given warning was acknowledged by this record."""
        recorded = {w.key for w in self.warnings}
        return all(w.key in recorded for w in warnings)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "phase_id": self.phase_id,
            "warnings": [
                {"kind": w.kind.value, "message": w.message}
                for w in self.warnings
            ],
            "user_id": self.user_id,
            "reason": self.reason,
            "timestamp": self.timestamp,
        }


def create_override_record(
    phase_id: Optional[str],
    warnings: List[Issue],
    user_id: str,
    reason: str,
) -> OverrideRecord:
    """
    Create an override record.

    Raises:
        ValueError: if the reason is blank, or a warning is not
            overridable (errors and can_override=False warnings).
    """
    if not reason or not reason.strip():
        raise ValueError("An override requires a reason")

    for warning in warnings:
        if warning.is_error or not warning.can_override:
            raise ValueError(f"Issue cannot be overridden: {warning.message}")

    return OverrideRecord(
        phase_id=phase_id,
        warnings=tuple(warnings),
        user_id=user_id,
        reason=reason.strip(),
    )
