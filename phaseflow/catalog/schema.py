"""
Template document schema.

Pydantic models for templates supplied as JSON. Both the camelCase field
names used by exported template documents and snake_case names are
accepted.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from phaseflow.core.dataclasses import (
    DependencyConstraint,
    LocationScope,
    PhaseDefinition,
    PhaseTemplate,
    ScopeRule,
)
from phaseflow.core.enums import (
    DependencyKind,
    PhaseCategory,
    ScopeConditionType,
    ScopeType,
)
from phaseflow.core.exceptions import TemplateIntegrityError

logger = logging.getLogger(__name__)


class _Document(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class DependencyDocument(_Document):
    requires_phase_id: str = Field(alias="requiresPhaseId")
    kind: DependencyKind = Field(default=DependencyKind.HARD, alias="type")
    reason: str = ""
    can_override: bool = Field(default=True, alias="canOverride")

    def to_constraint(self) -> DependencyConstraint:
        return DependencyConstraint(
            requires_phase_id=self.requires_phase_id,
            kind=self.kind,
            reason=self.reason,
            can_override=self.can_override,
        )


class LocationScopeDocument(_Document):
    type: ScopeType = ScopeType.ALL
    floors: List[str] = Field(default_factory=list)
    room_types: List[str] = Field(default_factory=list, alias="roomTypes")
    zones: List[str] = Field(default_factory=list)

    def to_scope(self) -> LocationScope:
        if self.type == ScopeType.FLOORS:
            return LocationScope.floors(*self.floors)
        if self.type == ScopeType.ROOMS:
            return LocationScope.rooms(*self.room_types)
        if self.type == ScopeType.ZONES:
            return LocationScope.zones(*self.zones)
        return LocationScope.everywhere()


class PhaseDocument(_Document):
    id: str
    name: str
    short_name: str = Field(default="", alias="shortName")
    category: PhaseCategory = PhaseCategory.OTHER
    trade_codes: List[str] = Field(default_factory=list, alias="tradeCodes")
    dependencies: List[DependencyDocument] = Field(default_factory=list)
    location_scope: LocationScopeDocument = Field(
        default_factory=LocationScopeDocument, alias="locationScope"
    )
    description: str = ""
    order: int = 0

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, value: Any) -> Any:
        if isinstance(value, str) and value not in PhaseCategory._value2member_map_:
            logger.warning(f"Unknown phase category '{value}', using 'other'")
            return PhaseCategory.OTHER
        return value

    def to_definition(self) -> PhaseDefinition:
        return PhaseDefinition(
            id=self.id,
            name=self.name,
            short_name=self.short_name,
            category=self.category,
            trade_codes=self.trade_codes,
            dependencies=[d.to_constraint() for d in self.dependencies],
            location_scope=self.location_scope.to_scope(),
            description=self.description,
            default_order=self.order,
        )


class ScopeConditionDocument(_Document):
    type: ScopeConditionType
    value: str


class ScopeActionDocument(_Document):
    type: str
    phase_ids: List[str] = Field(default_factory=list, alias="phaseIds")


class ScopeRuleDocument(_Document):
    condition: ScopeConditionDocument
    action: ScopeActionDocument

    def to_rule(self) -> Optional[ScopeRule]:
        if self.action.type != "remove_phase":
            return None
        return ScopeRule(
            condition=self.condition.type,
            value=self.condition.value,
            remove_phase_ids=self.action.phase_ids,
        )


class TemplateDocument(_Document):
    id: str
    name: str
    description: str = ""
    project_types: List[str] = Field(default_factory=list, alias="projectTypes")
    is_system: bool = Field(default=False, alias="isSystem")
    phases: List[PhaseDocument]
    scope_rules: List[ScopeRuleDocument] = Field(default_factory=list, alias="scopeRules")

    def to_template(self) -> PhaseTemplate:
        rules = []
        for rule_doc in self.scope_rules:
            rule = rule_doc.to_rule()
            if rule is None:
                logger.warning(
                    f"Template '{self.id}': ignoring unsupported scope action "
                    f"'{rule_doc.action.type}'"
                )
                continue
            rules.append(rule)

        return PhaseTemplate(
            id=self.id,
            name=self.name,
            description=self.description,
            project_types=self.project_types,
            phases=[p.to_definition() for p in self.phases],
            is_system=self.is_system,
            scope_rules=rules,
        )


def parse_template_document(data: Dict[str, Any]) -> PhaseTemplate:
    """
    Parse one template document into a PhaseTemplate.

    Raises:
        TemplateIntegrityError: if the document does not match the schema
    """
    try:
        document = TemplateDocument.model_validate(data)
    except ValidationError as e:
        template_id = data.get("id") if isinstance(data, dict) else None
        raise TemplateIntegrityError(f"Invalid template document: {e}", template_id) from e
    return document.to_template()
