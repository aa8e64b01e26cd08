"""
Unit tests for catalog/registry.py, catalog/schema.py and catalog/builtin.py
"""

import json
import logging

import pytest

from phaseflow.catalog.builtin import BUILTIN_TEMPLATES, get_builtin_template, get_builtin_templates
from phaseflow.catalog.registry import (
    TemplateRegistry,
    build_registry,
    default_registry,
)
from phaseflow.catalog.schema import parse_template_document
from phaseflow.core.dataclasses import (
    DependencyConstraint,
    PhaseDefinition,
    PhaseTemplate,
    ProjectConfig,
)
from phaseflow.core.enums import DependencyKind, PhaseCategory, ScopeConditionType, ScopeType
from phaseflow.core.exceptions import TemplateIntegrityError, TemplateNotFoundError
from phaseflow.dependencies.graph import CyclicDependencyError, PhaseDependencyGraph
from phaseflow.scope.filter import apply_scope


def _template(template_id, *phases):
    return PhaseTemplate(template_id, template_id.title(), project_types={"x"}, phases=phases)


DECK_DOCUMENT = {
    "id": "custom_deck",
    "name": "Custom Deck",
    "projectTypes": ["deck_exterior"],
    "phases": [
        {"id": "footings", "name": "Footings", "category": "foundation", "tradeCodes": ["FN"]},
        {
            "id": "framing",
            "name": "Framing",
            "shortName": "FRM",
            "category": "structural",
            "dependencies": [
                {"requiresPhaseId": "footings", "type": "hard", "reason": "Load path"},
            ],
            "locationScope": {"type": "zones", "zones": ["backyard"]},
        },
        {
            "id": "stain",
            "name": "Stain",
            "category": "woodwork",
            "dependencies": [{"requiresPhaseId": "framing", "type": "soft"}],
        },
    ],
    "scopeRules": [
        {
            "condition": {"type": "building_has", "value": "freestanding"},
            "action": {"type": "remove_phase", "phaseIds": ["stain"]},
        },
        {
            "condition": {"type": "scope_includes", "value": "pool"},
            "action": {"type": "add_phase", "phaseIds": ["fence"]},
        },
    ],
}


class TestRegistration:
    """Test load-time integrity checks."""

    def test_register_and_get(self, empty_registry, abc_template):
        empty_registry.register(abc_template)
        assert empty_registry.get_template("abc") is abc_template
        assert "abc" in empty_registry
        assert len(empty_registry) == 1

    def test_unknown_template(self, empty_registry):
        with pytest.raises(TemplateNotFoundError) as exc_info:
            empty_registry.get_template("nope")
        assert isinstance(exc_info.value, KeyError)
        assert "nope" in str(exc_info.value)
        assert empty_registry.find_template("nope") is None

    def test_duplicate_template_id(self, empty_registry, abc_template):
        empty_registry.register(abc_template)
        with pytest.raises(TemplateIntegrityError):
            empty_registry.register(abc_template)
        empty_registry.register(abc_template, replace=True)
        assert len(empty_registry) == 1

    def test_duplicate_phase_id(self, empty_registry):
        template = _template("dup", PhaseDefinition("a", "A"), PhaseDefinition("a", "A again"))
        with pytest.raises(TemplateIntegrityError):
            empty_registry.register(template)

    def test_cycle_rejected(self, empty_registry):
        template = _template(
            "cyclic",
            PhaseDefinition("a", "A", dependencies=(DependencyConstraint("b"),)),
            PhaseDefinition("b", "B", dependencies=(DependencyConstraint("a", DependencyKind.SOFT),)),
        )
        with pytest.raises(CyclicDependencyError):
            empty_registry.register(template)
        assert "cyclic" not in empty_registry

    def test_self_loop_rejected(self, empty_registry):
        template = _template("loop", PhaseDefinition("a", "A", dependencies=(DependencyConstraint("a"),)))
        with pytest.raises(CyclicDependencyError):
            empty_registry.register(template)

    def test_dangling_reference_warns(self, empty_registry, caplog):
        template = _template("dangling", PhaseDefinition("a", "A", dependencies=(DependencyConstraint("ghost"),)))
        with caplog.at_level(logging.WARNING, logger="phaseflow.catalog.registry"):
            empty_registry.register(template)
        assert "ghost" in caplog.text
        assert "dangling" in empty_registry

    def test_dangling_reference_strict(self):
        registry = TemplateRegistry(strict_references=True)
        template = _template("dangling", PhaseDefinition("a", "A", dependencies=(DependencyConstraint("ghost"),)))
        with pytest.raises(TemplateIntegrityError):
            registry.register(template)

    def test_non_template_rejected(self, empty_registry):
        with pytest.raises(TypeError):
            empty_registry.register({"id": "x"})

    def test_unregister(self, empty_registry, abc_template):
        empty_registry.register(abc_template)
        empty_registry.unregister("abc")
        assert len(empty_registry) == 0
        with pytest.raises(TemplateNotFoundError):
            empty_registry.unregister("abc")


class TestListing:

    def test_registration_order(self):
        registry = TemplateRegistry([
            _template("zulu", PhaseDefinition("a", "A")),
            _template("alpha", PhaseDefinition("a", "A")),
        ])
        assert [t.id for t in registry.list_templates()] == ["zulu", "alpha"]

    def test_templates_for_project_type(self, registry):
        ids = [t.id for t in registry.templates_for_project_type("renovation")]
        assert ids == ["kitchen_renovation", "bathroom_renovation", "basement_finish", "deck_exterior"]


class TestBuiltinTemplates:
    """Test the built-in catalog passes registration."""

    def test_all_registered(self, registry):
        assert registry.template_ids() == [t.id for t in BUILTIN_TEMPLATES]
        assert len(get_builtin_templates()) == 5
        assert get_builtin_template("deck_exterior").name == "Deck / Exterior Structure"
        assert get_builtin_template("nope") is None

    def test_all_system_and_acyclic(self):
        for template in BUILTIN_TEMPLATES:
            assert template.is_system
            assert PhaseDependencyGraph.from_template(template).is_acyclic()

    def test_no_dangling_references(self):
        """Test builtins only reference their own phases."""
        strict = TemplateRegistry(strict_references=True)
        for template in BUILTIN_TEMPLATES:
            strict.register(template)

    def test_default_order_follows_position(self):
        for template in BUILTIN_TEMPLATES:
            assert [p.default_order for p in template.phases] == list(range(1, len(template.phases) + 1))

    def test_single_storey_scope(self, registry, bungalow_config):
        template = registry.get_template("new_construction_multi_storey")
        ids = [p.id for p in apply_scope(template, bungalow_config)]
        assert "floor_framing_upper" not in ids
        assert "bearing_walls_basement" not in ids
        assert "cabinet_install" not in ids
        assert ids[0] == "foundation"

    def test_freestanding_deck_drops_ledger(self, registry):
        template = registry.get_template("deck_exterior")
        ids = [p.id for p in apply_scope(template, ProjectConfig(zones={"freestanding"}))]
        assert "ledger" not in ids
        assert "joists" in ids


class TestTemplateDocuments:
    """Test JSON template documents."""

    def test_parse(self):
        template = parse_template_document(DECK_DOCUMENT)
        assert template.id == "custom_deck"
        assert template.project_types == frozenset({"deck_exterior"})
        framing = template.get_phase("framing")
        assert framing.short_name == "FRM"
        assert framing.dependencies[0].kind == DependencyKind.HARD
        assert framing.location_scope.type == ScopeType.ZONES
        assert framing.location_scope.values == ("backyard",)

    def test_unknown_category_becomes_other(self):
        template = parse_template_document(DECK_DOCUMENT)
        assert template.get_phase("stain").category == PhaseCategory.OTHER

    def test_unsupported_action_skipped(self):
        template = parse_template_document(DECK_DOCUMENT)
        assert len(template.scope_rules) == 1
        assert template.scope_rules[0].condition == ScopeConditionType.BUILDING_HAS

    def test_invalid_document(self):
        with pytest.raises(TemplateIntegrityError):
            parse_template_document({"id": "broken", "name": "Broken"})

    def test_load_documents(self, empty_registry):
        loaded = empty_registry.load_documents([DECK_DOCUMENT])
        assert [t.id for t in loaded] == ["custom_deck"]

    def test_load_file(self, tmp_path, empty_registry):
        path = tmp_path / "templates.json"
        path.write_text(json.dumps({"templates": [DECK_DOCUMENT]}))
        empty_registry.load_file(path)
        assert "custom_deck" in empty_registry

    def test_load_file_single_document(self, tmp_path, empty_registry):
        path = tmp_path / "deck.json"
        path.write_text(json.dumps(DECK_DOCUMENT))
        assert len(empty_registry.load_file(str(path))) == 1

    def test_cyclic_document_rejected(self, empty_registry):
        document = {
            "id": "loop",
            "name": "Loop",
            "phases": [
                {"id": "a", "name": "A", "dependencies": [{"requiresPhaseId": "b"}]},
                {"id": "b", "name": "B", "dependencies": [{"requiresPhaseId": "a"}]},
            ],
        }
        with pytest.raises(CyclicDependencyError):
            empty_registry.load_documents([document])


class TestDefaultRegistry:

    def test_builtins(self):
        assert default_registry().template_ids()[0] == "new_construction_multi_storey"
        assert default_registry() is default_registry()

    def test_env_paths(self, tmp_path, monkeypatch):
        path = tmp_path / "deck.json"
        path.write_text(json.dumps(DECK_DOCUMENT))
        monkeypatch.setenv("PHASEFLOW_TEMPLATE_PATHS", str(path))
        assert "custom_deck" in default_registry()

    def test_build_without_builtins(self):
        assert len(build_registry(include_builtins=False)) == 0
