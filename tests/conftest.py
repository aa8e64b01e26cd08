"""
phaseflow Test Configuration and Fixtures

Shared templates, registries and configs for unit and integration tests.
"""

import pytest

from phaseflow.core.dataclasses import (
    DependencyConstraint,
    PhaseDefinition,
    PhaseTemplate,
    ProjectConfig,
    ProjectPhaseState,
)
from phaseflow.core.enums import DependencyKind, PhaseCategory, PhaseStatus
from phaseflow.catalog.registry import TemplateRegistry


def make_states(statuses):
    """ProjectPhaseState list from a {phase_id: status} dict, in dict order."""
    return [
        ProjectPhaseState(phase_id=pid, status=status, order=index)
        for index, (pid, status) in enumerate(statuses.items())
    ]


@pytest.fixture
def abc_template():
    """A (no deps), B (hard on A), C (soft on B)."""
    return PhaseTemplate(
        id="abc",
        name="ABC",
        project_types={"test"},
        phases=(
            PhaseDefinition("A", "Phase A", category=PhaseCategory.FOUNDATION, trade_codes={"FN"}),
            PhaseDefinition(
                "B", "Phase B",
                category=PhaseCategory.STRUCTURAL,
                trade_codes={"FS"},
                dependencies=(DependencyConstraint("A", DependencyKind.HARD, "A supports B"),),
            ),
            PhaseDefinition(
                "C", "Phase C",
                category=PhaseCategory.STRUCTURAL,
                dependencies=(DependencyConstraint("B", DependencyKind.SOFT, "B usually first"),),
            ),
        ),
    )


@pytest.fixture
def abc_phases(abc_template):
    return list(abc_template.phases)


@pytest.fixture
def all_pending():
    return make_states({
        "A": PhaseStatus.PENDING,
        "B": PhaseStatus.PENDING,
        "C": PhaseStatus.PENDING,
    })


@pytest.fixture
def registry():
    """Registry seeded with the built-in templates."""
    return TemplateRegistry.with_builtins()


@pytest.fixture
def empty_registry():
    return TemplateRegistry()


@pytest.fixture
def two_storey_config():
    """Two storeys with a basement, kitchen and bathroom."""
    return ProjectConfig(
        storeys=2,
        has_basement=True,
        rooms={"kitchen", "bathroom"},
    )


@pytest.fixture
def bungalow_config():
    """Single storey slab-on-grade, no rooms selected."""
    return ProjectConfig(storeys=1, has_basement=False)


@pytest.fixture(autouse=True)
def _reset_globals():
    """Keep the process-wide registry and config isolated per test."""
    from phaseflow.catalog.registry import reset_default_registry
    from phaseflow.bootstrap.config import reset_config

    reset_default_registry()
    reset_config()
    yield
    reset_default_registry()
    reset_config()


@pytest.fixture
def states_factory():
    return make_states
