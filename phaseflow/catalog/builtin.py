"""
phaseflow Built-in Templates

Phase catalog for the system templates. This module is data only: trade
codes, names and reasons are informational and can be replaced by loading
template documents into a registry.

Trade codes: FN foundation, FS framing/structure, RF roofing, EX exterior,
FC finish carpentry, PL plumbing, HV HVAC, EL electrical, IN insulation,
DW drywall, PT paint, FL flooring, CM cabinets/millwork, TL tile, DM demo.
"""

from typing import Dict, List, Optional, Sequence

from phaseflow.core.dataclasses import (
    DependencyConstraint,
    LocationScope,
    PhaseDefinition,
    PhaseTemplate,
    ScopeRule,
)
from phaseflow.core.enums import DependencyKind, PhaseCategory as C, ScopeConditionType


def _hard(phase_id: str, reason: str) -> DependencyConstraint:
    return DependencyConstraint(phase_id, DependencyKind.HARD, reason)


def _soft(phase_id: str, reason: str) -> DependencyConstraint:
    return DependencyConstraint(phase_id, DependencyKind.SOFT, reason, can_override=True)


def _sequence(phases: Sequence[PhaseDefinition]) -> List[PhaseDefinition]:
    """Stamp default_order from list position (1-based)."""
    return [
        PhaseDefinition(
            id=p.id,
            name=p.name,
            short_name=p.short_name,
            category=p.category,
            trade_codes=p.trade_codes,
            dependencies=p.dependencies,
            location_scope=p.location_scope,
            description=p.description,
            default_order=index,
        )
        for index, p in enumerate(phases, start=1)
    ]


ALL = LocationScope.everywhere()
WET_ROOMS = LocationScope.rooms("kitchen", "bathroom", "laundry")


# =============================================================================
# NEW CONSTRUCTION - MULTI STOREY
# =============================================================================

NEW_CONSTRUCTION_MULTI_STOREY = PhaseTemplate(
    id="new_construction_multi_storey",
    name="New Construction - Multi Storey",
    description="Full build sequence with floor-by-floor structural progression",
    project_types={"new_construction"},
    is_system=True,
    phases=_sequence([
        # Foundation and structure, bottom up
        PhaseDefinition("foundation", "Foundation", "FND", C.FOUNDATION, {"FN"},
                        (), ALL, "Footings, walls, slab"),
        PhaseDefinition("bearing_walls_basement", "Bearing Walls - Basement", "BW-B", C.STRUCTURAL, {"FS"},
                        (_hard("foundation", "Load path: foundation must support bearing walls"),),
                        LocationScope.floors("basement"), "Load-bearing walls only"),
        PhaseDefinition("floor_framing_main", "Floor Framing - Main", "FF-M", C.STRUCTURAL, {"FS"},
                        (_hard("foundation", "Load path: foundation must support floor system"),
                         _hard("bearing_walls_basement", "Load path: bearing walls below must support floor")),
                        LocationScope.floors("main"), "Joists, subfloor"),
        PhaseDefinition("exterior_walls_main", "Exterior Walls - Main", "EW-M", C.STRUCTURAL, {"FS"},
                        (_hard("floor_framing_main", "Floor deck required for wall plates"),),
                        LocationScope.floors("main"), "Lateral bracing first"),
        PhaseDefinition("bearing_walls_main", "Bearing Walls - Main", "BW-M", C.STRUCTURAL, {"FS"},
                        (_hard("exterior_walls_main", "Exterior walls provide lateral stability"),),
                        LocationScope.floors("main"), "Interior bearing walls"),
        PhaseDefinition("floor_framing_upper", "Floor Framing - Upper", "FF-U", C.STRUCTURAL, {"FS"},
                        (_hard("bearing_walls_main", "Load path: bearing walls below must support floor"),),
                        LocationScope.floors("upper"), "Second floor deck"),
        PhaseDefinition("exterior_walls_upper", "Exterior Walls - Upper", "EW-U", C.STRUCTURAL, {"FS"},
                        (_hard("floor_framing_upper", "Floor deck required for wall plates"),),
                        LocationScope.floors("upper"), "Upper floor exterior walls"),
        PhaseDefinition("bearing_walls_upper", "Bearing Walls - Upper", "BW-U", C.STRUCTURAL, {"FS"},
                        (_hard("exterior_walls_upper", "Exterior walls provide lateral stability"),),
                        LocationScope.floors("upper"), "Upper floor bearing walls (if applicable)"),
        PhaseDefinition("roof_structure", "Roof Structure", "ROOF", C.STRUCTURAL, {"FS", "RF"},
                        (_hard("exterior_walls_main", "Exterior walls must support roof"),
                         _hard("exterior_walls_upper", "All exterior walls must support roof")),
                        ALL, "Trusses or rafters"),
        PhaseDefinition("strapping", "Strapping", "STRAP", C.STRUCTURAL, {"FS"},
                        (_hard("roof_structure", "Roof must be complete before interior work"),),
                        ALL, "All floors"),
        PhaseDefinition("partition_walls", "Partition Walls", "PART", C.STRUCTURAL, {"FS"},
                        (_hard("strapping", "Strapping complete before partitions"),),
                        ALL, "Non-bearing interior walls"),

        # Envelope
        PhaseDefinition("sheathing", "Sheathing", "SHTH", C.ENVELOPE, {"FS"},
                        (_hard("roof_structure", "Structure must be complete"),),
                        ALL, "Wall and roof sheathing"),
        PhaseDefinition("wrb", "Weather Resistive Barrier", "WRB", C.ENVELOPE, {"EX"},
                        (_hard("sheathing", "WRB applied to sheathing"),),
                        ALL, "House wrap / WRB"),
        PhaseDefinition("window_door_bucks", "Window/Door Bucks", "BUCK", C.ENVELOPE, {"FS", "FC"},
                        (_soft("wrb", "WRB typically before bucks for proper lapping"),),
                        ALL, "Rough openings prepared"),
        PhaseDefinition("windows_doors", "Windows & Doors", "W&D", C.ENVELOPE, {"FC"},
                        (_hard("window_door_bucks", "Bucks must be installed first"),),
                        ALL, "Window and door units installed"),
        PhaseDefinition("roofing", "Roofing", "ROOF-F", C.ENVELOPE, {"RF"},
                        (_hard("sheathing", "Roof sheathing required"),
                         _soft("windows_doors", "Building dried in before roofing crew")),
                        ALL, "Roofing material installed (before siding - water sheds down)"),
        PhaseDefinition("siding", "Siding / Cladding", "SIDE", C.ENVELOPE, {"EX"},
                        (_hard("wrb", "WRB must be installed"),
                         _soft("roofing", "Water sheds from roof over siding")),
                        ALL, "Exterior cladding installed"),

        # Mechanical rough-in
        PhaseDefinition("plumbing_rough", "Plumbing Rough-In", "PL-R", C.PLUMBING, {"PL"},
                        (_hard("partition_walls", "Walls must be framed for pipe routing"),),
                        ALL, "Stacks/drains first - least flexible routing"),
        PhaseDefinition("hvac_rough", "HVAC Rough-In", "HV-R", C.HVAC, {"HV"},
                        (_soft("plumbing_rough", "Plumbing routes first (less flexible)"),),
                        ALL, "Trunks need clearance"),
        PhaseDefinition("electrical_rough", "Electrical Rough-In", "EL-R", C.ELECTRICAL, {"EL"},
                        (_soft("hvac_rough", "Electrical most flexible, runs after HVAC"),),
                        ALL, "Most flexible - runs last"),
        PhaseDefinition("rough_in_inspection", "Rough-In Inspection", "INSP-R", C.PUNCHOUT, (),
                        (_hard("plumbing_rough", "Plumbing must be inspected"),
                         _hard("hvac_rough", "HVAC must be inspected"),
                         _hard("electrical_rough", "Electrical must be inspected")),
                        ALL, "Municipal rough-in inspection"),

        # Insulation, drywall, paint
        PhaseDefinition("insulation", "Insulation", "INSUL", C.INSULATION, {"IN"},
                        (_hard("rough_in_inspection", "Must pass rough-in inspection before covering"),),
                        ALL),
        PhaseDefinition("vapor_barrier", "Vapor Barrier", "VB", C.INSULATION, {"IN"},
                        (_hard("insulation", "Insulation first, then vapor barrier"),),
                        ALL),
        PhaseDefinition("drywall_board", "Drywall - Board", "DW-B", C.DRYWALL, {"DW"},
                        (_hard("vapor_barrier", "Vapor barrier must be complete"),),
                        ALL, "Ceilings, then walls"),
        PhaseDefinition("drywall_finish", "Drywall - Tape, Coat & Sand", "DW-F", C.DRYWALL, {"DW"},
                        (_hard("drywall_board", "All boarding complete"),),
                        ALL),
        PhaseDefinition("paint_prime_ceilings", "Paint - Prime & Paint Ceilings", "PT-C", C.PAINT, {"PT"},
                        (_hard("drywall_finish", "Drywall must be sanded"),),
                        ALL),
        PhaseDefinition("paint_walls", "Paint - Walls Complete", "PT-W", C.PAINT, {"PT"},
                        (_soft("paint_prime_ceilings", "Ceilings before walls (spray sequence)"),),
                        ALL),

        # Finishes
        PhaseDefinition("flooring_install", "Flooring Install", "FLR", C.FLOORING, {"FL"},
                        (_hard("paint_walls", "Paint phase 1 complete before flooring"),),
                        ALL),
        PhaseDefinition("baseboard_install", "Baseboard Install", "BASE", C.TRIM, {"FC"},
                        (_hard("flooring_install", "Flooring must be installed first"),),
                        ALL),
        PhaseDefinition("paint_touchups", "Paint - Touch-ups", "PT-T", C.PAINT, {"PT"},
                        (_soft("baseboard_install", "After all painting complete"),),
                        ALL),

        # Cabinets and fixtures
        PhaseDefinition("cabinet_install", "Cabinet Installation", "CAB", C.CABINETS, {"CM"},
                        (_hard("flooring_install", "Flooring under cabinets for appliance install"),),
                        WET_ROOMS, "Kitchen and bath cabinets"),
        PhaseDefinition("countertop_template", "Countertop Template", "CT-T", C.CABINETS, {"CM"},
                        (_hard("cabinet_install", "Cabinets must be installed for templating"),),
                        WET_ROOMS),
        PhaseDefinition("countertop_install", "Countertop Install", "CT-I", C.CABINETS, {"CM"},
                        (_hard("countertop_template", "Template before fabrication and install"),),
                        WET_ROOMS),
        PhaseDefinition("backsplash", "Backsplash Tile", "TILE-B", C.CABINETS, {"TL"},
                        (_hard("countertop_install", "Countertop must be in for backsplash to meet it"),),
                        LocationScope.rooms("kitchen")),
        PhaseDefinition("plumbing_trim", "Plumbing Trim", "PL-T", C.PLUMBING, {"PL"},
                        (_hard("countertop_install", "Countertops for sink installs"),
                         _soft("paint_touchups", "Paint complete before fixtures")),
                        ALL, "Fixtures: sinks, toilets, faucets"),
        PhaseDefinition("electrical_trim", "Electrical Trim", "EL-T", C.ELECTRICAL, {"EL"},
                        (_soft("paint_touchups", "Paint complete before devices"),),
                        ALL, "Devices, fixtures, panels"),
        PhaseDefinition("hvac_trim", "HVAC Trim", "HV-T", C.HVAC, {"HV"},
                        (_soft("paint_touchups", "Paint complete before grilles"),),
                        ALL, "Grilles, thermostats, commissioning"),
        PhaseDefinition("appliance_install", "Appliance Installation", "APPL", C.CABINETS, {"CM", "PL", "EL"},
                        (_hard("plumbing_trim", "Water connections for appliances"),
                         _hard("electrical_trim", "Power for appliances")),
                        LocationScope.rooms("kitchen", "laundry")),

        # Final
        PhaseDefinition("final_inspection", "Final Inspection", "INSP-F", C.PUNCHOUT, (),
                        (_hard("plumbing_trim", "All plumbing complete"),
                         _hard("electrical_trim", "All electrical complete"),
                         _hard("hvac_trim", "All HVAC complete")),
                        ALL, "Final building inspection"),
        PhaseDefinition("punch_list", "Punch List", "PUNCH", C.PUNCHOUT, (),
                        (_hard("final_inspection", "Must pass final inspection"),),
                        ALL, "Final walkthrough items"),
        PhaseDefinition("client_walkthrough", "Client Walkthrough", "WALK", C.PUNCHOUT, (),
                        (_soft("punch_list", "Punch items addressed before walkthrough"),),
                        ALL, "Client walkthrough and handover"),
    ]),
    scope_rules=(
        ScopeRule(ScopeConditionType.BUILDING_HAS, "single_storey",
                  ("floor_framing_upper", "exterior_walls_upper", "bearing_walls_upper")),
        ScopeRule(ScopeConditionType.SCOPE_EXCLUDES, "basement", ("bearing_walls_basement",)),
    ),
)


# =============================================================================
# KITCHEN RENOVATION
# =============================================================================

KITCHEN = LocationScope.rooms("kitchen")

KITCHEN_RENOVATION = PhaseTemplate(
    id="kitchen_renovation",
    name="Kitchen Renovation",
    description="Full kitchen renovation sequence",
    project_types={"renovation", "kitchen_renovation"},
    is_system=True,
    phases=_sequence([
        PhaseDefinition("demo", "Demo", "DEMO", C.STRUCTURAL, {"DM"}, (), KITCHEN,
                        "Remove existing cabinets, counters, flooring"),
        PhaseDefinition("structural_mods", "Structural Modifications", "STRUCT", C.STRUCTURAL, {"FS"},
                        (_hard("demo", "Demo complete before structural"),), KITCHEN,
                        "Wall removals, headers, beam work (if any)"),
        PhaseDefinition("plumbing_rough", "Plumbing Rough", "PL-R", C.PLUMBING, {"PL"},
                        (_hard("structural_mods", "Structure stable before plumbing"),), KITCHEN),
        PhaseDefinition("electrical_rough", "Electrical Rough", "EL-R", C.ELECTRICAL, {"EL"},
                        (_soft("plumbing_rough", "Plumbing routes first"),), KITCHEN),
        PhaseDefinition("inspection", "Rough-In Inspection", "INSP", C.PUNCHOUT, (),
                        (_hard("plumbing_rough", "Plumbing inspected"),
                         _hard("electrical_rough", "Electrical inspected")), KITCHEN),
        PhaseDefinition("insulation", "Insulation", "INSUL", C.INSULATION, {"IN"},
                        (_hard("inspection", "After inspection pass"),), KITCHEN),
        PhaseDefinition("drywall", "Drywall Patch/Repair", "DW", C.DRYWALL, {"DW"},
                        (_hard("insulation", "Insulation before drywall"),), KITCHEN),
        PhaseDefinition("prime_paint", "Prime & Paint", "PT", C.PAINT, {"PT"},
                        (_hard("drywall", "Drywall complete"),), KITCHEN),
        PhaseDefinition("cabinet_install", "Cabinet Installation", "CAB", C.CABINETS, {"CM"},
                        (_hard("prime_paint", "Walls painted before cabinets"),), KITCHEN),
        PhaseDefinition("countertop_install", "Countertop Template & Install", "CT", C.CABINETS, {"CM"},
                        (_hard("cabinet_install", "Cabinets installed for template"),), KITCHEN),
        PhaseDefinition("backsplash", "Backsplash Tile", "TILE-B", C.CABINETS, {"TL"},
                        (_hard("countertop_install", "Counters before backsplash"),), KITCHEN),
        PhaseDefinition("plumbing_trim", "Plumbing Fixtures", "PL-T", C.PLUMBING, {"PL"},
                        (_hard("countertop_install", "Counters for sink install"),), KITCHEN),
        PhaseDefinition("electrical_trim", "Electrical Fixtures", "EL-T", C.ELECTRICAL, {"EL"},
                        (_hard("cabinet_install", "Cabinets installed for under-cabinet"),
                         _soft("backsplash", "Backsplash before outlet covers")), KITCHEN),
        PhaseDefinition("appliances", "Appliance Install", "APPL", C.CABINETS, {"CM", "PL", "EL"},
                        (_hard("plumbing_trim", "Water/drain for appliances"),
                         _hard("electrical_trim", "Power for appliances")), KITCHEN),
        PhaseDefinition("touchup_punch", "Touch-up & Punch", "PUNCH", C.PUNCHOUT, {"PT"},
                        (_soft("appliances", "All work complete"),), KITCHEN),
    ]),
)


# =============================================================================
# BATHROOM RENOVATION
# =============================================================================

BATHROOM = LocationScope.rooms("bathroom", "primary_bath", "ensuite")

BATHROOM_RENOVATION = PhaseTemplate(
    id="bathroom_renovation",
    name="Bathroom Renovation",
    description="Full bathroom renovation sequence",
    project_types={"renovation", "bathroom_renovation"},
    is_system=True,
    phases=_sequence([
        PhaseDefinition("demo", "Demo", "DEMO", C.STRUCTURAL, {"DM"}, (), BATHROOM),
        PhaseDefinition("plumbing_rough", "Plumbing Rough", "PL-R", C.PLUMBING, {"PL"},
                        (_hard("demo", "Demo complete first"),), BATHROOM),
        PhaseDefinition("electrical_rough", "Electrical Rough", "EL-R", C.ELECTRICAL, {"EL"},
                        (_soft("plumbing_rough", "Coordinate routing"),), BATHROOM),
        PhaseDefinition("exhaust_fan", "HVAC - Exhaust Fan", "HV", C.HVAC, {"HV"},
                        (_soft("electrical_rough", "Fan wiring coordinated"),), BATHROOM),
        PhaseDefinition("inspection", "Rough-In Inspection", "INSP", C.PUNCHOUT, (),
                        (_hard("plumbing_rough", "Plumbing inspected"),
                         _hard("electrical_rough", "Electrical inspected")), BATHROOM),
        PhaseDefinition("insulation", "Insulation & Vapor Barrier", "INSUL", C.INSULATION, {"IN"},
                        (_hard("inspection", "After inspection"),), BATHROOM),
        PhaseDefinition("drywall", "Drywall / Cement Board", "DW", C.DRYWALL, {"DW"},
                        (_hard("insulation", "Vapor barrier before boarding"),), BATHROOM),
        PhaseDefinition("waterproofing", "Waterproofing", "WP", C.PLUMBING, {"TL", "PL"},
                        (_hard("drywall", "Board before waterproofing"),), BATHROOM),
        PhaseDefinition("tile", "Tile, Grout & Seal", "TILE", C.FLOORING, {"TL"},
                        (_hard("waterproofing", "Waterproofing complete"),), BATHROOM),
        PhaseDefinition("vanity", "Vanity & Countertop", "VAN", C.CABINETS, {"CM"},
                        (_hard("tile", "Floor tile complete"),), BATHROOM),
        PhaseDefinition("paint", "Paint", "PT", C.PAINT, {"PT"},
                        (_hard("drywall", "Drywall complete"),
                         _soft("tile", "Tile done before painting adjacent areas")), BATHROOM),
        PhaseDefinition("plumbing_trim", "Plumbing Trim", "PL-T", C.PLUMBING, {"PL"},
                        (_hard("vanity", "Counter for faucet"),
                         _hard("tile", "Tile complete for shower trim")), BATHROOM),
        PhaseDefinition("electrical_trim", "Electrical Trim", "EL-T", C.ELECTRICAL, {"EL"},
                        (_hard("paint", "Paint before devices"),), BATHROOM),
        PhaseDefinition("caulk_punch", "Caulk & Punch", "PUNCH", C.PUNCHOUT, (),
                        (_soft("plumbing_trim", "All fixtures installed"),
                         _soft("electrical_trim", "All devices installed")), BATHROOM),
    ]),
)


# =============================================================================
# BASEMENT FINISH
# =============================================================================

BASEMENT = LocationScope.floors("basement")

BASEMENT_FINISH = PhaseTemplate(
    id="basement_finish",
    name="Basement Finish",
    description="Basement development from bare foundation",
    project_types={"renovation", "basement_finish"},
    is_system=True,
    phases=_sequence([
        PhaseDefinition("moisture_mitigation", "Moisture Mitigation", "MOIST", C.FOUNDATION, {"FN", "PL"},
                        (), BASEMENT),
        PhaseDefinition("framing", "Framing", "FRM", C.STRUCTURAL, {"FS"},
                        (_hard("moisture_mitigation", "Moisture addressed before framing"),), BASEMENT),
        PhaseDefinition("plumbing_rough", "Plumbing Rough", "PL-R", C.PLUMBING, {"PL"},
                        (_hard("framing", "Walls framed for routing"),), BASEMENT),
        PhaseDefinition("electrical_rough", "Electrical Rough", "EL-R", C.ELECTRICAL, {"EL"},
                        (_soft("plumbing_rough", "Plumbing routes first"),), BASEMENT),
        PhaseDefinition("hvac_rough", "HVAC Rough", "HV-R", C.HVAC, {"HV"},
                        (_soft("electrical_rough", "Coordinate routing"),), BASEMENT),
        PhaseDefinition("inspection", "Rough-In Inspection", "INSP", C.PUNCHOUT, (),
                        (_hard("plumbing_rough", "Plumbing inspected"),
                         _hard("electrical_rough", "Electrical inspected")), BASEMENT),
        PhaseDefinition("insulation", "Insulation & Vapor Barrier", "INSUL", C.INSULATION, {"IN"},
                        (_hard("inspection", "After inspection"),), BASEMENT),
        PhaseDefinition("drywall", "Drywall", "DW", C.DRYWALL, {"DW"},
                        (_hard("insulation", "Vapor barrier before boarding"),), BASEMENT),
        PhaseDefinition("paint_phase_1", "Paint Phase 1", "PT-1", C.PAINT, {"PT"},
                        (_hard("drywall", "Drywall complete"),), BASEMENT),
        PhaseDefinition("flooring", "Flooring", "FLR", C.FLOORING, {"FL"},
                        (_hard("paint_phase_1", "Paint done before flooring"),), BASEMENT),
        PhaseDefinition("trim", "Trim", "TRIM", C.TRIM, {"FC"},
                        (_hard("flooring", "Flooring before baseboard"),), BASEMENT),
        PhaseDefinition("paint_phase_2", "Paint Phase 2 - Punch", "PT-2", C.PAINT, {"PT"},
                        (_hard("trim", "Trim installed before paint"),), BASEMENT),
        PhaseDefinition("plumbing_trim", "Plumbing Trim", "PL-T", C.PLUMBING, {"PL"},
                        (_soft("paint_phase_2", "Paint done first"),), BASEMENT),
        PhaseDefinition("electrical_trim", "Electrical Trim", "EL-T", C.ELECTRICAL, {"EL"},
                        (_soft("paint_phase_2", "Paint done first"),), BASEMENT),
        PhaseDefinition("finals", "Finals & Punch", "FINAL", C.PUNCHOUT, (),
                        (_hard("electrical_trim", "All electrical complete"),
                         _soft("plumbing_trim", "All plumbing complete")), BASEMENT),
    ]),
    scope_rules=(
        ScopeRule(ScopeConditionType.SCOPE_EXCLUDES, "bathroom", ("plumbing_rough", "plumbing_trim")),
    ),
)


# =============================================================================
# DECK / EXTERIOR STRUCTURE
# =============================================================================

DECK_EXTERIOR = PhaseTemplate(
    id="deck_exterior",
    name="Deck / Exterior Structure",
    description="Deck or exterior structure build sequence",
    project_types={"renovation", "deck_exterior"},
    is_system=True,
    phases=_sequence([
        PhaseDefinition("permit_layout", "Permit & Layout", "PERM", C.FOUNDATION, (), (), ALL),
        PhaseDefinition("footings", "Footings", "FTG", C.FOUNDATION, {"FN"},
                        (_hard("permit_layout", "Permit required"),), ALL),
        PhaseDefinition("posts", "Posts", "POST", C.STRUCTURAL, {"FS"},
                        (_hard("footings", "Footings support posts"),), ALL),
        PhaseDefinition("beams", "Beam Installation", "BEAM", C.STRUCTURAL, {"FS"},
                        (_hard("posts", "Posts support beams"),), ALL),
        PhaseDefinition("ledger", "Ledger", "LEDG", C.STRUCTURAL, {"FS"},
                        (_soft("beams", "Beams and ledger coordinate"),), ALL),
        PhaseDefinition("joists", "Joist Framing", "JST", C.STRUCTURAL, {"FS"},
                        (_hard("beams", "Beams support joists"),
                         _hard("ledger", "Ledger required for attached deck")), ALL),
        PhaseDefinition("decking", "Decking", "DECK", C.EXTERIOR, {"FS"},
                        (_hard("joists", "Framing complete"),), ALL),
        PhaseDefinition("railing", "Railing", "RAIL", C.EXTERIOR, {"FS"},
                        (_hard("decking", "Decking supports post bases"),), ALL),
        PhaseDefinition("stairs", "Stairs", "STAIR", C.EXTERIOR, {"FS"},
                        (_hard("decking", "Deck surface complete"),), ALL),
        PhaseDefinition("finish", "Finishing", "FIN", C.EXTERIOR, {"PT"},
                        (_hard("railing", "All woodwork complete"),
                         _hard("stairs", "Stairs complete")), ALL),
        PhaseDefinition("final_inspection", "Final Inspection", "INSP", C.PUNCHOUT, (),
                        (_hard("finish", "All work complete"),), ALL),
    ]),
    scope_rules=(
        ScopeRule(ScopeConditionType.BUILDING_HAS, "freestanding", ("ledger",)),
    ),
)


# =============================================================================
# REGISTRY ORDER
# =============================================================================

# Registration order is the suggestion priority order
BUILTIN_TEMPLATES: List[PhaseTemplate] = [
    NEW_CONSTRUCTION_MULTI_STOREY,
    KITCHEN_RENOVATION,
    BATHROOM_RENOVATION,
    BASEMENT_FINISH,
    DECK_EXTERIOR,
]


def get_builtin_templates() -> List[PhaseTemplate]:
    """Get all built-in template definitions, in priority order."""
    return list(BUILTIN_TEMPLATES)


def get_builtin_template(template_id: str) -> Optional[PhaseTemplate]:
    for template in BUILTIN_TEMPLATES:
        if template.id == template_id:
            return template
    return None
