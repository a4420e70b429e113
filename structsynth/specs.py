# structsynth/specs.py
"""
STRUCTURE SPECS: Declarative Inputs of the Generators
=====================================================

PURPOSE:
--------
One immutable, fully-defaulted configuration tree per archetype:

    VesselSpec            pressure vessels / tanks
    BuildingSpec          multi-story frames
    IndustrialSpec        portal / truss sheds
    BridgeSpec            girder, cable-stayed, arch and truss bridges
    SpecialStructureSpec  domes, space frames, membranes, towers, cooling towers

Specs are created by deserializing external JSON (camelCase field names, as
produced by the planning layer) or snake_case keyword arguments, and are
consumed read-only by exactly one generator. Unknown fields are ignored.

Sub-variant strings ("CableStayed", "cable_stayed", "cable-stayed") parse
case-insensitively into tagged enums so the generators can dispatch once on
a closed set instead of comparing strings inside loops.

Example:
--------
    >>> spec = BridgeSpec.model_validate({"bridgeType": "cable-stayed", "spans": [35, 45, 35]})
    >>> spec.bridge_type
    <BridgeType.CABLE_STAYED: 'CableStayed'>
"""

from enum import Enum
from typing import Any, Dict, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _squash(text: str) -> str:
    return "".join(ch for ch in text.lower() if ch.isalnum())


class LooseEnum(str, Enum):
    """String enum that also accepts case/separator variants and aliases."""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            key = _squash(value)
            for member in cls:
                if _squash(member.value) == key:
                    return member
            target = _ALIASES.get(cls.__name__, {}).get(key)
            if target is not None:
                return cls(target)
        return None

    @classmethod
    def parse(cls, value):
        return cls(value) if isinstance(value, str) else value


class VesselType(LooseEnum):
    VERTICAL_TANK = "VerticalTank"
    HORIZONTAL_VESSEL = "HorizontalVessel"


class LateralSystem(LooseEnum):
    MOMENT_FRAME = "MomentFrame"
    BRACED_FRAME = "BracedFrame"
    SHEAR_WALL = "ShearWall"
    DUAL = "Dual"


class StructuralMaterial(LooseEnum):
    STEEL = "Steel"
    CONCRETE = "Concrete"


class DeckType(LooseEnum):
    COMPOSITE = "Composite"
    CONCRETE = "Concrete"


class RoofSystem(LooseEnum):
    PORTAL_RAFTER = "PortalRafter"
    TRUSS = "Truss"
    FLAT = "Flat"


class BridgeType(LooseEnum):
    GIRDER = "Girder"
    CABLE_STAYED = "CableStayed"
    ARCH = "Arch"
    TRUSS = "Truss"


class SpecialType(LooseEnum):
    SPACE_FRAME = "SpaceFrame"
    DOME = "Dome"
    MEMBRANE = "Membrane"
    TOWER = "Tower"
    COOLING_TOWER = "CoolingTower"
    TELECOM_TOWER = "TelecomTower"


_ALIASES: Dict[str, Dict[str, str]] = {
    "VesselType": {
        "vertical": "VerticalTank",
        "verticalcylinder": "VerticalTank",
        "tank": "VerticalTank",
        "cylindricalreservoir": "VerticalTank",
        "reservoir": "VerticalTank",
        "horizontal": "HorizontalVessel",
        "horizontalcylinder": "HorizontalVessel",
        "horizontaltank": "HorizontalVessel",
    },
    "LateralSystem": {
        "momentresisting": "MomentFrame",
        "braced": "BracedFrame",
        "wall": "ShearWall",
    },
    "BridgeType": {"cablestay": "CableStayed", "stayed": "CableStayed", "beam": "Girder"},
    "SpecialType": {"geodesic": "Dome", "tensile": "Membrane", "hyperboloid": "CoolingTower", "telecom": "TelecomTower"},
}


class SpecModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


# =============================================================================
# Shared pieces
# =============================================================================

class Units(SpecModel):
    length: Optional[str] = None  # "m" | "mm" | "ft" | "in"
    force: Optional[str] = None   # "kN" | "N" | "kip" | "lb"
    system: Optional[str] = None  # "kN_m_C" | "N_mm_C" | "kip_ft_F" | "kip_in_F"


class FrameSectionDef(SpecModel):
    """Partial frame section: anything left out falls back to defaults."""
    name: Optional[str] = None
    material: Optional[str] = None
    depth: float = 0.0
    width: float = 0.0


class ShellSectionDef(SpecModel):
    name: Optional[str] = None
    material: Optional[str] = None
    thickness: float = 0.0


# =============================================================================
# Vessel
# =============================================================================

class VesselGeometry(SpecModel):
    diameter: float = Field(10.0, gt=0)
    height: float = Field(8.0, gt=0)
    shell_thickness: float = 0.0
    num_wall_segments: int = 24
    num_height_segments: int = 8
    length: float = 0.0   # horizontal vessels (falls back to height)
    radius: float = 0.0   # horizontal vessels (falls back to diameter / 2)
    roof_rise: float = 0.0


class VesselMaterials(SpecModel):
    steel_grade: str = "A36"
    yield_stress: float = 250.0  # MPa, informational


class VesselSections(SpecModel):
    ring: Optional[FrameSectionDef] = None
    stave: Optional[FrameSectionDef] = None
    rafter: Optional[FrameSectionDef] = None
    wall: Optional[ShellSectionDef] = None


class VesselLoads(SpecModel):
    liquid_height: float = 0.0
    unit_weight: float = 0.0                 # force / length^3, model units unless unitWeightUnits
    unit_weight_units: Optional[str] = None  # e.g. "kN/m^3"
    density: float = 0.0
    density_units: str = "kg/m^3"
    internal_pressure_kpa: float = Field(0.0, alias="internalPressureKPa")


class VesselSpec(SpecModel):
    vessel_type: VesselType = Field(VesselType.VERTICAL_TANK, alias="type")
    units: Optional[Units] = None
    geometry: VesselGeometry = Field(default_factory=VesselGeometry)
    materials: VesselMaterials = Field(default_factory=VesselMaterials)
    sections: VesselSections = Field(default_factory=VesselSections)
    loads: VesselLoads = Field(default_factory=VesselLoads)
    foundation_elevation: float = 0.0
    fix_base: bool = True

    @field_validator("vessel_type", mode="before")
    @classmethod
    def _parse_type(cls, v):
        return VesselType.parse(v)


# =============================================================================
# Building
# =============================================================================

class BuildingLayout(SpecModel):
    bays_x: int = Field(3, ge=1)
    bays_y: int = Field(2, ge=1)
    bay_spacing_x: float = Field(6.0, gt=0)
    bay_spacing_y: float = Field(6.0, gt=0)
    base_elevation: float = 0.0


class StorySpec(SpecModel):
    name: Optional[str] = None
    height: float = Field(3.2, gt=0)
    beam_section: Optional[str] = None
    column_section: Optional[str] = None
    brace_section: Optional[str] = None
    shear_wall_panel: Optional[str] = None


def _default_stories() -> Tuple[StorySpec, ...]:
    return tuple(StorySpec(name=f"Story{i + 1}") for i in range(5))


class BuildingMaterials(SpecModel):
    steel_material: str = "A992Fy50"
    concrete_material: str = "Concrete4000"
    structural_material: StructuralMaterial = StructuralMaterial.STEEL
    steel_column: Optional[FrameSectionDef] = None
    steel_beam: Optional[FrameSectionDef] = None
    brace: Optional[FrameSectionDef] = None
    concrete_column: Optional[FrameSectionDef] = None
    concrete_beam: Optional[FrameSectionDef] = None
    shear_wall: Optional[ShellSectionDef] = None
    slab: Optional[ShellSectionDef] = None

    @field_validator("structural_material", mode="before")
    @classmethod
    def _parse_material(cls, v):
        return StructuralMaterial.parse(v)


class LateralSystemSpec(SpecModel):
    system_type: LateralSystem = LateralSystem.MOMENT_FRAME
    add_braces_in_both_directions: bool = False
    add_shear_wall_core: bool = False
    shear_wall_core_size: float = Field(6.0, gt=0)

    @field_validator("system_type", mode="before")
    @classmethod
    def _parse_system(cls, v):
        return LateralSystem.parse(v)


class DeckSpec(SpecModel):
    deck_type: DeckType = Field(DeckType.COMPOSITE, alias="type")
    property_name: Optional[str] = None
    thickness: float = 0.15
    material: Optional[str] = None

    @field_validator("deck_type", mode="before")
    @classmethod
    def _parse_deck(cls, v):
        return DeckType.parse(v)


class BuildingSpec(SpecModel):
    name: Optional[str] = None
    units: Optional[Units] = None
    layout: BuildingLayout = Field(default_factory=BuildingLayout)
    stories: Tuple[StorySpec, ...] = Field(default_factory=_default_stories)
    materials: BuildingMaterials = Field(default_factory=BuildingMaterials)
    lateral_system: LateralSystemSpec = Field(default_factory=LateralSystemSpec)
    deck: Optional[DeckSpec] = None

    @field_validator("stories", mode="before")
    @classmethod
    def _default_when_empty(cls, v):
        if v is None or (isinstance(v, (list, tuple)) and len(v) == 0):
            return _default_stories()
        return v


# =============================================================================
# Industrial shed
# =============================================================================

class IndustrialRoofSpec(SpecModel):
    system: RoofSystem = RoofSystem.PORTAL_RAFTER
    slope_ratio: float = 0.2        # rise per half span
    add_purlins: bool = True
    truss_panels: int = 4
    purlin_section: Optional[str] = None
    ridge_offset: float = 0.0       # asymmetric ridge

    @field_validator("system", mode="before")
    @classmethod
    def _parse_system(cls, v):
        return RoofSystem.parse(v)


class IndustrialBracingSpec(SpecModel):
    portal_bracing: bool = True
    roof_bracing: bool = True
    longitudinal_bracing: bool = True
    brace_section: Optional[str] = None


class IndustrialCraneSpec(SpecModel):
    enabled: bool = False
    runway_elevation: float = 6.5
    runway_section: Optional[str] = None
    inset: float = 0.6              # distance from column line


class IndustrialFrameSpec(SpecModel):
    columns: FrameSectionDef = FrameSectionDef(name="Column450x350", depth=0.45, width=0.35, material="A992Fy50")
    rafters: FrameSectionDef = FrameSectionDef(name="Rafter400x300", depth=0.40, width=0.30, material="A992Fy50")
    crane_girders: FrameSectionDef = FrameSectionDef(name="CraneGirder500x300", depth=0.50, width=0.30, material="A572Gr50")
    purlins: FrameSectionDef = FrameSectionDef(name="Purlin200x100", depth=0.20, width=0.10, material="A36")
    braces: FrameSectionDef = FrameSectionDef(name="Brace200x200", depth=0.20, width=0.20, material="A572Gr50")


class IndustrialBayOverride(SpecModel):
    bay_index: int
    bay_spacing: Optional[float] = None
    add_portal_bracing: Optional[bool] = None
    add_crane: Optional[bool] = None


class IndustrialSpec(SpecModel):
    name: Optional[str] = None
    units: Optional[Units] = None
    span: float = Field(24.0, gt=0)
    bay_spacing: float = Field(6.0, gt=0)
    bay_count: int = Field(5, ge=1)
    length: Optional[float] = None  # explicit total; None/<=0 -> sum of bays
    aisle_count: int = Field(1, ge=1)
    base_elevation: float = 0.0
    eave_height: float = Field(8.0, gt=0)
    ridge_height: float = 10.0
    fix_base: bool = True
    roof: IndustrialRoofSpec = Field(default_factory=IndustrialRoofSpec)
    bracing: IndustrialBracingSpec = Field(default_factory=IndustrialBracingSpec)
    crane: IndustrialCraneSpec = Field(default_factory=IndustrialCraneSpec)
    frames: IndustrialFrameSpec = Field(default_factory=IndustrialFrameSpec)
    bay_overrides: Tuple[IndustrialBayOverride, ...] = ()


# =============================================================================
# Bridge
# =============================================================================

class BridgeSpanSpec(SpecModel):
    length: float = Field(30.0, gt=0)
    has_expansion_joint: bool = False


class BridgeSupportSpec(SpecModel):
    pier_height: float = 10.0
    fix_base: bool = True
    foundation_elevation: float = 0.0
    columns_per_pier: int = Field(2, ge=1)
    pier_section: str = "PierColumn1200"
    material: str = "Concrete4000"


class BridgeSuperstructureSpec(SpecModel):
    girder_section: str = "Girder900x300"
    cross_beam_section: str = "CrossBeam600x250"
    cable_section: str = "CableRod120"
    arch_section: str = "ArchBox800x400"
    truss_section: str = "TrussMember400x250"
    tower_section: str = "TowerLeg2000x2000"
    material: str = "A709Gr50"
    tower_height: float = 35.0
    truss_height: float = 6.0
    arch_rise_ratio: float = 0.2    # rise relative to span
    add_diaphragms: bool = True


class BridgeSpec(SpecModel):
    name: Optional[str] = None
    units: Optional[Units] = None
    bridge_type: BridgeType = BridgeType.GIRDER
    spans: Tuple[BridgeSpanSpec, ...] = Field(default_factory=lambda: (BridgeSpanSpec(),))
    deck_width: float = Field(12.0, gt=0)
    girders: int = Field(4, ge=1)
    segments_per_span: int = Field(8, ge=1)
    deck_elevation: float = 12.0
    supports: BridgeSupportSpec = Field(default_factory=BridgeSupportSpec)
    superstructure: BridgeSuperstructureSpec = Field(default_factory=BridgeSuperstructureSpec)

    @field_validator("bridge_type", mode="before")
    @classmethod
    def _parse_type(cls, v):
        return BridgeType.parse(v)

    @field_validator("spans", mode="before")
    @classmethod
    def _spans_from_numbers(cls, v):
        if v is None:
            return (BridgeSpanSpec(),)
        if isinstance(v, (list, tuple)):
            if len(v) == 0:
                return (BridgeSpanSpec(),)
            return tuple({"length": s} if isinstance(s, (int, float)) else s for s in v)
        return v


# =============================================================================
# Special structures
# =============================================================================

class SpecialTowerSpec(SpecModel):
    sides: int = Field(4, ge=3)
    segments: int = Field(8, ge=1)
    taper_ratio: float = 0.15       # top radius / base radius
    leg_section: str = "TowerLeg350x250"
    brace_section: str = "TowerBrace200x150"


class SpecialMembraneSpec(SpecModel):
    membrane_section: str = "MembranePTFE"
    edge_cable_section: str = "EdgeCable90"
    prestress: float = 2.0          # force per length along the edge
    thickness: float = 0.001
    material: str = "PTFE"


class SpecialStructureSpec(SpecModel):
    name: Optional[str] = None
    units: Optional[Units] = None
    structure_type: SpecialType = SpecialType.SPACE_FRAME
    radius: float = Field(25.0, gt=0)
    height: float = Field(18.0, gt=0)
    rings: int = Field(5, ge=1)
    segments: int = Field(24, ge=3)
    base_elevation: float = 0.0
    fix_base: bool = True
    member_section: str = "SpaceFrameTube200"
    shell_section: str = "Shell250"
    shell_thickness: float = 0.25
    material: str = "A992Fy50"
    shell_material: str = "Concrete4000"
    tower: SpecialTowerSpec = Field(default_factory=SpecialTowerSpec)
    membrane: SpecialMembraneSpec = Field(default_factory=SpecialMembraneSpec)

    @field_validator("structure_type", mode="before")
    @classmethod
    def _parse_type(cls, v):
        return SpecialType.parse(v)


# =============================================================================
# Lookup
# =============================================================================

StructureSpec = Union[VesselSpec, BuildingSpec, IndustrialSpec, BridgeSpec, SpecialStructureSpec]

SPEC_TYPES: Dict[str, Type[SpecModel]] = {
    "vessel": VesselSpec,
    "tank": VesselSpec,
    "building": BuildingSpec,
    "industrial": IndustrialSpec,
    "shed": IndustrialSpec,
    "bridge": BridgeSpec,
    "special": SpecialStructureSpec,
}


def parse_spec(archetype: str, data: Dict[str, Any]) -> StructureSpec:
    """
    Deserialize raw JSON-like data into the spec of `archetype`.

    Raises:
    -------
    ValueError
        Unknown archetype (pydantic.ValidationError, a ValueError subclass,
        for invalid field values)
    """
    key = archetype.strip().lower()
    if key not in SPEC_TYPES:
        raise ValueError(f"Unknown archetype: {archetype}. Expected one of {sorted(set(SPEC_TYPES))}")
    return SPEC_TYPES[key].model_validate(data or {})
