# structsynth/generative/vessel.py
"""
VESSEL GENERATOR: Cylindrical Tanks and Horizontal Vessels
==========================================================

PURPOSE:
--------
Turn a VesselSpec into a ring/stave frame mesh, optional wall panels and
roof, base restraints and the derived pressure loads on the wall.

ENGINEERING CONTEXT:
--------------------
A vertical storage tank is idealized as a cylinder of circumferential
"ring" members and vertical "stave" members. The wall shell, when given a
thickness, is meshed with quadrilateral panels on the same grid. Liquid
pressure is a triangular field (zero at the free surface, gamma * H at the
base); it is integrated strip by strip and lumped to the ring nodes (see
structsynth/loads.py).

PARAMETRIZATION:
----------------
    nCirc = max(12, numWallSegments)       circumferential divisions (wrap)
    nZ    = max(2, numHeightSegments)      node rings from base to top
    dz    = height / (nZ - 1)

    ring iz, index ic  ->  (R cos(ic dTheta), R sin(ic dTheta), z0 + iz dz)

So a 24 x 8 tank has 192 nodes, 24 * 7 = 168 staves and 8 * 24 = 192 ring
members.

VARIANTS:
---------
- VerticalTank:      axis along Z, base ring restrained
- HorizontalVessel:  axis along X at foundation + radius, saddle restraints
                     at the lowest node of both end rings
"""

import logging
from typing import List, Sequence

import numpy as np

from ..config import CONFIG, SynthConfig
from ..engine.port import FIXED, PINNED, LoadCategory
from ..kernel.context import GenerationContext, run_generation
from ..kernel.errors import LoadError
from ..kernel.registry import resolve_line_section, resolve_panel_section
from ..kernel.units import convert_to_model, density_to_unit_weight
from ..loads import (
    hydrostatic_segment_force,
    lump_wall_pressure,
    uniform_segment_force,
)
from ..model import LineSection, PanelSection
from ..result import GenerationResult
from ..specs import FrameSectionDef, ShellSectionDef, VesselSpec, VesselType

logger = logging.getLogger(__name__)

RING_DEFAULT = LineSection("TankRing250x150", "A36", 0.25, 0.15)
STAVE_DEFAULT = LineSection("TankStave200x150", "A36", 0.20, 0.15)
RAFTER_DEFAULT = LineSection("TankRafter250x150", "A36", 0.25, 0.15)
WALL_DEFAULT = PanelSection("TankWall", "A36", 0.01)


def _line_section(ctx: GenerationContext, explicit, spec: VesselSpec, hard: LineSection) -> str:
    structure = FrameSectionDef(material=spec.materials.steel_grade)
    return ctx.sections.ensure_resolved(resolve_line_section(explicit, structure, hard_default=hard))


def _wall_section(ctx: GenerationContext, spec: VesselSpec) -> str:
    structure = ShellSectionDef(material=spec.materials.steel_grade, thickness=spec.geometry.shell_thickness)
    return ctx.sections.ensure_resolved(
        resolve_panel_section(spec.sections.wall, structure, hard_default=WALL_DEFAULT)
    )


def _grid_panels(ctx: GenerationContext, rings: Sequence[Sequence[str]], section: str, group: str) -> None:
    """Quadrilateral panels between consecutive rings (circumference wraps)."""
    n_circ = len(rings[0])
    for iz in range(len(rings) - 1):
        for ic in range(n_circ):
            ic2 = (ic + 1) % n_circ
            ctx.add_panel(
                [rings[iz][ic], rings[iz][ic2], rings[iz + 1][ic2], rings[iz + 1][ic]],
                section,
                group,
            )


def liquid_unit_weight(spec: VesselSpec, ctx: GenerationContext) -> float:
    """
    Unit weight of the contents in model units.

    An explicit unitWeight wins (converted when unitWeightUnits is given);
    otherwise it is derived from density * g. Zero means "no liquid".
    """
    loads = spec.loads
    try:
        if loads.unit_weight > 0:
            if loads.unit_weight_units:
                return convert_to_model(loads.unit_weight, loads.unit_weight_units, ctx.unit_system, "unit_weight")
            return float(loads.unit_weight)
        if loads.density > 0:
            return density_to_unit_weight(
                loads.density, loads.density_units, ctx.unit_system, ctx.config.standard_gravity
            )
    except ValueError as e:
        raise LoadError(str(e), operation="unit_weight") from e
    return 0.0


def _wall_loads(
    ctx: GenerationContext,
    spec: VesselSpec,
    rings: List[List[str]],
    angles: Sequence[float],
    levels: Sequence[float],
    width: float,
) -> None:
    cfg = ctx.config
    liquid_height = spec.loads.liquid_height
    if liquid_height > spec.geometry.height:
        logger.warning(
            "liquid height %.3f is above the wall top %.3f; the whole wall is loaded with the full head",
            liquid_height, spec.geometry.height,
        )
    gamma = liquid_unit_weight(spec, ctx)

    if liquid_height > 0 and gamma > 0:
        ctx.ensure_pattern(cfg.hydrostatic_pattern, LoadCategory.OTHER)
        total = lump_wall_pressure(
            rings, angles, levels, width,
            lambda z_low, z_high: hydrostatic_segment_force(z_low, z_high, liquid_height, gamma, width),
            ctx.loads, cfg.hydrostatic_pattern,
        )
        logger.info("hydrostatic: H=%.3f gamma=%.4g total radial force %.6g", liquid_height, gamma, total)

    if spec.loads.internal_pressure_kpa > 0:
        try:
            pressure = convert_to_model(spec.loads.internal_pressure_kpa, "kPa", ctx.unit_system, "pressure")
        except ValueError as e:
            raise LoadError(str(e), operation="internal_pressure") from e
        ctx.ensure_pattern(cfg.internal_pressure_pattern, LoadCategory.OTHER)
        total = lump_wall_pressure(
            rings, angles, levels, width,
            lambda z_low, z_high: uniform_segment_force(z_low, z_high, pressure, width),
            ctx.loads, cfg.internal_pressure_pattern,
        )
        logger.info("internal pressure: p=%.4g total radial force %.6g", pressure, total)


def _vertical_tank(ctx: GenerationContext, spec: VesselSpec) -> None:
    g = spec.geometry
    cfg = ctx.config
    radius = g.diameter / 2.0
    n_circ = max(cfg.min_circumferential_segments, g.num_wall_segments)
    n_z = max(cfg.min_height_rings, g.num_height_segments)
    z0 = spec.foundation_elevation
    dz = g.height / (n_z - 1)

    angles = [2.0 * np.pi * ic / n_circ for ic in range(n_circ)]
    levels = [iz * dz for iz in range(n_z)]

    rings = [
        [ctx.place(radius * np.cos(t), radius * np.sin(t), z0 + level) for t in angles]
        for level in levels
    ]

    stave = _line_section(ctx, spec.sections.stave, spec, STAVE_DEFAULT)
    for ic in range(n_circ):
        for iz in range(n_z - 1):
            ctx.add_member(rings[iz][ic], rings[iz + 1][ic], stave, "vertical")

    ring = _line_section(ctx, spec.sections.ring, spec, RING_DEFAULT)
    for iz in range(n_z):
        for ic in range(n_circ):
            ctx.add_member(rings[iz][ic], rings[iz][(ic + 1) % n_circ], ring, "ring")

    if g.shell_thickness > 0:
        _grid_panels(ctx, rings, _wall_section(ctx, spec), "wall")

    if g.roof_rise > 0:
        rafter = _line_section(ctx, spec.sections.rafter, spec, RAFTER_DEFAULT)
        apex = ctx.place(0.0, 0.0, z0 + g.height + g.roof_rise)
        for node in rings[-1]:
            ctx.add_member(node, apex, rafter, "rafter")

    base = FIXED if spec.fix_base else PINNED
    for node in rings[0]:
        ctx.restrain(node, base)

    _wall_loads(ctx, spec, rings, angles, levels, width=2.0 * np.pi * radius / n_circ)


def _horizontal_vessel(ctx: GenerationContext, spec: VesselSpec) -> None:
    g = spec.geometry
    cfg = ctx.config
    radius = g.radius if g.radius > 0 else g.diameter / 2.0
    length = g.length if g.length > 0 else g.height
    n_circ = max(cfg.min_circumferential_segments, g.num_wall_segments)
    n_st = max(cfg.min_height_rings, g.num_height_segments)
    z_axis = spec.foundation_elevation + radius
    dx = length / (n_st - 1)

    # ic = 0 is the bottom of each ring
    angles = [-0.5 * np.pi + 2.0 * np.pi * ic / n_circ for ic in range(n_circ)]
    rings = [
        [ctx.place(ist * dx, radius * np.cos(t), z_axis + radius * np.sin(t)) for t in angles]
        for ist in range(n_st)
    ]

    stave = _line_section(ctx, spec.sections.stave, spec, STAVE_DEFAULT)
    for ic in range(n_circ):
        for ist in range(n_st - 1):
            ctx.add_member(rings[ist][ic], rings[ist + 1][ic], stave, "longitudinal")

    ring = _line_section(ctx, spec.sections.ring, spec, RING_DEFAULT)
    for ist in range(n_st):
        for ic in range(n_circ):
            ctx.add_member(rings[ist][ic], rings[ist][(ic + 1) % n_circ], ring, "ring")

    if g.shell_thickness > 0:
        _grid_panels(ctx, rings, _wall_section(ctx, spec), "wall")

    saddle = FIXED if spec.fix_base else PINNED
    ctx.restrain(rings[0][0], saddle)
    ctx.restrain(rings[-1][0], saddle)

    if spec.loads.liquid_height > 0 or spec.loads.internal_pressure_kpa > 0:
        logger.warning("pressure loads are not lumped for horizontal vessels; skipping")


_VARIANTS = {
    VesselType.VERTICAL_TANK: _vertical_tank,
    VesselType.HORIZONTAL_VESSEL: _horizontal_vessel,
}


def generate_vessel(engine, spec: VesselSpec, config: SynthConfig = CONFIG) -> GenerationResult:
    """
    Build a vessel model in `engine`.

    Parameters:
    -----------
    engine : StructuralEnginePort
    spec : VesselSpec
    config : SynthConfig

    Returns:
    --------
    GenerationResult
        Counts of what was created (groups: vertical/longitudinal, ring,
        wall, rafter)
    """
    build = _VARIANTS[spec.vessel_type]
    return run_generation(engine, "vessel", spec.units, lambda ctx: build(ctx, spec), config)
