# structsynth/generative/special.py
"""
SPECIAL STRUCTURE GENERATOR: Long-Span and Tall Forms
=====================================================

PURPOSE:
--------
Generate rotationally symmetric special structures from a
SpecialStructureSpec: ring-and-apex grids (domes, conical space frames),
a prestressed membrane, lattice towers and hyperboloid cooling towers.

GEOMETRY:
---------
Every type is built from concentric polygons ("rings") of `segments`
vertices (`tower.sides` for towers):

    Dome          r = R cos(phi),  z = H sin(phi),  phi = (pi/2) k / rings
    SpaceFrame    r = R (1 - k/rings), z = H k / rings
    Tower         r = R (1 - (1 - taperRatio) k / segments)
    CoolingTower  r = R (1 - 0.3 sin(pi f)),  f = k / rings

Domes and space frames close at an apex node, and every ring node is
tied to it by an apex spoke. Ring indices wrap; levels do not.

MEMBRANE:
---------
A closed edge-cable polygon at the base and a raised central mast node,
meshed with triangular membrane panels. Edge nodes are pinned; the cable
prestress is lumped to the edge nodes as outward nodal forces under a
PRESTRESS pattern.
"""

import logging
from typing import List

import numpy as np

from ..config import CONFIG, SynthConfig
from ..engine.port import FIXED, PINNED, LoadCategory
from ..kernel.context import GenerationContext, run_generation
from ..kernel.registry import resolve_line_section, resolve_panel_section
from ..loads import lump_edge_prestress
from ..model import LineSection, PanelSection
from ..result import GenerationResult
from ..specs import FrameSectionDef, ShellSectionDef, SpecialStructureSpec, SpecialType

logger = logging.getLogger(__name__)

FRAME_DEFAULT = LineSection("SpaceFrameTube200", "A992Fy50", 0.20, 0.20)
SHELL_DEFAULT = PanelSection("Shell250", "Concrete4000", 0.25)
TOWER_LEG_DEFAULT = LineSection("TowerLeg350x250", "A992Fy50", 0.35, 0.25)
TOWER_BRACE_DEFAULT = LineSection("TowerBrace200x150", "A992Fy50", 0.20, 0.15)
EDGE_CABLE_DEFAULT = LineSection("EdgeCable90", "A416Gr270", 0.09, 0.09)
MEMBRANE_DEFAULT = PanelSection("MembranePTFE", "PTFE", 0.001)


def _polygon(ctx: GenerationContext, radius: float, z: float, n: int) -> List[str]:
    return [
        ctx.place(radius * np.cos(2.0 * np.pi * j / n), radius * np.sin(2.0 * np.pi * j / n), z)
        for j in range(n)
    ]


def _close_ring(ctx: GenerationContext, ring: List[str], section: str, group: str) -> None:
    for j in range(len(ring)):
        ctx.add_member(ring[j], ring[(j + 1) % len(ring)], section, group)


def _support(ctx: GenerationContext, spec: SpecialStructureSpec, nodes: List[str]) -> None:
    flags = FIXED if spec.fix_base else PINNED
    for node in nodes:
        ctx.restrain(node, flags)


def _frame_section(ctx: GenerationContext, spec: SpecialStructureSpec) -> str:
    return ctx.sections.ensure_resolved(resolve_line_section(
        FrameSectionDef(name=spec.member_section, material=spec.material), hard_default=FRAME_DEFAULT))


def _ring_grid(ctx: GenerationContext, spec: SpecialStructureSpec) -> None:
    """Dome / SpaceFrame: rings shrinking to an apex."""
    n_rings, n = spec.rings, spec.segments
    z0 = spec.base_elevation
    rings = []
    for k in range(n_rings):
        if spec.structure_type == SpecialType.DOME:
            phi = 0.5 * np.pi * k / n_rings
            radius, z = spec.radius * np.cos(phi), z0 + spec.height * np.sin(phi)
        else:
            radius, z = spec.radius * (1.0 - k / n_rings), z0 + spec.height * k / n_rings
        rings.append(_polygon(ctx, radius, z, n))
    apex = ctx.place(0.0, 0.0, z0 + spec.height)

    section = _frame_section(ctx, spec)
    for k, ring in enumerate(rings):
        _close_ring(ctx, ring, section, "ring")
        for node in ring:
            ctx.add_member(node, apex, section, "apex")
        if k == 0:
            continue
        below = rings[k - 1]
        for j in range(n):
            ctx.add_member(below[j], ring[j], section, "meridian")
            ctx.add_member(below[(j + 1) % n], ring[j], section, "diagonal")

    _support(ctx, spec, rings[0])


def _membrane(ctx: GenerationContext, spec: SpecialStructureSpec) -> None:
    mem = spec.membrane
    n = spec.segments
    z0 = spec.base_elevation
    points = [
        (spec.radius * np.cos(2.0 * np.pi * j / n), spec.radius * np.sin(2.0 * np.pi * j / n), z0)
        for j in range(n)
    ]
    edge = ctx.place_all(points)
    center = ctx.place(0.0, 0.0, z0 + spec.height)

    cable = ctx.sections.ensure_resolved(resolve_line_section(
        FrameSectionDef(name=mem.edge_cable_section), hard_default=EDGE_CABLE_DEFAULT))
    _close_ring(ctx, edge, cable, "edge_cable")

    fabric = ctx.sections.ensure_resolved(resolve_panel_section(
        ShellSectionDef(name=mem.membrane_section, material=mem.material, thickness=mem.thickness),
        hard_default=MEMBRANE_DEFAULT))
    for j in range(n):
        ctx.add_panel([center, edge[j], edge[(j + 1) % n]], fabric, "membrane")

    for node in edge:
        ctx.restrain(node, PINNED)

    if mem.prestress > 0:
        pattern = ctx.config.prestress_pattern
        ctx.ensure_pattern(pattern, LoadCategory.PRESTRESS)
        total = lump_edge_prestress(edge, points, (0.0, 0.0), mem.prestress, ctx.loads, pattern)
        logger.info("prestress: %.4g per length, total %.6g", mem.prestress, total)


def _tower(ctx: GenerationContext, spec: SpecialStructureSpec) -> None:
    tower = spec.tower
    n, m = tower.sides, tower.segments
    z0 = spec.base_elevation
    telecom = spec.structure_type == SpecialType.TELECOM_TOWER

    levels = []
    for k in range(m + 1):
        radius = spec.radius * (1.0 - (1.0 - tower.taper_ratio) * k / m)
        levels.append(_polygon(ctx, radius, z0 + spec.height * k / m, n))

    leg = ctx.sections.ensure_resolved(resolve_line_section(
        FrameSectionDef(name=tower.leg_section, material=spec.material), hard_default=TOWER_LEG_DEFAULT))
    brace = ctx.sections.ensure_resolved(resolve_line_section(
        FrameSectionDef(name=tower.brace_section, material=spec.material), hard_default=TOWER_BRACE_DEFAULT))

    for k in range(1, m + 1):
        below, level = levels[k - 1], levels[k]
        for j in range(n):
            j2 = (j + 1) % n
            ctx.add_member(below[j], level[j], leg, "leg")
            ctx.add_member(below[j], level[j2], brace, "diagonal")
            ctx.add_member(below[j2], level[j], brace, "diagonal")
        _close_ring(ctx, level, brace, "horizontal")
        if n % 2 == 0 and not (telecom and k == m):
            for j in range(n // 2):
                ctx.add_member(level[j], level[j + n // 2], brace, "plan_brace")

    _support(ctx, spec, levels[0])

    if telecom:
        z_top = z0 + spec.height
        hub = ctx.place(0.0, 0.0, z_top)
        for node in levels[-1]:
            ctx.add_member(hub, node, brace, "platform")
        ctx.add_member(hub, ctx.place(0.0, 0.0, z_top + 0.15 * spec.height), leg, "mast")


def _cooling_tower(ctx: GenerationContext, spec: SpecialStructureSpec) -> None:
    n_rings, n = spec.rings, spec.segments
    rings = []
    for k in range(n_rings + 1):
        f = k / n_rings
        radius = spec.radius * (1.0 - 0.3 * np.sin(np.pi * f))
        rings.append(_polygon(ctx, radius, spec.base_elevation + spec.height * f, n))

    shell = ctx.sections.ensure_resolved(resolve_panel_section(
        ShellSectionDef(name=spec.shell_section, material=spec.shell_material, thickness=spec.shell_thickness),
        hard_default=SHELL_DEFAULT))
    for k in range(n_rings):
        for j in range(n):
            j2 = (j + 1) % n
            ctx.add_panel([rings[k][j], rings[k][j2], rings[k + 1][j2], rings[k + 1][j]], shell, "shell")

    _support(ctx, spec, rings[0])


_VARIANTS = {
    SpecialType.SPACE_FRAME: _ring_grid,
    SpecialType.DOME: _ring_grid,
    SpecialType.MEMBRANE: _membrane,
    SpecialType.TOWER: _tower,
    SpecialType.TELECOM_TOWER: _tower,
    SpecialType.COOLING_TOWER: _cooling_tower,
}


def generate_special(engine, spec: SpecialStructureSpec, config: SynthConfig = CONFIG) -> GenerationResult:
    """
    Build a special structure in `engine`.

    Groups in the result: ring, meridian, diagonal, apex, edge_cable,
    membrane, leg, horizontal, plan_brace, platform, mast, shell.
    """
    build = _VARIANTS[spec.structure_type]
    return run_generation(engine, "special", spec.units, lambda ctx: build(ctx, spec), config)
