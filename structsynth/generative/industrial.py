# structsynth/generative/industrial.py
"""
INDUSTRIAL GENERATOR: Portal and Truss Sheds
============================================

PURPOSE:
--------
Generate a single- or multi-aisle industrial shed from an IndustrialSpec:
transverse frames repeated along the building length, tied together by
purlins, eave ties and bracing, with an optional overhead-crane runway.

ENGINEERING CONTEXT:
--------------------
Transverse frames (columns + roof) resist gravity and cross-wind; the
longitudinal direction is stabilized by X-bracing in selected bays of the
side walls and the roof plane. Cranes run on girders supported by
brackets on the columns, so a column is split where its bracket lands.

LAYOUT:
-------
    frames  at y_f = sum of bay spacings before frame f    (X = span)
    aisles  a = 0..aisleCount-1 between x = a*span and (a+1)*span
    eave    z = baseElevation + eaveHeight
    ridge   z = baseElevation + ridgeHeight, or eave + slopeRatio*span/2
            when ridgeHeight does not exceed eaveHeight

ROOF SYSTEMS:
-------------
- PortalRafter: a rafter chain over the roof profile
- Truss:        top chord on the profile, bottom chord at eave level,
                verticals and alternating diagonals
- Flat:         horizontal rafter chain at eave level

The roof profile has `trussPanels` segments (at least 2) split around the
ridge point, so the ridge is always a node.
"""

import logging
from typing import Dict, List, Set, Tuple

from ..config import CONFIG, SynthConfig
from ..engine.port import FIXED, PINNED
from ..kernel.context import GenerationContext, run_generation
from ..kernel.registry import resolve_line_section
from ..model import LineSection
from ..result import GenerationResult
from ..specs import FrameSectionDef, IndustrialSpec, RoofSystem

logger = logging.getLogger(__name__)

Point = Tuple[float, float, float]

COLUMN_DEFAULT = LineSection("Column450x350", "A992Fy50", 0.45, 0.35)
RAFTER_DEFAULT = LineSection("Rafter400x300", "A992Fy50", 0.40, 0.30)
CRANE_GIRDER_DEFAULT = LineSection("CraneGirder500x300", "A572Gr50", 0.50, 0.30)
PURLIN_DEFAULT = LineSection("Purlin200x100", "A36", 0.20, 0.10)
BRACE_DEFAULT = LineSection("Brace200x200", "A572Gr50", 0.20, 0.20)


def bay_spacings(spec: IndustrialSpec) -> List[float]:
    """
    Spacing of every bay.

    Bay overrides replace the default spacing by index. With an explicit
    total length, the bays without an override share what is left of it.

    Examples:
    ---------
    >>> bay_spacings(IndustrialSpec(bay_count=3, bay_spacing=6.0))
    [6.0, 6.0, 6.0]
    """
    n = spec.bay_count
    fixed: Dict[int, float] = {}
    for override in spec.bay_overrides:
        if 0 <= override.bay_index < n and override.bay_spacing is not None and override.bay_spacing > 0:
            fixed[override.bay_index] = float(override.bay_spacing)

    spacings = [fixed.get(i, float(spec.bay_spacing)) for i in range(n)]
    if spec.length is not None and spec.length > 0:
        free = [i for i in range(n) if i not in fixed]
        remainder = spec.length - sum(fixed.values())
        if free and remainder > 0:
            for i in free:
                spacings[i] = remainder / len(free)
        elif free or abs(remainder) > 1e-6:
            logger.warning(
                "length %.3f does not fit the bay overrides (%.3f left for %d free bays); using default spacing",
                spec.length, remainder, len(free),
            )
    return spacings


def frame_positions(spec: IndustrialSpec) -> List[float]:
    positions = [0.0]
    for spacing in bay_spacings(spec):
        positions.append(positions[-1] + spacing)
    return positions


def _with_overrides(spec: IndustrialSpec, bays: Set[int], attr: str) -> Set[int]:
    bays = set(bays)
    for override in spec.bay_overrides:
        value = getattr(override, attr)
        if value is None or not 0 <= override.bay_index < spec.bay_count:
            continue
        if value:
            bays.add(override.bay_index)
        else:
            bays.discard(override.bay_index)
    return bays


def braced_bays(spec: IndustrialSpec) -> Set[int]:
    """End bays when portal bracing is on, adjusted by per-bay overrides."""
    default = {0, spec.bay_count - 1} if spec.bracing.portal_bracing else set()
    return _with_overrides(spec, default, "add_portal_bracing")


def crane_bays(spec: IndustrialSpec) -> Set[int]:
    default = set(range(spec.bay_count)) if spec.crane.enabled else set()
    return _with_overrides(spec, default, "add_crane")


def roof_profile(spec: IndustrialSpec, x0: float) -> List[Tuple[float, float]]:
    """(x, z) points of one aisle's roof from eave to eave."""
    z_eave = spec.base_elevation + spec.eave_height
    n_panels = max(2, spec.roof.truss_panels)
    x1 = x0 + spec.span

    if spec.roof.system == RoofSystem.FLAT:
        return [(x0 + spec.span * i / n_panels, z_eave) for i in range(n_panels + 1)]

    if spec.ridge_height > spec.eave_height:
        z_ridge = spec.base_elevation + spec.ridge_height
    else:
        z_ridge = z_eave + spec.roof.slope_ratio * spec.span / 2.0
    x_ridge = x0 + spec.span / 2.0 + spec.roof.ridge_offset
    x_ridge = min(max(x_ridge, x0 + 0.05 * spec.span), x1 - 0.05 * spec.span)

    left = n_panels // 2
    right = n_panels - left
    points = [
        (x0 + (x_ridge - x0) * i / left, z_eave + (z_ridge - z_eave) * i / left)
        for i in range(left)
    ]
    points += [
        (x_ridge + (x1 - x_ridge) * i / right, z_ridge - (z_ridge - z_eave) * i / right)
        for i in range(right + 1)
    ]
    return points


class _Sections:
    def __init__(self, ctx: GenerationContext, spec: IndustrialSpec):
        f = spec.frames
        ensure = ctx.sections.ensure_resolved
        self.column = ensure(resolve_line_section(f.columns, hard_default=COLUMN_DEFAULT))
        self.rafter = ensure(resolve_line_section(f.rafters, hard_default=RAFTER_DEFAULT))
        self._ctx = ctx
        self._spec = spec
        self._cache: Dict[str, str] = {}

    def _lazy(self, key: str, *candidates, hard: LineSection) -> str:
        if key not in self._cache:
            self._cache[key] = self._ctx.sections.ensure_resolved(resolve_line_section(*candidates, hard_default=hard))
        return self._cache[key]

    @property
    def purlin(self) -> str:
        s = self._spec
        return self._lazy("purlin", FrameSectionDef(name=s.roof.purlin_section), s.frames.purlins, hard=PURLIN_DEFAULT)

    @property
    def brace(self) -> str:
        s = self._spec
        return self._lazy("brace", FrameSectionDef(name=s.bracing.brace_section), s.frames.braces, hard=BRACE_DEFAULT)

    @property
    def crane_girder(self) -> str:
        s = self._spec
        return self._lazy("crane", FrameSectionDef(name=s.crane.runway_section), s.frames.crane_girders,
                          hard=CRANE_GIRDER_DEFAULT)


def _truss(ctx: GenerationContext, top: List[Point], z_eave: float, sections: _Sections) -> None:
    bottom = [(x, y, z_eave) for x, y, _ in top]
    top_nodes = ctx.add_chain(top, sections.rafter, "top_chord")
    bottom_nodes = ctx.add_chain(bottom, sections.rafter, "bottom_chord")
    for t, b in zip(top_nodes, bottom_nodes):
        ctx.add_member(b, t, sections.brace, "truss_web")
    # end panels are already triangles
    for i in range(1, len(top) - 2):
        if i % 2:
            ctx.add_member(top_nodes[i], bottom_nodes[i + 1], sections.brace, "truss_web")
        else:
            ctx.add_member(bottom_nodes[i], top_nodes[i + 1], sections.brace, "truss_web")


def _build(ctx: GenerationContext, spec: IndustrialSpec) -> None:
    sections = _Sections(ctx, spec)
    ys = frame_positions(spec)
    z_base = spec.base_elevation
    z_eave = z_base + spec.eave_height
    aisles = [a * spec.span for a in range(spec.aisle_count)]
    column_lines = aisles + [spec.aisle_count * spec.span]
    profiles = [roof_profile(spec, x0) for x0 in aisles]

    braced = braced_bays(spec)
    cranes = crane_bays(spec)
    z_runway = z_base + spec.crane.runway_elevation
    if cranes and not z_base < z_runway < z_eave:
        logger.warning("runway elevation %.3f is outside the column height; crane skipped", spec.crane.runway_elevation)
        cranes = set()

    support = FIXED if spec.fix_base else PINNED
    for f, y in enumerate(ys):
        crane_frame = bool(cranes & {f - 1, f})
        for x in column_lines:
            levels = [z_base, z_runway, z_eave] if crane_frame else [z_base, z_eave]
            nodes = ctx.add_chain([(x, y, z) for z in levels], sections.column, "column")
            ctx.restrain(nodes[0], support)

        for profile in profiles:
            top = [(x, y, z) for x, z in profile]
            if spec.roof.system == RoofSystem.TRUSS:
                _truss(ctx, top, z_eave, sections)
            else:
                ctx.add_chain(top, sections.rafter, "rafter")

    for b in range(spec.bay_count):
        y0, y1 = ys[b], ys[b + 1]

        if spec.roof.add_purlins:
            for profile in profiles:
                for x, z in profile[1:-1]:
                    ctx.connect((x, y0, z), (x, y1, z), sections.purlin, "purlin")

        if spec.bracing.longitudinal_bracing:
            for x in column_lines:
                ctx.connect((x, y0, z_eave), (x, y1, z_eave), sections.brace, "eave_tie")

        if b in braced:
            for x in (column_lines[0], column_lines[-1]):
                ctx.connect((x, y0, z_base), (x, y1, z_eave), sections.brace, "wall_brace")
                ctx.connect((x, y1, z_base), (x, y0, z_eave), sections.brace, "wall_brace")
            if spec.bracing.roof_bracing:
                for profile in profiles:
                    for (xa, za), (xb, zb) in zip(profile[:-1], profile[1:]):
                        ctx.connect((xa, y0, za), (xb, y1, zb), sections.brace, "roof_brace")
                        ctx.connect((xb, y0, zb), (xa, y1, za), sections.brace, "roof_brace")

        if b in cranes:
            for x0 in aisles:
                for column_x, runway_x in ((x0, x0 + spec.crane.inset), (x0 + spec.span, x0 + spec.span - spec.crane.inset)):
                    ctx.connect((runway_x, y0, z_runway), (runway_x, y1, z_runway), sections.crane_girder, "crane_girder")
                    for y in (y0, y1):
                        ctx.connect((column_x, y, z_runway), (runway_x, y, z_runway), sections.brace, "crane_bracket")


def generate_industrial(engine, spec: IndustrialSpec, config: SynthConfig = CONFIG) -> GenerationResult:
    """
    Build an industrial shed in `engine`.

    Groups in the result: column, rafter, top_chord, bottom_chord,
    truss_web, purlin, eave_tie, wall_brace, roof_brace, crane_girder,
    crane_bracket.
    """
    return run_generation(engine, "industrial", spec.units, lambda ctx: _build(ctx, spec), config)
