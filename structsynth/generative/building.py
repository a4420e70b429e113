# structsynth/generative/building.py
"""
BUILDING GENERATOR: Multi-Story Frames
======================================

PURPOSE:
--------
Generate a rectangular multi-story building frame from a BuildingSpec:
a plan grid of columns, floor beams in both directions, optional lateral
bracing, an optional shear-wall core and optional floor slabs.

ENGINEERING CONTEXT:
--------------------
The lateral system decides what resists wind and seismic sway:

- MomentFrame:  rigid beam-column joints only
- BracedFrame:  X-diagonals in a checkerboard of perimeter bays
- ShearWall:    concrete core walls around a central square
- Dual:         braced perimeter plus the shear-wall core

Bracing alternates (bay i braced in story k when i + k is even) so that
every story has braced bays without bracing every bay.

GRID:
-----
    x_i = i * baySpacingX        i = 0..baysX
    y_j = j * baySpacingY        j = 0..baysY
    z_k = baseElevation + sum(story heights below level k)

All points go through the geometry cache, so core corners that happen to
sit on the frame grid reuse the frame nodes.
"""

import logging
from typing import List, Optional

from ..config import CONFIG, SynthConfig
from ..engine.port import FIXED
from ..kernel.context import GenerationContext, run_generation
from ..kernel.registry import resolve_line_section, resolve_panel_section
from ..model import LineSection, PanelSection
from ..result import GenerationResult
from ..specs import (
    BuildingSpec,
    FrameSectionDef,
    LateralSystem,
    ShellSectionDef,
    StorySpec,
    StructuralMaterial,
)

logger = logging.getLogger(__name__)

STEEL_COLUMN = LineSection("SteelColumn400x400", "A992Fy50", 0.40, 0.40)
STEEL_BEAM = LineSection("SteelBeam450x200", "A992Fy50", 0.45, 0.20)
STEEL_BRACE = LineSection("SteelBrace200x200", "A992Fy50", 0.20, 0.20)
CONCRETE_COLUMN = LineSection("ConcColumn500x500", "Concrete4000", 0.50, 0.50)
CONCRETE_BEAM = LineSection("ConcBeam600x300", "Concrete4000", 0.60, 0.30)
SHEAR_WALL = PanelSection("ShearWall300", "Concrete4000", 0.30)
SLAB = PanelSection("Slab150", "Concrete4000", 0.15)


class _StorySections:
    """Section names for one story, ensured on construction."""

    def __init__(self, ctx: GenerationContext, spec: BuildingSpec, story: StorySpec):
        m = spec.materials
        if m.structural_material == StructuralMaterial.CONCRETE:
            frame_material = FrameSectionDef(material=m.concrete_material)
            column = (m.concrete_column, CONCRETE_COLUMN)
            beam = (m.concrete_beam, CONCRETE_BEAM)
        else:
            frame_material = FrameSectionDef(material=m.steel_material)
            column = (m.steel_column, STEEL_COLUMN)
            beam = (m.steel_beam, STEEL_BEAM)

        self.column = ctx.sections.ensure_resolved(resolve_line_section(
            FrameSectionDef(name=story.column_section), column[0], frame_material, hard_default=column[1]))
        self.beam = ctx.sections.ensure_resolved(resolve_line_section(
            FrameSectionDef(name=story.beam_section), beam[0], frame_material, hard_default=beam[1]))
        self._ctx = ctx
        self._spec = spec
        self._story = story
        self._brace: Optional[str] = None
        self._wall: Optional[str] = None

    @property
    def brace(self) -> str:
        if self._brace is None:
            m = self._spec.materials
            self._brace = self._ctx.sections.ensure_resolved(resolve_line_section(
                FrameSectionDef(name=self._story.brace_section), m.brace,
                FrameSectionDef(material=m.steel_material), hard_default=STEEL_BRACE))
        return self._brace

    @property
    def wall(self) -> str:
        if self._wall is None:
            m = self._spec.materials
            self._wall = self._ctx.sections.ensure_resolved(resolve_panel_section(
                ShellSectionDef(name=self._story.shear_wall_panel), m.shear_wall,
                ShellSectionDef(material=m.concrete_material), hard_default=SHEAR_WALL))
        return self._wall


def story_levels(spec: BuildingSpec) -> List[float]:
    """Elevations of the base and of every floor, bottom to top."""
    levels = [spec.layout.base_elevation]
    for story in spec.stories:
        levels.append(levels[-1] + story.height)
    return levels


def _braced_bays(n_bays: int, story: int) -> List[int]:
    return [i for i in range(n_bays) if (i + story) % 2 == 0]


def _build(ctx: GenerationContext, spec: BuildingSpec) -> None:
    layout = spec.layout
    lateral = spec.lateral_system
    xs = [i * layout.bay_spacing_x for i in range(layout.bays_x + 1)]
    ys = [j * layout.bay_spacing_y for j in range(layout.bays_y + 1)]
    zs = story_levels(spec)

    grid = [[[ctx.place(x, y, z) for y in ys] for x in xs] for z in zs]

    for i in range(len(xs)):
        for j in range(len(ys)):
            ctx.restrain(grid[0][i][j], FIXED)

    braced = lateral.system_type in (LateralSystem.BRACED_FRAME, LateralSystem.DUAL)
    cored = lateral.system_type in (LateralSystem.SHEAR_WALL, LateralSystem.DUAL) or lateral.add_shear_wall_core

    for k, story in enumerate(spec.stories):
        sections = _StorySections(ctx, spec, story)
        below, above = grid[k], grid[k + 1]

        for i in range(len(xs)):
            for j in range(len(ys)):
                ctx.add_member(below[i][j], above[i][j], sections.column, "column")

        for j in range(len(ys)):
            for i in range(layout.bays_x):
                ctx.add_member(above[i][j], above[i + 1][j], sections.beam, "beam")
        for i in range(len(xs)):
            for j in range(layout.bays_y):
                ctx.add_member(above[i][j], above[i][j + 1], sections.beam, "beam")

        if braced:
            for j in (0, layout.bays_y):
                for i in _braced_bays(layout.bays_x, k):
                    ctx.add_member(below[i][j], above[i + 1][j], sections.brace, "brace")
                    ctx.add_member(below[i + 1][j], above[i][j], sections.brace, "brace")
            if lateral.add_braces_in_both_directions:
                for i in (0, layout.bays_x):
                    for j in _braced_bays(layout.bays_y, k):
                        ctx.add_member(below[i][j], above[i][j + 1], sections.brace, "brace")
                        ctx.add_member(below[i][j + 1], above[i][j], sections.brace, "brace")

        if cored:
            _core_story(ctx, spec, xs[-1], ys[-1], zs[k], zs[k + 1], sections.wall, k == 0)

    if spec.deck is not None:
        _slabs(ctx, spec, grid)


def _core_story(ctx: GenerationContext, spec: BuildingSpec, length_x: float, length_y: float,
                z_low: float, z_high: float, section: str, at_base: bool) -> None:
    half = spec.lateral_system.shear_wall_core_size / 2.0
    cx, cy = length_x / 2.0, length_y / 2.0
    plan = [(cx - half, cy - half), (cx + half, cy - half), (cx + half, cy + half), (cx - half, cy + half)]
    low = [ctx.place(x, y, z_low) for x, y in plan]
    high = [ctx.place(x, y, z_high) for x, y in plan]
    for c in range(4):
        c2 = (c + 1) % 4
        ctx.add_panel([low[c], low[c2], high[c2], high[c]], section, "shear_wall")
    if at_base:
        for node in low:
            ctx.restrain(node, FIXED)


def _slabs(ctx: GenerationContext, spec: BuildingSpec, grid) -> None:
    deck = spec.deck
    m = spec.materials
    section = ctx.sections.ensure_resolved(resolve_panel_section(
        ShellSectionDef(name=deck.property_name, material=deck.material, thickness=deck.thickness),
        m.slab,
        ShellSectionDef(material=m.concrete_material),
        hard_default=SLAB,
    ))
    for floor in grid[1:]:
        for i in range(spec.layout.bays_x):
            for j in range(spec.layout.bays_y):
                ctx.add_panel([floor[i][j], floor[i + 1][j], floor[i + 1][j + 1], floor[i][j + 1]], section, "slab")


def generate_building(engine, spec: BuildingSpec, config: SynthConfig = CONFIG) -> GenerationResult:
    """
    Build a multi-story frame in `engine`.

    Groups in the result: column, beam, brace, shear_wall, slab.
    """
    logger.debug("building: %d stories, %s", len(spec.stories), spec.lateral_system.system_type.value)
    return run_generation(engine, "building", spec.units, lambda ctx: _build(ctx, spec), config)
