# structsynth/generative/bridge.py
"""
BRIDGE GENERATOR: Girder, Cable-Stayed, Arch and Truss Bridges
==============================================================

PURPOSE:
--------
Generate a multi-span bridge from a BridgeSpec: a deck grillage of
longitudinal girders and transverse cross beams, piers under every
support, and the variant-specific superstructure on top.

STATIONS:
---------
The deck is discretized into stations along X. Each span contributes
`segmentsPerSpan` segments, so a bridge has 1 + sum(segments) stations.
A station is a support when its position matches a cumulative span end
(0, L1, L1+L2, ...) within the station tolerance.

    spans [35, 45, 35], 8 segments each  ->  25 stations,
    supports at x = 0, 35, 80, 115

VARIANTS:
---------
- Girder:       deck grillage and piers only
- CableStayed:  tower legs on the outer girder lines at the interior supports
                (at the abutments for a single span) with a cable fan to
                the nearby deck stations
- Arch:         two ribs on the outer girder lines per span,
                z = deck + rise * sin(pi * t), with vertical hangers
- Truss:        top chords above every girder line, verticals,
                alternating diagonals and a top lateral system

The support cross line is the pier cap: it runs through the girder nodes
and the column tops at deck level, sorted across the deck.
"""

import logging
from typing import Dict, List, Tuple

import numpy as np

from ..config import CONFIG, SynthConfig
from ..engine.port import FIXED, PINNED
from ..kernel.context import GenerationContext, run_generation
from ..kernel.registry import resolve_line_section
from ..model import LineSection
from ..result import GenerationResult
from ..specs import BridgeSpec, BridgeType, FrameSectionDef

logger = logging.getLogger(__name__)

GIRDER_DEFAULT = LineSection("Girder900x300", "A709Gr50", 0.90, 0.30)
CROSS_BEAM_DEFAULT = LineSection("CrossBeam600x250", "A709Gr50", 0.60, 0.25)
CABLE_DEFAULT = LineSection("CableRod120", "A416Gr270", 0.12, 0.12)
ARCH_DEFAULT = LineSection("ArchBox800x400", "A709Gr50", 0.80, 0.40)
TRUSS_DEFAULT = LineSection("TrussMember400x250", "A709Gr50", 0.40, 0.25)
TOWER_DEFAULT = LineSection("TowerLeg2000x2000", "Concrete4000", 2.00, 2.00)
PIER_DEFAULT = LineSection("PierColumn1200", "Concrete4000", 1.20, 1.20)


def deck_stations(spec: BridgeSpec, tolerance: float = 1e-6) -> List[Tuple[float, bool]]:
    """
    Positions of all deck stations and whether each is a support.

    Examples:
    ---------
    >>> [x for x, support in deck_stations(BridgeSpec(spans=[10, 20], segments_per_span=2)) if support]
    [0.0, 10.0, 30.0]
    """
    ends = [0.0]
    for span in spec.spans:
        ends.append(ends[-1] + span.length)

    positions = [0.0]
    for s, span in enumerate(spec.spans):
        for i in range(1, spec.segments_per_span + 1):
            positions.append(ends[s] + span.length * i / spec.segments_per_span)

    return [(x, any(abs(x - end) <= tolerance for end in ends)) for x in positions]


def girder_offsets(spec: BridgeSpec) -> List[float]:
    """Transverse (Y) position of every girder line across the deck width."""
    if spec.girders == 1:
        return [0.0]
    half = spec.deck_width / 2.0
    return [-half + spec.deck_width * g / (spec.girders - 1) for g in range(spec.girders)]


def pier_offsets(spec: BridgeSpec) -> List[float]:
    n = spec.supports.columns_per_pier
    return [-spec.deck_width / 2.0 + spec.deck_width * (c + 0.5) / n for c in range(n)]


class _Sections:
    """Bridge section names are given by name only; sizes come from the role."""

    def __init__(self, ctx: GenerationContext, spec: BridgeSpec):
        sup = spec.superstructure
        self._ctx = ctx
        self._table = {
            "girder": (sup.girder_section, sup.material, GIRDER_DEFAULT),
            "cross_beam": (sup.cross_beam_section, sup.material, CROSS_BEAM_DEFAULT),
            "cable": (sup.cable_section, None, CABLE_DEFAULT),
            "arch": (sup.arch_section, sup.material, ARCH_DEFAULT),
            "truss": (sup.truss_section, sup.material, TRUSS_DEFAULT),
            "tower": (sup.tower_section, None, TOWER_DEFAULT),
            "pier": (spec.supports.pier_section, spec.supports.material, PIER_DEFAULT),
        }
        self._names: Dict[str, str] = {}

    def get(self, role: str) -> str:
        """Section name for `role`, ensured on first request."""
        if role not in self._names:
            name, material, hard = self._table[role]
            self._names[role] = self._ctx.sections.ensure_resolved(
                resolve_line_section(FrameSectionDef(name=name, material=material), hard_default=hard)
            )
        return self._names[role]


def _deck(ctx: GenerationContext, spec: BridgeSpec, stations, ys, sections: _Sections) -> List[List[str]]:
    z = spec.deck_elevation
    deck = [[ctx.place(x, y, z) for y in ys] for x, _ in stations]

    for g in range(len(ys)):
        for s in range(len(stations) - 1):
            ctx.add_member(deck[s][g], deck[s + 1][g], sections.get("girder"), "girder")

    for s, (x, support) in enumerate(stations):
        if support:
            _pier(ctx, spec, x, ys, sections)
        elif spec.superstructure.add_diaphragms:
            for g in range(len(ys) - 1):
                ctx.add_member(deck[s][g], deck[s][g + 1], sections.get("cross_beam"), "cross_beam")
    return deck


def _pier(ctx: GenerationContext, spec: BridgeSpec, x: float, ys: List[float], sections: _Sections) -> None:
    sup = spec.supports
    z_top = spec.deck_elevation
    z_bottom = z_top - sup.pier_height if sup.pier_height > 0 else sup.foundation_elevation
    base = FIXED if sup.fix_base else PINNED

    columns = pier_offsets(spec)
    if z_bottom < z_top:
        for y in columns:
            bottom = ctx.place(x, y, z_bottom)
            ctx.add_member(bottom, ctx.place(x, y, z_top), sections.get("pier"), "pier_column")
            ctx.restrain(bottom, base)
    else:
        logger.warning("pier at x=%.3f has no height; columns skipped", x)

    cap = sorted(set(ys) | set(columns))
    if len(cap) > 1:
        ctx.add_chain([(x, y, z_top) for y in cap], sections.get("cross_beam"), "pier_cap")


def _cable_stayed(ctx: GenerationContext, spec: BridgeSpec, stations, ys, deck, sections: _Sections) -> None:
    sup = spec.superstructure
    supports = [s for s, (_, is_support) in enumerate(stations) if is_support]
    towers = supports[1:-1] if len(spec.spans) > 1 else [supports[0], supports[-1]]
    reach = max(1, spec.segments_per_span // 2)
    # outer girder lines; a single girder carries one leg per tower
    lines = sorted({0, len(ys) - 1})
    z_top = spec.deck_elevation + sup.tower_height

    for t in towers:
        x_t = stations[t][0]
        for g in lines:
            top = ctx.place(x_t, ys[g], z_top)
            ctx.add_member(deck[t][g], top, sections.get("tower"), "tower")
            for s in range(max(0, t - reach), min(len(stations), t + reach + 1)):
                if s == t:
                    continue
                ctx.add_member(top, deck[s][g], sections.get("cable"), "cable")


def _arch(ctx: GenerationContext, spec: BridgeSpec, stations, ys, deck, sections: _Sections) -> None:
    n = spec.segments_per_span
    z_deck = spec.deck_elevation
    lines = sorted({0, len(ys) - 1})
    start = 0.0
    for k, span in enumerate(spec.spans):
        rise = spec.superstructure.arch_rise_ratio * span.length
        xs = [stations[s][0] for s in range(k * n, k * n + n + 1)]
        for g in lines:
            rib = [(x, ys[g], z_deck + rise * np.sin(np.pi * (x - start) / span.length)) for x in xs]
            nodes = ctx.add_chain(rib, sections.get("arch"), "arch_rib")
            for (x, _, z), node in zip(rib, nodes):
                if z - z_deck > ctx.config.coordinate_tolerance:
                    ctx.add_member(node, _nearest_deck_node(stations, deck, g, x), sections.get("cable"), "hanger")
        start += span.length


def _nearest_deck_node(stations, deck, g: int, x: float) -> str:
    s = min(range(len(stations)), key=lambda i: abs(stations[i][0] - x))
    return deck[s][g]


def _truss(ctx: GenerationContext, spec: BridgeSpec, stations, ys, deck, sections: _Sections) -> None:
    z_top = spec.deck_elevation + spec.superstructure.truss_height
    top = [[ctx.place(x, y, z_top) for y in ys] for x, _ in stations]
    n_st = len(stations)

    for g in range(len(ys)):
        for s in range(n_st - 1):
            ctx.add_member(top[s][g], top[s + 1][g], sections.get("truss"), "truss_chord")
            if s % 2 == 0:
                ctx.add_member(deck[s][g], top[s + 1][g], sections.get("truss"), "truss_diagonal")
            else:
                ctx.add_member(top[s][g], deck[s + 1][g], sections.get("truss"), "truss_diagonal")
        for s in range(n_st):
            ctx.add_member(deck[s][g], top[s][g], sections.get("truss"), "truss_vertical")

    for s in range(n_st):
        for g in range(len(ys) - 1):
            ctx.add_member(top[s][g], top[s][g + 1], sections.get("truss"), "truss_lateral")
            if s < n_st - 1:
                if (s + g) % 2 == 0:
                    ctx.add_member(top[s][g], top[s + 1][g + 1], sections.get("truss"), "truss_lateral")
                else:
                    ctx.add_member(top[s][g + 1], top[s + 1][g], sections.get("truss"), "truss_lateral")


_VARIANTS = {
    BridgeType.CABLE_STAYED: _cable_stayed,
    BridgeType.ARCH: _arch,
    BridgeType.TRUSS: _truss,
}


def _build(ctx: GenerationContext, spec: BridgeSpec) -> None:
    sections = _Sections(ctx, spec)
    stations = deck_stations(spec, ctx.config.station_tolerance)
    ys = girder_offsets(spec)
    logger.debug("bridge: %d stations, %d supports", len(stations), sum(1 for _, s in stations if s))
    deck = _deck(ctx, spec, stations, ys, sections)
    variant = _VARIANTS.get(spec.bridge_type)
    if variant is not None:
        variant(ctx, spec, stations, ys, deck, sections)


def generate_bridge(engine, spec: BridgeSpec, config: SynthConfig = CONFIG) -> GenerationResult:
    """
    Build a bridge in `engine`.

    Groups in the result: girder, cross_beam, pier_column, pier_cap, tower,
    cable, arch_rib, hanger, truss_chord, truss_vertical, truss_diagonal,
    truss_lateral.
    """
    return run_generation(engine, "bridge", spec.units, lambda ctx: _build(ctx, spec), config)
