# structsynth/kernel/context.py
"""
GENERATION CONTEXT: Per-Call State of One Generation Run
========================================================

PURPOSE:
--------
A generator is a function of (engine, spec). Everything it accumulates while
running - the node cache, the section registry, pending nodal loads, the
created-object counters - lives in one GenerationContext that is created at
entry and dropped at exit. Nothing survives between calls.

ORDER OF OPERATIONS:
--------------------
    units -> sections (as needed) -> geometry -> loads -> run flags

`run_generation` enforces that order around a generator body:
1. resolve the unit system and apply it to the engine
2. run the body (sections are ensured just before first use)
3. submit accumulated nodal loads
4. flag load cases to run
5. return the frozen GenerationResult

FAILURES:
---------
The first GenerationError ends the run. Already created objects stay in
the engine document; the error carries a snapshot of their counts in
`partial`.
"""

import logging
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..config import CONFIG, SynthConfig
from ..engine.port import LoadCategory
from ..loads import NodalLoadAccumulator
from ..result import GenerationResult, ResultCounter
from .cache import GeometryCache
from .errors import DuplicateNameError, EngineError, GenerationError, GeometryError, LoadError
from .registry import SectionRegistry
from .run import prepare_run
from .units import UnitSystem, resolve_unit_system

logger = logging.getLogger(__name__)

Point = Tuple[float, float, float]


def resolve_units(units, config: SynthConfig = CONFIG) -> UnitSystem:
    """UnitSystem for a spec's `units` block (None -> configured default)."""
    if units is None:
        return UnitSystem(config.default_unit_system)
    return resolve_unit_system(
        getattr(units, "length", None),
        getattr(units, "force", None),
        getattr(units, "system", None),
    )


class GenerationContext:
    """
    Owns the per-call cache, registry, load accumulator and counters.

    Parameters:
    -----------
    engine : StructuralEnginePort
        Target engine session (used from a single thread)
    archetype : str
        Name reported in the result
    units : object with length/force/system attributes, or None
    config : SynthConfig
    """

    def __init__(self, engine, archetype: str, units=None, config: SynthConfig = CONFIG):
        self.engine = engine
        self.config = config
        self.unit_system = resolve_units(units, config)
        self.cache = GeometryCache(
            engine, precision=config.coordinate_precision, tolerance=config.coordinate_tolerance)
        self.sections = SectionRegistry(engine)
        self.loads = NodalLoadAccumulator()
        self.derived_cases: List[str] = []
        self.counter = ResultCounter(archetype=archetype, unit_system=self.unit_system.value)
        self._members: Dict[FrozenSet[str], str] = {}
        self._panels: Dict[FrozenSet[str], str] = {}
        self._restraints: Dict[str, Tuple[bool, ...]] = {}

    # ------------------------------------------------------------------
    # units
    # ------------------------------------------------------------------

    def apply_units(self) -> None:
        try:
            self.engine.set_unit_system(self.unit_system)
        except EngineError as e:
            raise GenerationError(
                f"set_unit_system({self.unit_system.value}) failed: {e}",
                operation="set_unit_system",
            ) from e

    # ------------------------------------------------------------------
    # geometry
    # ------------------------------------------------------------------

    def place(self, x: float, y: float, z: float) -> str:
        return self.cache.place(x, y, z)

    def place_all(self, points: Iterable[Point]) -> List[str]:
        return [self.cache.place(*p) for p in points]

    def add_member(self, a: str, b: str, section: str, group: str) -> Optional[str]:
        """
        Create a line element between two nodes.

        Degenerate requests (a == b) and repeats of an existing member
        between the same two nodes are skipped and return None.
        """
        if a == b:
            logger.debug("skipping degenerate %s member at node %s", group, a)
            self.counter.skipped += 1
            return None
        key = frozenset((a, b))
        if key in self._members:
            logger.debug("skipping duplicate %s member %s-%s", group, a, b)
            self.counter.skipped += 1
            return None
        try:
            member = self.engine.create_line(a, b, section)
        except EngineError as e:
            raise GeometryError(
                f"create_line {a}-{b} ({section}) failed: {e}",
                operation="create_line",
            ) from e
        self._members[key] = member
        self.counter.members += 1
        self.counter.bump(group)
        return member

    def connect(self, p: Point, q: Point, section: str, group: str) -> Optional[str]:
        """Place both points and link them."""
        return self.add_member(self.place(*p), self.place(*q), section, group)

    def add_chain(self, points: Sequence[Point], section: str, group: str) -> List[str]:
        """Place `points` and link consecutive ones; returns the node ids."""
        nodes = self.place_all(points)
        for a, b in zip(nodes[:-1], nodes[1:]):
            self.add_member(a, b, section, group)
        return nodes

    def add_panel(self, nodes: Sequence[str], section: str, group: str) -> Optional[str]:
        """
        Create a panel over `nodes` (ordered, consistent winding).

        Consecutive duplicate ids (including last == first) are collapsed;
        fewer than 3 distinct ids, or a repeat of an existing panel over the
        same node set, is skipped.
        """
        ordered: List[str] = []
        for node in nodes:
            if not ordered or ordered[-1] != node:
                ordered.append(node)
        while len(ordered) > 1 and ordered[0] == ordered[-1]:
            ordered.pop()
        if len(set(ordered)) < 3:
            logger.debug("skipping degenerate %s panel %s", group, list(nodes))
            self.counter.skipped += 1
            return None
        key = frozenset(ordered)
        if key in self._panels:
            self.counter.skipped += 1
            return None
        try:
            panel = self.engine.create_panel(ordered, section)
        except EngineError as e:
            raise GeometryError(
                f"create_panel {ordered} ({section}) failed: {e}",
                operation="create_panel",
            ) from e
        self._panels[key] = panel
        self.counter.panels += 1
        self.counter.bump(group)
        return panel

    def restrain(self, node: str, flags: Sequence[bool]) -> None:
        """
        Restrain `node`. Flags merge (logical OR) with any earlier restraint;
        the engine is only called when the merged set changes.
        """
        previous = self._restraints.get(node)
        merged = tuple(bool(f) for f in flags)
        if previous is not None:
            merged = tuple(p or f for p, f in zip(previous, merged))
            if merged == previous:
                return
        try:
            self.engine.set_restraint(node, list(merged))
        except EngineError as e:
            raise GeometryError(f"set_restraint on node {node} failed: {e}", operation="set_restraint") from e
        if previous is None:
            self.counter.restraints += 1
        self._restraints[node] = merged

    # ------------------------------------------------------------------
    # loads
    # ------------------------------------------------------------------

    def ensure_pattern(self, name: str, category: LoadCategory, self_weight_multiplier: float = 0.0) -> None:
        """Create a derived-load pattern; an existing pattern counts as success."""
        try:
            self.engine.ensure_load_pattern(name, category, self_weight_multiplier)
            self.counter.load_patterns += 1
        except DuplicateNameError:
            logger.debug("load pattern %s already exists", name)
        except EngineError as e:
            raise LoadError(f"ensure_load_pattern {name} failed: {e}", operation="ensure_load_pattern") from e
        if name not in self.derived_cases:
            self.derived_cases.append(name)

    # ------------------------------------------------------------------
    # results
    # ------------------------------------------------------------------

    def snapshot(self) -> GenerationResult:
        self.counter.nodes = self.cache.misses
        return self.counter.snapshot(sections=len(self.sections))

    def finish(self) -> GenerationResult:
        self.counter.nodal_loads += self.loads.submit(self.engine, self.config.force_threshold)
        self.counter.active_cases = prepare_run(self.engine, self.derived_cases, self.config)
        return self.snapshot()


def run_generation(
    engine,
    archetype: str,
    units,
    body: Callable[[GenerationContext], None],
    config: SynthConfig = CONFIG,
) -> GenerationResult:
    """
    Execute a generator body inside a fresh GenerationContext.

    Raises:
    -------
    GenerationError
        First fatal failure; `partial` holds the counts created so far
    """
    ctx = GenerationContext(engine, archetype, units, config)
    logger.info("generating %s in %s", archetype, ctx.unit_system.value)
    try:
        ctx.apply_units()
        body(ctx)
        result = ctx.finish()
    except GenerationError as e:
        e.partial = ctx.snapshot()
        logger.error("%s generation aborted during %s: %s", archetype, e.operation or "?", e)
        raise
    logger.info(
        "%s generated: %d nodes, %d members, %d panels",
        archetype, result.nodes, result.members, result.panels,
    )
    return result
