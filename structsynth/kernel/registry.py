# structsynth/kernel/registry.py
"""
SECTION REGISTRY: Ensure-Once Section Definitions
=================================================

PURPOSE:
--------
A member or panel may only reference a section the engine already knows.
Generators therefore `ensure` every section name before first use. The
registry defines a name on its first request and ignores every later
request for the same name - even if the later request carries different
dimensions (first writer wins).

DEFAULTS:
---------
Section properties come from a priority chain, field by field:

    explicit spec value  ->  structure-level default  ->  archetype hard default

`resolve_line_section` / `resolve_panel_section` walk that chain. Missing
names/materials and non-positive dimensions count as "not given".
"""

import logging
from typing import Dict, Sequence, Union

from ..model import LineSection, PanelSection
from .errors import EngineError, SectionError

logger = logging.getLogger(__name__)

LINE = "line"
PANEL = "panel"


def _first(candidates, attr: str, positive: bool = False):
    for candidate in candidates:
        if candidate is None:
            continue
        value = getattr(candidate, attr, None)
        if value is None:
            continue
        if positive:
            if value > 0:
                return float(value)
        elif value:
            return value
    return None


def resolve_line_section(*candidates, hard_default: LineSection) -> LineSection:
    """
    Collapse a chain of partial frame-section definitions into one LineSection.

    Candidates are checked in order; each may be None or any object with
    `name`, `material`, `depth`, `width` attributes. `hard_default` closes
    the chain.

    Examples:
    ---------
    >>> resolve_line_section(
    ...     FrameSectionDef(name="C1", depth=0.5), None,
    ...     hard_default=LineSection("Column", "A992Fy50", 0.3, 0.3))
    LineSection(name='C1', material='A992Fy50', depth=0.5, width=0.3)
    """
    chain = list(candidates) + [hard_default]
    return LineSection(
        name=_first(chain, "name"),
        material=_first(chain, "material"),
        depth=_first(chain, "depth", positive=True),
        width=_first(chain, "width", positive=True),
    )


def resolve_panel_section(*candidates, hard_default: PanelSection) -> PanelSection:
    """Shell counterpart of resolve_line_section (name, material, thickness)."""
    chain = list(candidates) + [hard_default]
    return PanelSection(
        name=_first(chain, "name"),
        material=_first(chain, "material"),
        thickness=_first(chain, "thickness", positive=True),
    )


class SectionRegistry:
    """
    Single source of truth for "is this section already defined in this run".

    Examples:
    ---------
    >>> registry = SectionRegistry(engine)
    >>> registry.ensure_line("Column300x300", "A992Fy50", 0.3, 0.3)   # defines
    >>> registry.ensure_line("Column300x300", "A992Fy50", 0.5, 0.5)   # no-op
    """

    def __init__(self, engine):
        self.engine = engine
        self._defined: Dict[str, Union[LineSection, PanelSection]] = {}

    @property
    def defined(self) -> Dict[str, Union[LineSection, PanelSection]]:
        return dict(self._defined)

    def __contains__(self, name: str) -> bool:
        return name in self._defined

    def __len__(self) -> int:
        return len(self._defined)

    def ensure(self, name: str, kind: str, material: str, dimensions: Sequence[float]) -> None:
        """
        Define section `name` unless it was already ensured in this run.

        kind='line'  -> dimensions = (depth, width)
        kind='panel' -> dimensions = (thickness,)
        """
        if kind == LINE:
            depth, width = dimensions
            self.ensure_line(name, material, depth, width)
        elif kind == PANEL:
            (thickness,) = dimensions
            self.ensure_panel(name, material, thickness)
        else:
            raise ValueError(f"Unknown section kind: {kind}")

    def ensure_line(self, name: str, material: str, depth: float, width: float) -> None:
        if name in self._defined:
            logger.debug("section %s already defined", name)
            return
        try:
            self.engine.define_line_section(name, material, depth, width)
        except EngineError as e:
            raise SectionError(f"Failed to define frame section {name}: {e}", section=name) from e
        self._defined[name] = LineSection(name, material, depth, width)

    def ensure_panel(self, name: str, material: str, thickness: float) -> None:
        if name in self._defined:
            logger.debug("section %s already defined", name)
            return
        try:
            self.engine.define_panel_section(name, material, thickness)
        except EngineError as e:
            raise SectionError(f"Failed to define shell section {name}: {e}", section=name) from e
        self._defined[name] = PanelSection(name, material, thickness)

    def ensure_resolved(self, section: Union[LineSection, PanelSection]) -> str:
        """Ensure a section produced by resolve_*_section; returns its name."""
        if isinstance(section, LineSection):
            self.ensure_line(section.name, section.material, section.depth, section.width)
        else:
            self.ensure_panel(section.name, section.material, section.thickness)
        return section.name
