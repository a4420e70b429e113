# structsynth/kernel - Shared machinery of all generators
"""
KERNEL: Archetype-Independent Core
==================================

    units.py      UnitSystem and pint-backed conversions
    errors.py     EngineError / GenerationError hierarchy
    cache.py      GeometryCache (coordinate -> node id, one node per point)
    registry.py   SectionRegistry (ensure-once sections) + default chains
    run.py        prepare_run (flag load cases before returning)
    context.py    GenerationContext / run_generation (per-call state)
"""

from .units import UnitSystem, resolve_unit_system, convert_to_model, density_to_unit_weight
from .errors import (
    EngineError,
    DuplicateNameError,
    GenerationError,
    GeometryError,
    SectionError,
    LoadError,
    RunPreparationError,
)
from .cache import GeometryCache
from .registry import SectionRegistry, resolve_line_section, resolve_panel_section
from .run import prepare_run
from .context import GenerationContext, run_generation

__all__ = [
    'UnitSystem', 'resolve_unit_system', 'convert_to_model', 'density_to_unit_weight',
    'EngineError', 'DuplicateNameError', 'GenerationError', 'GeometryError',
    'SectionError', 'LoadError', 'RunPreparationError',
    'GeometryCache', 'SectionRegistry', 'resolve_line_section', 'resolve_panel_section',
    'prepare_run', 'GenerationContext', 'run_generation',
]
