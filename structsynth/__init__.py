# structsynth - Parametric Structural Model Synthesis
"""
STRUCTSYNTH: Parametric Structural Model Synthesis
==================================================

This package turns a declarative structure spec into an analysis model:
- geometry (nodes, members, panels) with one node per coordinate
- ensure-once section definitions
- derived loads (hydrostatic, internal pressure, membrane prestress)
- load cases flagged to run

ARCHITECTURE:
-------------
    kernel/         Units, geometry cache, section registry, run prep
    engine/         StructuralEnginePort + InMemoryEngine
    generative/     Archetype generators (vessel, building, industrial, bridge, special)
    specs.py        Immutable pydantic specs (camelCase JSON in)
    loads.py        Pressure / prestress lumping to nodal forces
    result.py       GenerationResult summary
    export.py       pandas tables, JSON and CSV of an engine document
    viz.py          matplotlib 3D preview
"""

from .kernel import GenerationError, UnitSystem
from .engine import InMemoryEngine, StructuralEnginePort
from .generative import generate, generate_from_dict, parse_spec
from .result import GenerationResult

__version__ = "0.1.0"

__all__ = [
    'generate', 'generate_from_dict', 'parse_spec',
    'InMemoryEngine', 'StructuralEnginePort', 'GenerationResult',
    'GenerationError', 'UnitSystem',
]
