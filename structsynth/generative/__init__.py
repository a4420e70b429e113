# structsynth/generative - Archetype generators
"""
GENERATIVE: Structure Archetype Generators
==========================================

Each generator turns one immutable spec into engine calls:

- vessel:      vertical tanks and horizontal vessels (+ pressure loads)
- building:    multi-story frames with bracing, shear-wall core, slabs
- industrial:  portal / truss sheds with purlins, bracing, crane runways
- bridge:      girder, cable-stayed, arch and truss bridges on piers
- special:     domes, space frames, membranes, towers, cooling towers

USAGE:
------
    from structsynth.engine import InMemoryEngine
    from structsynth.generative import generate, generate_from_dict
    from structsynth.specs import VesselSpec

    engine = InMemoryEngine()
    result = generate(engine, VesselSpec())

    result = generate_from_dict(InMemoryEngine(), "bridge", {"spans": [35, 45, 35]})
"""

from typing import Any, Dict

from ..config import CONFIG, SynthConfig
from ..result import GenerationResult
from ..specs import (
    BridgeSpec,
    BuildingSpec,
    IndustrialSpec,
    SpecialStructureSpec,
    StructureSpec,
    VesselSpec,
    parse_spec,
)
from .bridge import deck_stations, generate_bridge
from .building import generate_building
from .industrial import bay_spacings, generate_industrial
from .special import generate_special
from .vessel import generate_vessel

GENERATORS = {
    VesselSpec: generate_vessel,
    BuildingSpec: generate_building,
    IndustrialSpec: generate_industrial,
    BridgeSpec: generate_bridge,
    SpecialStructureSpec: generate_special,
}


def generate(engine, spec: StructureSpec, config: SynthConfig = CONFIG) -> GenerationResult:
    """Run the generator matching the type of `spec`."""
    generator = GENERATORS.get(type(spec))
    if generator is None:
        raise TypeError(f"No generator for {type(spec).__name__}")
    return generator(engine, spec, config)


def generate_from_dict(engine, archetype: str, data: Dict[str, Any], config: SynthConfig = CONFIG) -> GenerationResult:
    """Parse raw JSON-like `data` for `archetype` and generate it."""
    return generate(engine, parse_spec(archetype, data), config)


__all__ = [
    'generate', 'generate_from_dict', 'parse_spec', 'GENERATORS',
    'generate_vessel', 'generate_building', 'generate_industrial',
    'generate_bridge', 'generate_special',
    'deck_stations', 'bay_spacings',
]
