#!/usr/bin/env python3
"""
RUN_ARCHETYPES: One Model per Structure Family
==============================================

Generates a default-ish example of every archetype, prints the counts
and saves a preview image of each.

Run with:
    python demos/run_archetypes.py
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from structsynth.engine import InMemoryEngine
from structsynth.generative import generate_from_dict
from structsynth.kernel.errors import GenerationError
from structsynth.viz import plot_model

EXAMPLES = [
    ("vessel", "Horizontal vessel", {"type": "HorizontalVessel", "geometry": {"length": 12, "radius": 2}}),
    ("building", "Dual-system office", {"lateralSystem": {"systemType": "Dual"}, "deck": {"type": "Composite"}}),
    ("industrial", "Crane shed", {"bayCount": 6, "aisleCount": 2, "roof": {"system": "Truss", "trussPanels": 6},
                                  "crane": {"enabled": True}}),
    ("bridge", "Cable-stayed bridge", {"bridgeType": "CableStayed", "spans": [60, 120, 60]}),
    ("bridge", "Arch bridge", {"bridgeType": "Arch", "spans": [80], "segmentsPerSpan": 16}),
    ("special", "Geodesic dome", {"structureType": "Dome", "rings": 6, "segments": 30}),
    ("special", "Telecom tower", {"structureType": "TelecomTower", "radius": 4, "height": 45,
                                  "tower": {"sides": 4, "segments": 12}}),
    ("special", "Cooling tower", {"structureType": "CoolingTower", "radius": 40, "height": 120, "rings": 12}),
]


def main():
    out_dir = Path(__file__).parent.parent / "artifacts"
    out_dir.mkdir(exist_ok=True)

    print(f"{'Model':<22} {'Nodes':>7} {'Members':>8} {'Panels':>7} {'Sections':>9}")
    print("-" * 57)
    for archetype, label, data in EXAMPLES:
        engine = InMemoryEngine()
        try:
            result = generate_from_dict(engine, archetype, data)
        except GenerationError as e:
            print(f"{label:<22} FAILED during {e.operation}: {e}")
            continue
        print(f"{label:<22} {result.nodes:>7} {result.members:>8} {result.panels:>7} {result.sections:>9}")
        filename = label.lower().replace(" ", "_").replace("-", "_") + ".png"
        plot_model(engine, str(out_dir / filename), title=label)

    print(f"\nPreviews saved to {out_dir}")


if __name__ == "__main__":
    main()
