# tests/test_special.py
"""
SPECIAL STRUCTURE TESTS
=======================

Ring-and-apex grids (default 5 rings x 24 segments):

    nodes     5 * 24 + apex           = 121
    rings     5 * 24                  = 120
    meridian  4 * 24                  = 96
    diagonal  4 * 24                  = 96
    apex      5 * 24 (every ring node) = 120

Towers (4 sides, 8 segments): 36 nodes, 32 legs, 32 horizontals,
64 face diagonals, 16 plan braces.
"""

import numpy as np
import pytest

from structsynth.engine import PINNED, InMemoryEngine
from structsynth.generative import generate_special
from structsynth.specs import SpecialStructureSpec


def special(**data):
    return SpecialStructureSpec.model_validate(data)


class TestRingGrids:

    @pytest.mark.parametrize("kind", ["SpaceFrame", "Dome"])
    def test_counts(self, kind):
        engine = InMemoryEngine()
        result = generate_special(engine, special(structureType=kind))
        assert result.nodes == 121
        assert result.group("ring") == 120
        assert result.group("meridian") == 96
        assert result.group("diagonal") == 96
        assert result.group("apex") == 120
        assert result.members == 432
        assert result.restraints == 24
        print(f"✓ {kind}: 121 nodes, 432 members")

    def test_every_ring_node_reaches_apex(self):
        engine = InMemoryEngine()
        result = generate_special(engine, special(structureType="Dome", rings=3, segments=12))
        assert result.group("apex") == 36
        apex = max(engine.nodes.values(), key=lambda n: n.z)
        spokes = [m for m in engine.members.values() if apex.id in (m.ni, m.nj)]
        assert len(spokes) == 36
        print("✓ Dome 3 x 12: 36 apex spokes")

    def test_dome_profile_is_spherical(self):
        engine = InMemoryEngine()
        generate_special(engine, special(structureType="Dome", radius=20.0, height=20.0, baseElevation=1.0))
        for n in engine.nodes.values():
            assert np.isclose(np.sqrt(n.x ** 2 + n.y ** 2 + (n.z - 1.0) ** 2), 20.0)

    def test_space_frame_profile_is_conical(self):
        engine = InMemoryEngine()
        generate_special(engine, special(radius=10.0, height=5.0))
        for n in engine.nodes.values():
            assert np.isclose(np.hypot(n.x, n.y), 10.0 * (1.0 - n.z / 5.0))


class TestMembrane:

    def test_counts_and_prestress(self):
        engine = InMemoryEngine()
        result = generate_special(engine, special(structureType="Membrane", radius=10.0))
        assert result.nodes == 25
        assert result.group("edge_cable") == 24
        assert result.group("membrane") == 24
        assert result.restraints == 24
        assert all(engine.nodes[n].restraint == PINNED for n in engine.restrained_nodes())
        assert result.nodal_loads == 24
        assert "PRESTRESS" in result.active_cases

        perimeter = 24 * 2 * 10.0 * np.sin(np.pi / 24)
        total = sum(np.linalg.norm(load.forces[:3]) for load in engine.loads_for("PRESTRESS"))
        assert total == pytest.approx(2.0 * perimeter)
        print(f"✓ Membrane prestress total {total:.3f} = prestress * perimeter")

    def test_no_prestress(self):
        engine = InMemoryEngine()
        result = generate_special(engine, special(structureType="Membrane", membrane={"prestress": 0.0}))
        assert result.nodal_loads == 0
        assert result.active_cases == ["DEAD"]


class TestTowers:

    def test_lattice_tower(self):
        engine = InMemoryEngine()
        result = generate_special(engine, special(structureType="Tower", radius=3.0, height=30.0))
        assert result.nodes == 36
        assert result.group("leg") == 32
        assert result.group("horizontal") == 32
        assert result.group("diagonal") == 64
        assert result.group("plan_brace") == 16
        assert result.restraints == 4
        top = [n for n in engine.nodes.values() if n.z == pytest.approx(30.0)]
        assert all(np.hypot(n.x, n.y) == pytest.approx(0.15 * 3.0) for n in top)

    def test_odd_sides_have_no_plan_braces(self):
        engine = InMemoryEngine()
        result = generate_special(engine, special(structureType="Tower", tower={"sides": 3, "segments": 4}))
        assert result.group("plan_brace") == 0
        assert result.group("leg") == 12

    def test_telecom_platform_and_mast(self):
        engine = InMemoryEngine()
        result = generate_special(engine, special(structureType="TelecomTower", radius=3.0, height=40.0))
        assert result.nodes == 38
        assert result.group("platform") == 4
        assert result.group("mast") == 1
        assert result.group("plan_brace") == 14
        assert max(n.z for n in engine.nodes.values()) == pytest.approx(40.0 * 1.15)


class TestCoolingTower:

    def test_shell_grid(self):
        engine = InMemoryEngine()
        result = generate_special(engine, special(structureType="CoolingTower"))
        assert result.nodes == 6 * 24
        assert result.panels == 5 * 24
        assert result.members == 0
        assert result.restraints == 24
        waist = min(np.hypot(n.x, n.y) for n in engine.nodes.values())
        assert waist > 0.7 * 25.0
        assert engine.panel_sections["Shell250"].thickness == 0.25
