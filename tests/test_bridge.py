# tests/test_bridge.py
"""
BRIDGE GENERATOR TESTS
======================

Station bookkeeping is the core of the bridge generator: every
superstructure variant hangs off the deck stations, and the piers go
exactly where a station coincides with a span end.

Reference case: one 30 m span, 8 segments, 4 girders over 12 m, two
columns per pier.

    deck nodes    9 stations * 4 girder lines  = 36
    pier nodes    2 supports * 2 columns * 2   = 8
    girders       4 lines * 8 segments         = 32
    cross beams   7 interior stations * 3      = 21
    pier caps     2 * 5 (girders + column tops)= 10
"""

import pytest

from structsynth.engine import PINNED, InMemoryEngine
from structsynth.generative import deck_stations, generate_bridge
from structsynth.generative.bridge import girder_offsets, pier_offsets
from structsynth.specs import BridgeSpec


def bridge(**data):
    return BridgeSpec.model_validate(data)


class TestStations:

    def test_three_span_partition(self):
        stations = deck_stations(bridge(spans=[35, 45, 35], segmentsPerSpan=8))
        assert len(stations) == 25
        supports = [x for x, is_support in stations if is_support]
        assert supports == pytest.approx([0.0, 35.0, 80.0, 115.0])
        print("✓ 25 stations, supports at 0, 35, 80, 115")

    def test_offsets(self):
        spec = bridge()
        assert girder_offsets(spec) == pytest.approx([-6.0, -2.0, 2.0, 6.0])
        assert pier_offsets(spec) == pytest.approx([-3.0, 3.0])
        assert girder_offsets(bridge(girders=1)) == [0.0]


class TestGirderBridge:

    def test_default_counts(self):
        engine = InMemoryEngine()
        result = generate_bridge(engine, bridge())
        assert result.nodes == 44
        assert result.group("girder") == 32
        assert result.group("cross_beam") == 21
        assert result.group("pier_cap") == 10
        assert result.group("pier_column") == 4
        assert result.members == 67
        assert result.restraints == 4
        print("✓ Single-span girder bridge: 44 nodes, 67 members")

    def test_piers_at_every_support(self):
        engine = InMemoryEngine()
        result = generate_bridge(engine, bridge(spans=[35, 45, 35], supports={"fixBase": False}))
        assert result.group("pier_column") == 4 * 2
        bases = [engine.nodes[n] for n in engine.restrained_nodes()]
        assert sorted({n.x for n in bases}) == pytest.approx([0.0, 35.0, 80.0, 115.0])
        assert all(n.z == pytest.approx(2.0) for n in bases)
        assert all(n.restraint == PINNED for n in bases)

    def test_pier_to_foundation(self):
        engine = InMemoryEngine()
        generate_bridge(engine, bridge(supports={"pierHeight": 0.0, "foundationElevation": -3.0}))
        assert min(n.z for n in engine.nodes.values()) == pytest.approx(-3.0)

    def test_without_diaphragms(self):
        engine = InMemoryEngine()
        result = generate_bridge(engine, bridge(superstructure={"addDiaphragms": False}))
        assert result.group("cross_beam") == 0
        assert result.group("pier_cap") == 10

    def test_section_names_from_spec(self):
        engine = InMemoryEngine()
        generate_bridge(engine, bridge(superstructure={"girderSection": "PlateGirder1500"}))
        girder = engine.line_sections["PlateGirder1500"]
        assert (girder.depth, girder.width, girder.material) == (0.9, 0.3, "A709Gr50")


class TestVariants:

    def test_cable_stayed_three_spans(self):
        """Towers at the two interior supports, +-4 stations of cables per side."""
        engine = InMemoryEngine()
        result = generate_bridge(engine, bridge(bridgeType="CableStayed", spans=[35, 45, 35]))
        assert result.group("tower") == 4
        assert result.group("cable") == 2 * 2 * 8
        tops = [n for n in engine.nodes.values() if n.z == pytest.approx(12.0 + 35.0)]
        assert sorted({n.x for n in tops}) == pytest.approx([35.0, 80.0])
        print("✓ Cable-stayed: 4 tower legs, 32 cables")

    def test_cable_stayed_single_span_uses_abutments(self):
        engine = InMemoryEngine()
        result = generate_bridge(engine, bridge(bridgeType="CableStayed"))
        assert result.group("tower") == 4
        assert result.group("cable") == 16

    def test_arch(self):
        engine = InMemoryEngine()
        result = generate_bridge(engine, bridge(bridgeType="Arch"))
        assert result.group("arch_rib") == 16
        assert result.group("hanger") == 14
        assert result.nodes == 44 + 14
        crown = max(engine.nodes.values(), key=lambda n: n.z)
        assert crown.z == pytest.approx(12.0 + 0.2 * 30.0)
        assert crown.x == pytest.approx(15.0)

    def test_truss(self):
        engine = InMemoryEngine()
        result = generate_bridge(engine, bridge(bridgeType="Truss"))
        assert result.nodes == 44 + 36
        assert result.group("truss_chord") == 32
        assert result.group("truss_vertical") == 36
        assert result.group("truss_diagonal") == 32
        assert result.group("truss_lateral") == 9 * 3 + 8 * 3
        assert result.skipped == 0

    def test_cable_stayed_single_girder_anchors_on_deck(self):
        """
        WHY: with one girder the deck is the line y = 0. Legs and cables
        must land on girder nodes, not on free points at the deck edges.
        """
        engine = InMemoryEngine()
        result = generate_bridge(engine, bridge(bridgeType="CableStayed", girders=1, spans=[30, 30]))
        assert result.group("tower") == 1
        assert result.group("cable") == 8

        girder_nodes = {n for m in engine.members.values() if m.section == "Girder900x300" for n in (m.ni, m.nj)}
        deck_z = 12.0
        anchors = set()
        for m in engine.members.values():
            if m.section in ("CableRod120", "TowerLeg2000x2000"):
                anchors.update(n for n in (m.ni, m.nj) if engine.nodes[n].z == pytest.approx(deck_z))
        assert len(anchors) == 9
        assert anchors <= girder_nodes
        assert all(engine.nodes[n].y == pytest.approx(0.0) for n in anchors)
        print("✓ Single-girder cable fan lands on 9 girder nodes")
