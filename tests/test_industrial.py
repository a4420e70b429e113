# tests/test_industrial.py
"""
INDUSTRIAL SHED TESTS
=====================

Reference case: default shed, 24 m span, 5 bays of 6 m, portal rafters
with 4 roof panels, eave 8 m, ridge 10 m.

    per frame   2 base + 5 roof profile nodes = 7 nodes, 2 columns, 4 rafters
    6 frames    42 nodes, 12 columns, 24 rafters
    purlins     3 interior profile points * 5 bays  = 15
    eave ties   2 column lines * 5 bays             = 10
    wall X      end bays 0 and 4, 2 walls, 2 diag.  = 8
    roof X      end bays, 4 roof segments, 2 diag.  = 16
"""

import logging

import pytest

from structsynth.engine import InMemoryEngine
from structsynth.generative import bay_spacings, generate_industrial
from structsynth.generative.industrial import braced_bays, roof_profile
from structsynth.specs import IndustrialSpec


def shed(**data):
    return IndustrialSpec.model_validate(data)


class TestBays:

    def test_overrides_and_length(self):
        overrides = [{"bayIndex": 0, "baySpacing": 12.0}]
        assert bay_spacings(shed(bayOverrides=overrides)) == [12.0, 6.0, 6.0, 6.0, 6.0]
        assert bay_spacings(shed(bayOverrides=overrides, length=40.0)) == pytest.approx([12.0, 7.0, 7.0, 7.0, 7.0])
        print("✓ Free bays share the remainder of an explicit length")

    def test_overrides_filling_the_length_are_quiet(self, caplog):
        """All bays overridden and summing to the length is a consistent input."""
        overrides = [{"bayIndex": i, "baySpacing": s} for i, s in enumerate([4.0, 6.0, 8.0])]
        with caplog.at_level(logging.WARNING, logger="structsynth.generative.industrial"):
            assert bay_spacings(shed(bayCount=3, bayOverrides=overrides, length=18.0)) == [4.0, 6.0, 8.0]
        assert caplog.records == []

    def test_length_that_does_not_fit_warns(self, caplog):
        overrides = [{"bayIndex": i, "baySpacing": 6.0} for i in range(3)]
        with caplog.at_level(logging.WARNING, logger="structsynth.generative.industrial"):
            assert bay_spacings(shed(bayCount=3, bayOverrides=overrides, length=20.0)) == [6.0, 6.0, 6.0]
        assert "does not fit the bay overrides" in caplog.text

    def test_braced_bay_overrides(self):
        spec = shed(bayOverrides=[{"bayIndex": 0, "addPortalBracing": False}, {"bayIndex": 2, "addPortalBracing": True}])
        assert braced_bays(spec) == {2, 4}
        assert braced_bays(shed(bracing={"portalBracing": False})) == set()


class TestRoofProfile:

    def test_ridge_is_a_node(self):
        points = roof_profile(shed(), 0.0)
        flat = [c for point in points for c in point]
        assert flat == pytest.approx([0.0, 8.0, 6.0, 9.0, 12.0, 10.0, 18.0, 9.0, 24.0, 8.0])

    def test_ridge_from_slope_when_below_eave(self):
        points = roof_profile(shed(ridgeHeight=5.0, roof={"slopeRatio": 0.25}), 0.0)
        assert max(z for _, z in points) == pytest.approx(8.0 + 0.25 * 12.0)

    def test_flat(self):
        points = roof_profile(shed(roof={"system": "Flat"}), 24.0)
        assert all(z == 8.0 for _, z in points)
        assert points[0][0] == 24.0 and points[-1][0] == 48.0


class TestPortalShed:

    def test_default_counts(self):
        engine = InMemoryEngine()
        result = generate_industrial(engine, shed())
        assert result.nodes == 42
        assert result.group("column") == 12
        assert result.group("rafter") == 24
        assert result.group("purlin") == 15
        assert result.group("eave_tie") == 10
        assert result.group("wall_brace") == 8
        assert result.group("roof_brace") == 16
        assert result.members == 85
        assert result.restraints == 12
        assert result.skipped == 0
        print("✓ Default portal shed: 42 nodes, 85 members")

    def test_sections_from_frame_defaults(self):
        engine = InMemoryEngine()
        generate_industrial(engine, shed(roof={"purlinSection": "Z200"}))
        assert set(engine.line_sections) == {"Column450x350", "Rafter400x300", "Z200", "Brace200x200"}
        assert engine.line_sections["Z200"].depth == 0.20

    def test_two_aisles_share_the_middle_columns(self):
        engine = InMemoryEngine()
        result = generate_industrial(engine, shed(aisleCount=2, bracing={"portalBracing": False}))
        assert result.group("column") == 3 * 6
        assert result.group("rafter") == 2 * 4 * 6
        assert result.group("eave_tie") == 3 * 5
        assert result.skipped == 0


class TestTrussShed:

    def test_truss_counts(self):
        """End verticals collapse onto the eave nodes and are skipped."""
        engine = InMemoryEngine()
        result = generate_industrial(engine, shed(roof={"system": "Truss"}))
        assert result.nodes == 60
        assert result.group("top_chord") == 24
        assert result.group("bottom_chord") == 24
        assert result.group("truss_web") == 6 * (3 + 2)
        assert result.skipped == 12
        assert result.members == 139
        print("✓ Truss shed: 139 members, 12 degenerate verticals skipped")


class TestCrane:

    def test_runway_and_split_columns(self):
        engine = InMemoryEngine()
        result = generate_industrial(engine, shed(bayCount=2, crane={"enabled": True}))
        assert result.group("crane_girder") == 4
        assert result.group("crane_bracket") == 6
        assert result.group("column") == 3 * 2 * 2
        runway = [n for n in engine.nodes.values() if n.z == 6.5]
        assert sorted({n.x for n in runway}) == pytest.approx([0.0, 0.6, 23.4, 24.0])

    def test_per_bay_crane(self):
        engine = InMemoryEngine()
        result = generate_industrial(engine, shed(bayOverrides=[{"bayIndex": 1, "addCrane": True}]))
        assert result.group("crane_girder") == 2
        assert result.group("crane_bracket") == 4
        # frames 1 and 2 split at the runway
        assert result.group("column") == 12 + 4
