# tests/test_specs.py
"""
SPEC PARSING TESTS
==================

Specs arrive as camelCase JSON from the planning layer. They must:
- accept camelCase and snake_case field names
- ignore fields they do not know
- be fully defaulted (an empty object is a valid spec)
- parse sub-variant strings case-insensitively
- be immutable once created
"""

import pytest
from pydantic import ValidationError

from structsynth.specs import (
    BridgeSpec,
    BridgeType,
    BuildingSpec,
    LateralSystem,
    SpecialStructureSpec,
    SpecialType,
    VesselSpec,
    VesselType,
    parse_spec,
)


class TestDefaults:

    def test_empty_vessel_is_valid(self):
        spec = VesselSpec.model_validate({})
        assert spec.vessel_type == VesselType.VERTICAL_TANK
        assert spec.geometry.diameter == 10.0
        assert spec.geometry.num_wall_segments == 24
        assert spec.fix_base is True
        print("✓ Empty vessel spec is fully defaulted")

    def test_building_has_five_stories(self):
        spec = BuildingSpec()
        assert len(spec.stories) == 5
        assert all(s.height == 3.2 for s in spec.stories)
        assert BuildingSpec.model_validate({"stories": []}).stories == spec.stories
        print("✓ Missing or empty stories -> five stories of 3.2")

    def test_bridge_has_one_span(self):
        spec = BridgeSpec()
        assert [s.length for s in spec.spans] == [30.0]


class TestFieldNames:

    def test_camel_case_json(self):
        spec = VesselSpec.model_validate({
            "type": "VerticalTank",
            "geometry": {"numWallSegments": 36, "shellThickness": 0.01},
            "loads": {"liquidHeight": 6.0, "internalPressureKPa": 25.0},
            "foundationElevation": 1.5,
            "fixBase": False,
        })
        assert spec.geometry.num_wall_segments == 36
        assert spec.loads.internal_pressure_kpa == 25.0
        assert spec.foundation_elevation == 1.5
        assert spec.fix_base is False
        print("✓ camelCase fields (incl. internalPressureKPa) are read")

    def test_snake_case_kwargs(self):
        spec = BuildingSpec(layout={"bays_x": 4, "bay_spacing_x": 7.5})
        assert spec.layout.bays_x == 4
        assert spec.layout.bay_spacing_x == 7.5

    def test_unknown_fields_ignored(self):
        spec = BridgeSpec.model_validate({
            "bridgeType": "Girder",
            "analyses": {"enableSeismic": True},
            "colour": "red",
        })
        assert spec.bridge_type == BridgeType.GIRDER
        print("✓ Unknown fields are ignored")


class TestVariants:

    @pytest.mark.parametrize("text", ["CableStayed", "cable-stayed", "CABLE_STAYED", "cable stayed"])
    def test_bridge_type_spellings(self, text):
        assert BridgeSpec.model_validate({"bridgeType": text}).bridge_type == BridgeType.CABLE_STAYED

    def test_aliases(self):
        assert VesselSpec.model_validate({"type": "horizontal"}).vessel_type == VesselType.HORIZONTAL_VESSEL
        assert VesselSpec.model_validate({"type": "cylindrical_reservoir"}).vessel_type == VesselType.VERTICAL_TANK
        spec = SpecialStructureSpec.model_validate({"structureType": "telecom-tower"})
        assert spec.structure_type == SpecialType.TELECOM_TOWER
        spec = BuildingSpec.model_validate({"lateralSystem": {"systemType": "dual"}})
        assert spec.lateral_system.system_type == LateralSystem.DUAL
        print("✓ Variant strings parse case/separator-insensitively")

    def test_unknown_variant_rejected(self):
        with pytest.raises(ValidationError):
            BridgeSpec.model_validate({"bridgeType": "Suspension"})


class TestBridgeSpans:

    def test_numbers_and_objects(self):
        spec = BridgeSpec.model_validate({"spans": [35, {"length": 45, "hasExpansionJoint": True}, 35.0]})
        assert [s.length for s in spec.spans] == [35.0, 45.0, 35.0]
        assert spec.spans[1].has_expansion_joint is True
        print("✓ Spans accept plain numbers and objects")


class TestValidation:

    def test_non_positive_dimension_rejected(self):
        with pytest.raises(ValidationError):
            VesselSpec.model_validate({"geometry": {"diameter": -2.0}})
        with pytest.raises(ValidationError):
            BuildingSpec.model_validate({"layout": {"baysX": 0}})

    def test_frozen(self):
        spec = VesselSpec()
        with pytest.raises(ValidationError):
            spec.fix_base = False
        print("✓ Specs are immutable")


class TestParseSpec:

    def test_dispatch_by_archetype(self):
        assert isinstance(parse_spec("vessel", {}), VesselSpec)
        assert isinstance(parse_spec("Bridge", {"spans": [20]}), BridgeSpec)
        assert isinstance(parse_spec("special", None), SpecialStructureSpec)

    def test_unknown_archetype(self):
        with pytest.raises(ValueError, match="Unknown archetype"):
            parse_spec("submarine", {})
