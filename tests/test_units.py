# tests/test_units.py
"""
UNIT RESOLVER TESTS
===================

The unit system must be applied before any geometry, and every derived
load value (pressure, unit weight) must be expressed in the same system.
A wrong mapping silently scales every coordinate and force in the model.
"""

import logging

import pytest
import numpy as np

from structsynth.config import CONFIG
from structsynth.kernel.context import resolve_units
from structsynth.kernel.units import (
    UnitSystem,
    convert_to_model,
    density_to_unit_weight,
    resolve_unit_system,
)
from structsynth.specs import Units


class TestResolveUnitSystem:
    """Length/force pairs and symbolic codes map to one canonical system."""

    def test_defaults_to_kn_m(self):
        assert resolve_unit_system() == UnitSystem.KN_M
        assert resolve_unit_system("m", "kN") == UnitSystem.KN_M
        print("✓ Missing or metric units resolve to kN_m_C")

    def test_unknown_pair_resolves_silently(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="structsynth.kernel.units"):
            assert resolve_unit_system("furlong", "stone", "cubits") == UnitSystem.KN_M
        assert caplog.records == []

    def test_spec_units_block(self):
        assert resolve_units(None) == UnitSystem(CONFIG.default_unit_system)
        assert resolve_units(Units(length="in", force="kip")) == UnitSystem.KIP_IN

    def test_mm_needs_newtons(self):
        """Millimetres select N_mm_C only together with newtons."""
        assert resolve_unit_system("mm", "N") == UnitSystem.N_MM
        assert resolve_unit_system("MM", "n") == UnitSystem.N_MM
        assert resolve_unit_system("mm", "kN") == UnitSystem.KN_M
        print("✓ mm + N -> N_mm_C, mm + kN -> kN_m_C")

    def test_imperial_lengths(self):
        assert resolve_unit_system("in", "kip") == UnitSystem.KIP_IN
        assert resolve_unit_system("ft", "lb") == UnitSystem.KIP_FT
        assert resolve_unit_system("feet", None) == UnitSystem.KIP_FT
        print("✓ in -> kip_in_F, ft -> kip_ft_F regardless of force unit")

    def test_code_wins_over_pair(self):
        assert resolve_unit_system("m", "kN", "kip_ft_F") == UnitSystem.KIP_FT
        assert resolve_unit_system(None, None, "N_MM_C") == UnitSystem.N_MM
        print("✓ Symbolic code overrides the length/force pair")

    def test_base_units(self):
        assert UnitSystem.KIP_IN.force_unit == "kip"
        assert UnitSystem.KN_M.length_unit == "m"
        assert UnitSystem.N_MM.force_unit == "N"


class TestConversions:
    """pint-backed conversions into model units."""

    def test_pressure_kpa(self):
        assert np.isclose(convert_to_model(50.0, "kPa", UnitSystem.KN_M, "pressure"), 50.0)
        assert np.isclose(convert_to_model(50.0, "kPa", UnitSystem.N_MM, "pressure"), 0.05)
        print("✓ 50 kPa = 50 kN/m^2 = 0.05 N/mm^2")

    def test_unit_weight(self):
        value = convert_to_model(9.81, "kN/m^3", UnitSystem.N_MM, "unit_weight")
        assert np.isclose(value, 9.81e-6)
        print(f"✓ 9.81 kN/m^3 = {value:.3e} N/mm^3")

    def test_water_density(self):
        """1000 kg/m^3 under standard gravity weighs 9.80665 kN/m^3."""
        gamma = density_to_unit_weight(1000.0, "kg/m^3", UnitSystem.KN_M)
        assert np.isclose(gamma, 9.80665, rtol=1e-9)
        print(f"✓ Water: gamma = {gamma:.5f} kN/m^3")

    def test_incompatible_units_raise(self):
        with pytest.raises(ValueError):
            convert_to_model(1.0, "kg", UnitSystem.KN_M, "pressure")
        with pytest.raises(ValueError):
            convert_to_model(1.0, "not_a_unit", UnitSystem.KN_M, "length")
        print("✓ Dimensionally wrong or unknown units are rejected")
