# structsynth/config.py
"""
Engine configuration and defaults.
"""

from dataclasses import dataclass


@dataclass
class SynthConfig:
    """Global synthesis configuration."""

    # Geometry cache
    coordinate_precision: int = 6      # decimals in the coordinate key
    coordinate_tolerance: float = 1e-6

    # Station classification (bridge supports)
    station_tolerance: float = 1e-6

    # Nodal loads below this magnitude are not submitted
    force_threshold: float = 1e-6

    # Units
    default_unit_system: str = "kN_m_C"
    standard_gravity: float = 9.80665  # m/s^2

    # Load pattern / case names
    gravity_case: str = "DEAD"
    hydrostatic_pattern: str = "HYDROSTATIC"
    internal_pressure_pattern: str = "INTERNAL_PRESSURE"
    prestress_pattern: str = "PRESTRESS"

    # Vessel discretization floors
    min_circumferential_segments: int = 12
    min_height_rings: int = 2


# Global config instance
CONFIG = SynthConfig()
