# structsynth/kernel/units.py
"""
UNIT RESOLVER: Canonical Unit Systems
=====================================

PURPOSE:
--------
The external engine interprets every coordinate, dimension and force in its
"present" unit system. A generation run resolves that system once, from the
loose length/force pair carried by a spec, and applies it before the first
node is placed.

Only four systems exist:

    kN_m_C     kN, m       (SI, default)
    N_mm_C     N, mm       (SI)
    kip_ft_F   kip, ft     (Imperial)
    kip_in_F   kip, in     (Imperial)

Resolution never fails: anything unrecognised falls back to kN_m_C.

Derived-load inputs (unit weight, density, pressure) may arrive in their own
units; `convert_to_model` and `density_to_unit_weight` bring them into the
active system using pint.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

import pint

_UREG = pint.UnitRegistry()


class UnitSystem(str, Enum):
    KN_M = "kN_m_C"
    N_MM = "N_mm_C"
    KIP_FT = "kip_ft_F"
    KIP_IN = "kip_in_F"

    @property
    def force_unit(self) -> str:
        return _BASE_UNITS[self][0]

    @property
    def length_unit(self) -> str:
        return _BASE_UNITS[self][1]


_BASE_UNITS: Dict[UnitSystem, Tuple[str, str]] = {
    UnitSystem.KN_M: ("kN", "m"),
    UnitSystem.N_MM: ("N", "mm"),
    UnitSystem.KIP_FT: ("kip", "ft"),
    UnitSystem.KIP_IN: ("kip", "inch"),
}

_CODE_ALIASES: Dict[str, UnitSystem] = {
    "si": UnitSystem.KN_M,
    "kn_m": UnitSystem.KN_M,
    "kn-m": UnitSystem.KN_M,
    "n_mm": UnitSystem.N_MM,
    "n-mm": UnitSystem.N_MM,
    "imperial": UnitSystem.KIP_FT,
    "kip_ft": UnitSystem.KIP_FT,
    "kip-ft": UnitSystem.KIP_FT,
    "kip_in": UnitSystem.KIP_IN,
    "kip-in": UnitSystem.KIP_IN,
}

DEFAULT_UNIT_SYSTEM = UnitSystem.KN_M


def resolve_unit_system(
    length: Optional[str] = None,
    force: Optional[str] = None,
    code: Optional[str] = None,
) -> UnitSystem:
    """
    Map a length/force pair (or a symbolic code) to a canonical UnitSystem.

    A recognised code wins over the pair. For the pair, millimetres only
    select N_mm_C together with newtons; inches and feet select the kip
    systems regardless of the force unit.

    Examples:
    ---------
    >>> resolve_unit_system("mm", "N")
    <UnitSystem.N_MM: 'N_mm_C'>
    >>> resolve_unit_system("ft", "lb")
    <UnitSystem.KIP_FT: 'kip_ft_F'>
    >>> resolve_unit_system(None, None)
    <UnitSystem.KN_M: 'kN_m_C'>
    """
    if code:
        key = code.strip().lower()
        for system in UnitSystem:
            if system.value.lower() == key:
                return system
        if key in _CODE_ALIASES:
            return _CODE_ALIASES[key]

    length_key = (length or "").strip().lower()
    force_key = (force or "").strip().lower()

    if length_key == "mm" and force_key == "n":
        return UnitSystem.N_MM
    if length_key in ("in", "inch", "inches"):
        return UnitSystem.KIP_IN
    if length_key in ("ft", "foot", "feet"):
        return UnitSystem.KIP_FT
    return DEFAULT_UNIT_SYSTEM


def _target_units(system: UnitSystem, kind: str) -> str:
    F, L = system.force_unit, system.length_unit
    targets = {
        "length": L,
        "force": F,
        "force_per_length": f"{F}/{L}",
        "pressure": f"{F}/{L}**2",
        "unit_weight": f"{F}/{L}**3",
    }
    if kind not in targets:
        raise ValueError(f"Unknown quantity kind: {kind}")
    return targets[kind]


def convert_to_model(value: float, units: str, system: UnitSystem, kind: str) -> float:
    """
    Convert `value` expressed in `units` into the model units of `system`.

    `kind` is one of: length, force, force_per_length, pressure, unit_weight.
    Raises ValueError for unknown or dimensionally incompatible units.
    """
    try:
        quantity = _UREG.Quantity(value, units)
        return float(quantity.to(_target_units(system, kind)).magnitude)
    except (pint.UndefinedUnitError, pint.DimensionalityError) as e:
        raise ValueError(f"Cannot convert {value} {units} to {kind} in {system.value}: {e}") from e


def density_to_unit_weight(
    density: float,
    units: str,
    system: UnitSystem,
    gravity: float = 9.80665,
) -> float:
    """Unit weight (force/length^3 in `system`) of a fluid with mass density `density`."""
    try:
        weight = _UREG.Quantity(density, units) * _UREG.Quantity(gravity, "m/s**2")
        return float(weight.to(_target_units(system, "unit_weight")).magnitude)
    except (pint.UndefinedUnitError, pint.DimensionalityError) as e:
        raise ValueError(f"Cannot derive unit weight from density {density} {units}: {e}") from e
