# structsynth/engine/port.py
"""
STRUCTURAL ENGINE PORT
======================

PURPOSE:
--------
The generators never talk to an analysis program directly. Everything they
need is expressed through this narrow contract; an adapter implements it for
a concrete engine (or, for tests and previews, in memory).

CONTRACT:
---------
- Every operation either succeeds or raises EngineError.
- Identities (NodeId, MemberId, PanelId) are opaque strings assigned by the
  engine.
- ensure_load_pattern may raise DuplicateNameError when the pattern exists;
  callers treat that as success.
- Call-signature differences between engine versions are the adapter's
  problem and never leak through this interface.

DOF ORDER:
----------
Restraint flags and nodal force vectors use the 6-DOF order
[ux, uy, uz, rx, ry, rz] / [Fx, Fy, Fz, Mx, My, Mz].
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Sequence

from ..kernel.units import UnitSystem

NodeId = str
MemberId = str
PanelId = str

FIXED = (True, True, True, True, True, True)
PINNED = (True, True, True, False, False, False)


class LoadCategory(str, Enum):
    DEAD = "DEAD"
    LIVE = "LIVE"
    OTHER = "OTHER"
    PRESTRESS = "PRESTRESS"


class StructuralEnginePort(ABC):
    """Operations a structural engine must offer to the synthesis core."""

    @abstractmethod
    def set_unit_system(self, system: UnitSystem) -> None:
        ...

    @abstractmethod
    def create_node(self, x: float, y: float, z: float) -> NodeId:
        ...

    @abstractmethod
    def set_restraint(self, node: NodeId, dof_flags: Sequence[bool]) -> None:
        ...

    @abstractmethod
    def create_line(self, node_a: NodeId, node_b: NodeId, section_name: str) -> MemberId:
        ...

    @abstractmethod
    def create_panel(self, nodes: Sequence[NodeId], section_name: str) -> PanelId:
        ...

    @abstractmethod
    def define_line_section(self, name: str, material: str, depth: float, width: float) -> None:
        ...

    @abstractmethod
    def define_panel_section(self, name: str, material: str, thickness: float) -> None:
        ...

    @abstractmethod
    def ensure_load_pattern(self, name: str, category: LoadCategory, self_weight_multiplier: float) -> None:
        ...

    @abstractmethod
    def apply_nodal_force(self, node: NodeId, pattern: str, forces: Sequence[float]) -> None:
        ...

    @abstractmethod
    def set_case_active(self, name: str, active: bool) -> None:
        ...
