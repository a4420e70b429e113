# structsynth/model.py
"""
MODEL RECORDS: What a Generated Structure Is Made Of
====================================================

These are the plain records an engine document holds after a generation
run. The core itself only ever sees identities (strings); the records are
what the in-memory engine stores and what export/preview code reads.

- Node: a point with an engine-assigned name and 6 restraint flags
- Member: a line element between two distinct nodes, tagged with a section
- Panel: a planar element over >= 3 nodes (ordered, consistent winding)
- LineSection / PanelSection: named frame and shell properties
- LoadPattern: a named load pattern with a category and self-weight factor
- NodalLoad: a 6-component force vector on a node under a pattern
"""

from dataclasses import dataclass, field
from typing import Tuple

RestraintFlags = Tuple[bool, bool, bool, bool, bool, bool]
FREE: RestraintFlags = (False, False, False, False, False, False)


@dataclass(frozen=True)
class Node:
    """
    A node (joint) in 3D space.

    Parameters:
    -----------
    id : str
        Engine-assigned name
    x, y, z : float
        Coordinates in the active unit system
    restraint : tuple of 6 bool
        [ux, uy, uz, rx, ry, rz] fixity flags
    """
    id: str
    x: float
    y: float
    z: float
    restraint: RestraintFlags = FREE

    @property
    def xyz(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class Member:
    id: str
    ni: str  # Start node ID
    nj: str  # End node ID
    section: str


@dataclass(frozen=True)
class Panel:
    id: str
    nodes: Tuple[str, ...]
    section: str


@dataclass(frozen=True)
class LineSection:
    name: str
    material: str
    depth: float
    width: float


@dataclass(frozen=True)
class PanelSection:
    name: str
    material: str
    thickness: float


@dataclass(frozen=True)
class LoadPattern:
    name: str
    category: str
    self_weight_multiplier: float = 0.0


@dataclass(frozen=True)
class NodalLoad:
    node: str
    pattern: str
    forces: Tuple[float, float, float, float, float, float] = field(default=(0.0,) * 6)
