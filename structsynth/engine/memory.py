# structsynth/engine/memory.py
"""
IN-MEMORY ENGINE: Reference Adapter
===================================

A complete implementation of the StructuralEnginePort that keeps the model
document in Python dictionaries. It backs the HTTP service, the export and
preview helpers, and the test suite.

It behaves like a freshly initialized blank model of a commercial engine:
- the DEAD pattern and DEAD case already exist
- adding a pattern also adds a like-named case
- names are assigned sequentially ("1", "2", ...)
- referencing an unknown node, section or case is an error

Every call is appended to `calls` as (operation, args) so tests can audit
exactly what the core asked for.
"""

from typing import Dict, List, Optional, Sequence, Tuple, Any

from ..kernel.errors import DuplicateNameError, EngineError
from ..kernel.units import UnitSystem
from ..model import (
    LineSection,
    LoadPattern,
    Member,
    Node,
    NodalLoad,
    Panel,
    PanelSection,
)
from .port import LoadCategory, StructuralEnginePort


class InMemoryEngine(StructuralEnginePort):
    """Structural engine whose document lives in memory."""

    def __init__(self, default_case: str = "DEAD"):
        self.unit_system: Optional[UnitSystem] = None
        self.nodes: Dict[str, Node] = {}
        self.members: Dict[str, Member] = {}
        self.panels: Dict[str, Panel] = {}
        self.line_sections: Dict[str, LineSection] = {}
        self.panel_sections: Dict[str, PanelSection] = {}
        self.patterns: Dict[str, LoadPattern] = {
            default_case: LoadPattern(default_case, LoadCategory.DEAD.value, 1.0)
        }
        self.cases: Dict[str, bool] = {default_case: False}
        self.loads: Dict[Tuple[str, str], NodalLoad] = {}
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self._next_id = {"node": 1, "member": 1, "panel": 1}

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------

    def _log(self, operation: str, *args) -> None:
        self.calls.append((operation, args))

    def _new_name(self, kind: str) -> str:
        name = str(self._next_id[kind])
        self._next_id[kind] += 1
        return name

    def _require_node(self, node: str) -> Node:
        if node not in self.nodes:
            raise EngineError(f"Unknown node: {node}")
        return self.nodes[node]

    def call_count(self, operation: str) -> int:
        """Number of times `operation` was invoked."""
        return sum(1 for op, _ in self.calls if op == operation)

    @property
    def sections(self) -> Dict[str, Any]:
        merged: Dict[str, Any] = dict(self.line_sections)
        merged.update(self.panel_sections)
        return merged

    # ------------------------------------------------------------------
    # port
    # ------------------------------------------------------------------

    def set_unit_system(self, system: UnitSystem) -> None:
        self._log("set_unit_system", system)
        self.unit_system = UnitSystem(system)

    def create_node(self, x: float, y: float, z: float) -> str:
        self._log("create_node", x, y, z)
        name = self._new_name("node")
        self.nodes[name] = Node(id=name, x=float(x), y=float(y), z=float(z))
        return name

    def set_restraint(self, node: str, dof_flags: Sequence[bool]) -> None:
        self._log("set_restraint", node, tuple(dof_flags))
        current = self._require_node(node)
        flags = tuple(bool(f) for f in dof_flags)
        if len(flags) != 6:
            raise EngineError(f"Restraint needs 6 flags, got {len(flags)}")
        self.nodes[node] = Node(current.id, current.x, current.y, current.z, restraint=flags)

    def create_line(self, node_a: str, node_b: str, section_name: str) -> str:
        self._log("create_line", node_a, node_b, section_name)
        self._require_node(node_a)
        self._require_node(node_b)
        if node_a == node_b:
            raise EngineError(f"Zero-length member at node {node_a}")
        if section_name not in self.line_sections:
            raise EngineError(f"Unknown frame section: {section_name}")
        name = self._new_name("member")
        self.members[name] = Member(id=name, ni=node_a, nj=node_b, section=section_name)
        return name

    def create_panel(self, nodes: Sequence[str], section_name: str) -> str:
        node_list = tuple(nodes)
        self._log("create_panel", node_list, section_name)
        if len(node_list) < 3:
            raise EngineError(f"Panel needs at least 3 nodes, got {len(node_list)}")
        for node in node_list:
            self._require_node(node)
        if section_name not in self.panel_sections:
            raise EngineError(f"Unknown shell section: {section_name}")
        name = self._new_name("panel")
        self.panels[name] = Panel(id=name, nodes=node_list, section=section_name)
        return name

    def define_line_section(self, name: str, material: str, depth: float, width: float) -> None:
        self._log("define_line_section", name, material, depth, width)
        if depth <= 0 or width <= 0:
            raise EngineError(f"Section {name}: dimensions must be positive")
        self.line_sections[name] = LineSection(name, material, float(depth), float(width))

    def define_panel_section(self, name: str, material: str, thickness: float) -> None:
        self._log("define_panel_section", name, material, thickness)
        if thickness <= 0:
            raise EngineError(f"Section {name}: thickness must be positive")
        self.panel_sections[name] = PanelSection(name, material, float(thickness))

    def ensure_load_pattern(self, name: str, category: LoadCategory, self_weight_multiplier: float) -> None:
        self._log("ensure_load_pattern", name, category, self_weight_multiplier)
        if name in self.patterns:
            raise DuplicateNameError(f"Load pattern already exists: {name}")
        self.patterns[name] = LoadPattern(name, LoadCategory(category).value, float(self_weight_multiplier))
        self.cases.setdefault(name, False)

    def apply_nodal_force(self, node: str, pattern: str, forces: Sequence[float]) -> None:
        values = tuple(float(f) for f in forces)
        self._log("apply_nodal_force", node, pattern, values)
        self._require_node(node)
        if pattern not in self.patterns:
            raise EngineError(f"Unknown load pattern: {pattern}")
        if len(values) != 6:
            raise EngineError(f"Nodal force needs 6 components, got {len(values)}")
        self.loads[(node, pattern)] = NodalLoad(node=node, pattern=pattern, forces=values)

    def set_case_active(self, name: str, active: bool) -> None:
        self._log("set_case_active", name, active)
        if name not in self.cases:
            raise EngineError(f"Unknown load case: {name}")
        self.cases[name] = bool(active)

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def active_cases(self) -> List[str]:
        return [name for name, active in self.cases.items() if active]

    def restrained_nodes(self) -> List[str]:
        return [n.id for n in self.nodes.values() if any(n.restraint)]

    def loads_for(self, pattern: str) -> List[NodalLoad]:
        return [load for (_, p), load in self.loads.items() if p == pattern]
