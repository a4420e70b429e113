# structsynth/result.py
"""
RESULT SUMMARY: What a Generation Run Created
=============================================

The generators count as they go; the caller receives a frozen snapshot.
Counts are of engine objects actually created - cache hits, ensure-once
hits and skipped degenerate/duplicate requests are not counted (skips are
tallied separately under `skipped`).
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class GenerationResult:
    """
    Counts of created objects for one generation call. Never persisted.

    Attributes:
    -----------
    archetype : str
        vessel, building, industrial, bridge or special
    unit_system : str
        Canonical unit system code applied before any geometry
    nodes, members, panels : int
        Created geometry
    restraints : int
        Nodes that received a restraint assignment
    sections : int
        Sections defined in this run
    load_patterns : int
        Load patterns created for derived loads
    nodal_loads : int
        Nodal force assignments submitted
    skipped : int
        Degenerate or duplicate member/panel requests that were dropped
    groups : dict
        Created members/panels per group (e.g. 'ring', 'vertical', 'brace')
    active_cases : list
        Load cases flagged to run
    """
    archetype: str = ""
    unit_system: str = ""
    nodes: int = 0
    members: int = 0
    panels: int = 0
    restraints: int = 0
    sections: int = 0
    load_patterns: int = 0
    nodal_loads: int = 0
    skipped: int = 0
    groups: Dict[str, int] = field(default_factory=dict)
    active_cases: List[str] = field(default_factory=list)

    @property
    def shells(self) -> int:
        """Panels are shell objects in the engine."""
        return self.panels

    def group(self, name: str) -> int:
        return self.groups.get(name, 0)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["shells"] = self.shells
        return data

    def summary_text(self) -> str:
        """Generate a text summary of the run."""
        lines = [
            f"{self.archetype.upper()} GENERATION SUMMARY",
            "=" * 40,
            f"  Units:         {self.unit_system}",
            "",
            "GEOMETRY",
            f"  Nodes:         {self.nodes}",
            f"  Members:       {self.members}",
            f"  Panels:        {self.panels}",
            f"  Restraints:    {self.restraints}",
            f"  Skipped:       {self.skipped}",
            "",
            "PROPERTIES & LOADS",
            f"  Sections:      {self.sections}",
            f"  Load patterns: {self.load_patterns}",
            f"  Nodal loads:   {self.nodal_loads}",
            f"  Active cases:  {', '.join(self.active_cases) or '-'}",
        ]
        if self.groups:
            lines += ["", "GROUPS"]
            for name in sorted(self.groups):
                lines.append(f"  {name:<14} {self.groups[name]}")
        return "\n".join(lines)


@dataclass
class ResultCounter:
    """Mutable tally used while a run is in progress."""
    archetype: str = ""
    unit_system: str = ""
    nodes: int = 0
    members: int = 0
    panels: int = 0
    restraints: int = 0
    load_patterns: int = 0
    nodal_loads: int = 0
    skipped: int = 0
    groups: Dict[str, int] = field(default_factory=dict)
    active_cases: List[str] = field(default_factory=list)

    def bump(self, group: str) -> None:
        self.groups[group] = self.groups.get(group, 0) + 1

    def snapshot(self, sections: int = 0) -> GenerationResult:
        return GenerationResult(
            archetype=self.archetype,
            unit_system=self.unit_system,
            nodes=self.nodes,
            members=self.members,
            panels=self.panels,
            restraints=self.restraints,
            sections=sections,
            load_patterns=self.load_patterns,
            nodal_loads=self.nodal_loads,
            skipped=self.skipped,
            groups=dict(self.groups),
            active_cases=list(self.active_cases),
        )
