# structsynth/loads.py
"""
LOAD SYNTHESIZER: Distributed Loads to Nodal Forces
===================================================

PURPOSE:
--------
The engine port only accepts point forces on nodes. Pressure fields acting
on a vessel wall (hydrostatic, internal gas pressure) and line tension
along a membrane edge are therefore integrated over each node's influence
region and "lumped" to the nodes.

HYDROSTATIC LUMPING:
--------------------
A vertical wall strip between heights z_low < z_high (measured from the
vessel base) and of width w (arc length per circumferential division) sees
the pressure p(z) = gamma * max(0, H_liquid - z). Over the wetted part:

    h_sub  = max(0, min(z_high, H) - min(z_low, H))
    d_low  = max(0, H - z_low),   d_high = max(0, H - z_high)
    F      = gamma * (d_low + d_high) / 2 * w * h_sub

Because p is linear in z, the trapezoid average is exact: summed over all
strips this reproduces gamma * H^2 / 2 * (2 pi R) for a cylinder.

F acts along the outward radial direction at the strip's angle and is split
half/half between the strip's bottom and top node. Nodes shared by two
strips collect both halves; the totals are submitted once per node.
"""

import logging
from typing import Callable, Dict, Iterator, List, Sequence, Tuple

import numpy as np

from .kernel.errors import EngineError, LoadError

logger = logging.getLogger(__name__)


class NodalLoadAccumulator:
    """
    Running totals of 6-component nodal forces keyed by (node, pattern).

    Contributions add; nothing reaches the engine until `submit`.
    """

    def __init__(self):
        self._totals: Dict[Tuple[str, str], np.ndarray] = {}

    def add(self, node: str, pattern: str, forces: Sequence[float]) -> None:
        vector = np.zeros(6)
        values = np.asarray(forces, dtype=float)
        vector[: len(values)] = values
        key = (node, pattern)
        if key in self._totals:
            self._totals[key] += vector
        else:
            self._totals[key] = vector

    def total(self, node: str, pattern: str) -> np.ndarray:
        return self._totals.get((node, pattern), np.zeros(6)).copy()

    def items(self) -> Iterator[Tuple[str, str, np.ndarray]]:
        for (node, pattern), vector in self._totals.items():
            yield node, pattern, vector

    def patterns(self) -> List[str]:
        seen: List[str] = []
        for _, pattern in self._totals:
            if pattern not in seen:
                seen.append(pattern)
        return seen

    def __len__(self) -> int:
        return len(self._totals)

    def submit(self, engine, threshold: float = 1e-6) -> int:
        """
        Send one nodal force per (node, pattern) whose magnitude exceeds
        `threshold`. Returns the number of assignments made.

        Raises:
        -------
        LoadError
            On the first failed assignment.
        """
        submitted = 0
        for node, pattern, vector in self.items():
            if np.linalg.norm(vector) <= threshold:
                continue
            try:
                engine.apply_nodal_force(node, pattern, [float(v) for v in vector])
            except EngineError as e:
                raise LoadError(
                    f"apply_nodal_force failed on node {node} ({pattern}): {e}",
                    operation="apply_nodal_force",
                ) from e
            submitted += 1
        return submitted


def hydrostatic_segment_force(
    z_low: float,
    z_high: float,
    liquid_height: float,
    unit_weight: float,
    width: float,
) -> float:
    """
    Total hydrostatic force on one wall strip.

    Parameters:
    -----------
    z_low, z_high : float
        Strip bounds measured from the vessel base (z_low < z_high)
    liquid_height : float
        Liquid level above the base
    unit_weight : float
        Liquid unit weight (force / length^3)
    width : float
        Strip width (arc length per circumferential division)

    Returns:
    --------
    float
        Force magnitude; 0.0 for strips above the liquid level

    Examples:
    ---------
    >>> hydrostatic_segment_force(0.0, 1.0, 2.0, 10.0, 1.0)   # depths 2 and 1
    15.0
    >>> hydrostatic_segment_force(2.0, 3.0, 2.0, 10.0, 1.0)   # dry
    0.0
    """
    submerged = max(0.0, min(z_high, liquid_height) - min(z_low, liquid_height))
    if submerged <= 0.0:
        return 0.0
    depth_low = max(0.0, liquid_height - z_low)
    depth_high = max(0.0, liquid_height - z_high)
    pressure = unit_weight * (depth_low + depth_high) / 2.0
    return pressure * width * submerged


def uniform_segment_force(z_low: float, z_high: float, pressure: float, width: float) -> float:
    """Total force of a uniform pressure on one wall strip."""
    return pressure * width * max(0.0, z_high - z_low)


def lump_wall_pressure(
    rings: Sequence[Sequence[str]],
    angles: Sequence[float],
    levels: Sequence[float],
    width: float,
    segment_force: Callable[[float, float], float],
    accumulator: NodalLoadAccumulator,
    pattern: str,
) -> float:
    """
    Lump a radial wall pressure on a vertical cylinder to its ring nodes.

    Parameters:
    -----------
    rings : rings[iz][ic]
        Node ids, ring iz (bottom to top), circumferential index ic
    angles : angles[ic]
        Angle of circumferential index ic (radians)
    levels : levels[iz]
        Height of ring iz above the vessel base (ascending)
    width : float
        Arc length per circumferential division
    segment_force : callable(z_low, z_high) -> float
        Total force on one strip between two levels
    accumulator : NodalLoadAccumulator
        Receives the lumped forces
    pattern : str
        Load pattern name

    Returns:
    --------
    float
        Sum of strip force magnitudes (the total radial force)
    """
    total = 0.0
    for ic, theta in enumerate(angles):
        radial = np.array([np.cos(theta), np.sin(theta), 0.0])
        for iz in range(len(levels) - 1):
            force = segment_force(levels[iz], levels[iz + 1])
            if force <= 0.0:
                continue
            half = 0.5 * force * radial
            accumulator.add(rings[iz][ic], pattern, half)
            accumulator.add(rings[iz + 1][ic], pattern, half)
            total += force
    logger.debug("lumped %.6g total radial force into %s", total, pattern)
    return total


def lump_edge_prestress(
    edge_nodes: Sequence[str],
    points: Sequence[Tuple[float, float, float]],
    center: Tuple[float, float],
    prestress: float,
    accumulator: NodalLoadAccumulator,
    pattern: str,
) -> float:
    """
    Lump a line prestress along a closed edge polygon to its vertices.

    Each vertex receives prestress * (half of each adjacent edge length),
    pointing away from `center` in plan. Returns the sum of magnitudes.
    """
    n = len(edge_nodes)
    pts = np.asarray(points, dtype=float)
    total = 0.0
    for i in range(n):
        prev_len = np.linalg.norm(pts[i] - pts[(i - 1) % n])
        next_len = np.linalg.norm(pts[(i + 1) % n] - pts[i])
        magnitude = prestress * 0.5 * (prev_len + next_len)
        outward = np.array([pts[i][0] - center[0], pts[i][1] - center[1], 0.0])
        norm = np.linalg.norm(outward)
        if norm == 0.0 or magnitude <= 0.0:
            continue
        accumulator.add(edge_nodes[i], pattern, magnitude * outward / norm)
        total += magnitude
    return total
