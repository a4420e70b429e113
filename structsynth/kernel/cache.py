# structsynth/kernel/cache.py
"""
GEOMETRY CACHE: Coordinate-Keyed Node Deduplication
===================================================

PURPOSE:
--------
Every point a generator needs - grid corners, ring nodes, bracing work
points, shear-wall corners, crane brackets - goes through `place`. Two
requests that differ only by floating-point noise must come back with the
same node, and the engine must be asked to create it exactly once.

HOW:
----
Coordinates are rounded to a fixed number of decimals (6 by default) and
formatted with a fixed-point format, so the key does not depend on the
magnitude of the value or on its float representation:

    (0.1 + 0.2, 0, 5)  ->  "0.300000,0.000000,5.000000"
    (0.3,       0, 5)  ->  "0.300000,0.000000,5.000000"

Negative zero is folded into zero so that points computed from cos/sin
(e.g. -0.0 on the axis) collide with their exact counterparts.

Two points a hair apart can still round into neighbouring cells
(1.0000004999 and 1.0000005001). On a miss the 26 neighbouring cells are
checked, and a node there is reused when every axis is within the
coordinate tolerance.

LIFETIME:
---------
One cache per generation call. Nothing is shared between calls.
"""

import logging
from itertools import product
from typing import Dict, Optional, Tuple

from .errors import EngineError, GeometryError

logger = logging.getLogger(__name__)

Cells = Tuple[int, int, int]

# the 26 cells around a cell
_NEIGHBOURS = [d for d in product((-1, 0, 1), repeat=3) if d != (0, 0, 0)]


class GeometryCache:
    """
    Maps quantized coordinates to engine node identities.

    Parameters:
    -----------
    engine : StructuralEnginePort
        Engine used to create nodes on a cache miss
    precision : int
        Decimals kept in the coordinate key
    tolerance : float
        Points closer than this on every axis are the same node, even when
        they round into neighbouring cells

    Examples:
    ---------
    >>> cache = GeometryCache(engine)
    >>> a = cache.place(1.0, 2.0, 3.0)
    >>> b = cache.place(1.0 + 1e-9, 2.0, 3.0)
    >>> a == b
    True
    """

    def __init__(self, engine, precision: int = 6, tolerance: float = 1e-6):
        self.engine = engine
        self.precision = precision
        self.tolerance = tolerance
        self._scale = 10 ** precision
        self._nodes: Dict[str, str] = {}
        self._points: Dict[str, Tuple[float, float, float]] = {}
        self.hits = 0
        self.misses = 0

    def _cells(self, x: float, y: float, z: float) -> Cells:
        return tuple(int(round(float(v) * self._scale)) for v in (x, y, z))

    def _cell_key(self, cells: Cells) -> str:
        # integer cells fold -0.0 into 0
        return ",".join(f"{c / self._scale:.{self.precision}f}" for c in cells)

    def key(self, x: float, y: float, z: float) -> str:
        """Quantized key for a coordinate triple."""
        return self._cell_key(self._cells(x, y, z))

    def _near(self, cells: Cells, point) -> Optional[str]:
        """Node in a neighbouring cell within `tolerance` of `point` on every axis."""
        for d in _NEIGHBOURS:
            k = self._cell_key(tuple(c + o for c, o in zip(cells, d)))
            stored = self._points.get(k)
            if stored is not None and all(abs(p - q) <= self.tolerance for p, q in zip(stored, point)):
                return self._nodes[k]
        return None

    def lookup(self, x: float, y: float, z: float) -> Optional[str]:
        """Existing node at (x, y, z), or None. Never calls the engine."""
        cells = self._cells(x, y, z)
        node = self._nodes.get(self._cell_key(cells))
        if node is None:
            node = self._near(cells, (float(x), float(y), float(z)))
        return node

    def place(self, x: float, y: float, z: float) -> str:
        """
        Return the node at (x, y, z), creating it on first request.

        Raises:
        -------
        GeometryError
            If the engine fails to create the node. Not retried.
        """
        point = (float(x), float(y), float(z))
        cells = self._cells(*point)
        k = self._cell_key(cells)
        node = self._nodes.get(k)
        if node is None:
            node = self._near(cells, point)
        if node is not None:
            self.hits += 1
            logger.debug("node cache hit %s -> %s", k, node)
            return node

        try:
            node = self.engine.create_node(*point)
        except EngineError as e:
            raise GeometryError(
                f"create_node failed at ({x:.6g}, {y:.6g}, {z:.6g}): {e}",
                operation="create_node",
            ) from e

        self._nodes[k] = node
        self._points[k] = point
        self.misses += 1
        return node

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, xyz) -> bool:
        return self.lookup(*xyz) is not None
