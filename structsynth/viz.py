# structsynth/viz.py
"""
VISUALIZATION: 3D Preview of a Generated Model
==============================================

PURPOSE:
--------
Render the engine document (members, panels, supports, nodal loads) as a
static matplotlib 3D figure. This is a sanity check of the generated
geometry before the model goes to the analysis program:

- Are the rings closed and the bays where they should be?
- Are the supports at the base?
- Do the pressure loads point outward?
"""

from typing import Dict, Optional

import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d.art3d import Poly3DCollection
import numpy as np

COLORS = {
    'panel': '#AED6F1',
    'panel_edge': '#5D6D7E',
    'support': '#E74C3C',
    'load': '#27AE60',
    'background': '#FAFAFA',
    'text': '#2C3E50',
}

SECTION_CMAP = 'tab10'


def _section_colors(engine) -> Dict[str, tuple]:
    cmap = plt.get_cmap(SECTION_CMAP)
    names = sorted({m.section for m in engine.members.values()})
    return {name: cmap(i % cmap.N) for i, name in enumerate(names)}


def plot_model(
    engine,
    outpath: str,
    title: str = "Generated Model",
    show_supports: bool = True,
    show_loads: bool = True,
    load_scale: Optional[float] = None,
) -> str:
    """
    Plot members (colored by section), panels, supports and nodal loads.

    Parameters:
    -----------
    engine : InMemoryEngine
        Document to draw
    outpath : str
        Output image path
    title : str
        Plot title
    show_supports : bool
        Mark restrained nodes
    show_loads : bool
        Draw nodal force arrows
    load_scale : float, optional
        Arrow length per unit force (default: 10% of the model extent
        for the largest force)

    Returns:
    --------
    str
        outpath
    """
    fig = plt.figure(figsize=(10, 8), facecolor=COLORS['background'])
    ax = fig.add_subplot(111, projection='3d')

    coords = np.array([n.xyz for n in engine.nodes.values()]) if engine.nodes else np.zeros((1, 3))
    extent = float(np.ptp(coords, axis=0).max()) or 1.0

    colors = _section_colors(engine)
    for member in engine.members.values():
        a = engine.nodes[member.ni].xyz
        b = engine.nodes[member.nj].xyz
        ax.plot([a[0], b[0]], [a[1], b[1]], [a[2], b[2]], color=colors[member.section], linewidth=1.2)

    if engine.panels:
        polygons = [[engine.nodes[n].xyz for n in panel.nodes] for panel in engine.panels.values()]
        ax.add_collection3d(Poly3DCollection(
            polygons, facecolor=COLORS['panel'], edgecolor=COLORS['panel_edge'], linewidths=0.4, alpha=0.5,
        ))

    if show_supports:
        supports = np.array([engine.nodes[n].xyz for n in engine.restrained_nodes()])
        if len(supports):
            ax.scatter(supports[:, 0], supports[:, 1], supports[:, 2],
                       color=COLORS['support'], marker='^', s=30, label='Supports')

    if show_loads and engine.loads:
        forces = np.array([load.forces[:3] for load in engine.loads.values()])
        origins = np.array([engine.nodes[load.node].xyz for load in engine.loads.values()])
        peak = float(np.linalg.norm(forces, axis=1).max())
        scale = load_scale if load_scale is not None else (0.1 * extent / peak if peak > 0 else 0.0)
        ax.quiver(origins[:, 0], origins[:, 1], origins[:, 2],
                  forces[:, 0] * scale, forces[:, 1] * scale, forces[:, 2] * scale,
                  color=COLORS['load'], linewidth=0.8, label='Nodal loads')

    mins = coords.min(axis=0)
    center = (coords.max(axis=0) + mins) / 2.0
    for setter, c in zip((ax.set_xlim, ax.set_ylim, ax.set_zlim), center):
        setter(c - extent / 2.0, c + extent / 2.0)

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_zlabel('Z')
    ax.set_title(
        f"{title}\n{len(engine.nodes)} nodes, {len(engine.members)} members, {len(engine.panels)} panels",
        color=COLORS['text'],
    )
    if show_supports or show_loads:
        handles, labels = ax.get_legend_handles_labels()
        if handles:
            ax.legend(loc='upper left')

    plt.savefig(outpath, dpi=150, bbox_inches='tight', facecolor=COLORS['background'])
    plt.close(fig)
    return outpath
