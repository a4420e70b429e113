# structsynth/export.py
"""
Export: tables, JSON and CSV of a generated engine document.

Works on any engine exposing the InMemoryEngine document attributes
(nodes, members, panels, line_sections, panel_sections, loads).
"""

import json
from typing import Any, Dict, Optional

import numpy as np
import pandas as pd

from .result import GenerationResult

DOF_LABELS = ('ux', 'uy', 'uz', 'rx', 'ry', 'rz')
FORCE_LABELS = ('fx', 'fy', 'fz', 'mx', 'my', 'mz')


def member_length(engine, member) -> float:
    a = engine.nodes[member.ni]
    b = engine.nodes[member.nj]
    return float(np.linalg.norm(np.subtract(b.xyz, a.xyz)))


def model_tables(engine) -> Dict[str, pd.DataFrame]:
    """
    One DataFrame per object kind.

    Returns:
    --------
    dict with keys 'nodes', 'members', 'panels', 'sections', 'loads'
    """
    nodes = pd.DataFrame(
        [
            {'id': n.id, 'x': n.x, 'y': n.y, 'z': n.z, **dict(zip(DOF_LABELS, n.restraint))}
            for n in engine.nodes.values()
        ],
        columns=['id', 'x', 'y', 'z', *DOF_LABELS],
    )

    members = pd.DataFrame(
        [
            {'id': m.id, 'ni': m.ni, 'nj': m.nj, 'section': m.section, 'length': round(member_length(engine, m), 6)}
            for m in engine.members.values()
        ],
        columns=['id', 'ni', 'nj', 'section', 'length'],
    )

    panels = pd.DataFrame(
        [
            {'id': p.id, 'n_nodes': len(p.nodes), 'nodes': ' '.join(p.nodes), 'section': p.section}
            for p in engine.panels.values()
        ],
        columns=['id', 'n_nodes', 'nodes', 'section'],
    )

    section_rows = [
        {'name': s.name, 'kind': 'line', 'material': s.material, 'depth': s.depth, 'width': s.width,
         'thickness': np.nan}
        for s in engine.line_sections.values()
    ]
    section_rows += [
        {'name': s.name, 'kind': 'panel', 'material': s.material, 'depth': np.nan, 'width': np.nan,
         'thickness': s.thickness}
        for s in engine.panel_sections.values()
    ]
    sections = pd.DataFrame(section_rows, columns=['name', 'kind', 'material', 'depth', 'width', 'thickness'])

    loads = pd.DataFrame(
        [
            {'node': load.node, 'pattern': load.pattern, **dict(zip(FORCE_LABELS, load.forces))}
            for load in engine.loads.values()
        ],
        columns=['node', 'pattern', *FORCE_LABELS],
    )

    return {'nodes': nodes, 'members': members, 'panels': panels, 'sections': sections, 'loads': loads}


def members_csv(engine) -> str:
    """
    Member list as CSV, sorted by length (a cut list for fabrication).

    Returns CSV content as a string.
    """
    members = model_tables(engine)['members']
    members = members.sort_values(['length', 'id'], kind='mergesort')
    return members.to_csv(index=False)


def model_dict(engine, result: Optional[GenerationResult] = None) -> Dict[str, Any]:
    tables = model_tables(engine)
    return {
        'version': '1.0',
        'units': engine.unit_system.value if engine.unit_system is not None else None,
        'summary': result.to_dict() if result is not None else None,
        'geometry': {
            'nodes': tables['nodes'].to_dict(orient='records'),
            'members': tables['members'].to_dict(orient='records'),
            'panels': [
                {'id': p.id, 'nodes': list(p.nodes), 'section': p.section}
                for p in engine.panels.values()
            ],
        },
        'sections': json.loads(tables['sections'].to_json(orient='records')),
        'loads': tables['loads'].to_dict(orient='records'),
        'active_cases': engine.active_cases(),
    }


def model_json(engine, result: Optional[GenerationResult] = None) -> str:
    """
    Generate JSON model data for interchange.

    Returns JSON content as a string.
    """
    return json.dumps(model_dict(engine, result), indent=2, default=_to_builtin)


def _to_builtin(value):
    if isinstance(value, (np.integer,)):
        return int(value)
    if isinstance(value, (np.floating,)):
        return float(value)
    if isinstance(value, np.bool_):
        return bool(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")
