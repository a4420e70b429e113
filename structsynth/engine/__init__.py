# structsynth/engine - Structural engine port and adapters
"""
ENGINE: The Boundary to the Analysis Program
============================================

    port.py     StructuralEnginePort (the contract the core depends on)
    memory.py   InMemoryEngine (reference adapter, keeps the document in memory)
"""

from .port import (
    FIXED,
    PINNED,
    LoadCategory,
    MemberId,
    NodeId,
    PanelId,
    StructuralEnginePort,
)
from .memory import InMemoryEngine

__all__ = [
    'StructuralEnginePort', 'InMemoryEngine', 'LoadCategory',
    'NodeId', 'MemberId', 'PanelId', 'FIXED', 'PINNED',
]
