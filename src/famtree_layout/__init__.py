"""Family tree layout engine.

Lays out the direct lineage of a focused person (ancestors above,
descendants below, spouses side by side) and serialises the result for
renderers.

Usage:
    from famtree_layout import compute_layout
    result = compute_layout(person_id, people)

    famtree-layout tree.json --focus <person-id> -o layout.json
"""

from .config import DEFAULT_CONFIG, ConfigError, LayoutConfig
from .layout import LayoutEngine, calculate_node_width, compute_layout
from .models import (
    Bounds,
    Connection,
    FamilyTree,
    LayoutNode,
    LayoutResult,
    Person,
    Point,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Bounds",
    "ConfigError",
    "Connection",
    "FamilyTree",
    "LayoutConfig",
    "LayoutEngine",
    "LayoutNode",
    "LayoutResult",
    "Person",
    "Point",
    "calculate_node_width",
    "compute_layout",
]
