"""
Call graph data structures and algorithms.

This module provides in-memory graph operations for analyzing call relationships:

Data Structures:
    - CallGraph: One edge set with forward and reverse adjacency views

Algorithms:
    - reachability: Transitive callees of a root, callers filtered by reachability

Loading:
    - load_from_binary(): Run readelf/objdump and build the full graph
"""

from bincall.core.graph.base import CallGraph
from bincall.core.graph.loader import load_from_binary
from bincall.core.graph.reachability import (
    compute_reachable_set,
    filter_callers_within,
    reachable_callers,
)

__all__ = [
    "CallGraph",
    "compute_reachable_set",
    "filter_callers_within",
    "load_from_binary",
    "reachable_callers",
]
