"""Reachability queries over a finished call graph."""

from __future__ import annotations

from collections.abc import Collection
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bincall.core.graph.base import CallGraph


def compute_reachable_set(graph: CallGraph, root: str) -> set[str]:
    """Names reachable from ``root`` by following at least one call edge.

    Iterative DFS with a visited set, so cycles and deep chains are safe.
    ``root`` is only included when a cycle leads back to it. O(V + E).
    """
    visited: set[str] = set()
    stack: list[str] = graph.get_callees(root)

    while stack:
        name = stack.pop()
        if name in visited:
            continue
        visited.add(name)
        stack.extend(c for c in graph.get_callees(name) if c not in visited)

    return visited


def filter_callers_within(graph: CallGraph, target: str, reachable: Collection[str]) -> list[str]:
    """Direct callers of ``target`` that are members of ``reachable``, sorted."""
    return [caller for caller in graph.get_callers(target) if caller in reachable]


def reachable_callers(graph: CallGraph, root: str, target: str) -> list[str]:
    """Functions reachable from ``root`` that directly call ``target``."""
    return filter_callers_within(graph, target, compute_reachable_set(graph, root))
