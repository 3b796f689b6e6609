"""Core CallGraph class with forward and reverse adjacency views."""

from __future__ import annotations


class CallGraph:
    """Directed graph of call relationships between function names.

    Keeps one edge set and two index views over it: caller -> callees and
    callee -> callers. Both views are updated inside ``add`` only.
    """

    __slots__ = ("_out", "_in", "_edges")

    def __init__(self) -> None:
        self._out: dict[str, set[str]] = {}
        self._in: dict[str, set[str]] = {}
        self._edges: set[tuple[str, str]] = set()

    def add(self, caller: str, callee: str) -> None:
        """Add a call edge. Idempotent. O(1)."""
        edge = (caller, callee)
        if edge in self._edges:
            return
        self._edges.add(edge)
        self._out.setdefault(caller, set()).add(callee)
        self._in.setdefault(callee, set()).add(caller)

    def get_callees(self, name: str) -> list[str]:
        """Get direct callees, sorted. O(d log d) for out-degree d."""
        return sorted(self._out.get(name, ()))

    def get_callers(self, name: str) -> list[str]:
        """Get direct callers, sorted. O(d log d) for in-degree d."""
        return sorted(self._in.get(name, ()))

    def out_degree(self, name: str) -> int:
        """Number of distinct callees. O(1)."""
        return len(self._out.get(name, ()))

    def in_degree(self, name: str) -> int:
        """Number of distinct callers. O(1)."""
        return len(self._in.get(name, ()))

    def edges(self) -> list[tuple[str, str]]:
        return sorted(self._edges)

    @property
    def names(self) -> list[str]:
        return sorted(self._out.keys() | self._in.keys())

    @property
    def num_nodes(self) -> int:
        return len(self._out.keys() | self._in.keys())

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    def __contains__(self, name: object) -> bool:
        return name in self._out or name in self._in

    def __repr__(self) -> str:
        return f"CallGraph(nodes={self.num_nodes}, edges={self.num_edges})"
