from __future__ import annotations

from typing import Any, Optional, Tuple

from .graph import DirectedGraph


class DirectedCycle:
    """Depth-first search for a directed cycle.

    Roots are tried in vertex order. When an edge ``v -> w`` reaches a vertex
    ``w`` that is still on the active search path, every vertex on that path
    is taken as cycle evidence and the search stops at once.

    The evidence is the whole active path at detection time, in path order.
    It contains the cycle through ``w`` but may also hold the vertices that
    lead from the root to ``w``; it is not a minimal cycle.
    """

    def __init__(self, graph: DirectedGraph):
        self._graph = graph
        self._cycle: Tuple[Any, ...] = ()

        visited = set()
        for root in graph.get_vertex_set():
            if root not in visited:
                self._search(root, visited)
                if self.has_cycle():
                    return

    def _search(self, root: Any, visited: set) -> None:
        g = self._graph
        path = [root]
        on_path = {root}
        visited.add(root)
        stack = [iter(g.get_successor_vertex_set(root))]
        while stack:
            for w in stack[-1]:
                if w not in visited:
                    visited.add(w)
                    path.append(w)
                    on_path.add(w)
                    stack.append(iter(g.get_successor_vertex_set(w)))
                    break
                if w in on_path:
                    self._cycle = tuple(path)
                    return
            else:
                stack.pop()
                on_path.discard(path.pop())

    def has_cycle(self) -> bool:
        return len(self._cycle) > 0

    def get_cycle(self) -> Optional[Tuple[Any, ...]]:
        """Vertices on the search path when the cycle was found, or None."""
        return self._cycle if self._cycle else None
