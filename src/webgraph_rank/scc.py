from __future__ import annotations

from typing import Any, Dict, List, Tuple

from .graph import DirectedGraph
from .order import DepthFirstOrder


def scc_kosaraju(graph: DirectedGraph) -> Tuple[Dict[Any, int], List[List[Any]]]:
    """Strongly connected components via Kosaraju-Sharir (iterative).

    Parameters
    ----------
    graph:
        directed graph; edge weights are ignored.

    Returns
    -------
    comp_id:
        dict mapping vertex -> component index in [0, m-1].
    comps:
        list of components; comps[c] holds the members of component c in
        vertex order.
    """
    # first pass: finishing order on the graph itself
    order = DepthFirstOrder(graph).post_order()
    inv = graph.invert()

    # second pass on the inverted graph, in reverse finishing order
    comp_id: Dict[Any, int] = {}
    comps: List[List[Any]] = []
    visited = set()

    for start in reversed(order):
        if start in visited:
            continue
        cid = len(comps)
        members: List[Any] = []
        visited.add(start)
        stack = [(start, iter(inv.get_successor_vertex_set(start)))]
        while stack:
            u, nbrs = stack[-1]
            for v in nbrs:
                if v not in visited:
                    visited.add(v)
                    stack.append((v, iter(inv.get_successor_vertex_set(v))))
                    break
            else:
                stack.pop()
                comp_id[u] = cid
                members.append(u)
        comps.append(sorted(members, key=graph.key))

    return comp_id, comps


class StrongComponents:
    """Strong components of a directed graph, numbered in discovery order."""

    def __init__(self, graph: DirectedGraph):
        self._comp_id, self._comps = scc_kosaraju(graph)

    def number_of_comp(self) -> int:
        return len(self._comps)

    def components(self) -> Dict[int, Tuple[Any, ...]]:
        return {i: tuple(members) for i, members in enumerate(self._comps)}

    def component_of(self, v: Any) -> int:
        try:
            return self._comp_id[v]
        except KeyError:
            raise ValueError(f"Unknown vertex {v!r}.") from None

    def __len__(self) -> int:
        return len(self._comps)

    def __str__(self) -> str:
        lines = []
        for i, members in enumerate(self._comps):
            lines.append(f"Component {i}: " + "".join(f"{v}, " for v in members) + "\n")
        return "".join(lines)
