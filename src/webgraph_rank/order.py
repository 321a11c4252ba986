from __future__ import annotations

from typing import Any, List

from .graph import DirectedGraph


class DepthFirstOrder:
    """Full depth-first traversal of a directed graph.

    A new traversal root is launched for every vertex not yet visited, in
    vertex order. Each vertex is recorded in preorder when first entered and
    in postorder when all of its successors are finished. Already visited
    successors are skipped, so cycles do not affect the result.

    The search runs on an explicit stack of ``(vertex, successor iterator)``
    frames, which enters vertices in exactly the order a recursive search
    would, without being bounded by the interpreter's recursion limit.
    """

    def __init__(self, graph: DirectedGraph):
        self._pre: List[Any] = []
        self._post: List[Any] = []
        self._n_trees = 0

        visited = set()
        for root in graph.get_vertex_set():
            if root in visited:
                continue
            self._n_trees += 1
            visited.add(root)
            self._pre.append(root)
            stack = [(root, iter(graph.get_successor_vertex_set(root)))]
            while stack:
                v, nbrs = stack[-1]
                for w in nbrs:
                    if w not in visited:
                        visited.add(w)
                        self._pre.append(w)
                        stack.append((w, iter(graph.get_successor_vertex_set(w))))
                        break
                else:
                    stack.pop()
                    self._post.append(v)

    def pre_order(self) -> List[Any]:
        return list(self._pre)

    def post_order(self) -> List[Any]:
        """Every vertex exactly once, in the order its search finished."""
        return list(self._post)

    def number_of_df_trees(self) -> int:
        return self._n_trees
