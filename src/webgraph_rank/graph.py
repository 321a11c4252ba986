from __future__ import annotations

from bisect import insort
from collections.abc import Set
from typing import Any, Callable, Dict, Hashable, Iterable, Iterator, List, Optional, Tuple

import numpy as np
from scipy import sparse


class VertexSetView(Set):
    """Read-only, ordered view over the keys of one adjacency map.

    Membership is answered by the backing dict, iteration follows the
    sorted key list kept next to it. The view holds references, not copies,
    so it reflects later insertions into the graph.
    """

    __slots__ = ("_members", "_order")

    def __init__(self, members: Dict[Any, Any], order: List[Any]):
        self._members = members
        self._order = order

    def __contains__(self, v: object) -> bool:
        return v in self._members

    def __iter__(self) -> Iterator[Any]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    @classmethod
    def _from_iterable(cls, it: Iterable[Any]) -> frozenset:
        # results of set operators are plain frozensets
        return frozenset(it)

    def __repr__(self) -> str:
        return "{" + ", ".join(repr(v) for v in self._order) + "}"


_EMPTY = VertexSetView({}, [])


class _Adjacency:
    """One neighbour map (neighbour -> weight) with its sorted neighbour list."""

    __slots__ = ("weights", "order")

    def __init__(self) -> None:
        self.weights: Dict[Any, float] = {}
        self.order: List[Any] = []

    def put(self, w: Any, weight: float, key: Optional[Callable[[Any], Any]]) -> bool:
        added = w not in self.weights
        if added:
            insort(self.order, w, key=key)
        self.weights[w] = weight
        return added

    def view(self) -> VertexSetView:
        return VertexSetView(self.weights, self.order)


class DirectedGraph:
    """Weighted directed graph backed by two mirrored adjacency maps.

    ``succ[v]`` holds the outgoing edges of ``v`` and ``pred[w]`` the incoming
    edges of ``w``. Both maps always agree on which edges exist and on their
    weights. At most one edge exists per ordered pair; self-loops are allowed.

    Vertices must be hashable and totally ordered, either naturally or through
    ``key``. Vertex sets and neighbour sets iterate in that order, which makes
    every traversal built on top of the graph deterministic.
    """

    def __init__(self, *, key: Optional[Callable[[Any], Any]] = None):
        self._key = key
        self._succ: Dict[Any, _Adjacency] = {}
        self._pred: Dict[Any, _Adjacency] = {}
        self._vertices: List[Any] = []

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple[Any, ...]],
        *,
        key: Optional[Callable[[Any], Any]] = None,
    ) -> "DirectedGraph":
        """Build a graph from ``(v, w)`` or ``(v, w, weight)`` tuples."""
        g = cls(key=key)
        for edge in edges:
            if len(edge) == 2:
                g.add_edge(edge[0], edge[1])
            elif len(edge) == 3:
                g.add_edge(edge[0], edge[1], float(edge[2]))
            else:
                raise ValueError(f"Edge must be (v, w) or (v, w, weight), got {edge!r}.")
        return g

    @property
    def key(self) -> Optional[Callable[[Any], Any]]:
        return self._key

    # ---- construction -------------------------------------------------

    def add_vertex(self, v: Hashable) -> bool:
        """Insert ``v`` without edges. Returns True iff ``v`` was new."""
        if v in self._succ or v in self._pred:
            return False
        self._succ[v] = _Adjacency()
        self._pred[v] = _Adjacency()
        insort(self._vertices, v, key=self._key)
        return True

    def add_edge(self, v: Hashable, w: Hashable, weight: float = 1.0) -> bool:
        """Insert the edge ``v -> w``, adding missing endpoints.

        Re-adding an existing edge only replaces its weight.

        Returns
        -------
        bool
            True iff the edge did not exist before.
        """
        self.add_vertex(v)
        self.add_vertex(w)
        weight = float(weight)
        new_succ = self._succ[v].put(w, weight, self._key)
        new_pred = self._pred[w].put(v, weight, self._key)
        return new_succ and new_pred

    # ---- queries ------------------------------------------------------

    def contains_vertex(self, v: Hashable) -> bool:
        return v in self._succ and v in self._pred

    def contains_edge(self, v: Hashable, w: Hashable) -> bool:
        if v not in self._succ or w not in self._pred:
            return False
        return w in self._succ[v].weights and v in self._pred[w].weights

    def get_weight(self, v: Hashable, w: Hashable) -> float:
        if not self.contains_edge(v, w):
            raise ValueError(f"No edge {v!r} --> {w!r}.")
        return self._succ[v].weights[w]

    def get_in_degree(self, v: Hashable) -> int:
        if v not in self._pred:
            raise ValueError(f"Unknown vertex {v!r}.")
        return len(self._pred[v].order)

    def get_out_degree(self, v: Hashable) -> int:
        if v not in self._succ:
            raise ValueError(f"Unknown vertex {v!r}.")
        return len(self._succ[v].order)

    def get_vertex_set(self) -> VertexSetView:
        return VertexSetView(self._succ, self._vertices)

    def get_successor_vertex_set(self, v: Hashable) -> VertexSetView:
        adj = self._succ.get(v)
        return _EMPTY if adj is None else adj.view()

    def get_predecessor_vertex_set(self, v: Hashable) -> VertexSetView:
        adj = self._pred.get(v)
        return _EMPTY if adj is None else adj.view()

    def get_number_of_vertexes(self) -> int:
        return len(self._succ)

    def get_number_of_edges(self) -> int:
        return sum(len(adj.order) for adj in self._succ.values())

    def edges(self) -> Iterator[Tuple[Any, Any, float]]:
        """Yield ``(v, w, weight)`` for every edge, ordered by ``v`` then ``w``."""
        for v in self._vertices:
            adj = self._succ[v]
            for w in adj.order:
                yield v, w, adj.weights[w]

    # ---- derived graphs -----------------------------------------------

    def invert(self) -> "DirectedGraph":
        """Return a new graph with every edge reversed and its weight kept.

        Isolated vertices are carried over as well.
        """
        g = DirectedGraph(key=self._key)
        for v in self._vertices:
            g.add_vertex(v)
        for v, w, weight in self.edges():
            g.add_edge(w, v, weight)
        return g

    def to_csr(self) -> Tuple[sparse.csr_matrix, np.ndarray]:
        """Weighted adjacency matrix in vertex order.

        Returns
        -------
        A:
            ``scipy.sparse.csr_matrix`` of shape (n, n) with ``A[i, j]`` the
            weight of edge ``vertices[i] -> vertices[j]``.
        vertices:
            object array mapping matrix index -> vertex.
        """
        n = len(self._vertices)
        index = {v: i for i, v in enumerate(self._vertices)}
        m = self.get_number_of_edges()
        rows = np.empty(m, dtype=np.int64)
        cols = np.empty(m, dtype=np.int64)
        vals = np.empty(m, dtype=np.float64)
        for k, (v, w, weight) in enumerate(self.edges()):
            rows[k] = index[v]
            cols[k] = index[w]
            vals[k] = weight
        A = sparse.csr_matrix((vals, (rows, cols)), shape=(n, n), dtype=np.float64)
        vertices = np.empty(n, dtype=object)
        for i, v in enumerate(self._vertices):
            vertices[i] = v
        return A, vertices

    # ---- dunders ------------------------------------------------------

    def __contains__(self, v: object) -> bool:
        return v in self._succ

    def __len__(self) -> int:
        return len(self._succ)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._vertices)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DirectedGraph):
            return NotImplemented
        if set(self._succ) != set(other._succ):
            return False
        return all(
            self._succ[v].weights == other._succ[v].weights for v in self._succ
        )

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "".join(f"{v} --> {w} weight = {weight}\n" for v, w, weight in self.edges())

    def __repr__(self) -> str:
        return (
            f"DirectedGraph(vertices={self.get_number_of_vertexes()}, "
            f"edges={self.get_number_of_edges()})"
        )

