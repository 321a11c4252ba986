from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .graph import DirectedGraph

N_ITER = 10
ALPHA = 0.5


def link_rank(
    graph: DirectedGraph,
    *,
    n_iter: int = N_ITER,
    alpha: float = ALPHA,
) -> Dict[Any, float]:
    """Link rank of every vertex by in-place fixed-point iteration.

    Each pass visits the vertices in vertex order. A vertex seen for the first
    time gets rank 1.0; afterwards its rank becomes

        (1 - alpha) + alpha * sum_{v in pred(w)} rank(v) / outdeg(v)

    The table is updated in place, so vertices later in the same pass already
    see the new ranks of earlier ones (Gauss-Seidel style).

    Parameters
    ----------
    graph:
        link graph.
    n_iter:
        number of passes over the vertex set.
    alpha:
        damping factor in [0, 1]. With alpha=0 every rank stays 1.0.

    Returns
    -------
    rank: dict
        vertex -> rank, in vertex order.
    """
    if not 0.0 <= float(alpha) <= 1.0:
        raise ValueError(f"Damping factor alpha must lie in [0, 1], got {alpha}.")
    if int(n_iter) < 0:
        raise ValueError(f"Number of iterations must be non-negative, got {n_iter}.")

    alpha = float(alpha)
    rank: Dict[Any, float] = {}

    for _ in range(int(n_iter)):
        for w in graph.get_vertex_set():
            if w not in rank:
                rank[w] = 1.0
                continue
            s = 0.0
            for v in graph.get_predecessor_vertex_set(w):
                outdeg = len(graph.get_successor_vertex_set(v))
                # a predecessor always has the edge v -> w, so outdeg > 0
                if outdeg:
                    s += rank.get(v, 1.0) / outdeg
            rank[w] = (1.0 - alpha) + alpha * s

    return rank


def sorted_ranks(rank: Dict[Any, float]) -> List[Tuple[Any, float]]:
    """(vertex, rank) pairs ascending by rank; ties keep vertex order."""
    return sorted(rank.items(), key=lambda item: item[1])


def top_vertex(rank: Dict[Any, float]) -> Optional[Tuple[Any, float]]:
    """Highest ranked (vertex, rank) pair, i.e. the last of ``sorted_ranks``."""
    entries = sorted_ranks(rank)
    return entries[-1] if entries else None


def rank_table(rank: Dict[Any, float], *, column: str = "rank") -> pd.DataFrame:
    """Rank dict as a two-column DataFrame, rows in vertex order."""
    return pd.DataFrame(
        {"vertex": list(rank.keys()), column: np.fromiter(rank.values(), dtype=np.float64, count=len(rank))}
    )


def pagerank_power(
    graph: DirectedGraph,
    *,
    alpha: float = 0.85,
    tol: float = 1e-12,
    max_iter: int = 200,
) -> Dict[Any, float]:
    """Normalized PageRank via power iteration.

    Edge weights are normalized per row; mass of dangling vertices (no
    out-edges) is spread uniformly, like the teleportation term.

    Parameters
    ----------
    graph:
        directed graph; edge weights act as link multiplicities.
    alpha:
        damping factor in (0,1).
    tol:
        L1 convergence tolerance.
    max_iter:
        maximum number of iterations.

    Returns
    -------
    p: dict
        vertex -> stationary probability, summing to 1.
    """
    A, vertices = graph.to_csr()
    n = A.shape[0]
    if n == 0:
        return {}
    if not 0.0 < float(alpha) < 1.0:
        raise ValueError(f"Damping factor alpha must lie in (0, 1), got {alpha}.")

    alpha = float(alpha)
    out_rowsum = np.asarray(A.sum(axis=1)).reshape(-1)
    dangling = (out_rowsum <= 0)

    inv = np.zeros(n, dtype=np.float64)
    inv[~dangling] = 1.0 / out_rowsum[~dangling]
    PT = A.multiply(inv[:, None]).transpose().tocsr()

    u = np.full(n, 1.0 / n, dtype=np.float64)
    p = u.copy()

    for _ in range(int(max_iter)):
        dm = float(p[dangling].sum())
        new = alpha * (PT @ p + dm * u) + (1.0 - alpha) * u
        new = np.asarray(new).reshape(-1)
        new /= new.sum()

        if float(np.abs(new - p).sum()) <= float(tol):
            p = new
            break
        p = new

    return {v: float(x) for v, x in zip(vertices, p)}
