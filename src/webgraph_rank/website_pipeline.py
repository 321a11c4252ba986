from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd
from scipy.sparse.csgraph import connected_components

from .cycle import DirectedCycle
from .graph import DirectedGraph
from .pagerank import ALPHA, N_ITER, link_rank, pagerank_power, top_vertex
from .scc import StrongComponents
from .website import LINK_MARKER, build_graph_from_website

TOP_K = 100


@dataclass
class WebsiteAnalysis:
    site_dir: Path
    graph: DirectedGraph
    strong: StrongComponents
    cycle: DirectedCycle
    link_rank: Dict[Any, float]     # vertex -> link rank, vertex order
    pagerank: Dict[Any, float]      # vertex -> normalized PageRank
    ranking: pd.DataFrame           # one row per page, ascending by link_rank
    components: pd.DataFrame        # one row per strong component
    alpha: float
    n_iter: int

    def top_pages(self, k: int = TOP_K) -> pd.DataFrame:
        """The k highest ranked pages, best first."""
        return self.ranking.iloc[::-1].head(int(k)).reset_index(drop=True)

    def summary(self) -> pd.DataFrame:
        top = top_vertex(self.link_rank)
        rows = [
            ("pages", self.graph.get_number_of_vertexes()),
            ("links", self.graph.get_number_of_edges()),
            ("strong_components", self.strong.number_of_comp()),
            ("largest_component", int(self.components["size"].max()) if len(self.components) else 0),
            ("has_cycle", self.cycle.has_cycle()),
            ("top_page", top[0] if top else None),
            ("top_link_rank", top[1] if top else None),
        ]
        return pd.DataFrame(rows, columns=["metric", "value"])


def _check_component_count(graph: DirectedGraph, strong: StrongComponents) -> None:
    A, _ = graph.to_csr()
    if A.shape[0] == 0:
        return
    n_ref, _ = connected_components(A, directed=True, connection="strong")
    if int(n_ref) != strong.number_of_comp():
        raise RuntimeError(
            f"Strong component count mismatch: Kosaraju found {strong.number_of_comp()}, "
            f"scipy.sparse.csgraph found {int(n_ref)}."
        )


def _components_frame(strong: StrongComponents) -> pd.DataFrame:
    comps = strong.components()
    return pd.DataFrame(
        {
            "component": np.fromiter(comps.keys(), dtype=np.int64, count=len(comps)),
            "size": np.fromiter((len(m) for m in comps.values()), dtype=np.int64, count=len(comps)),
            "members": [", ".join(str(v) for v in m) for m in comps.values()],
        }
    )


def _ranking_frame(
    graph: DirectedGraph,
    strong: StrongComponents,
    lr: Dict[Any, float],
    pr: Dict[Any, float],
) -> pd.DataFrame:
    pages = list(graph.get_vertex_set())
    df = pd.DataFrame(
        {
            "page": pages,
            "link_rank": [lr.get(v, np.nan) for v in pages],
            "pagerank": [pr.get(v, np.nan) for v in pages],
            "in_degree": [graph.get_in_degree(v) for v in pages],
            "out_degree": [graph.get_out_degree(v) for v in pages],
            "component": [strong.component_of(v) for v in pages],
        }
    )
    # stable sort keeps vertex order among equal ranks
    return df.sort_values("link_rank", kind="mergesort").reset_index(drop=True)


def analyze_graph(
    graph: DirectedGraph,
    *,
    site_dir: Union[str, Path] = ".",
    alpha: float = ALPHA,
    n_iter: int = N_ITER,
    verbose: bool = True,
) -> WebsiteAnalysis:
    """Strong components, cycle check and ranks for an already built link graph."""
    t0 = time.time()
    strong = StrongComponents(graph)
    _check_component_count(graph, strong)
    if verbose:
        print(f"Strong components: {strong.number_of_comp()} (computed in {time.time() - t0:.2f}s)")

    cycle = DirectedCycle(graph)
    if verbose:
        print(f"Has cycle: {cycle.has_cycle()}")

    t0 = time.time()
    lr = link_rank(graph, n_iter=n_iter, alpha=alpha)
    # power iteration needs alpha strictly inside (0, 1)
    pr_alpha = min(max(float(alpha), 1e-6), 1.0 - 1e-6)
    pr = pagerank_power(graph, alpha=pr_alpha)
    if verbose:
        print(f"Ranks computed in {time.time() - t0:.2f}s")

    return WebsiteAnalysis(
        site_dir=Path(site_dir),
        graph=graph,
        strong=strong,
        cycle=cycle,
        link_rank=lr,
        pagerank=pr,
        ranking=_ranking_frame(graph, strong, lr, pr),
        components=_components_frame(strong),
        alpha=float(alpha),
        n_iter=int(n_iter),
    )


def run_website_analysis(
    site_dir: Union[str, Path],
    *,
    outputs_dir: Optional[Union[str, Path]] = None,
    alpha: float = ALPHA,
    n_iter: int = N_ITER,
    top_k: int = TOP_K,
    marker: str = LINK_MARKER,
    verbose: bool = True,
) -> WebsiteAnalysis:
    """Read a web site directory, analyze its link graph and optionally export CSVs.

    Written files (when ``outputs_dir`` is given): ``ranking.csv``,
    ``components.csv`` and ``top_pages.csv`` (the ``top_k`` best pages).
    """
    graph = build_graph_from_website(site_dir, marker=marker, progress=verbose)
    if verbose:
        print(f"Pages: {graph.get_number_of_vertexes()}")
        print(f"Links: {graph.get_number_of_edges()}")

    result = analyze_graph(graph, site_dir=site_dir, alpha=alpha, n_iter=n_iter, verbose=verbose)

    if outputs_dir is not None:
        out = Path(outputs_dir)
        out.mkdir(parents=True, exist_ok=True)
        result.ranking.to_csv(out / "ranking.csv", index=False)
        result.components.to_csv(out / "components.csv", index=False)
        result.top_pages(top_k).to_csv(out / "top_pages.csv", index=False)
        if verbose:
            print("Saved:", out / "ranking.csv")

    return result
