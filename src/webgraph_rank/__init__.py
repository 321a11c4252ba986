"""Link analysis of directed graphs.

This package provides a minimal implementation of:
- a weighted directed graph with mirrored successor/predecessor indexes,
- depth-first postorder, directed cycle detection,
- strong components via Kosaraju-Sharir,
- link rank (fixed-point PageRank variant) and normalized power PageRank,
- link graph extraction from a directory of web pages.
"""

from .graph import DirectedGraph, VertexSetView
from .order import DepthFirstOrder
from .cycle import DirectedCycle
from .scc import scc_kosaraju, StrongComponents
from .pagerank import link_rank, pagerank_power, rank_table, sorted_ranks, top_vertex
from .website import build_graph_from_website, iter_links
from .website_pipeline import WebsiteAnalysis, analyze_graph, run_website_analysis

__all__ = [
    "DirectedGraph",
    "VertexSetView",
    "DepthFirstOrder",
    "DirectedCycle",
    "scc_kosaraju",
    "StrongComponents",
    "link_rank",
    "pagerank_power",
    "rank_table",
    "sorted_ranks",
    "top_vertex",
    "build_graph_from_website",
    "iter_links",
    "WebsiteAnalysis",
    "analyze_graph",
    "run_website_analysis",
]
