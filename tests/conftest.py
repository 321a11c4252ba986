import pytest

from webgraph_rank import DirectedGraph

REFERENCE_EDGES = [(1, 2), (2, 5), (5, 1), (2, 6), (3, 7), (4, 3), (4, 6), (7, 4)]

SCC_EDGES = [
    (1, 2), (1, 3), (2, 1), (2, 3), (3, 1),
    (1, 4), (5, 4),
    (5, 7), (6, 5), (7, 6),
    (7, 8), (8, 2),
]


@pytest.fixture
def reference_graph() -> DirectedGraph:
    return DirectedGraph.from_edges(REFERENCE_EDGES)


@pytest.fixture
def scc_graph() -> DirectedGraph:
    return DirectedGraph.from_edges(SCC_EDGES)
