from __future__ import annotations

from pathlib import Path
from typing import Iterator, Union

from tqdm.auto import tqdm

from .graph import DirectedGraph

LINK_MARKER = "href"


def iter_links(path: Union[str, Path], *, marker: str = LINK_MARKER) -> Iterator[str]:
    """Yield link targets of one page.

    A line that contains ``marker`` is split on double quotes and its first
    quoted field is taken as the target, e.g. ``<a href="b.html">`` -> ``b.html``.
    Lines with the marker but without a quoted field are ignored.
    """
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            if marker not in line:
                continue
            parts = line.split('"')
            if len(parts) < 3:
                continue
            yield parts[1]


def build_graph_from_website(
    dir_name: Union[str, Path],
    *,
    marker: str = LINK_MARKER,
    progress: bool = False,
) -> DirectedGraph:
    """Link graph of all pages in a directory.

    Every regular file is a page, named by its file name. Each link found by
    ``iter_links`` adds the edge ``page -> target``; targets need not exist as
    files. Pages without links still appear as vertices.
    """
    site = Path(dir_name)
    if not site.exists():
        raise FileNotFoundError(f"Web site directory not found: {site}")
    if not site.is_dir():
        raise NotADirectoryError(f"Not a directory: {site}")

    pages = sorted(p for p in site.iterdir() if p.is_file())
    g = DirectedGraph()
    for page in tqdm(pages, desc="Reading pages", disable=not progress):
        g.add_vertex(page.name)
        for target in iter_links(page, marker=marker):
            g.add_edge(page.name, target)
    return g
