#!/usr/bin/env python3
from __future__ import annotations

import argparse
from pathlib import Path
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from webgraph_rank.pagerank import sorted_ranks, top_vertex
from webgraph_rank.website_pipeline import run_website_analysis


def main() -> None:
    ap = argparse.ArgumentParser(description="Strong components and link rank of a web site directory.")

    ap.add_argument("site_dir", help="Directory with one file per web page.")
    ap.add_argument("--outputs-dir", default="outputs", help="Directory to save CSV/figures.")

    ap.add_argument("--alpha", type=float, default=0.5, help="Link rank damping factor.")
    ap.add_argument("--n-iter", type=int, default=10, help="Number of link rank passes.")
    ap.add_argument("--top-k", type=int, default=100, help="# of top pages to export and plot.")
    ap.add_argument("--marker", default="href", help="Substring marking a line with a link.")

    ap.add_argument("--show-components", action="store_true", help="Print every strong component.")
    ap.add_argument("--no-figure", action="store_true", help="Skip the top pages bar chart.")

    args = ap.parse_args()

    outputs_dir = Path(args.outputs_dir)

    result = run_website_analysis(
        args.site_dir,
        outputs_dir=outputs_dir,
        alpha=args.alpha,
        n_iter=args.n_iter,
        top_k=args.top_k,
        marker=args.marker,
    )

    if args.show_components:
        print(result.strong)

    print("\nUnsorted:")
    for page, r in result.link_rank.items():
        print(f"{page}: {r}")

    print("\n\nSorted:")
    for page, r in sorted_ranks(result.link_rank):
        print(f"{page}: {r}")

    top = top_vertex(result.link_rank)
    print("\n\nTop page:")
    print(f"{top[0]}: {top[1]}" if top else "(empty site)")

    print()
    print(result.summary().to_string(index=False))

    if args.no_figure or top is None:
        return

    # Figure: top-k link ranks
    (outputs_dir / "figures").mkdir(parents=True, exist_ok=True)
    top_df = result.top_pages(args.top_k).iloc[::-1]
    plt.figure(figsize=(6, max(2.0, 0.2 * len(top_df))))
    plt.barh(top_df["page"].astype(str), top_df["link_rank"])
    plt.xlabel("Link rank")
    plt.title(rf"Top {len(top_df)} pages ($\alpha$={args.alpha}, {args.n_iter} passes)")
    plt.tight_layout()
    fig = outputs_dir / "figures" / "top_pages.png"
    plt.savefig(fig, dpi=300, bbox_inches="tight")
    plt.close()

    print("Saved figures:")
    print(" -", fig)


if __name__ == "__main__":
    main()
