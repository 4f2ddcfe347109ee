"""Plain-text formatting for histogram rankings.

Used by the CLI for terminal output.
"""
from __future__ import annotations

from hash_histogram.histogram import HashHistogram


def format_ranking(
    hist: HashHistogram,
    top: int | None = None,
    label: str = "Ranking",
) -> str:
    """Format the ranking of *hist* as a table with share of total.

    Only the first *top* rows are shown when *top* is given.
    """
    ranked = hist.ranking_with_counts()
    if top is not None:
        ranked = ranked[:top]
    total = hist.total_count()

    lines = [
        f"=== {label} ===",
        f"{'Rank':>4}  {'Key':<30} {'Count':>12} {'Share':>8}",
        "-" * 58,
    ]
    for rank, (key, count) in enumerate(ranked, start=1):
        share = float(count) / float(total) * 100 if total else 0.0
        lines.append(
            f"{rank:>4}  {str(key):<30} {_format_count(count):>12} {share:>7.1f}%"
        )
    lines.append("-" * 58)
    lines.append(
        f"Keys: {len(hist):,}   Total: {_format_count(total)}"
    )
    return "\n".join(lines)


def _format_count(count: object) -> str:
    if isinstance(count, int):
        return f"{count:,}"
    if isinstance(count, float):
        return f"{count:.4g}"
    return str(count)
