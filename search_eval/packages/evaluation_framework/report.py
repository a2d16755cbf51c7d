"""
Plain-text tables for curves and ranked results.
"""

from typing import Dict, List, Optional, Sequence

from .models import ElevenPointCurve, Point, RankedResult


def format_curve(curve: Sequence[Point], title: Optional[str] = None) -> str:
    """Render a curve as a two-column table, four decimal places."""
    lines: List[str] = []
    if title:
        lines.append(title)
    lines.append(f"{'Recall':>8}  {'Precision':>9}")
    for point in curve:
        lines.append(f"{point.recall:>8.4f}  {point.precision:>9.4f}")
    return "\n".join(lines)


def format_results(results: Sequence[RankedResult]) -> str:
    """Render ranked results one per line, or ' no results'."""
    if len(results) == 0:
        return " no results"

    return "\n".join(
        f" {rank}. score: {r.score:.4f} | relevance: {str(r.relevant).lower()} | title: {r.title} | abstractText: {r.abstract_text}"
        for rank, r in enumerate(results, 1)
    )


def format_comparison(curves: Dict[str, ElevenPointCurve]) -> str:
    """Render several eleven-point curves side by side with an 11-pt average row."""
    names = list(curves.keys())
    width = max([9] + [len(name) for name in names])

    header = f"{'Recall':>8}" + "".join(f"  {name:>{width}}" for name in names)
    lines = [header]

    if names:
        levels = [p.recall for p in curves[names[0]].points]
        for k, recall in enumerate(levels):
            row = f"{recall:>8.4f}" + "".join(
                f"  {curves[name].points[k].precision:>{width}.4f}" for name in names)
            lines.append(row)

    lines.append(f"{'Avg':>8}" + "".join(
        f"  {curves[name].mean_precision():>{width}.4f}" for name in names))
    return "\n".join(lines)
