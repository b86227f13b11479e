"""
Running-total timeline. Produces an image file or returns data for any frontend.
"""

from pathlib import Path
from typing import List, Sequence, Tuple

from drink_ledger.records import Record

MS_PER_HOUR = 3_600_000.0


def curve_data(records: Sequence[Record]) -> List[Tuple[float, float]]:
    """(hours_since_first_record, running_total) after each record, oldest first."""
    if not records:
        return []
    ordered = sorted(records, key=lambda r: r.created_at)
    start = ordered[0].created_at
    points: List[Tuple[float, float]] = []
    total = 0.0
    for r in ordered:
        total += r.pure_alcohol
        points.append((round((r.created_at - start) / MS_PER_HOUR, 4), round(total, 1)))
    return points


def save_total_graph(
    records: Sequence[Record],
    output_path: str = "total_graph.png",
    unit: str = "ml",
) -> str:
    """Save the running total as a step chart, one marker per drink. Returns output_path."""
    from matplotlib.figure import Figure

    points = curve_data(records) or [(0.0, 0.0)]
    hours = [t for t, _ in points]
    totals = [total for _, total in points]

    fig = Figure(figsize=(8, 4))
    ax = fig.add_subplot()
    ax.step(hours, totals, where="post", marker="o")
    ax.set_xlabel("Hours since first drink")
    ax.set_ylabel(f"Pure alcohol ({unit})")
    ax.set_title(f"Total: {totals[-1]:.1f} {unit}")
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path)
    return output_path
