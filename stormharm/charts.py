"""
Charts (ranked table -> bar chart PNG)
======================================

One labeled bar chart per ranked table: event types on the x axis in the
order given (already descending), metric totals on the y axis.

matplotlib is imported lazily so the analysis runs without it.
"""

from __future__ import annotations
from typing import Dict, Sequence
import os
from .models import AggregateRow

CHART_SPECS = {
    # table name -> (title, y label, file name)
    "fatalities": ("Top event types by fatalities", "Fatalities", "fatalities.png"),
    "injuries": ("Top event types by injuries", "Injuries", "injuries.png"),
    "damage": ("Top event types by property and crop damage", "Damage (US$)", "damage.png"),
}

def _pyplot():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib.\n"
            "Install it with: python -m pip install matplotlib"
        ) from e
    return plt

def plot_ranking(rows: Sequence[AggregateRow], title: str, ylabel: str, out_path: str) -> str:
    """Write a bar chart for one ranked table and return its path."""
    plt = _pyplot()
    import numpy as np

    labels = [r.event_type for r in rows]
    values = [r.total for r in rows]
    x = np.arange(len(rows))

    plt.figure(figsize=(10, 6))
    plt.bar(x, values)
    plt.xticks(x, labels, rotation=45, ha="right")
    plt.title(title)
    plt.xlabel("Event type")
    plt.ylabel(ylabel)
    plt.tight_layout()
    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    plt.savefig(out_path, dpi=200)
    plt.close()
    return out_path

def plot_impact(tables: Dict[str, Sequence[AggregateRow]], out_dir: str) -> Dict[str, str]:
    """Write the fatalities / injuries / damage charts into `out_dir`."""
    paths: Dict[str, str] = {}
    for name, rows in tables.items():
        title, ylabel, filename = CHART_SPECS[name]
        paths[name] = plot_ranking(rows, f"{title} (top {len(rows)})", ylabel,
                                   os.path.join(out_dir, filename))
    return paths
