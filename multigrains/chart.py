from __future__ import annotations

from .farm import GRAINS, FarmPlan, fmt_quantity


def plot_plan(plan: FarmPlan):
    """Bar chart of the units produced per grain, annotated with revenue.

    Returns the matplotlib Figure; callers decide whether to show or embed it.
    """
    import matplotlib.pyplot as plt
    import numpy as np

    qty = np.array([q.to_float() for q in plan.quantities])
    revenue = qty * np.array(plan.prices, dtype=float)
    pos = np.arange(len(GRAINS))

    fig, ax = plt.subplots(figsize=(7, 4))
    color_cycle = plt.rcParams.get('axes.prop_cycle', None)
    colors = color_cycle.by_key()['color'] if color_cycle else [f'C{i}' for i in range(10)]
    bars = ax.bar(pos, qty, color=[colors[i % len(colors)] for i in range(len(GRAINS))], alpha=0.8)

    for bar, q, rev in zip(bars, plan.quantities, revenue):
        if q.is_zero():
            continue
        ax.annotate(f"{fmt_quantity(q)} (${rev:.2f})", (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                    textcoords="offset points", xytext=(0, 4), ha='center', fontsize=8)

    ax.set_xticks(pos)
    ax.set_xticklabels(GRAINS)
    ax.set_ylabel('units')
    ax.set_title(f"Optimal production (total ${plan.total.to_float():.2f})")
    ax.grid(True, axis='y', alpha=0.3)
    fig.tight_layout()
    return fig
