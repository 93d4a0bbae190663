"""
Calendar visualization.

Provides functions for drawing a month grid as a heatmap and for
charting workouts per week. Uses matplotlib for static charts.
"""

import logging
from pathlib import Path
from typing import Optional

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import to_rgba
from matplotlib.patches import FancyBboxPatch
from matplotlib.ticker import MaxNLocator

from .models import MonthGrid


logger = logging.getLogger(__name__)

# plot styling
plt.style.use("seaborn-v0_8-whitegrid")
COLORS = {
    "workout": "#16a34a",
    "empty": "#9ca3af",
    "text": "#111827",
}
EMPTY_ALPHA = 0.2


def grid_to_matrix(grid: MonthGrid) -> np.ndarray:
    """
    Convert a month grid into a weeks x 7 intensity matrix.

    Placeholder cells and trailing padding are NaN.
    """
    rows = grid.rows()
    matrix = np.full((len(rows), 7), np.nan)
    for r, row in enumerate(rows):
        for c, cell in enumerate(row):
            if cell is not None and not cell.is_placeholder:
                matrix[r, c] = cell.intensity
    return matrix


def _finish(output_path: Optional[Path], show: bool) -> None:
    if output_path:
        plt.savefig(output_path, dpi=150, bbox_inches="tight")
        logger.info(f"Saved plot to {output_path}")

    if show:
        plt.show()
    else:
        plt.close()


def plot_month_heatmap(
    grid: MonthGrid,
    output_path: Optional[Path] = None,
    show: bool = True,
) -> None:
    """
    Draw the month as a grid of day tiles shaded by workout count.

    Parameters:
        grid: Rendered month.
        output_path: Optional path to save the figure.
        show: Whether to display the plot.
    """
    if not grid.cells:
        logger.warning("No calendar cells to plot")
        return

    rows = grid.rows()
    matrix = grid_to_matrix(grid)
    fig, ax = plt.subplots(figsize=(8, 1.2 * (len(rows) + 1)))

    for c, header in enumerate(grid.weekday_headers):
        ax.text(c + 0.5, -0.5, header, ha="center", va="center", fontsize=12, fontweight="bold")

    for r, row in enumerate(rows):
        for c, cell in enumerate(row):
            if np.isnan(matrix[r, c]):
                continue

            if cell.workout_count > 0:
                color, alpha = COLORS["workout"], matrix[r, c]
            else:
                color, alpha = COLORS["empty"], EMPTY_ALPHA

            ax.add_patch(
                FancyBboxPatch(
                    (c + 0.08, r + 0.08),
                    0.84,
                    0.84,
                    boxstyle="round,pad=0,rounding_size=0.15",
                    facecolor=to_rgba(color, alpha),
                    edgecolor=COLORS["text"],
                    linewidth=1,
                )
            )
            ax.text(
                c + 0.5,
                r + 0.5,
                str(cell.date.day),
                ha="center",
                va="center",
                fontsize=12,
                color=COLORS["text"],
            )

    ax.set_xlim(0, 7)
    ax.set_ylim(len(rows), -1)
    ax.set_aspect("equal")
    ax.axis("off")
    ax.set_title(grid.title, fontsize=14, fontweight="bold")

    fig.text(
        0.5,
        0.02,
        f"You have done {grid.weekly_count} workouts this week",
        ha="center",
        fontsize=11,
    )

    plt.tight_layout()
    _finish(output_path, show)


def plot_weekly_counts(
    grid: MonthGrid,
    output_path: Optional[Path] = None,
    show: bool = True,
) -> None:
    """
    Bar chart of workouts logged in each week row of the month.

    Parameters:
        grid: Rendered month.
        output_path: Optional path to save the figure.
        show: Whether to display the plot.
    """
    rows = grid.rows()
    if not rows:
        logger.warning("No weekly data to plot")
        return

    counts = [sum(cell.workout_count for cell in row if cell is not None) for row in rows]
    labels = []
    for row in rows:
        days = [cell.date for cell in row if cell is not None and cell.date is not None]
        labels.append(f"{days[0]:%b %d}" if days else "")

    fig, ax = plt.subplots(figsize=(8, 5))

    x = np.arange(len(rows))
    ax.bar(x, counts, color=COLORS["workout"], alpha=0.8)

    ax.set_xlabel("Week starting", fontsize=11)
    ax.set_ylabel("Workouts", fontsize=11)
    ax.set_title(f"Workouts per Week - {grid.title}", fontsize=14, fontweight="bold")
    ax.set_xticks(x)
    ax.set_xticklabels(labels)
    ax.yaxis.set_major_locator(MaxNLocator(integer=True))

    ax.grid(True, alpha=0.3, axis="y")
    plt.tight_layout()
    _finish(output_path, show)
