from .chart import (
    plot_cumulative_score,
    plot_standings,
)

__all__ = [
    "plot_cumulative_score",
    "plot_standings",
]
