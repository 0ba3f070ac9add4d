from __future__ import annotations

from pathlib import Path

import pandas as pd
import matplotlib.pyplot as plt


def _ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def _finish(fig, outdir: Path, filename: str, *, show: bool) -> Path | None:
    if show:
        plt.show()
        return None
    _ensure_dir(outdir)
    path = outdir / filename
    fig.savefig(path, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return path


def plot_standings(table: pd.DataFrame, outdir: Path, *, show: bool) -> Path | None:
    if table.empty or "name" not in table.columns or "ppg" not in table.columns:
        return None

    fig = plt.figure(figsize=(8, 4))
    plt.bar(table["name"].astype(str), table["ppg"].astype(float))
    plt.ylim(0, 1)
    plt.title("Points per game")
    plt.xlabel("engine")
    plt.ylabel("ppg")
    plt.xticks(rotation=30, ha="right")

    return _finish(fig, outdir, "standings_ppg.png", show=show)


def plot_cumulative_score(curve: pd.DataFrame, outdir: Path, *, label: str = "engine 1", show: bool) -> Path | None:
    if curve.empty:
        return None

    fig = plt.figure()
    plt.plot(curve["game"], curve["p1_ppg"])
    plt.axhline(0.5, linestyle="--", alpha=0.5)
    plt.ylim(0, 1)
    plt.title(f"Running points per game: {label}")
    plt.xlabel("game")
    plt.ylabel("ppg")

    return _finish(fig, outdir, "cumulative_ppg.png", show=show)
