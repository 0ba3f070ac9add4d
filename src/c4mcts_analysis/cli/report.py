from __future__ import annotations

import argparse
from pathlib import Path

from ..io.load_results import LoadSpec, load_latest_from_dir, load_results
from ..metrics.summarize import cumulative_score, first_mover_table, standings
from ..plots.chart import plot_cumulative_score, plot_standings


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Summarize c4mcts arena results.")
    ap.add_argument("--csv", type=str, default=None, help="Path to a results CSV. If omitted, uses latest in --results-dir.")
    ap.add_argument("--results-dir", type=str, default="data/results", help="Directory containing arena_results_*.csv")
    ap.add_argument("--pattern", type=str, default="arena_results_*.csv", help="Glob pattern for selecting latest file")
    ap.add_argument("--outdir", type=str, default="figures", help="Directory for saving plots")
    ap.add_argument("--show", action="store_true", help="Show plots instead of saving")
    ap.add_argument("--no-plots", action="store_true", help="Only print tables")
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)

    if args.csv:
        csv_path = Path(args.csv)
    else:
        csv_path = load_latest_from_dir(Path(args.results_dir), pattern=args.pattern)

    df = load_results(LoadSpec(csv_path=csv_path))
    print(f"\nLoaded: {csv_path}")
    print(f"Games: {len(df):,}")

    table = standings(df)
    print("\n=== Standings ===")
    print(table.to_string(index=False))

    first = first_mover_table(df)
    if not first.empty:
        print("\n=== By move order ===")
        print(first.to_string(index=False))

    if not args.no_plots:
        outdir = Path(args.outdir)
        plot_standings(table, outdir, show=args.show)
        label = str(df["p1_name"].iloc[0]) if len(df) else "engine 1"
        plot_cumulative_score(cumulative_score(df), outdir, label=label, show=args.show)
        if not args.show:
            print(f"\nSaved figures to: {outdir.resolve()}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
