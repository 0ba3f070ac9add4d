from __future__ import annotations

import csv
import time
from pathlib import Path
from typing import Iterable

from c4mcts.arena.game import GameRecord

COLUMNS = [
    "game",
    "p1_name", "p2_name", "p1_colour",
    "winner", "plies",
    "p1_moves", "p2_moves", "p1_ms", "p2_ms",
    "red", "yellow",
]


def default_csv_path(results_dir: Path) -> Path:
    ts = time.strftime("%Y%m%d_%H%M%S")
    return results_dir / f"arena_results_{ts}.csv"


def write_records_csv(records: Iterable[GameRecord], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(COLUMNS)
        for r in records:
            w.writerow([
                r.game,
                r.p1_name, r.p2_name, r.p1_colour,
                r.winner, r.plies,
                r.p1_moves, r.p2_moves, r.p1_ms, r.p2_ms,
                r.red, r.yellow,
            ])
    return path
