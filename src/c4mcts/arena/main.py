from __future__ import annotations

import argparse
import shlex
import time
from pathlib import Path

from c4mcts.arena.engine import EngineProcess, default_engine_command
from c4mcts.arena.export import default_csv_path, write_records_csv
from c4mcts.arena.game import GameHandler, GameRecord
from c4mcts.config import ARENA_GAMES, ARENA_TIME_MS
from c4mcts.errors import EngineProcessError
from c4mcts.ui.format import A, hr
from c4mcts.ui.render import render


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="c4mcts-arena",
        description="Play a match between two c4i engines and report the results.",
    )
    ap.add_argument("--engine1", type=str, default=None, help="Command line for engine 1 (default: this engine).")
    ap.add_argument("--engine2", type=str, default=None, help="Command line for engine 2 (default: this engine).")
    ap.add_argument("--name1", type=str, default="Engine 1")
    ap.add_argument("--name2", type=str, default="Engine 2")
    ap.add_argument("--games", type=int, default=ARENA_GAMES, help="Number of games (must be even).")
    ap.add_argument("--time-ms", type=int, default=ARENA_TIME_MS, help="Thinking time per move in milliseconds.")
    ap.add_argument("--csv", type=str, default=None, help="Write per-game results to this CSV path.")
    ap.add_argument("--results-dir", type=str, default="data/results", help="Directory for the CSV when --csv is 'auto'.")
    ap.add_argument("--show-boards", action="store_true", help="Print the final board of every game.")
    return ap


def _command(raw: str | None) -> list[str]:
    return shlex.split(raw) if raw else default_engine_command()


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)

    if args.games % 2 != 0:
        print(A.red("--games must be even so both engines play each colour equally."))
        return 2

    try:
        e1 = EngineProcess(_command(args.engine1), name=args.name1)
        e2 = EngineProcess(_command(args.engine2), name=args.name2)
    except EngineProcessError as e:
        print(A.red(str(e)))
        return 1

    with e1, e2:
        for eng in (e1, e2):
            if not eng.is_c4i():
                print(A.red(f"{eng.name} does not speak c4i."))
                return 1

        handler = GameHandler(e1, e2)

        def report(rec: GameRecord) -> None:
            label = {"p1": args.name1, "p2": args.name2, "draw": "draw"}[rec.winner]
            print(
                f"Game {rec.game:>3}/{args.games}  "
                f"{args.name1} as {rec.p1_colour:<6}  "
                f"result: {A.bold(label)}  plies={rec.plies}"
            )
            if args.show_boards and handler.last_position is not None:
                render(handler.last_position)

        start = time.perf_counter()
        session = handler.play_many(args.games, args.time_ms / 1000, on_game=report)
        elapsed = time.perf_counter() - start

    p1, draws, p2 = session.results
    print("\n" + A.bold("=== FINAL RESULTS ==="))
    print(A.dim(hr("═")))
    print(f"{args.name1:<16} wins: {p1}")
    print(f"{'draws':<16}     : {draws}")
    print(f"{args.name2:<16} wins: {p2}")
    print(f"games={session.games_played}  time={elapsed:.1f}s")

    if args.csv:
        path = default_csv_path(Path(args.results_dir)) if args.csv == "auto" else Path(args.csv)
        write_records_csv(handler.records, path)
        print(f"Wrote CSV: {path}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
