from __future__ import annotations

import argparse
import sys

from c4mcts.c4i.loop import EngineLoop
from c4mcts.config import CHECK_INTERVAL, EXPLORATION_C, SEARCH_BUSY_WAIT_SEC
from c4mcts.search.handler import SearchHandler
from c4mcts.search.mcts import MCTS


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="c4mcts",
        description="Connect-4 MCTS engine speaking the c4i text protocol on stdin/stdout.",
    )
    ap.add_argument("--seed", type=int, default=None, help="Seed for the rollout RNG (default: random).")
    ap.add_argument("--exploration", type=float, default=EXPLORATION_C, help="UCB1 exploration constant.")
    ap.add_argument(
        "--check-interval",
        type=int,
        default=CHECK_INTERVAL,
        help="Rounds between clock / stop checks.",
    )
    ap.add_argument(
        "--busy-wait",
        type=float,
        default=SEARCH_BUSY_WAIT_SEC,
        help="Seconds a 'go' waits for a running search before it is refused.",
    )
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)

    engine = MCTS(seed=args.seed, exploration_c=args.exploration, check_interval=args.check_interval)
    handler = SearchHandler(engine, busy_wait_sec=args.busy_wait)
    loop = EngineLoop(sys.stdout, handler)
    return loop.run(sys.stdin)


if __name__ == "__main__":
    raise SystemExit(main())
