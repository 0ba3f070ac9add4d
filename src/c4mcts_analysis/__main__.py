from __future__ import annotations

import sys

from .cli.report import main as report_main


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)

    # Default behavior: report if no subcommand
    if not argv:
        return report_main([])

    cmd = argv[0].lower()
    rest = argv[1:]

    if cmd in {"report", "summary"}:
        return report_main(rest)

    if cmd.startswith("-"):
        return report_main(argv)

    print("Usage:")
    print("  python -m c4mcts_analysis report [--csv ...] [--outdir figures]")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
