"""Run a batching job with ``python -m lead_batcher INPUT [options]``."""
from __future__ import annotations

import sys

from . import cli

PROG = "python -m lead_batcher"


def main(argv: list[str] | None = None) -> int:
    """Batch the given spreadsheet; with no arguments, show usage and exit with 2."""

    args = sys.argv[1:] if argv is None else list(argv)
    if args:
        return cli.main(args, prog=PROG)

    cli.build_parser(prog=PROG).print_help()
    return 2


if __name__ == "__main__":  # pragma: no cover - module entry point
    sys.exit(main())
