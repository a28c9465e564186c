from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .app import run_auto, run_gui, run_headless


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="signpost",
        description=(
            "Play a short session through the message log, overlay, region banner "
            "and note stack. Without a mode flag the Arcade window is used when "
            "available."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--gui", action="store_true", help="Open the Arcade window (keys R/S/N/T/L, ESC quits)")
    mode.add_argument(
        "--headless",
        action="store_true",
        help="Run the scripted session on a virtual clock and log the final slot states",
    )
    parser.add_argument("--max-steps", type=int, default=None, help="Stop after N engine steps")
    parser.add_argument(
        "--tick-rate",
        type=float,
        default=None,
        help="Ticks per second (default 60 in the window, 10 headless)",
    )
    parser.add_argument("--config", default=None, help="UI config YAML overriding the packaged ui.yaml")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for region/log events, -vv for overlay decisions")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _setup_logging(args.verbose)

    run = run_auto
    if args.gui:
        run = run_gui
    elif args.headless:
        run = run_headless
    return run(max_steps=args.max_steps, tick_rate=args.tick_rate, config_path=args.config)


if __name__ == "__main__":
    sys.exit(main())
