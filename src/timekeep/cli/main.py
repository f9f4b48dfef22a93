# src/timekeep/cli/main.py

"""
CLI entrypoint.

Parses arguments, initializes logging, builds AppState, then runs exactly
one command and exits.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from .. import __version__
from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..errors import TimekeepError
from ..logging_setup import setup_logging
from .commands import registry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timekeep",
        description="Track time spent on projects from the command line.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    registry.add_subparsers(parser)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(
        log_file=settings.log_file_path if settings.log_to_file else None,
        console_level=console_level,
    )

    try:
        state = create_initial_state(settings=settings)
        output = registry.handle(state, args)
    except TimekeepError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        logger.exception("Cannot prepare data directory %s", settings.data_dir)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if output:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
