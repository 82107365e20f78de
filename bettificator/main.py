# bettificator/main.py
from __future__ import annotations
import argparse
import sys
import time
from typing import List, Optional

from . import APP_DESCRIPTION, APP_NAME, __version__
from .core.config import Config
from .core.errors import BettificatorError
from .pipeline.dates import parse_date
from .pipeline.orchestrator import open_sink, retrieve_clubs, retrieve_matches
from .utils.logger import RunLogger, configure_logging, get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="bettificator", description=APP_DESCRIPTION)
    p.add_argument("--version", action="version", version=f"{APP_NAME} {__version__}")
    commands = p.add_subparsers(dest="command", metavar="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-d", "--dry-run", action="store_true", default=None,
                        help="Parse everything but do not insert into the database")
    common.add_argument("--no-progress", action="store_true", help="Disable the tqdm progress bar")
    common.add_argument("--log-dir", type=str, default=None, help="Also write a dated log file into this directory")

    retrieve = commands.add_parser("retrieve", help="Retrieve, parse and insert data from the football database")
    targets = retrieve.add_subparsers(dest="target", metavar="target", required=True)

    matches = targets.add_parser("matches", parents=[common], help="Retrieve matches between start date and end date")
    matches.add_argument("-s", "--start-date", required=True,
                         help='Starting date for parsing. Format: "2006-01-02" (e.g. 2009-01-31)')
    matches.add_argument("-e", "--end-date", required=True,
                         help='End date for parsing, included. Format: "2006-01-02" (e.g. 2020-12-31)')
    matches.add_argument("-c", "--concurrency", type=int, default=None,
                         help="Number of concurrent workers (default: RETRIEVE_CONCURRENCY or 8)")

    targets.add_parser("clubs", parents=[common], help="Retrieve the club catalog (A-Z plus non-alphabetic)")
    return p


def _fail(err: BaseException) -> None:
    sys.stderr.write(f"error: {err}\n")
    sys.stderr.flush()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = Config.from_env(
            dry_run=args.dry_run,
            concurrency=getattr(args, "concurrency", None),
        ).validate()
        if args.target == "matches":
            start = parse_date(args.start_date, "--start-date")
            end = parse_date(args.end_date, "--end-date")
    except BettificatorError as e:
        _fail(e)
        return 1

    configure_logging(config.log_level)
    show_progress = not args.no_progress and sys.stderr.isatty()
    run_logger = RunLogger(args.log_dir)
    run_logger.log_run_start(args.target)
    logger.info("Start retrieving...")

    t0 = time.time()
    outcome = None
    ok = False
    try:
        if args.target == "matches":
            with open_sink(config, config.table_name) as sink:
                outcome = retrieve_matches(config, start, end, sink=sink, show_progress=show_progress)
        else:
            with open_sink(config, config.club_table_name) as sink:
                outcome = retrieve_clubs(config, sink=sink)
        ok = True
    except BettificatorError as e:
        outcome = e.outcome
        logger.error(f"main | {e}")
        _fail(e)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 130
    finally:
        stats = outcome.as_dict() if outcome is not None else None
        run_logger.log_run_end(args.target, ok, time.time() - t0, stats)
        run_logger.close()
    return 0


def cli():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
