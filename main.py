import argparse
import curses
import os
import sys

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")

from app_state import AppState
from config_paths import configure_logging, load_config
from loading_screen import LoadingScreen, LoadState
from orchestrator import Orchestrator
from poller import Poller
from row_source import RowSource, RowSourceError

try:
    from _version import __version__
except Exception:
    __version__ = "0.0.0"


def build_parser():
    parser = argparse.ArgumentParser(
        prog="rowdeck",
        description="rowdeck - terminal data-table browser",
    )
    parser.add_argument("path", nargs="?", help="csv, tsv, json, jsonl, parquet or xlsx file")
    parser.add_argument(
        "-s",
        "--search-field",
        action="append",
        dest="search_fields",
        metavar="FIELD",
        help="field to search (repeatable; default: every text field)",
    )
    parser.add_argument("-n", "--page-size", type=int, metavar="ROWS")
    parser.add_argument(
        "-w",
        "--watch",
        type=float,
        metavar="SECONDS",
        help="reload the file on a fixed interval",
    )
    parser.add_argument("-v", "--version", action="store_true")
    return parser


def merge_args(cfg, args):
    cfg = dict(cfg)
    if args.page_size is not None:
        if args.page_size < 1:
            raise ValueError("page size must be at least 1")
        cfg["PAGE_SIZE"] = args.page_size
    if args.watch is not None:
        if args.watch <= 0:
            raise ValueError("watch interval must be positive")
        cfg["POLL_INTERVAL_SECONDS"] = args.watch
    if args.search_fields:
        cfg["SEARCH_FIELDS"] = list(args.search_fields)
    return cfg


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    if args.version:
        print(__version__)
        return 0

    if not args.path:
        parser.print_usage(sys.stderr)
        return 2

    try:
        cfg = merge_args(load_config(), args)
        source = RowSource(args.path)
    except (ValueError, RowSourceError) as exc:
        print(f"rowdeck: {exc}", file=sys.stderr)
        return 2

    configure_logging(cfg["LOG_LEVEL"])

    load_state = LoadState()
    interval = cfg.get("POLL_INTERVAL_SECONDS")
    poller = Poller(source.load, interval) if interval else None

    def curses_main(stdscr):
        loader = LoadingScreen(
            stdscr, source.load, load_state, label=os.path.basename(args.path)
        )
        loader.run()
        if load_state.aborted:
            return
        state = AppState(
            load_state.rows,
            file_path=args.path,
            source=source,
            config=cfg,
            search_fields=cfg.get("SEARCH_FIELDS"),
        )
        Orchestrator(stdscr, state, poller=poller).run()

    curses.wrapper(curses_main)

    if load_state.error:
        print(f"Load failed: {load_state.error}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
