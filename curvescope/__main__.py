"""
CurveScope entry point.

Usage:
    python -m curvescope [data_file]
    python -m curvescope --loglevel DEBUG samples.bin
"""

import sys
import argparse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="CurveScope - view, zoom and edit a sampled curve and its enclosed areas"
    )
    parser.add_argument(
        "data_file",
        nargs="?",
        help="Sample file to open (.bin: big-endian float64 pairs; otherwise 'x y' text lines)"
    )
    parser.add_argument(
        "-l", "--loglevel",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set logging level (default: WARNING). DEBUG writes to /tmp/curvescope_debug.log"
    )
    parser.add_argument(
        "--logfile",
        default="/tmp/curvescope_debug.log",
        help="Log file path (default: /tmp/curvescope_debug.log)"
    )
    parser.add_argument(
        "--log-console",
        action="store_true",
        help="Also log to console (stderr)"
    )
    return parser


def main(argv=None):
    """Main entry point for CurveScope."""
    args = build_parser().parse_args(argv)

    # Setup logging before importing anything else
    from .logging import setup_logging
    setup_logging(
        level=args.loglevel,
        log_file=args.logfile,
        console=args.log_console
    )

    # Import here to avoid slow startup for --help
    from .gui.app import run_app

    sys.exit(run_app(data_path=args.data_file))


if __name__ == "__main__":
    main()
