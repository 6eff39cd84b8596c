#!/usr/bin/env python3
import argparse
import sys
from typing import List, Optional


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aish",
        description="aish: a small shell with pipes, redirection and background jobs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  aish                         # Start interactive shell
  aish -c 'ls | wc -l'         # Run one command line and exit
  aish setup.aish              # Run the lines of a script file
        """,
    )

    parser.add_argument(
        "-c",
        "--command",
        metavar="COMMAND",
        help="Execute the given command string",
    )

    parser.add_argument(
        "file",
        nargs="?",
        metavar="FILE",
        help="Execute commands from the given file",
    )

    parser.add_argument(
        "--log-level",
        metavar="LEVEL",
        help="Diagnostic log level (DEBUG, INFO, WARNING, ...)",
    )

    parser.add_argument(
        "--version",
        "-v",
        action="store_true",
        help="Show version information",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.version:
        from aish import __version__

        print(f"aish version {__version__}")
        return 0

    if args.log_level:
        from aish.logger import set_level

        set_level(args.log_level)

    from aish import app

    try:
        return app.main(command=args.command, script=args.file)
    except KeyboardInterrupt:
        print()
        return 0


if __name__ == "__main__":
    sys.exit(main())
