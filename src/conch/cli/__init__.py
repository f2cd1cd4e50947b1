"""Conch CLI: inspect and run conch shells.

Entry point registered as ``conch`` in ``pyproject.toml``::

    [project.scripts]
    conch = "conch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``conch`` command."""
    parser = argparse.ArgumentParser(
        prog="conch",
        description="Conch: routed command-line and interactive shells.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- conch routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered commands")
    routes_parser.add_argument(
        "shell",
        help="Import string (e.g. myapp:shell)",
    )

    # -- conch run ---------------------------------------------------------
    run_parser = subparsers.add_parser(
        "run",
        help="Execute a command line, or start the interactive shell",
    )
    run_parser.add_argument(
        "shell",
        help="Import string (e.g. myapp:shell)",
    )
    run_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log dispatch decisions to stderr",
    )
    run_parser.add_argument(
        "args",
        nargs=argparse.REMAINDER,
        help="Command line to dispatch (omit for an interactive session)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from conch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "run":
        from conch.cli._run import run_shell

        run_shell(args)
