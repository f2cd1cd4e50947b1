"""``conch run``: execute one command line, or start the interactive shell."""

import argparse
import logging
import sys

from conch.cli._resolve import resolve_shell
from conch.errors import ConchError


def run_shell(args: argparse.Namespace) -> None:
    """Run a conch shell.

    With arguments after the import string, dispatches them once. Without,
    starts the interactive session on stdin.
    """
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        shell = resolve_shell(args.shell)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    command = list(args.args)
    if command and command[0] == "--":
        command = command[1:]

    if not command:
        shell.run()
        return

    try:
        shell.execute(command)
    except ConchError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
