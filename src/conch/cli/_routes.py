"""``conch routes``: print a shell's command tree."""

import argparse
import sys
from collections.abc import Iterator

from conch.cli._resolve import resolve_shell
from conch.middleware.protocol import ChainHandler
from conch.routing.router import Router


def _handler_name(handler: object) -> str:
    if isinstance(handler, ChainHandler):
        handler = handler.unwrap()
    fn = getattr(handler, "fn", None) or getattr(handler, "function", None)
    if fn is not None:
        return getattr(fn, "__qualname__", repr(fn))
    return type(handler).__name__


def _summary(handler: object) -> str:
    return getattr(handler, "summary", "") or ""


def walk(router: Router, prefix: tuple[str, ...] = ()) -> Iterator[tuple[str, object]]:
    """Yield ``(command path, handler)`` for every command under *router*.

    Group commands are listed as the parent's own. Sub-routers are listed
    and then descended into.
    """
    handlers: dict[str, object] = {}
    for group in router.groups:
        for path, handler in walk(group, prefix):
            handlers[path] = handler
    for name, handler in router.routes.items():
        handlers[" ".join((*prefix, name))] = handler
        if isinstance(handler, Router):
            for path, sub in walk(handler, (*prefix, name)):
                handlers[path] = sub
    yield from sorted(handlers.items())


def run_routes(args: argparse.Namespace) -> None:
    """List the commands of a conch shell.

    Resolves ``args.shell`` and prints a table of COMMAND, HANDLER and
    SUMMARY.
    """
    try:
        shell = resolve_shell(args.shell)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = [(path, _handler_name(handler), _summary(handler)) for path, handler in walk(shell.router)]
    if not rows:
        print("No commands registered.")
        return

    max_path = max(max(len(r[0]) for r in rows), 7)  # "COMMAND" header
    max_name = max(max(len(r[1]) for r in rows), 7)  # "HANDLER" header

    fmt = f"{{:<{max_path}}}  {{:<{max_name}}}  {{}}"
    print(fmt.format("COMMAND", "HANDLER", "SUMMARY").rstrip())
    sep_len = max_path + max_name + 4 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for path, name, summary in rows:
        print(fmt.format(path, name, summary).rstrip())
