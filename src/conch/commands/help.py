"""Help command: lists described commands and explains one in detail.

Register it as a command, as the shell's help handler, or both::

    shell.handle("help", HelpCommand(usage="help"))
    shell.options(help_handler(HelpCommand(usage="help")))

Without arguments it prints the overview of the dispatching router level:
each ``CommandHandler`` with its summary, then the flags in scope. With a
command path (``help users add``) it prints that command's details.
Only handlers that describe themselves are listed.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from conch.commands.command import CommandHandler
from conch.flags.flagset import DefaultFlagSet
from conch.routing.router import Routes

if TYPE_CHECKING:
    from conch.flags.protocol import FlagSet
    from conch.request import Request
    from conch.writer import ResponseWriter


def _described(routes: Routes | None) -> dict[str, CommandHandler]:
    if routes is None:
        return {}
    return {
        name: handler
        for name, handler in routes.routes.items()
        if isinstance(handler, CommandHandler)
    }


class HelpCommand:
    """Print command help.

    ``usage`` is how this command is invoked (e.g. ``"help"``). When set,
    the overview opens with a usage line and closes with a pointer to the
    detailed view; a leading ``usage`` argument is skipped so that a
    ``help`` command raising ``HelpRequested`` still resolves ``help ping``.
    """

    __slots__ = ("usage",)

    def __init__(self, usage: str = "") -> None:
        self.usage = usage

    def execute(self, writer: ResponseWriter, request: Request) -> Any:
        flag_set = request.flag_set if request.flag_set is not None else DefaultFlagSet()
        commands = _described(request.routes)

        args: Sequence[str] = request.args
        if args:
            if args[0] == self.usage and len(args) > 1:
                args = args[1:]
            command = commands.get(args[0])
            if command is not None:
                self._print_details(writer, flag_set, args[0], command, args[1:])
                return None

        if self.usage:
            print(f"\n{self.usage}: {self.usage} or {self.usage} <command-name>", file=writer)
        self._print_command_list(writer, commands)
        self._print_flag_usage(writer, flag_set)
        if self.usage:
            print(
                f'\nUse "{self.usage} <command-name>" for detail about the specified command',
                file=writer,
            )
        return None

    # -- Rendering --

    def _print_details(
        self,
        writer: ResponseWriter,
        flag_set: FlagSet,
        route: str,
        command: CommandHandler,
        args: Sequence[str],
    ) -> None:
        flag_set = flag_set.sub_flag_set(route)
        commands = _described(command) if isinstance(command, Routes) else {}

        if args:
            sub = commands.get(args[0])
            if sub is not None:
                command.define(flag_set)
                self._print_details(writer, flag_set, args[0], sub, args[1:])
                return

        command.define(flag_set)
        print(f"\n{command.name}", file=writer)
        print(f"  Usage: {command.usage}", file=writer)
        print(f"  {command.summary}\n", file=writer)
        print(f"{command.description}\n", file=writer)
        self._print_command_list(writer, commands)
        self._print_flag_usage(writer, flag_set)

    @staticmethod
    def _print_command_list(writer: ResponseWriter, commands: Mapping[str, CommandHandler]) -> None:
        if not commands:
            return
        print("\nCommands", file=writer)
        print("-" * 18, file=writer)
        for name in sorted(commands):
            print(f"{name:>12}:\t{commands[name].summary}", file=writer)

    @staticmethod
    def _print_flag_usage(writer: ResponseWriter, flag_set: FlagSet) -> None:
        usage = flag_set.default_usage()
        if usage:
            print("\nUsage", file=writer)
            print(usage, file=writer)

    def __repr__(self) -> str:
        return f"HelpCommand(usage={self.usage!r})"
