"""Interactive shell: a prompt loop with its own exit command.

Demonstrates the interactive session, a duration flag, middleware that
adds to the request context, and ``ErrorHandler`` turning one kind of
failure into friendly output while the session carries on.

Run:
    python app.py
"""

import itertools
import time
from datetime import timedelta

from conch import Shell
from conch.commands import Command, HelpCommand
from conch.errors import HelpRequested
from conch.middleware import ErrorHandler, Recoverer, caught_error
from conch.options import help_handler, shell_prompt
from conch.routing import HandlerFunction

shell = Shell()
shell.options(
    shell_prompt("example>"),
    help_handler(HelpCommand(usage="help")),
)


# -- Middleware --


_numbers = itertools.count(1)


def count_commands(inner):
    """Number every dispatched command, starting at 1."""

    def run(writer, request):
        return inner.execute(writer, request.with_value("command_number", next(_numbers)))

    return HandlerFunction(run)


def bad_number(writer, request):
    print(f"not a number: {caught_error(request)}", file=writer.error_writer)


shell.use(Recoverer(), count_commands, ErrorHandler(ValueError, HandlerFunction(bad_number)))


# -- Commands --


def ping(writer, request):
    print(f"pong #{request.value('command_number')}", file=writer)


def add(writer, request):
    total = sum(float(arg) for arg in request.args)
    print(f"{total:g}", file=writer)
    return total


def sleep(writer, request):
    duration = request.flag_set.get_duration("for")
    time.sleep(duration.total_seconds())
    print(f"slept {duration.total_seconds():g}s", file=writer)


shell.handle("ping", Command("Ping", "Simple ping pong command", "Replies pong with the command number", "ping", function=ping))
shell.handle("add", Command("Add", "Add numbers", "Prints the sum of its arguments", "add 1 2.5", function=add))
shell.handle(
    "sleep",
    Command(
        "Sleep",
        "Pause for a while",
        "Blocks the session for the given duration",
        "sleep -for 1s",
        flags=lambda fd: fd.define_duration("for", timedelta(milliseconds=10), "how long to sleep"),
        function=sleep,
    ),
)


@shell.command("help")
def help_command(writer, request):
    raise HelpRequested("command")


@shell.command("exit")
def exit_command(writer, request):
    print("bye", file=writer)
    shell.stop()


if __name__ == "__main__":
    shell.run()
