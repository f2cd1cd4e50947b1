"""Shell options.

Options are applied once, before the shell first runs::

    shell = Shell()
    shell.options(
        output_writer(buffer),
        shell_prompt("app>"),
        help_handler(HelpCommand(usage="help")),
    )

Constructors reject invalid values immediately with ``InvalidOption``.
Applying an option whose setting is already taken, or applying any option
once the shell is running, raises ``OptionAlreadySet``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TextIO

from conch.errors import InvalidOption

if TYPE_CHECKING:
    from conch.flags.protocol import FlagSet
    from conch.routing.handler import Handler
    from conch.shell import Shell


class Option(Protocol):
    """Protocol for shell options."""

    def apply(self, shell: Shell) -> None: ...


@dataclass(frozen=True, slots=True)
class OptionFunction:
    """Adapter to use an ordinary ``fn(shell)`` function as an option."""

    fn: Callable[[Shell], None]

    def apply(self, shell: Shell) -> None:
        self.fn(shell)


@dataclass(frozen=True, slots=True)
class _SetOnce:
    """An option that fills one shell setting, at most once."""

    option: str
    setting: str
    value: object

    def apply(self, shell: Shell) -> None:
        shell._set_option(self.option, self.setting, self.value)


def input_reader(reader: TextIO) -> Option:
    """Set the stream the interactive shell reads commands from."""
    if reader is None:
        raise InvalidOption("Input")
    return _SetOnce("Input", "reader", reader)


def output_writer(writer: TextIO) -> Option:
    """Set the stream handlers write their output to."""
    if writer is None:
        raise InvalidOption("OutputWriter")
    return _SetOnce("OutputWriter", "output", writer)


def error_writer(writer: TextIO) -> Option:
    """Set the stream errors and parse failures are written to."""
    if writer is None:
        raise InvalidOption("ErrorWriter")
    return _SetOnce("ErrorWriter", "error", writer)


def shell_prompt(prompt: str) -> Option:
    """Set the interactive prompt (a space is appended when shown)."""
    if not prompt:
        raise InvalidOption("ShellPrompt")
    return _SetOnce("ShellPrompt", "prompt", prompt)


def flag_set(flags: FlagSet) -> Option:
    """Set the root flag-set every routing level branches from."""
    if flags is None:
        raise InvalidOption("FlagSet")
    return _SetOnce("FlagSet", "flag_set", flags)


def help_handler(handler: Handler) -> Option:
    """Set the handler run whenever help is requested.

    Help is requested by an undeclared ``-h``/``-help`` flag or by any
    handler raising ``HelpRequested``.
    """
    if handler is None:
        raise InvalidOption("HelpHandler")
    return _SetOnce("HelpHandler", "help_handler", handler)


def exit_on_error(enabled: bool) -> Option:
    """Choose whether the interactive shell ends when a command fails.

    Unlike the other options this one may be applied more than once.
    """

    def apply(shell: Shell) -> None:
        shell._set_option("ExitOnError", "exit_on_error", bool(enabled), once=False)

    return OptionFunction(apply)
