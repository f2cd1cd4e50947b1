"""Described commands.

A ``CommandHandler`` is a handler that also describes itself, so
``HelpCommand`` can list and explain it. ``Command`` is the ready-made
one::

    router.handle("ping", Command(
        name="Ping",
        summary="Simple ping pong command",
        description="Simple command that will output the word pong",
        usage="ping",
        flags=lambda fd: fd.define_string("suffix", "", "a suffix for the response"),
        function=ping,
    ))
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from conch.errors import CommandNotFound

if TYPE_CHECKING:
    from conch.flags.protocol import FlagDefiner
    from conch.request import Request
    from conch.routing.handler import HandlerCallable
    from conch.writer import ResponseWriter


@runtime_checkable
class CommandHandler(Protocol):
    """A handler that declares flags and describes itself for help output."""

    name: str
    summary: str
    description: str
    usage: str

    def define(self, flag_definer: FlagDefiner) -> None: ...

    def execute(self, writer: ResponseWriter, request: Request) -> Any: ...


@dataclass(frozen=True, slots=True)
class Command:
    """A described command backed by a plain function.

    ``usage`` is an example invocation, e.g. ``"add email@example.com"``.
    """

    name: str
    summary: str = ""
    description: str = ""
    usage: str = ""
    flags: Callable[[FlagDefiner], None] | None = None
    function: HandlerCallable | None = None

    def define(self, flag_definer: FlagDefiner) -> None:
        if self.flags is not None:
            self.flags(flag_definer)

    def execute(self, writer: ResponseWriter, request: Request) -> Any:
        """Run the function.

        Raises:
            CommandNotFound: the command was declared without a function.
        """
        if self.function is None:
            raise CommandNotFound(self.name)
        return self.function(writer, request)
