"""Conch: routed command-line and interactive shells.

Commands are matched against argument prefixes through a tree of routers,
with single-dash flags at every level and middleware around every command.

Basic usage::

    from conch import Shell

    shell = Shell()

    @shell.command("ping")
    def ping(writer, request):
        print("pong", file=writer)

    shell.execute()    # one command from sys.argv
    shell.run()        # or an interactive session

Described commands and help::

    from conch.commands import Command, HelpCommand
    from conch.options import help_handler

    shell.handle("hello", Command(name="Hello", summary="Say hello", function=hello))
    shell.options(help_handler(HelpCommand(usage="help")))
"""

__version__ = "0.1.0"
__all__ = [
    "Command",
    "CommandHandler",
    "CommandRouter",
    "ConchError",
    "ConfigurationError",
    "DefaultFlagSet",
    "ErrorHandler",
    "HandlerFunction",
    "HelpCommand",
    "HelpRequested",
    "Recoverer",
    "Request",
    "ResponseWriter",
    "Router",
    "Shell",
    "ShellConfig",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import conch`` fast while providing a clean top-level API.
    """
    if name == "Shell":
        from conch.shell import Shell

        return Shell

    if name == "ShellConfig":
        from conch.config import ShellConfig

        return ShellConfig

    if name == "Request":
        from conch.request import Request

        return Request

    if name == "ResponseWriter":
        from conch.writer import ResponseWriter

        return ResponseWriter

    if name == "DefaultFlagSet":
        from conch.flags.flagset import DefaultFlagSet

        return DefaultFlagSet

    if name in ("Router", "HandlerFunction"):
        from conch import routing as _routing

        return getattr(_routing, name)

    if name in ("Recoverer", "ErrorHandler"):
        from conch import middleware as _mw

        return getattr(_mw, name)

    if name in ("Command", "CommandHandler", "CommandRouter", "HelpCommand"):
        from conch import commands as _commands

        return getattr(_commands, name)

    if name in ("ConchError", "ConfigurationError", "HelpRequested"):
        from conch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
