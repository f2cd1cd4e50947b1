"""Conch exception hierarchy.

Shared across FlagSet, Router, Shell, handlers, and middleware so every
module raises and catches the same types.
"""

from collections.abc import Sequence


class ConchError(Exception):
    """Base for all conch-specific errors."""


class ConfigurationError(ConchError):
    """Raised when the shell or a router is configured incorrectly.

    Represents a programming mistake detected during setup, before any
    command is dispatched. Never raised from the dispatch path.
    """


class DuplicateCommand(ConfigurationError):  # noqa: N818
    """A command name is already registered at this router level."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"'{command}' command has already been declared")


class InvalidOption(ConfigurationError):  # noqa: N818
    """An option constructor received an undefined or invalid value."""

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(f"'{option}' option parameters are undefined or invalid")


class OptionAlreadySet(ConchError):  # noqa: N818
    """The option was already applied, or the shell is already running.

    Unlike ``InvalidOption`` this is caller-recoverable: the order options
    are applied in is under the caller's control.
    """

    def __init__(self, option: str) -> None:
        self.option = option
        super().__init__(
            f"'{option}' option has already been used or shell has already been initialized"
        )


class CommandNotFound(ConchError):  # noqa: N818
    """The named command has nothing to execute."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(f"'{command}' command not found")


class CommandError(ConchError):
    """Base for expected handler failures.

    Handlers raise subclasses of this (or any other ``ConchError``) to fail
    a command without it being treated as a crash by ``Recoverer``.
    """


class HelpRequested(ConchError):  # noqa: N818
    """Help was asked for, by ``-h``/``-help`` or by a handler.

    The shell redirects this to its help handler when one is configured.
    ``remaining`` holds the arguments left after the token that triggered it.
    """

    def __init__(self, reason: str = "", remaining: Sequence[str] = ()) -> None:
        self.reason = reason
        self.remaining = tuple(remaining)
        super().__init__(f"help requested {reason}".rstrip())


class FlagParseError(ConchError):
    """Flag parsing failed on an undeclared flag or a malformed value.

    ``remaining`` holds the unparsed arguments so dispatch can carry on.
    """

    def __init__(self, reason: str, remaining: Sequence[str] = ()) -> None:
        self.reason = reason
        self.remaining = tuple(remaining)
        super().__init__(f"flagset parse failed {reason}")


def is_help_requested(exc: BaseException | None) -> bool:
    """Return True if *exc*, or anything it was raised from, is ``HelpRequested``."""
    seen: set[int] = set()
    while exc is not None and id(exc) not in seen:
        if isinstance(exc, HelpRequested):
            return True
        seen.add(id(exc))
        exc = exc.__cause__ or exc.__context__
    return False
