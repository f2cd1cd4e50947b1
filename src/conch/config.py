"""Shell configuration.

ShellConfig is a frozen dataclass: the shell's options resolved against
their defaults when the shell first runs. Immutable after creation.
"""

from dataclasses import dataclass, field
from typing import TextIO

from conch.flags.flagset import DefaultFlagSet
from conch.flags.protocol import FlagSet
from conch.routing.handler import Handler

DEFAULT_PROMPT = "shell>"


@dataclass(frozen=True, slots=True)
class ShellConfig:
    """Resolved shell configuration.

    Streams left as ``None`` mean the interpreter's current ``sys.stdin``,
    ``sys.stdout`` and ``sys.stderr``, looked up at use time.
    """

    # Streams
    reader: TextIO | None = None
    output: TextIO | None = None
    error: TextIO | None = None

    # Interactive session
    prompt: str = DEFAULT_PROMPT
    exit_on_error: bool = False

    # Dispatch
    flag_set: FlagSet = field(default_factory=DefaultFlagSet)
    help_handler: Handler | None = None
