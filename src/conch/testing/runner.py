"""Drive a shell in-process and capture what it prints.

Uses the same dispatch path as production: the shell is configured with
in-memory streams and executed directly. No subprocess involved.
"""

import io
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from conch.options import error_writer, input_reader, output_writer
from conch.shell import Shell


@dataclass(frozen=True, slots=True)
class ShellResult:
    """Outcome of one ``ShellRunner`` call."""

    value: Any
    output: str
    errors: str

    @property
    def lines(self) -> list[str]:
        """Output split into lines, without line endings."""
        return self.output.splitlines()


class ShellRunner:
    """Run commands against a shell with captured streams.

    Takes over the shell's input, output and error options, so it must be
    created before the shell first runs and those options must be unset.

    Usage::

        runner = ShellRunner(shell)
        result = runner.execute("users", "add", "x@example.com")
        assert result.output == "added x@example.com\\n"

        result = await runner.interact("ping\\nping\\n")
        assert result.lines == ["shell> pong", "shell> pong", "shell> "]
    """

    __test__ = False

    __slots__ = ("_error", "_input", "_output", "shell")

    def __init__(self, shell: Shell) -> None:
        self.shell = shell
        self._input = io.StringIO()
        self._output = io.StringIO()
        self._error = io.StringIO()
        shell.options(
            input_reader(self._input),
            output_writer(self._output),
            error_writer(self._error),
        )

    def _collect(self, value: Any) -> ShellResult:
        result = ShellResult(value, self._output.getvalue(), self._error.getvalue())
        for buffer in (self._output, self._error):
            buffer.seek(0)
            buffer.truncate()
        return result

    def execute(self, *args: str, context: Mapping[str, Any] | None = None) -> ShellResult:
        """Dispatch one command line and capture its output.

        Exceptions from the shell propagate; captured output is discarded.
        """
        try:
            value = self.shell.execute(list(args), context=context)
        except BaseException:
            self._collect(None)
            raise
        return self._collect(value)

    async def interact(self, script: str | Sequence[str]) -> ShellResult:
        """Feed *script* to the interactive session and run it to end of input."""
        if not isinstance(script, str):
            script = "".join(f"{line}\n" for line in script)
        self._input.seek(0)
        self._input.truncate()
        self._input.write(script)
        self._input.seek(0)
        try:
            await self.shell.start()
        except BaseException:
            self._collect(None)
            raise
        return self._collect(None)
