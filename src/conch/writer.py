"""Response writers.

Handlers write their output through a ``ResponseWriter``. It is file-like
(``write``/``flush``), so ``print(..., file=writer)`` works, and it carries
a second stream for errors.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class ResponseWriter(Protocol):
    """Protocol for the writer handed to every handler."""

    def write(self, data: str) -> int: ...

    def write_error(self, data: str) -> int: ...

    @property
    def error_writer(self) -> TextIO: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


def _is_standard_stream(stream: object) -> bool:
    return stream in (sys.stdout, sys.stderr, sys.__stdout__, sys.__stderr__)


class WrapperWriter:
    """A ``ResponseWriter`` over an output and an error text stream.

    Streams left as ``None`` resolve to ``sys.stdout``/``sys.stderr`` at
    write time, so redirection after construction is honoured.
    """

    __slots__ = ("_error", "_output")

    def __init__(self, output: TextIO | None = None, error: TextIO | None = None) -> None:
        self._output = output
        self._error = error

    @property
    def output_writer(self) -> TextIO:
        return self._output if self._output is not None else sys.stdout

    @property
    def error_writer(self) -> TextIO:
        return self._error if self._error is not None else sys.stderr

    def write(self, data: str) -> int:
        return self.output_writer.write(data)

    def write_error(self, data: str) -> int:
        return self.error_writer.write(data)

    def flush(self) -> None:
        self.output_writer.flush()
        self.error_writer.flush()

    def close(self) -> None:
        """Close the error then the output stream.

        The interpreter's own standard streams are flushed, never closed.
        """
        for stream in (self._error, self._output):
            if stream is None:
                continue
            if _is_standard_stream(stream):
                stream.flush()
                continue
            close = getattr(stream, "close", None)
            if close is not None:
                close()

    def __repr__(self) -> str:
        return f"<WrapperWriter output={self.output_writer!r} error={self.error_writer!r}>"
