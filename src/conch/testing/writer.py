"""In-memory response writer for tests."""

import io

from conch.writer import WrapperWriter


class RecordingWriter(WrapperWriter):
    """A ``WrapperWriter`` over two in-memory buffers.

    Usage::

        writer = RecordingWriter()
        router.execute(writer, Request.from_args(["ping"]))
        assert writer.output == "pong\\n"
    """

    __slots__ = ()

    def __init__(self) -> None:
        super().__init__(io.StringIO(), io.StringIO())

    @property
    def output(self) -> str:
        """Everything written to the output stream so far."""
        return self.output_writer.getvalue()

    @property
    def errors(self) -> str:
        """Everything written to the error stream so far."""
        return self.error_writer.getvalue()

    def close(self) -> None:
        # Buffers stay readable after the shell closes its writer
        pass

    def __repr__(self) -> str:
        return f"<RecordingWriter output={self.output!r} errors={self.errors!r}>"
