"""Recoverer middleware — keeps a crashing handler from taking the shell down.

Any exception that is not a ``ConchError`` is treated as a crash: its
message and traceback are written to the error stream, it is logged, and
the command completes with no result. ``ConchError`` subclasses (help
requests, command errors) are expected outcomes and pass straight through.
"""

import logging
import traceback
from typing import Any

from conch.errors import ConchError
from conch.request import Request
from conch.routing.handler import Handler, HandlerFunction
from conch.writer import ResponseWriter

logger = logging.getLogger("conch.middleware")


class Recoverer:
    """Recover from unexpected handler exceptions.

    Usage::

        shell.use(Recoverer())
        shell.use(Recoverer(show_traceback=False))   # message only
    """

    __slots__ = ("show_traceback",)

    def __init__(self, *, show_traceback: bool = True) -> None:
        self.show_traceback = show_traceback

    def handle(self, next: Handler) -> Handler:
        def recover(writer: ResponseWriter, request: Request) -> Any:
            try:
                return next.execute(writer, request)
            except ConchError:
                raise
            except Exception as exc:
                logger.exception("recovered from crash in %r", " ".join(request.path))
                print(str(exc) or type(exc).__name__, file=writer.error_writer)
                if self.show_traceback:
                    print(traceback.format_exc(), file=writer.error_writer)
                return None

        return HandlerFunction(recover)
