"""ErrorHandler middleware — redirect matching exceptions to another handler.

The caught exception rides along on the request context, so the fallback
handler can inspect it::

    def on_timeout(writer, request):
        print(f"gave up: {caught_error(request)}", file=writer.error_writer)

    router.use(ErrorHandler(TimeoutError, HandlerFunction(on_timeout)))
"""

from collections.abc import Callable
from typing import Any, TypeAlias

from conch.request import Request
from conch.routing.handler import Handler, HandlerFunction
from conch.writer import ResponseWriter

# Context key holding the exception caught by ErrorHandler
CAUGHT_ERROR_KEY = "conch.caught_error"

ErrorMatcher: TypeAlias = (
    type[BaseException] | tuple[type[BaseException], ...] | Callable[[Exception], bool]
)


def caught_error(request: Request) -> Exception | None:
    """Return the exception ``ErrorHandler`` caught for this request, if any."""
    error = request.value(CAUGHT_ERROR_KEY)
    return error if isinstance(error, Exception) else None


class ErrorHandler:
    """Run *handler* instead of failing when the next handler raises a match.

    *matches* is an exception type, a tuple of them, or a predicate. Any
    other exception propagates unchanged.
    """

    __slots__ = ("handler", "matches")

    def __init__(self, matches: ErrorMatcher, handler: Handler) -> None:
        self.matches = matches
        self.handler = handler

    def _is_match(self, exc: Exception) -> bool:
        if isinstance(self.matches, type) or isinstance(self.matches, tuple):
            return isinstance(exc, self.matches)
        return bool(self.matches(exc))

    def handle(self, next: Handler) -> Handler:
        def intercept(writer: ResponseWriter, request: Request) -> Any:
            try:
                return next.execute(writer, request)
            except Exception as exc:
                if not self._is_match(exc):
                    raise
                return self.handler.execute(writer, request.with_value(CAUGHT_ERROR_KEY, exc))

        return HandlerFunction(intercept)
