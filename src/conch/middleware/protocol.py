"""Middleware protocol, function adapter, and chaining.

A middleware turns a handler into another handler::

    def timing(next: Handler) -> Handler:
        def run(writer: ResponseWriter, request: Request) -> Any:
            start = time.monotonic()
            try:
                return next.execute(writer, request)
            finally:
                print(f"{time.monotonic() - start:.3f}s", file=writer.error_writer)
        return HandlerFunction(run)

    router.use(timing)

Objects with a ``handle(next)`` method work too. No base class required.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from conch.flags.protocol import FlagHandler

if TYPE_CHECKING:
    from conch.flags.protocol import FlagDefiner
    from conch.request import Request
    from conch.routing.handler import Handler
    from conch.writer import ResponseWriter


@runtime_checkable
class Middleware(Protocol):
    """Protocol for conch middleware."""

    def handle(self, next: Handler) -> Handler: ...


@dataclass(frozen=True, slots=True)
class MiddlewareFunction:
    """Adapter to use an ordinary ``Handler -> Handler`` function as middleware."""

    fn: Callable[[Handler], Handler]

    def handle(self, next: Handler) -> Handler:
        return self.fn(next)


def as_middleware(middleware: Middleware | Callable[[Handler], Handler]) -> Middleware:
    """Return *middleware* as a ``Middleware``, wrapping plain functions."""
    if isinstance(middleware, Middleware):
        return middleware
    if callable(middleware):
        return MiddlewareFunction(middleware)
    msg = f"{middleware!r} is not middleware: expected handle(next) or a callable"
    raise TypeError(msg)


def chain(middlewares: Sequence[Middleware], handler: Handler) -> Handler:
    """Wrap *handler* so ``middlewares[0]`` is the outermost layer.

    ``[m0, m1, m2]`` around ``h`` gives ``m0(m1(m2(h)))``: ``m0`` sees the
    call first and the result (or exception) last.
    """
    wrapped = handler
    for middleware in reversed(middlewares):
        wrapped = middleware.handle(wrapped)
    return wrapped


@dataclass(frozen=True, slots=True)
class ChainHandler:
    """A matched handler together with the middleware of the level that matched it.

    The chain is built on each ``execute``. Flag definitions are forwarded
    to the wrapped handler so the router sees through the wrapping.
    """

    handler: Handler
    middlewares: tuple[Middleware, ...] = ()

    def define(self, flag_definer: FlagDefiner) -> None:
        if isinstance(self.handler, FlagHandler):
            self.handler.define(flag_definer)

    def execute(self, writer: ResponseWriter, request: Request) -> Any:
        return chain(self.middlewares, self.handler).execute(writer, request)

    def unwrap(self) -> Handler:
        """Return the terminal handler under every layer of chaining."""
        handler = self.handler
        while isinstance(handler, ChainHandler):
            handler = handler.handler
        return handler
