"""Handler protocol and the function adapter."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

if TYPE_CHECKING:
    from conch.request import Request
    from conch.writer import ResponseWriter

# The plain-function form of a handler
HandlerCallable: TypeAlias = "Callable[[ResponseWriter, Request], Any]"


@runtime_checkable
class Handler(Protocol):
    """Protocol for anything the router can dispatch to.

    Accepts any object with an ``execute`` method::

        class Ping:
            def execute(self, writer: ResponseWriter, request: Request) -> None:
                print("pong", file=writer)

    Failures are raised. Whatever ``execute`` returns is handed back to the
    caller of ``Shell.execute()`` unchanged.
    """

    def execute(self, writer: ResponseWriter, request: Request) -> Any: ...


@dataclass(frozen=True, slots=True)
class HandlerFunction:
    """Adapter to use an ordinary function as a ``Handler``."""

    fn: HandlerCallable

    @property
    def name(self) -> str:
        return getattr(self.fn, "__name__", repr(self.fn))

    def execute(self, writer: ResponseWriter, request: Request) -> Any:
        return self.fn(writer, request)
