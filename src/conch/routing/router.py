"""Command router — a tree of named routes matched against argument prefixes.

Routes are registered during setup and only read while dispatching. Each
router level owns a table of command names (matched case-insensitively),
its own middleware, an optional not-found handler, an optional flag
handler, and any number of inline group routers.

Usage::

    router = Router()
    router.handle_function("ping", lambda w, r: print("pong", file=w))

    def users(r: Router) -> None:
        r.handle("add", AddUser())
        r.handle("list", ListUsers())

    router.route("users", users)
    router.execute(writer, Request.from_args(["users", "add", "x@example.com"]))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol, TypeAlias, runtime_checkable

from conch.errors import ConfigurationError, DuplicateCommand, FlagParseError
from conch.flags.flagset import DefaultFlagSet
from conch.flags.protocol import FlagHandler, FlagHandlerFunction
from conch.middleware.protocol import ChainHandler, Middleware, as_middleware
from conch.routing.handler import Handler, HandlerCallable, HandlerFunction

if TYPE_CHECKING:
    from conch.flags.protocol import FlagDefiner
    from conch.request import Request
    from conch.writer import ResponseWriter

logger = logging.getLogger("conch.router")

RouterSetup: TypeAlias = "Callable[[Router], None]"


@runtime_checkable
class Routes(Protocol):
    """Read-only view of a router, carried on every request.

    Help handlers use it to list the commands available at the level that
    dispatched them.
    """

    @property
    def routes(self) -> Mapping[str, Handler]: ...

    @property
    def middlewares(self) -> tuple[Middleware, ...]: ...

    def match(self, args: Sequence[str]) -> Handler | None: ...


class Router:
    """A routing level: command table, middleware, fallbacks, and groups.

    Not-found handlers are captured by value when a ``route()`` or
    ``group()`` child is created; setting one on the parent later does not
    reach children that already exist. ``mount()`` never inherits one.
    """

    __slots__ = ("_children", "_flags", "_handlers", "_middleware", "_not_found")

    def __init__(self, *, not_found: Handler | None = None) -> None:
        self._children: list[Router] = []
        self._flags: FlagHandler | None = None
        self._handlers: dict[str, Handler] = {}
        self._middleware: list[Middleware] = []
        self._not_found: Handler | None = not_found

    # -- Introspection --

    @property
    def routes(self) -> Mapping[str, Handler]:
        """The commands registered at this level, excluding groups."""
        return MappingProxyType(self._handlers)

    @property
    def middlewares(self) -> tuple[Middleware, ...]:
        return tuple(self._middleware)

    @property
    def groups(self) -> tuple[Router, ...]:
        return tuple(self._children)

    @property
    def not_found_handler(self) -> Handler | None:
        return self._not_found

    # -- Matching --

    def match(self, args: Sequence[str]) -> Handler | None:
        """Find the handler for ``args[0]``, wrapped in this level's middleware.

        Local commands are checked first, then each group in the order it
        was added. Returns ``None`` when nothing matches.
        """
        if not args:
            return None

        command = args[0].casefold()
        for name, handler in self._handlers.items():
            if name.casefold() == command:
                return ChainHandler(handler, self.middlewares)

        for group in self._children:
            handler = group.match(args)
            if handler is not None:
                return ChainHandler(handler, self.middlewares)

        return None

    # -- Dispatch --

    def execute(self, writer: ResponseWriter, request: Request) -> Any:
        """Dispatch *request* to the matching command, or the not-found handler.

        The matched command's flags are declared on a branch of the request's
        flag-set and parsed from the arguments after the command name. Help
        requests from parsing propagate; other parse errors are written to
        the error stream and dispatch carries on with what was left.

        With no match and no not-found handler, nothing happens.
        """
        args = request.args
        flag_set = request.flag_set if request.flag_set is not None else DefaultFlagSet()

        handler = self.match(args)
        if handler is not None:
            route = args[0]
            flag_set = flag_set.sub_flag_set(route)
            if isinstance(handler, FlagHandler):
                handler.define(flag_set)

            try:
                remaining = flag_set.parse(args[1:])
            except FlagParseError as exc:
                logger.debug("flag parse failed for %r: %s", route, exc)
                print(exc, file=writer.error_writer)
                remaining = list(exc.remaining)

            request = request.update(route, flag_set=flag_set, routes=self).with_args(remaining)
            logger.debug("dispatching %r with args %r", request.path, request.args)
            return handler.execute(writer, request)

        if self._not_found is not None:
            logger.debug("no command matches %r, using not-found handler", args[:1])
            handler = ChainHandler(self._not_found, self.middlewares)
            request = request.update("", flag_set=flag_set, routes=self)
            return handler.execute(writer, request)

        logger.debug("no command matches %r", args[:1])
        return None

    # -- Flags --

    def flags(self, flag_handler: FlagHandler | Callable[[FlagDefiner], None]) -> None:
        """Set the flag handler that declares this router's own flags."""
        if not isinstance(flag_handler, FlagHandler):
            flag_handler = FlagHandlerFunction(flag_handler)
        self._flags = flag_handler

    def define(self, flag_definer: FlagDefiner) -> None:
        if self._flags is not None:
            self._flags.define(flag_definer)

    # -- Registration --

    def _check_available(self, command: str) -> None:
        if not command:
            msg = "Command names must be non-empty."
            raise ConfigurationError(msg)
        if self.match([command]) is not None:
            raise DuplicateCommand(command)

    def use(self, *middleware: Middleware | Callable[[Handler], Handler]) -> None:
        """Append middleware. The first added is the outermost layer."""
        self._middleware.extend(as_middleware(m) for m in middleware)

    def not_found(self, handler: Handler) -> None:
        """Set the handler used when no command matches at this level."""
        self._not_found = handler

    def handle(self, command: str, handler: Handler) -> None:
        """Register *handler* under *command*.

        Raises:
            DuplicateCommand: the name is already taken at this level,
                including by any group.
        """
        self._check_available(command)
        self._handlers[command] = handler

    def handle_function(self, command: str, fn: HandlerCallable) -> None:
        """Register a plain ``fn(writer, request)`` function under *command*."""
        self._check_available(command)
        self._handlers[command] = HandlerFunction(fn)

    def command(self, command: str) -> Callable[[HandlerCallable], HandlerCallable]:
        """Register a handler function via decorator::

            @router.command("ping")
            def ping(writer, request):
                print("pong", file=writer)
        """

        def decorator(fn: HandlerCallable) -> HandlerCallable:
            self.handle_function(command, fn)
            return fn

        return decorator

    def route(self, command: str, setup: RouterSetup | None = None) -> Router:
        """Create a sub-router under *command*, configure it, and return it."""
        self._check_available(command)
        sub = Router(not_found=self._not_found)
        if setup is not None:
            setup(sub)
        self._handlers[command] = sub
        return sub

    def mount(self, command: str, router: Handler) -> None:
        """Attach an externally built router under *command*, as is."""
        self._check_available(command)
        self._handlers[command] = router

    def group(self, setup: RouterSetup | None = None) -> Router:
        """Create an inline group router, configure it, and return it.

        A group's commands are matched as if they were this router's own,
        but with the group's middleware layered inside this router's.
        """
        group = Router(not_found=self._not_found)
        if setup is not None:
            setup(group)
        self._children.append(group)
        return group

    def __repr__(self) -> str:
        return f"<{type(self).__name__} commands={sorted(self._handlers)!r} groups={len(self._children)}>"
