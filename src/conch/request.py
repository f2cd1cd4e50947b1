"""Immutable dispatch request.

A request is what the shell hands to the router and what the router hands
to the matched handler: the arguments still to be consumed, the command
path matched so far, the flag-set of the current routing level, and the
routes of the router that dispatched it.

It is never mutated. Every change produces a new request::

    request = Request.from_args(["users", "add", "x@example.com"])
    request = request.update("users", routes=users_router)
    request.path   # ("users",)
    request.args   # ("add", "x@example.com")
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from conch.flags.protocol import FlagSet
    from conch.routing.router import Routes

_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request moving down the router tree.

    ``args`` never includes path segments already consumed, and ``path``
    only grows as dispatch descends.
    """

    args: tuple[str, ...] = ()
    path: tuple[str, ...] = ()
    flag_set: FlagSet | None = None
    routes: Routes | None = None
    context: Mapping[str, Any] = field(default_factory=lambda: _EMPTY, repr=False)

    # -- Factory --

    @classmethod
    def from_args(
        cls,
        args: Sequence[str],
        flag_set: FlagSet | None = None,
        routes: Routes | None = None,
        *,
        path: Sequence[str] = (),
        context: Mapping[str, Any] | None = None,
    ) -> Request:
        """Create a request from an argument list (e.g. ``sys.argv[1:]``)."""
        return cls(
            args=tuple(args),
            path=tuple(path),
            flag_set=flag_set,
            routes=routes,
            context=MappingProxyType(dict(context)) if context else _EMPTY,
        )

    # -- Computed properties --

    @property
    def command(self) -> str | None:
        """The last matched path segment, if any."""
        return self.path[-1] if self.path else None

    def value(self, key: str, default: Any = None) -> Any:
        """Look up a context value."""
        return self.context.get(key, default)

    # -- Derivations --

    def with_context(self, context: Mapping[str, Any]) -> Request:
        """Return a copy with its context replaced by *context*."""
        return replace(self, context=MappingProxyType(dict(context)))

    def with_value(self, key: str, value: Any) -> Request:
        """Return a copy whose context also maps *key* to *value*."""
        return replace(self, context=MappingProxyType({**self.context, key: value}))

    def with_args(self, args: Sequence[str]) -> Request:
        return replace(self, args=tuple(args))

    def with_flag_set(self, flag_set: FlagSet) -> Request:
        return replace(self, flag_set=flag_set)

    def with_routes(self, routes: Routes) -> Request:
        return replace(self, routes=routes)

    def update(
        self,
        route: str,
        args: Sequence[str] | None = None,
        flag_set: FlagSet | None = None,
        routes: Routes | None = None,
    ) -> Request:
        """Advance the request past a routing level.

        A non-empty *route* is appended to ``path`` and, when it is also the
        head of the arguments (compared case-insensitively), stripped from
        them. An empty *route* leaves the path alone; the not-found fallback
        uses that to re-home a request on its router without consuming
        anything. Omitted arguments keep their current values.
        """
        new_args = tuple(args) if args is not None else self.args
        new_path = self.path
        if route:
            new_path = (*self.path, route)
            if new_args and new_args[0].casefold() == route.casefold():
                new_args = new_args[1:]
        return replace(
            self,
            args=new_args,
            path=new_path,
            flag_set=flag_set if flag_set is not None else self.flag_set,
            routes=routes if routes is not None else self.routes,
        )
