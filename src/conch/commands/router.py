"""Described command groups."""

from __future__ import annotations

from typing import TYPE_CHECKING

from conch.routing.router import Router

if TYPE_CHECKING:
    from conch.routing.handler import Handler
    from conch.routing.router import RouterSetup


class CommandRouter(Router):
    """A ``Router`` that describes itself, so help can list and explain it.

    Its sub-commands show up in the help details for the group.
    """

    __slots__ = ("description", "name", "summary", "usage")

    def __init__(
        self,
        name: str,
        summary: str = "",
        description: str = "",
        usage: str = "",
        *,
        not_found: Handler | None = None,
    ) -> None:
        super().__init__(not_found=not_found)
        self.name = name
        self.summary = summary
        self.description = description
        self.usage = usage

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r} commands={sorted(self.routes)!r}>"


def new_command_router(
    name: str,
    summary: str = "",
    description: str = "",
    usage: str = "",
    setup: RouterSetup | None = None,
) -> CommandRouter:
    """Create a ``CommandRouter`` and run *setup* on it::

        shell.handle("users", new_command_router(
            "Users",
            "Commands for user management",
            "A series of commands to aid in user management",
            "users list|add|delete",
            lambda r: r.handle("add", add_user),
        ))
    """
    router = CommandRouter(name, summary, description, usage)
    if setup is not None:
        setup(router)
    return router
