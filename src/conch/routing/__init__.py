"""Routing — a tree of command routers matched against argument prefixes.

Routers are built once during setup and only read while dispatching.
"""

from conch.routing.handler import Handler, HandlerCallable, HandlerFunction
from conch.routing.router import Router, RouterSetup, Routes

__all__ = [
    "Handler",
    "HandlerCallable",
    "HandlerFunction",
    "Router",
    "RouterSetup",
    "Routes",
]
