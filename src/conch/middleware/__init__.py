"""Middleware — Protocol-based, no inheritance required.

A middleware is anything with ``handle(next) -> Handler``, or a plain
function of the same shape.

Built-in middleware:
    Recoverer -- Turn unexpected handler exceptions into error-stream output
    ErrorHandler -- Redirect matching exceptions to a fallback handler
"""

from conch.middleware.errorhandler import ErrorHandler, caught_error
from conch.middleware.protocol import (
    ChainHandler,
    Middleware,
    MiddlewareFunction,
    as_middleware,
    chain,
)
from conch.middleware.recoverer import Recoverer

__all__ = [
    "ChainHandler",
    "ErrorHandler",
    "Middleware",
    "MiddlewareFunction",
    "Recoverer",
    "as_middleware",
    "caught_error",
    "chain",
]
