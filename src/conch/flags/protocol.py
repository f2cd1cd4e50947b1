"""Flag-set protocols and the flag-handler capability.

A handler (or router) that wants flags implements ``FlagHandler``: its
``define()`` receives the flag-set scoped to the matched route and declares
whatever it needs. No base class required. The router checks the shape.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Protocol, runtime_checkable

from conch.flags.values import Value


class FlagDefiner(Protocol):
    """Declares flags on a flag-set."""

    def define_bool(self, name: str, default: bool, usage: str) -> None: ...

    def define_int(self, name: str, default: int, usage: str) -> None: ...

    def define_uint(self, name: str, default: int, usage: str) -> None: ...

    def define_string(self, name: str, default: str, usage: str) -> None: ...

    def define_string_list(self, name: str, default: Sequence[str], usage: str) -> None: ...

    def define_float(self, name: str, default: float, usage: str) -> None: ...

    def define_duration(self, name: str, default: timedelta, usage: str) -> None: ...

    def define_var(self, value: Value, name: str, usage: str) -> None: ...


class FlagValues(Protocol):
    """Reads and sets flag values.

    Typed getters return ``None`` when the flag is undeclared or holds a
    different type.
    """

    def get(self, name: str) -> Any: ...

    def get_bool(self, name: str) -> bool | None: ...

    def get_int(self, name: str) -> int | None: ...

    def get_uint(self, name: str) -> int | None: ...

    def get_string(self, name: str) -> str | None: ...

    def get_string_list(self, name: str) -> list[str] | None: ...

    def get_float(self, name: str) -> float | None: ...

    def get_duration(self, name: str) -> timedelta | None: ...

    def set(self, name: str, value: str) -> None: ...


class FlagSet(FlagDefiner, FlagValues, Protocol):
    """A set of named, typed flags scoped to one routing level."""

    @property
    def parsed(self) -> bool: ...

    def sub_flag_set(self, name: str) -> FlagSet: ...

    def parse(self, args: Sequence[str]) -> list[str]: ...

    def default_usage(self) -> str: ...


@runtime_checkable
class FlagHandler(Protocol):
    """Capability for handlers that declare their own flags."""

    def define(self, flag_definer: FlagDefiner) -> None: ...


@dataclass(frozen=True, slots=True)
class FlagHandlerFunction:
    """Adapter to use a plain function as a ``FlagHandler``::

        router.flags(FlagHandlerFunction(lambda fd: fd.define_bool("verbose", False, "")))
    """

    fn: Callable[[FlagDefiner], None]

    def define(self, flag_definer: FlagDefiner) -> None:
        self.fn(flag_definer)
