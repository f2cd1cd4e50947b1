"""Default flag-set implementation.

Single-dash flags in the familiar ``-name value`` / ``-name=value`` /
``-bool`` forms. Parsing stops at the first non-flag argument (or after a
``--`` terminator) and hands everything after it back untouched, so a
command's positional arguments and the next routing segment survive.

Branching::

    root = DefaultFlagSet()
    root.define_bool("verbose", False, "chatty output")
    child = root.sub_flag_set("users")     # sees -verbose
    child.define_string("email", "", "")   # root does not see -email
    child.parse(["-verbose"])
    root.get_bool("verbose")               # True, the value cell is shared
"""

from __future__ import annotations

import io
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from conch.errors import FlagParseError, HelpRequested
from conch.flags.values import (
    BoolValue,
    DurationValue,
    FloatValue,
    IntValue,
    StringListValue,
    StringValue,
    UintValue,
    Value,
)

@dataclass(frozen=True, slots=True)
class Flag:
    """A declared flag. ``value`` is shared with every branched flag-set."""

    name: str
    usage: str
    value: Value
    default: str

    @property
    def is_bool(self) -> bool:
        return bool(getattr(self.value, "is_bool_flag", False))


def unquote_usage(flag: Flag) -> tuple[str, str]:
    """Split a flag's usage into (type name, usage text).

    A back-quoted word in the usage names the argument::

        "load `file` at startup"  ->  ("file", "load file at startup")

    Otherwise the value's ``type_name`` is used (``"value"`` for custom types).
    """
    usage = flag.usage
    start = usage.find("`")
    if start != -1:
        end = usage.find("`", start + 1)
        if end != -1:
            name = usage[start + 1 : end]
            return name, usage[:start] + name + usage[end + 1 :]
    return getattr(flag.value, "type_name", "value"), usage


def _quote(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _is_zero_value(flag: Flag) -> bool:
    """Report whether a flag's default is the zero value of its own type."""
    try:
        zero = type(flag.value)()
    except TypeError:
        return flag.default == ""
    return flag.default == str(zero)


class DefaultFlagSet:
    """The standard ``FlagSet``.

    Flags declared on a flag-set before ``sub_flag_set()`` are visible (and
    settable) from the branch; flags declared afterwards on either side are
    not shared. Declaring a name twice at one level replaces the earlier
    declaration at that level only.
    """

    __slots__ = ("_flags", "_parsed", "name")

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._flags: dict[str, Flag] = {}
        self._parsed = False

    # -- Definition --

    def define_var(self, value: Value, name: str, usage: str) -> None:
        self._flags[name] = Flag(name=name, usage=usage, value=value, default=str(value))

    def define_bool(self, name: str, default: bool, usage: str) -> None:
        self.define_var(BoolValue(default), name, usage)

    def define_int(self, name: str, default: int, usage: str) -> None:
        self.define_var(IntValue(default), name, usage)

    def define_uint(self, name: str, default: int, usage: str) -> None:
        self.define_var(UintValue(default), name, usage)

    def define_string(self, name: str, default: str, usage: str) -> None:
        self.define_var(StringValue(default), name, usage)

    def define_string_list(self, name: str, default: Sequence[str], usage: str) -> None:
        self.define_var(StringListValue(list(default)), name, usage)

    def define_float(self, name: str, default: float, usage: str) -> None:
        self.define_var(FloatValue(default), name, usage)

    def define_duration(self, name: str, default: timedelta, usage: str) -> None:
        self.define_var(DurationValue(default), name, usage)

    # -- Lookup --

    def lookup(self, name: str) -> Flag | None:
        return self._flags.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __iter__(self):
        return iter(sorted(self._flags.values(), key=lambda flag: flag.name))

    def get(self, name: str) -> Any:
        flag = self.lookup(name)
        if flag is None:
            return None
        return flag.value.get()

    def _typed(self, name: str, value_type: type) -> Any:
        flag = self.lookup(name)
        if flag is None or not isinstance(flag.value, value_type):
            return None
        return flag.value.get()

    def get_bool(self, name: str) -> bool | None:
        return self._typed(name, BoolValue)

    def get_int(self, name: str) -> int | None:
        return self._typed(name, IntValue)

    def get_uint(self, name: str) -> int | None:
        return self._typed(name, UintValue)

    def get_string(self, name: str) -> str | None:
        return self._typed(name, StringValue)

    def get_string_list(self, name: str) -> list[str] | None:
        return self._typed(name, StringListValue)

    def get_float(self, name: str) -> float | None:
        return self._typed(name, FloatValue)

    def get_duration(self, name: str) -> timedelta | None:
        return self._typed(name, DurationValue)

    def set(self, name: str, value: str) -> None:
        """Set a declared flag from its string form.

        Raises ``FlagParseError`` for an undeclared flag or a bad value.
        """
        flag = self.lookup(name)
        if flag is None:
            raise FlagParseError(f"no such flag -{name}")
        try:
            flag.value.set(value)
        except ValueError as exc:
            raise FlagParseError(f'invalid value "{value}" for flag -{name}: {exc}') from exc

    # -- Branching --

    def sub_flag_set(self, name: str) -> DefaultFlagSet:
        """Return a new flag-set pre-seeded with every flag declared so far."""
        branch = DefaultFlagSet(name)
        branch._flags = dict(self._flags)
        return branch

    # -- Parsing --

    @property
    def parsed(self) -> bool:
        return self._parsed

    def parse(self, args: Sequence[str]) -> list[str]:
        """Consume leading flag tokens and return the remaining arguments.

        Raises:
            HelpRequested: ``-h`` or ``-help`` was given and not declared.
            FlagParseError: an undeclared flag, a missing argument, or a
                value that does not parse. Both carry ``remaining``.
        """
        self._parsed = True
        remaining = list(args)
        while remaining:
            token = remaining[0]
            if len(token) < 2 or token[0] != "-":
                break
            dashes = 1
            if token[1] == "-":
                dashes = 2
                if len(token) == 2:
                    del remaining[0]
                    break
            body = token[dashes:]
            if not body or body[0] in "-=":
                raise FlagParseError(f"bad flag syntax: {token}", remaining)
            del remaining[0]

            name, has_value, value = body.partition("=")
            flag = self.lookup(name)
            if flag is None:
                if name in ("help", "h"):
                    raise HelpRequested("flags", remaining)
                raise FlagParseError(f"flag provided but not defined: -{name}", remaining)

            if flag.is_bool:
                if not has_value:
                    value = "true"
                try:
                    flag.value.set(value)
                except ValueError as exc:
                    msg = f'invalid boolean value "{value}" for -{name}: {exc}'
                    raise FlagParseError(msg, remaining) from exc
                continue

            if not has_value:
                if not remaining:
                    raise FlagParseError(f"flag needs an argument: -{name}", remaining)
                value = remaining.pop(0)
            try:
                flag.value.set(value)
            except ValueError as exc:
                msg = f'invalid value "{value}" for flag -{name}: {exc}'
                raise FlagParseError(msg, remaining) from exc
        return remaining

    # -- Usage --

    def default_usage(self) -> str:
        """Render usage and defaults for every declared flag, sorted by name."""
        out = io.StringIO()
        for flag in self:
            line = f"  -{flag.name}"
            type_name, usage = unquote_usage(flag)
            if type_name:
                line += f" {type_name}"
            # Single-letter bool flags keep their usage on the same line.
            line += "\t" if len(line) <= 4 else "\n    \t"
            line += usage.replace("\n", "\n    \t")
            if not _is_zero_value(flag):
                if isinstance(flag.value, StringValue):
                    line += f" (default {_quote(flag.default)})"
                else:
                    line += f" (default {flag.default})"
            out.write(line + "\n")
        return out.getvalue()

    def __repr__(self) -> str:
        return f"<DefaultFlagSet {self.name!r} flags={sorted(self._flags)!r}>"
