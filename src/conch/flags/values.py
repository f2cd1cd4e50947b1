"""Flag value types.

A flag's value is a small mutable cell: ``set()`` parses the command-line
text, ``get()`` returns the typed value, and ``str()`` renders it back for
usage output. Flag-sets share these cells by reference, which is what lets
a flag declared on an outer router be set from an inner one.
"""

import re
from datetime import timedelta
from typing import Any, Protocol, runtime_checkable

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1


@runtime_checkable
class Value(Protocol):
    """Protocol for flag values, including user-defined ones.

    A value may also define ``is_bool_flag = True`` to be set by a bare
    ``-name`` token, and ``type_name`` to label it in usage output.
    """

    def set(self, text: str) -> None: ...

    def get(self) -> Any: ...

    def __str__(self) -> str: ...


def parse_bool(text: str) -> bool:
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    msg = "parse error"
    raise ValueError(msg)


def _parse_int(text: str, low: int, high: int) -> int:
    """Parse an integer literal: decimal, ``0x``, ``0o``, ``0b``, or octal with a leading ``0``."""
    msg = "parse error"
    digits = text.lstrip("+-")
    if not text.isascii() or text != text.strip() or len(text) - len(digits) > 1:
        raise ValueError(msg)
    base = 8 if len(digits) > 1 and digits[0] == "0" and digits[1] not in "xXoObB" else 0
    try:
        number = int(text, base)
    except ValueError:
        raise ValueError(msg) from None
    if not low <= number <= high:
        msg = "value out of range"
        raise ValueError(msg)
    return number


# -- Durations --

_UNIT_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5
    "μs": 1_000,  # U+03BC
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}

_DURATION_PART = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION = re.compile(r"([-+]?)((?:(?:\d+\.?\d*|\.\d+)(?:ns|us|µs|μs|ms|s|m|h))+)")


def parse_duration(text: str) -> timedelta:
    """Parse a duration literal such as ``"300ms"``, ``"1h30m"`` or ``"-1.5h"``.

    A bare ``"0"`` is accepted. Sub-microsecond precision is rounded.
    """
    if text in ("0", "+0", "-0"):
        return timedelta(0)
    match = _DURATION.fullmatch(text)
    if match is None:
        msg = f"invalid duration {text!r}"
        raise ValueError(msg)
    sign, body = match.groups()
    nanoseconds = 0.0
    for number, unit in _DURATION_PART.findall(body):
        nanoseconds += float(number) * _UNIT_NANOSECONDS[unit]
    if sign == "-":
        nanoseconds = -nanoseconds
    return timedelta(microseconds=round(nanoseconds / 1_000))


def _trim(number: float) -> str:
    return f"{number:.6f}".rstrip("0").rstrip(".")


def format_duration(value: timedelta) -> str:
    """Render a timedelta the way ``parse_duration`` reads it, e.g. ``1h30m0s``."""
    total = (value.days * 86_400 + value.seconds) * 1_000_000 + value.microseconds
    if total == 0:
        return "0s"
    sign = "-" if total < 0 else ""
    total = abs(total)
    if total < 1_000:
        return f"{sign}{total}µs"
    if total < 1_000_000:
        return f"{sign}{_trim(total / 1_000)}ms"
    hours, rest = divmod(total, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds = _trim(rest / 1_000_000)
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


# -- Built-in values --


class BoolValue:
    __slots__ = ("value",)

    is_bool_flag = True
    type_name = ""

    def __init__(self, value: bool = False) -> None:
        self.value = value

    def set(self, text: str) -> None:
        self.value = parse_bool(text)

    def get(self) -> bool:
        return self.value

    def __str__(self) -> str:
        return "true" if self.value else "false"


class IntValue:
    __slots__ = ("value",)

    type_name = "int"

    def __init__(self, value: int = 0) -> None:
        self.value = value

    def set(self, text: str) -> None:
        self.value = _parse_int(text, _INT64_MIN, _INT64_MAX)

    def get(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


class UintValue:
    __slots__ = ("value",)

    type_name = "uint"

    def __init__(self, value: int = 0) -> None:
        if value < 0:
            msg = "unsigned flag default cannot be negative"
            raise ValueError(msg)
        self.value = value

    def set(self, text: str) -> None:
        self.value = _parse_int(text, 0, _UINT64_MAX)

    def get(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


class StringValue:
    __slots__ = ("value",)

    type_name = "string"

    def __init__(self, value: str = "") -> None:
        self.value = value

    def set(self, text: str) -> None:
        self.value = text

    def get(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class FloatValue:
    __slots__ = ("value",)

    type_name = "float"

    def __init__(self, value: float = 0.0) -> None:
        self.value = float(value)

    def set(self, text: str) -> None:
        try:
            self.value = float(text)
        except ValueError:
            msg = "parse error"
            raise ValueError(msg) from None

    def get(self) -> float:
        return self.value

    def __str__(self) -> str:
        return f"{self.value:g}"


class DurationValue:
    __slots__ = ("value",)

    type_name = "duration"

    def __init__(self, value: timedelta | None = None) -> None:
        self.value = value if value is not None else timedelta(0)

    def set(self, text: str) -> None:
        self.value = parse_duration(text)

    def get(self) -> timedelta:
        return self.value

    def __str__(self) -> str:
        return format_duration(self.value)


class StringListValue:
    """A repeatable string flag.

    Every use appends, and each use may hold a comma separated list::

        -tag a -tag b,c   ->   ["a", "b", "c"]
    """

    __slots__ = ("values",)

    type_name = "value"

    def __init__(self, values: list[str] | tuple[str, ...] | None = None) -> None:
        self.values: list[str] = list(values or ())

    def set(self, text: str) -> None:
        self.values.extend(text.split(","))

    def get(self) -> list[str]:
        return list(self.values)

    def __str__(self) -> str:
        return ",".join(self.values)
