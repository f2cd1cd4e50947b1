"""Flags — typed, named values parsed from leading argument tokens.

Each routing level gets its own flag-set, branched from the level above
with ``sub_flag_set()``. Outer flags stay settable from inner levels;
inner flags never leak outwards.
"""

from conch.flags.flagset import DefaultFlagSet, Flag
from conch.flags.protocol import (
    FlagDefiner,
    FlagHandler,
    FlagHandlerFunction,
    FlagSet,
    FlagValues,
)
from conch.flags.values import (
    BoolValue,
    DurationValue,
    FloatValue,
    IntValue,
    StringListValue,
    StringValue,
    UintValue,
    Value,
    format_duration,
    parse_duration,
)

__all__ = [
    "BoolValue",
    "DefaultFlagSet",
    "DurationValue",
    "Flag",
    "FlagDefiner",
    "FlagHandler",
    "FlagHandlerFunction",
    "FlagSet",
    "FlagValues",
    "FloatValue",
    "IntValue",
    "StringListValue",
    "StringValue",
    "UintValue",
    "Value",
    "format_duration",
    "parse_duration",
]
