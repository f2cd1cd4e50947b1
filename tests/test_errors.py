"""Tests for conch.errors — exception hierarchy and error messages."""

import pytest

from conch.errors import (
    CommandError,
    CommandNotFound,
    ConchError,
    ConfigurationError,
    DuplicateCommand,
    FlagParseError,
    HelpRequested,
    InvalidOption,
    OptionAlreadySet,
    is_help_requested,
)


class TestHierarchy:
    def test_configuration_error_is_conch_error(self) -> None:
        assert issubclass(ConfigurationError, ConchError)

    @pytest.mark.parametrize("cls", [DuplicateCommand, InvalidOption])
    def test_setup_errors_are_configuration_errors(self, cls: type) -> None:
        assert issubclass(cls, ConfigurationError)

    @pytest.mark.parametrize(
        "cls", [OptionAlreadySet, CommandNotFound, CommandError, HelpRequested, FlagParseError]
    )
    def test_runtime_errors_are_not_configuration_errors(self, cls: type) -> None:
        assert issubclass(cls, ConchError)
        assert not issubclass(cls, ConfigurationError)


class TestMessages:
    def test_duplicate_command(self) -> None:
        err = DuplicateCommand("ping")
        assert err.command == "ping"
        assert str(err) == "'ping' command has already been declared"

    def test_invalid_option(self) -> None:
        err = InvalidOption("OutputWriter")
        assert err.option == "OutputWriter"
        assert str(err) == "'OutputWriter' option parameters are undefined or invalid"

    def test_option_already_set(self) -> None:
        err = OptionAlreadySet("ShellPrompt")
        assert str(err) == (
            "'ShellPrompt' option has already been used or shell has already been initialized"
        )

    def test_command_not_found(self) -> None:
        assert str(CommandNotFound("users")) == "'users' command not found"

    def test_help_requested_with_reason(self) -> None:
        assert str(HelpRequested("bad flag")) == "help requested bad flag"

    def test_help_requested_without_reason(self) -> None:
        assert str(HelpRequested()) == "help requested"

    def test_flag_parse_error(self) -> None:
        err = FlagParseError("flag provided but not defined: -x", ["rest"])
        assert str(err) == "flagset parse failed flag provided but not defined: -x"
        assert err.remaining == ("rest",)


class TestIsHelpRequested:
    def test_direct(self) -> None:
        assert is_help_requested(HelpRequested())

    def test_other_error(self) -> None:
        assert not is_help_requested(ValueError("nope"))

    def test_none(self) -> None:
        assert not is_help_requested(None)

    def test_wrapped_with_cause(self) -> None:
        try:
            try:
                raise HelpRequested("inner")
            except HelpRequested as exc:
                raise CommandError("wrapped") from exc
        except CommandError as outer:
            assert is_help_requested(outer)

    def test_wrapped_with_context(self) -> None:
        try:
            try:
                raise HelpRequested("inner")
            except HelpRequested:
                raise RuntimeError("during handling")  # noqa: B904
        except RuntimeError as outer:
            assert is_help_requested(outer)
