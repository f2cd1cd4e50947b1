"""Tests for conch.commands — Command, CommandRouter, and the protocol."""

import pytest

from conch.commands import Command, CommandHandler, CommandRouter, new_command_router
from conch.errors import CommandNotFound
from conch.flags import DefaultFlagSet, FlagHandler
from conch.request import Request
from conch.routing import HandlerFunction, Router, Routes
from conch.testing import RecordingWriter


class TestCommand:
    def test_fields(self) -> None:
        command = Command(
            name="Name",
            summary="The command summary",
            description="The command description",
            usage="name <arg1>",
        )
        assert command.name == "Name"
        assert command.summary == "The command summary"
        assert command.description == "The command description"
        assert command.usage == "name <arg1>"

    def test_define(self) -> None:
        command = Command("Ping", flags=lambda fd: fd.define_string("suffix", "", ""))
        fs = DefaultFlagSet()
        command.define(fs)
        assert "suffix" in fs

    def test_define_without_flags(self) -> None:
        fs = DefaultFlagSet()
        Command("Ping").define(fs)
        assert len(fs) == 0

    def test_execute(self) -> None:
        command = Command("Ping", function=lambda w, r: print("pong", file=w) or "done")
        writer = RecordingWriter()
        assert command.execute(writer, Request()) == "done"
        assert writer.output == "pong\n"

    def test_execute_without_function(self) -> None:
        with pytest.raises(CommandNotFound, match="'Ping' command not found"):
            Command("Ping").execute(RecordingWriter(), Request())

    def test_protocols(self) -> None:
        command = Command("Ping")
        assert isinstance(command, CommandHandler)
        assert isinstance(command, FlagHandler)
        assert not isinstance(command, Routes)

    def test_plain_handlers_are_not_described(self) -> None:
        assert not isinstance(HandlerFunction(lambda w, r: None), CommandHandler)
        assert not isinstance(Router(), CommandHandler)


class TestCommandRouter:
    def test_fields(self) -> None:
        router = CommandRouter("Name", "The command summary", "The command description", "name <arg1>")
        assert router.name == "Name"
        assert router.summary == "The command summary"
        assert router.description == "The command description"
        assert router.usage == "name <arg1>"

    def test_is_router_and_command_handler(self) -> None:
        router = CommandRouter("Users")
        assert isinstance(router, Router)
        assert isinstance(router, CommandHandler)
        assert isinstance(router, Routes)

    def test_new_command_router_runs_setup(self) -> None:
        seen: list[Router] = []
        router = new_command_router("Name", "The Summary", "The description string", "name <arg1>", seen.append)
        assert isinstance(router, CommandRouter)
        assert seen == [router]

    def test_dispatches_sub_commands(self) -> None:
        users = new_command_router(
            "Users",
            setup=lambda r: r.handle("add", Command("Add", function=lambda w, q: q.args)),
        )
        root = Router()
        root.handle("users", users)
        result = root.execute(RecordingWriter(), Request.from_args(["users", "add", "x@example.com"]))
        assert result == ("x@example.com",)
