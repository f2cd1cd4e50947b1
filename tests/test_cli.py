"""Tests for conch.cli — entry point, ``conch routes`` and ``conch run``."""

import io
import sys
import types

import pytest

from conch.cli import main
from conch.commands import Command, HelpCommand, new_command_router
from conch.errors import CommandError
from conch.shell import Shell


def _build_shell() -> Shell:
    shell = Shell()

    @shell.command("ping")
    def ping(writer, request) -> None:
        print("pong", *request.args, file=writer)

    def fail(writer, request) -> None:
        raise CommandError("nope")

    shell.handle_function("fail", fail)
    shell.handle(
        "users",
        new_command_router(
            "Users",
            "Commands for user management",
            setup=lambda r: r.handle("add", Command("Add", "Add user", function=lambda w, q: None)),
        ),
    )
    shell.group(lambda g: g.handle("help", HelpCommand(usage="help")))
    return shell


@pytest.fixture
def _fake_module(monkeypatch: pytest.MonkeyPatch) -> None:
    mod = types.ModuleType("_fake_conch_cli")
    mod.shell = _build_shell()  # type: ignore[attr-defined]
    mod.empty = Shell()  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_conch_cli", mod)


class TestCLIHelp:
    def test_help_exits_zero(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    @pytest.mark.parametrize("command", ["routes", "run"])
    def test_subcommand_help_exits_zero(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command, "--help"])
        assert exc_info.value.code == 0

    def test_no_command_prints_help(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage: conch" in capsys.readouterr().out


class TestCLIMissingArgs:
    @pytest.mark.parametrize("command", ["routes", "run"])
    def test_missing_shell(self, command: str) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([command])
        assert exc_info.value.code == 2


@pytest.mark.usefixtures("_fake_module")
class TestRoutes:
    def test_lists_commands(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_conch_cli:shell"])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["COMMAND", "HANDLER", "SUMMARY"]
        commands = [line.split("  ")[0] for line in lines[2:]]
        assert commands == ["fail", "help", "ping", "users", "users add"]
        assert "Commands for user management" in out
        assert "_build_shell.<locals>.ping" in out

    def test_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["routes", "_fake_conch_cli:empty"])
        assert capsys.readouterr().out == "No commands registered.\n"

    def test_bad_import(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["routes", "nonexistent_module_xyz"])
        assert exc_info.value.code == 1
        assert "Error:" in capsys.readouterr().err


@pytest.mark.usefixtures("_fake_module")
class TestRun:
    def test_one_shot(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["run", "_fake_conch_cli:shell", "ping", "a", "b"])
        assert capsys.readouterr().out == "pong a b\n"

    def test_terminator_dropped(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["run", "_fake_conch_cli:shell", "--", "ping"])
        assert capsys.readouterr().out == "pong\n"

    def test_command_error_exits_one(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["run", "_fake_conch_cli:shell", "fail"])
        assert exc_info.value.code == 1
        assert "Error: nope" in capsys.readouterr().err

    def test_interactive(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setattr(sys, "stdin", io.StringIO("ping\n"))
        main(["run", "_fake_conch_cli:shell"])
        assert capsys.readouterr().out == "shell> pong\nshell> "
