"""Tests for conch.request — immutable request and route advancement."""

import dataclasses

import pytest

from conch.flags import DefaultFlagSet
from conch.request import Request
from conch.routing import Router


class TestFromArgs:
    def test_basic(self) -> None:
        request = Request.from_args(["users", "add"])
        assert request.args == ("users", "add")
        assert request.path == ()
        assert request.flag_set is None
        assert request.routes is None
        assert request.command is None

    def test_context_is_read_only(self) -> None:
        request = Request.from_args([], context={"user": "ada"})
        assert request.value("user") == "ada"
        with pytest.raises(TypeError):
            request.context["user"] = "bob"  # type: ignore[index]

    def test_context_is_copied(self) -> None:
        source = {"user": "ada"}
        request = Request.from_args([], context=source)
        source["user"] = "bob"
        assert request.value("user") == "ada"

    def test_value_default(self) -> None:
        assert Request().value("missing", 42) == 42


class TestImmutability:
    def test_frozen(self) -> None:
        request = Request.from_args(["ping"])
        with pytest.raises(dataclasses.FrozenInstanceError):
            request.args = ()  # type: ignore[misc]

    def test_derivations_return_new_requests(self) -> None:
        request = Request.from_args(["ping"])
        flags = DefaultFlagSet()
        router = Router()
        assert request.with_args(["x"]).args == ("x",)
        assert request.with_flag_set(flags).flag_set is flags
        assert request.with_routes(router).routes is router
        assert request.args == ("ping",)
        assert request.flag_set is None

    def test_with_value_extends_context(self) -> None:
        request = Request.from_args([], context={"a": 1})
        derived = request.with_value("b", 2)
        assert derived.value("a") == 1
        assert derived.value("b") == 2
        assert request.value("b") is None

    def test_with_context_replaces(self) -> None:
        request = Request.from_args([], context={"a": 1})
        derived = request.with_context({"b": 2})
        assert derived.value("a") is None
        assert derived.value("b") == 2


class TestUpdate:
    def test_strips_matching_head(self) -> None:
        request = Request.from_args(["users", "add", "x@example.com"])
        updated = request.update("users")
        assert updated.path == ("users",)
        assert updated.args == ("add", "x@example.com")
        assert updated.command == "users"

    def test_strip_is_case_insensitive(self) -> None:
        updated = Request.from_args(["USERS", "add"]).update("users")
        assert updated.args == ("add",)

    def test_keeps_args_when_head_differs(self) -> None:
        updated = Request.from_args(["add"]).update("users")
        assert updated.path == ("users",)
        assert updated.args == ("add",)

    def test_empty_route_leaves_path(self) -> None:
        router = Router()
        request = Request.from_args(["missing"], path=["users"])
        updated = request.update("", routes=router)
        assert updated.path == ("users",)
        assert updated.args == ("missing",)
        assert updated.routes is router

    def test_explicit_args(self) -> None:
        updated = Request.from_args(["a", "b"]).update("a", args=["x", "y"])
        assert updated.args == ("x", "y")

    def test_omitted_fields_kept(self) -> None:
        flags = DefaultFlagSet()
        router = Router()
        request = Request.from_args(["ping"], flags, router)
        updated = request.update("ping")
        assert updated.flag_set is flags
        assert updated.routes is router

    def test_path_grows(self) -> None:
        request = Request.from_args(["users", "add", "x"])
        request = request.update("users").update("add")
        assert request.path == ("users", "add")
        assert request.args == ("x",)
