"""Tests for conch.__init__ — lazy public API."""

import pytest

import conch


@pytest.mark.parametrize("name", conch.__all__)
def test_all_names_resolve(name: str) -> None:
    """Every name in __all__ must resolve via __getattr__ without error."""
    obj = getattr(conch, name)
    assert obj is not None, f"conch.{name} resolved to None"


def test_names_match_submodules() -> None:
    from conch.routing import Router
    from conch.shell import Shell

    assert conch.Shell is Shell
    assert conch.Router is Router


def test_version() -> None:
    assert isinstance(conch.__version__, str)


def test_unknown_name_raises_attribute_error() -> None:
    """Accessing an unregistered name raises AttributeError."""
    with pytest.raises(AttributeError, match="no attribute"):
        conch.__getattr__("ThisDoesNotExist")
