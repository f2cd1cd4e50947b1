"""Shell import resolution: resolves ``"module:attribute"`` strings to shells.

Shared by ``conch routes`` and ``conch run`` to locate a conch Shell (or a
bare Router) from a user-supplied import string.
"""

import importlib

from conch.routing.router import Router
from conch.shell import Shell


def resolve_shell(import_string: str) -> Shell:
    """Resolve an import string to a conch Shell.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"shell"`` (e.g. ``"myapp"`` resolves to
    ``myapp.shell``). A resolved ``Router`` is wrapped in a new Shell.

    Supports factory functions: if the resolved object is callable and not
    a Shell or Router, it will be called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is neither a Shell nor a Router.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "shell"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, (Shell, Router)):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, Router):
        obj = Shell(obj)

    if not isinstance(obj, Shell):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a conch.Shell instance"
        raise TypeError(msg)

    return obj
