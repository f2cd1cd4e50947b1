"""The conch shell.

Mutable during setup (options, commands, middleware, flags).
Frozen when ``execute()``, ``start()`` or ``run()`` is first called.

One-shot command-line use::

    shell = Shell()
    shell.options(help_handler(HelpCommand(usage="help")))

    @shell.command("ping")
    def ping(writer, request):
        print("pong", file=writer)

    shell.execute()          # dispatches sys.argv[1:]

Interactive use::

    shell.run()              # prompt, read, dispatch, repeat
"""

from __future__ import annotations

import logging
import shlex
import sys
from collections.abc import Callable, Mapping, Sequence
from typing import TYPE_CHECKING, Any

import anyio

from conch.config import ShellConfig
from conch.errors import (
    ConchError,
    ConfigurationError,
    FlagParseError,
    HelpRequested,
    OptionAlreadySet,
    is_help_requested,
)
from conch.flags.protocol import FlagHandler
from conch.request import Request
from conch.routing.router import Router
from conch.writer import WrapperWriter

if TYPE_CHECKING:
    from conch.flags.protocol import FlagDefiner
    from conch.middleware.protocol import Middleware
    from conch.options import Option
    from conch.routing.handler import Handler, HandlerCallable
    from conch.routing.router import RouterSetup

logger = logging.getLogger("conch.shell")

_UNSET = object()


class Shell:
    """Command-line and interactive shell over a root ``Router``.

    Lifecycle:
        Options and registrations are accepted until the shell first runs.
        At that point the options are resolved into a frozen ``ShellConfig``
        and further setup raises.

    Concurrency:
        Commands are dispatched one at a time on the calling thread. The
        interactive session reads each line in a worker thread so that
        ``stop()`` (or an outer cancel scope) can end the session while a
        read is blocked; the abandoned read is left to finish on its own.
    """

    __slots__ = (
        "_cancel_scope",
        "_closed",
        "_config",
        "_router",
        "_settings",
    )

    def __init__(self, router: Router | None = None) -> None:
        self._router: Router = router if router is not None else Router()
        # Option values, keyed by ShellConfig field
        self._settings: dict[str, Any] = {}
        # Resolved on first run
        self._config: ShellConfig | None = None
        # Interactive session state
        self._cancel_scope: anyio.CancelScope | None = None
        self._closed: anyio.Event | None = None

    # -- Options --

    def options(self, *options: Option) -> None:
        """Apply options in order, stopping at the first that fails.

        Raises:
            OptionAlreadySet: the setting was already applied, or the
                shell is already running.
        """
        for option in options:
            option.apply(self)

    def _set_option(self, option: str, setting: str, value: object, *, once: bool = True) -> None:
        if self._config is not None:
            raise OptionAlreadySet(option)
        if once and self._settings.get(setting, _UNSET) is not _UNSET:
            raise OptionAlreadySet(option)
        self._settings[setting] = value

    @property
    def config(self) -> ShellConfig:
        """The resolved configuration. Resolving it freezes the shell."""
        return self._ensure_frozen()

    @property
    def router(self) -> Router:
        return self._router

    # -- Registration (delegates to the root router) --

    def use(self, *middleware: Middleware | Callable[[Handler], Handler]) -> None:
        self._check_not_frozen()
        self._router.use(*middleware)

    def flags(self, flag_handler: FlagHandler | Callable[[FlagDefiner], None]) -> None:
        """Declare top-level flags, parsed before any command is matched."""
        self._check_not_frozen()
        self._router.flags(flag_handler)

    def group(self, setup: RouterSetup | None = None) -> Router:
        self._check_not_frozen()
        return self._router.group(setup)

    def route(self, command: str, setup: RouterSetup | None = None) -> Router:
        self._check_not_frozen()
        return self._router.route(command, setup)

    def mount(self, command: str, router: Handler) -> None:
        self._check_not_frozen()
        self._router.mount(command, router)

    def handle(self, command: str, handler: Handler) -> None:
        self._check_not_frozen()
        self._router.handle(command, handler)

    def handle_function(self, command: str, fn: HandlerCallable) -> None:
        self._check_not_frozen()
        self._router.handle_function(command, fn)

    def command(self, command: str) -> Callable[[HandlerCallable], HandlerCallable]:
        """Register a handler function via decorator."""
        self._check_not_frozen()
        return self._router.command(command)

    def not_found(self, handler: Handler) -> None:
        self._check_not_frozen()
        self._router.not_found(handler)

    # -- One-shot execution --

    def execute(
        self,
        args: Sequence[str] | None = None,
        *,
        context: Mapping[str, Any] | None = None,
    ) -> Any:
        """Dispatch one command line and return the handler's result.

        *args* defaults to ``sys.argv[1:]``. Help requests, from ``-h`` or
        raised by a handler, go to the help handler when one is configured;
        every other exception propagates.
        """
        config = self._ensure_frozen()
        if args is None:
            args = sys.argv[1:]
        return self._dispatch(config, list(args), context)

    def _dispatch(
        self,
        config: ShellConfig,
        args: list[str],
        context: Mapping[str, Any] | None,
    ) -> Any:
        writer = WrapperWriter(config.output, config.error)

        flag_set = config.flag_set
        if isinstance(self._router, FlagHandler):
            flag_set = flag_set.sub_flag_set("")
            self._router.define(flag_set)
            try:
                args = flag_set.parse(args)
            except HelpRequested as exc:
                if config.help_handler is not None:
                    logger.debug("help flag given, running help handler")
                    request = Request.from_args(exc.remaining, flag_set, self._router, context=context)
                    return config.help_handler.execute(writer, request)
                print(exc, file=writer.error_writer)
                args = list(exc.remaining)
            except FlagParseError as exc:
                print(exc, file=writer.error_writer)
                args = list(exc.remaining)

        request = Request.from_args(args, flag_set, self._router, context=context)
        try:
            return self._router.execute(writer, request)
        except Exception as exc:
            if config.help_handler is not None and is_help_requested(exc):
                logger.debug("help requested by %r, running help handler", args[:1])
                return config.help_handler.execute(writer, request)
            raise

    # -- Interactive session --

    @property
    def closed(self) -> anyio.Event:
        """Set once the most recent interactive session has ended.

        Raises:
            ConchError: no session has been started yet.
        """
        if self._closed is None:
            msg = "The shell has no interactive session yet. Call start() or run() first."
            raise ConchError(msg)
        return self._closed

    async def start(self) -> None:
        """Run the interactive session until input ends, ``stop()`` is called,
        or (with ``exit_on_error``) a command fails.

        Each cycle prints the prompt, reads one line, splits it like a POSIX
        shell would, and dispatches it. Failed commands are reported on the
        error stream; with ``exit_on_error`` the exception is re-raised.
        """
        config = self._ensure_frozen()
        closed = self._closed = anyio.Event()
        error = config.error
        try:
            with anyio.CancelScope() as scope:
                self._cancel_scope = scope
                while True:
                    line = await anyio.to_thread.run_sync(
                        self._prompt_and_read, config, abandon_on_cancel=True
                    )
                    if not line:
                        logger.info("input closed, ending shell session")
                        return
                    try:
                        args = shlex.split(line)
                    except ValueError as exc:
                        print(exc, file=error or sys.stderr)
                        continue
                    try:
                        self._dispatch(config, args, None)
                    except Exception as exc:
                        logger.error("command %r failed: %s", line.strip(), exc)
                        print(exc, file=error or sys.stderr)
                        if config.exit_on_error:
                            raise
        finally:
            self._cancel_scope = None
            closed.set()

    def stop(self) -> None:
        """End a running interactive session.

        Call from the event loop thread, e.g. from an ``exit`` command.
        """
        if self._cancel_scope is not None:
            logger.info("stopping shell session")
            self._cancel_scope.cancel()

    def run(self, *, backend: str = "asyncio") -> None:
        """Run the interactive session to completion (blocking)."""
        anyio.run(self.start, backend=backend)

    @staticmethod
    def _prompt_and_read(config: ShellConfig) -> str:
        output = config.output or sys.stdout
        output.write(f"{config.prompt} ")
        output.flush()
        return (config.reader or sys.stdin).readline()

    # -- Freeze --

    def _ensure_frozen(self) -> ShellConfig:
        """Resolve options into the frozen config on first use."""
        if self._config is None:
            self._config = ShellConfig(**self._settings)
        return self._config

    def _check_not_frozen(self) -> None:
        if self._config is not None:
            msg = (
                "Cannot modify the shell after it has started running. "
                "Register commands, middleware, and flags before calling "
                "execute(), start() or run()."
            )
            raise ConfigurationError(msg)
