"""Self-describing commands and the help command that renders them."""

from conch.commands.command import Command, CommandHandler
from conch.commands.help import HelpCommand
from conch.commands.router import CommandRouter, new_command_router

__all__ = [
    "Command",
    "CommandHandler",
    "CommandRouter",
    "HelpCommand",
    "new_command_router",
]
