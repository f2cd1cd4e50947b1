"""One-shot CLI: a command tree dispatched from the process arguments.

Demonstrates top-level flags, described commands with their own flags, a
command group, crash recovery, and help from ``help``, ``-h`` or a
command that asks for it.

Run:
    python app.py ping -suffix !
    python app.py -toUpper ping
    python app.py users add ada@example.com
    python app.py help users
"""

from conch import Shell
from conch.commands import Command, HelpCommand, new_command_router
from conch.errors import CommandError, HelpRequested
from conch.middleware import Recoverer
from conch.options import help_handler

shell = Shell()
shell.options(help_handler(HelpCommand(usage="help")))
shell.flags(lambda fd: fd.define_bool("toUpper", False, "make the response uppercase"))
shell.use(Recoverer(show_traceback=False))

# In-memory user store, reset each time the module is loaded
users: list[str] = []


def ping(writer, request):
    message = f"pong{request.flag_set.get_string('suffix')}"
    if request.flag_set.get_bool("toUpper"):
        message = message.upper()
    print(message, file=writer)


shell.handle(
    "ping",
    Command(
        name="Ping",
        summary="Simple ping pong command",
        description="Simple command that will output the word pong",
        usage="ping",
        flags=lambda fd: fd.define_string("suffix", "", "add a suffix to the response"),
        function=ping,
    ),
)


# -- Users --


def list_users(writer, request):
    for email in sorted(users):
        print(email, file=writer)
    return list(users)


def add_user(writer, request):
    if not request.args:
        raise HelpRequested("add needs an email address")
    email = request.args[0]
    if email in users:
        msg = f"{email} already exists"
        raise CommandError(msg)
    users.append(email)
    print(f"added {email}", file=writer)
    return email


def delete_user(writer, request):
    if not request.args:
        raise HelpRequested("delete needs an email address")
    email = request.args[0]
    if email not in users:
        msg = f"{email} does not exist"
        raise CommandError(msg)
    users.remove(email)
    print(f"deleted {email}", file=writer)
    return email


def setup_users(r):
    r.handle("list", Command("List", "List users", "Will list all valid users", "list", function=list_users))
    r.handle("add", Command("Add", "Add user", "Will add a new user", "add email@example.com", function=add_user))
    r.handle(
        "delete",
        Command("Delete", "Delete user", "Will delete an existing user", "delete email@example.com", function=delete_user),
    )


shell.handle(
    "users",
    new_command_router(
        "Users",
        "Commands for user management",
        "A series of commands to aid in user management",
        "users add|delete|list",
        setup_users,
    ),
)


@shell.command("secret")
def secret(writer, request):
    msg = "this command should not be called"
    raise RuntimeError(msg)


@shell.command("help")
def help_command(writer, request):
    raise HelpRequested("help command")


if __name__ == "__main__":
    shell.execute()
