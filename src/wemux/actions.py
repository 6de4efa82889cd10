"""What each (role, command) pair does.

Every action takes the invocation ``Context`` and a ``Tmux`` bound to the
shared socket, prints its status to stdout and returns an exit status. Session
existence is always asked of the tmux server right before acting; a session
that vanishes in between makes the attach fail, and that failure is returned
as-is.
"""
import logging
from typing import Callable, Dict

import click

from .commands import ClientCommand, Command, HostCommand, Role
from .models.context import Context
from .tmux import Tmux
from .utils import remove_socket, share_socket

logger = logging.getLogger(__name__)

Action = Callable[[Context, Tmux], int]

HOST_HELP = """\
wemux host commands:
  [s]     start: Start the wemux session, or attach to it if already running.
  [st|k]  stop:  Kill the wemux server and delete its socket. Aliases: kill.
  [h]     help:  Display this help screen.

Running wemux with no command is the same as 'start'."""

CLIENT_HELP = """\
wemux client commands:
  [m|r]  mirror: Attach to the host session in read-only mode. Aliases: read.
  [p|e]  pair:   Attach to the host session in pair mode, with your own
                 window and cursor. Aliases: edit.
  [h]    help:   Display this help screen.

Running wemux with no command reattaches to your pair session if you have
one, otherwise mirrors the host session."""


def attached_message(user: str, mode: str, reattached: bool = False) -> str:
    verb = "reattached" if reattached else "attached"
    return f"{user} has {verb} in {mode} mode."


def detached_message(user: str) -> str:
    return f"{user} has detached."


def _attach(context: Context, tmux: Tmux, session: str, mode: str,
            read_only: bool = False, reattached: bool = False) -> int:
    """Announce, attach until detach, announce again."""
    tmux.display_message(attached_message(context.user, mode, reattached))
    status = tmux.attach(session, read_only=read_only)
    tmux.display_message(detached_message(context.user))
    return status


def host_start(context: Context, tmux: Tmux) -> int:
    """Create the host session if needed, then attach to it."""
    if not tmux.has_session(context.host_session):
        result = tmux.new_session(context.host_session)
        if result.returncode != 0:
            click.echo(f"Could not start the wemux session '{context.host_session}'.")
            if result.stderr:
                click.echo(result.stderr.strip())
            return result.returncode

        logger.info(f"Started session '{context.host_session}' on {context.socket}")
        try:
            share_socket(context.socket, context.socket_mode)
        except OSError as e:
            logger.warning(f"Could not share socket {context.socket}: {e}")
            click.echo(f"Could not open {context.socket} to other users, check file ownership.")

    return _attach(context, tmux, context.host_session, "host")


def host_stop(context: Context, tmux: Tmux) -> int:
    """Kill the server, then remove the socket. Both steps always run."""
    result = tmux.kill_server()
    if result.returncode == 0:
        click.echo(f"wemux server on {context.socket} stopped.")
    else:
        click.echo(f"No wemux server to stop on {context.socket}.")

    try:
        remove_socket(context.socket)
    except PermissionError as e:
        logger.warning(f"Could not remove {context.socket}: {e}")
        click.echo(f"Could not remove {context.socket}, check file ownership.")
        return 1
    except OSError as e:
        logger.warning(f"Could not remove {context.socket}: {e}")
        click.echo(f"Could not remove {context.socket}: {e.strerror}")
        return 1

    click.echo(f"Socket {context.socket} removed.")
    return 0


def host_help(context: Context, tmux: Tmux) -> int:
    click.echo(HOST_HELP)
    return 0


def client_mirror(context: Context, tmux: Tmux) -> int:
    if not tmux.has_session(context.host_session):
        click.echo("No session to mirror.")
        return 0
    return _attach(context, tmux, context.host_session, "mirror", read_only=True)


def client_pair(context: Context, tmux: Tmux) -> int:
    """Reattach to the user's pair session, creating it from the host session if needed."""
    if context.user == context.host_session:
        click.echo(f"Cannot pair as '{context.user}': that is the host session's name.")
        return 0

    if tmux.has_session(context.user):
        return _attach(context, tmux, context.user, "pair", reattached=True)

    if not tmux.has_session(context.host_session):
        click.echo("No session to pair with.")
        return 0

    result = tmux.new_grouped_session(context.host_session, context.user)
    if result.returncode != 0:
        click.echo(f"Could not create pair session '{context.user}'.")
        return result.returncode
    tmux.new_window(context.user)
    return _attach(context, tmux, context.user, "pair")


def client_reattach(context: Context, tmux: Tmux) -> int:
    """Prefer the user's own pair session, then a read-only mirror."""
    if context.user != context.host_session and tmux.has_session(context.user):
        return _attach(context, tmux, context.user, "pair", reattached=True)
    if tmux.has_session(context.host_session):
        return _attach(context, tmux, context.host_session, "mirror", read_only=True)
    click.echo("Nothing to attach to.")
    return 0


def client_help(context: Context, tmux: Tmux) -> int:
    click.echo(CLIENT_HELP)
    return 0


ACTIONS: Dict[Command, Action] = {
    HostCommand.START: host_start,
    HostCommand.STOP: host_stop,
    HostCommand.HELP: host_help,
    ClientCommand.REATTACH: client_reattach,
    ClientCommand.MIRROR: client_mirror,
    ClientCommand.PAIR: client_pair,
    ClientCommand.HELP: client_help,
}

HELP_TEXT = {
    Role.HOST: HOST_HELP,
    Role.CLIENT: CLIENT_HELP,
}


def unrecognized(role: Role, word: str) -> int:
    click.echo(f"'{word}' is not a recognized wemux {role.value} command.")
    click.echo(HELP_TEXT[role])
    return 0


def dispatch(context: Context, tmux: Tmux, command: Command) -> int:
    return ACTIONS[command](context, tmux)
