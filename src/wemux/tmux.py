"""tmux commands bound to the shared wemux socket."""
import logging
import subprocess
from pathlib import Path
from typing import List

from . import proc

logger = logging.getLogger(__name__)


def exact(name: str) -> str:
    """Session target that tmux will not prefix- or pattern-match."""
    return f"={name}"


class Tmux:
    """Issues tmux sub-commands against one server socket."""

    def __init__(self, socket: Path, binary: str = "tmux"):
        self.socket = socket
        self.binary = binary

    def command(self, *args: str) -> List[str]:
        """Build a tmux argv that targets the shared socket."""
        return [self.binary, "-S", str(self.socket), *args]

    def has_session(self, name: str) -> bool:
        """Check whether a session exists. Always queries the server."""
        result = proc.run(self.command("has-session", "-t", exact(name)), log_failure=False)
        return result.returncode == 0

    def new_session(self, name: str) -> subprocess.CompletedProcess:
        """Create a detached session."""
        return proc.run(self.command("new-session", "-d", "-s", name))

    def new_grouped_session(self, target: str, name: str) -> subprocess.CompletedProcess:
        """Create a detached session sharing the windows of ``target``."""
        return proc.run(self.command("new-session", "-d", "-t", exact(target), "-s", name))

    def new_window(self, target: str) -> subprocess.CompletedProcess:
        return proc.run(self.command("new-window", "-t", f"{exact(target)}:"))

    def attach(self, name: str, read_only: bool = False) -> int:
        """Attach the current terminal to a session until the user detaches."""
        args = ["attach-session", "-t", exact(name)]
        if read_only:
            args.append("-r")
        return proc.attach(self.command(*args))

    def kill_server(self) -> subprocess.CompletedProcess:
        return proc.run(self.command("kill-server"))

    def display_message(self, message: str) -> bool:
        """Show a status-line message to attached clients.

        Best effort: a failure is logged and reported as False.
        """
        try:
            result = proc.run(self.command("display-message", message), log_failure=False)
        except OSError as e:
            logger.warning(f"Could not send message '{message}': {e}")
            return False

        if result.returncode != 0:
            logger.info(f"Message not delivered ({result.returncode}): {message}")
            return False
        return True
