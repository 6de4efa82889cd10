"""Utility functions for wemux."""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def current_user() -> str:
    return os.getenv("USER", "nobody")


def share_socket(socket: Path, mode: int) -> None:
    """Open the socket up to every user (sticky, world-writable by default).

    Raises:
        OSError: the socket is missing or owned by someone else
    """
    logger.debug(f"chmod {oct(mode)} {socket}")
    os.chmod(socket, mode)


def remove_socket(socket: Path) -> None:
    """Delete the socket path. An absent socket counts as removed.

    Raises:
        PermissionError: the caller does not own the socket
        OSError: any other removal failure
    """
    logger.debug(f"Removing {socket}")
    socket.unlink(missing_ok=True)
