"""Roles, commands and their aliases."""
from enum import Enum
from typing import Dict, Mapping, Optional, Union

HOST_ENV_VAR = "WEMUX_HOST"


class Role(str, Enum):
    HOST = "host"
    CLIENT = "client"


class HostCommand(Enum):
    START = "start"
    STOP = "stop"
    HELP = "help"


class ClientCommand(Enum):
    REATTACH = "reattach"
    MIRROR = "mirror"
    PAIR = "pair"
    HELP = "help"


Command = Union[HostCommand, ClientCommand]

# None is the absent command word
HOST_ALIASES: Dict[Optional[str], HostCommand] = {
    None: HostCommand.START,
    "start": HostCommand.START,
    "s": HostCommand.START,
    "stop": HostCommand.STOP,
    "st": HostCommand.STOP,
    "kill": HostCommand.STOP,
    "k": HostCommand.STOP,
    "help": HostCommand.HELP,
    "h": HostCommand.HELP,
}

CLIENT_ALIASES: Dict[Optional[str], ClientCommand] = {
    None: ClientCommand.REATTACH,
    "mirror": ClientCommand.MIRROR,
    "m": ClientCommand.MIRROR,
    "read": ClientCommand.MIRROR,
    "r": ClientCommand.MIRROR,
    "pair": ClientCommand.PAIR,
    "p": ClientCommand.PAIR,
    "edit": ClientCommand.PAIR,
    "e": ClientCommand.PAIR,
    "help": ClientCommand.HELP,
    "h": ClientCommand.HELP,
}

ALIASES = {
    Role.HOST: HOST_ALIASES,
    Role.CLIENT: CLIENT_ALIASES,
}


class UnrecognizedCommand(Exception):
    """A command word that is not in the role's alias table."""

    def __init__(self, word: str, role: Role):
        self.word = word
        self.role = role
        super().__init__(f"Unrecognized {role.value} command: {word}")


def role_from_env(environ: Mapping[str, str]) -> Role:
    """Host iff WEMUX_HOST is exactly 'true'."""
    if environ.get(HOST_ENV_VAR) == "true":
        return Role.HOST
    return Role.CLIENT


def parse_command(role: Role, word: Optional[str]) -> Command:
    """Look up a command word. Matching is exact and case-sensitive.

    Raises:
        UnrecognizedCommand: word is not an alias for this role
    """
    try:
        return ALIASES[role][word]
    except KeyError:
        raise UnrecognizedCommand(word, role) from None
