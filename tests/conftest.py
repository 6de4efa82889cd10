"""Shared test fixtures."""
import subprocess
from unittest.mock import patch

import pytest

from wemux.commands import Role
from wemux.config import set_config
from wemux.models.context import Context
from wemux.tmux import Tmux


class FakeTmux:
    """Stands in for the tmux binary behind subprocess.run.

    Keeps a session table (name -> window count) and records every argv, so
    tests can check both the resulting state and exactly which sub-commands
    ran.
    """

    def __init__(self, socket):
        self.socket = socket
        self.sessions = {}
        self.calls = []
        self.attached = []
        self.messages = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        sub, args = cmd[3], cmd[4:]
        handler = getattr(self, "_" + sub.replace("-", "_"))
        return subprocess.CompletedProcess(cmd, handler(args), stdout="", stderr="")

    @property
    def subcommands(self):
        return [cmd[3] for cmd in self.calls]

    @staticmethod
    def _opt(args, flag):
        return args[args.index(flag) + 1] if flag in args else None

    def _resolve(self, target):
        """Find a session the way tmux does: exact with a leading '=', else by prefix."""
        if target is None:
            return None
        if target.startswith("="):
            name = target[1:].rstrip(":")
            return name if name in self.sessions else None
        target = target.rstrip(":")
        if target in self.sessions:
            return target
        matches = [name for name in self.sessions if name.startswith(target)]
        return matches[0] if len(matches) == 1 else None

    def _has_session(self, args):
        return 0 if self._resolve(self._opt(args, "-t")) else 1

    def _new_session(self, args):
        name = self._opt(args, "-s")
        target = self._opt(args, "-t")
        if name in self.sessions:
            return 1
        if target is not None and self._resolve(target) is None:
            return 1
        self.sessions[name] = 1
        self.socket.touch()
        return 0

    def _new_window(self, args):
        target = self._resolve(self._opt(args, "-t"))
        if target is None:
            return 1
        self.sessions[target] += 1
        return 0

    def _attach_session(self, args):
        name = self._resolve(self._opt(args, "-t"))
        if name is None:
            return 1
        self.attached.append((name, "-r" in args))
        return 0

    def _kill_server(self, args):
        if not self.sessions:
            return 1
        self.sessions.clear()
        return 0

    def _display_message(self, args):
        if not self.sessions:
            return 1
        self.messages.append(args[0])
        return 0


@pytest.fixture
def socket_path(tmp_path):
    return tmp_path / "wemux"


@pytest.fixture
def fake_tmux(socket_path):
    """Patch subprocess.run with a FakeTmux for the duration of a test."""
    fake = FakeTmux(socket_path)
    with patch("wemux.proc.subprocess.run", side_effect=fake):
        yield fake


@pytest.fixture
def host_context(socket_path):
    return Context(socket=socket_path, user="alice", role=Role.HOST)


@pytest.fixture
def client_context(socket_path):
    return Context(socket=socket_path, user="bob", role=Role.CLIENT)


@pytest.fixture
def tmux(socket_path):
    return Tmux(socket_path)


@pytest.fixture
def reset_global_config():
    """Start each test without a cached config and restore it afterwards."""
    from wemux import config as config_module

    original = config_module._config
    set_config(None)

    yield

    set_config(original)
