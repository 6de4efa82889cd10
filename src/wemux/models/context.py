"""Invocation context for wemux."""
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from ..commands import Role
from ..config import Config


class Context(BaseModel):
    """Everything an action needs to know, fixed at startup."""

    model_config = ConfigDict(frozen=True)

    socket: Path = Field(..., description="Shared tmux server socket")
    socket_mode: int = Field(0o1777, description="Permission bits applied to the socket on first start")
    host_session: str = Field("Host", description="Host session name")
    user: str = Field(..., description="Invoking user; also names the pair session")
    role: Role = Field(Role.CLIENT, description="Host or client")
    tmux: str = Field("tmux", description="tmux binary")

    @classmethod
    def from_config(cls, config: Config, user: str, role: Role) -> "Context":
        return cls(
            socket=Path(config.server.socket).expanduser(),
            socket_mode=config.server.socket_mode,
            host_session=config.session.host,
            user=user,
            role=role,
            tmux=config.server.tmux,
        )
