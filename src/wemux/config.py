"""Configuration for wemux.

Values come from, in increasing priority: built-in defaults, a TOML file
(``$WEMUX_CONFIG_FILE`` or ``~/.wemux.toml``) and ``WEMUX_<SECTION>_<FIELD>``
environment variables.
"""
import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

logger = logging.getLogger(__name__)

ENV_PREFIX = "WEMUX"
CONFIG_FILE_ENV = "WEMUX_CONFIG_FILE"
DEFAULT_CONFIG_FILE = "~/.wemux.toml"


class ConfigError(Exception):
    """Raised when configuration cannot be loaded."""


class Section(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)


class ServerConfig(Section):
    """Shared tmux server settings."""

    socket: str = Field("/tmp/wemux", description="Shared socket path")
    socket_mode: int = Field(0o1777, description="Permission bits set on the socket at first start; strings are read as octal")
    tmux: str = Field("tmux", description="tmux binary")

    @field_validator("socket_mode", mode="before")
    @classmethod
    def _parse_octal(cls, value: Any) -> Any:
        # TOML octal literals arrive as int; text is always octal
        if isinstance(value, str):
            try:
                return int(value, 8)
            except ValueError:
                raise ValueError(f"socket_mode must be octal, got {value!r}") from None
        return value

    @field_serializer("socket_mode")
    def _dump_octal(self, value: int) -> str:
        return f"{value:o}"


class SessionConfig(Section):
    """Session naming."""

    host: str = Field("Host", description="Name of the host session")


class Config(BaseModel):
    """Main wemux configuration."""

    server: ServerConfig = Field(default_factory=ServerConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)


def generate_env_var_name(section: str, field: str) -> str:
    """Environment variable that overrides ``section.field``."""
    return f"{ENV_PREFIX}_{section.upper()}_{field.upper()}"


def get_all_env_mappings() -> Dict[str, Tuple[str, str]]:
    """Map every override variable to its (section, field)."""
    mappings = {}
    for section_name, section_field in Config.model_fields.items():
        for field_name in section_field.annotation.model_fields:
            env_var = generate_env_var_name(section_name, field_name)
            mappings[env_var] = (section_name, field_name)
    return mappings


def load_all_env_overrides() -> Dict[str, Dict[str, Any]]:
    overrides: Dict[str, Dict[str, Any]] = {}
    for env_var, (section, field) in get_all_env_mappings().items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        overrides.setdefault(section, {})[field] = value
    return overrides


def load_config(config_file: Optional[str] = None) -> Config:
    """Load configuration from file and environment.

    Args:
        config_file: TOML file to read. Defaults to ``$WEMUX_CONFIG_FILE``,
            then ``~/.wemux.toml``. A missing file means defaults.

    Raises:
        ConfigError: The file is not valid TOML or a value fails validation.
    """
    if config_file is None:
        config_file = os.environ.get(CONFIG_FILE_ENV, DEFAULT_CONFIG_FILE)

    path = Path(config_file).expanduser()
    data: Dict[str, Any] = {}
    if path.is_file():
        logger.debug(f"Loading config from {path}")
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    for section, values in load_all_env_overrides().items():
        data.setdefault(section, {}).update(values)

    try:
        return Config(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


_config: Optional[Config] = None


def get_config() -> Config:
    """Get the process-wide configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[Config]) -> None:
    global _config
    _config = config


def dump_config_toml(config: Config) -> str:
    return tomli_w.dumps(config.model_dump())


def dump_config_env(config: Config) -> str:
    """Render configuration as ``WEMUX_*=value`` lines."""
    data = config.model_dump()
    lines = []
    for env_var, (section, field) in get_all_env_mappings().items():
        lines.append(f"{env_var}={data[section][field]}")
    return "\n".join(lines)
