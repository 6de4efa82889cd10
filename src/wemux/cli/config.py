"""Configuration management commands."""
import click

from ..config import Config, ConfigError, dump_config_env, dump_config_toml, get_config

FORMATS = click.Choice(['toml', 'env'])


def _dump(config: Config, fmt: str) -> str:
    if fmt == 'env':
        return dump_config_env(config)
    return dump_config_toml(config)


@click.group()
def config():
    """Configuration management commands."""
    pass


@config.command("show")
@click.option('--format', 'fmt', default='toml', type=FORMATS, help='Output format')
def show(fmt):
    """Show current effective configuration."""
    try:
        current = get_config()
    except ConfigError as e:
        click.echo(str(e), err=True)
        raise click.Abort()
    click.echo(_dump(current, fmt))


@config.command("defaults")
@click.option('--format', 'fmt', default='toml', type=FORMATS, help='Output format')
def defaults(fmt):
    """Show default configuration values."""
    click.echo(_dump(Config(), fmt))
