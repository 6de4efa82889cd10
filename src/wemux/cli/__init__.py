#!/usr/bin/env python3
"""Main CLI entry point for wemux."""
import logging
import os
import sys

import click

from ..actions import dispatch, unrecognized
from ..commands import UnrecognizedCommand, parse_command, role_from_env
from ..config import ConfigError, get_config
from ..models.context import Context
from ..tmux import Tmux
from ..utils import current_user

logger = logging.getLogger(__name__)


def setup_logging(log_level: str):
    """Configure logging for the application. Records go to stderr."""
    level = getattr(logging, log_level.upper(), logging.WARNING)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr),
        ]
    )
    logging.getLogger('wemux').setLevel(level)


@click.command(context_settings={"ignore_unknown_options": True})
@click.option('--log-level', default='WARNING', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Set logging level')
@click.version_option(package_name='wemux')
@click.argument('command', required=False)
@click.pass_context
def cli(ctx, log_level, command):
    """Share a tmux session.

    The host (WEMUX_HOST=true) runs start, stop or help. Everyone else runs
    mirror, pair or help. Run 'wemux help' for the commands of your role.
    """
    setup_logging(log_level)

    role = role_from_env(os.environ)
    try:
        parsed = parse_command(role, command)
    except UnrecognizedCommand as e:
        logger.debug(str(e))
        ctx.exit(unrecognized(e.role, e.word))

    try:
        config = get_config()
    except ConfigError as e:
        click.echo(str(e), err=True)
        ctx.exit(2)

    context = Context.from_config(config, user=current_user(), role=role)
    tmux = Tmux(context.socket, binary=context.tmux)
    logger.debug(f"{context.user} as {role.value}: {parsed.value}")

    try:
        status = dispatch(context, tmux, parsed)
    except FileNotFoundError as e:
        click.echo(f"Could not run {context.tmux}: {e.strerror}", err=True)
        ctx.exit(127)

    ctx.exit(status)


if __name__ == "__main__":
    cli()
