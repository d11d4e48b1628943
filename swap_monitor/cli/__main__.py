# swap_monitor/cli/__main__.py

"""
Swap Monitor CLI

Usage: python -m swap_monitor.cli [command] [options]
"""

import os

import click

from swap_monitor.core.logging import SwapMonitorLogger


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.pass_context
def cli(ctx, verbose):
    """Swap Monitor - capture pool swap events into a local table"""
    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose

    SwapMonitorLogger.configure_from_env(os.environ, verbose=verbose)


from swap_monitor.cli.commands.monitor import run, init_db, show
from swap_monitor.cli.commands.decode import decode

cli.add_command(run)
cli.add_command(init_db)
cli.add_command(show)
cli.add_command(decode)


if __name__ == '__main__':
    cli()
