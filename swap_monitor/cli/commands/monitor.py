# swap_monitor/cli/commands/monitor.py

"""
Monitor commands: run the live ingestion and manage the logs table.
"""

import asyncio

import click

from ...core.config import MonitorConfig, database_url, load_environment
from ...core.exceptions import SwapMonitorError
from ...database import DatabaseManager, SwapLogRepository, SWAP_LOG_COLUMNS
from ...types import DatabaseConfig


def _open_repository(db: str) -> SwapLogRepository:
    location = db or load_environment().get("DB_PATH")
    if not location:
        raise click.ClickException("Database location required. Use --db or set DB_PATH")

    db_manager = DatabaseManager(DatabaseConfig(url=database_url(location)))
    db_manager.initialize()
    return SwapLogRepository(db_manager)


@click.command()
@click.option('--ws-url', help='Node WebSocket URL (default: SWAP_MONITOR_WS_URL or INFURA_KEY)')
@click.option('--pool', 'pool_address', help='Pool contract address (default: POOL_ADDRESS)')
@click.option('--db', help='SQLite path or SQLAlchemy URL (default: DB_PATH)')
def run(ws_url, pool_address, db):
    """Subscribe to swap events and store every one of them

    Runs until the node closes the subscription. The first failure stops
    the run with a non-zero exit status.

    Examples:
        swap-monitor run --pool 0x88e6a0c2ddd26feeb64f039a2c41296fcb3f5640 --db swaps.db
    """
    from ...pipeline.runner import run_monitor

    try:
        config = MonitorConfig.from_env(ws_url=ws_url, pool_address=pool_address, db=db)
        stored = asyncio.run(run_monitor(config, on_record=lambda record: click.echo(record.describe())))
    except SwapMonitorError as e:
        raise click.ClickException(f"Swap monitor failed during {e.stage}: {e.message}")

    click.echo(f"Subscription ended after {stored} swaps")


@click.command('init-db')
@click.option('--db', help='SQLite path or SQLAlchemy URL (default: DB_PATH)')
def init_db(db):
    """Create the logs table if it does not exist"""
    try:
        repository = _open_repository(db)
        try:
            repository.initialize()
            click.echo(f"Table '{repository.table.name}' ready ({repository.count()} rows)")
        finally:
            repository.db_manager.shutdown()
    except SwapMonitorError as e:
        raise click.ClickException(e.message)


@click.command()
@click.option('--db', help='SQLite path or SQLAlchemy URL (default: DB_PATH)')
@click.option('--limit', type=int, default=20, show_default=True, help='Maximum rows to print')
def show(db, limit):
    """Print stored swaps in insertion order"""
    try:
        repository = _open_repository(db)
        try:
            repository.initialize()
            rows = repository.fetch_all(limit=limit)
        finally:
            repository.db_manager.shutdown()
    except SwapMonitorError as e:
        raise click.ClickException(e.message)

    if not rows:
        click.echo("No swaps stored")
        return

    for row in rows:
        click.echo(", ".join(f"{column}: {row[column]}" for column in SWAP_LOG_COLUMNS))
