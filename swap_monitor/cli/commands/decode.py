# swap_monitor/cli/commands/decode.py

import click

from ...core.exceptions import DecodeError
from ...decode import decode_swap_payload


@click.command()
@click.argument('payload')
def decode(payload):
    """Decode one hex swap payload (the log's data field)"""
    try:
        decoded = decode_swap_payload(payload)
    except DecodeError as e:
        raise click.ClickException(e.message)

    click.echo(f"amount0: {decoded.amount0}")
    click.echo(f"amount1: {decoded.amount1}")
    click.echo(f"sqrt_price: {decoded.sqrt_price}")
    click.echo(f"liquidity: {decoded.liquidity}")
    click.echo(f"tick: {decoded.tick}")
