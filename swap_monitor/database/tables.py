# swap_monitor/database/tables.py

from sqlalchemy import Column, Integer, MetaData, Table, Text


metadata = MetaData()

# 256-bit and 128-bit values are stored as base-10 text; tick fits a native integer
swap_logs = Table(
    'logs',
    metadata,
    Column('tx_hash', Text),
    Column('sender_address', Text),
    Column('receiver_address', Text),
    Column('amount0', Text),
    Column('amount1', Text),
    Column('sqrt_price', Text),
    Column('liquidity', Text),
    Column('tick', Integer),
)

SWAP_LOG_COLUMNS = tuple(column.name for column in swap_logs.columns)
