# swap_monitor/types/new.py

from typing import NewType


EvmAddress = NewType('EvmAddress', str)  # 0x + 40 lowercase hex digits
EvmHash = NewType('EvmHash', str)  # 0x + 64 lowercase hex digits
IntStr = NewType('IntStr', str)  # base-10 integer text, sign included
ErrorId = NewType('ErrorId', str)
