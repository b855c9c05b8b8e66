"""
Value types shared by the gateway, decoder and report builder.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Tuple


@dataclass(frozen=True)
class RawLog:
    """A log entry as returned by the ledger, before decoding."""
    transaction_hash: str
    block_number: int
    topics: Tuple[bytes, ...]
    data: bytes
    log_index: int = 0


@dataclass(frozen=True)
class SwapEvent:
    """
    A decoded pool swap.

    Amounts are signed: negative means the asset left the pool.
    Price is quote units per base unit.
    """
    transaction_hash: str
    block_number: int
    timestamp: datetime
    sender: str
    recipient: str
    amount_base: Decimal
    amount_quote: Decimal
    price: Decimal
