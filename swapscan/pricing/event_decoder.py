"""
Event Decoder Module

Decodes Uniswap V3 pool Swap logs into SwapEvent values.

Swap(address indexed sender, address indexed recipient, int256 amount0,
     int256 amount1, uint160 sqrtPriceX96, uint128 liquidity, int24 tick)
"""

import logging
from datetime import datetime, timezone

from web3 import Web3

from .fixed_point import WORD_SIZE, decode_token_amount, price_from_sqrt_ratio
from ..client.gateway import LedgerGateway
from ..errors import MalformedLogError
from ..models import RawLog, SwapEvent

MIN_TOPICS = 3
# amount0, amount1, sqrtPriceX96, liquidity, tick
MIN_DATA_LENGTH = WORD_SIZE * 5


def _topic_address(topic: bytes) -> str:
    """Address stored in the low 20 bytes of a left-padded topic word."""
    return Web3.to_checksum_address("0x" + bytes(topic[-20:]).hex())


def _word(data: bytes, index: int) -> bytes:
    return data[index * WORD_SIZE:(index + 1) * WORD_SIZE]


class SwapEventDecoder:
    """Decodes pool Swap logs given the decimals of the two pool assets."""

    def __init__(self, base_decimals: int, quote_decimals: int):
        if base_decimals < 0 or quote_decimals < 0:
            raise ValueError("token decimals must not be negative")
        self.base_decimals = base_decimals
        self.quote_decimals = quote_decimals
        self.logger = logging.getLogger(__name__)

    def validate(self, log: RawLog) -> None:
        """
        Check that a log has the shape of a Swap event.

        Raises:
            MalformedLogError: if topics or payload are too short
        """
        if len(log.topics) < MIN_TOPICS:
            raise MalformedLogError(
                f"expected at least {MIN_TOPICS} topics, got {len(log.topics)}",
                log.transaction_hash, log.log_index, log.block_number,
            )
        if len(log.data) < MIN_DATA_LENGTH:
            raise MalformedLogError(
                f"expected at least {MIN_DATA_LENGTH} bytes of data, got {len(log.data)}",
                log.transaction_hash, log.log_index, log.block_number,
            )
        for topic in log.topics[1:MIN_TOPICS]:
            if len(topic) != WORD_SIZE:
                raise MalformedLogError(
                    f"indexed topic is {len(topic)} bytes, expected {WORD_SIZE}",
                    log.transaction_hash, log.log_index, log.block_number,
                )

    def decode(self, log: RawLog, gateway: LedgerGateway, cancel_token=None) -> SwapEvent:
        """
        Decode a Swap log and resolve its block timestamp.

        Args:
            log: Raw log entry
            gateway: Ledger used to look up the block timestamp
            cancel_token: Optional token checked before the block lookup

        Returns:
            Decoded swap event

        Raises:
            MalformedLogError: if the log shape is invalid
            GatewayError: if the block lookup fails
            ScanCancelled: if the token was cancelled
        """
        self.validate(log)

        if cancel_token is not None:
            cancel_token.raise_if_cancelled("block lookup")
        block_time = gateway.get_block_timestamp(log.block_number)

        return self._build_event(log, block_time)

    def _build_event(self, log: RawLog, block_time: int) -> SwapEvent:
        data = log.data
        amount0 = decode_token_amount(_word(data, 0), self.base_decimals)
        amount1 = decode_token_amount(_word(data, 1), self.quote_decimals)
        sqrt_price_x96 = int.from_bytes(_word(data, 2), "big", signed=False)
        price = price_from_sqrt_ratio(sqrt_price_x96, self.base_decimals, self.quote_decimals)

        self.logger.debug(f"{log.transaction_hash}: amount0={amount0} amount1={amount1} sqrtPriceX96={sqrt_price_x96}")

        return SwapEvent(
            transaction_hash=log.transaction_hash,
            block_number=log.block_number,
            timestamp=datetime.fromtimestamp(block_time, tz=timezone.utc),
            sender=_topic_address(log.topics[1]),
            recipient=_topic_address(log.topics[2]),
            amount_base=amount0,
            amount_quote=amount1,
            price=price,
        )

