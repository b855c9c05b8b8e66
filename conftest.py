"""
Shared fixtures: scripted swap logs and an in-memory ledger.
"""

from decimal import Decimal, localcontext

import pytest

from swapscan.client.memory_client import InMemoryGateway
from swapscan.config import UNISWAP_V3_SWAP_TOPIC, ScanSettings
from swapscan.models import RawLog

POOL_ADDRESS = "0x88e6A0c2dDD26FEEb64F039a2c41296FcB3f5640"
SENDER = "0xE592427A0AEce92De3Edee1F18E0157C05861564"
RECIPIENT = "0x68b3465833fb72A70ecDF485E0e4C7bD8665Fc45"
BASE_TIMESTAMP = 1704067200  # 2024-01-01 00:00:00 UTC


def encode_token_amount(raw_amount):
    """32-byte big-endian two's-complement word, as a Swap log carries amounts."""
    return raw_amount.to_bytes(32, "big", signed=True)


def to_raw_amount(amount, decimals):
    """Integer on-chain form of a human-readable amount."""
    with localcontext() as ctx:
        ctx.prec = 80
        return int(Decimal(amount).scaleb(decimals).to_integral_value())


def sqrt_price_for(price, base_decimals=18, quote_decimals=6):
    """sqrtPriceX96 whose decoded price is `price` quote units per base unit."""
    with localcontext() as ctx:
        ctx.prec = 80
        ratio = Decimal(price).scaleb(quote_decimals - base_decimals)
        return int(ratio.sqrt() * Decimal(2 ** 96))


def address_topic(address):
    return b"\x00" * 12 + bytes.fromhex(address[2:])


def make_swap_log(amount_base="-1.5", amount_quote="4500", price="3000", block_number=900, log_index=0,
                  tx_hash=None, topics=None, data=None, sqrt_price_x96=None):
    if sqrt_price_x96 is None:
        sqrt_price_x96 = sqrt_price_for(price)
    if topics is None:
        topics = (
            bytes.fromhex(UNISWAP_V3_SWAP_TOPIC[2:]),
            address_topic(SENDER),
            address_topic(RECIPIENT),
        )
    if data is None:
        data = (
            encode_token_amount(to_raw_amount(amount_base, 18))
            + encode_token_amount(to_raw_amount(amount_quote, 6))
            + sqrt_price_x96.to_bytes(32, "big")
            + (10 ** 18).to_bytes(32, "big")
            + encode_token_amount(-200000)
        )
    if tx_hash is None:
        tx_hash = "0x" + f"{block_number:032x}{log_index:032x}"
    return RawLog(
        transaction_hash=tx_hash,
        block_number=block_number,
        topics=tuple(topics),
        data=data,
        log_index=log_index,
    )


@pytest.fixture
def swap_log():
    """Factory for scripted Swap logs."""
    return make_swap_log


@pytest.fixture
def settings():
    return ScanSettings(
        rpc_url="http://localhost:8545",
        pool_address=POOL_ADDRESS,
        swap_topic=UNISWAP_V3_SWAP_TOPIC,
        base_decimals=18,
        quote_decimals=6,
    )


@pytest.fixture
def timestamps():
    return {block: BASE_TIMESTAMP + (block - 850) * 12 for block in range(850, 1001)}


@pytest.fixture
def gateway(timestamps):
    return InMemoryGateway(head=1000, timestamps=timestamps)
