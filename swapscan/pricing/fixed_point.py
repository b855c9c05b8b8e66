"""
Fixed-point conversions for on-chain integers.

Token amounts are integers scaled by 10^decimals; pool prices are
encoded as sqrt(price) * 2^96. Both are converted with Decimal at a
precision wide enough for uint160 square-root prices.
"""

from decimal import Context, Decimal, localcontext
from typing import Union

WORD_SIZE = 32

# decimal contexts are per-thread, so the precision is applied locally
_CONTEXT = Context(prec=80)

Q96 = Decimal(2 ** 96)


def decode_token_amount(raw: Union[bytes, int], decimals: int) -> Decimal:
    """
    Decode a signed fixed-point token amount.

    Args:
        raw: 32-byte big-endian two's-complement word, or an already decoded integer
        decimals: Number of fractional decimal digits of the token

    Returns:
        Signed amount in token units
    """
    if decimals < 0:
        raise ValueError(f"decimals must not be negative, got {decimals}")
    if isinstance(raw, (bytes, bytearray)):
        if len(raw) != WORD_SIZE:
            raise ValueError(f"expected a {WORD_SIZE}-byte word, got {len(raw)} bytes")
        value = int.from_bytes(raw, "big", signed=True)
    else:
        value = int(raw)
    with localcontext(_CONTEXT):
        return Decimal(value).scaleb(-decimals)


def price_from_sqrt_ratio(sqrt_price_x96: int, base_decimals: int, quote_decimals: int) -> Decimal:
    """
    Convert a sqrtPriceX96 value into quote units per base unit.

    price = (sqrtPriceX96 / 2^96)^2 * 10^(base_decimals - quote_decimals)

    A zero input yields exactly zero.
    """
    if sqrt_price_x96 < 0:
        raise ValueError(f"sqrtPriceX96 must not be negative, got {sqrt_price_x96}")
    if sqrt_price_x96 == 0:
        return Decimal(0)
    with localcontext(_CONTEXT):
        ratio = (Decimal(sqrt_price_x96) / Q96) ** 2
        return ratio.scaleb(base_decimals - quote_decimals)
