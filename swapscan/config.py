import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .uniswap.log_filter import normalize_topic

load_dotenv()

# Uniswap V3 Swap(address,address,int256,int256,uint160,uint128,int24)
UNISWAP_V3_SWAP_TOPIC = "0xc42079f94a6350d7e6235f29174924f928cc2ac818eb64fed8004e115fbcca67"

# Node configuration
NODE_RPC_URL = os.getenv("NODE_RPC_URL")
NODE_API_KEY = os.getenv("NODE_API_KEY")

# Text generation configuration
MISTRAL_API_KEY = os.getenv("MISTRAL_API_KEY")
MISTRAL_API_URL = os.getenv("MISTRAL_API_URL", "https://api.mistral.ai/v1/chat/completions")
MISTRAL_MODEL = os.getenv("MISTRAL_MODEL", "mistral-tiny")


@dataclass(frozen=True)
class ScanSettings:
    rpc_url: str
    pool_address: str
    swap_topic: str
    base_decimals: int
    quote_decimals: int
    api_key: Optional[str] = None
    base_symbol: str = "WETH"
    quote_symbol: str = "USDC"
    window_minutes: int = 30
    seconds_per_block: int = 12
    workers: int = 1
    rpc_timeout: int = 30


def _require(name: str) -> str:
    value = os.getenv(name)
    if not value:
        raise ValueError(f"{name} is not set")
    return value


def _int_setting(name: str, default: Optional[int] = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        if default is None:
            raise ValueError(f"{name} is not set")
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def load_scan_settings() -> ScanSettings:
    """
    Build scan settings from the environment (and .env file).

    Raises:
        ValueError: if a required variable is missing, not an integer or out of range
    """
    seconds_per_block = _int_setting("SECONDS_PER_BLOCK", 12)
    if seconds_per_block == 0:
        raise ValueError("SECONDS_PER_BLOCK must be positive, got 0")

    try:
        swap_topic = normalize_topic(os.getenv("SWAP_TOPIC") or UNISWAP_V3_SWAP_TOPIC)
    except ValueError as e:
        raise ValueError(f"SWAP_TOPIC is invalid: {e}") from None

    return ScanSettings(
        rpc_url=_require("NODE_RPC_URL"),
        api_key=os.getenv("NODE_API_KEY") or None,
        pool_address=_require("POOL_ADDRESS"),
        swap_topic=swap_topic,
        base_decimals=_int_setting("BASE_DECIMALS"),
        quote_decimals=_int_setting("QUOTE_DECIMALS"),
        base_symbol=os.getenv("BASE_SYMBOL") or "WETH",
        quote_symbol=os.getenv("QUOTE_SYMBOL") or "USDC",
        window_minutes=_int_setting("WINDOW_MINUTES", 30),
        seconds_per_block=seconds_per_block,
        workers=max(1, _int_setting("SCAN_WORKERS", 1)),
        rpc_timeout=_int_setting("RPC_TIMEOUT", 30),
    )
