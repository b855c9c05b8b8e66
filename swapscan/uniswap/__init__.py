"""
Uniswap Pool Scanning Package

Block range resolution and log queries for pool events. The V3 swap
scanner lives in the v3 subpackage.
"""

from .block_range import blocks_in_window, resolve_start_block
from .log_filter import LogQuery, build_log_query

__all__ = [
    'blocks_in_window',
    'resolve_start_block',
    'LogQuery',
    'build_log_query',
]
