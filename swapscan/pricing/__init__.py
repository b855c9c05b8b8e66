"""
Pricing Package

Fixed-point decoding, swap event decoding and report building.
"""

from .csv_writer import CSVWriter
from .event_decoder import SwapEventDecoder
from .fixed_point import decode_token_amount, price_from_sqrt_ratio
from .report import Report, mean_price, summarize

__all__ = [
    'CSVWriter',
    'SwapEventDecoder',
    'decode_token_amount',
    'price_from_sqrt_ratio',
    'Report',
    'mean_price',
    'summarize',
]
