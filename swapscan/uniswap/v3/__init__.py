"""
Uniswap V3 swap scanning.
"""

from .scanner import CancelToken, ScanResult, SwapScanner

__all__ = ['CancelToken', 'ScanResult', 'SwapScanner']
