"""
Swap Scan

Scans a liquidity pool for recent swap events over a fixed time window,
decodes token amounts and prices from the raw logs and builds a report.

Usage:
    from swapscan import SwapScanner, Web3Client, load_scan_settings, summarize

    settings = load_scan_settings()
    scanner = SwapScanner(Web3Client(settings.rpc_url, api_key=settings.api_key), settings)
    result = scanner.scan()
    print(summarize(result.events, dropped_logs=result.dropped).render())
"""

from .config import ScanSettings, load_scan_settings
from .errors import GatewayError, MalformedLogError, ScanCancelled, SwapScanError, TextGenerationError
from .models import RawLog, SwapEvent
from .client.web3_client import Web3Client
from .pricing.report import Report, summarize
from .uniswap.v3.scanner import CancelToken, ScanResult, SwapScanner

__all__ = [
    'ScanSettings',
    'load_scan_settings',
    'SwapScanError',
    'GatewayError',
    'MalformedLogError',
    'ScanCancelled',
    'TextGenerationError',
    'RawLog',
    'SwapEvent',
    'Web3Client',
    'Report',
    'summarize',
    'CancelToken',
    'ScanResult',
    'SwapScanner',
]
