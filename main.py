#!/usr/bin/env python3
"""
Uniswap V3 Swap Scanner

Scans a pool for the swaps of the last N minutes, prints a report with
amounts, prices and the average price, and optionally asks a language
model for commentary on it.

Usage:
  python3 main.py                          # Scan the configured window
  python3 main.py --minutes 60 --ask-ai    # Scan an hour and ask for commentary
  python3 main.py --csv data/swaps.csv     # Also save the events to CSV
"""

import argparse
import logging
import sys

from swapscan.client.mistral_client import MistralClient
from swapscan.client.web3_client import Web3Client
from swapscan.config import load_scan_settings
from swapscan.errors import SwapScanError, TextGenerationError
from swapscan.pricing.csv_writer import CSVWriter
from swapscan.pricing.report import summarize
from swapscan.uniswap.v3.scanner import CancelToken, SwapScanner

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Summarize recent Uniswap V3 pool swaps")
    parser.add_argument("--minutes", type=int, help="Scan window in minutes (default: WINDOW_MINUTES or 30)")
    parser.add_argument("--workers", type=int, help="Parallel block lookups (default: SCAN_WORKERS or 1)")
    parser.add_argument("--timeout", type=float, help="Abort the scan after this many seconds")
    parser.add_argument("--csv", dest="csv_file", help="Write the decoded events to this CSV file")
    parser.add_argument("--ask-ai", action="store_true", help="Ask Mistral to comment on the report")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar while decoding")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(levelname)s - %(message)s')

    try:
        settings = load_scan_settings()
    except ValueError as e:
        print(f"❌ Configuration error: {e}")
        print("Please check your .env file (see .env.example)")
        return 1

    try:
        client = Web3Client(settings.rpc_url, api_key=settings.api_key, timeout=settings.rpc_timeout)
        scanner = SwapScanner(client, settings)
        result = scanner.scan(
            window_minutes=args.minutes,
            workers=args.workers,
            cancel_token=CancelToken(timeout=args.timeout),
            show_progress=args.progress,
        )
    except SwapScanError as e:
        logger.error(f"Scan failed: {e}")
        return 1

    window = args.minutes if args.minutes is not None else settings.window_minutes
    report = summarize(
        result.events,
        dropped_logs=result.dropped,
        drop_reasons=result.drop_reasons,
        base_symbol=settings.base_symbol,
        quote_symbol=settings.quote_symbol,
        window_minutes=window,
    )
    text = report.render()
    print(text)

    if args.csv_file:
        CSVWriter().save_events_to_csv(report.events, args.csv_file)
        print(f"📄 {report.event_count} swaps saved to {args.csv_file}")

    if args.ask_ai:
        try:
            answer = MistralClient().analyze(text)
        except (ValueError, TextGenerationError) as e:
            logger.error(f"Commentary failed: {e}")
        else:
            print("\n=== Mistral commentary ===")
            print(answer)

    return 0


if __name__ == "__main__":
    sys.exit(main())
