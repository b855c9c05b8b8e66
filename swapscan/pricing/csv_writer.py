"""
CSV Writer Module

Writes the swap events of one scan to a CSV file.
"""

import csv
import logging
from decimal import Decimal
from typing import Sequence

from ..models import SwapEvent

FIELDNAMES = ['timestamp', 'block_number', 'transaction_hash', 'sender', 'recipient',
              'amount_base', 'amount_quote', 'price']


class CSVWriter:
    """Writes swap events to CSV files."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def _format_decimal(self, value: Decimal) -> str:
        """Format a decimal without scientific notation."""
        if value == 0:
            return "0"
        text = f"{value:f}"
        if "." in text:
            text = text.rstrip('0').rstrip('.')
        return text

    def save_events_to_csv(self, events: Sequence[SwapEvent], output_file: str) -> int:
        """
        Save swap events to a CSV file.

        Args:
            events: Decoded swap events
            output_file: Output CSV file path

        Returns:
            Number of rows written
        """
        with open(output_file, 'w', newline='') as f:
            writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
            writer.writeheader()
            for event in events:
                writer.writerow({
                    'timestamp': int(event.timestamp.timestamp()),
                    'block_number': event.block_number,
                    'transaction_hash': event.transaction_hash,
                    'sender': event.sender,
                    'recipient': event.recipient,
                    'amount_base': self._format_decimal(event.amount_base),
                    'amount_quote': self._format_decimal(event.amount_quote),
                    'price': self._format_decimal(event.price),
                })

        self.logger.info(f"Saved {len(events)} swap events to {output_file}")
        return len(events)
