"""
Error types raised while scanning swap events.
"""

from typing import Optional


class SwapScanError(Exception):
    """Base class for all scan errors."""


class GatewayError(SwapScanError):
    """Failure reaching or querying the ledger."""

    def __init__(self, operation: str, message: str, block_number: Optional[int] = None):
        self.operation = operation
        self.block_number = block_number
        where = f" (block {block_number})" if block_number is not None else ""
        super().__init__(f"{operation} failed{where}: {message}")


class MalformedLogError(SwapScanError):
    """A retrieved log does not have the shape of a swap event."""

    def __init__(self, reason: str, transaction_hash: str = "", log_index: Optional[int] = None,
                 block_number: Optional[int] = None):
        self.reason = reason
        self.transaction_hash = transaction_hash
        self.log_index = log_index
        self.block_number = block_number
        super().__init__(
            f"malformed log {transaction_hash or '?'}#{log_index if log_index is not None else '?'}"
            f" in block {block_number if block_number is not None else '?'}: {reason}"
        )


class ScanCancelled(SwapScanError):
    """The caller cancelled the scan or its deadline passed."""

    def __init__(self, stage: str):
        self.stage = stage
        super().__init__(f"scan cancelled before {stage}")


class TextGenerationError(SwapScanError):
    """The commentary endpoint could not produce an answer."""
