"""
Uniswap V3 Swap Scanner

Runs one bounded scan of a pool: resolve the block range for the
window, query Swap logs, decode them (optionally on a small thread pool)
and return the events in retrieval order with drop counts.
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from tqdm import tqdm

from ...client.gateway import LedgerGateway
from ...config import ScanSettings
from ...errors import GatewayError, MalformedLogError, ScanCancelled
from ...models import RawLog, SwapEvent
from ...pricing.event_decoder import SwapEventDecoder
from ..block_range import resolve_start_block
from ..log_filter import build_log_query

DROP_MALFORMED = "malformed"
DROP_BLOCK_LOOKUP = "block lookup failed"


class CancelToken:
    """Cancellation signal with an optional deadline, checked at ledger round-trips."""

    def __init__(self, timeout: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def raise_if_cancelled(self, stage: str) -> None:
        if self.cancelled:
            raise ScanCancelled(stage)


@dataclass(frozen=True)
class ScanResult:
    from_block: int
    to_block: int
    logs_found: int
    events: Tuple[SwapEvent, ...]
    drop_reasons: Dict[str, int] = field(default_factory=dict)

    @property
    def dropped(self) -> int:
        return sum(self.drop_reasons.values())


class SwapScanner:
    """
    Scans one pool for Swap events over a recent time window.

    Head-fetch and log-query failures abort the scan. A malformed log or
    a failed block lookup only drops that event.
    """

    def __init__(self, gateway: LedgerGateway, settings: ScanSettings):
        self.gateway = gateway
        self.settings = settings
        self.decoder = SwapEventDecoder(settings.base_decimals, settings.quote_decimals)
        self.logger = logging.getLogger(self.__class__.__name__)

    def scan(self, window_minutes: Optional[int] = None, workers: Optional[int] = None,
             cancel_token: Optional[CancelToken] = None, show_progress: bool = False) -> ScanResult:
        """
        Scan the pool for Swap events.

        Args:
            window_minutes: Window length, defaults to the configured one
            workers: Decode worker count, defaults to the configured one
            cancel_token: Optional cancellation/timeout signal
            show_progress: Show a progress bar while decoding

        Returns:
            ScanResult with events in log retrieval order

        Raises:
            GatewayError: if the chain head or the log query fails
            ScanCancelled: if the token is cancelled at a round-trip boundary
        """
        cancel_token = cancel_token or CancelToken()
        window_minutes = self.settings.window_minutes if window_minutes is None else window_minutes
        workers = max(1, workers or self.settings.workers)

        cancel_token.raise_if_cancelled("chain head fetch")
        end_block = self.gateway.get_current_block()
        start_block = resolve_start_block(end_block, window_minutes, self.settings.seconds_per_block)
        self.logger.info(f"Scanning blocks {start_block} (~{window_minutes} minutes ago) to {end_block} (latest)")

        query = build_log_query(start_block, end_block, self.settings.pool_address, self.settings.swap_topic)

        cancel_token.raise_if_cancelled("log query")
        logs = self.gateway.get_logs(query)
        self.logger.info(f"Found {len(logs)} swap logs")

        slots, drop_reasons = self._decode_all(logs, workers, cancel_token, show_progress)
        events = tuple(event for event in slots if event is not None)

        self.logger.info(f"Decoded {len(events)} swap events, dropped {sum(drop_reasons.values())}")
        return ScanResult(
            from_block=start_block,
            to_block=end_block,
            logs_found=len(logs),
            events=events,
            drop_reasons=drop_reasons,
        )

    def _decode_one(self, log: RawLog, cancel_token: CancelToken) -> Tuple[Optional[SwapEvent], Optional[str]]:
        try:
            return self.decoder.decode(log, self.gateway, cancel_token), None
        except MalformedLogError as e:
            self.logger.warning(f"Skipping log: {e}")
            return None, DROP_MALFORMED
        except GatewayError as e:
            self.logger.warning(f"Skipping log {log.transaction_hash}#{log.log_index}: {e}")
            return None, DROP_BLOCK_LOOKUP

    def _decode_all(self, logs: List[RawLog], workers: int, cancel_token: CancelToken,
                    show_progress: bool) -> Tuple[List[Optional[SwapEvent]], Dict[str, int]]:
        # one slot per log, so completion order never changes output order
        slots: List[Optional[SwapEvent]] = [None] * len(logs)
        reasons: List[Optional[str]] = [None] * len(logs)
        progress = tqdm(total=len(logs), desc="Decoding swap events", unit="event", disable=not show_progress)

        try:
            if workers == 1 or len(logs) <= 1:
                for i, log in enumerate(logs):
                    slots[i], reasons[i] = self._decode_one(log, cancel_token)
                    progress.update(1)
            else:
                with ThreadPoolExecutor(max_workers=workers) as executor:
                    futures = {
                        executor.submit(self._decode_one, log, cancel_token): i
                        for i, log in enumerate(logs)
                    }
                    try:
                        for future in as_completed(futures):
                            i = futures[future]
                            slots[i], reasons[i] = future.result()
                            progress.update(1)
                    except ScanCancelled:
                        for future in futures:
                            future.cancel()
                        raise
        finally:
            progress.close()

        drop_reasons: Dict[str, int] = {}
        for reason in reasons:
            if reason is not None:
                drop_reasons[reason] = drop_reasons.get(reason, 0) + 1
        return slots, drop_reasons
