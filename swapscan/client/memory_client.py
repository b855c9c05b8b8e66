"""
In-memory ledger gateway returning scripted logs and blocks.

Used to run the scanner deterministically without a node.
"""

import logging
from typing import Dict, Iterable, List, Optional, Set

from .gateway import LedgerGateway
from ..errors import GatewayError
from ..models import RawLog
from ..uniswap.log_filter import LogQuery

logger = logging.getLogger(__name__)


class InMemoryGateway(LedgerGateway):
    """Ledger gateway backed by scripted data."""

    def __init__(self, head: int, logs: Iterable[RawLog] = (), timestamps: Optional[Dict[int, int]] = None,
                 failing_blocks: Iterable[int] = (), fail_head: bool = False, fail_logs: bool = False):
        self.head = head
        self.logs = list(logs)
        self.timestamps = dict(timestamps or {})
        self.failing_blocks: Set[int] = set(failing_blocks)
        self.fail_head = fail_head
        self.fail_logs = fail_logs
        self.queries: List[LogQuery] = []
        self.block_requests: List[int] = []

    def get_current_block(self) -> int:
        if self.fail_head:
            raise GatewayError("get_current_block", "scripted failure")
        return self.head

    def get_logs(self, query: LogQuery) -> List[RawLog]:
        self.queries.append(query)
        if self.fail_logs:
            raise GatewayError("get_logs", "scripted failure")
        # Address and topic filters are assumed to have been applied by whoever scripted the logs
        return [log for log in self.logs if query.from_block <= log.block_number <= query.to_block]

    def get_block_timestamp(self, block_number: int) -> int:
        self.block_requests.append(block_number)
        if block_number in self.failing_blocks:
            raise GatewayError("get_block", "scripted failure", block_number=block_number)
        if block_number not in self.timestamps:
            raise GatewayError("get_block", "unknown block", block_number=block_number)
        return self.timestamps[block_number]
