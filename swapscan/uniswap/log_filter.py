"""
Log query descriptor for one contract, one event signature and an
inclusive block range.
"""

from dataclasses import dataclass
from typing import Dict

from web3 import Web3


@dataclass(frozen=True)
class LogQuery:
    from_block: int
    to_block: int
    contract_address: str
    event_topic: str

    def __post_init__(self):
        if self.from_block < 0:
            raise ValueError(f"from_block must not be negative, got {self.from_block}")
        if self.from_block > self.to_block:
            raise ValueError(f"from_block {self.from_block} is after to_block {self.to_block}")

    def to_filter_params(self) -> Dict:
        """Filter dict in the shape eth_getLogs expects."""
        return {
            'fromBlock': self.from_block,
            'toBlock': self.to_block,
            'address': Web3.to_checksum_address(self.contract_address),
            'topics': [self.event_topic],
        }


def normalize_topic(event_topic: str) -> str:
    """Lower-case 0x-prefixed form of a 32-byte topic hash."""
    topic = event_topic.strip().lower()
    if not topic.startswith("0x"):
        topic = "0x" + topic
    if len(topic) != 66 or any(c not in "0123456789abcdef" for c in topic[2:]):
        raise ValueError(f"event topic must be a 32-byte hex string, got {event_topic!r}")
    return topic


def build_log_query(from_block: int, to_block: int, contract_address: str, event_topic: str) -> LogQuery:
    """
    Build a query for every log with the given signature emitted by one contract.

    Indexed sender/recipient topics are not filtered here.
    """
    return LogQuery(
        from_block=from_block,
        to_block=to_block,
        contract_address=contract_address,
        event_topic=normalize_topic(event_topic),
    )
