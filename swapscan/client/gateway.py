"""
Ledger Gateway Interface

Defines the capability the scanner needs from a ledger: the chain head,
filtered log queries and block timestamps. The web3 adapter and the
in-memory gateway both implement it.
"""

from abc import ABC, abstractmethod
from typing import List

from ..models import RawLog
from ..uniswap.log_filter import LogQuery


class LedgerGateway(ABC):
    """
    Abstract access to a ledger.

    Implementations raise GatewayError for any failure reaching or
    querying the ledger.
    """

    @abstractmethod
    def get_current_block(self) -> int:
        """
        Get the height of the current chain head.

        Returns:
            Latest block number
        """
        pass

    @abstractmethod
    def get_logs(self, query: LogQuery) -> List[RawLog]:
        """
        Execute a filtered log query.

        Args:
            query: Address, topic and inclusive block range to match

        Returns:
            Matching logs in ledger order
        """
        pass

    @abstractmethod
    def get_block_timestamp(self, block_number: int) -> int:
        """
        Get the UNIX timestamp of a block.

        Args:
            block_number: Block number

        Returns:
            Block timestamp in seconds
        """
        pass
