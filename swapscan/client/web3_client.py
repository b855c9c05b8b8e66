from web3 import Web3, HTTPProvider
import logging
from typing import List

from hexbytes import HexBytes

from .gateway import LedgerGateway
from ..errors import GatewayError
from ..models import RawLog
from ..uniswap.log_filter import LogQuery

logger = logging.getLogger(__name__)


class Web3Client(LedgerGateway):
    def __init__(self, rpc_url: str, api_key: str = None, timeout: int = 30, check_connection: bool = True):
        """
        Initialize Web3 client with a JSON-RPC node.

        Args:
            rpc_url: Node HTTP endpoint
            api_key: Optional key, appended as ?key= (Google Cloud Blockchain Node Engine format)
            timeout: HTTP request timeout in seconds
            check_connection: Fail fast if the node cannot be reached
        """
        if not rpc_url:
            raise ValueError("rpc_url must be set")

        if api_key:
            separator = "&" if "?" in rpc_url else "?"
            rpc_url = f"{rpc_url}{separator}key={api_key}"

        self.w3 = Web3(HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))

        if check_connection:
            if not self.w3.is_connected():
                raise GatewayError("connect", "could not connect to Ethereum node")
            logger.info(f"Connected to Ethereum node. Chain ID: {self.w3.eth.chain_id}")

    def get_current_block(self) -> int:
        """Get current block number"""
        try:
            return int(self.w3.eth.block_number)
        except Exception as e:
            raise GatewayError("get_current_block", str(e)) from e

    def get_logs(self, query: LogQuery) -> List[RawLog]:
        """
        Get logs from the blockchain

        Args:
            query: Block range, contract address and event topic to filter

        Returns:
            List of raw log entries
        """
        try:
            logs = self.w3.eth.get_logs(query.to_filter_params())
        except Exception as e:
            logger.error(f"Error getting logs for blocks {query.from_block}-{query.to_block}: {e}")
            raise GatewayError("get_logs", str(e)) from e

        return [self._to_raw_log(log) for log in logs]

    def get_block_timestamp(self, block_number: int) -> int:
        """
        Get timestamp for a specific block

        Args:
            block_number: Block number

        Returns:
            Block timestamp
        """
        try:
            block = self.w3.eth.get_block(block_number)
            return int(block["timestamp"])
        except Exception as e:
            raise GatewayError("get_block", str(e), block_number=block_number) from e

    @staticmethod
    def _to_raw_log(log) -> RawLog:
        tx_hash = HexBytes(log["transactionHash"])
        return RawLog(
            transaction_hash="0x" + bytes(tx_hash).hex(),
            block_number=int(log["blockNumber"]),
            topics=tuple(bytes(HexBytes(topic)) for topic in log["topics"]),
            data=bytes(HexBytes(log["data"])),
            log_index=int(log.get("logIndex", 0)),
        )
