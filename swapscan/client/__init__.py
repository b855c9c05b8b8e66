from .gateway import LedgerGateway
from .memory_client import InMemoryGateway
from .mistral_client import MistralClient
from .web3_client import Web3Client

__all__ = ['LedgerGateway', 'InMemoryGateway', 'MistralClient', 'Web3Client']
