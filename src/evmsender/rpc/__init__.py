"""Chain RPC clients.

- ChainClient: contract consumed by the transfer pipeline
- Web3ChainClient: web3.py implementation over HTTP JSON-RPC
"""

from evmsender.rpc.base import (
    ChainClient,
    ConfirmationError,
    Receipt,
    RPCConnectionError,
    RPCError,
    RPCQueryError,
    SubmissionError,
    TransactionHandle,
    TransferTransaction,
)
from evmsender.rpc.factory import Connector, connect_client

__all__ = [
    "ChainClient",
    "ConfirmationError",
    "Connector",
    "Receipt",
    "RPCConnectionError",
    "RPCError",
    "RPCQueryError",
    "SubmissionError",
    "TransactionHandle",
    "TransferTransaction",
    "connect_client",
]
