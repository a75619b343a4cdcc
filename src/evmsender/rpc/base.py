"""Base interfaces for chain RPC clients.

A client is bound to one endpoint and created per request:
1. ``connect`` validates the endpoint and reads its chain id
2. ``get_balance`` / ``gas_price`` query account and fee state
3. ``submit_transaction`` fills nonce, gas and chain id, signs and broadcasts
4. ``await_confirmation`` polls for the receipt within a deadline
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from evmsender.signing.base import SignerBackend


@dataclass(frozen=True)
class TransferTransaction:
    """Native-asset transfer to submit.

    Fields left as None are filled in by the client.
    """
    sender: str
    to: str
    value: int
    nonce: Optional[int] = None
    gas: Optional[int] = None
    gas_price: Optional[int] = None


@dataclass(frozen=True)
class TransactionHandle:
    """Broadcast transaction awaiting confirmation."""
    tx_hash: str
    chain_id: int
    nonce: int


@dataclass(frozen=True)
class Receipt:
    """Mined transaction receipt."""
    tx_hash: str
    block_number: int
    status: int
    gas_used: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status == 1


class ChainClient(ABC):
    """Abstract RPC client for an EVM-compatible node."""

    def __init__(self, endpoint: str, chain_id: int):
        self.endpoint = endpoint
        self.chain_id = chain_id

    @classmethod
    @abstractmethod
    async def connect(cls, endpoint: str, **options) -> "ChainClient":
        """Open a client for an endpoint.

        Raises:
            RPCConnectionError: If the endpoint is malformed or unreachable
        """

    @abstractmethod
    async def get_balance(self, address: str) -> int:
        """Get an account's balance in the smallest unit.

        Raises:
            RPCQueryError: If the query fails
        """

    @abstractmethod
    async def gas_price(self) -> int:
        """Get the node's current gas price in the smallest unit.

        Raises:
            RPCQueryError: If the query fails
        """

    @abstractmethod
    async def submit_transaction(
        self, tx: TransferTransaction, signer: SignerBackend
    ) -> TransactionHandle:
        """Populate, sign and broadcast a transaction.

        Raises:
            SubmissionError: If the node rejects it or any step fails
        """

    @abstractmethod
    async def await_confirmation(
        self, handle: TransactionHandle, timeout: float
    ) -> Receipt:
        """Wait until the transaction is mined.

        Args:
            handle: Handle returned by submit_transaction
            timeout: Maximum seconds to wait

        Raises:
            ConfirmationError: On timeout or polling failure
        """

    async def close(self) -> None:
        """Release network resources."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(endpoint={self.endpoint!r}, chain_id={self.chain_id})"


class RPCError(Exception):
    """Base exception for RPC client failures."""
    pass


class RPCConnectionError(RPCError):
    """Endpoint is malformed or unreachable."""
    pass


class RPCQueryError(RPCError):
    """A read-only query failed."""
    pass


class SubmissionError(RPCError):
    """Transaction could not be populated, signed or broadcast."""
    pass


class ConfirmationError(RPCError):
    """Receipt polling failed or timed out."""
    pass
