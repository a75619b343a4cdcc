"""Pytest configuration and fixtures."""

import asyncio
import os
from typing import Optional

import pytest

# Well-known development key (Hardhat/Anvil account #0)
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
RECEIVER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
EXPLORER = "https://testnet.snowtrace.io/tx/"

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["KEY"] = TEST_PRIVATE_KEY
os.environ["DEBUG"] = "true"

from evmsender.config import Settings, get_settings
from evmsender.rpc.base import (
    ChainClient,
    ConfirmationError,
    Receipt,
    RPCConnectionError,
    RPCQueryError,
    SubmissionError,
    TransactionHandle,
    TransferTransaction,
)
from evmsender.signing import LocalSigner, reset_signer
from evmsender.transfer import TransferService


class FakeChainClient(ChainClient):
    """In-memory chain that signs real transactions and mines them instantly."""

    def __init__(self, endpoint: str = "http://fake-node", chain_id: int = 43113):
        super().__init__(endpoint, chain_id)
        self.balance = 10 * 10**18
        self.balance_error: Optional[str] = None
        self.submit_error: Optional[str] = None
        self.confirm_error: Optional[str] = None
        self.confirm_delay = 0.0
        self.receipt_status = 1
        self.next_nonce = 0
        self.submitted: list[TransferTransaction] = []
        self.raw_transactions: list[bytes] = []
        self.timeouts: list[float] = []
        self.calls: list[str] = []
        self.closed = False

    @classmethod
    async def connect(cls, endpoint: str, **options) -> "FakeChainClient":
        return cls(endpoint)

    async def get_balance(self, address: str) -> int:
        self.calls.append("get_balance")
        if self.balance_error:
            raise RPCQueryError(self.balance_error)
        return self.balance

    async def gas_price(self) -> int:
        return 25 * 10**9

    async def submit_transaction(self, tx, signer) -> TransactionHandle:
        self.calls.append("submit_transaction")
        if self.submit_error:
            raise SubmissionError(self.submit_error)

        nonce = self.next_nonce
        signed = signer.sign_transaction({
            "to": tx.to,
            "value": tx.value,
            "nonce": nonce,
            "gas": 21000,
            "gasPrice": await self.gas_price(),
            "chainId": self.chain_id,
        })
        self.next_nonce += 1
        self.submitted.append(tx)
        self.raw_transactions.append(signed.raw_transaction)
        return TransactionHandle(tx_hash=signed.tx_hash, chain_id=self.chain_id, nonce=nonce)

    async def await_confirmation(self, handle, timeout: float) -> Receipt:
        self.calls.append("await_confirmation")
        self.timeouts.append(timeout)
        if self.confirm_delay:
            await asyncio.sleep(self.confirm_delay)
        if self.confirm_error:
            raise ConfirmationError(self.confirm_error)
        return Receipt(
            tx_hash=handle.tx_hash,
            block_number=1000 + handle.nonce,
            status=self.receipt_status,
            gas_used=21000,
        )

    async def close(self) -> None:
        self.closed = True


class FakeConnector:
    """Connector handing out one shared FakeChainClient."""

    UNREACHABLE = "http://unreachable.invalid"

    def __init__(self, client: FakeChainClient):
        self.client = client
        self.networks: list[str] = []

    async def __call__(self, network: str, settings: Settings) -> ChainClient:
        self.networks.append(network)
        if network == self.UNREACHABLE:
            raise RPCConnectionError(f"{network} is unreachable: connection refused")
        return self.client


@pytest.fixture(autouse=True)
def reset_singletons():
    """Start every test with fresh settings and signer."""
    get_settings.cache_clear()
    reset_signer()
    yield
    get_settings.cache_clear()
    reset_signer()


@pytest.fixture
def settings() -> Settings:
    """Settings with fast confirmation polling."""
    return Settings(
        _env_file=None,
        signing_key=TEST_PRIVATE_KEY,
        explorer_base_url=EXPLORER,
        confirmation_timeout=5.0,
        confirmation_poll_interval=0.01,
    )


@pytest.fixture
def signer() -> LocalSigner:
    return LocalSigner(TEST_PRIVATE_KEY)


@pytest.fixture
def chain() -> FakeChainClient:
    return FakeChainClient()


@pytest.fixture
def connector(chain) -> FakeConnector:
    return FakeConnector(chain)


@pytest.fixture
def service(settings, signer, connector) -> TransferService:
    return TransferService(settings=settings, signer=signer, connector=connector)
