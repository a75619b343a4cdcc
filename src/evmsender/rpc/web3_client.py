"""web3.py-backed chain client.

Uses ``AsyncWeb3`` over HTTP so concurrent requests never block the event
loop. Transactions are signed locally and sent with
``eth_sendRawTransaction``; the node never sees the key.
"""

import logging

import httpx
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3
from web3.exceptions import TimeExhausted

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
from evmsender.signing.base import SignerBackend, SigningError

logger = logging.getLogger(__name__)

SUPPORTED_SCHEMES = ("http", "https")


def validate_endpoint(endpoint: str) -> str:
    """Check that an endpoint is an absolute HTTP(S) URL.

    Raises:
        RPCConnectionError: If the endpoint is malformed
    """
    if not endpoint or not endpoint.strip():
        raise RPCConnectionError("network endpoint is empty")

    try:
        url = httpx.URL(endpoint.strip())
    except httpx.InvalidURL as e:
        raise RPCConnectionError(f"malformed endpoint '{endpoint}': {e}") from e

    if url.scheme not in SUPPORTED_SCHEMES or not url.host:
        raise RPCConnectionError(
            f"malformed endpoint '{endpoint}': expected an http(s) URL"
        )

    return endpoint.strip()


class Web3ChainClient(ChainClient):
    """EVM chain client over JSON-RPC."""

    def __init__(
        self,
        web3: AsyncWeb3,
        endpoint: str,
        chain_id: int,
        poll_interval: float = 2.0,
    ):
        super().__init__(endpoint, chain_id)
        self.web3 = web3
        self.poll_interval = poll_interval

    @classmethod
    async def connect(
        cls,
        endpoint: str,
        request_timeout: float = 30.0,
        poll_interval: float = 2.0,
    ) -> "Web3ChainClient":
        """Connect to an endpoint and read its chain id."""
        url = validate_endpoint(endpoint)
        web3 = AsyncWeb3(AsyncHTTPProvider(url, request_kwargs={"timeout": request_timeout}))
        client = cls(web3, url, chain_id=0, poll_interval=poll_interval)

        try:
            client.chain_id = await web3.eth.chain_id
        except Exception as e:
            await client.close()
            raise RPCConnectionError(f"{url} is unreachable: {e}") from e

        logger.debug(f"Connected to {url} (chain id {client.chain_id})")
        return client

    async def get_balance(self, address: str) -> int:
        """Get balance in wei."""
        try:
            return await self.web3.eth.get_balance(address)
        except Exception as e:
            raise RPCQueryError(f"eth_getBalance failed for {address}: {e}") from e

    async def gas_price(self) -> int:
        """Get current gas price in wei."""
        try:
            return await self.web3.eth.gas_price
        except Exception as e:
            raise RPCQueryError(f"eth_gasPrice failed: {e}") from e

    async def submit_transaction(
        self, tx: TransferTransaction, signer: SignerBackend
    ) -> TransactionHandle:
        """Fill nonce, gas, gas price and chain id, then sign and broadcast."""
        params = {
            "from": tx.sender,
            "to": tx.to,
            "value": tx.value,
            "chainId": self.chain_id,
        }

        try:
            params["nonce"] = (
                tx.nonce
                if tx.nonce is not None
                else await self.web3.eth.get_transaction_count(tx.sender, "pending")
            )
            params["gas"] = (
                tx.gas if tx.gas is not None else await self.web3.eth.estimate_gas(params)
            )
            params["gasPrice"] = (
                tx.gas_price if tx.gas_price is not None else await self.gas_price()
            )
        except Exception as e:
            raise SubmissionError(f"could not prepare transaction: {e}") from e

        unsigned = {key: value for key, value in params.items() if key != "from"}
        try:
            signed = signer.sign_transaction(unsigned)
        except SigningError as e:
            raise SubmissionError(str(e)) from e

        try:
            tx_hash = await self.web3.eth.send_raw_transaction(signed.raw_transaction)
        except Exception as e:
            raise SubmissionError(f"broadcast rejected: {e}") from e

        tx_hash_hex = Web3.to_hex(tx_hash)
        logger.info(
            f"Broadcast {tx_hash_hex} (nonce {params['nonce']}, gas {params['gas']}, "
            f"gasPrice {params['gasPrice']}) to chain {self.chain_id}"
        )
        return TransactionHandle(
            tx_hash=tx_hash_hex,
            chain_id=self.chain_id,
            nonce=params["nonce"],
        )

    async def await_confirmation(
        self, handle: TransactionHandle, timeout: float
    ) -> Receipt:
        """Poll for the receipt until it appears or the deadline passes."""
        try:
            receipt = await self.web3.eth.wait_for_transaction_receipt(
                handle.tx_hash,
                timeout=timeout,
                poll_latency=self.poll_interval,
            )
        except TimeExhausted as e:
            raise ConfirmationError(
                f"transaction {handle.tx_hash} not confirmed after {timeout}s"
            ) from e
        except Exception as e:
            raise ConfirmationError(f"receipt polling failed for {handle.tx_hash}: {e}") from e

        return Receipt(
            tx_hash=handle.tx_hash,
            block_number=receipt["blockNumber"],
            status=receipt["status"],
            gas_used=receipt.get("gasUsed"),
        )

    async def close(self) -> None:
        """Close the provider's HTTP session."""
        # AsyncHTTPProvider.disconnect only exists on web3 >= 7
        disconnect = getattr(self.web3.provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()
