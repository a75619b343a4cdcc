"""Transfer orchestration.

Runs one native-asset transfer through a strict forward pipeline. Every
stage either advances or ends the transfer with exactly one error kind;
nothing is retried and no stage is re-entered.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

from web3 import Web3

from evmsender.amounts import format_units, normalize
from evmsender.config import Settings, get_settings
from evmsender.errors import (
    GetBalanceError,
    InvalidPrivateKey,
    InvalidReceiverAddress,
    NetworkError,
    TransactionError,
    TransferError,
)
from evmsender.rpc.base import ChainClient, RPCError, TransferTransaction
from evmsender.rpc.factory import Connector, connect_client
from evmsender.signing.base import SignerBackend, SigningError
from evmsender.signing.factory import get_signer
from evmsender.transfer.base import TransferOutcome, TransferRequest, TransferStage

logger = logging.getLogger(__name__)


def parse_receiver(address: str) -> str:
    """Validate a receiver address and return its checksummed form.

    Accepts 40 hex digits with or without the 0x prefix. Mixed-case input
    must carry a valid EIP-55 checksum.

    Raises:
        InvalidReceiverAddress: If the address is malformed
    """
    if not isinstance(address, str) or not address.strip():
        raise InvalidReceiverAddress("address is empty")

    candidate = address.strip()
    if not Web3.is_address(candidate):
        raise InvalidReceiverAddress(
            f"'{address}' is not a 20-byte hex address or has an invalid checksum"
        )

    return Web3.to_checksum_address(candidate)


@dataclass
class _TransferState:
    """Progress of a single transfer, used to annotate the outcome."""
    stage: TransferStage = TransferStage.START
    fields: dict = field(default_factory=dict)

    def advance(self, stage: TransferStage, **fields) -> None:
        self.stage = stage
        self.fields.update(fields)
        logger.debug(f"Transfer stage -> {stage.value}")


class TransferService:
    """Executes native-asset transfers signed by the process signing key."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        signer: Optional[SignerBackend] = None,
        connector: Optional[Connector] = None,
    ):
        """Initialize service.

        Args:
            settings: Settings (defaults to cached settings)
            signer: Signing backend (defaults to the process singleton)
            connector: Opens a ChainClient per request (defaults to web3.py)
        """
        self.settings = settings or get_settings()
        self.signer = signer or get_signer()
        self.connector = connector or connect_client

    async def execute_transfer(self, request: TransferRequest) -> TransferOutcome:
        """Run the transfer pipeline.

        Pipeline errors are returned as failed outcomes, never raised.
        """
        state = _TransferState()
        try:
            return await self._run(request, state)
        except TransferError as e:
            logger.warning(
                f"Transfer of {request.amount} to {request.receiver_address} on "
                f"{request.network} failed after stage {state.stage.value}: {e}"
            )
            return TransferOutcome.failure(e, stage=state.stage, **state.fields)

    async def _run(self, request: TransferRequest, state: _TransferState) -> TransferOutcome:
        try:
            identity = self.signer.resolve()
        except SigningError as e:
            raise InvalidPrivateKey(str(e)) from e
        state.advance(TransferStage.SIGNER_RESOLVED, sender=identity.address)

        try:
            client = await self.connector(request.network, self.settings)
        except RPCError as e:
            raise NetworkError(str(e)) from e
        state.advance(TransferStage.CONNECTED, chain_id=client.chain_id)

        try:
            return await self._send(request, state, client, identity.address)
        finally:
            await self._close(client)

    async def _send(
        self,
        request: TransferRequest,
        state: _TransferState,
        client: ChainClient,
        sender: str,
    ) -> TransferOutcome:
        precision = self.settings.amount_precision

        try:
            balance = await client.get_balance(sender)
        except RPCError as e:
            raise GetBalanceError(str(e)) from e
        logger.debug(
            f"Balance of {sender} on chain {client.chain_id}: {format_units(balance, precision)}"
        )
        state.advance(TransferStage.BALANCE_CHECKED)

        value = normalize(
            request.amount,
            precision,
            strict=self.settings.reject_excess_precision,
        )
        state.advance(TransferStage.AMOUNT_NORMALIZED, value=value)

        receiver = parse_receiver(request.receiver_address)
        state.advance(TransferStage.RECEIVER_VALIDATED)

        tx = TransferTransaction(sender=sender, to=receiver, value=value)
        try:
            handle = await client.submit_transaction(tx, self.signer)
        except RPCError as e:
            raise TransactionError(str(e)) from e
        state.advance(TransferStage.SUBMITTED)
        logger.info(
            f"Submitted {format_units(value, precision)} to {receiver} "
            f"on chain {client.chain_id}: {handle.tx_hash}"
        )

        receipt = await self._await_receipt(client, handle)
        if not receipt.succeeded:
            raise TransactionError(
                f"transaction {handle.tx_hash} reverted in block {receipt.block_number}"
            )
        state.advance(TransferStage.CONFIRMED, block_number=receipt.block_number)
        logger.info(f"Confirmed {handle.tx_hash} in block {receipt.block_number}")

        return TransferOutcome(
            success=True,
            tx_id=handle.tx_hash,
            explorer_url=self.settings.explorer_url(handle.tx_hash),
            stage=state.stage,
            **state.fields,
        )

    async def _await_receipt(self, client: ChainClient, handle):
        timeout = self.settings.confirmation_timeout
        # Hard deadline in case a client ignores its own timeout
        deadline = timeout + self.settings.confirmation_poll_interval

        try:
            return await asyncio.wait_for(
                client.await_confirmation(handle, timeout=timeout),
                timeout=deadline,
            )
        except RPCError as e:
            raise TransactionError(str(e)) from e
        except asyncio.TimeoutError as e:
            raise TransactionError(
                f"transaction {handle.tx_hash} not confirmed after {timeout}s"
            ) from e

    @staticmethod
    async def _close(client: ChainClient) -> None:
        try:
            await client.close()
        except Exception as e:
            logger.warning(f"Failed to close RPC client for {client.endpoint}: {e}")
