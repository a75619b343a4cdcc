"""Transfer request, outcome and pipeline stages.

Transfer flow:
1. Signing key is resolved to the sender address
2. RPC client connects to the requested network
3. Sender balance is queried (liveness probe, not a funds check)
4. Amount is converted to the smallest unit
5. Receiver address is validated
6. Transaction is populated, signed and broadcast
7. Receipt is awaited within the confirmation timeout
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from evmsender.errors import TransferError


class TransferStage(str, Enum):
    """Pipeline stage reached by a transfer."""
    START = "start"
    SIGNER_RESOLVED = "signer_resolved"
    CONNECTED = "connected"
    BALANCE_CHECKED = "balance_checked"
    AMOUNT_NORMALIZED = "amount_normalized"
    RECEIVER_VALIDATED = "receiver_validated"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"


@dataclass(frozen=True)
class TransferRequest:
    """Request to send native asset to an address."""
    receiver_address: str
    network: str
    amount: str  # Decimal as string


@dataclass
class TransferOutcome:
    """Result of a transfer.

    Only ``success``, ``tx_id``, ``explorer_url`` and ``message`` are
    returned to API callers; the remaining fields are for logs and tests.
    """
    success: bool
    tx_id: Optional[str] = None
    explorer_url: Optional[str] = None
    message: str = ""
    error: Optional[str] = None          # Error kind name on failure
    stage: TransferStage = TransferStage.START
    value: Optional[int] = None          # Amount in smallest unit
    sender: Optional[str] = None
    chain_id: Optional[int] = None
    block_number: Optional[int] = None
    client_error: bool = False

    @classmethod
    def failure(cls, error: TransferError, **context) -> "TransferOutcome":
        """Build a failed outcome from a pipeline error."""
        return cls(
            success=False,
            message=str(error),
            error=error.kind,
            client_error=error.client_error,
            **context,
        )
