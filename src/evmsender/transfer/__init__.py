"""Native-asset transfer pipeline.

Validates a transfer request, signs and broadcasts the transaction and
waits for its confirmation.
"""

from evmsender.transfer.base import TransferOutcome, TransferRequest, TransferStage
from evmsender.transfer.service import TransferService, parse_receiver

__all__ = [
    "TransferOutcome",
    "TransferRequest",
    "TransferService",
    "TransferStage",
    "parse_receiver",
]
