"""Transfer error taxonomy.

One exception per pipeline stage that can fail. Each carries the
collaborator's diagnostic text in ``detail`` and renders a fixed,
human-readable prefix in ``str(error)``.
"""


class TransferError(Exception):
    """Base class for transfer pipeline failures."""

    prefix = "Transfer failed"
    # Failures caused by the caller's input rather than infrastructure
    client_error = False

    def __init__(self, detail: str = ""):
        self.detail = str(detail)
        super().__init__(f"{self.prefix}: {self.detail}")

    @property
    def kind(self) -> str:
        """Error kind name as reported in outcomes and logs."""
        return self.__class__.__name__


class NetworkError(TransferError):
    """RPC endpoint is malformed or unreachable."""

    prefix = "Network connection error"


class InvalidPrivateKey(TransferError):
    """Signing key is missing or malformed."""

    prefix = "Invalid private key"


class GetBalanceError(TransferError):
    """Balance query for the sending account failed."""

    prefix = "Failed to get asset balance"


class InvalidAmountFormat(TransferError):
    """Amount is not a representable non-negative decimal."""

    prefix = "Invalid amount format"
    client_error = True


class InvalidReceiverAddress(TransferError):
    """Receiver is not a valid account address."""

    prefix = "Invalid receiver address"
    client_error = True


class TransactionError(TransferError):
    """Submission was rejected or confirmation failed."""

    prefix = "Transaction failed"


ERROR_KINDS = (
    NetworkError,
    InvalidPrivateKey,
    GetBalanceError,
    InvalidAmountFormat,
    InvalidReceiverAddress,
    TransactionError,
)
