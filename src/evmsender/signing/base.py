"""Base interfaces for transaction signing.

Signing flow:
1. Signer is created once at startup from configured key material
2. Each request resolves the signer to its public identity (address)
3. The RPC client fills in nonce, gas and chain id
4. The signer signs the complete transaction; key bytes never leave it
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class SignerType(str, Enum):
    """Type of signing backend."""
    LOCAL = "local"           # Private key in memory (hot wallet)


@dataclass(frozen=True)
class SigningIdentity:
    """Public side of the signing key.

    Attributes:
        address: EIP-55 checksummed account address
        signer_type: Backend holding the key material
    """
    address: str
    signer_type: SignerType = SignerType.LOCAL


@dataclass(frozen=True)
class SignedTransaction:
    """Signed, serialized transaction ready for broadcast.

    Attributes:
        raw_transaction: RLP-encoded signed transaction bytes
        tx_hash: 0x-prefixed transaction hash
    """
    raw_transaction: bytes
    tx_hash: str


class SignerBackend(ABC):
    """Abstract base class for signing backends.

    Implementations should NEVER expose raw private keys.
    """

    def __init__(self, signer_type: SignerType):
        self.signer_type = signer_type

    @abstractmethod
    def resolve(self) -> SigningIdentity:
        """Return the identity of the configured key.

        Raises:
            SigningError: If no usable key is configured
        """

    @abstractmethod
    def sign_transaction(self, tx: dict) -> SignedTransaction:
        """Sign a fully populated transaction dict.

        Args:
            tx: Transaction fields (to, value, nonce, gas, gasPrice, chainId)

        Returns:
            SignedTransaction ready for broadcast
        """

    def health_check(self) -> bool:
        """Check if the signing backend can sign."""
        try:
            self.resolve()
        except SigningError:
            return False
        return True

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.signer_type.value})"


class SigningError(Exception):
    """Exception raised when signing fails."""
    pass


class KeyNotFoundError(SigningError):
    """Exception raised when no signing key is configured."""
    pass


class InvalidKeyError(SigningError):
    """Exception raised when the configured key material is malformed."""
    pass
