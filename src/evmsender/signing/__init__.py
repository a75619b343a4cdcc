"""Transaction signing services.

- LocalSigner: single in-memory private key (hot wallet)
"""

from evmsender.signing.base import (
    InvalidKeyError,
    KeyNotFoundError,
    SignedTransaction,
    SignerBackend,
    SigningError,
    SigningIdentity,
)
from evmsender.signing.factory import get_signer, reset_signer
from evmsender.signing.local import LocalSigner

__all__ = [
    "InvalidKeyError",
    "KeyNotFoundError",
    "SignedTransaction",
    "SignerBackend",
    "SigningError",
    "SigningIdentity",
    "LocalSigner",
    "get_signer",
    "reset_signer",
]
