"""Local signing backend.

Holds one private key in memory for the lifetime of the process. The key is
parsed exactly once; a malformed key is remembered and reported on every
``resolve()`` instead of failing process startup.
"""

import logging
from typing import Optional

from eth_account import Account

from evmsender.signing.base import (
    InvalidKeyError,
    KeyNotFoundError,
    SignedTransaction,
    SignerBackend,
    SignerType,
    SigningError,
    SigningIdentity,
)

logger = logging.getLogger(__name__)


class LocalSigner(SignerBackend):
    """Signing backend using a single in-memory private key."""

    def __init__(self, private_key: Optional[str]):
        super().__init__(SignerType.LOCAL)
        self._account = None
        self._load_error: Optional[SigningError] = None
        self._load_key(private_key)

    def _load_key(self, private_key: Optional[str]) -> None:
        if not private_key or not private_key.strip():
            self._load_error = KeyNotFoundError("signing key is not configured")
            logger.warning("No signing key configured - transfers will fail")
            return

        try:
            self._account = Account.from_key(private_key.strip())
        except Exception as e:
            # Never include the key itself in the message
            detail = str(e).replace(private_key.strip(), "***") or e.__class__.__name__
            self._load_error = InvalidKeyError(detail)
            logger.error(f"Configured signing key is malformed: {e.__class__.__name__}")
            return

        logger.info(f"Loaded signing key for {self._account.address}")

    def _unavailable(self) -> SigningError:
        return self._load_error.__class__(*self._load_error.args)

    def resolve(self) -> SigningIdentity:
        """Return the signer's address, or raise the load error."""
        if self._account is None:
            raise self._unavailable()
        return SigningIdentity(address=self._account.address, signer_type=self.signer_type)

    def sign_transaction(self, tx: dict) -> SignedTransaction:
        """Sign a transaction with the local key."""
        if self._account is None:
            raise self._unavailable()

        try:
            signed = self._account.sign_transaction(tx)
        except Exception as e:
            raise SigningError(f"Failed to sign transaction: {e}") from e

        # eth-account >= 0.13 uses raw_transaction, older versions rawTransaction
        raw_tx = getattr(signed, "raw_transaction", None) or signed.rawTransaction
        return SignedTransaction(
            raw_transaction=bytes(raw_tx),
            tx_hash="0x" + bytes(signed.hash).hex(),
        )
