"""Signer factory.

The signer is a process-wide singleton created from settings on first use
(normally during application startup) and read-only afterwards.
"""

import logging
from typing import Optional

from evmsender.config import get_settings
from evmsender.signing.base import SignerBackend

logger = logging.getLogger(__name__)

_signer_instance: Optional[SignerBackend] = None


def get_signer() -> SignerBackend:
    """Get the configured signer instance.

    Returns:
        SignerBackend singleton
    """
    global _signer_instance

    if _signer_instance is not None:
        return _signer_instance

    from evmsender.signing.local import LocalSigner

    logger.info("Initializing local signer")
    _signer_instance = LocalSigner(get_settings().signing_key)
    return _signer_instance


def reset_signer():
    """Reset the signer instance (for testing)."""
    global _signer_instance
    _signer_instance = None


def get_signer_info() -> dict:
    """Get information about the current signer configuration.

    Returns:
        Dict with signer type, health status and address when available
    """
    signer = get_signer()
    healthy = signer.health_check()

    return {
        "type": signer.signer_type.value,
        "healthy": healthy,
        "address": signer.resolve().address if healthy else None,
    }
