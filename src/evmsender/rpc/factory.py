"""Factory for per-request chain clients."""

import logging
from typing import Awaitable, Callable, Optional

from evmsender.config import Settings, get_settings
from evmsender.rpc.base import ChainClient

logger = logging.getLogger(__name__)

# Opens a client for a request's network field
Connector = Callable[[str, Settings], Awaitable[ChainClient]]


async def connect_client(network: str, settings: Optional[Settings] = None) -> ChainClient:
    """Open a new client for a network alias or endpoint URL.

    Args:
        network: Configured alias (e.g. "fuji") or RPC URL
        settings: Settings to use (defaults to cached settings)

    Raises:
        RPCConnectionError: If the endpoint is malformed or unreachable
    """
    from evmsender.rpc.web3_client import Web3ChainClient

    settings = settings or get_settings()
    endpoint = settings.get_rpc_url(network)
    if endpoint != network.strip():
        logger.debug(f"Resolved network alias '{network}' to {endpoint}")

    return await Web3ChainClient.connect(
        endpoint,
        request_timeout=settings.rpc_request_timeout,
        poll_interval=settings.confirmation_poll_interval,
    )
