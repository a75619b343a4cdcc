"""Native-asset transfer service for EVM-compatible chains."""

__version__ = "0.1.0"
