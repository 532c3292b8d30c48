"""
BlockCreds
==========

Private credit proofs and credential minting.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - zk: Poseidon commitments and the verification gate
    - minting: Credential minting, history and network helpers

Version: 0.1.0
"""

__version__ = "0.1.0"
__author__ = "BlockCreds Team"

from blockcreds.config import settings
from blockcreds.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
