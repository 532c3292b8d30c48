"""
Mint Executor Interface
=======================

Abstract base class and models for the credential contract, plus the
global executor accessor.

Version: 0.1.0
"""

from abc import ABC, abstractmethod
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from blockcreds.config import BlockchainMode, settings
from blockcreds.logging import get_logger

logger = get_logger(__name__)


class MintReceipt(BaseModel):
    """Result of a mint transaction."""

    token_id: str
    tx_hash: str
    block_number: int
    minted_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class OnChainCredential(BaseModel):
    """Credential details as stored by the contract."""

    token_id: str
    name: str
    token_amount: int
    owner: str


class MintExecutor(ABC):
    """
    Abstract base class for the privileged mint action.

    Implements the Strategy pattern for different blockchain modes.
    """

    @property
    @abstractmethod
    def mode(self) -> BlockchainMode:
        """Get the blockchain mode."""
        ...

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the blockchain network."""
        ...

    @abstractmethod
    async def disconnect(self) -> None:
        """Disconnect from the blockchain network."""
        ...

    @abstractmethod
    async def health_check(self) -> dict[str, Any]:
        """Check blockchain health."""
        ...

    @abstractmethod
    async def mint_credential(self, name: str, amount: int, owner: str) -> MintReceipt:
        """
        Mint credential tokens to ``owner``.

        Args:
            name: Business or institution name
            amount: Number of tokens
            owner: Wallet address receiving the tokens

        Returns:
            MintReceipt with transaction details
        """
        ...

    @abstractmethod
    async def get_user_credentials(self, owner: str) -> list[OnChainCredential]:
        """List credentials held by ``owner``."""
        ...

    @abstractmethod
    async def get_total_minted(self) -> int | None:
        """Total credentials minted, or None if the contract cannot tell."""
        ...


# Global executor instance
_executor: MintExecutor | None = None


def get_mint_executor() -> MintExecutor:
    """
    Get the configured mint executor instance.

    Returns:
        MintExecutor instance based on settings
    """
    global _executor

    if _executor is None:
        mode = settings.blockchain.mode

        if mode == BlockchainMode.MOCK:
            from blockcreds.minting.mock import MockMintExecutor

            _executor = MockMintExecutor()
        else:
            raise ValueError(f"Unknown blockchain mode: {mode}")

        logger.info("mint_executor_initialized", mode=mode.value)

    return _executor


def set_mint_executor(executor: MintExecutor) -> None:
    """
    Set a custom mint executor.

    Args:
        executor: MintExecutor instance
    """
    global _executor
    _executor = executor
    logger.info("mint_executor_set", mode=executor.mode.value)


def reset_mint_executor() -> None:
    """Reset the executor to be re-initialized."""
    global _executor
    _executor = None
