"""
Mock Mint Executor
==================

In-memory mock of the credential contract for development and testing.

Version: 0.1.0
"""

import hashlib
import uuid
from typing import Any

from blockcreds.config import BlockchainMode
from blockcreds.logging import get_logger
from blockcreds.minting.executor import MintExecutor, MintReceipt, OnChainCredential

logger = get_logger(__name__)


class MockMintExecutor(MintExecutor):
    """
    In-memory mock credential contract.

    Data is stored in memory and lost on restart.
    """

    def __init__(self) -> None:
        """Initialize mock executor with in-memory storage."""
        self._connected = False
        self._block_number = 1000
        self._credentials: dict[str, OnChainCredential] = {}
        self._owner_tokens: dict[str, list[str]] = {}

        logger.debug("mock_mint_executor_initialized")

    @property
    def mode(self) -> BlockchainMode:
        return BlockchainMode.MOCK

    async def connect(self) -> None:
        """Simulate connection."""
        self._connected = True
        logger.info("mock_blockchain_connected")

    async def disconnect(self) -> None:
        """Simulate disconnection."""
        self._connected = False
        logger.info("mock_blockchain_disconnected")

    async def health_check(self) -> dict[str, Any]:
        """Check mock blockchain health."""
        return {
            "status": "healthy",
            "mode": self.mode.value,
            "connected": self._connected,
            "block_number": self._block_number,
            "credentials": len(self._credentials),
        }

    def _generate_tx_hash(self) -> str:
        """Generate a mock transaction hash."""
        return "0x" + hashlib.sha256(uuid.uuid4().bytes).hexdigest()

    def _next_block(self) -> int:
        """Get next block number."""
        self._block_number += 1
        return self._block_number

    async def mint_credential(self, name: str, amount: int, owner: str) -> MintReceipt:
        """Mint a credential into memory."""
        if amount <= 0:
            raise ValueError("Token amount must be positive")

        token_id = str(len(self._credentials))
        self._credentials[token_id] = OnChainCredential(
            token_id=token_id,
            name=name,
            token_amount=amount,
            owner=owner,
        )
        self._owner_tokens.setdefault(owner.lower(), []).append(token_id)

        receipt = MintReceipt(
            token_id=token_id,
            tx_hash=self._generate_tx_hash(),
            block_number=self._next_block(),
        )

        logger.info(
            "mock_credential_minted",
            token_id=token_id,
            amount=amount,
            tx_hash=receipt.tx_hash,
        )
        return receipt

    async def get_user_credentials(self, owner: str) -> list[OnChainCredential]:
        """List credentials owned by an address."""
        return [self._credentials[t] for t in self._owner_tokens.get(owner.lower(), [])]

    async def get_total_minted(self) -> int | None:
        return len(self._credentials)

    def clear_all(self) -> None:
        """Clear all mock data (for testing)."""
        self._credentials.clear()
        self._owner_tokens.clear()
        self._block_number = 1000
        logger.debug("mock_blockchain_cleared")
