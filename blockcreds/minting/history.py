"""
Mint History
============

Local record of credentials minted from this installation, kept apart from
the contract so the UI can show recent mints even when the chain is slow
to index them.

Version: 0.1.0
"""

import json
from abc import ABC, abstractmethod
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from blockcreds.logging import get_logger

logger = get_logger(__name__)


class HistoryStoreError(Exception):
    """The persisted history cannot be read."""


class MintRecord(BaseModel):
    """One successful mint, keyed by a locally assigned sequence id."""

    token_id: str
    name: str
    token_amount: int = Field(..., gt=0)
    owner: str
    issuer: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


_records_adapter = TypeAdapter(list[MintRecord])


class MintHistoryStore(ABC):
    """Key-value style store holding the ordered mint history."""

    @abstractmethod
    def load(self) -> list[MintRecord]:
        ...

    @abstractmethod
    def save(self, records: list[MintRecord]) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    def append(self, record: MintRecord) -> list[MintRecord]:
        """Add a record and persist the whole list."""
        records = [*self.load(), record]
        self.save(records)
        return records


class InMemoryHistoryStore(MintHistoryStore):
    """History held in process memory."""

    def __init__(self, records: list[MintRecord] | None = None) -> None:
        self._records = list(records or [])

    def load(self) -> list[MintRecord]:
        return list(self._records)

    def save(self, records: list[MintRecord]) -> None:
        self._records = list(records)

    def clear(self) -> None:
        self._records = []


class JsonFileHistoryStore(MintHistoryStore):
    """History persisted as a JSON array on disk."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> list[MintRecord]:
        """
        Load the history.

        Returns:
            Records in mint order; empty if nothing has been saved yet

        Raises:
            HistoryStoreError: If the file exists but is not valid history
        """
        if not self.path.exists():
            return []
        try:
            return _records_adapter.validate_json(self.path.read_bytes())
        except ValidationError as e:
            raise HistoryStoreError(f"Corrupt mint history at {self.path}") from e

    def save(self, records: list[MintRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [r.model_dump(mode="json") for r in records]
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.debug("mint_history_saved", path=str(self.path), count=len(records))

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
        logger.info("mint_history_cleared", path=str(self.path))
