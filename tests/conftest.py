"""
Test Configuration
==================

Pytest fixtures for BlockCreds tests.
"""

import os
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment
os.environ["ENVIRONMENT"] = "testing"
os.environ["BLOCKCHAIN_MODE"] = "mock"
os.environ["ZK_ARTIFACT_SOURCE"] = "none"
os.environ["ZK_VERIFIER"] = "none"
os.environ["ZK_FALLBACK_PAUSES"] = "[0, 0, 0]"

from blockcreds.minting import CredentialMinter, InMemoryHistoryStore, MockMintExecutor
from blockcreds.zk import FallbackPacing, NullArtifactProbe, VerificationGate
from tests.fakes import StubVerifier


@pytest.fixture(scope="session")
def anyio_backend() -> str:
    """Use asyncio backend for async tests."""
    return "asyncio"


class RecordingSleep:
    """Stands in for ``asyncio.sleep`` and remembers requested pauses."""

    def __init__(self) -> None:
        self.pauses: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.pauses.append(seconds)


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def gate(recording_sleep: RecordingSleep) -> VerificationGate:
    """Gate with default pauses that never actually sleeps."""
    return VerificationGate(FallbackPacing(sleep=recording_sleep))


@pytest.fixture
def stub_verifier() -> StubVerifier:
    return StubVerifier(result=True)


@pytest.fixture
def history_store() -> InMemoryHistoryStore:
    return InMemoryHistoryStore()


@pytest_asyncio.fixture
async def mock_executor() -> AsyncGenerator[MockMintExecutor, None]:
    executor = MockMintExecutor()
    await executor.connect()
    yield executor
    await executor.disconnect()


@pytest.fixture
def service_state(
    stub_verifier: StubVerifier,
    history_store: InMemoryHistoryStore,
    mock_executor: MockMintExecutor,
) -> dict[str, Any]:
    """Mutable collaborators shared by the credentials service overrides."""
    return {
        "gate": VerificationGate(FallbackPacing.instant()),
        "probe": NullArtifactProbe(),
        "verifier": stub_verifier,
        "history": history_store,
        "executor": mock_executor,
    }


@pytest_asyncio.fixture
async def credentials_client(service_state: dict[str, Any]) -> AsyncGenerator[AsyncClient, None]:
    """Create test client for the Credentials Service."""
    from services.credentials import deps
    from services.credentials.main import app

    def minter() -> CredentialMinter:
        return CredentialMinter(
            gate=service_state["gate"],
            probe=service_state["probe"],
            verifier=service_state["verifier"],
            executor=service_state["executor"],
            history=service_state["history"],
        )

    app.dependency_overrides[deps.get_gate] = lambda: service_state["gate"]
    app.dependency_overrides[deps.get_probe] = lambda: service_state["probe"]
    app.dependency_overrides[deps.get_verifier_source] = lambda: service_state["verifier"]
    app.dependency_overrides[deps.get_history_store] = lambda: service_state["history"]
    app.dependency_overrides[deps.get_minter] = minter

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()
