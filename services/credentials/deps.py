"""
Service Dependencies
====================

FastAPI dependency providers. Tests replace them through
``app.dependency_overrides``.
"""

from functools import lru_cache

from blockcreds.config import settings
from blockcreds.minting import (
    CredentialMinter,
    JsonFileHistoryStore,
    MintHistoryStore,
    get_mint_executor,
)
from blockcreds.zk import (
    ArtifactProbe,
    FallbackPacing,
    VerificationGate,
    load_verifier,
    probe_from_settings,
)
from blockcreds.zk.verifier import VerifierSource


@lru_cache
def get_gate() -> VerificationGate:
    return VerificationGate(FallbackPacing.from_settings(settings.zk))


@lru_cache
def get_probe() -> ArtifactProbe:
    return probe_from_settings(settings.zk)


def get_verifier_source() -> VerifierSource:
    """Loader resolved lazily by the gate, after artifacts are found."""
    return lambda: load_verifier(settings.zk)


@lru_cache
def get_history_store() -> MintHistoryStore:
    return JsonFileHistoryStore(settings.mint.history_path)


def get_minter() -> CredentialMinter:
    return CredentialMinter(
        gate=get_gate(),
        probe=get_probe(),
        verifier=get_verifier_source(),
        executor=get_mint_executor(),
        history=get_history_store(),
        default_issuer=settings.mint.default_issuer,
    )
