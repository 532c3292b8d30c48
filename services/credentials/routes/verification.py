"""
Gate Verification Routes
========================

API endpoint that runs the verification gate without minting.
"""

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from blockcreds.logging import get_logger
from blockcreds.zk import (
    ArtifactName,
    ArtifactProbe,
    Decision,
    StaticArtifactProbe,
    VerificationGate,
)
from blockcreds.zk.verifier import VerifierSource
from services.credentials.deps import get_gate, get_probe, get_verifier_source


logger = get_logger(__name__)
router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class ProofBundlePayload(BaseModel):
    """Proof artifacts supplied inline; missing parts count as unavailable."""

    verification_key: Any = None
    proof: Any = None
    public_signals: Any = None


class EvaluateRequest(BaseModel):
    """Request to evaluate the gate for a threshold."""

    threshold: int = Field(..., ge=0, description="Requested minimum score")
    bundle: ProofBundlePayload | None = Field(
        None,
        description="Inline proof bundle; the configured artifact source is used when omitted",
    )


class EvaluateResponse(BaseModel):
    """Gate decision."""

    performed: bool
    success: bool
    decision: Decision
    reason: str | None = None
    progress: list[str]


# ============================================================================
# Verification Endpoints
# ============================================================================


def _inline_probe(bundle: ProofBundlePayload) -> StaticArtifactProbe:
    parts = {
        ArtifactName.VERIFICATION_KEY: bundle.verification_key,
        ArtifactName.PROOF: bundle.proof,
        ArtifactName.PUBLIC_SIGNALS: bundle.public_signals,
    }
    return StaticArtifactProbe({k: v for k, v in parts.items() if v is not None})


@router.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_gate(
    request: EvaluateRequest,
    gate: VerificationGate = Depends(get_gate),
    probe: ArtifactProbe = Depends(get_probe),
    verifier: VerifierSource = Depends(get_verifier_source),
) -> EvaluateResponse:
    """
    Decide whether an action at the requested threshold may proceed.

    Missing artifacts or verifier problems yield a simulated allow; only a
    completed negative or mismatched verification denies.
    """
    environment = _inline_probe(request.bundle) if request.bundle else probe

    outcome = await gate.evaluate(request.threshold, environment, verifier)

    return EvaluateResponse(
        performed=outcome.performed,
        success=outcome.success,
        decision=outcome.decision,
        reason=outcome.reason,
        progress=outcome.progress,
    )
