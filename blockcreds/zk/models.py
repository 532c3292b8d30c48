"""
ZK-SNARK Data Models
====================

Pydantic models shared by the commitment generator and the verification
gate.

Version: 0.1.0
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from blockcreds.zk.errors import ThresholdMismatch, VerificationFailed


THRESHOLD_MISMATCH = "Threshold mismatch"


class ArtifactName(str, Enum):
    """Proof bundle parts and their conventional file names."""

    VERIFICATION_KEY = "verification_key"
    PROOF = "proof"
    PUBLIC_SIGNALS = "public"

    @property
    def filename(self) -> str:
        return f"{self.value}.json"


class CommitmentRecord(BaseModel):
    """
    Prover input produced by the commitment generator.

    ``score`` and ``salt`` are the private witness; ``min_score`` becomes
    the circuit's public threshold and ``commitment`` binds the witness.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    min_score: int = Field(..., ge=0, alias="minScore")
    commitment: str = Field(..., pattern=r"^\d+$")
    score: int = Field(..., ge=0)
    salt: int = Field(..., ge=0)

    def to_input(self) -> dict[str, Any]:
        """Render the exact JSON object consumed by the proving pipeline."""
        return {
            "minScore": self.min_score,
            "commitment": self.commitment,
            "score": self.score,
            "salt": self.salt,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_input(), indent=2)


def _stringify_signals(v: Any) -> Any:
    if isinstance(v, list):
        return [str(s) if isinstance(s, int | str) and not isinstance(s, bool) else s for s in v]
    return v


class ProofBundle(BaseModel):
    """
    Verification key, proof and public signals, all retrieved together.

    The proof and key stay opaque dicts; only the verifier interprets them.
    """

    verification_key: dict[str, Any]
    proof: dict[str, Any]
    public_signals: list[str] = Field(..., min_length=1)

    @field_validator("public_signals", mode="before")
    @classmethod
    def coerce_numbers(cls, v: Any) -> Any:
        return _stringify_signals(v)

    @property
    def declared_threshold(self) -> str:
        return self.public_signals[0]


@dataclass(frozen=True)
class ProbeSuccess:
    """An artifact lookup that returned JSON data."""

    name: ArtifactName
    data: Any

    ok = True


@dataclass(frozen=True)
class ProbeUnavailable:
    """An artifact lookup that failed, for whatever reason."""

    name: ArtifactName
    reason: str

    ok = False


ProbeResult = ProbeSuccess | ProbeUnavailable


class GateState(str, Enum):
    """States of the verification gate."""

    PROBE = "probe"
    VERIFIER_AVAILABLE = "verifier_available"
    REAL_VERIFY = "real_verify"
    THRESHOLD_CHECK = "threshold_check"
    FALLBACK_SIMULATED = "fallback_simulated"
    ALLOWED = "allowed"
    DENIED = "denied"


class Decision(str, Enum):
    """What the requester may do."""

    ALLOW = "allow"
    DENY = "deny"
    ALLOW_SIMULATED = "allow_simulated"


class VerificationOutcome(BaseModel):
    """Decision artifact of one gate evaluation."""

    performed: bool
    success: bool
    reason: str | None = None
    requested_threshold: str | None = None
    declared_threshold: str | None = None
    progress: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def unperformed_never_denies(self) -> "VerificationOutcome":
        if not self.performed and not self.success:
            raise ValueError("An outcome without verification must allow the action")
        return self

    @classmethod
    def simulated(cls, requested_threshold: str, progress: list[str]) -> "VerificationOutcome":
        """Allow without a verification having been performed."""
        return cls(
            performed=False,
            success=True,
            requested_threshold=requested_threshold,
            progress=progress,
        )

    @property
    def decision(self) -> Decision:
        if not self.success:
            return Decision.DENY
        return Decision.ALLOW if self.performed else Decision.ALLOW_SIMULATED

    @property
    def state(self) -> GateState:
        return GateState.ALLOWED if self.success else GateState.DENIED

    def raise_for_denial(self) -> None:
        """
        Raise if this outcome denies the action.

        Raises:
            ThresholdMismatch: Proof threshold disagrees with the request
            VerificationFailed: Verification returned false
        """
        if self.success:
            return
        if self.reason == THRESHOLD_MISMATCH:
            raise ThresholdMismatch(
                str(self.requested_threshold),
                str(self.declared_threshold),
            )
        raise VerificationFailed()
