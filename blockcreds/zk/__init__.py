"""
ZK Credential Module
====================

Commitment generation and verification-gated authorization for minimum
score credentials.

Usage:
    from blockcreds.zk import VerificationGate, generate_commitment

    record = generate_commitment(score=800, salt=12345, min_score=750)

    gate = VerificationGate()
    outcome = await gate.evaluate(750, probe, verifier)

Version: 0.1.0
"""

from blockcreds.zk.artifacts import (
    ArtifactProbe,
    DirectoryArtifactProbe,
    HttpArtifactProbe,
    NullArtifactProbe,
    StaticArtifactProbe,
    collect_bundle,
    probe_from_settings,
)
from blockcreds.zk.commitment import (
    compute_commitment,
    generate_commitment,
    generate_salt,
    make_input,
    write_commitment,
)
from blockcreds.zk.errors import (
    ArtifactUnavailable,
    EncodingError,
    ThresholdMismatch,
    VerificationDenied,
    VerificationFailed,
    VerifierFault,
    VerifierUnavailable,
    ZKError,
)
from blockcreds.zk.gate import FallbackPacing, VerificationGate, evaluate
from blockcreds.zk.models import (
    ArtifactName,
    CommitmentRecord,
    Decision,
    GateState,
    ProbeResult,
    ProbeSuccess,
    ProbeUnavailable,
    ProofBundle,
    VerificationOutcome,
)
from blockcreds.zk.poseidon import FIELD_ORDER, poseidon
from blockcreds.zk.verifier import (
    SnarkjsVerifier,
    VerifierCapability,
    load_verifier,
    obtain_verifier,
)


__all__ = [
    # Commitments
    "generate_commitment",
    "compute_commitment",
    "generate_salt",
    "make_input",
    "write_commitment",
    "poseidon",
    "FIELD_ORDER",
    # Gate
    "VerificationGate",
    "FallbackPacing",
    "evaluate",
    # Artifacts
    "ArtifactProbe",
    "HttpArtifactProbe",
    "DirectoryArtifactProbe",
    "StaticArtifactProbe",
    "NullArtifactProbe",
    "collect_bundle",
    "probe_from_settings",
    # Verifier
    "VerifierCapability",
    "SnarkjsVerifier",
    "load_verifier",
    "obtain_verifier",
    # Models
    "ArtifactName",
    "CommitmentRecord",
    "Decision",
    "GateState",
    "ProbeResult",
    "ProbeSuccess",
    "ProbeUnavailable",
    "ProofBundle",
    "VerificationOutcome",
    # Errors
    "ZKError",
    "EncodingError",
    "ArtifactUnavailable",
    "VerifierUnavailable",
    "VerifierFault",
    "VerificationDenied",
    "ThresholdMismatch",
    "VerificationFailed",
]
