"""
ZK Error Types
==============

Exceptions raised by commitment generation and the verification gate.

Artifact and verifier problems are recovered inside the gate and never
reach its caller. Denials are returned as outcomes and only raised on
request via ``VerificationOutcome.raise_for_denial()``.
"""


class ZKError(Exception):
    """Base class for zero-knowledge errors."""


class EncodingError(ZKError, ValueError):
    """A value cannot be represented as a field element."""


class ArtifactUnavailable(ZKError):
    """A proof artifact could not be retrieved or is malformed."""

    def __init__(self, message: str, artifacts: list[str] | None = None) -> None:
        super().__init__(message)
        self.artifacts = artifacts or []


class VerifierUnavailable(ZKError):
    """No usable verifier capability could be obtained."""


class VerifierFault(ZKError):
    """The verifier raised or returned something other than a boolean."""


class VerificationDenied(ZKError):
    """A completed verification denied the requested action."""

    reason: str | None = None


class ThresholdMismatch(VerificationDenied):
    """The proof's public threshold differs from the requested one."""

    reason = "Threshold mismatch"

    def __init__(self, requested: str, declared: str) -> None:
        super().__init__(
            f"Proof declares threshold {declared}, request asked for {requested}"
        )
        self.requested = requested
        self.declared = declared


class VerificationFailed(VerificationDenied):
    """The verifier returned a definite negative result."""

    def __init__(self, message: str = "ZKP verification failed") -> None:
        super().__init__(message)
