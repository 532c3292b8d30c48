"""
Verification Gate
=================

Decides whether a minimum score credential may be minted.

The gate is fail-open on missing infrastructure and fail-closed only on a
completed verification:

- artifacts missing, no verifier, or a verifier fault -> simulated
  verification, ``Allowed(performed=False)``
- verifier returned False -> ``Denied(performed=True)``
- proof threshold differs from the requested one ->
  ``Denied(performed=True, reason="Threshold mismatch")``
- otherwise -> ``Allowed(performed=True)``

The on-chain mint remains the real authority; the gate produces a best
effort attestation and a progress narrative for the user.

Usage:
    gate = VerificationGate()
    outcome = await gate.evaluate(750, probe, verifier, on_progress=print)
    if outcome.success:
        ...

Version: 0.1.0
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from blockcreds.config import ZKSettings
from blockcreds.logging import get_logger
from blockcreds.zk.artifacts import ArtifactProbe, collect_bundle
from blockcreds.zk.errors import ArtifactUnavailable, VerifierFault, VerifierUnavailable
from blockcreds.zk.models import (
    THRESHOLD_MISMATCH,
    GateState,
    ProofBundle,
    VerificationOutcome,
)
from blockcreds.zk.verifier import VerifierCapability, VerifierSource, obtain_verifier


logger = get_logger(__name__)

ProgressCallback = Callable[[str], None]

MSG_PREPARING = "Preparing zero-knowledge proof..."
MSG_LOADING_VERIFIER = "Loading ZKP verifier..."
MSG_VERIFYING = "Running zero-knowledge verification..."
MSG_FINALIZING = "Finalizing verification..."
MSG_COMPLETE = "Verification complete."

DEFAULT_PAUSES = (1.2, 1.2, 0.8)


@dataclass(frozen=True)
class FallbackPacing:
    """Pauses of the simulated verification narrative."""

    pauses: tuple[float, float, float] = DEFAULT_PAUSES
    sleep: Callable[[float], Awaitable[Any]] = field(default=asyncio.sleep, compare=False)

    @classmethod
    def instant(cls) -> "FallbackPacing":
        return cls(pauses=(0.0, 0.0, 0.0))

    @classmethod
    def from_settings(cls, zk: ZKSettings) -> "FallbackPacing":
        return cls(pauses=tuple(zk.fallback_pauses))


class _Narrator:
    """Collects progress messages and forwards them to an optional callback."""

    def __init__(self, callback: ProgressCallback | None) -> None:
        self.callback = callback
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)
        if self.callback is None:
            return
        try:
            self.callback(message)
        except Exception as e:
            logger.warning("progress_callback_failed", error=str(e))


def fallback_messages(requested_threshold: int | str) -> Sequence[str]:
    """Narrative shown while verification is simulated."""
    return (
        f"Verifying you meet the minimum credit score ({requested_threshold})...",
        MSG_FINALIZING,
        MSG_COMPLETE,
    )


class VerificationGate:
    """
    Verification-gated authorization for credential minting.

    The gate holds no per-request state; concurrent ``evaluate`` calls are
    independent.
    """

    def __init__(self, pacing: FallbackPacing | None = None) -> None:
        self.pacing = pacing or FallbackPacing()

    async def evaluate(
        self,
        requested_threshold: int,
        environment: ArtifactProbe,
        verifier: VerifierSource,
        on_progress: ProgressCallback | None = None,
    ) -> VerificationOutcome:
        """
        Run the gate once for a mint request.

        Args:
            requested_threshold: Minimum score the requester claims to meet
            environment: Source of the proof bundle
            verifier: Verifier capability, a loader for one, or None
            on_progress: Receives human readable status messages

        Returns:
            VerificationOutcome; never raises for infrastructure problems
        """
        notify = _Narrator(on_progress)
        log = logger.bind(threshold=requested_threshold)
        notify(MSG_PREPARING)

        try:
            log.debug("gate_state", state=GateState.PROBE.value)
            bundle = await collect_bundle(environment)

            log.debug("gate_state", state=GateState.VERIFIER_AVAILABLE.value)
            notify(MSG_LOADING_VERIFIER)
            capability = obtain_verifier(verifier)

            log.debug("gate_state", state=GateState.REAL_VERIFY.value)
            notify(MSG_VERIFYING)
            verified = await self._run_verifier(capability, bundle)

        except (ArtifactUnavailable, VerifierUnavailable, VerifierFault) as e:
            log.info(
                "zk_verification_skipped",
                cause=type(e).__name__,
                detail=str(e),
            )
            return await self._simulate(requested_threshold, notify)

        log.debug("gate_state", state=GateState.THRESHOLD_CHECK.value)
        outcome = self._check_threshold(requested_threshold, bundle, verified, notify.messages)

        log.info(
            "zk_verification_completed",
            state=outcome.state.value,
            success=outcome.success,
            reason=outcome.reason,
        )
        return outcome

    async def _run_verifier(self, capability: VerifierCapability, bundle: ProofBundle) -> bool:
        """Invoke the verifier; anything but a definite boolean is a fault."""
        try:
            result = capability.verify(
                bundle.verification_key,
                bundle.public_signals,
                bundle.proof,
            )
            if inspect.isawaitable(result):
                result = await result
        except VerifierFault:
            raise
        except Exception as e:
            raise VerifierFault(f"verifier raised {e!r}") from e

        if not isinstance(result, bool):
            raise VerifierFault(f"verifier returned {type(result).__name__}, expected bool")
        return result

    def _check_threshold(
        self,
        requested_threshold: int,
        bundle: ProofBundle,
        verified: bool,
        progress: list[str],
    ) -> VerificationOutcome:
        requested = str(requested_threshold)
        declared = str(bundle.declared_threshold)

        if not verified:
            return VerificationOutcome(
                performed=True,
                success=False,
                requested_threshold=requested,
                declared_threshold=declared,
                progress=progress,
            )

        if declared != requested:
            return VerificationOutcome(
                performed=True,
                success=False,
                reason=THRESHOLD_MISMATCH,
                requested_threshold=requested,
                declared_threshold=declared,
                progress=progress,
            )

        return VerificationOutcome(
            performed=True,
            success=True,
            requested_threshold=requested,
            declared_threshold=declared,
            progress=progress,
        )

    async def _simulate(self, requested_threshold: int, notify: _Narrator) -> VerificationOutcome:
        """FallbackSimulated: paced narrative that always allows."""
        logger.debug("gate_state", state=GateState.FALLBACK_SIMULATED.value)

        for message, pause in zip(fallback_messages(requested_threshold), self.pacing.pauses):
            notify(message)
            await self.pacing.sleep(pause)

        return VerificationOutcome.simulated(str(requested_threshold), notify.messages)


async def evaluate(
    requested_threshold: int,
    environment: ArtifactProbe,
    verifier: VerifierSource,
    on_progress: ProgressCallback | None = None,
    pacing: FallbackPacing | None = None,
) -> VerificationOutcome:
    """Evaluate the gate once with a throwaway ``VerificationGate``."""
    gate = VerificationGate(pacing)
    return await gate.evaluate(requested_threshold, environment, verifier, on_progress)
