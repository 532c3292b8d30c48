"""
ZK-SNARK Proof Verification
===========================

Verifier capabilities used by the verification gate.

The default backend runs ``snarkjs groth16 verify`` in a subprocess, the
same toolchain the circuits are built with.

Version: 0.1.0
"""

import asyncio
import json
import shlex
import shutil
import subprocess
import tempfile
import time
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from blockcreds.config import VerifierBackend, ZKSettings
from blockcreds.logging import get_logger
from blockcreds.zk.errors import VerifierFault, VerifierUnavailable


logger = get_logger(__name__)


@runtime_checkable
class VerifierCapability(Protocol):
    """Checks a proof against a verification key and public signals."""

    def verify(
        self,
        verification_key: dict[str, Any],
        public_signals: list[str],
        proof: dict[str, Any],
    ) -> bool | Awaitable[bool]:
        ...


VerifierLoader = Callable[[], VerifierCapability]
VerifierSource = VerifierCapability | VerifierLoader | None


class SnarkjsVerifier:
    """
    Groth16 verifier backed by the snarkjs CLI.

    Usage:
        verifier = SnarkjsVerifier()
        ok = await verifier.verify(vkey, public_signals, proof)
    """

    def __init__(self, command: str | list[str] = "npx snarkjs") -> None:
        """
        Initialize the verifier.

        Args:
            command: snarkjs invocation, e.g. "npx snarkjs" or "snarkjs"
        """
        self.command = shlex.split(command) if isinstance(command, str) else list(command)

    def is_available(self) -> bool:
        """Check that the snarkjs launcher is on PATH."""
        return bool(self.command) and shutil.which(self.command[0]) is not None

    async def verify(
        self,
        verification_key: dict[str, Any],
        public_signals: list[str],
        proof: dict[str, Any],
    ) -> bool:
        """
        Verify a proof off-chain using snarkjs.

        Returns:
            True if snarkjs accepts the proof, False if it reports it invalid

        Raises:
            VerifierFault: If snarkjs fails for any other reason
        """
        with tempfile.TemporaryDirectory(prefix="blockcreds-verify-") as tmp:
            tmp_dir = Path(tmp)
            vkey_file = tmp_dir / "verification_key.json"
            public_file = tmp_dir / "public.json"
            proof_file = tmp_dir / "proof.json"

            vkey_file.write_text(json.dumps(verification_key))
            public_file.write_text(json.dumps(public_signals))
            proof_file.write_text(json.dumps(proof))

            start_time = time.time()
            try:
                result = await asyncio.to_thread(
                    subprocess.run,
                    [
                        *self.command,
                        "groth16",
                        "verify",
                        str(vkey_file),
                        str(public_file),
                        str(proof_file),
                    ],
                    capture_output=True,
                    text=True,
                )
            except OSError as e:
                raise VerifierFault(f"snarkjs could not be started: {e}") from e

            verification_time_ms = int((time.time() - start_time) * 1000)

        output = f"{result.stdout}\n{result.stderr}"
        if result.returncode == 0 and "OK" in result.stdout:
            valid = True
        elif "Invalid proof" in output:
            valid = False
        else:
            logger.error(
                "snarkjs_verification_failed",
                returncode=result.returncode,
                stderr=result.stderr[-500:],
            )
            raise VerifierFault(f"snarkjs exited with status {result.returncode}")

        logger.info(
            "zk_proof_verified",
            valid=valid,
            verification_time_ms=verification_time_ms,
        )
        return valid


def load_verifier(zk: ZKSettings) -> VerifierCapability:
    """
    Build the verifier selected by configuration.

    Raises:
        VerifierUnavailable: If verification is disabled or snarkjs is missing
    """
    if zk.verifier == VerifierBackend.NONE:
        raise VerifierUnavailable("verifier disabled by configuration")

    verifier = SnarkjsVerifier(zk.snarkjs_command)
    if not verifier.is_available():
        raise VerifierUnavailable(f"snarkjs launcher not found: {zk.snarkjs_command}")
    return verifier


def obtain_verifier(source: VerifierSource) -> VerifierCapability:
    """
    Resolve a verifier capability from an instance or a loader.

    Raises:
        VerifierUnavailable: If nothing usable can be obtained
    """
    if source is None:
        raise VerifierUnavailable("no verifier configured")

    candidate: Any = source
    if not callable(getattr(candidate, "verify", None)) and callable(candidate):
        try:
            candidate = candidate()
        except Exception as e:
            raise VerifierUnavailable(f"verifier loader failed: {e!r}") from e

    if candidate is None or not callable(getattr(candidate, "verify", None)):
        raise VerifierUnavailable("verifier capability is malformed")
    return candidate
