"""
Proof Artifact Probes
=====================

Lookups for the three parts of a proof bundle: the verification key, the
proof and the public signals. A probe never raises for a missing or broken
artifact; it reports ``ProbeUnavailable`` instead.

Usage:
    probe = HttpArtifactProbe("http://localhost:3000/zkp")
    bundle = await collect_bundle(probe)

Version: 0.1.0
"""

import asyncio
import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from blockcreds.config import ArtifactSource, ZKSettings
from blockcreds.logging import get_logger
from blockcreds.zk.errors import ArtifactUnavailable
from blockcreds.zk.models import (
    ArtifactName,
    ProbeResult,
    ProbeSuccess,
    ProbeUnavailable,
    ProofBundle,
)


logger = get_logger(__name__)


@runtime_checkable
class ArtifactProbe(Protocol):
    """Source of proof bundle parts."""

    async def fetch(self, name: ArtifactName) -> ProbeResult:
        ...


class HttpArtifactProbe:
    """Fetch artifacts as JSON documents below a base URL."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        retries: int = 3,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retries = max(1, retries)
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Accept": "application/json"},
                follow_redirects=True,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if this probe created it."""
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpArtifactProbe":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get(self, url: str) -> httpx.Response:
        """GET with retries on connection-level failures."""
        client = await self._get_client()
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retries),
            wait=wait_exponential(multiplier=0.2, max=2),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                response = await client.get(url)
        return response

    async def fetch(self, name: ArtifactName) -> ProbeResult:
        url = f"{self.base_url}/{name.filename}"

        try:
            response = await self._get(url)
        except httpx.HTTPError as e:
            return ProbeUnavailable(name, f"request failed: {e}")

        if not response.is_success:
            return ProbeUnavailable(name, f"HTTP {response.status_code}")

        try:
            return ProbeSuccess(name, response.json())
        except ValueError as e:
            return ProbeUnavailable(name, f"invalid JSON: {e}")


class DirectoryArtifactProbe:
    """Read artifacts from ``<directory>/<name>.json`` files."""

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _read(self, path: Path) -> Any:
        with open(path, encoding="utf-8") as f:
            return json.load(f)

    async def fetch(self, name: ArtifactName) -> ProbeResult:
        path = self.directory / name.filename
        try:
            data = await asyncio.to_thread(self._read, path)
        except FileNotFoundError:
            return ProbeUnavailable(name, f"not found: {path}")
        except (OSError, ValueError) as e:
            return ProbeUnavailable(name, f"unreadable: {e}")
        return ProbeSuccess(name, data)


class StaticArtifactProbe:
    """Serve artifacts from an in-memory mapping."""

    def __init__(self, artifacts: Mapping[ArtifactName, Any] | None = None) -> None:
        self.artifacts = dict(artifacts or {})

    @classmethod
    def from_bundle(
        cls,
        verification_key: Any,
        proof: Any,
        public_signals: Any,
    ) -> "StaticArtifactProbe":
        return cls({
            ArtifactName.VERIFICATION_KEY: verification_key,
            ArtifactName.PROOF: proof,
            ArtifactName.PUBLIC_SIGNALS: public_signals,
        })

    async def fetch(self, name: ArtifactName) -> ProbeResult:
        if name not in self.artifacts:
            return ProbeUnavailable(name, "not provided")
        return ProbeSuccess(name, self.artifacts[name])


class NullArtifactProbe:
    """A probe for environments that never ship proof artifacts."""

    async def fetch(self, name: ArtifactName) -> ProbeResult:
        return ProbeUnavailable(name, "artifact probing disabled")


async def _safe_fetch(probe: ArtifactProbe, name: ArtifactName) -> ProbeResult:
    try:
        return await probe.fetch(name)
    except Exception as e:
        # Storage and network faults count the same as "not found"
        return ProbeUnavailable(name, f"probe error: {e!r}")


async def collect_bundle(probe: ArtifactProbe) -> ProofBundle:
    """
    Retrieve all three artifacts concurrently and validate their shape.

    Args:
        probe: Artifact source

    Returns:
        ProofBundle when every part is present and well formed

    Raises:
        ArtifactUnavailable: If any part is missing, failed or malformed
    """
    results = await asyncio.gather(*(_safe_fetch(probe, name) for name in ArtifactName))

    missing = [r for r in results if isinstance(r, ProbeUnavailable)]
    if missing:
        raise ArtifactUnavailable(
            "; ".join(f"{r.name.value}: {r.reason}" for r in missing),
            artifacts=[r.name.value for r in missing],
        )

    data = {r.name: r.data for r in results}
    try:
        return ProofBundle(
            verification_key=data[ArtifactName.VERIFICATION_KEY],
            proof=data[ArtifactName.PROOF],
            public_signals=data[ArtifactName.PUBLIC_SIGNALS],
        )
    except ValidationError as e:
        raise ArtifactUnavailable(
            f"malformed proof bundle: {e.error_count()} validation errors",
            artifacts=sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]}),
        ) from e


def probe_from_settings(zk: ZKSettings) -> ArtifactProbe:
    """Build the artifact probe selected by configuration."""
    if zk.artifact_source == ArtifactSource.HTTP:
        return HttpArtifactProbe(
            zk.artifact_url,
            timeout=zk.probe_timeout_seconds,
            retries=zk.probe_retries,
        )
    if zk.artifact_source == ArtifactSource.DIRECTORY:
        return DirectoryArtifactProbe(zk.artifact_dir)
    return NullArtifactProbe()
