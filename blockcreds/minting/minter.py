"""
Credential Minter
=================

Runs the verification gate for a mint request and, when it allows,
performs the mint and records it in the local history.

Version: 0.1.0
"""

from pydantic import BaseModel, Field

from blockcreds.logging import get_logger
from blockcreds.minting.executor import MintExecutor, MintReceipt, OnChainCredential
from blockcreds.minting.history import MintHistoryStore, MintRecord
from blockcreds.minting.templates import find_template
from blockcreds.zk.artifacts import ArtifactProbe
from blockcreds.zk.gate import ProgressCallback, VerificationGate
from blockcreds.zk.models import VerificationOutcome
from blockcreds.zk.verifier import VerifierSource

logger = get_logger(__name__)


class InvalidMintRequest(ValueError):
    """The mint request cannot be executed as given."""


class UnknownTemplate(InvalidMintRequest):
    """No lender template has the requested name."""


class MintRequest(BaseModel):
    """Parameters of one mint action."""

    name: str
    amount: int
    min_score: int = Field(..., ge=0)
    owner: str
    issuer: str | None = None


class MintResult(BaseModel):
    """Everything the requester learns from a successful mint."""

    outcome: VerificationOutcome
    receipt: MintReceipt
    record: MintRecord
    total_minted: int


class CredentialMinter:
    """
    Verification-gated credential minting.

    Usage:
        minter = CredentialMinter(gate, probe, verifier, executor, history)
        result = await minter.mint(
            MintRequest(name="Acme", amount=1, min_score=650, owner="0xabc"),
        )
    """

    def __init__(
        self,
        gate: VerificationGate,
        probe: ArtifactProbe,
        verifier: VerifierSource,
        executor: MintExecutor,
        history: MintHistoryStore,
        default_issuer: str = "BlockCreds Labs",
    ) -> None:
        self.gate = gate
        self.probe = probe
        self.verifier = verifier
        self.executor = executor
        self.history = history
        self.default_issuer = default_issuer

    def _validate(self, request: MintRequest) -> None:
        if not request.name.strip():
            raise InvalidMintRequest("Credential name is required")
        if request.amount <= 0:
            raise InvalidMintRequest("Invalid token amount")
        if not request.owner:
            raise InvalidMintRequest("Wallet address is required")

    async def mint(
        self,
        request: MintRequest,
        on_progress: ProgressCallback | None = None,
    ) -> MintResult:
        """
        Verify and mint.

        Raises:
            InvalidMintRequest: If the request is malformed
            HistoryStoreError: If the local history cannot be read; nothing
                is minted in that case
            VerificationDenied: If a completed verification denied the mint
        """
        self._validate(request)
        # A corrupt history aborts the request before anything is minted
        token_id = str(len(self.history.load()))

        outcome = await self.gate.evaluate(
            request.min_score,
            self.probe,
            self.verifier,
            on_progress,
        )
        if not outcome.success:
            logger.warning(
                "mint_denied",
                min_score=request.min_score,
                reason=outcome.reason,
            )
            outcome.raise_for_denial()

        receipt = await self.executor.mint_credential(request.name, request.amount, request.owner)

        record = MintRecord(
            token_id=token_id,
            name=request.name,
            token_amount=request.amount,
            owner=request.owner,
            issuer=request.issuer or self.default_issuer,
        )
        self.history.append(record)

        total = await self.total_minted()

        logger.info(
            "credential_minted",
            token_id=record.token_id,
            tx_hash=receipt.tx_hash,
            verified=outcome.performed,
            total_minted=total,
        )
        return MintResult(outcome=outcome, receipt=receipt, record=record, total_minted=total)

    async def mint_template(
        self,
        template_name: str,
        owner: str,
        issuer: str | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> MintResult:
        """Mint using one of the published lender templates."""
        template = find_template(template_name)
        if template is None:
            raise UnknownTemplate(f"Unknown lender template: {template_name}")

        return await self.mint(
            MintRequest(
                name=template.name,
                amount=template.amount,
                min_score=template.min_score,
                owner=owner,
                issuer=issuer,
            ),
            on_progress,
        )

    async def total_minted(self) -> int:
        """Contract total, never lower than what this installation minted."""
        local = len(self.history.load())
        try:
            on_chain = await self.executor.get_total_minted()
        except Exception as e:
            logger.error("total_minted_lookup_failed", error=str(e))
            return local
        if on_chain is None:
            return local
        return max(on_chain, local)

    async def user_credentials(self, owner: str) -> list[OnChainCredential]:
        """Credentials the contract reports for ``owner``."""
        return await self.executor.get_user_credentials(owner)
