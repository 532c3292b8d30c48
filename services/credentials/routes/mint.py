"""
Mint Routes
===========

API endpoints for verification-gated credential minting.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from blockcreds.config import settings
from blockcreds.logging import get_logger
from blockcreds.minting import (
    ISSUERS,
    LENDER_TEMPLATES,
    CredentialMinter,
    HistoryStoreError,
    InvalidMintRequest,
    MintHistoryStore,
    MintRecord,
    MintRequest,
    MintResult,
    OnChainCredential,
    UnknownTemplate,
)
from services.credentials.deps import get_history_store, get_minter


logger = get_logger(__name__)
router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class MintBody(BaseModel):
    """Request to verify and mint a credential."""

    name: str = Field(..., description="Business or institution name")
    amount: int = Field(..., description="Token amount to mint")
    min_score: int = Field(
        default_factory=lambda: settings.mint.default_min_score,
        ge=0,
        description="Minimum credit score threshold",
    )
    owner: str = Field(..., description="Receiving wallet address")
    issuer: str | None = Field(None, description="Credential issuer")


class TemplateMintBody(BaseModel):
    """Request to mint from a lender template."""

    owner: str
    issuer: str | None = None


class TemplateInfo(BaseModel):
    name: str
    min_score: int
    amount: int


class TemplatesResponse(BaseModel):
    templates: list[TemplateInfo]
    issuers: list[str]


class TotalMintedResponse(BaseModel):
    total_minted: int


# ============================================================================
# Mint Endpoints
# ============================================================================


def _history_unreadable(error: HistoryStoreError) -> HTTPException:
    logger.error("mint_history_unreadable", error=str(error))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="Mint history is unreadable",
    )


@router.post("", response_model=MintResult)
async def mint_credential(
    body: MintBody,
    minter: CredentialMinter = Depends(get_minter),
) -> MintResult:
    """
    Verify the minimum score and mint.

    A denied verification is answered with 403 and its reason.
    """
    logger.info("mint_requested", min_score=body.min_score, amount=body.amount)

    try:
        return await minter.mint(MintRequest(**body.model_dump()))
    except InvalidMintRequest as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except HistoryStoreError as e:
        raise _history_unreadable(e) from e


@router.get("/templates", response_model=TemplatesResponse)
async def list_templates() -> TemplatesResponse:
    """List lender templates and known issuers."""
    return TemplatesResponse(
        templates=[
            TemplateInfo(name=t.name, min_score=t.min_score, amount=t.amount)
            for t in LENDER_TEMPLATES
        ],
        issuers=list(ISSUERS),
    )


@router.post("/templates/{template_name}", response_model=MintResult)
async def mint_from_template(
    template_name: str,
    body: TemplateMintBody,
    minter: CredentialMinter = Depends(get_minter),
) -> MintResult:
    """Verify and mint using a lender template's threshold and amount."""
    try:
        return await minter.mint_template(template_name, body.owner, body.issuer)
    except UnknownTemplate as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except InvalidMintRequest as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    except HistoryStoreError as e:
        raise _history_unreadable(e) from e


@router.get("/history", response_model=list[MintRecord])
async def get_history(
    store: MintHistoryStore = Depends(get_history_store),
) -> list[MintRecord]:
    """Credentials minted from this installation, oldest first."""
    try:
        return store.load()
    except HistoryStoreError as e:
        raise _history_unreadable(e) from e


@router.delete("/history", status_code=status.HTTP_204_NO_CONTENT)
async def clear_history(
    store: MintHistoryStore = Depends(get_history_store),
) -> None:
    """Clear the local history (not available in production)."""
    if settings.is_production:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Clearing history is disabled in production",
        )
    store.clear()


@router.get("/total", response_model=TotalMintedResponse)
async def get_total_minted(
    minter: CredentialMinter = Depends(get_minter),
) -> TotalMintedResponse:
    """Total credentials minted."""
    return TotalMintedResponse(total_minted=await minter.total_minted())


@router.get("/owners/{owner}", response_model=list[OnChainCredential])
async def get_owner_credentials(
    owner: str,
    minter: CredentialMinter = Depends(get_minter),
) -> list[OnChainCredential]:
    """Credentials the contract reports for a wallet."""
    return await minter.user_credentials(owner)
