"""
Commitment Routes
=================

API endpoints for generating Poseidon score commitments.
"""

from pathlib import Path

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from blockcreds.config import settings
from blockcreds.logging import get_logger
from blockcreds.zk import EncodingError, generate_commitment, generate_salt, write_commitment


logger = get_logger(__name__)
router = APIRouter()


# ============================================================================
# Request/Response Models
# ============================================================================


class CommitmentRequest(BaseModel):
    """Request to commit to a private score."""

    score: int = Field(..., ge=0, description="Private score")
    salt: int | None = Field(None, ge=0, description="Private salt, random when omitted")
    min_score: int = Field(..., ge=0, description="Public minimum score threshold")
    persist: bool = Field(False, description="Also write the prover input file")

    model_config = {
        "json_schema_extra": {
            "examples": [{"score": 800, "salt": 12345, "min_score": 750}]
        }
    }


class CommitmentResponse(BaseModel):
    """Prover input record."""

    model_config = ConfigDict(populate_by_name=True)

    min_score: int = Field(..., alias="minScore")
    commitment: str
    score: int
    salt: int
    written_to: str | None = None


# ============================================================================
# Commitment Endpoints
# ============================================================================


@router.post("", response_model=CommitmentResponse)
async def create_commitment(request: CommitmentRequest) -> CommitmentResponse:
    """
    Compute the Poseidon commitment for a score and salt.

    The response is the prover input and contains the private witness;
    it is meant for the score owner only.
    """
    salt = request.salt if request.salt is not None else generate_salt()

    try:
        record = generate_commitment(request.score, salt, request.min_score)
    except EncodingError as e:
        logger.warning("commitment_encoding_error", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    written_to: Path | None = None
    if request.persist:
        try:
            written_to = write_commitment(record, settings.zk.commitment_output)
        except OSError as e:
            logger.error("commitment_write_failed", error=str(e))
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Could not write prover input",
            ) from e

    return CommitmentResponse(
        min_score=record.min_score,
        commitment=record.commitment,
        score=record.score,
        salt=record.salt,
        written_to=str(written_to) if written_to else None,
    )
