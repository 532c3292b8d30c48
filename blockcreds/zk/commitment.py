"""
Score Commitments
=================

Builds the prover input for the minimum score circuit: a Poseidon
commitment to the private ``(score, salt)`` pair together with the public
threshold.

Usage:
    from blockcreds.zk.commitment import generate_commitment, write_commitment

    record = generate_commitment(score=800, salt=12345, min_score=750)
    write_commitment(record, "input.json")

Version: 0.1.0
"""

import secrets
from pathlib import Path

from blockcreds.logging import get_logger
from blockcreds.zk.errors import EncodingError
from blockcreds.zk.models import CommitmentRecord
from blockcreds.zk.poseidon import FIELD_ORDER, poseidon


logger = get_logger(__name__)

DEFAULT_SCORE = 800
DEFAULT_SALT = 12345
DEFAULT_MIN_SCORE = 750


def _field_element(name: str, value: object) -> int:
    """Check that ``value`` is an int that fits in the BN254 field."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodingError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise EncodingError(f"{name} must be non-negative")
    if value >= FIELD_ORDER:
        raise EncodingError(f"{name} exceeds the BN254 field order")
    return value


def generate_salt() -> int:
    """Generate a random salt as a field element."""
    # 31 bytes stays under the field order
    return int.from_bytes(secrets.token_bytes(31), "big")


def compute_commitment(score: int, salt: int) -> str:
    """
    Commit to a score with Poseidon(score, salt).

    Returns:
        The commitment as a canonical decimal string

    Raises:
        EncodingError: If score or salt is not a valid field element
    """
    score = _field_element("score", score)
    salt = _field_element("salt", salt)
    return str(poseidon([score, salt]))


def generate_commitment(score: int, salt: int, min_score: int) -> CommitmentRecord:
    """
    Build the commitment record for a minimum score proof.

    Args:
        score: Private score being proven
        salt: Private salt that makes repeated commitments unlinkable
        min_score: Public threshold, the circuit's first public signal

    Returns:
        CommitmentRecord ready to hand to the prover

    Raises:
        EncodingError: If any value is not a non-negative field element
    """
    min_score = _field_element("min_score", min_score)
    commitment = compute_commitment(score, salt)

    logger.debug("commitment_generated", min_score=min_score, commitment=commitment)

    return CommitmentRecord(
        min_score=min_score,
        commitment=commitment,
        score=score,
        salt=salt,
    )


def write_commitment(record: CommitmentRecord, path: str | Path) -> Path:
    """
    Persist a commitment record as prover input JSON.

    Raises:
        OSError: If the file cannot be written
    """
    path = Path(path)
    path.write_text(record.to_json() + "\n", encoding="utf-8")

    logger.info(
        "commitment_written",
        path=str(path),
        min_score=record.min_score,
        commitment=record.commitment,
    )
    return path


def make_input(
    score: int = DEFAULT_SCORE,
    salt: int = DEFAULT_SALT,
    min_score: int = DEFAULT_MIN_SCORE,
    output: str | Path = "input.json",
) -> CommitmentRecord:
    """Generate a commitment record and write it to ``output``."""
    record = generate_commitment(score, salt, min_score)
    write_commitment(record, output)
    return record
