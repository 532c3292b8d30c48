"""
Unit Tests for Commitment Generation
====================================

Tests for score commitments and the prover input file.
"""

import json

import pytest

from blockcreds.zk import (
    FIELD_ORDER,
    EncodingError,
    compute_commitment,
    generate_commitment,
    generate_salt,
    make_input,
    poseidon,
    write_commitment,
)


class TestComputeCommitment:
    """Tests for the commitment value."""

    def test_commitment_is_poseidon_of_score_and_salt(self):
        assert compute_commitment(800, 12345) == str(poseidon([800, 12345]))

    def test_canonical_decimal(self):
        commitment = compute_commitment(800, 12345)

        assert commitment.isdigit()
        assert str(int(commitment)) == commitment

    def test_deterministic(self):
        assert compute_commitment(800, 12345) == compute_commitment(800, 12345)

    @pytest.mark.parametrize("score,salt", [(801, 12345), (800, 12346)])
    def test_sensitive_to_each_input(self, score, salt):
        assert compute_commitment(score, salt) != compute_commitment(800, 12345)

    @pytest.mark.parametrize(
        "score,salt",
        [
            (-1, 12345),
            (800, -5),
            (FIELD_ORDER, 1),
            (800, FIELD_ORDER + 7),
            ("800", 12345),
            (800.0, 12345),
            (True, 12345),
        ],
    )
    def test_invalid_inputs(self, score, salt):
        with pytest.raises(EncodingError):
            compute_commitment(score, salt)

    def test_encoding_error_is_value_error(self):
        with pytest.raises(ValueError):
            compute_commitment(-1, 0)


class TestGenerateCommitment:
    """Tests for commitment records."""

    def test_record_fields(self):
        record = generate_commitment(score=800, salt=12345, min_score=750)

        assert record.min_score == 750
        assert record.score == 800
        assert record.salt == 12345
        assert record.commitment == compute_commitment(800, 12345)

    def test_record_does_not_depend_on_threshold(self):
        a = generate_commitment(800, 12345, 750)
        b = generate_commitment(800, 12345, 600)

        assert a.commitment == b.commitment

    def test_negative_threshold_rejected(self):
        with pytest.raises(EncodingError):
            generate_commitment(800, 12345, -1)

    def test_score_below_threshold_still_encodes(self):
        record = generate_commitment(score=500, salt=1, min_score=750)

        assert record.min_score == 750

    def test_random_salt_in_field(self):
        salts = {generate_salt() for _ in range(5)}

        assert len(salts) > 1
        assert all(0 <= s < FIELD_ORDER for s in salts)


class TestWriteCommitment:
    """Tests for the prover input file."""

    def test_writes_exactly_four_keys(self, tmp_path):
        record = generate_commitment(800, 12345, 750)

        path = write_commitment(record, tmp_path / "input.json")
        data = json.loads(path.read_text())

        assert list(data) == ["minScore", "commitment", "score", "salt"]
        assert data == {
            "minScore": 750,
            "commitment": record.commitment,
            "score": 800,
            "salt": 12345,
        }

    def test_commitment_serialized_as_string(self, tmp_path):
        path = write_commitment(generate_commitment(800, 12345, 750), tmp_path / "in.json")

        assert isinstance(json.loads(path.read_text())["commitment"], str)

    def test_overwrites_existing_file(self, tmp_path):
        target = tmp_path / "input.json"
        target.write_text("stale")

        write_commitment(generate_commitment(1, 2, 0), target)

        assert json.loads(target.read_text())["score"] == 1

    def test_unwritable_destination(self, tmp_path):
        with pytest.raises(OSError):
            write_commitment(
                generate_commitment(800, 12345, 750),
                tmp_path / "missing" / "input.json",
            )

    def test_make_input_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        record = make_input()
        data = json.loads((tmp_path / "input.json").read_text())

        assert (record.score, record.salt, record.min_score) == (800, 12345, 750)
        assert data["commitment"] == compute_commitment(800, 12345)
