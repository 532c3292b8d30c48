"""
Unit Tests for Credential Minting
=================================

Tests for the gated minter, the mock executor and the mint history.
"""

from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from blockcreds.config import BlockchainMode, BlockchainSettings
from blockcreds.minting import (
    CredentialMinter,
    HistoryStoreError,
    InMemoryHistoryStore,
    InvalidMintRequest,
    JsonFileHistoryStore,
    MintRecord,
    MintRequest,
    MockMintExecutor,
    UnknownTemplate,
    find_template,
    get_mint_executor,
    network_name,
    parse_chain_id,
    reset_mint_executor,
    set_mint_executor,
)
from blockcreds.zk import (
    FallbackPacing,
    NullArtifactProbe,
    ThresholdMismatch,
    VerificationFailed,
    VerificationGate,
)
from tests.fakes import StubVerifier, bundle_probe


def _minter(executor, history, probe=None, verifier=None) -> CredentialMinter:
    return CredentialMinter(
        gate=VerificationGate(FallbackPacing.instant()),
        probe=probe or NullArtifactProbe(),
        verifier=verifier,
        executor=executor,
        history=history,
    )


def _request(**overrides) -> MintRequest:
    fields = {"name": "Acme Lending", "amount": 1, "min_score": 750, "owner": "0xAbC"}
    fields.update(overrides)
    return MintRequest(**fields)


class TestCredentialMinter:
    """Tests for verification-gated minting."""

    @pytest.mark.asyncio
    async def test_mint_with_simulated_verification(self, mock_executor, history_store):
        minter = _minter(mock_executor, history_store)

        result = await minter.mint(_request())

        assert result.outcome.performed is False
        assert result.record.token_id == "0"
        assert result.record.issuer == "BlockCreds Labs"
        assert result.receipt.tx_hash.startswith("0x")
        assert result.total_minted == 1

    @pytest.mark.asyncio
    async def test_token_ids_follow_history_length(self, mock_executor, history_store):
        minter = _minter(mock_executor, history_store)

        await minter.mint(_request())
        second = await minter.mint(_request(name="Second", issuer="KYC Oracle"))

        assert second.record.token_id == "1"
        assert second.record.issuer == "KYC Oracle"
        assert [r.name for r in history_store.load()] == ["Acme Lending", "Second"]

    @pytest.mark.asyncio
    async def test_progress_forwarded(self, mock_executor, history_store):
        messages: list[str] = []

        await _minter(mock_executor, history_store).mint(_request(), messages.append)

        assert messages[-1] == "Verification complete."

    @pytest.mark.asyncio
    async def test_verified_mint(self, mock_executor, history_store):
        minter = _minter(mock_executor, history_store, bundle_probe(), StubVerifier(True))

        result = await minter.mint(_request())

        assert result.outcome.performed is True
        assert result.outcome.success is True

    @pytest.mark.asyncio
    async def test_threshold_mismatch_blocks_mint(self, mock_executor, history_store):
        minter = _minter(mock_executor, history_store, bundle_probe(("800", "1")), StubVerifier(True))

        with pytest.raises(ThresholdMismatch):
            await minter.mint(_request())

        assert history_store.load() == []
        assert await mock_executor.get_total_minted() == 0

    @pytest.mark.asyncio
    async def test_failed_verification_blocks_mint(self, mock_executor, history_store):
        minter = _minter(mock_executor, history_store, bundle_probe(), StubVerifier(False))

        with pytest.raises(VerificationFailed):
            await minter.mint(_request())

        assert history_store.load() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"name": "  "}, "Credential name is required"),
            ({"amount": 0}, "Invalid token amount"),
            ({"amount": -3}, "Invalid token amount"),
            ({"owner": ""}, "Wallet address is required"),
        ],
    )
    async def test_invalid_requests(self, mock_executor, history_store, overrides, message):
        verifier = StubVerifier(True)
        minter = _minter(mock_executor, history_store, bundle_probe(), verifier)

        with pytest.raises(InvalidMintRequest, match=message):
            await minter.mint(_request(**overrides))

        assert verifier.calls == []

    @pytest.mark.asyncio
    async def test_corrupt_history_blocks_mint(self, mock_executor, tmp_path):
        path = tmp_path / "history.json"
        path.write_text("{not json")
        verifier = StubVerifier(True)
        minter = _minter(mock_executor, JsonFileHistoryStore(path), bundle_probe(), verifier)

        with pytest.raises(HistoryStoreError):
            await minter.mint(_request())

        assert await mock_executor.get_total_minted() == 0
        assert verifier.calls == []
        assert path.read_text() == "{not json"

    @pytest.mark.asyncio
    async def test_template_with_bad_owner_is_not_unknown(self, mock_executor, history_store):
        minter = _minter(mock_executor, history_store)

        with pytest.raises(InvalidMintRequest) as exc_info:
            await minter.mint_template("KYC Oracle Premium", owner="")

        assert not isinstance(exc_info.value, UnknownTemplate)

    @pytest.mark.asyncio
    async def test_mint_template(self, mock_executor, history_store):
        minter = _minter(mock_executor, history_store, bundle_probe(("680", "1")), StubVerifier(True))

        result = await minter.mint_template("DeFi Underwriters Pro", owner="0xabc")

        assert result.outcome.performed is True
        assert result.record.name == "DeFi Underwriters Pro"
        assert result.record.token_amount == 2

    @pytest.mark.asyncio
    async def test_unknown_template(self, mock_executor, history_store):
        with pytest.raises(UnknownTemplate, match="Unknown lender template"):
            await _minter(mock_executor, history_store).mint_template("Nope", owner="0xabc")

    @pytest.mark.asyncio
    async def test_total_prefers_larger_count(self, history_store):
        executor = AsyncMock()
        executor.get_total_minted.return_value = 7

        assert await _minter(executor, history_store).total_minted() == 7

    @pytest.mark.asyncio
    async def test_total_never_below_local(self, history_store):
        history_store.save([
            MintRecord(token_id=str(i), name="n", token_amount=1, owner="0x1", issuer="i")
            for i in range(3)
        ])
        executor = AsyncMock()
        executor.get_total_minted.return_value = 1

        assert await _minter(executor, history_store).total_minted() == 3

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failure", [None, ConnectionError("rpc down")])
    async def test_total_falls_back_to_local(self, history_store, failure):
        history_store.append(
            MintRecord(token_id="0", name="n", token_amount=1, owner="0x1", issuer="i")
        )
        executor = AsyncMock()
        if failure is None:
            executor.get_total_minted.return_value = None
        else:
            executor.get_total_minted.side_effect = failure

        assert await _minter(executor, history_store).total_minted() == 1

    @pytest.mark.asyncio
    async def test_user_credentials(self, mock_executor, history_store):
        minter = _minter(mock_executor, history_store)
        await minter.mint(_request(owner="0xAbC"))

        credentials = await minter.user_credentials("0xabc")

        assert [c.name for c in credentials] == ["Acme Lending"]


class TestMockMintExecutor:
    @pytest.mark.asyncio
    async def test_health(self, mock_executor):
        health = await mock_executor.health_check()

        assert health["status"] == "healthy"
        assert health["connected"] is True

    @pytest.mark.asyncio
    async def test_rejects_non_positive_amount(self, mock_executor):
        with pytest.raises(ValueError):
            await mock_executor.mint_credential("n", 0, "0x1")

    @pytest.mark.asyncio
    async def test_blocks_advance(self, mock_executor):
        first = await mock_executor.mint_credential("a", 1, "0x1")
        second = await mock_executor.mint_credential("b", 1, "0x1")

        assert second.block_number == first.block_number + 1
        assert first.tx_hash != second.tx_hash

    @pytest.mark.asyncio
    async def test_clear_all(self, mock_executor):
        await mock_executor.mint_credential("a", 1, "0x1")

        mock_executor.clear_all()

        assert await mock_executor.get_total_minted() == 0

    def test_global_executor(self):
        reset_mint_executor()
        try:
            executor = get_mint_executor()
            assert executor.mode == BlockchainMode.MOCK
            assert get_mint_executor() is executor

            replacement = MockMintExecutor()
            set_mint_executor(replacement)
            assert get_mint_executor() is replacement
        finally:
            reset_mint_executor()

    @pytest.mark.parametrize("mode", ["testnet", "mainnet"])
    def test_modes_without_executor_rejected(self, mode):
        with pytest.raises(ValidationError):
            BlockchainSettings(mode=mode)

    def test_mode_from_environment(self, monkeypatch):
        monkeypatch.setenv("BLOCKCHAIN_MODE", "testnet")

        with pytest.raises(ValidationError):
            BlockchainSettings()


class TestHistoryStores:
    """Tests for local mint history persistence."""

    def test_json_store_roundtrip(self, tmp_path):
        store = JsonFileHistoryStore(tmp_path / "data" / "history.json")
        record = MintRecord(token_id="0", name="Acme", token_amount=2, owner="0x1", issuer="KYC Oracle")

        store.append(record)

        assert JsonFileHistoryStore(tmp_path / "data" / "history.json").load() == [record]

    def test_json_store_missing_file(self, tmp_path):
        assert JsonFileHistoryStore(tmp_path / "none.json").load() == []

    def test_json_store_corrupt_file(self, tmp_path):
        path = tmp_path / "history.json"
        path.write_text('[{"token_id": "0"}]')

        with pytest.raises(HistoryStoreError):
            JsonFileHistoryStore(path).load()

    def test_json_store_clear(self, tmp_path):
        store = JsonFileHistoryStore(tmp_path / "history.json")
        store.append(MintRecord(token_id="0", name="a", token_amount=1, owner="0x1", issuer="i"))

        store.clear()
        store.clear()

        assert store.load() == []

    def test_in_memory_store_copies(self):
        store = InMemoryHistoryStore()
        store.append(MintRecord(token_id="0", name="a", token_amount=1, owner="0x1", issuer="i"))

        store.load().clear()

        assert len(store.load()) == 1


class TestNetworks:
    @pytest.mark.parametrize(
        "chain_id,name",
        [
            (1, "Ethereum"),
            ("5", "Goerli"),
            ("0xaa36a7", "Sepolia"),
            ("0x7A69", "Hardhat"),
            (80001, "Mumbai"),
            ("0x89", "Polygon"),
            (999, "Chain 999"),
        ],
    )
    def test_network_name(self, chain_id, name):
        assert network_name(chain_id) == name

    @pytest.mark.parametrize("chain_id", ["abc", "0xzz", 0, -1, True])
    def test_invalid_chain_id(self, chain_id):
        with pytest.raises(ValueError):
            parse_chain_id(chain_id)


class TestTemplates:
    def test_find_template(self):
        template = find_template("KYC Oracle Premium")

        assert template is not None
        assert (template.min_score, template.amount) == (720, 3)

    def test_unknown_template(self):
        assert find_template("Unknown") is None
