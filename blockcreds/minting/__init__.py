"""
Minting Module
==============

Requester side of the verification gate: mint execution, local history,
lender templates and network names.

Usage:
    from blockcreds.minting import CredentialMinter, MintRequest

    minter = CredentialMinter(gate, probe, verifier, get_mint_executor(), history)
    result = await minter.mint(MintRequest(name="Acme", amount=1, min_score=650, owner="0xabc"))
"""

from blockcreds.minting.executor import (
    MintExecutor,
    MintReceipt,
    OnChainCredential,
    get_mint_executor,
    reset_mint_executor,
    set_mint_executor,
)
from blockcreds.minting.history import (
    HistoryStoreError,
    InMemoryHistoryStore,
    JsonFileHistoryStore,
    MintHistoryStore,
    MintRecord,
)
from blockcreds.minting.minter import (
    CredentialMinter,
    InvalidMintRequest,
    MintRequest,
    MintResult,
    UnknownTemplate,
)
from blockcreds.minting.mock import MockMintExecutor
from blockcreds.minting.networks import KNOWN_NETWORKS, network_name, parse_chain_id
from blockcreds.minting.templates import ISSUERS, LENDER_TEMPLATES, LenderTemplate, find_template

__all__ = [
    # Minter
    "CredentialMinter",
    "MintRequest",
    "MintResult",
    "InvalidMintRequest",
    "UnknownTemplate",
    # Executor
    "MintExecutor",
    "MockMintExecutor",
    "MintReceipt",
    "OnChainCredential",
    "get_mint_executor",
    "set_mint_executor",
    "reset_mint_executor",
    # History
    "MintHistoryStore",
    "InMemoryHistoryStore",
    "JsonFileHistoryStore",
    "MintRecord",
    "HistoryStoreError",
    # Lookups
    "KNOWN_NETWORKS",
    "network_name",
    "parse_chain_id",
    "ISSUERS",
    "LENDER_TEMPLATES",
    "LenderTemplate",
    "find_template",
]
