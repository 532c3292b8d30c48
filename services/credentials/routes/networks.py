"""
Network Routes
==============

Chain id to network name lookup.
"""

from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel

from blockcreds.config import settings
from blockcreds.minting import network_name, parse_chain_id


router = APIRouter()


class NetworkResponse(BaseModel):
    chain_id: int
    name: str


@router.get("", response_model=NetworkResponse)
async def current_network() -> NetworkResponse:
    """Network the service is configured for."""
    chain_id = settings.blockchain.chain_id
    return NetworkResponse(chain_id=chain_id, name=network_name(chain_id))


@router.get("/{chain_id}", response_model=NetworkResponse)
async def lookup_network(chain_id: str) -> NetworkResponse:
    """Resolve a decimal or 0x-prefixed chain id."""
    try:
        value = parse_chain_id(chain_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid chain id: {chain_id}",
        ) from e
    return NetworkResponse(chain_id=value, name=network_name(value))
