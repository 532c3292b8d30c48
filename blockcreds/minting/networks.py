"""Chain id to network name lookup."""

KNOWN_NETWORKS: dict[int, str] = {
    1: "Ethereum",
    5: "Goerli",
    137: "Polygon",
    31337: "Hardhat",
    80001: "Mumbai",
    11155111: "Sepolia",
}


def parse_chain_id(chain_id: int | str) -> int:
    """
    Parse a chain id given as an int, a decimal string or an ``0x`` hex string.

    Raises:
        ValueError: If the value is not a valid chain id
    """
    if isinstance(chain_id, bool):
        raise ValueError("Chain id must be an integer")
    if isinstance(chain_id, int):
        value = chain_id
    else:
        text = chain_id.strip().lower()
        value = int(text, 16) if text.startswith("0x") else int(text)
    if value <= 0:
        raise ValueError(f"Invalid chain id: {chain_id}")
    return value


def network_name(chain_id: int | str) -> str:
    """Human readable network name, falling back to ``Chain <id>``."""
    value = parse_chain_id(chain_id)
    return KNOWN_NETWORKS.get(value, f"Chain {value}")
